from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

SEVERITIES = ("error", "warning", "info")

VALIDATION_TYPES = (
    "missing_column",
    "duplicate_id",
    "malformed_list",
    "out_of_range",
    "broken_json",
    "unknown_reference",
    "circular_corun",
    "conflicting_rules",
    "overloaded_worker",
    "phase_saturation",
    "skill_coverage",
    "max_concurrency",
)

SHEET_LEVEL_ROW = -1


@dataclass(frozen=True)
class ValidationFinding:
    """A single validation finding. Row is -1 for sheet-level findings."""

    id: str
    row: int
    column: str
    message: str
    severity: str
    validation_type: str
    suggestion: Optional[str] = None
    entity: Optional[str] = None
    """Entity kind the finding belongs to ("clients", "workers", "tasks" or "rules")."""

    def __post_init__(self):
        if self.severity not in SEVERITIES:
            raise ValueError(f"Unknown severity: {self.severity}")
        if self.validation_type not in VALIDATION_TYPES:
            raise ValueError(f"Unknown validation type: {self.validation_type}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "row": self.row,
            "column": self.column,
            "message": self.message,
            "severity": self.severity,
            "suggestion": self.suggestion,
            "validationType": self.validation_type,
            "entity": self.entity,
        }


@dataclass
class ValidationReport:
    """Outcome of one validation run."""

    errors: List[ValidationFinding]
    passed_validations: List[str]
    failed_validations: List[str]
    last_run: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def _count(self, severity: str) -> int:
        return sum(1 for e in self.errors if e.severity == severity)

    @property
    def total_errors(self) -> int:
        return self._count("error")

    @property
    def total_warnings(self) -> int:
        return self._count("warning")

    @property
    def total_info(self) -> int:
        return self._count("info")

    @property
    def validations_passed(self) -> bool:
        return self.total_errors == 0

    def by_type(self, validation_type: str) -> List[ValidationFinding]:
        return [e for e in self.errors if e.validation_type == validation_type]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalErrors": self.total_errors,
            "totalWarnings": self.total_warnings,
            "totalInfo": self.total_info,
            "passedValidations": list(self.passed_validations),
            "failedValidations": list(self.failed_validations),
            "validationsPassed": self.validations_passed,
            "lastRun": self.last_run.isoformat(),
            "errors": [e.to_dict() for e in self.errors],
        }
