from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple
from utils.constants import QUALIFICATION_RANKS

"""
Typed entities produced by the normalizer and consumed by the validation and
allocation engines. All of them are frozen: engines read them, never change them.
"""

RULE_TYPES = (
    "co_run",
    "slot_restriction",
    "load_limit",
    "phase_window",
    "pattern_match",
    "precedence_override",
    "custom",
)

PRIORITY_CATEGORIES = ("fulfillment", "fairness", "efficiency", "quality", "custom")


def qualification_rank(level: Any) -> float:
    """
    Numeric rank of a worker's QualificationLevel.

    Numbers are used as-is; the text vocabulary (Junior, Senior, ...) maps through
    QUALIFICATION_RANKS; anything else ranks 0.
    """
    if level is None:
        return 0.0
    if isinstance(level, (int, float)) and not isinstance(level, bool):
        return float(level)
    text = str(level).strip()
    try:
        return float(text)
    except ValueError:
        return float(QUALIFICATION_RANKS.get(text.lower(), 0))


@dataclass(frozen=True)
class Client:
    client_id: str
    client_name: str
    priority_level: Optional[int]
    requested_task_ids: Tuple[str, ...] = ()
    group_tag: str = ""
    attributes: Dict[str, Any] = field(default_factory=dict, hash=False)


@dataclass(frozen=True)
class Worker:
    worker_id: str
    worker_name: str
    skills: Tuple[str, ...] = ()
    available_slots: Tuple[int, ...] = ()
    max_load_per_phase: Optional[int] = None
    worker_group: str = ""
    qualification_level: str = ""

    @property
    def skill_set(self) -> frozenset:
        """Lower-cased skills, for case-insensitive matching."""
        return frozenset(s.lower() for s in self.skills)

    @property
    def qualification_rank(self) -> float:
        return qualification_rank(self.qualification_level)

    def has_skills(self, required: Iterable[str]) -> bool:
        """True if the worker holds every skill in `required` (case-insensitive)."""
        held = self.skill_set
        return all(skill.lower() in held for skill in required)

    def is_available_in(self, phase: int) -> bool:
        return phase in self.available_slots


@dataclass(frozen=True)
class Task:
    task_id: str
    task_name: str
    category: str = ""
    duration: Optional[int] = None
    required_skills: Tuple[str, ...] = ()
    preferred_phases: Tuple[int, ...] = ()
    max_concurrent: Optional[int] = None


@dataclass(frozen=True)
class RuleCondition:
    field: str
    operator: str  # equals | contains | greater_than | less_than | in_range
    value: Any = None


@dataclass(frozen=True)
class RuleAction:
    type: str  # assign | restrict | prioritize | limit
    parameters: Dict[str, Any] = field(default_factory=dict, hash=False)


@dataclass(frozen=True)
class RuleConfig:
    conditions: Tuple[RuleCondition, ...] = ()
    actions: Tuple[RuleAction, ...] = ()
    priority: int = 1


@dataclass(frozen=True)
class BusinessRule:
    """
    A business rule as produced by the rule-authoring collaborator.

    `description` is the free text the interpreter classifies. The typed payload
    fields are only filled for the rule types that use them: `tasks` for co-run,
    `task_id`/`allowed_phases` for phase-window, `target_group`/`min_common_slots`
    for slot restriction and `worker_group`/`max_slots_per_phase` for load limit.
    """

    id: str
    description: str
    name: str = ""
    rule_type: str = "custom"
    config: RuleConfig = field(default_factory=RuleConfig)
    is_active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    affected_entities: Tuple[str, ...] = ()

    # co_run
    tasks: Tuple[str, ...] = ()
    # phase_window
    task_id: Optional[str] = None
    allowed_phases: Tuple[int, ...] = ()
    # slot_restriction
    target_group: Optional[str] = None
    min_common_slots: Optional[int] = None
    # load_limit
    worker_group: Optional[str] = None
    max_slots_per_phase: Optional[int] = None

    @property
    def display_name(self) -> str:
        if self.name:
            return self.name
        return self.description[:50] + ("..." if len(self.description) > 50 else "")

    def activate(self) -> "BusinessRule":
        return replace(self, is_active=True)

    def deactivate(self) -> "BusinessRule":
        return replace(self, is_active=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BusinessRule":
        """Build a rule from a camelCase or snake_case mapping."""

        def pick(*keys, default=None):
            for k in keys:
                if k in data and data[k] is not None:
                    return data[k]
            return default

        raw_config = pick("ruleConfig", "config", default={}) or {}
        config = RuleConfig(
            conditions=tuple(
                RuleCondition(c.get("field", ""), c.get("operator", "equals"), c.get("value"))
                for c in raw_config.get("conditions", [])
            ),
            actions=tuple(
                RuleAction(a.get("type", ""), dict(a.get("parameters", {})))
                for a in raw_config.get("actions", [])
            ),
            priority=int(raw_config.get("priority", 1)),
        )
        rule_type = pick("ruleType", "rule_type", default="custom")
        if rule_type not in RULE_TYPES:
            rule_type = "custom"

        return cls(
            id=str(pick("id", default="")),
            name=str(pick("name", default="")),
            description=str(pick("naturalLanguage", "natural_language", "description", default="")),
            rule_type=rule_type,
            config=config,
            is_active=bool(pick("isActive", "is_active", default=True)),
            affected_entities=tuple(pick("affectedEntities", "affected_entities", default=())),
            tasks=tuple(str(t).strip() for t in pick("tasks", default=())),
            task_id=pick("taskID", "taskId", "task_id"),
            allowed_phases=tuple(int(p) for p in pick("allowedPhases", "allowed_phases", default=())),
            target_group=pick("targetGroup", "target_group"),
            min_common_slots=pick("minCommonSlots", "min_common_slots"),
            worker_group=pick("workerGroup", "worker_group"),
            max_slots_per_phase=pick("maxSlotsPerPhase", "max_slots_per_phase"),
        )


@dataclass(frozen=True)
class Priority:
    id: str
    name: str
    weight: float
    description: str = ""
    category: str = "custom"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Priority":
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            weight=float(data.get("weight", 0.0)),
            description=str(data.get("description", "")),
            category=data.get("category", "custom"),
        )


def active_rules(rules: Optional[Iterable[BusinessRule]]) -> List[BusinessRule]:
    """Active rules in their original order."""
    return [r for r in (rules or []) if r.is_active]
