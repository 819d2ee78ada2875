from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Set, Tuple
from core.entities import BusinessRule, Client, Task, Worker
from core.findings import ValidationFinding
from core.results import AllocationResult
from core.rule_effects import RuleEffect
from utils.parsers import ParseResult


@dataclass
class ValidationState:
    """
    A dataclass to hold everything a validation run reads: the raw records, their
    normalized entities and the parse results the checks inspect.
    """

    # raw inputs
    clients_raw: List[Mapping[str, Any]]
    """Client records in row order, as handed over by the ingestion collaborator."""
    workers_raw: List[Mapping[str, Any]]
    """Worker records in row order."""
    tasks_raw: List[Mapping[str, Any]]
    """Task records in row order."""

    # normalized entities
    clients: List[Client]
    """Normalized clients, index-aligned with `clients_raw`."""
    workers: List[Worker]
    """Normalized workers, index-aligned with `workers_raw`."""
    tasks: List[Task]
    """Normalized tasks, index-aligned with `tasks_raw`."""

    # parse results (error side is only read by the checks)
    slot_results: List[ParseResult]
    """AvailableSlots parse result per worker row."""
    phase_results: List[ParseResult]
    """PreferredPhases parse result per task row."""
    attribute_results: List[ParseResult]
    """AttributesJSON parse result per client row."""

    # rule context
    rules: List[BusinessRule]
    """Active business rules, in their original order."""
    has_rule_context: bool = False
    """True when the caller supplied a rule list (even an empty one)."""

    @property
    def task_ids(self) -> Set[str]:
        return {t.task_id for t in self.tasks}

    @property
    def tasks_by_id(self) -> Dict[str, Task]:
        """First task per TaskID; later duplicates are a duplicate-id finding."""
        by_id: Dict[str, Task] = {}
        for t in self.tasks:
            by_id.setdefault(t.task_id, t)
        return by_id

    def raw(self, kind: str) -> List[Mapping[str, Any]]:
        return {
            "clients": self.clients_raw,
            "workers": self.workers_raw,
            "tasks": self.tasks_raw,
        }[kind]


@dataclass
class AllocationState:
    """
    A dataclass to hold the working state of a single allocation run. A fresh instance
    is built for every call, so runs never share an accumulator.
    """

    # model inputs
    clients: List[Client]
    """Normalized clients in row order."""
    workers: List[Worker]
    """Normalized workers in row order."""
    tasks_by_id: Dict[str, Task]
    """First task per TaskID."""
    effects: List[Tuple[BusinessRule, RuleEffect]]
    """Active rules paired with the effect the interpreter resolved for them."""

    # model params
    priority_weight: float
    """Weight of the "Speed" priority applied to client priority levels."""

    # collections to fill
    utilization: Dict[str, int] = field(default_factory=dict)
    """Phase-duration units consumed so far, keyed by WorkerID."""
    phase_distribution: Dict[int, int] = field(default_factory=dict)
    """Number of allocations per chosen phase."""
    priority_distribution: Dict[int, int] = field(default_factory=dict)
    """Number of allocations per client priority level."""
    allocations: List[AllocationResult] = field(default_factory=list)
    """Results in allocation order."""
    warnings: List[str] = field(default_factory=list)
    """Non-fatal warnings (unassigned tasks)."""
    queue_length: int = 0
    """Number of (task, client) entries queued."""

    def current_utilization(self, worker_id: str) -> int:
        return self.utilization.get(worker_id, 0)

    def record(self, result: AllocationResult, duration: Optional[int]) -> None:
        """Book a successful allocation into the accumulators."""
        self.allocations.append(result)
        for worker_id in result.assigned_worker_ids:
            self.utilization[worker_id] = self.current_utilization(worker_id) + (duration or 0)
        self.phase_distribution[result.phase] = self.phase_distribution.get(result.phase, 0) + 1
        self.priority_distribution[result.priority] = (
            self.priority_distribution.get(result.priority, 0) + 1
        )


@dataclass
class CheckOutcome:
    """Findings produced by one registered check."""

    name: str
    findings: List[ValidationFinding]

    @property
    def passed(self) -> bool:
        return not self.findings
