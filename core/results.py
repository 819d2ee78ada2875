from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class AllocationResult:
    task_id: str
    task_name: str
    assigned_worker_ids: List[str]
    assigned_worker_names: List[str]
    client_id: str
    client_name: str
    phase: int
    priority: int
    reasoning: str
    confidence: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "taskId": self.task_id,
            "taskName": self.task_name,
            "assignedWorkerIds": list(self.assigned_worker_ids),
            "assignedWorkerNames": list(self.assigned_worker_names),
            "clientId": self.client_id,
            "clientName": self.client_name,
            "phase": self.phase,
            "priority": self.priority,
            "reasoning": self.reasoning,
            "confidence": self.confidence,
        }


@dataclass
class AllocationSummary:
    total_tasks: int
    assigned_tasks: int
    unassigned_tasks: int
    worker_utilization: Dict[str, int]
    phase_distribution: Dict[int, int]
    priority_distribution: Dict[int, int]
    executed_rules: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    allocations: List[AllocationResult] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalTasks": self.total_tasks,
            "assignedTasks": self.assigned_tasks,
            "unassignedTasks": self.unassigned_tasks,
            "workerUtilization": dict(self.worker_utilization),
            "phaseDistribution": {str(k): v for k, v in self.phase_distribution.items()},
            "priorityDistribution": {str(k): v for k, v in self.priority_distribution.items()},
            "executedRules": list(self.executed_rules),
            "warnings": list(self.warnings),
            "allocations": [a.to_dict() for a in self.allocations],
        }
