from typing import List
from core.entities import Client, Task, Worker
from core.state import AllocationState
from utils.constants import (
    BASE_CONFIDENCE,
    HIGH_PRIORITY_LEVEL,
    JUNIOR_QUALIFICATION_AVG,
    LOAD_CONFIDENCE_BONUS,
    PHASE_CONFIDENCE_BONUS,
    SENIOR_QUALIFICATION_AVG,
    SKILL_CONFIDENCE_BONUS,
)


def is_overloaded(worker: Worker, task: Task, state: AllocationState) -> bool:
    """True if this task would push the worker past MaxLoadPerPhase. A missing limit counts as overloaded."""
    if worker.max_load_per_phase is None:
        return True
    load = state.current_utilization(worker.worker_id) + (task.duration or 0)
    return load > worker.max_load_per_phase


def calculate_confidence(task: Task, workers: List[Worker], phase: int, state: AllocationState) -> float:
    """
    Heuristic score in [0, 1] for one allocation: a base value plus bonuses for
    skill coverage, availability in the chosen phase and headroom under each
    worker's load limit. Must be computed before the allocation is recorded.
    """
    confidence = BASE_CONFIDENCE
    if all(w.has_skills(task.required_skills) for w in workers):
        confidence += SKILL_CONFIDENCE_BONUS
    if all(w.is_available_in(phase) for w in workers):
        confidence += PHASE_CONFIDENCE_BONUS
    if not any(is_overloaded(w, task, state) for w in workers):
        confidence += LOAD_CONFIDENCE_BONUS
    return round(min(confidence, 1.0), 2)


def average_qualification(workers: List[Worker]) -> float:
    if not workers:
        return 0.0
    return sum(w.qualification_rank for w in workers) / len(workers)


def build_reasoning(task: Task, client: Client, workers: List[Worker], phase: int) -> str:
    reasons = [
        f"Assigned {len(workers)} worker(s) with required skills: {', '.join(task.required_skills)}"
    ]

    priority = client.priority_level or 0
    if priority >= HIGH_PRIORITY_LEVEL:
        reasons.append(f"High priority client (Level {priority}) - assigned senior workers")

    if len(workers) > 1:
        reasons.append("Team allocation for better collaboration")

    avg = average_qualification(workers)
    if avg >= SENIOR_QUALIFICATION_AVG:
        reasons.append("Senior workers selected for complex task")
    elif avg <= JUNIOR_QUALIFICATION_AVG:
        reasons.append("Junior workers selected for cost optimization")

    reasons.append(f"Scheduled for Phase {phase} based on availability and preferences")
    return ". ".join(reasons) + "."
