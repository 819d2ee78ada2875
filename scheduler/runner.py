import logging
from typing import List, Optional, Tuple
from core.entities import Client, Task, Worker
from core.results import AllocationResult
from core.state import AllocationState
from scheduler.rules import apply_effects
from scheduler.scoring import build_reasoning, calculate_confidence
from utils.constants import DEFAULT_PHASE

logger = logging.getLogger(__name__)


def find_eligible_workers(task: Task, workers: List[Worker]) -> List[Worker]:
    """Workers holding every required skill (case-insensitive) with at least one available slot."""
    return [w for w in workers if w.has_skills(task.required_skills) and w.available_slots]


def concurrency_cap(task: Task) -> int:
    """MaxConcurrent, with a missing or non-positive value treated as 1."""
    if task.max_concurrent is None or task.max_concurrent < 1:
        return 1
    return task.max_concurrent


def select_workers(task: Task, ordered: List[Worker], phase: Optional[int] = None) -> List[Worker]:
    """
    The first MaxConcurrent workers of the ordered list. With a phase, only workers
    available in it are taken, still in rule order.
    """
    if phase is not None:
        ordered = [w for w in ordered if w.is_available_in(phase)]
    return ordered[: concurrency_cap(task)]


def phase_scores(task: Task, workers: List[Worker]) -> List[Tuple[int, int]]:
    return [(p, sum(1 for w in workers if w.is_available_in(p))) for p in task.preferred_phases]


def select_phase(task: Task, workers: List[Worker]) -> int:
    """
    The preferred phase in which the most of `workers` are available; ties go to the
    phase listed first. No preferred phases means the default phase.
    """
    if not task.preferred_phases:
        return DEFAULT_PHASE
    best, best_score = task.preferred_phases[0], -1
    for phase, score in phase_scores(task, workers):
        if score > best_score:
            best, best_score = phase, score
    return best


def allocate_task(task: Task, client: Client, priority: int, state: AllocationState) -> Optional[AllocationResult]:
    eligible = find_eligible_workers(task, state.workers)
    if not eligible:
        return None

    ordered = apply_effects(eligible, client, state)
    selected = select_workers(task, ordered)
    phase = select_phase(task, selected)

    if task.preferred_phases:
        # nobody in the first pick can work any preferred phase: widen to the full list
        if not any(w.is_available_in(phase) for w in selected):
            phase = select_phase(task, ordered)
        # every assigned worker must be available in the chosen phase
        selected = select_workers(task, ordered, phase)
        if not selected:
            return None

    return AllocationResult(
        task_id=task.task_id,
        task_name=task.task_name,
        assigned_worker_ids=[w.worker_id for w in selected],
        assigned_worker_names=[w.worker_name for w in selected],
        client_id=client.client_id,
        client_name=client.client_name,
        phase=phase,
        priority=priority,
        reasoning=build_reasoning(task, client, selected, phase),
        confidence=calculate_confidence(task, selected, phase, state),
    )


def run_allocation(state: AllocationState, queue) -> None:
    """Walk the queue in order, booking each allocation before the next task is considered."""
    logger.info("🚀 Allocating tasks...")
    for entry in queue:
        result = allocate_task(entry.task, entry.client, entry.priority, state)
        if result is None:
            warning = f"Could not allocate task: {entry.task.task_name} ({entry.task.task_id})"
            logger.warning(f"⚠️ {warning}")
            state.warnings.append(warning)
            continue
        state.record(result, entry.task.duration)
    logger.info(f"✅ Allocated {len(state.allocations)} of {state.queue_length} queued tasks")
