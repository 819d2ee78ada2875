import logging
from typing import Any, List, NamedTuple, Optional, Sequence
from core.entities import BusinessRule, Client, Priority, Task, active_rules
from core.results import AllocationSummary
from core.state import AllocationState
from scheduler.extractor import extract_summary
from scheduler.interpreter import RuleClassifier, resolve_effects
from scheduler.runner import run_allocation
from utils.constants import DEFAULT_PRIORITY_WEIGHT, SPEED_PRIORITY_KEYWORD
from utils.normalizer import normalize_records

logger = logging.getLogger(__name__)


class QueueEntry(NamedTuple):
    task: Task
    client: Client
    priority: int


def priority_weight(priorities: Optional[Sequence[Priority]]) -> float:
    """Weight of the first priority whose name mentions speed, else the default."""
    for p in priorities or []:
        if SPEED_PRIORITY_KEYWORD in p.name.lower():
            return p.weight
    return DEFAULT_PRIORITY_WEIGHT


def build_task_queue(clients: List[Client], tasks: List[Task], weight: float) -> List[QueueEntry]:
    """
    One entry per (client, requested task) whose TaskID resolves, in client then
    request order, stably sorted by descending priority x weight.
    """
    tasks_by_id = {}
    for t in tasks:
        tasks_by_id.setdefault(t.task_id, t)

    queue = [
        QueueEntry(tasks_by_id[task_id], client, client.priority_level or 0)
        for client in clients
        for task_id in client.requested_task_ids
        if task_id in tasks_by_id
    ]
    return sorted(queue, key=lambda e: e.priority * weight, reverse=True)


# == Build Allocation Model ==
def allocate(
    clients: Sequence[Any],
    workers: Sequence[Any],
    tasks: Sequence[Any],
    rules: Optional[Sequence[BusinessRule]] = None,
    priorities: Optional[Sequence[Priority]] = None,
    classifier: Optional[RuleClassifier] = None,
) -> AllocationSummary:
    """
    Greedy task-to-worker allocation.

    Builds the priority queue, resolves every active rule to its effect once, then
    walks the queue assigning each task its best-ordered eligible workers and a phase.
    Inputs are never mutated; each call gets a fresh utilization accumulator.
    Raises InvalidInputShapeError only when a collection is not a list of records.
    """
    # === Normalize inputs ===
    client_list = normalize_records("clients", clients)
    worker_list = normalize_records("workers", workers)
    task_list = normalize_records("tasks", tasks)

    # === Model setup ===
    logger.info("📋 Building allocation model...")
    rule_list = active_rules(rules)
    weight = priority_weight(priorities)
    queue = build_task_queue(client_list, task_list, weight)
    effects = resolve_effects(rule_list, classifier)

    tasks_by_id = {}
    for t in task_list:
        tasks_by_id.setdefault(t.task_id, t)

    state = AllocationState(
        clients=client_list,
        workers=worker_list,
        tasks_by_id=tasks_by_id,
        effects=effects,
        priority_weight=weight,
        utilization={w.worker_id: 0 for w in worker_list},
        queue_length=len(queue),
    )
    logger.info(
        f"→ {len(queue)} queued task requests, {len(worker_list)} workers, "
        f"{len(rule_list)} active rules, speed weight {weight}"
    )

    run_allocation(state, queue)
    return extract_summary(state)
