from collections import Counter
from typing import List
from core.entities import Client, Worker
from core.rule_effects import (
    CostMinimize,
    GroupAffinity,
    HighPriorityBoost,
    Inert,
    QualificationOrder,
    RuleEffect,
    UtilizationBalance,
)
from core.state import AllocationState
from utils.constants import HIGH_PRIORITY_LEVEL

"""
This file contains the worker-ordering effects business rules can have on the
eligible worker list of one task.

All sorts are stable, so workers that tie keep the order of the previous step.
"""


def order_by_qualification(workers: List[Worker], descending: bool = True) -> List[Worker]:
    return sorted(workers, key=lambda w: w.qualification_rank, reverse=descending)


def order_by_utilization(workers: List[Worker], state: AllocationState) -> List[Worker]:
    """Least-used workers first, read from the run's utilization accumulator."""
    return sorted(workers, key=lambda w: state.current_utilization(w.worker_id))


def largest_group(workers: List[Worker]) -> List[Worker]:
    """
    Keep only the members of the largest WorkerGroup (first seen wins a tie), but only
    when that group has more than one member.
    """
    if not workers:
        return workers
    counts = Counter(w.worker_group for w in workers)
    # Counter keeps first-seen order, and max returns the first maximal key
    group = max(counts, key=lambda g: counts[g])
    if counts[group] <= 1:
        return workers
    return [w for w in workers if w.worker_group == group]


def apply_effect(
    effect: RuleEffect,
    workers: List[Worker],
    client: Client,
    state: AllocationState,
) -> List[Worker]:
    """Return the eligible worker list reordered (or filtered) by one rule effect."""
    if isinstance(effect, QualificationOrder):
        return order_by_qualification(workers, effect.descending)
    if isinstance(effect, CostMinimize):
        return order_by_qualification(workers, descending=False)
    if isinstance(effect, UtilizationBalance):
        return order_by_utilization(workers, state)
    if isinstance(effect, GroupAffinity):
        return largest_group(workers)
    if isinstance(effect, HighPriorityBoost):
        if (client.priority_level or 0) >= HIGH_PRIORITY_LEVEL:
            return order_by_qualification(workers, descending=True)
        return workers
    if isinstance(effect, Inert):
        return workers
    raise TypeError(f"Unknown rule effect: {effect!r}")


def apply_effects(workers: List[Worker], client: Client, state: AllocationState) -> List[Worker]:
    """Apply every resolved rule effect in rule-list order."""
    ordered = list(workers)
    for _rule, effect in state.effects:
        ordered = apply_effect(effect, ordered, client, state)
    return ordered
