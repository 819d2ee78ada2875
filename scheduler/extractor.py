import logging
from typing import List
import pandas as pd
from core.entities import BusinessRule
from core.results import AllocationResult, AllocationSummary
from core.rule_effects import Inert
from core.state import AllocationState
from utils.constants import ATTRIBUTION_KEYWORDS

logger = logging.getLogger(__name__)


def was_rule_executed(rule: BusinessRule, allocations: List[AllocationResult]) -> bool:
    """
    Best-effort audit of whether a rule shaped any allocation: some reasoning contains
    the first word of the rule text, or reasoning and rule text share an attribution
    keyword. This can over- and under-report.
    """
    text = rule.description.lower()
    words = text.split()
    first_word = words[0] if words else ""
    for allocation in allocations:
        reasoning = allocation.reasoning.lower()
        if first_word and first_word in reasoning:
            return True
        if any(k in reasoning and k in text for k in ATTRIBUTION_KEYWORDS):
            return True
    return False


def extract_summary(state: AllocationState) -> AllocationSummary:
    """Build the run summary from a finished allocation state. Inert rules never count as executed."""
    executed = [
        rule.display_name
        for rule, effect in state.effects
        if not isinstance(effect, Inert) and was_rule_executed(rule, state.allocations)
    ]
    return AllocationSummary(
        total_tasks=state.queue_length,
        assigned_tasks=len(state.allocations),
        unassigned_tasks=state.queue_length - len(state.allocations),
        worker_utilization=dict(state.utilization),
        phase_distribution=dict(state.phase_distribution),
        priority_distribution=dict(state.priority_distribution),
        executed_rules=executed,
        warnings=list(state.warnings),
        allocations=list(state.allocations),
    )


def to_dataframe(summary: AllocationSummary) -> pd.DataFrame:
    """One row per allocation, worker lists joined for display and export."""
    columns = [
        "Task ID",
        "Task Name",
        "Client",
        "Priority",
        "Phase",
        "Worker IDs",
        "Workers",
        "Confidence",
        "Reasoning",
    ]
    rows = [
        {
            "Task ID": a.task_id,
            "Task Name": a.task_name,
            "Client": a.client_name,
            "Priority": a.priority,
            "Phase": a.phase,
            "Worker IDs": ", ".join(a.assigned_worker_ids),
            "Workers": ", ".join(a.assigned_worker_names),
            "Confidence": a.confidence,
            "Reasoning": a.reasoning,
        }
        for a in summary.allocations
    ]
    return pd.DataFrame(rows, columns=columns)


def utilization_frame(summary: AllocationSummary) -> pd.DataFrame:
    """Per-worker utilization, most used first."""
    df = pd.DataFrame(
        list(summary.worker_utilization.items()), columns=["Worker ID", "Utilization"]
    )
    return df.sort_values("Utilization", ascending=False, kind="stable").reset_index(drop=True)
