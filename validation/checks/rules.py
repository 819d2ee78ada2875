from typing import List, Tuple
from core.entities import BusinessRule
from core.findings import SHEET_LEVEL_ROW, ValidationFinding
from core.state import ValidationState
from utils.constants import DEFAULT_PHASE
from utils.parsers import split_tags
from validation.graph import TaskGraph

"""
Checks that need rule context: circular co-run groups and phase-window conflicts.
Without rule context both pass vacuously.
"""


def corun_tasks(rule: BusinessRule) -> Tuple[str, ...]:
    """Task IDs of a co-run rule: the typed payload, else a `tasks` action parameter."""
    if rule.tasks:
        return rule.tasks
    for action in rule.config.actions:
        listed = action.parameters.get("tasks")
        if listed:
            return split_tags(listed)
    return ()


def corun_rules(state: ValidationState) -> List[BusinessRule]:
    return [r for r in state.rules if r.rule_type == "co_run" and corun_tasks(r)]


def build_corun_graph(rules: List[BusinessRule]) -> TaskGraph:
    """Each co-run group chains its tasks in declaration order."""
    graph = TaskGraph()
    for rule in rules:
        members = corun_tasks(rule)
        for task_id in members:
            graph.add_node(task_id)
        for src, dst in zip(members, members[1:]):
            graph.add_edge(src, dst, rule.id)
    return graph


def check_circular_corun(state: ValidationState) -> List[ValidationFinding]:
    if not state.has_rule_context:
        return []
    graph = build_corun_graph(corun_rules(state))
    findings = []
    for cycle in graph.find_cycles():
        labels = [graph.labels[i] for i in cycle]
        chain = " -> ".join(labels + [labels[0]])
        sources = graph.cycle_sources(cycle)
        findings.append(
            ValidationFinding(
                id=f"circular-corun-{'-'.join(labels)}",
                row=SHEET_LEVEL_ROW,
                column="RuleID",
                message=f"Circular co-run dependency: {chain} (rules: {', '.join(sources)})",
                severity="error",
                validation_type="circular_corun",
                suggestion="Merge the co-run groups or remove one of the rules",
                entity="rules",
            )
        )
    return findings


def check_conflicting_rules(state: ValidationState) -> List[ValidationFinding]:
    """
    A phase-window rule restricting task T to phases S conflicts with a co-run rule
    pairing T with a task P whose preferred phases share nothing with S. A task with
    no preferred phases is scheduled in the default phase.
    """
    if not state.has_rule_context:
        return []
    tasks_by_id = state.tasks_by_id
    groups = corun_rules(state)
    findings = []

    for window in state.rules:
        if window.rule_type != "phase_window" or not window.task_id:
            continue
        allowed = set(window.allowed_phases)
        for group in groups:
            members = corun_tasks(group)
            if window.task_id not in members:
                continue
            for partner_id in members:
                if partner_id == window.task_id or partner_id not in tasks_by_id:
                    continue
                partner_phases = set(tasks_by_id[partner_id].preferred_phases) or {DEFAULT_PHASE}
                if partner_phases & allowed:
                    continue
                findings.append(
                    ValidationFinding(
                        id=f"conflict-{window.id}-{group.id}-{partner_id}",
                        row=SHEET_LEVEL_ROW,
                        column="RuleID",
                        message=(
                            f"Phase-window rule {window.id} restricts {window.task_id} to phases "
                            f"{sorted(allowed)}, but co-run rule {group.id} ties it to {partner_id} "
                            f"(phases {sorted(partner_phases)})"
                        ),
                        severity="error",
                        validation_type="conflicting_rules",
                        suggestion="Widen the phase window or adjust the co-run group",
                        entity="rules",
                    )
                )
    return findings
