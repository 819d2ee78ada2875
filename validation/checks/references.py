from typing import List
from core.findings import ValidationFinding
from core.state import ValidationState

"""
Cross-referential checks: they need more than one entity collection at once.
"""


def check_unknown_references(state: ValidationState) -> List[ValidationFinding]:
    """Every RequestedTaskIDs token must name an existing TaskID."""
    findings = []
    task_ids = state.task_ids
    for idx, client in enumerate(state.clients):
        for pos, task_id in enumerate(client.requested_task_ids):
            if task_id not in task_ids:
                findings.append(
                    ValidationFinding(
                        id=f"unknown-task-{client.client_id or idx}-{task_id}-{idx}-{pos}",
                        row=idx,
                        column="RequestedTaskIDs",
                        message=f"Unknown TaskID reference: {task_id}",
                        severity="error",
                        validation_type="unknown_reference",
                        suggestion="Ensure all referenced TaskIDs exist in the tasks data",
                        entity="clients",
                    )
                )
    return findings


def check_skill_coverage(state: ValidationState) -> List[ValidationFinding]:
    """Every required skill must be held by at least one worker (case-insensitive)."""
    findings = []
    available = set()
    for worker in state.workers:
        available |= worker.skill_set

    for idx, task in enumerate(state.tasks):
        reported = set()
        for skill in task.required_skills:
            lowered = skill.lower()
            if lowered in available or lowered in reported:
                continue
            reported.add(lowered)
            findings.append(
                ValidationFinding(
                    id=f"missing-skill-{task.task_id or idx}-{lowered}-{idx}",
                    row=idx,
                    column="RequiredSkills",
                    message=f"No worker has required skill: {skill}",
                    severity="error",
                    validation_type="skill_coverage",
                    suggestion="Add a worker with this skill or modify the task requirements",
                    entity="tasks",
                )
            )
    return findings


def check_max_concurrency(state: ValidationState) -> List[ValidationFinding]:
    """MaxConcurrent should not exceed the number of workers holding all required skills."""
    findings = []
    for idx, task in enumerate(state.tasks):
        if task.max_concurrent is None:
            continue
        qualified = sum(1 for w in state.workers if w.has_skills(task.required_skills))
        if task.max_concurrent > qualified:
            findings.append(
                ValidationFinding(
                    id=f"max-concurrency-{task.task_id or idx}-{idx}",
                    row=idx,
                    column="MaxConcurrent",
                    message=(
                        f"MaxConcurrent ({task.max_concurrent}) exceeds "
                        f"qualified workers ({qualified})"
                    ),
                    severity="warning",
                    validation_type="max_concurrency",
                    suggestion="Reduce MaxConcurrent or add more qualified workers",
                    entity="tasks",
                )
            )
    return findings
