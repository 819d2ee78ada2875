"""Row builders shared by the validation, allocation and API tests."""
from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from core.entities import BusinessRule, Priority


def client_row(
    cid: str = "C1",
    name: Optional[str] = None,
    priority: Any = 3,
    requested: Iterable[str] | str = ("T1",),
    group: str = "G1",
    attributes: str = "{}",
    **overrides: Any,
) -> Dict[str, Any]:
    row = {
        "ClientID": cid,
        "ClientName": name if name is not None else f"Client {cid}",
        "PriorityLevel": priority,
        "RequestedTaskIDs": requested if isinstance(requested, str) else ",".join(requested),
        "GroupTag": group,
        "AttributesJSON": attributes,
    }
    row.update(overrides)
    return row


def worker_row(
    wid: str = "W1",
    name: Optional[str] = None,
    skills: Iterable[str] | str = ("python",),
    slots: str = "[1,2,3]",
    max_load: Any = 3,
    group: str = "A",
    qualification: Any = 5,
    **overrides: Any,
) -> Dict[str, Any]:
    row = {
        "WorkerID": wid,
        "WorkerName": name if name is not None else f"Worker {wid}",
        "Skills": skills if isinstance(skills, str) else ",".join(skills),
        "AvailableSlots": slots,
        "MaxLoadPerPhase": max_load,
        "WorkerGroup": group,
        "QualificationLevel": qualification,
    }
    row.update(overrides)
    return row


def task_row(
    tid: str = "T1",
    name: Optional[str] = None,
    category: str = "Dev",
    duration: Any = 1,
    skills: Iterable[str] | str = ("python",),
    phases: str = "[1,2]",
    max_concurrent: Any = 1,
    **overrides: Any,
) -> Dict[str, Any]:
    row = {
        "TaskID": tid,
        "TaskName": name if name is not None else f"Task {tid}",
        "Category": category,
        "Duration": duration,
        "RequiredSkills": skills if isinstance(skills, str) else ",".join(skills),
        "PreferredPhases": phases,
        "MaxConcurrent": max_concurrent,
    }
    row.update(overrides)
    return row


def rule(rid: str, text: str, rule_type: str = "custom", **fields: Any) -> BusinessRule:
    return BusinessRule(id=rid, description=text, name=fields.pop("name", rid), rule_type=rule_type, **fields)


def corun(rid: str, *task_ids: str) -> BusinessRule:
    return rule(rid, f"Run {', '.join(task_ids)} together", rule_type="co_run", tasks=tuple(task_ids))


def phase_window(rid: str, task_id: str, phases: Iterable[int]) -> BusinessRule:
    phases = tuple(phases)
    return rule(
        rid,
        f"Only run {task_id} in phases {list(phases)}",
        rule_type="phase_window",
        task_id=task_id,
        allowed_phases=tuple(phases),
    )


def speed(weight: float) -> Priority:
    return Priority(id="P-speed", name="Speed", weight=weight, category="efficiency")
