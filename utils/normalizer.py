import json
from typing import Any, Callable, Dict, List, Mapping, Sequence
from core.entities import Client, Worker, Task
from exceptions.custom_errors import InvalidInputShapeError
from utils.parsers import (
    parse_attributes,
    parse_phases,
    parse_slots,
    split_tags,
    to_int,
    to_text,
)

"""
Entity normalizer: turns raw string-keyed records (one per spreadsheet row) into the
typed, frozen entities in core.entities.

Per-record defects never raise here. Malformed lists and JSON collapse to empty
defaults and numbers that cannot be read become None; the validation checks are the
ones that explain what went wrong.
"""


def normalize_client(record: Mapping[str, Any]) -> Client:
    return Client(
        client_id=to_text(record.get("ClientID")),
        client_name=to_text(record.get("ClientName")),
        priority_level=to_int(record.get("PriorityLevel")),
        requested_task_ids=split_tags(record.get("RequestedTaskIDs")),
        group_tag=to_text(record.get("GroupTag")),
        attributes=parse_attributes(record.get("AttributesJSON")).values,
    )


def normalize_worker(record: Mapping[str, Any]) -> Worker:
    return Worker(
        worker_id=to_text(record.get("WorkerID")),
        worker_name=to_text(record.get("WorkerName")),
        skills=split_tags(record.get("Skills")),
        available_slots=parse_slots(record.get("AvailableSlots")).values,
        max_load_per_phase=to_int(record.get("MaxLoadPerPhase")),
        worker_group=to_text(record.get("WorkerGroup")),
        qualification_level=to_text(record.get("QualificationLevel")),
    )


def normalize_task(record: Mapping[str, Any]) -> Task:
    return Task(
        task_id=to_text(record.get("TaskID")),
        task_name=to_text(record.get("TaskName")),
        category=to_text(record.get("Category")),
        duration=to_int(record.get("Duration")),
        required_skills=split_tags(record.get("RequiredSkills")),
        preferred_phases=parse_phases(record.get("PreferredPhases")).values,
        max_concurrent=to_int(record.get("MaxConcurrent")),
    )


NORMALIZERS: Dict[str, Callable[[Mapping[str, Any]], Any]] = {
    "clients": normalize_client,
    "workers": normalize_worker,
    "tasks": normalize_task,
}

ENTITY_TYPES = {"clients": Client, "workers": Worker, "tasks": Task}


def ensure_records(kind: str, collection: Any) -> Sequence[Any]:
    """
    Check the overall shape of an entity collection.

    This is the only fatal condition in either engine: the collection must be a list
    (or tuple) whose items are mappings or already-normalized entities.
    """
    if not isinstance(collection, (list, tuple)):
        raise InvalidInputShapeError(
            f"{kind} must be a list of records, got {type(collection).__name__}"
        )
    entity_type = ENTITY_TYPES[kind]
    for idx, item in enumerate(collection):
        if not isinstance(item, (Mapping, entity_type)):
            raise InvalidInputShapeError(
                f"{kind}[{idx}] must be a record mapping, got {type(item).__name__}"
            )
    return collection


def normalize_records(kind: str, records: Sequence[Any]) -> List[Any]:
    """Normalize a whole collection in row order; entities already typed pass through."""
    if kind not in NORMALIZERS:
        raise ValueError(f"Unknown entity kind: {kind}")
    ensure_records(kind, records)
    normalize = NORMALIZERS[kind]
    entity_type = ENTITY_TYPES[kind]
    return [r if isinstance(r, entity_type) else normalize(r) for r in records]


def as_record(kind: str, item: Any) -> Mapping[str, Any]:
    """Inverse of the normalizers, so the validation checks can read typed entities too."""
    if isinstance(item, Mapping):
        return item
    if kind == "clients":
        return {
            "ClientID": item.client_id,
            "ClientName": item.client_name,
            "PriorityLevel": item.priority_level,
            "RequestedTaskIDs": ",".join(item.requested_task_ids),
            "GroupTag": item.group_tag,
            "AttributesJSON": json.dumps(item.attributes),
        }
    if kind == "workers":
        return {
            "WorkerID": item.worker_id,
            "WorkerName": item.worker_name,
            "Skills": ",".join(item.skills),
            "AvailableSlots": json.dumps(list(item.available_slots)),
            "MaxLoadPerPhase": item.max_load_per_phase,
            "WorkerGroup": item.worker_group,
            "QualificationLevel": item.qualification_level,
        }
    return {
        "TaskID": item.task_id,
        "TaskName": item.task_name,
        "Category": item.category,
        "Duration": item.duration,
        "RequiredSkills": ",".join(item.required_skills),
        "PreferredPhases": json.dumps(list(item.preferred_phases)),
        "MaxConcurrent": item.max_concurrent,
    }
