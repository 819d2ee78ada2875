from typing import List
from core.findings import SHEET_LEVEL_ROW, ValidationFinding
from core.state import ValidationState
from utils.constants import (
    ENTITY_KINDS,
    ID_COLUMNS,
    MAX_PRIORITY_LEVEL,
    MAX_QUALIFICATION_LEVEL,
    MIN_PRIORITY_LEVEL,
    MIN_QUALIFICATION_LEVEL,
    QUALIFICATION_RANKS,
    REQUIRED_COLUMNS,
)
from utils.parsers import split_tags, to_int, to_text

"""
Single-collection checks: required columns, duplicate keys, malformed lists,
out-of-range values and broken JSON. None of these need more than one entity kind.
"""


def check_required_columns(state: ValidationState) -> List[ValidationFinding]:
    """Every required column must be present on the first record of a non-empty collection."""
    findings = []
    for kind in ENTITY_KINDS:
        records = state.raw(kind)
        if not records:
            continue
        present = set(records[0].keys())
        for column in REQUIRED_COLUMNS[kind]:
            if column not in present:
                findings.append(
                    ValidationFinding(
                        id=f"missing-{kind}-{column}",
                        row=SHEET_LEVEL_ROW,
                        column=column,
                        message=f"Missing required column: {column}",
                        severity="error",
                        validation_type="missing_column",
                        suggestion=f"Add the {column} column to the {kind} data",
                        entity=kind,
                    )
                )
    return findings


def check_duplicate_ids(state: ValidationState) -> List[ValidationFinding]:
    """Every repeat of a primary key after its first occurrence is an error on its own row."""
    findings = []
    for kind in ENTITY_KINDS:
        id_column = ID_COLUMNS[kind]
        seen = set()
        for idx, record in enumerate(state.raw(kind)):
            key = to_text(record.get(id_column))
            if not key:
                continue
            if key in seen:
                findings.append(
                    ValidationFinding(
                        id=f"duplicate-{kind}-{key}-{idx}",
                        row=idx,
                        column=id_column,
                        message=f"Duplicate {id_column}: {key}",
                        severity="error",
                        validation_type="duplicate_id",
                        suggestion=f"Use a unique {id_column}",
                        entity=kind,
                    )
                )
            seen.add(key)
    return findings


def check_malformed_lists(state: ValidationState) -> List[ValidationFinding]:
    """AvailableSlots must be a JSON integer array; PreferredPhases a range or one."""
    findings = []
    for idx, (record, result) in enumerate(zip(state.workers_raw, state.slot_results)):
        if "AvailableSlots" in record and not result.ok:
            findings.append(
                ValidationFinding(
                    id=f"malformed-slots-{to_text(record.get('WorkerID')) or idx}-{idx}",
                    row=idx,
                    column="AvailableSlots",
                    message=f"Malformed AvailableSlots: {record.get('AvailableSlots')}",
                    severity="error",
                    validation_type="malformed_list",
                    suggestion="Use valid JSON array format like [1,2,3]",
                    entity="workers",
                )
            )

    for idx, (record, result) in enumerate(zip(state.tasks_raw, state.phase_results)):
        if "PreferredPhases" in record and not result.ok:
            findings.append(
                ValidationFinding(
                    id=f"malformed-phases-{to_text(record.get('TaskID')) or idx}-{idx}",
                    row=idx,
                    column="PreferredPhases",
                    message=f"Malformed PreferredPhases: {record.get('PreferredPhases')}",
                    severity="error",
                    validation_type="malformed_list",
                    suggestion='Use a range like "1-3" or a JSON array like [2,4,5]',
                    entity="tasks",
                )
            )
    return findings


def _out_of_range(kind, idx, record, column, message, suggestion, severity="error"):
    key = to_text(record.get(ID_COLUMNS[kind])) or str(idx)
    return ValidationFinding(
        id=f"out-of-range-{kind}-{column}-{key}-{idx}",
        row=idx,
        column=column,
        message=message,
        severity=severity,
        validation_type="out_of_range",
        suggestion=suggestion,
        entity=kind,
    )


def _check_not_blank(kind, idx, record, column, findings):
    if column in record and not to_text(record.get(column)):
        findings.append(
            _out_of_range(
                kind, idx, record, column,
                f"{column} cannot be empty",
                f"Provide a valid {column}",
            )
        )


def _check_tags(kind, idx, record, column, findings):
    if column in record and not split_tags(record.get(column)):
        findings.append(
            _out_of_range(
                kind, idx, record, column,
                f"{column} cannot be empty",
                "Add at least one skill",
            )
        )


def _client_ranges(idx, record, findings):
    _check_not_blank("clients", idx, record, "ClientName", findings)
    if "PriorityLevel" in record:
        level = to_int(record.get("PriorityLevel"))
        if level is None or not MIN_PRIORITY_LEVEL <= level <= MAX_PRIORITY_LEVEL:
            findings.append(
                _out_of_range(
                    "clients", idx, record, "PriorityLevel",
                    f"PriorityLevel must be {MIN_PRIORITY_LEVEL}-{MAX_PRIORITY_LEVEL}, "
                    f"got: {record.get('PriorityLevel')}",
                    f"Set PriorityLevel to a value between {MIN_PRIORITY_LEVEL} and {MAX_PRIORITY_LEVEL}",
                )
            )


def _worker_ranges(idx, record, findings):
    _check_not_blank("workers", idx, record, "WorkerName", findings)
    _check_tags("workers", idx, record, "Skills", findings)

    if "MaxLoadPerPhase" in record:
        max_load = to_int(record.get("MaxLoadPerPhase"))
        if max_load is None or max_load < 1:
            findings.append(
                _out_of_range(
                    "workers", idx, record, "MaxLoadPerPhase",
                    f"MaxLoadPerPhase must be ≥ 1, got: {record.get('MaxLoadPerPhase')}",
                    "Set MaxLoadPerPhase to 1 or higher",
                )
            )

    level = to_text(record.get("QualificationLevel"))
    if not level:
        return
    try:
        numeric = float(level)
    except ValueError:
        numeric = None

    if numeric is not None:
        if not MIN_QUALIFICATION_LEVEL <= numeric <= MAX_QUALIFICATION_LEVEL:
            findings.append(
                _out_of_range(
                    "workers", idx, record, "QualificationLevel",
                    f"QualificationLevel should be {MIN_QUALIFICATION_LEVEL}-{MAX_QUALIFICATION_LEVEL}, got: {level}",
                    f"Set QualificationLevel between {MIN_QUALIFICATION_LEVEL} and {MAX_QUALIFICATION_LEVEL}",
                    severity="warning",
                )
            )
    elif level.lower() not in QUALIFICATION_RANKS:
        vocabulary = ", ".join(v.title() for v in QUALIFICATION_RANKS)
        findings.append(
            _out_of_range(
                "workers", idx, record, "QualificationLevel",
                f"Invalid QualificationLevel: {level}",
                f"Use: {vocabulary}",
                severity="info",
            )
        )


def _task_ranges(idx, record, findings):
    _check_not_blank("tasks", idx, record, "TaskName", findings)
    _check_tags("tasks", idx, record, "RequiredSkills", findings)

    if "Duration" in record:
        duration = to_int(record.get("Duration"))
        if duration is None or duration < 1:
            findings.append(
                _out_of_range(
                    "tasks", idx, record, "Duration",
                    f"Duration must be ≥ 1, got: {record.get('Duration')}",
                    "Set Duration to 1 or higher",
                )
            )

    if "MaxConcurrent" in record:
        max_concurrent = to_int(record.get("MaxConcurrent"))
        if max_concurrent is None or max_concurrent < 1:
            findings.append(
                _out_of_range(
                    "tasks", idx, record, "MaxConcurrent",
                    f"MaxConcurrent must be ≥ 1, got: {record.get('MaxConcurrent')}",
                    "Set MaxConcurrent to 1 or higher",
                    severity="warning",
                )
            )


def check_out_of_range(state: ValidationState) -> List[ValidationFinding]:
    """Numeric bounds, the qualification vocabulary and required non-empty fields."""
    findings: List[ValidationFinding] = []
    for idx, record in enumerate(state.clients_raw):
        _client_ranges(idx, record, findings)
    for idx, record in enumerate(state.workers_raw):
        _worker_ranges(idx, record, findings)
    for idx, record in enumerate(state.tasks_raw):
        _task_ranges(idx, record, findings)
    return findings


def check_broken_json(state: ValidationState) -> List[ValidationFinding]:
    findings = []
    for idx, (record, result) in enumerate(zip(state.clients_raw, state.attribute_results)):
        if "AttributesJSON" in record and not result.ok:
            findings.append(
                ValidationFinding(
                    id=f"broken-json-{to_text(record.get('ClientID')) or idx}-{idx}",
                    row=idx,
                    column="AttributesJSON",
                    message="Invalid JSON in AttributesJSON",
                    severity="error",
                    validation_type="broken_json",
                    suggestion="Fix the JSON syntax",
                    entity="clients",
                )
            )
    return findings
