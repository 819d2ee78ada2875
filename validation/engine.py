import logging
import time
from dataclasses import replace
from typing import Any, List, Optional, Sequence
from core.check_manager import CheckManager
from core.entities import BusinessRule, active_rules
from core.findings import ValidationFinding, ValidationReport
from core.state import ValidationState
from utils.collaborators import CorrectionAdvisor, call_with_fallback
from utils.constants import ADVISOR_BUDGET_SECONDS
from utils.normalizer import as_record, ensure_records, normalize_records
from utils.parsers import parse_attributes, parse_phases, parse_slots
from validation.checks import *

logger = logging.getLogger(__name__)


def build_validation_state(
    clients: Sequence[Any],
    workers: Sequence[Any],
    tasks: Sequence[Any],
    rules: Optional[Sequence[BusinessRule]] = None,
) -> ValidationState:
    """Normalize the three collections and keep the raw records and parse results beside them."""
    for kind, collection in (("clients", clients), ("workers", workers), ("tasks", tasks)):
        ensure_records(kind, collection)

    clients_raw = [as_record("clients", c) for c in clients]
    workers_raw = [as_record("workers", w) for w in workers]
    tasks_raw = [as_record("tasks", t) for t in tasks]

    return ValidationState(
        clients_raw=clients_raw,
        workers_raw=workers_raw,
        tasks_raw=tasks_raw,
        clients=normalize_records("clients", clients_raw),
        workers=normalize_records("workers", workers_raw),
        tasks=normalize_records("tasks", tasks_raw),
        slot_results=[parse_slots(w.get("AvailableSlots")) for w in workers_raw],
        phase_results=[parse_phases(t.get("PreferredPhases")) for t in tasks_raw],
        attribute_results=[parse_attributes(c.get("AttributesJSON")) for c in clients_raw],
        rules=active_rules(rules),
        has_rule_context=rules is not None,
    )


def _advise(
    findings: List[ValidationFinding], advisor: CorrectionAdvisor, budget: float
) -> List[ValidationFinding]:
    """Attach advisor suggestions, all calls sharing one time budget for the run."""
    deadline = time.monotonic() + budget
    advised = []
    for idx, finding in enumerate(findings):
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            logger.warning(
                f"⚠️ Correction advisor budget of {budget}s used up, "
                f"{len(findings) - idx} finding(s) keep their default suggestion"
            )
            advised.extend(findings[idx:])
            break
        suggestion = call_with_fallback(
            advisor.suggest_correction,
            finding,
            timeout=remaining,
            fallback=None,
            label="Correction advisor",
        )
        if isinstance(suggestion, str) and suggestion.strip():
            finding = replace(finding, suggestion=suggestion.strip())
        advised.append(finding)
    return advised


def validate(
    clients: Sequence[Any],
    workers: Sequence[Any],
    tasks: Sequence[Any],
    rules: Optional[Sequence[BusinessRule]] = None,
    advisor: Optional[CorrectionAdvisor] = None,
    advisor_budget: float = ADVISOR_BUDGET_SECONDS,
) -> ValidationReport:
    """
    Runs every structural and cross-referential check over the three collections.

    Per-record defects become findings; the only exception raised is
    InvalidInputShapeError, when a collection is not a list of records. Checks that
    need rule context pass vacuously when `rules` is None. The optional advisor gets
    `advisor_budget` seconds in total across all findings.
    """
    state = build_validation_state(clients, workers, tasks, rules)
    logger.info(
        f"🔎 Validating {len(state.clients)} clients, {len(state.workers)} workers, "
        f"{len(state.tasks)} tasks, {len(state.rules)} active rules..."
    )

    cm = CheckManager(state)
    # Single-collection checks
    cm.add_check("missing_required_columns", check_required_columns)
    cm.add_check("duplicate_ids", check_duplicate_ids)
    cm.add_check("malformed_lists", check_malformed_lists)
    cm.add_check("out_of_range_values", check_out_of_range)
    cm.add_check("broken_json", check_broken_json)

    # Cross-referential checks
    cm.add_check("unknown_references", check_unknown_references)
    cm.add_check("circular_corun_groups", check_circular_corun)
    cm.add_check("conflicting_rules", check_conflicting_rules)
    cm.add_check("overloaded_workers", check_overloaded_workers)
    cm.add_check("phase_slot_saturation", check_phase_saturation)
    cm.add_check("skill_coverage", check_skill_coverage)
    cm.add_check("max_concurrency", check_max_concurrency)

    findings: List[ValidationFinding] = []
    passed, failed = [], []
    for outcome in cm.run_all():
        findings.extend(outcome.findings)
        (passed if outcome.passed else failed).append(outcome.name)
        if not outcome.passed:
            logger.info(f"  ✗ {outcome.name}: {len(outcome.findings)} finding(s)")

    if advisor is not None and findings:
        findings = _advise(findings, advisor, advisor_budget)

    report = ValidationReport(errors=findings, passed_validations=passed, failed_validations=failed)
    logger.info(
        f"✅ Validation finished: {report.total_errors} errors, "
        f"{report.total_warnings} warnings, {report.total_info} info"
    )
    return report
