from typing import Dict, List
from core.findings import SHEET_LEVEL_ROW, ValidationFinding
from core.state import ValidationState


def check_overloaded_workers(state: ValidationState) -> List[ValidationFinding]:
    """Warn when a worker has fewer available slots than its own MaxLoadPerPhase."""
    findings = []
    for idx, worker in enumerate(state.workers):
        if worker.max_load_per_phase is None:
            continue
        slots = len(worker.available_slots)
        if slots < worker.max_load_per_phase:
            findings.append(
                ValidationFinding(
                    id=f"overloaded-{worker.worker_id or idx}-{idx}",
                    row=idx,
                    column="MaxLoadPerPhase",
                    message=(
                        f"Worker has fewer available slots ({slots}) "
                        f"than MaxLoadPerPhase ({worker.max_load_per_phase})"
                    ),
                    severity="warning",
                    validation_type="overloaded_worker",
                    suggestion="Reduce MaxLoadPerPhase or increase AvailableSlots",
                    entity="workers",
                )
            )
    return findings


def phase_capacity(state: ValidationState) -> Dict[int, int]:
    """Sum of MaxLoadPerPhase over the workers available in each phase."""
    capacity: Dict[int, int] = {}
    for worker in state.workers:
        for phase in set(worker.available_slots):
            capacity[phase] = capacity.get(phase, 0) + (worker.max_load_per_phase or 0)
    return capacity


def phase_demand(state: ValidationState) -> Dict[int, int]:
    """Sum of task Duration over the tasks preferring each phase."""
    demand: Dict[int, int] = {}
    for task in state.tasks:
        for phase in set(task.preferred_phases):
            demand[phase] = demand.get(phase, 0) + (task.duration or 0)
    return demand


def check_phase_saturation(state: ValidationState) -> List[ValidationFinding]:
    """Demand above capacity in any preferred phase is an error."""
    findings = []
    capacity = phase_capacity(state)
    demand = phase_demand(state)
    for phase in sorted(demand):
        needed = demand[phase]
        available = capacity.get(phase, 0)
        if needed > available:
            findings.append(
                ValidationFinding(
                    id=f"phase-saturation-{phase}",
                    row=SHEET_LEVEL_ROW,
                    column="PreferredPhases",
                    message=f"Phase {phase} is oversaturated: demand {needed} > capacity {available}",
                    severity="error",
                    validation_type="phase_saturation",
                    suggestion="Add more workers to this phase or reduce task durations",
                    entity="tasks",
                )
            )
    return findings
