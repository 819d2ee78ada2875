import logging
from fastapi import APIRouter, HTTPException
from docs.allocation.run import allocation_run_description
from exceptions.custom_errors import *
from scheduler.builder import allocate
from scheduler.classifier import classifier_from_env
from schemas.allocation.run import AllocationRunRequest
from validation.engine import validate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/allocation", tags=["Allocation"])


@router.post(
    "/run",
    response_model=dict,
    description=allocation_run_description,
    summary="Run Allocation",
)
def run_allocation(request: AllocationRunRequest):
    try:
        rules = request.business_rules()

        # Optional gate: refuse to allocate over unresolved error findings
        if request.gateOnErrors:
            report = validate(request.clients, request.workers, request.tasks, rules=rules)
            if not report.validations_passed:
                raise AllocationBlockedError(
                    f"Allocation blocked: {report.total_errors} validation error(s) remain "
                    f"({', '.join(report.failed_validations)})"
                )

        summary = allocate(
            request.clients,
            request.workers,
            request.tasks,
            rules=rules,
            priorities=request.priority_list(),
            classifier=classifier_from_env() if request.useClassifier else None,
        )
        return summary.to_dict()

    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))
    except Exception as e:
        logger.exception("Allocation run failed")
        raise HTTPException(status_code=500, detail=str(e))
