import logging
from fastapi import APIRouter, HTTPException
from docs.validation.run import validation_run_description
from exceptions.custom_errors import *
from schemas.validation.run import ValidationRunRequest
from validation.engine import validate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/validation", tags=["Validation"])


@router.post(
    "/run",
    response_model=dict,
    description=validation_run_description,
    summary="Run Validation",
)
def run_validation(request: ValidationRunRequest):
    try:
        report = validate(
            request.clients,
            request.workers,
            request.tasks,
            rules=request.business_rules(),
        )
        return report.to_dict()

    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))
    except Exception as e:
        logger.exception("Validation run failed")
        raise HTTPException(status_code=500, detail=str(e))
