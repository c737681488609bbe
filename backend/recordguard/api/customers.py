"""Customer validation endpoint."""

from typing import Any

import structlog
from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse

from recordguard.customers import CUSTOMER_RULES
from recordguard.models.responses import ValidationResponse
from recordguard.validators import validation_engine

logger = structlog.get_logger()

router = APIRouter()


@router.post(
    "/customers/validate",
    response_model=ValidationResponse,
    responses={422: {"model": ValidationResponse, "description": "Record has violations"}},
)
async def validate_customer(record: dict[str, Any] = Body(...)):
    """Validate a customer record and return every violation found.

    Returns 200 when the record is valid, 422 with the violations otherwise.
    """
    result = validation_engine.validate(record, CUSTOMER_RULES)
    response = ValidationResponse.from_result(result)

    if not result.valid:
        logger.info(
            "customer_rejected",
            total_violations=len(result),
            paths=result.paths(),
        )
        return JSONResponse(status_code=422, content=response.model_dump())

    return response
