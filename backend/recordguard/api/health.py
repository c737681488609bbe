"""Health check endpoint."""

import time
from fastapi import APIRouter

from recordguard.customers import CUSTOMER_RULES
from recordguard.models.responses import HealthResponse

router = APIRouter()

_start_time = time.time()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Service health with the rule sets loaded at startup."""
    rule_sets = [CUSTOMER_RULES.name] + [r.name for r in CUSTOMER_RULES.nested_rule_sets()]
    return HealthResponse(
        status="healthy",
        uptime_seconds=round(time.time() - _start_time, 2),
        rule_sets=rule_sets,
    )
