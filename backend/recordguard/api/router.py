"""Main API router — combines all endpoint routers."""

from fastapi import APIRouter

from recordguard.api.customers import router as customers_router
from recordguard.api.health import router as health_router

api_router = APIRouter()

# Health check
api_router.include_router(health_router, tags=["Health"])

# Record validation
api_router.include_router(customers_router, tags=["Validation"])
