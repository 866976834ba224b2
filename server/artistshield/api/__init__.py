from fastapi import APIRouter

from artistshield.api import saved_ipis, search, split_sheet

api_router = APIRouter()


@api_router.get("/health", tags=["health"])
def api_health_check():
    """Health check endpoint for monitoring and load balancers."""
    return {"status": "ok", "service": "api"}


api_router.include_router(search.router, prefix="/search", tags=["search"])
api_router.include_router(saved_ipis.router, prefix="/saved-ipis", tags=["saved-ipis"])
api_router.include_router(split_sheet.router, prefix="/split-sheet", tags=["split-sheet"])
