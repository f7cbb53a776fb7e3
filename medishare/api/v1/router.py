# medishare/api/v1/router.py
from fastapi import APIRouter

from medishare.config.settings import settings
from medishare.modules.clinics.router import router as clinics_router
from medishare.modules.inventory.router import router as inventory_router
from medishare.modules.surplus.router import router as surplus_router
from medishare.modules.medicine_requests.router import router as requests_router
from medishare.modules.matching.router import router as matching_router
from medishare.modules.transfers.router import router as transfers_router

# Main v1 router
api_router = APIRouter()

api_router.include_router(
    clinics_router,
    prefix="/clinics",
    tags=["Clinics"]
)

api_router.include_router(
    inventory_router,
    prefix="/inventory",
    tags=["Inventory Management"]
)

api_router.include_router(
    surplus_router,
    prefix="/surplus",
    tags=["Surplus Postings"]
)

api_router.include_router(
    requests_router,
    prefix="/requests",
    tags=["Medicine Requests"]
)

api_router.include_router(
    matching_router,
    prefix="/matching",
    tags=["Matching"]
)

api_router.include_router(
    transfers_router,
    prefix="/transfers",
    tags=["Transfers"]
)

# ==================== API ROOT ====================

@api_router.get("/")
async def api_root():
    """Root endpoint of the v1 API"""
    return {
        "message": f"{settings.app_name} v1",
        "version": settings.version,
        "status": "active",
        "docs": "/docs",
        "available_endpoints": {
            "clinics": "/api/v1/clinics",
            "inventory": "/api/v1/inventory",
            "surplus": "/api/v1/surplus",
            "requests": "/api/v1/requests",
            "matching": "/api/v1/matching/matches",
            "transfers": "/api/v1/transfers"
        }
    }
