"""
Dashboard router.

Endpoints:
  GET /api/dashboard/stats — Overview counters and subscription distribution
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from admin_dashboard.config import AdminAccount
from admin_dashboard.database import get_db
from admin_dashboard.dependencies import get_current_admin
from admin_dashboard.schemas.dashboard import DashboardStatsResponse
from admin_dashboard.services import dashboard_service

router = APIRouter()


@router.get("/stats", response_model=DashboardStatsResponse, summary="Dashboard statistics")
async def get_dashboard_stats(
    admin: AdminAccount = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    """Revenue figures are in MWK; USD plans are converted at USD_TO_MWK_RATE."""
    return await dashboard_service.get_dashboard_stats(db)
