from fastapi import APIRouter, Depends

from plotdesk.modules.auth.dependencies import require_owner
from plotdesk.schemas import AuthUser, DashboardSummary
from plotdesk.services import DashboardService
from plotdesk.api.deps import get_dashboard_service

router = APIRouter()


@router.get("", response_model=DashboardSummary)
async def get_dashboard(
    current_user: AuthUser = Depends(require_owner),
    dashboard: DashboardService = Depends(get_dashboard_service)
):
    """Record counts for the owner's overview"""
    return await dashboard.get_summary()
