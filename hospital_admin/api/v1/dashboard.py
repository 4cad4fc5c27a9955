from fastapi import APIRouter, Depends

from ...api.deps import get_repository
from ...models.dashboard import DashboardStats
from ...services.repository import HospitalRepository

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])

@router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(
    repository: HospitalRepository = Depends(get_repository)
):
    """Summary figures for the dashboard."""
    return repository.get_dashboard_stats()
