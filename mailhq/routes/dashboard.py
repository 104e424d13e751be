"""
Dashboard route for deliverability KPIs.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth import get_required_user
from ..config import get_settings
from ..database import get_db
from ..schemas.dashboard import DashboardData
from ..services.dashboard import (
    DeliverabilityProvider,
    compute_summary,
    get_deliverability_provider,
)

router = APIRouter(
    prefix="/api/dashboard",
    tags=["dashboard"],
    dependencies=[Depends(get_required_user)],
)


@router.get("", response_model=DashboardData)
def get_dashboard(
    db: Session = Depends(get_db),
    provider: DeliverabilityProvider = Depends(get_deliverability_provider),
):
    """Aggregated KPIs over recently sent campaigns, plus domain and compliance data."""
    return compute_summary(db, provider, window=get_settings().dashboard_campaign_window)
