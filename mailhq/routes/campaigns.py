"""
Campaign routes: CRUD, the send transition and per-campaign analytics.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from ..auth import get_required_user
from ..database import get_db
from ..schemas.campaign import CampaignCreate, CampaignUpdate
from ..services import campaigns as campaign_service
from ..services.filters import CampaignFilter

router = APIRouter(
    prefix="/api/campaigns",
    tags=["campaigns"],
    dependencies=[Depends(get_required_user)],
)


@router.get("", response_model=List[dict])
def get_campaigns(status: Optional[str] = None, db: Session = Depends(get_db)):
    """Get all campaigns, newest first, with optional status filter."""
    campaigns = campaign_service.list_campaigns(db, CampaignFilter(status=status))
    return [c.to_dict() for c in campaigns]


@router.get("/{campaign_id}", response_model=dict)
def get_campaign(campaign_id: str, db: Session = Depends(get_db)):
    """Get a campaign with its analytics and template."""
    return campaign_service.get_campaign_detail(db, campaign_id)


@router.post("", response_model=dict, status_code=201)
def create_campaign(campaign_data: CampaignCreate, db: Session = Depends(get_db)):
    """Create a draft campaign and its analytics row."""
    return campaign_service.create_campaign(db, campaign_data).to_dict()


@router.patch("/{campaign_id}", response_model=dict)
def update_campaign(
    campaign_id: str,
    campaign_update: CampaignUpdate,
    db: Session = Depends(get_db),
):
    """Partially update a campaign."""
    return campaign_service.update_campaign(db, campaign_id, campaign_update).to_dict()


@router.delete("/{campaign_id}")
def delete_campaign(campaign_id: str, db: Session = Depends(get_db)):
    """Delete a campaign with its recipient rows and analytics."""
    campaign_service.delete_campaign(db, campaign_id)
    return {"message": "Campaign deleted successfully"}


@router.post("/{campaign_id}/send")
def send_campaign(campaign_id: str, db: Session = Depends(get_db)):
    """Queue a draft campaign for its target lists."""
    campaign, message = campaign_service.send_campaign(db, campaign_id)
    return {**campaign.to_dict(), "message": message}


@router.get("/{campaign_id}/analytics", response_model=dict)
def get_campaign_analytics(campaign_id: str, db: Session = Depends(get_db)):
    """Get the analytics counters for a campaign."""
    return campaign_service.get_campaign_analytics(db, campaign_id).to_dict()
