"""
Campaign lifecycle: creation, the send transition and cascading delete.

Sending only records intent. It snapshots the eligible recipients into
campaign_subscribers rows and moves the campaign to ``sending``. Delivery and
the later ``sent``/``failed`` transition belong to an external system.
"""
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import insert, update
from sqlalchemy.orm import Session

from ..database import store_guard
from ..errors import ConflictError, NotFoundError, ValidationError, require
from ..logging_config import campaign_logger, timed
from ..models import (
    Campaign,
    CampaignAnalytics,
    CampaignStatus,
    CampaignSubscriber,
    EmailTemplate,
    Subscriber,
)
from ..models.campaign import LOCKED_STATUSES
from ..models._helpers import utcnow
from ..schemas.campaign import CampaignCreate, CampaignUpdate
from .filters import CampaignFilter

REQUIRED_FIELDS = ("name", "subject", "from_name", "from_email")


def select_recipients(subscribers: Iterable[Subscriber], target_lists: Optional[Iterable[str]]) -> List[Subscriber]:
    """
    Active subscribers eligible for a campaign.

    An empty target list means everyone active. Otherwise a subscriber
    qualifies when any of its lists is one of the targets.
    """
    targets = set(target_lists or [])
    return [
        s for s in subscribers
        if s.status == "active" and (not targets or s.in_any_list(targets))
    ]


def list_campaigns(db: Session, campaign_filter: CampaignFilter) -> List[Campaign]:
    with store_guard(db, "fetch campaigns"):
        return campaign_filter.run(db.query(Campaign))


def get_campaign(db: Session, campaign_id: str) -> Campaign:
    with store_guard(db, "fetch campaign"):
        campaign = db.get(Campaign, campaign_id)
    if campaign is None:
        raise NotFoundError("Campaign not found")
    return campaign


def get_campaign_detail(db: Session, campaign_id: str) -> dict:
    """Campaign with its analytics row and template joined in."""
    campaign = get_campaign(db, campaign_id)
    with store_guard(db, "fetch campaign"):
        analytics = db.query(CampaignAnalytics).filter(
            CampaignAnalytics.campaign_id == campaign.id
        ).first()
        template = db.get(EmailTemplate, campaign.template_id) if campaign.template_id else None

    detail = campaign.to_dict()
    detail["analytics"] = analytics.to_dict() if analytics else None
    detail["template"] = template.to_dict() if template else None
    return detail


def get_campaign_analytics(db: Session, campaign_id: str) -> CampaignAnalytics:
    with store_guard(db, "fetch campaign analytics"):
        analytics = db.query(CampaignAnalytics).filter(
            CampaignAnalytics.campaign_id == campaign_id
        ).first()
    if analytics is None:
        raise NotFoundError("Campaign analytics not found")
    return analytics


def _check_template(db: Session, template_id: Optional[str]) -> None:
    if template_id and db.get(EmailTemplate, template_id) is None:
        raise ValidationError(f"Template {template_id} does not exist")


def create_campaign(db: Session, data: CampaignCreate) -> Campaign:
    """Persist a draft campaign together with its zeroed analytics row."""
    for field in REQUIRED_FIELDS:
        require(getattr(data, field), field)

    with store_guard(db, "create campaign"):
        _check_template(db, data.template_id)

        campaign = Campaign(
            name=data.name,
            subject=data.subject,
            from_name=data.from_name,
            from_email=str(data.from_email),
            template_id=data.template_id,
            lists=list(data.lists),
            scheduled_at=data.scheduled_at,
            status=CampaignStatus.DRAFT.value,
        )
        db.add(campaign)
        db.flush()
        db.add(CampaignAnalytics(campaign_id=campaign.id))
        db.commit()
        db.refresh(campaign)

    campaign_logger.info("Campaign created", campaign_id=campaign.id, lists=campaign.lists)
    return campaign


def update_campaign(db: Session, campaign_id: str, data: CampaignUpdate) -> Campaign:
    campaign = get_campaign(db, campaign_id)

    update_data = data.model_dump(exclude_unset=True)
    for field in REQUIRED_FIELDS:
        if field in update_data:
            require(update_data[field], field)

    with store_guard(db, "update campaign"):
        _check_template(db, update_data.get("template_id"))
        for key, value in update_data.items():
            # null clears optional fields; lists are never null
            if key == "from_email":
                value = str(value)
            elif key == "lists":
                value = list(value or [])
            setattr(campaign, key, value)

        db.commit()
        db.refresh(campaign)

    return campaign


@timed(campaign_logger)
def send_campaign(db: Session, campaign_id: str) -> Tuple[Campaign, str]:
    """
    Queue a campaign for its current audience.

    The status flip is a conditional UPDATE so that of two concurrent sends
    only one claims the campaign; the loser gets ConflictError and writes
    nothing. Recipient rows, status and analytics commit together.
    """
    with store_guard(db, "send campaign"):
        campaign = db.get(Campaign, campaign_id)
        if campaign is None:
            raise NotFoundError("Campaign not found")
        if campaign.is_locked:
            raise ConflictError("Campaign already sent or sending")

        now = utcnow()
        claimed = db.execute(
            update(Campaign)
            .where(Campaign.id == campaign_id, Campaign.status.notin_(LOCKED_STATUSES))
            .values(status=CampaignStatus.SENDING.value, sent_at=now, updated_at=now)
            .execution_options(synchronize_session=False)
        ).rowcount
        if not claimed:
            db.rollback()
            raise ConflictError("Campaign already sent or sending")

        active = db.query(Subscriber).filter(Subscriber.status == "active").all()
        recipients = select_recipients(active, campaign.lists)

        if recipients:
            db.execute(
                insert(CampaignSubscriber),
                [
                    {"campaign_id": campaign_id, "subscriber_id": s.id, "status": "pending"}
                    for s in recipients
                ],
            )

        db.query(CampaignAnalytics).filter(
            CampaignAnalytics.campaign_id == campaign_id
        ).update(
            {"total_subscribers": len(recipients), "updated_at": now},
            synchronize_session=False,
        )

        db.commit()
        db.refresh(campaign)

    campaign_logger.info(
        "Campaign queued",
        campaign_id=campaign_id,
        recipients=len(recipients),
        lists=campaign.lists,
    )
    return campaign, f"Campaign queued for sending to {len(recipients)} subscribers"


def delete_campaign(db: Session, campaign_id: str) -> None:
    """Remove recipient rows, then analytics, then the campaign itself."""
    with store_guard(db, "delete campaign"):
        db.query(CampaignSubscriber).filter(
            CampaignSubscriber.campaign_id == campaign_id
        ).delete()
        db.query(CampaignAnalytics).filter(
            CampaignAnalytics.campaign_id == campaign_id
        ).delete()
        deleted = db.query(Campaign).filter(
            Campaign.id == campaign_id
        ).delete()

        if not deleted:
            db.rollback()
            raise NotFoundError("Campaign not found")

        db.commit()

    campaign_logger.info("Campaign deleted", campaign_id=campaign_id)
