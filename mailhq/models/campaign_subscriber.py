"""
Join rows recording which subscribers a campaign was queued for.
"""
from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint
from ..database import Base
from ._helpers import utcnow


class CampaignSubscriber(Base):
    __tablename__ = "campaign_subscribers"
    __table_args__ = (
        UniqueConstraint("campaign_id", "subscriber_id", name="uq_campaign_subscriber"),
    )

    id = Column(Integer, primary_key=True, index=True)
    campaign_id = Column(String(36), nullable=False, index=True)
    subscriber_id = Column(String(36), nullable=False, index=True)
    status = Column(String(20), default="pending", nullable=False)  # pending, sent, delivered, bounced, failed
    created_at = Column(DateTime, default=utcnow)
