"""
Per-campaign delivery counters, one row per campaign.
"""
from sqlalchemy import Column, Integer, String, DateTime
from ..database import Base
from ._helpers import utcnow, isoformat

COUNTER_FIELDS = ("sent", "delivered", "bounced", "complained", "unsubscribed")


class CampaignAnalytics(Base):
    __tablename__ = "campaign_analytics"

    id = Column(Integer, primary_key=True, index=True)
    campaign_id = Column(String(36), unique=True, nullable=False, index=True)
    sent = Column(Integer, default=0, nullable=False)
    delivered = Column(Integer, default=0, nullable=False)
    bounced = Column(Integer, default=0, nullable=False)
    complained = Column(Integer, default=0, nullable=False)
    unsubscribed = Column(Integer, default=0, nullable=False)
    total_subscribers = Column(Integer, default=0, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "campaignId": self.campaign_id,
            "sent": self.sent,
            "delivered": self.delivered,
            "bounced": self.bounced,
            "complained": self.complained,
            "unsubscribed": self.unsubscribed,
            "totalSubscribers": self.total_subscribers,
            "updatedAt": isoformat(self.updated_at),
        }
