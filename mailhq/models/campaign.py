"""
Campaign model for email marketing sends.
"""
from enum import Enum

from sqlalchemy import Column, String, DateTime, JSON
from ..database import Base
from ._helpers import utcnow, new_id, isoformat


class CampaignStatus(str, Enum):
    DRAFT = "draft"
    SCHEDULED = "scheduled"
    SENDING = "sending"
    SENT = "sent"
    FAILED = "failed"


# A campaign in one of these states can not be sent again
LOCKED_STATUSES = (CampaignStatus.SENDING.value, CampaignStatus.SENT.value)


class Campaign(Base):
    __tablename__ = "campaigns"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(200), nullable=False)
    subject = Column(String(500), nullable=False)
    status = Column(String(20), default=CampaignStatus.DRAFT.value, nullable=False, index=True)
    from_name = Column(String(200), nullable=False)
    from_email = Column(String(255), nullable=False)
    template_id = Column(String(36), nullable=True)  # weak reference, not re-validated after create
    lists = Column(JSON, default=list, nullable=False)
    scheduled_at = Column(DateTime, nullable=True)
    sent_at = Column(DateTime, nullable=True, index=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    @property
    def is_locked(self) -> bool:
        return self.status in LOCKED_STATUSES

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "subject": self.subject,
            "status": self.status,
            "fromName": self.from_name,
            "fromEmail": self.from_email,
            "templateId": self.template_id,
            "lists": list(self.lists or []),
            "scheduledAt": isoformat(self.scheduled_at),
            "sentAt": isoformat(self.sent_at),
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
