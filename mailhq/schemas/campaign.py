from datetime import datetime
from pydantic import EmailStr
from typing import List, Optional

from .base import CamelModel


class CampaignCreate(CamelModel):
    name: str
    subject: str
    from_name: str
    from_email: EmailStr
    template_id: Optional[str] = None
    lists: List[str] = []
    scheduled_at: Optional[datetime] = None


class CampaignUpdate(CamelModel):
    """Partial update. Status is driven by the send workflow only."""
    name: Optional[str] = None
    subject: Optional[str] = None
    from_name: Optional[str] = None
    from_email: Optional[EmailStr] = None
    template_id: Optional[str] = None
    lists: Optional[List[str]] = None
    scheduled_at: Optional[datetime] = None
