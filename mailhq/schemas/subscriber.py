from pydantic import EmailStr
from typing import List, Literal, Optional

from .base import CamelModel

SubscriberStatus = Literal["active", "unsubscribed", "bounced", "complained"]


class SubscriberCreate(CamelModel):
    email: EmailStr
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    status: SubscriberStatus = "active"
    lists: List[str] = []


class SubscriberUpdate(CamelModel):
    email: Optional[EmailStr] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    status: Optional[SubscriberStatus] = None
    lists: Optional[List[str]] = None
