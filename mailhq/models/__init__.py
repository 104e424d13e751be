from .user import User
from .subscriber import Subscriber
from .email_template import EmailTemplate
from .campaign import Campaign, CampaignStatus
from .campaign_subscriber import CampaignSubscriber
from .campaign_analytics import CampaignAnalytics
from .setting import Setting

__all__ = [
    "User",
    "Subscriber",
    "EmailTemplate",
    "Campaign",
    "CampaignStatus",
    "CampaignSubscriber",
    "CampaignAnalytics",
    "Setting",
]
