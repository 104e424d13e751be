from .subscriber import SubscriberCreate, SubscriberUpdate
from .template import TemplateCreate, TemplateUpdate
from .campaign import CampaignCreate, CampaignUpdate
from .settings import SettingValue
from .dashboard import DashboardData

__all__ = [
    "SubscriberCreate", "SubscriberUpdate",
    "TemplateCreate", "TemplateUpdate",
    "CampaignCreate", "CampaignUpdate",
    "SettingValue",
    "DashboardData",
]
