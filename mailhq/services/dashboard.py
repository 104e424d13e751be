"""
Dashboard KPI aggregation.

KPIs are folded from the analytics rows of the most recently sent campaigns.
Everything the system has no data source for (trend deltas, per-provider
breakdowns, the compliance audit) comes from a DeliverabilityProvider so a
real implementation can replace the static one without touching the fold.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..logging_config import dashboard_logger
from ..models import Campaign, CampaignAnalytics, CampaignStatus
from ..models.campaign_analytics import COUNTER_FIELDS
from ..schemas.dashboard import ComplianceItem, DashboardData, DomainPerformance, KpiData

DELIVERY_RATE = "Delivery Rate"
BOUNCE_RATE = "Hard Bounce Rate"
COMPLAINT_RATE = "Complaint Rate"
UNSUBSCRIBE_RATE = "Unsubscribe Rate"


def percent(part: int, whole: int, places: int) -> str:
    """
    part/whole as a percentage string with a fixed number of decimals.

    The float is rounded from its exact binary value with ties going up, so
    1 of 16 reads "6.3" rather than the half-to-even "6.2".
    """
    quantum = Decimal(1).scaleb(-places)
    if not whole:
        return str(Decimal(0).quantize(quantum))
    return str(Decimal(part / whole * 100).quantize(quantum, rounding=ROUND_HALF_UP))


@dataclass
class AnalyticsTotals:
    sent: int = 0
    delivered: int = 0
    bounced: int = 0
    complained: int = 0
    unsubscribed: int = 0

    def add(self, analytics: CampaignAnalytics) -> None:
        for field in COUNTER_FIELDS:
            setattr(self, field, getattr(self, field) + (getattr(analytics, field) or 0))

    @property
    def delivery_rate(self) -> str:
        return percent(self.delivered, self.sent, 1)

    @property
    def bounce_rate(self) -> str:
        return percent(self.bounced, self.sent, 2)

    @property
    def complaint_rate(self) -> str:
        return percent(self.complained, self.delivered, 2)

    @property
    def unsubscribe_rate(self) -> str:
        return percent(self.unsubscribed, self.delivered, 2)


class DeliverabilityProvider(ABC):
    """Supplies dashboard data that is not derived from campaign analytics."""

    @abstractmethod
    def kpi_trend(self, title: str) -> Tuple[str, str, str]:
        """(change, change_type, period) for a KPI tile."""

    @abstractmethod
    def domain_performance(self, delivery_rate: float, complaint_rate: float) -> List[Dict]:
        """Per mailbox provider rows; computed rates are 0 when unknown."""

    @abstractmethod
    def compliance_checklist(self) -> List[Dict]:
        """Sending-domain authentication and hygiene checks."""

    @abstractmethod
    def default_spam_rate(self) -> float:
        """Spam rate shown when no complaints have been recorded."""

    @abstractmethod
    def fallback_rates(self) -> Dict[str, str]:
        """KPI values, keyed by title, shown when the store is unavailable."""


class StaticDeliverabilityProvider(DeliverabilityProvider):
    """Placeholder figures until delivery events and DNS checks are wired in."""

    PERIOD = "vs last 7d"

    TRENDS = {
        DELIVERY_RATE: ("+0.1%", "increase"),
        BOUNCE_RATE: ("-0.05%", "decrease"),
        COMPLAINT_RATE: ("+0.02%", "increase"),
        UNSUBSCRIBE_RATE: ("0.00%", "neutral"),
    }

    GMAIL_DEFAULTS = {"delivery_rate": 99.1, "complaint_rate": 0.12, "spam_rate": 0.12}

    OTHER_DOMAINS = [
        {"name": "Yahoo", "delivery_rate": 99.5, "complaint_rate": 0.09, "spam_rate": 0.08},
        {"name": "Outlook", "delivery_rate": 98.8, "complaint_rate": 0.15, "spam_rate": 0.18},
        {"name": "Other", "delivery_rate": 97.5, "complaint_rate": 0.20, "spam_rate": 0.25},
    ]

    CHECKLIST = [
        {"id": "spf", "name": "SPF Alignment", "status": "pass",
         "details": "SPF record is valid and aligned."},
        {"id": "dkim", "name": "DKIM Alignment", "status": "pass",
         "details": "DKIM signatures are valid and aligned."},
        {"id": "dmarc", "name": "DMARC Policy", "status": "warn",
         "details": "p=none policy detected. Consider tightening to quarantine/reject."},
        {"id": "list_unsub", "name": "One-Click Unsubscribe", "status": "pass",
         "details": "List-Unsubscribe headers are correctly implemented."},
        {"id": "tls", "name": "TLS Encryption", "status": "pass",
         "details": "100% of mail sent over TLS."},
        {"id": "fbl", "name": "Feedback Loops", "status": "fail",
         "details": "Yahoo CFL not configured. Complaints may be missed."},
    ]

    FALLBACK_RATES = {
        DELIVERY_RATE: "99.2",
        BOUNCE_RATE: "0.45",
        COMPLAINT_RATE: "0.08",
        UNSUBSCRIBE_RATE: "0.15",
    }

    def kpi_trend(self, title):
        change, change_type = self.TRENDS.get(title, ("0.00%", "neutral"))
        return change, change_type, self.PERIOD

    def domain_performance(self, delivery_rate, complaint_rate):
        gmail = {
            "name": "Gmail",
            "delivery_rate": delivery_rate or self.GMAIL_DEFAULTS["delivery_rate"],
            "complaint_rate": complaint_rate or self.GMAIL_DEFAULTS["complaint_rate"],
            "spam_rate": complaint_rate or self.GMAIL_DEFAULTS["spam_rate"],
        }
        return [gmail] + [dict(row) for row in self.OTHER_DOMAINS]

    def compliance_checklist(self):
        return [dict(item, fix_link="#") for item in self.CHECKLIST]

    def default_spam_rate(self):
        return self.GMAIL_DEFAULTS["spam_rate"]

    def fallback_rates(self):
        return dict(self.FALLBACK_RATES)


def get_deliverability_provider() -> DeliverabilityProvider:
    """FastAPI dependency; override in tests or when a real provider exists."""
    return StaticDeliverabilityProvider()


def fold_recent_analytics(db: Session, window: int = 10) -> AnalyticsTotals:
    """Sum the counters of the ``window`` most recently sent campaigns."""
    recent_ids = [
        row.id for row in db.query(Campaign.id)
        .filter(Campaign.status == CampaignStatus.SENT.value)
        .order_by(Campaign.sent_at.desc())
        .limit(window)
        .all()
    ]

    totals = AnalyticsTotals()
    if not recent_ids:
        return totals

    rows = db.query(CampaignAnalytics).filter(CampaignAnalytics.campaign_id.in_(recent_ids)).all()
    for analytics in rows:
        totals.add(analytics)
    return totals


def _kpi(provider: DeliverabilityProvider, title: str, rate: str) -> KpiData:
    change, change_type, period = provider.kpi_trend(title)
    return KpiData(title=title, value=f"{rate}%", change=change, change_type=change_type, period=period)


def _assemble(provider: DeliverabilityProvider, rates: Dict[str, str], delivery: float, complaint: float) -> DashboardData:
    return DashboardData(
        kpis=[
            _kpi(provider, title, rates[title])
            for title in (DELIVERY_RATE, BOUNCE_RATE, COMPLAINT_RATE, UNSUBSCRIBE_RATE)
        ],
        gmail_spam_rate=complaint or provider.default_spam_rate(),
        domain_performance=[DomainPerformance(**row) for row in provider.domain_performance(delivery, complaint)],
        compliance_checklist=[ComplianceItem(**item) for item in provider.compliance_checklist()],
    )


def build_summary(totals: AnalyticsTotals, provider: DeliverabilityProvider) -> DashboardData:
    rates = {
        DELIVERY_RATE: totals.delivery_rate,
        BOUNCE_RATE: totals.bounce_rate,
        COMPLAINT_RATE: totals.complaint_rate,
        UNSUBSCRIBE_RATE: totals.unsubscribe_rate,
    }
    return _assemble(provider, rates, float(totals.delivery_rate), float(totals.complaint_rate))


def fallback_summary(provider: DeliverabilityProvider) -> DashboardData:
    """Same shape as a real summary, filled with placeholder values."""
    return _assemble(provider, provider.fallback_rates(), 0.0, 0.0)


def compute_summary(db: Session, provider: DeliverabilityProvider, window: int = 10) -> DashboardData:
    """Dashboard payload. Never raises on store failures."""
    try:
        totals = fold_recent_analytics(db, window)
    except SQLAlchemyError as e:
        dashboard_logger.error("Dashboard aggregation failed, serving fallback", error=e)
        return fallback_summary(provider)

    dashboard_logger.debug(
        "Dashboard aggregated",
        sent=totals.sent,
        delivered=totals.delivered,
        window=window,
    )
    return build_summary(totals, provider)
