from typing import List, Literal

from .base import CamelModel

ChangeType = Literal["increase", "decrease", "neutral"]
ComplianceStatus = Literal["pass", "warn", "fail"]


class KpiData(CamelModel):
    title: str
    value: str
    change: str
    change_type: ChangeType
    period: str


class DomainPerformance(CamelModel):
    name: str
    delivery_rate: float
    complaint_rate: float
    spam_rate: float


class ComplianceItem(CamelModel):
    id: str
    name: str
    status: ComplianceStatus
    details: str
    fix_link: str = "#"


class DashboardData(CamelModel):
    kpis: List[KpiData]
    gmail_spam_rate: float
    domain_performance: List[DomainPerformance]
    compliance_checklist: List[ComplianceItem]
