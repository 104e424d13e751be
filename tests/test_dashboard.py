"""
Tests for dashboard KPI aggregation.
"""
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from mailhq.main import app
from mailhq.services.dashboard import (
    AnalyticsTotals,
    StaticDeliverabilityProvider,
    compute_summary,
    get_deliverability_provider,
)


def _kpis(data):
    return {kpi["title"]: kpi for kpi in data["kpis"]}


class TestDashboardEndpoint:
    """Test the dashboard endpoint."""

    def test_rates_over_sent_campaigns(self, client, auth_headers, make_sent_campaign):
        """Test KPI rates over sent campaigns."""
        now = datetime.now(timezone.utc)
        make_sent_campaign(name="A", sent_at=now, sent=100, delivered=99, bounced=1, complained=0, unsubscribed=0)
        make_sent_campaign(name="B", sent_at=now, sent=50, delivered=49, bounced=1, complained=1, unsubscribed=1)

        response = client.get("/api/dashboard", headers=auth_headers)
        assert response.status_code == 200
        data = response.json()
        kpis = _kpis(data)
        assert kpis["Delivery Rate"]["value"] == "98.7%"
        assert kpis["Hard Bounce Rate"]["value"] == "1.33%"
        assert kpis["Complaint Rate"]["value"] == "0.68%"
        assert kpis["Unsubscribe Rate"]["value"] == "0.68%"
        assert kpis["Delivery Rate"]["changeType"] == "increase"
        assert kpis["Delivery Rate"]["period"] == "vs last 7d"
        assert data["gmailSpamRate"] == 0.68
        assert data["domainPerformance"][0] == {
            "name": "Gmail", "deliveryRate": 98.7, "complaintRate": 0.68, "spamRate": 0.68,
        }

    def test_empty_store(self, client, auth_headers):
        """Test KPIs with no sent campaigns."""
        data = client.get("/api/dashboard", headers=auth_headers).json()
        kpis = _kpis(data)
        assert kpis["Delivery Rate"]["value"] == "0.0%"
        assert kpis["Hard Bounce Rate"]["value"] == "0.00%"
        assert kpis["Complaint Rate"]["value"] == "0.00%"
        assert kpis["Unsubscribe Rate"]["value"] == "0.00%"
        assert data["gmailSpamRate"] == 0.12
        assert data["domainPerformance"][0]["deliveryRate"] == 99.1
        assert [d["name"] for d in data["domainPerformance"]] == ["Gmail", "Yahoo", "Outlook", "Other"]

    def test_compliance_checklist(self, client, auth_headers):
        """Test the compliance checklist shape."""
        data = client.get("/api/dashboard", headers=auth_headers).json()
        checklist = data["complianceChecklist"]
        assert [c["id"] for c in checklist] == ["spf", "dkim", "dmarc", "list_unsub", "tls", "fbl"]
        assert {c["status"] for c in checklist} <= {"pass", "warn", "fail"}
        assert all(c["fixLink"] == "#" for c in checklist)

    def test_only_sent_campaigns_count(self, client, auth_headers, make_sent_campaign, db):
        """Test campaigns still sending are ignored."""
        campaign = make_sent_campaign(sent_at=datetime.now(timezone.utc), sent=10, delivered=5)
        campaign.status = "sending"
        db.commit()

        data = client.get("/api/dashboard", headers=auth_headers).json()
        assert _kpis(data)["Delivery Rate"]["value"] == "0.0%"

    def test_window_is_ten_most_recent(self, client, auth_headers, make_sent_campaign):
        """Test only the ten most recent sends are folded."""
        start = datetime(2026, 1, 1, tzinfo=timezone.utc)
        # Oldest campaign has a perfect record and falls outside the window
        make_sent_campaign(name="oldest", sent_at=start, sent=100, delivered=100)
        for day in range(1, 11):
            make_sent_campaign(name=f"c{day}", sent_at=start + timedelta(days=day), sent=10, delivered=5)

        data = client.get("/api/dashboard", headers=auth_headers).json()
        assert _kpis(data)["Delivery Rate"]["value"] == "50.0%"

    def test_provider_can_be_substituted(self, client, auth_headers):
        """Test a different deliverability provider can be injected."""
        class FlatProvider(StaticDeliverabilityProvider):
            def kpi_trend(self, title):
                return "n/a", "neutral", "vs last 30d"

        app.dependency_overrides[get_deliverability_provider] = FlatProvider
        data = client.get("/api/dashboard", headers=auth_headers).json()
        for kpi in data["kpis"]:
            assert kpi["change"] == "n/a"
            assert kpi["period"] == "vs last 30d"


class TestComputeSummary:
    """Test summary computation."""

    def test_store_failure_serves_fallback(self):
        """Test a store failure serves placeholder KPIs."""
        broken = MagicMock()
        broken.query.side_effect = OperationalError("SELECT", {}, Exception("database is locked"))

        summary = compute_summary(broken, StaticDeliverabilityProvider())

        values = {kpi.title: kpi.value for kpi in summary.kpis}
        assert values == {
            "Delivery Rate": "99.2%",
            "Hard Bounce Rate": "0.45%",
            "Complaint Rate": "0.08%",
            "Unsubscribe Rate": "0.15%",
        }
        assert summary.gmail_spam_rate == 0.12
        assert len(summary.domain_performance) == 4
        assert len(summary.compliance_checklist) == 6

    def test_totals_rates(self):
        """Test rate formatting."""
        totals = AnalyticsTotals(sent=150, delivered=148, bounced=2, complained=1, unsubscribed=1)
        assert totals.delivery_rate == "98.7"
        assert totals.bounce_rate == "1.33"
        assert totals.complaint_rate == "0.68"
        assert totals.unsubscribe_rate == "0.68"

    def test_zero_denominators(self):
        """Test zero totals format as zero."""
        totals = AnalyticsTotals(sent=0, delivered=0, bounced=0)
        assert totals.delivery_rate == "0.0"
        assert totals.bounce_rate == "0.00"
        assert totals.complaint_rate == "0.00"
        assert totals.unsubscribe_rate == "0.00"

    def test_ties_round_up(self):
        """Test halfway rates round up."""
        assert AnalyticsTotals(sent=16, delivered=1).delivery_rate == "6.3"
        assert AnalyticsTotals(sent=32, bounced=1).bounce_rate == "3.13"
        assert AnalyticsTotals(delivered=32, complained=1, unsubscribed=1).complaint_rate == "3.13"

    def test_full_delivery(self):
        """Test a perfect delivery rate."""
        assert AnalyticsTotals(sent=7, delivered=7).delivery_rate == "100.0"
