"""
Filter objects for list endpoints.

A filter is built once from the query parameters and then applied to a single
query. Conditions SQL can express portably become WHERE clauses; JSON list
membership is checked on the loaded rows.
"""
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Query

from ..models import Campaign, Subscriber


@dataclass(frozen=True)
class SubscriberFilter:
    status: Optional[str] = None
    list_name: Optional[str] = None

    def apply(self, query: Query) -> Query:
        if self.status:
            query = query.filter(Subscriber.status == self.status)
        return query.order_by(Subscriber.created_at.desc())

    def matches(self, subscriber: Subscriber) -> bool:
        return not self.list_name or self.list_name in (subscriber.lists or [])

    def run(self, query: Query):
        return [s for s in self.apply(query).all() if self.matches(s)]


@dataclass(frozen=True)
class CampaignFilter:
    status: Optional[str] = None

    def apply(self, query: Query) -> Query:
        if self.status:
            query = query.filter(Campaign.status == self.status)
        return query.order_by(Campaign.created_at.desc())

    def run(self, query: Query):
        return self.apply(query).all()
