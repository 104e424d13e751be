"""
Subscriber model. List membership is a plain JSON array of list names.
"""
from sqlalchemy import Column, String, DateTime, JSON
from ..database import Base
from ._helpers import utcnow, new_id, isoformat


class Subscriber(Base):
    __tablename__ = "subscribers"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String(255), unique=True, index=True, nullable=False)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    status = Column(String(20), default="active", nullable=False, index=True)  # active, unsubscribed, bounced, complained
    lists = Column(JSON, default=list, nullable=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    def in_any_list(self, names) -> bool:
        return bool(set(self.lists or []) & set(names))

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "status": self.status,
            "lists": list(self.lists or []),
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
