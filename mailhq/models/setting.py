"""
Key/value settings. Values are opaque JSON blobs.
"""
from sqlalchemy import Column, Integer, String, DateTime, JSON
from ..database import Base
from ._helpers import utcnow, isoformat


class Setting(Base):
    __tablename__ = "settings"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String(100), unique=True, index=True, nullable=False)
    value = Column(JSON, nullable=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "key": self.key,
            "value": self.value,
            "updatedAt": isoformat(self.updated_at),
        }
