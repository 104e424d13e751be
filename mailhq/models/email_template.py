"""
EmailTemplate model for reusable campaign content.
"""
from sqlalchemy import Column, String, DateTime, Text
from ..database import Base
from ._helpers import utcnow, new_id, isoformat


class EmailTemplate(Base):
    __tablename__ = "email_templates"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(200), nullable=False)
    subject = Column(String(500), nullable=False)
    html_content = Column(Text, nullable=False)
    text_content = Column(Text, nullable=True)
    thumbnail_url = Column(String(1000), nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "subject": self.subject,
            "htmlContent": self.html_content,
            "textContent": self.text_content,
            "thumbnailUrl": self.thumbnail_url,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
