from typing import Optional

from .base import CamelModel


class TemplateCreate(CamelModel):
    name: str
    subject: str
    html_content: str
    text_content: Optional[str] = None
    thumbnail_url: Optional[str] = None


class TemplateUpdate(CamelModel):
    name: Optional[str] = None
    subject: Optional[str] = None
    html_content: Optional[str] = None
    text_content: Optional[str] = None
    thumbnail_url: Optional[str] = None
