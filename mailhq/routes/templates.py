"""
Email template routes for CRUD operations and duplication.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from ..auth import get_required_user
from ..database import get_db, store_guard
from ..errors import NotFoundError, require
from ..models.email_template import EmailTemplate
from ..schemas.template import TemplateCreate, TemplateUpdate

router = APIRouter(
    prefix="/api/templates",
    tags=["templates"],
    dependencies=[Depends(get_required_user)],
)

REQUIRED_FIELDS = ("name", "subject", "html_content")


def _get_or_404(db: Session, template_id: str) -> EmailTemplate:
    with store_guard(db, "fetch template"):
        template = db.get(EmailTemplate, template_id)
    if not template:
        raise NotFoundError("Template not found")
    return template


@router.get("", response_model=List[dict])
def get_templates(db: Session = Depends(get_db)):
    """Get all templates, newest first."""
    with store_guard(db, "fetch templates"):
        templates = db.query(EmailTemplate).order_by(EmailTemplate.created_at.desc()).all()
    return [t.to_dict() for t in templates]


@router.get("/{template_id}", response_model=dict)
def get_template(template_id: str, db: Session = Depends(get_db)):
    """Get a single template by ID."""
    return _get_or_404(db, template_id).to_dict()


@router.post("", response_model=dict, status_code=201)
def create_template(template_data: TemplateCreate, db: Session = Depends(get_db)):
    """Create a new template."""
    for field in REQUIRED_FIELDS:
        require(getattr(template_data, field), field)

    template = EmailTemplate(**template_data.model_dump())
    with store_guard(db, "create template"):
        db.add(template)
        db.commit()
        db.refresh(template)

    return template.to_dict()


@router.patch("/{template_id}", response_model=dict)
def update_template(
    template_id: str,
    template_update: TemplateUpdate,
    db: Session = Depends(get_db),
):
    """Partially update a template."""
    template = _get_or_404(db, template_id)

    update_data = template_update.model_dump(exclude_unset=True)
    for field in REQUIRED_FIELDS:
        if field in update_data:
            require(update_data[field], field)

    with store_guard(db, "update template"):
        for key, value in update_data.items():
            setattr(template, key, value)
        db.commit()
        db.refresh(template)

    return template.to_dict()


@router.delete("/{template_id}")
def delete_template(template_id: str, db: Session = Depends(get_db)):
    """Delete a template. Campaigns referencing it keep the dangling id."""
    template = _get_or_404(db, template_id)

    with store_guard(db, "delete template"):
        db.delete(template)
        db.commit()
    return {"message": "Template deleted successfully"}


@router.post("/{template_id}/duplicate", response_model=dict, status_code=201)
def duplicate_template(template_id: str, db: Session = Depends(get_db)):
    """Clone a template under a new id with " (Copy)" appended to its name."""
    original = _get_or_404(db, template_id)

    copy = EmailTemplate(
        name=f"{original.name} (Copy)",
        subject=original.subject,
        html_content=original.html_content,
        text_content=original.text_content,
        thumbnail_url=original.thumbnail_url,
    )
    with store_guard(db, "duplicate template"):
        db.add(copy)
        db.commit()
        db.refresh(copy)

    return copy.to_dict()
