"""
Subscriber routes for CRUD operations on the mailing audience.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List, Optional

from ..auth import get_required_user
from ..database import get_db, store_guard
from ..errors import NotFoundError, ValidationError, require
from ..models.subscriber import Subscriber
from ..schemas.subscriber import SubscriberCreate, SubscriberUpdate
from ..services.filters import SubscriberFilter

router = APIRouter(
    prefix="/api/subscribers",
    tags=["subscribers"],
    dependencies=[Depends(get_required_user)],
)


def _get_or_404(db: Session, subscriber_id: str) -> Subscriber:
    with store_guard(db, "fetch subscriber"):
        subscriber = db.get(Subscriber, subscriber_id)
    if not subscriber:
        raise NotFoundError("Subscriber not found")
    return subscriber


def _commit_unique_email(db: Session) -> None:
    """Commit, turning a duplicate email into a 400 instead of a store failure."""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ValidationError("A subscriber with this email already exists", error=str(e.orig)) from e


@router.get("", response_model=List[dict])
def get_subscribers(
    status: Optional[str] = None,
    list_name: Optional[str] = Query(None, alias="list"),
    db: Session = Depends(get_db),
):
    """Get all subscribers, newest first, optionally filtered by status and list."""
    subscriber_filter = SubscriberFilter(status=status, list_name=list_name)
    with store_guard(db, "fetch subscribers"):
        subscribers = subscriber_filter.run(db.query(Subscriber))
    return [s.to_dict() for s in subscribers]


@router.get("/{subscriber_id}", response_model=dict)
def get_subscriber(subscriber_id: str, db: Session = Depends(get_db)):
    """Get a single subscriber by ID."""
    return _get_or_404(db, subscriber_id).to_dict()


@router.post("", response_model=dict, status_code=201)
def create_subscriber(subscriber_data: SubscriberCreate, db: Session = Depends(get_db)):
    """Create a new subscriber."""
    subscriber = Subscriber(
        email=str(subscriber_data.email).lower(),
        first_name=subscriber_data.first_name,
        last_name=subscriber_data.last_name,
        status=subscriber_data.status,
        lists=subscriber_data.lists,
    )
    with store_guard(db, "create subscriber"):
        db.add(subscriber)
        _commit_unique_email(db)
        db.refresh(subscriber)

    return subscriber.to_dict()


@router.patch("/{subscriber_id}", response_model=dict)
def update_subscriber(
    subscriber_id: str,
    subscriber_update: SubscriberUpdate,
    db: Session = Depends(get_db),
):
    """Partially update a subscriber."""
    subscriber = _get_or_404(db, subscriber_id)

    update_data = subscriber_update.model_dump(exclude_unset=True)
    for field in ("email", "status"):
        if field in update_data:
            require(update_data[field], field)

    with store_guard(db, "update subscriber"):
        for key, value in update_data.items():
            if key == "email":
                value = str(value).lower()
            elif key == "lists":
                value = list(value or [])
            setattr(subscriber, key, value)

        _commit_unique_email(db)
        db.refresh(subscriber)

    return subscriber.to_dict()


@router.delete("/{subscriber_id}")
def delete_subscriber(subscriber_id: str, db: Session = Depends(get_db)):
    """Delete a subscriber."""
    subscriber = _get_or_404(db, subscriber_id)

    with store_guard(db, "delete subscriber"):
        db.delete(subscriber)
        db.commit()
    return {"message": "Subscriber deleted successfully"}
