"""
Key/value settings store.

Values are stored as opaque JSON. The ``smtp`` and ``sender`` keys used by the
settings page are a convention between clients; nothing here checks shape.
"""
from typing import Any, Dict, Tuple

from sqlalchemy.orm import Session

from ..database import store_guard
from ..errors import NotFoundError
from ..models import Setting
from ..models._helpers import utcnow


def get_all_settings(db: Session) -> Dict[str, Any]:
    with store_guard(db, "fetch settings"):
        return {setting.key: setting.value for setting in db.query(Setting).all()}


def get_setting(db: Session, key: str) -> Setting:
    with store_guard(db, "fetch setting"):
        setting = db.query(Setting).filter(Setting.key == key).first()
    if setting is None:
        raise NotFoundError("Setting not found")
    return setting


def put_setting(db: Session, key: str, value: Any) -> Tuple[Setting, bool]:
    """Upsert a setting. Returns the stored row and whether it was inserted."""
    with store_guard(db, "update setting"):
        setting = db.query(Setting).filter(Setting.key == key).first()
        created = setting is None
        if created:
            setting = Setting(key=key, value=value)
            db.add(setting)
        else:
            setting.value = value
            setting.updated_at = utcnow()

        db.commit()
        db.refresh(setting)

    return setting, created


def delete_setting(db: Session, key: str) -> None:
    with store_guard(db, "delete setting"):
        deleted = db.query(Setting).filter(Setting.key == key).delete()
        if not deleted:
            db.rollback()
            raise NotFoundError("Setting not found")
        db.commit()
