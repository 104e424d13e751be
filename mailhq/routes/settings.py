"""
Settings routes for the generic key/value configuration store.
"""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..auth import get_required_user
from ..database import get_db
from ..schemas.settings import SettingValue
from ..services import settings_store

router = APIRouter(
    prefix="/api/settings",
    tags=["settings"],
    dependencies=[Depends(get_required_user)],
)


@router.get("", response_model=dict)
def get_all_settings(db: Session = Depends(get_db)):
    """Get every setting as a key to value mapping."""
    return settings_store.get_all_settings(db)


@router.get("/{key}", response_model=dict)
def get_setting(key: str, db: Session = Depends(get_db)):
    """Get a single setting record."""
    return settings_store.get_setting(db, key).to_dict()


@router.put("/{key}")
def put_setting(key: str, body: SettingValue, db: Session = Depends(get_db)):
    """Create or replace a setting. 201 when the key is new."""
    setting, created = settings_store.put_setting(db, key, body.value)
    return JSONResponse(status_code=201 if created else 200, content=setting.to_dict())


@router.delete("/{key}")
def delete_setting(key: str, db: Session = Depends(get_db)):
    """Delete a setting."""
    settings_store.delete_setting(db, key)
    return {"message": "Setting deleted successfully"}
