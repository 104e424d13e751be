"""
Database engine, session factory and declarative base.
"""
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .config import get_settings
from .errors import StoreError
from .logging_config import db_logger

settings = get_settings()

connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

engine = create_engine(settings.database_url, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Yield a database session for the duration of a request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def store_guard(db: Session, action: str):
    """
    Translate persistence faults raised inside the block into StoreError.

    The session is rolled back so it stays usable for the rest of the request.
    """
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        db_logger.error(f"Failed to {action}", error=e, action=action)
        raise StoreError(f"Failed to {action}", error=str(e)) from e
