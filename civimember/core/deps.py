"""FastAPI dependencies for database access."""

from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from civimember.db.session import SessionLocal
from civimember.services import membership_status_service
from civimember.services.action_mapping import MappingRegistry, build_mapping_registry


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency.

    Yields a database session and ensures it's closed after the request.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_mapping_registry(db: Session = Depends(get_db)) -> MappingRegistry:
    """Action mappings registered for this request, with statuses resolved from db."""
    return build_mapping_registry(membership_status_service.make_status_resolver(db))
