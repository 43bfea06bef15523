"""
Test configuration and fixtures.

Provides:
- In-memory SQLite database, schema created and dropped around each test
- Membership status/type seed data and contact/membership factories
- HTTPX AsyncClient wired to the test session
"""
import os
from datetime import date
from typing import AsyncGenerator, Callable, Generator

# Must be set before civimember.core.config is imported
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["INTERNAL_SECRET"] = "test-internal-secret"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.orm import Session

from civimember.core.deps import get_db
from civimember.db.base import Base
from civimember.db.enums import RelationshipPermission
from civimember.db.models import (
    ActionSchedule,
    Contact,
    ContactRelationship,
    ContributionRecur,
    Membership,
    MembershipStatus,
    MembershipType,
)
from civimember.db.session import SessionLocal, engine
from civimember.main import app
from civimember.services.member_action_mapping import MembershipActionMapping
from civimember.utils.padded import implode_padded


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Fresh schema per test; the in-memory database shares one connection."""
    Base.metadata.create_all(engine)
    session = SessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(engine)


@pytest.fixture(scope="function")
def statuses(db: Session) -> dict[str, MembershipStatus]:
    """Standard membership statuses keyed by name."""
    rows = [
        ("New", True, 1),
        ("Current", True, 2),
        ("Grace", True, 3),
        ("Expired", False, 4),
        ("Pending", False, 5),
        ("Cancelled", False, 6),
    ]
    result = {}
    for name, is_current, weight in rows:
        status = MembershipStatus(
            name=name, label=name, is_current_member=is_current, weight=weight
        )
        db.add(status)
        result[name] = status
    db.flush()
    return result


@pytest.fixture(scope="function")
def membership_types(db: Session) -> dict[str, MembershipType]:
    result = {}
    for name in ("General", "Student", "Lifetime"):
        membership_type = MembershipType(name=name)
        db.add(membership_type)
        result[name] = membership_type
    db.flush()
    return result


@pytest.fixture(scope="function")
def make_contact(db: Session) -> Callable[..., Contact]:
    def _make(display_name: str = "Member") -> Contact:
        contact = Contact(display_name=display_name, email=None)
        db.add(contact)
        db.flush()
        return contact

    return _make


@pytest.fixture(scope="function")
def make_membership(
    db: Session,
    make_contact: Callable[..., Contact],
    statuses: dict[str, MembershipStatus],
    membership_types: dict[str, MembershipType],
) -> Callable[..., Membership]:
    """Create a membership; defaults to a Current General membership."""

    def _make(
        contact: Contact | None = None,
        membership_type: str = "General",
        status: str = "Current",
        auto_renew: bool = False,
        is_override: bool | None = None,
        owner: Membership | None = None,
        end_date: date = date(2026, 12, 31),
    ) -> Membership:
        contact = contact or make_contact()
        recur_id = None
        if auto_renew:
            recur = ContributionRecur(contact_id=contact.id, amount=50, frequency_unit="year")
            db.add(recur)
            db.flush()
            recur_id = recur.id
        membership = Membership(
            contact_id=contact.id,
            membership_type_id=membership_types[membership_type].id,
            status_id=statuses[status].id,
            contribution_recur_id=recur_id,
            is_override=is_override,
            owner_membership_id=owner.id if owner else None,
            join_date=date(2020, 1, 1),
            start_date=date(2026, 1, 1),
            end_date=end_date,
        )
        db.add(membership)
        db.flush()
        return membership

    return _make


@pytest.fixture(scope="function")
def make_relationship(db: Session) -> Callable[..., ContactRelationship]:
    def _make(
        contact_a: Contact,
        contact_b: Contact,
        permission_a_b: RelationshipPermission = RelationshipPermission.NONE,
        permission_b_a: RelationshipPermission = RelationshipPermission.NONE,
    ) -> ContactRelationship:
        relationship = ContactRelationship(
            contact_id_a=contact_a.id,
            contact_id_b=contact_b.id,
            relationship_type="Household Member of",
            is_permission_a_b=permission_a_b.value,
            is_permission_b_a=permission_b_a.value,
        )
        db.add(relationship)
        db.flush()
        return relationship

    return _make


@pytest.fixture(scope="function")
def make_schedule(db: Session) -> Callable[..., ActionSchedule]:
    """Create a membership reminder; list arguments are stored padded."""

    def _make(
        entity_value: list | None = None,
        entity_status: list | None = None,
        start_action_date: str | None = "membership_end_date",
        **kwargs,
    ) -> ActionSchedule:
        kwargs.setdefault("title", "Renewal reminder")
        kwargs.setdefault("mapping_id", MembershipActionMapping.MEMBERSHIP_TYPE_MAPPING_ID)
        schedule = ActionSchedule(
            entity_value=implode_padded(entity_value or []),
            entity_status=implode_padded(entity_status or []),
            start_action_date=start_action_date,
            **kwargs,
        )
        db.add(schedule)
        db.flush()
        return schedule

    return _make


# =============================================================================
# Client Fixtures
# =============================================================================

@pytest.fixture(scope="function")
async def client(db: Session) -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient whose requests share the test database session."""
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as c:
        yield c

    app.dependency_overrides.clear()
