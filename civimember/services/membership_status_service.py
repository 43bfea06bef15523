"""Membership status metadata lookups."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import false, or_, select
from sqlalchemy.orm import Session

from civimember.db.enums import EXPIRED_STATUS_NAME
from civimember.db.models import MembershipStatus
from civimember.services.action_mapping import StatusResolver


def get_status_ids(
    db: Session,
    *,
    current: bool = True,
    include_names: Sequence[str] = (),
) -> list[int]:
    """
    Ids of active statuses that are current (when current=True) or carry one
    of include_names, ordered by weight.
    """
    conditions = []
    if current:
        conditions.append(MembershipStatus.is_current_member.is_(True))
    if include_names:
        conditions.append(MembershipStatus.name.in_(list(include_names)))

    stmt = (
        select(MembershipStatus.id)
        .where(
            MembershipStatus.is_active.is_(True),
            or_(*conditions) if conditions else false(),
        )
        .order_by(MembershipStatus.weight, MembershipStatus.id)
    )
    return list(db.execute(stmt).scalars().all())


def get_current_or_expired_status_ids(db: Session) -> list[int]:
    """Statuses eligible for membership reminders: current ones plus Expired."""
    return get_status_ids(db, current=True, include_names=(EXPIRED_STATUS_NAME,))


def make_status_resolver(db: Session) -> StatusResolver:
    """Bind the eligible-status lookup to a session for the action mappings."""

    def resolve() -> list[int]:
        return get_current_or_expired_status_ids(db)

    return resolve
