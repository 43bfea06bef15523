"""Membership payment links - which contributions paid for which memberships."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from civimember.db.models import Membership, MembershipPayment


logger = logging.getLogger(__name__)


class MembershipPaymentError(Exception):
    """Base exception for membership payment errors."""

    pass


class MembershipNotFoundError(MembershipPaymentError):
    """Membership not found."""

    pass


def get_payment(
    db: Session, membership_id: int, contribution_id: int | None
) -> MembershipPayment | None:
    """Get the link for a membership/contribution pair, if any."""
    stmt = select(MembershipPayment).where(MembershipPayment.membership_id == membership_id)
    if contribution_id is None:
        stmt = stmt.where(MembershipPayment.contribution_id.is_(None))
    else:
        stmt = stmt.where(MembershipPayment.contribution_id == contribution_id)
    return db.execute(stmt).scalars().first()


def record_payment(
    db: Session, membership_id: int, contribution_id: int | None
) -> MembershipPayment:
    """
    Link a contribution to a membership.

    Linking the same pair twice returns the existing link.
    """
    if db.get(Membership, membership_id) is None:
        raise MembershipNotFoundError(f"Membership {membership_id} not found")

    existing = get_payment(db, membership_id, contribution_id)
    if existing:
        return existing

    payment = MembershipPayment(membership_id=membership_id, contribution_id=contribution_id)
    db.add(payment)
    db.flush()

    logger.info(
        "Linked contribution %s to membership %s (payment %s)",
        contribution_id,
        membership_id,
        payment.id,
    )
    return payment


def list_payments_for_membership(db: Session, membership_id: int) -> list[MembershipPayment]:
    stmt = (
        select(MembershipPayment)
        .where(MembershipPayment.membership_id == membership_id)
        .order_by(MembershipPayment.id)
    )
    return list(db.execute(stmt).scalars().all())


def get_membership_for_contribution(db: Session, contribution_id: int) -> Membership | None:
    """The (first) membership a contribution paid for."""
    stmt = (
        select(Membership)
        .join(MembershipPayment, MembershipPayment.membership_id == Membership.id)
        .where(MembershipPayment.contribution_id == contribution_id)
        .order_by(MembershipPayment.id)
    )
    return db.execute(stmt).scalars().first()


def delete_payment(db: Session, payment_id: int) -> bool:
    """Remove a payment link. Returns False when it didn't exist."""
    payment = db.get(MembershipPayment, payment_id)
    if not payment:
        return False
    db.delete(payment)
    db.flush()
    return True
