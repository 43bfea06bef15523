"""SQLAlchemy ORM models."""

from __future__ import annotations

from typing import TYPE_CHECKING

from datetime import date

from sqlalchemy import (
    Boolean,
    Date,
    ForeignKey,
    Index,
    Integer,
    String,
    true,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from civimember.db.base import Base

if TYPE_CHECKING:
    from civimember.db.models import Contact, Contribution, ContributionRecur


class MembershipType(Base):
    """Kind of membership an organization sells (e.g. General, Student)."""

    __tablename__ = "membership_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, server_default=true(), nullable=False)


class MembershipStatus(Base):
    """
    Membership status rule (New, Current, Grace, Expired, ...).

    is_current_member marks statuses that count as an active membership.
    """

    __tablename__ = "membership_statuses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)
    label: Mapped[str | None] = mapped_column(String(128), nullable=True)
    is_current_member: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, server_default=true(), nullable=False)
    weight: Mapped[int] = mapped_column(Integer, default=0, nullable=False)


class Membership(Base):
    """
    A contact's membership of a given type.

    contribution_recur_id set means the membership auto-renews.
    owner_membership_id set means the membership is inherited from a related
    contact's (owner) membership.
    """

    __tablename__ = "memberships"
    __table_args__ = (
        Index("idx_memberships_contact", "contact_id"),
        Index("idx_memberships_type_status", "membership_type_id", "status_id"),
        Index("idx_memberships_owner", "owner_membership_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    contact_id: Mapped[int] = mapped_column(
        ForeignKey("contacts.id", ondelete="CASCADE"), nullable=False
    )
    membership_type_id: Mapped[int] = mapped_column(
        ForeignKey("membership_types.id"), nullable=False
    )
    status_id: Mapped[int] = mapped_column(
        ForeignKey("membership_statuses.id"), nullable=False
    )
    contribution_recur_id: Mapped[int | None] = mapped_column(
        ForeignKey("contribution_recurs.id", ondelete="SET NULL"), nullable=True
    )
    is_override: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    owner_membership_id: Mapped[int | None] = mapped_column(
        ForeignKey("memberships.id", ondelete="SET NULL"), nullable=True
    )

    join_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    # Relationships
    contact: Mapped["Contact"] = relationship()
    membership_type: Mapped["MembershipType"] = relationship()
    status: Mapped["MembershipStatus"] = relationship()
    contribution_recur: Mapped["ContributionRecur | None"] = relationship()
    owner_membership: Mapped["Membership | None"] = relationship(remote_side=[id])
    payments: Mapped[list["MembershipPayment"]] = relationship(
        back_populates="membership",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class MembershipPayment(Base):
    """
    Link between a membership and a contribution that paid for it.

    A contribution is linked to a given membership at most once.
    """

    __tablename__ = "membership_payment_link"
    __table_args__ = (
        Index(
            "UI_contribution_membership",
            "contribution_id",
            "membership_id",
            unique=True,
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # FK to Membership table
    membership_id: Mapped[int] = mapped_column(
        ForeignKey("memberships.id", ondelete="CASCADE"), nullable=False
    )
    # FK to contribution table
    contribution_id: Mapped[int | None] = mapped_column(
        ForeignKey("contributions.id", ondelete="CASCADE"), nullable=True
    )

    # Relationships
    membership: Mapped["Membership"] = relationship(back_populates="payments")
    contribution: Mapped["Contribution | None"] = relationship()

    @classmethod
    def get_entity_title(cls, plural: bool = False) -> str:
        return "Membership Payments" if plural else "Membership Payment"

    @classmethod
    def get_reference_columns(cls) -> list[tuple[str, str, str, str]]:
        """Foreign keys as (table, column, target_table, target_column), in column order."""
        references = []
        for column in cls.__table__.columns:
            for fk in column.foreign_keys:
                references.append(
                    (cls.__tablename__, column.name, fk.column.table.name, fk.column.name)
                )
        return references
