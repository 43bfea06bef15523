"""SQLAlchemy ORM models."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Date, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column


from civimember.db.base import Base


class ContributionRecur(Base):
    """Recurring payment plan; memberships linked to one are auto-renewing."""

    __tablename__ = "contribution_recurs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    contact_id: Mapped[int] = mapped_column(
        ForeignKey("contacts.id", ondelete="CASCADE"), nullable=False
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(20, 2), nullable=False)
    frequency_unit: Mapped[str] = mapped_column(String(8), nullable=False, default="month")
    frequency_interval: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)


class Contribution(Base):
    """A single payment received from a contact."""

    __tablename__ = "contributions"
    __table_args__ = (
        Index("idx_contributions_contact", "contact_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    contact_id: Mapped[int] = mapped_column(
        ForeignKey("contacts.id", ondelete="CASCADE"), nullable=False
    )
    total_amount: Mapped[Decimal] = mapped_column(Numeric(20, 2), nullable=False)
    receive_date: Mapped[datetime | None] = mapped_column(nullable=True)
    contribution_recur_id: Mapped[int | None] = mapped_column(
        ForeignKey("contribution_recurs.id", ondelete="SET NULL"), nullable=True
    )
