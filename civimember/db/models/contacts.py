"""SQLAlchemy ORM models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    Boolean,
    ForeignKey,
    Index,
    Integer,
    String,
    false,
    func,
    true,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from civimember.db.base import Base
from civimember.db.enums import RelationshipPermission


class Contact(Base):
    """
    A person, household or organization.

    Memberships, contributions and reminder recipients all point at contacts.
    """

    __tablename__ = "contacts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    display_name: Mapped[str] = mapped_column(String(128), nullable=False)
    email: Mapped[str | None] = mapped_column(String(254), nullable=True)
    is_deleted: Mapped[bool] = mapped_column(Boolean, server_default=false(), nullable=False)
    created_at: Mapped[datetime] = mapped_column(server_default=func.now(), nullable=False)


class ContactRelationship(Base):
    """
    Directed relationship between two contacts.

    is_permission_a_b is the permission contact A has over contact B,
    is_permission_b_a the reverse (see RelationshipPermission).
    """

    __tablename__ = "relationships"
    __table_args__ = (
        Index("idx_relationships_a_b", "contact_id_a", "contact_id_b"),
        Index("idx_relationships_b_a", "contact_id_b", "contact_id_a"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    contact_id_a: Mapped[int] = mapped_column(
        ForeignKey("contacts.id", ondelete="CASCADE"), nullable=False
    )
    contact_id_b: Mapped[int] = mapped_column(
        ForeignKey("contacts.id", ondelete="CASCADE"), nullable=False
    )
    relationship_type: Mapped[str] = mapped_column(String(64), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, server_default=true(), nullable=False)
    is_permission_a_b: Mapped[int] = mapped_column(
        Integer, default=RelationshipPermission.NONE.value, nullable=False
    )
    is_permission_b_a: Mapped[int] = mapped_column(
        Integer, default=RelationshipPermission.NONE.value, nullable=False
    )

    # Relationships
    contact_a: Mapped["Contact"] = relationship(foreign_keys=[contact_id_a])
    contact_b: Mapped["Contact"] = relationship(foreign_keys=[contact_id_b])
