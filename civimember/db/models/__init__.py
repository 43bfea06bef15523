"""SQLAlchemy ORM models."""

from civimember.db.models.contacts import Contact, ContactRelationship
from civimember.db.models.contributions import Contribution, ContributionRecur
from civimember.db.models.jobs import ScheduledJob
from civimember.db.models.members import (
    Membership,
    MembershipPayment,
    MembershipStatus,
    MembershipType,
)
from civimember.db.models.reminders import ActionSchedule

__all__ = [
    "ActionSchedule",
    "Contact",
    "ContactRelationship",
    "Contribution",
    "ContributionRecur",
    "Membership",
    "MembershipPayment",
    "MembershipStatus",
    "MembershipType",
    "ScheduledJob",
]
