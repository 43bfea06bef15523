"""Enum definitions for application constants."""

from civimember.db.enums.contacts import RelationshipPermission
from civimember.db.enums.jobs import RunFrequency
from civimember.db.enums.members import AutoRenewOption, EXPIRED_STATUS_NAME
from civimember.db.enums.reminders import (
    RecipientPhase,
    StartActionCondition,
    StartActionUnit,
)

__all__ = [
    "AutoRenewOption",
    "EXPIRED_STATUS_NAME",
    "RecipientPhase",
    "RelationshipPermission",
    "RunFrequency",
    "StartActionCondition",
    "StartActionUnit",
]
