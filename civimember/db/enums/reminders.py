"""Scheduled reminder enums."""

from enum import Enum


class RecipientPhase(str, Enum):
    """Stages of recipient resolution for a scheduled reminder."""

    RELATION_FIRST = "rel1"
    RELATION_REPEAT = "rel2"
    ADDITION_FIRST = "addl1"
    ADDITION_REPEAT = "addl2"


class StartActionUnit(str, Enum):
    """Unit of the offset between the trigger date and the reminder."""

    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class StartActionCondition(str, Enum):
    """Whether the reminder goes out before or after the trigger date."""

    BEFORE = "before"
    AFTER = "after"
