"""Scheduled job enums."""

from enum import Enum


class RunFrequency(str, Enum):
    """How often the scheduler may run a job."""

    ALWAYS = "Always"
    HOURLY = "Hourly"
    DAILY = "Daily"
