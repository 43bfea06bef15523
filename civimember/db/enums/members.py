"""Membership-related enums."""

from enum import IntEnum


class AutoRenewOption(IntEnum):
    """Values of the "auto_renew_options" status list used by membership reminders."""

    NON_AUTO_RENEW = 1
    AUTO_RENEW = 2


# Status name that stays reminder-eligible even though it is not "current"
EXPIRED_STATUS_NAME = "Expired"
