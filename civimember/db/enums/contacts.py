"""Contact and relationship enums."""

from enum import IntEnum


class RelationshipPermission(IntEnum):
    """Permission one contact has over the other in a relationship."""

    NONE = 0
    EDIT = 1
    VIEW = 2
