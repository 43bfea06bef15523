from datetime import datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for the membership, reminder and scheduled job tables.

    Datetime columns are stored timezone-aware; plain dates (membership
    join/start/end) use explicit Date columns.
    """
    type_annotation_map = {
        datetime: DateTime(timezone=True),
    }
