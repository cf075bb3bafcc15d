"""
Enumerations stored as short strings.

Each column gets a CHECK constraint listing the allowed values, so a
legacy value (a "NextUp" book, an "Out" reading status) is rejected by
the store itself.
"""

import enum

from sqlalchemy import Enum as SAEnum


class BookStatus(str, enum.Enum):
    CURRENT = "Current"
    READ = "Read"
    ARCHIVED = "Archived"


class ReactionType(str, enum.Enum):
    LIKE = "Like"
    HELPFUL = "Helpful"
    FUNNY = "Funny"


class ReadingStatusValue(str, enum.Enum):
    IN = "In"
    READING = "Reading"
    FINISHED = "Finished"
    NOT_THIS_TIME = "NotThisTime"


# Statuses that count someone as taking part in a book
PARTICIPATING_STATUSES = (
    ReadingStatusValue.IN,
    ReadingStatusValue.READING,
    ReadingStatusValue.FINISHED,
)


class NotificationType(str, enum.Enum):
    MENTION = "mention"


def string_enum(enum_cls: type[enum.Enum], name: str) -> SAEnum:
    """Column type storing the enum's values, guarded by a CHECK constraint."""
    return SAEnum(
        enum_cls,
        name=name,
        native_enum=False,
        create_constraint=True,
        length=20,
        values_callable=lambda members: [m.value for m in members],
        validate_strings=True,
    )
