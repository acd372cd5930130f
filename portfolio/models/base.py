"""
Model helpers shared by every table
"""

import uuid
from datetime import datetime, timezone

from portfolio.extensions import db


def utcnow():
    """Naive UTC timestamp, matching what SQLite hands back."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_uuid():
    return str(uuid.uuid4())


def isoformat(value):
    return value.isoformat() if value is not None else None


class TimestampMixin:
    """created_at / updated_at columns"""
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)


def enum_column(enum_cls, **kwargs):
    """Store an enum by its value (e.g. 'admin'), not its member name."""
    return db.Column(
        db.Enum(enum_cls, values_callable=lambda members: [m.value for m in members],
                native_enum=False, validate_strings=True, length=20),
        **kwargs
    )


def to_naive_utc(value):
    """Convert an aware datetime to naive UTC; naive values pass through."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
