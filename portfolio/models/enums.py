"""
Closed enumerations for roles, work types and award grades
"""

import enum


class Role(str, enum.Enum):
    NONE = 'none'
    USER = 'user'
    ADMIN = 'admin'
    OWNER = 'owner'


class WorkType(str, enum.Enum):
    CREATION = 'creation'
    PROGRAM = 'program'
    CONTEST = 'contest'
    OTHER = 'other'


class AwardStatus(str, enum.Enum):
    GOLD = 'Gold'
    SILVER = 'Silver'
    BRONZE = 'Bronze'


def values(enum_cls):
    """List of raw values, e.g. for marshmallow OneOf validators."""
    return [member.value for member in enum_cls]
