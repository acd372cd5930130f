"""
Models Package

Exports all models for easy importing.
"""

from portfolio.models.enums import Role, WorkType, AwardStatus
from portfolio.models.user import User, AuthSession
from portfolio.models.image import Image
from portfolio.models.work import Work, WorkUrl
from portfolio.models.blog import Blog
from portfolio.models.orderable import Sns, Skill, Certification, Award

ORDERABLE_MODELS = (Sns, Skill, Certification, Award)

__all__ = [
    'Role', 'WorkType', 'AwardStatus',
    'User', 'AuthSession', 'Image', 'Work', 'WorkUrl', 'Blog',
    'Sns', 'Skill', 'Certification', 'Award', 'ORDERABLE_MODELS',
]
