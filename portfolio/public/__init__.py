"""
Public Site Blueprint

Read-only pages: works, blog, about, contact, and image serving.
"""

from flask import Blueprint

public_bp = Blueprint('public', __name__)

from portfolio.public import routes  # noqa: E402, F401
