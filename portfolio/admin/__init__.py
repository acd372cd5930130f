"""
Admin Blueprint

Dashboard for managing portfolio content. Every write view requires the
`admin` role; the overview and personal settings only require sign-in.
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__)

from portfolio.admin import routes, collections, works, blog  # noqa: E402, F401
