"""
Auth Blueprint

GitHub sign-in, sign-out, and the cookie-backed session that Flask-Login
reads through its request_loader.
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__)

from portfolio.auth import routes  # noqa: E402, F401
from portfolio.auth.sessions import refresh_session_cookie  # noqa: E402

auth_bp.after_app_request(refresh_session_cookie)
