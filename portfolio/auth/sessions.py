"""
Session Tokens

The browser holds a random token in the `auth-session` cookie; the database
holds only its SHA-256 hash. Sessions last 30 days and are pushed out to a
fresh 30 days once fewer than 15 remain.
"""

import base64
import hashlib
import logging
import secrets
from datetime import timedelta

from flask import current_app, g, has_app_context

from portfolio.extensions import db, login_manager
from portfolio.models import AuthSession
from portfolio.models.base import utcnow

logger = logging.getLogger(__name__)

DEFAULT_TTL_DAYS = 30
DEFAULT_RENEW_DAYS = 15


def _days(key, default):
    if has_app_context():
        return timedelta(days=current_app.config.get(key, default))
    return timedelta(days=default)


def generate_session_token():
    """18 random bytes, base64url encoded (24 characters, no padding)."""
    return base64.urlsafe_b64encode(secrets.token_bytes(18)).rstrip(b'=').decode('ascii')


def session_id_for(token):
    return hashlib.sha256(token.encode('utf-8')).hexdigest()


def create_session(token, user_id, now=None):
    now = now or utcnow()
    auth_session = AuthSession(
        id=session_id_for(token),
        user_id=user_id,
        expires_at=now + _days('SESSION_TTL_DAYS', DEFAULT_TTL_DAYS),
    )
    db.session.add(auth_session)
    db.session.commit()
    return auth_session


def validate_session_token(token, now=None):
    """Return `(session, user)`, or `(None, None)` for unknown or expired tokens."""
    now = now or utcnow()
    auth_session = db.session.get(AuthSession, session_id_for(token))
    if auth_session is None:
        return None, None

    if now >= auth_session.expires_at:
        logger.info('Expired session removed for user %s', auth_session.user_id)
        db.session.delete(auth_session)
        db.session.commit()
        return None, None

    if now >= auth_session.expires_at - _days('SESSION_RENEW_DAYS', DEFAULT_RENEW_DAYS):
        auth_session.expires_at = now + _days('SESSION_TTL_DAYS', DEFAULT_TTL_DAYS)
        db.session.commit()

    return auth_session, auth_session.user


def invalidate_session(session_id):
    AuthSession.query.filter_by(id=session_id).delete()
    db.session.commit()


def set_session_cookie(response, token, expires_at):
    response.set_cookie(
        current_app.config['AUTH_COOKIE_NAME'], token,
        expires=expires_at, path='/', httponly=True, samesite='Lax',
    )


def delete_session_cookie(response):
    response.delete_cookie(current_app.config['AUTH_COOKIE_NAME'], path='/')


@login_manager.request_loader
def load_user_from_request(request):
    """Resolve the current user from the auth-session cookie."""
    token = request.cookies.get(current_app.config['AUTH_COOKIE_NAME'])
    if not token:
        return None
    auth_session, user = validate_session_token(token)
    if auth_session is None:
        g.clear_auth_cookie = True
        return None
    g.auth_session = auth_session
    g.auth_token = token
    return user


def get_current_session():
    """`(session, user)` for this request, validating the cookie if not done yet."""
    from flask_login import current_user
    if current_user.is_authenticated:
        return g.get('auth_session'), current_user
    return None, None


def refresh_session_cookie(response):
    """after_request: re-send the cookie with its (possibly renewed) expiry, or drop it."""
    auth_session = g.get('auth_session')
    if auth_session is not None and g.get('auth_token'):
        set_session_cookie(response, g.auth_token, auth_session.expires_at)
    elif g.get('clear_auth_cookie'):
        delete_session_cookie(response)
    return response
