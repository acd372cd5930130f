"""
Auth Routes

Sign-in through GitHub OAuth, sign-out, and the sign-in landing endpoint.
"""

import logging
import secrets

from flask import current_app, g, jsonify, redirect, request, url_for
from flask_login import current_user

from portfolio.auth import auth_bp
from portfolio.auth.github import OAuthError, github_client
from portfolio.auth.sessions import (
    create_session, delete_session_cookie, generate_session_token,
    get_current_session, invalidate_session, set_session_cookie
)
from portfolio.extensions import db
from portfolio.models import User

logger = logging.getLogger(__name__)


@auth_bp.route('/dashboard/signin')
def signin():
    """Sign-in landing; signed-in users go straight to the dashboard."""
    if current_user.is_authenticated:
        return redirect(url_for('admin.overview'))
    return jsonify({
        'providers': [{'name': 'github', 'url': url_for('auth.github_signin')}],
    })


@auth_bp.route('/dashboard/signin/github')
def github_signin():
    """Start the OAuth flow: remember a random state and send the user to GitHub."""
    state = secrets.token_urlsafe(32)
    response = redirect(github_client().authorization_url(state))
    response.set_cookie(
        current_app.config['OAUTH_STATE_COOKIE_NAME'], state,
        max_age=60 * 10, path='/', httponly=True, samesite='Lax',
    )
    return response


@auth_bp.route('/dashboard/signin/github/callback')
def github_callback():
    """Finish the OAuth flow, creating the user on first sign-in."""
    code = request.args.get('code')
    state = request.args.get('state')
    stored_state = request.cookies.get(current_app.config['OAUTH_STATE_COOKIE_NAME'])
    if code is None or state is None or stored_state is None:
        return jsonify({'error': 'bad_request', 'message': 'Missing OAuth state'}), 400
    if state != stored_state:
        logger.warning('OAuth state mismatch from %s', request.remote_addr)
        return jsonify({'error': 'bad_request', 'message': 'OAuth state mismatch'}), 400

    client = github_client()
    try:
        access_token = client.exchange_code(code)
    except OAuthError as e:
        logger.warning('GitHub code exchange failed: %s', e)
        return jsonify({'error': 'bad_request', 'message': 'Invalid authorization code'}), 400

    try:
        github_user = client.fetch_user(access_token)
    except OAuthError as e:
        logger.error('GitHub user fetch failed: %s', e)
        return jsonify({'error': 'github_api_error', 'message': 'GitHub API Error'}), 500

    user = User.query.filter_by(github_id=github_user['id']).first()
    if user is None:
        user = User(
            github_id=github_user['id'],
            username=github_user['login'],
            display_name=github_user.get('name'),
            avatar_url=github_user.get('avatar_url'),
        )
        try:
            db.session.add(user)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        logger.info('New user registered from GitHub: %s', user.username)

    token = generate_session_token()
    auth_session = create_session(token, user.id)

    response = redirect(url_for('admin.overview'))
    set_session_cookie(response, token, auth_session.expires_at)
    response.delete_cookie(current_app.config['OAUTH_STATE_COOKIE_NAME'], path='/')
    logger.info('User %s signed in', user.username)
    return response


@auth_bp.route('/dashboard/signout', methods=['POST'])
def signout():
    """Invalidate the current session and clear its cookie."""
    auth_session, _ = get_current_session()
    if auth_session is None:
        return jsonify({'error': 'unauthorized', 'message': 'Not signed in'}), 401

    invalidate_session(auth_session.id)
    g.auth_session = None
    g.clear_auth_cookie = True

    response = redirect(url_for('auth.signin'))
    delete_session_cookie(response)
    return response
