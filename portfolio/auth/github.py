"""
GitHub OAuth

Thin client over GitHub's OAuth web flow: build the authorize URL, exchange
the callback code for an access token, and fetch the signed-in account.
"""

import logging
from urllib.parse import urlencode

import requests
from flask import current_app

logger = logging.getLogger(__name__)


class OAuthError(Exception):
    """Raised when the code exchange or the user lookup fails."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


def _json_body(resp):
    """Decoded JSON object from `resp`, or OAuthError for anything else."""
    try:
        payload = resp.json()
    except ValueError as e:
        raise OAuthError(f'Invalid JSON from GitHub: {e}', resp.status_code) from e
    if not isinstance(payload, dict):
        raise OAuthError('Unexpected response from GitHub', resp.status_code)
    return payload


class GitHubOAuth:
    def __init__(self, client_id, client_secret, authorize_url, token_url,
                 user_api_url, user_agent, timeout=10):
        self.client_id = client_id
        self.client_secret = client_secret
        self.authorize_url = authorize_url
        self.token_url = token_url
        self.user_api_url = user_api_url
        self.user_agent = user_agent
        self.timeout = timeout

    @classmethod
    def from_config(cls, config):
        return cls(
            client_id=config['GITHUB_CLIENT_ID'],
            client_secret=config['GITHUB_CLIENT_SECRET'],
            authorize_url=config['GITHUB_AUTHORIZE_URL'],
            token_url=config['GITHUB_TOKEN_URL'],
            user_api_url=config['GITHUB_USER_API_URL'],
            user_agent=config['GITHUB_USER_AGENT'],
        )

    def authorization_url(self, state):
        return f"{self.authorize_url}?{urlencode({'client_id': self.client_id, 'state': state})}"

    def exchange_code(self, code):
        """Trade the callback `code` for an access token."""
        try:
            resp = requests.post(
                self.token_url,
                data={
                    'client_id': self.client_id,
                    'client_secret': self.client_secret,
                    'code': code,
                },
                headers={'Accept': 'application/json'},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise OAuthError(f'Token request failed: {e}') from e

        if resp.status_code != 200:
            raise OAuthError(f'Token endpoint returned {resp.status_code}', resp.status_code)

        payload = _json_body(resp)
        if 'error' in payload or not payload.get('access_token'):
            raise OAuthError(payload.get('error_description') or payload.get('error') or 'No access token')
        return payload['access_token']

    def fetch_user(self, access_token):
        """Return the GitHub user JSON (`id`, `login`, `name`, `avatar_url`, ...)."""
        try:
            resp = requests.get(
                self.user_api_url,
                headers={
                    'Authorization': f'Bearer {access_token}',
                    'User-Agent': self.user_agent,
                    'Accept': 'application/vnd.github+json',
                },
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise OAuthError(f'GitHub user request failed: {e}') from e

        if resp.status_code != 200:
            logger.error('GitHub user fetch error: %s %s', resp.status_code, resp.text)
            raise OAuthError('GitHub API Error', resp.status_code)

        user = _json_body(resp)
        if user.get('id') is None or not user.get('login'):
            logger.error('GitHub user payload missing id/login: %s', sorted(user))
            raise OAuthError('GitHub API Error', resp.status_code)
        return user


def github_client():
    return GitHubOAuth.from_config(current_app.config)
