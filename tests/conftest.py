import itertools

import pytest

from portfolio import create_app
from portfolio.auth.sessions import create_session, generate_session_token
from portfolio.config import TestConfig
from portfolio.extensions import db
from portfolio.models import Role, Sns, User

_github_ids = itertools.count(1000)


@pytest.fixture()
def app():
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def ctx(app):
    """App context for tests that talk to the database directly."""
    with app.app_context():
        yield


def create_user(app, role=Role.ADMIN, username=None):
    """Insert a user and return its id."""
    github_id = next(_github_ids)
    with app.app_context():
        user = User(github_id=github_id, username=username or f'user{github_id}', role=Role(role))
        db.session.add(user)
        db.session.commit()
        return user.id


def sign_in(client, app, user_id):
    """Create a real session for `user_id` and put its token in the cookie jar."""
    token = generate_session_token()
    with app.app_context():
        create_session(token, user_id)
    client.set_cookie(app.config['AUTH_COOKIE_NAME'], token)
    return token


def seed_sns(app, count):
    """Insert `count` social links at orders 0..count-1; returns ids in order."""
    ids = []
    with app.app_context():
        for i in range(count):
            row = Sns(name=f'sns{i}', icon='icon', url=f'https://example.com/{i}', color='#000', order=i)
            db.session.add(row)
            db.session.flush()
            ids.append(row.id)
        db.session.commit()
    return ids


def orders_by_id(app, model):
    with app.app_context():
        return {row.id: row.order for row in model.query.all()}


@pytest.fixture()
def admin_client(app, client):
    sign_in(client, app, create_user(app, Role.ADMIN, username='admin'))
    return client


@pytest.fixture()
def owner_client(app, client):
    sign_in(client, app, create_user(app, Role.OWNER, username='owner'))
    return client
