"""
Portfolio - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the public site and admin dashboard.
"""

import os

from flask import Flask
from sqlalchemy.engine import make_url

from portfolio.config import Config
from portfolio.extensions import blob_store, db, login_manager


def _ensure_sqlite_dir(app):
    """Create the directory of a file-backed SQLite database before create_all()."""
    url = make_url(app.config['SQLALCHEMY_DATABASE_URI'])
    if url.get_backend_name() != 'sqlite' or not url.database or url.database == ':memory:':
        return
    # Flask-SQLAlchemy resolves relative SQLite paths against the instance folder
    path = url.database
    if not os.path.isabs(path):
        path = os.path.join(app.instance_path, path)
    os.makedirs(os.path.dirname(path), exist_ok=True)


def create_app(config_class=Config):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    from portfolio.logging_setup import setup_logging
    setup_logging(app)

    # Initialize extensions
    db.init_app(app)
    blob_store.init_app(app)
    login_manager.init_app(app)
    login_manager.login_view = 'auth.signin'

    # Register blueprints
    from portfolio.auth import auth_bp
    from portfolio.admin import admin_bp
    from portfolio.public import public_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(public_bp)

    from portfolio.errors import register_error_handlers
    register_error_handlers(app)

    # Users are resolved from the auth-session cookie by the request_loader
    # registered in portfolio.auth.sessions.

    # Create database tables
    with app.app_context():
        _ensure_sqlite_dir(app)
        db.create_all()

    return app
