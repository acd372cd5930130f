"""
Configuration settings for the Portfolio site and admin dashboard
"""
import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Flask application configuration"""

    # Flask secret key for sessions
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production-12345'

    # Database configuration
    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'portfolio.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Blob store for uploaded images (one file per key)
    BLOB_STORE_BACKEND = os.environ.get('BLOB_STORE_BACKEND') or 'filesystem'
    BLOB_STORE_PATH = os.environ.get('BLOB_STORE_PATH') or os.path.join(basedir, 'instance', 'blobs')

    # GitHub OAuth application
    GITHUB_CLIENT_ID = os.environ.get('GITHUB_CLIENT_ID') or ''
    GITHUB_CLIENT_SECRET = os.environ.get('GITHUB_CLIENT_SECRET') or ''
    GITHUB_AUTHORIZE_URL = 'https://github.com/login/oauth/authorize'
    GITHUB_TOKEN_URL = 'https://github.com/login/oauth/access_token'
    GITHUB_USER_API_URL = 'https://api.github.com/user'
    GITHUB_USER_AGENT = 'portfolio-dashboard'

    # Auth session cookie (token is hashed before it touches the database)
    AUTH_COOKIE_NAME = 'auth-session'
    OAUTH_STATE_COOKIE_NAME = 'github_oauth_state'
    SESSION_TTL_DAYS = 30
    SESSION_RENEW_DAYS = 15

    # Backup export, Bearer token accepted by /dashboard/api/admin/export
    BACKUP_API_KEY = os.environ.get('BACKUP_API_KEY') or ''

    # Bulk import inserts this many rows per statement
    IMPORT_CHUNK_SIZE = 20

    # Logging
    LOG_DIR = os.environ.get('LOG_DIR') or os.path.join(basedir, 'logs')

    # Site metadata for public pages
    SITE_TITLE = os.environ.get('SITE_TITLE') or 'Portfolio'
    SITE_DESCRIPTION = os.environ.get('SITE_DESCRIPTION') or \
        'Portfolio. Works, Blog, Skills, Awards, Certifications, and more.'


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    BLOB_STORE_BACKEND = 'memory'
    BACKUP_API_KEY = 'test-backup-key'
    GITHUB_CLIENT_ID = 'test-client-id'
    GITHUB_CLIENT_SECRET = 'test-client-secret'
