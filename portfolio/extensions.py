"""
Flask Extensions

Shared extension instances, bound to the app in create_app().
"""

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

from portfolio.storage import BlobStoreExtension

# Database instance
db = SQLAlchemy()

# Login manager; users are resolved from the auth-session cookie
login_manager = LoginManager()

# Key-value store holding uploaded image bytes
blob_store = BlobStoreExtension()
