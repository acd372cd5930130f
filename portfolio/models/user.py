"""
User and Session Models

Users are created on first GitHub sign-in. Sessions store only the SHA-256
hash of the cookie token.
"""

from flask_login import UserMixin

from portfolio.extensions import db
from portfolio.models.base import new_uuid, enum_column
from portfolio.models.enums import Role


class User(UserMixin, db.Model):
    """Dashboard user linked to a GitHub account"""
    __tablename__ = 'user'

    id = db.Column(db.String(36), primary_key=True, default=new_uuid)
    github_id = db.Column(db.Integer, unique=True, nullable=False, index=True)
    username = db.Column(db.String(100), nullable=False)
    display_name = db.Column(db.String(100))
    avatar_url = db.Column(db.String(500))
    # Role-based access control, see portfolio.auth.roles
    role = enum_column(Role, nullable=False, default=Role.NONE)

    sessions = db.relationship('AuthSession', backref='user', lazy=True,
                               cascade='all, delete-orphan')

    def to_dict(self):
        return {
            'id': self.id,
            'githubId': self.github_id,
            'username': self.username,
            'displayName': self.display_name,
            'avatarUrl': self.avatar_url,
            'role': self.role.value if self.role else Role.NONE.value,
        }

    def __repr__(self):
        return f'<User {self.username} ({self.role})>'


class AuthSession(db.Model):
    """Server-side session; `id` is the hex SHA-256 of the cookie token"""
    __tablename__ = 'session'

    id = db.Column(db.String(64), primary_key=True)
    user_id = db.Column(db.String(36), db.ForeignKey('user.id'), nullable=False, index=True)
    expires_at = db.Column(db.DateTime, nullable=False)

    def __repr__(self):
        return f'<AuthSession user:{self.user_id} expires:{self.expires_at}>'
