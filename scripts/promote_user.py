"""
Set a user's role, e.g. to make the first GitHub sign-in the site owner.

Usage: python scripts/promote_user.py <username> [role]
"""
import sys
import os

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from portfolio import create_app  # noqa: E402
from portfolio.extensions import db  # noqa: E402
from portfolio.models import Role, User  # noqa: E402

if len(sys.argv) < 2:
    print('Usage: promote_user.py <username> [none|user|admin|owner]')
    sys.exit(1)

username = sys.argv[1]
role = Role(sys.argv[2] if len(sys.argv) > 2 else 'owner')

app = create_app()
with app.app_context():
    user = User.query.filter_by(username=username).first()

    if not user:
        print(f"No user named {username}; sign in with GitHub first")
        sys.exit(1)

    user.role = role
    db.session.commit()
    print(f"{username} is now {role.value}")
