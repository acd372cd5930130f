"""
Role Hierarchy

none < user < admin < owner. Every check is a pure comparison of two roles;
nothing here reads the request.
"""

from functools import wraps

from flask import abort
from flask_login import current_user

from portfolio.extensions import login_manager
from portfolio.models.enums import Role

ROLE_HIERARCHY = {
    Role.NONE: 0,
    Role.USER: 1,
    Role.ADMIN: 2,
    Role.OWNER: 3,
}


def rank(role):
    """Ordinal of `role`; unknown values rank as `none`."""
    try:
        return ROLE_HIERARCHY[Role(role)]
    except ValueError:
        return 0


def role_is_over(base_role, target_role):
    """True when `target_role` is at least `base_role`."""
    return rank(target_role) >= rank(base_role)


def can_assign_role(actor_role, target_role, new_role):
    """Decide whether an actor may change a user's role.

    Returns (allowed, message). Only admins and owners manage roles, and only
    an owner may grant admin/owner or touch a user who already holds either.
    """
    actor_role, target_role, new_role = Role(actor_role), Role(target_role), Role(new_role)
    if actor_role not in (Role.ADMIN, Role.OWNER):
        return False, 'Forbidden'
    is_owner = actor_role is Role.OWNER
    if new_role in (Role.ADMIN, Role.OWNER) and not is_owner:
        return False, 'Only Owner can assign Admin or Owner roles'
    if target_role in (Role.ADMIN, Role.OWNER) and not is_owner:
        return False, 'Only Owner can modify Admin or Owner users'
    return True, None


def role_required(role):
    """Decorator: sign-in redirect when anonymous, 403 when the role is too low."""
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            if not current_user.is_authenticated:
                return login_manager.unauthorized()
            if not role_is_over(role, current_user.role):
                abort(403)
            return f(*args, **kwargs)
        return wrapper
    return decorator
