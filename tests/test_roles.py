import pytest

from portfolio.admin.menu import MENU_ITEMS, menu_for
from portfolio.auth.roles import can_assign_role, rank, role_is_over
from portfolio.models import Role


@pytest.mark.parametrize('base,target,expected', [
    (Role.USER, Role.ADMIN, True),
    (Role.ADMIN, Role.ADMIN, True),
    (Role.ADMIN, Role.USER, False),
    (Role.OWNER, Role.ADMIN, False),
    (Role.NONE, Role.NONE, True),
    (Role.USER, Role.NONE, False),
    ('admin', 'owner', True),
])
def test_role_is_over(base, target, expected):
    assert role_is_over(base, target) is expected


def test_unknown_role_ranks_lowest():
    assert rank('superuser') == 0
    assert not role_is_over(Role.USER, 'superuser')


def test_admin_can_promote_none_to_user():
    assert can_assign_role(Role.ADMIN, Role.NONE, Role.USER) == (True, None)


def test_admin_cannot_grant_admin():
    allowed, message = can_assign_role(Role.ADMIN, Role.USER, Role.ADMIN)
    assert not allowed
    assert message == 'Only Owner can assign Admin or Owner roles'


def test_admin_cannot_touch_other_admin():
    allowed, message = can_assign_role(Role.ADMIN, Role.ADMIN, Role.USER)
    assert not allowed
    assert message == 'Only Owner can modify Admin or Owner users'


def test_owner_can_do_anything():
    assert can_assign_role(Role.OWNER, Role.ADMIN, Role.NONE)[0]
    assert can_assign_role(Role.OWNER, Role.USER, Role.OWNER)[0]


def test_user_cannot_assign_roles():
    assert can_assign_role(Role.USER, Role.NONE, Role.USER) == (False, 'Forbidden')


def test_menu_for_user_shows_only_user_items():
    labels = [item['label'] for item in menu_for(Role.USER)]
    assert labels == ['Dashboard', 'Skills', 'SNS']


def test_menu_for_admin_shows_everything():
    assert len(menu_for(Role.ADMIN)) == len(MENU_ITEMS)
    assert len(menu_for(Role.OWNER)) == len(MENU_ITEMS)


def test_menu_for_none_is_empty():
    assert menu_for(Role.NONE) == []
