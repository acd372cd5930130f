"""
Dashboard Menu

Entries are shown to users whose role is at least `required_role`.
"""

from collections import namedtuple

from portfolio.auth.roles import role_is_over
from portfolio.models.enums import Role

MenuItem = namedtuple('MenuItem', ['label', 'href', 'icon', 'required_role', 'description'])

MENU_ITEMS = [
    MenuItem('Dashboard', '/dashboard', 'GridSolid', Role.USER, 'Overview of the system.'),
    MenuItem('Users', '/dashboard/users', 'UsersGroupSolid', Role.ADMIN,
             'Manage registered users and access roles.'),
    MenuItem('Images', '/dashboard/images', 'ImageSolid', Role.ADMIN, 'Upload and view image assets.'),
    MenuItem('Works', '/dashboard/works', 'BriefcaseSolid', Role.ADMIN,
             'Manage portfolio items and projects.'),
    MenuItem('Blog', '/dashboard/blog', 'NewspaperSolid', Role.ADMIN, 'Manage blog posts and content.'),
    MenuItem('Awards', '/dashboard/awards', 'AwardSolid', Role.ADMIN, 'Manage awards and recognitions.'),
    MenuItem('Certifications', '/dashboard/certifications', 'BadgeCheckSolid', Role.ADMIN,
             'Manage certifications and credentials.'),
    MenuItem('Skills', '/dashboard/skills', 'LightbulbSolid', Role.USER, 'Manage skill list and ordering.'),
    MenuItem('SNS', '/dashboard/sns', 'ShareNodesSolid', Role.USER, 'Manage SNS links and settings.'),
]


def menu_for(role):
    """Menu entries visible to `role`, as JSON-ready dicts."""
    return [
        {
            'label': item.label,
            'href': item.href,
            'icon': item.icon,
            'requiredRole': item.required_role.value,
            'description': item.description,
        }
        for item in MENU_ITEMS
        if role_is_over(item.required_role, role)
    ]
