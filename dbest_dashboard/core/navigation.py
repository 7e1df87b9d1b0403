"""
Sidebar menus and active-link matching
"""
from urllib.parse import parse_qsl, urlsplit

from flask import session

MENUS = {
    'property_custodian': [
        ('Core', [
            ('Dashboard', '/custodian'),
        ]),
        ('Inventory Management', [
            ('Inventory', '/custodian/inventory'),
            ('Categories', '/custodian/inventory/categories'),
            ('Assigned Items', '/custodian/assigned-items'),
        ]),
        ('DCP', [
            ('DCP Packages', '/custodian/dcp-packages'),
            ('DCP Inventory', '/custodian/dcp-inventory'),
        ]),
        ('Personnel', [
            ('Personnel Management', '/custodian/personnel'),
        ]),
        ('Reports', [
            ('Inventory Reports', '/custodian/reports'),
        ]),
        ('Account', [
            ('School Profile', '/custodian/profile'),
            ('Settings', '/custodian/settings'),
        ]),
    ],
    'teacher': [
        ('Dashboard', [
            ('Overview', '/faculty'),
        ]),
        ('My Account', [
            ('My Items', '/faculty/assigned-items'),
            ('My Profile', '/faculty/profile'),
        ]),
    ],
    'ict': [
        ('Core', [
            ('Dashboard', '/dashboard'),
        ]),
        ('System Management', [
            ('Backups', '/backups'),
            ('System Status', '/system'),
            ('System Logs', '/system/logs'),
            ('Settings', '/settings'),
        ]),
        ('User Management', [
            ('DepEd Schools', '/dashboard/ict/schools'),
            ('Property Custodians', '/dashboard/ict/custodians'),
            ('Accounting', '/dashboard/ict/accounting'),
        ]),
        ('DCP Management', [
            ('DCP Packages', '/dashboard/ict/dcp-packages'),
        ]),
    ],
    'accounting': [
        ('Dashboard', [
            ('Overview', '/finance'),
        ]),
        ('Analytics', [
            ('Inventory Analytics', '/finance/analytics'),
            ('Inventory List', '/finance/inventory'),
        ]),
        ('Account', [
            ('Profile', '/finance/profile'),
            ('Settings', '/settings'),
        ]),
    ],
}


def is_active_link(href, path, args=None):
    """Exact path match; every query parameter in href must equal the current one"""
    target = urlsplit(href)
    if target.path != path:
        return False
    args = args or {}
    for key, value in parse_qsl(target.query, keep_blank_values=True):
        if args.get(key) != value:
            return False
    return True


def build_sidebar(user_type, path, args=None):
    """Menu sections for a role with the active item flagged"""
    sections = []
    for heading, items in MENUS.get(user_type, []):
        sections.append({
            'heading': heading,
            'items': [
                {'label': label, 'href': href, 'active': is_active_link(href, path, args)}
                for label, href in items
            ],
        })
    return sections


def is_sidebar_collapsed():
    return bool(session.get('sidebar_collapsed', False))


def toggle_sidebar():
    session['sidebar_collapsed'] = not is_sidebar_collapsed()
    return session['sidebar_collapsed']
