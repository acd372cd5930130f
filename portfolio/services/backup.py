"""
Backup Export

Builds the JSON backup document served by the admin export endpoint, and
downloads it from a running deployment for scripts/backup.py.
"""

import logging
import os
from datetime import datetime, timezone

import requests

from portfolio.models import (
    User, Image, Work, WorkUrl, Blog, Sns, Skill, Certification, Award
)

logger = logging.getLogger(__name__)

EXPORT_VERSION = '1.0'
EXPORT_PATH = '/dashboard/api/admin/export'


class BackupError(Exception):
    """Raised when a backup cannot be downloaded or written."""


def build_export(now=None):
    """Return the full backup document: metadata plus every table."""
    now = now or datetime.now(timezone.utc)
    return {
        'metadata': {
            'exportedAt': now.isoformat(),
            'version': EXPORT_VERSION,
        },
        'data': {
            'users': [u.to_dict() for u in User.query.all()],
            'images': [i.to_dict() for i in Image.query.all()],
            'works': [w.to_dict() for w in Work.query.all()],
            'workUrls': [u.to_dict() for u in WorkUrl.query.all()],
            'blogs': [b.to_dict() for b in Blog.query.all()],
            'snss': [s.to_dict() for s in Sns.query.order_by(Sns.order).all()],
            'skills': [s.to_dict() for s in Skill.query.order_by(Skill.order).all()],
            'certifications': [c.to_dict() for c in Certification.query.order_by(Certification.order).all()],
            'awards': [a.to_dict() for a in Award.query.order_by(Award.order).all()],
        },
    }


def export_filename(now=None):
    now = now or datetime.now(timezone.utc)
    return f'portfolio-backup-{now.isoformat()}.json'


def download_backup(app_url, api_key, out_dir='.', today=None, timeout=30):
    """Fetch the export from `app_url` and save it as portfolio-backup-<date>.json."""
    if not app_url:
        raise BackupError('APP_URL is not defined')
    if not api_key:
        raise BackupError('BACKUP_API_KEY is not defined')

    date = (today or datetime.now(timezone.utc).date()).isoformat()
    filename = os.path.join(out_dir, f'portfolio-backup-{date}.json')
    url = app_url.rstrip('/') + EXPORT_PATH
    logger.info('Downloading backup from %s', url)

    try:
        resp = requests.get(url, headers={'Authorization': f'Bearer {api_key}'}, timeout=timeout)
    except requests.exceptions.RequestException as e:
        raise BackupError(f'Failed to fetch backup: {e}') from e

    if not resp.ok:
        raise BackupError(f'Failed to fetch backup: {resp.status_code} {resp.reason}')

    with open(filename, 'w', encoding='utf-8') as fh:
        fh.write(resp.text)
    logger.info('Backup saved to %s', filename)
    return filename
