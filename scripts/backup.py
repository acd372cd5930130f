"""
Download a JSON backup from a running deployment.

Usage: APP_URL=https://example.com BACKUP_API_KEY=... python scripts/backup.py [out_dir]
"""
import logging
import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv  # noqa: E402

from portfolio.services.backup import BackupError, download_backup  # noqa: E402

logging.basicConfig(level=logging.INFO, format='%(levelname)s %(message)s')
load_dotenv()

if __name__ == '__main__':
    out_dir = sys.argv[1] if len(sys.argv) > 1 else '.'
    try:
        path = download_backup(os.environ.get('APP_URL'), os.environ.get('BACKUP_API_KEY'), out_dir)
    except BackupError as e:
        logging.error('Backup failed: %s', e)
        sys.exit(1)
    print(f'Backup successfully saved to {path}')
