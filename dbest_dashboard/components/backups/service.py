"""
Backups Service
Database backup files managed by the backend's /backup endpoints
"""
import logging

from ...core.api_client import extract_record, get_api_client
from ...core.formatting import format_date, format_file_size

logger = logging.getLogger(__name__)

EMPTY_INFO = {'database_size': 0, 'backup_count': 0, 'last_backup': None, 'backups': []}


def _size(value):
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def backup_stats(info):
    """Header cards for the backups page"""
    backups = info.get('backups') or []
    total_size = sum(_size(backup.get('size')) for backup in backups)
    return [
        {'label': 'Database Size', 'value': format_file_size(info.get('database_size') or 0)},
        {'label': 'Backups Stored', 'value': info.get('backup_count') or 0},
        {'label': 'Last Backup', 'value': format_date(info['last_backup']) if info.get('last_backup') else 'Never'},
        {'label': 'Total Backup Size', 'value': format_file_size(total_size)},
    ]


class BackupService:
    """Backup info, creation, download and deletion"""

    def get_info(self):
        data, _ = get_api_client().get('/backup/info', label='backup information')
        info = dict(EMPTY_INFO)
        info.update(extract_record(data))
        info['backups'] = info.get('backups') or []
        return info

    def create(self, backup_type='database'):
        data, _ = get_api_client().post('/backup/create', {'type': backup_type}, label='backup')
        logger.info(f'Created {backup_type} backup')
        return data

    def download(self, filename):
        """(content, filename, content_type) of one backup file"""
        content, name, content_type = get_api_client().download(
            f'/backup/download/{filename}', default_filename=filename)
        logger.info(f'Downloaded backup {filename} ({len(content)} bytes)')
        return content, name, content_type

    def delete(self, filename):
        get_api_client().delete(f'/backup/delete/{filename}', label='backup')
        logger.info(f'Deleted backup {filename}')
