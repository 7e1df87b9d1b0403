"""
ICT Dashboard Service
"""
import logging

from ...core.api_client import extract_list, get_api_client

logger = logging.getLogger(__name__)

BACKUP_TYPES = [('database', 'Database'), ('full', 'Full')]

BACKUP_STATUS_COLORS = {
    'pending': 'warning',
    'completed': 'success',
    'failed': 'danger',
}


def backup_status_color(status):
    return BACKUP_STATUS_COLORS.get(status, 'secondary')


class IctDashboardService:
    """System settings, backup records and custodian accounts"""

    def get_dashboard_data(self):
        results = get_api_client().fetch_many({
            'settings': ('/ict/settings', 'settings'),
            'backups': ('/ict/backups', 'backups'),
            'property_custodians': ('/ict/property-custodians', 'property custodians'),
        })
        return {key: extract_list(payload) for key, payload in results.items()}

    def create_backup(self, backup_type, notes=''):
        if backup_type not in dict(BACKUP_TYPES):
            raise ValueError('Select a backup type')
        body = {'type': backup_type}
        if notes:
            body['notes'] = notes
        get_api_client().post('/ict/backups', body, label='backup')
        logger.info(f'{backup_type} backup requested')

    def restore_backup(self, backup_id):
        get_api_client().post(f'/ict/backups/{backup_id}/restore', label='backup')
        logger.warning(f'Backup {backup_id} restore requested')
