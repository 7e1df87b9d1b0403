import logging

import requests

from dbest_dashboard.components.backups.service import backup_stats

from .conftest import BASE_URL, FakeResponse

BACKUP_INFO = {'data': {
    'database_size': 2048,
    'backup_count': 2,
    'last_backup': '2024-05-01T08:00:00Z',
    'backups': [
        {'name': 'backup_2024_05_01.sql', 'size': 1536, 'created_at': '2024-05-01T08:00:00Z'},
        {'name': 'backup_2024_04_01.sql', 'size': 512, 'created_at': '2024-04-01T08:00:00Z'},
    ],
}}

CUSTODIANS = [
    {'id': 1, 'username': 'pc.rizal', 'first_name': 'Ana', 'last_name': 'Santos', 'school_id': 3,
     'school': {'id': 3, 'name': 'Rizal ES'}, 'is_active': True},
    {'id': 2, 'username': 'pc.mabini', 'first_name': 'Ben', 'last_name': 'Cruz', 'school_id': 4,
     'school': {'id': 4, 'name': 'Mabini HS'}, 'is_active': False},
]


def test_backup_stats():
    stats = backup_stats(BACKUP_INFO['data'])
    assert [card['value'] for card in stats] == ['2 KB', 2, 'May 01, 2024', '2 KB']


def test_backup_stats_without_backups():
    stats = backup_stats({'database_size': 0, 'backup_count': 0, 'last_backup': None, 'backups': []})
    assert stats[2]['value'] == 'Never'


def test_backups_page_lists_files(ict, http):
    http.add('GET', '/backup/info', BACKUP_INFO)
    response = ict.get('/backups')
    assert response.status_code == 200
    assert b'backup_2024_05_01.sql' in response.data
    assert b'1.5 KB' in response.data


def test_create_backup(ict, http):
    http.add('POST', '/backup/create', {'message': 'Backup created'})
    response = ict.post('/backups/create', data={'type': 'full'})
    assert response.headers['Location'].endswith('/backups')
    assert http.called('POST', '/backup/create')[0]['json'] == {'type': 'full'}


def test_download_backup_streams_file(ict, http):
    http.routes[('GET', '/backup/download/backup_2024_05_01.sql')] = FakeResponse(
        200, content=b'-- dump', headers={'Content-Disposition': 'attachment; filename=backup_2024_05_01.sql',
                                         'Content-Type': 'application/sql'})
    response = ict.get('/backups/backup_2024_05_01.sql/download')
    assert response.status_code == 200
    assert response.data == b'-- dump'
    assert 'backup_2024_05_01.sql' in response.headers['Content-Disposition']


def test_failed_download_returns_to_list(ict, http):
    response = ict.get('/backups/missing.sql/download')
    assert response.headers['Location'].endswith('/backups')


def test_delete_backup(ict, http):
    http.add('DELETE', '/backup/delete/backup_2024_04_01.sql', {'message': 'Deleted'})
    ict.post('/backups/backup_2024_04_01.sql/delete')
    assert http.called('DELETE', '/backup/delete/backup_2024_04_01.sql')


def test_ict_dashboard_backups_tab(ict, http):
    http.add('GET', '/ict/settings', {'data': [{'key': 'school_year', 'value': '2024-2025'}]})
    http.add('GET', '/ict/backups', {'data': [{'id': 5, 'type': 'database', 'status': 'completed'},
                                              {'id': 6, 'type': 'full', 'status': 'failed'}]})
    http.add('GET', '/ict/property-custodians', {'data': CUSTODIANS})
    response = ict.get('/dashboard?tab=backups')
    assert response.status_code == 200
    assert response.data.count(b'/dashboard/backups/5/restore') == 1
    assert b'/dashboard/backups/6/restore' not in response.data


def test_ict_dashboard_settings_tab(ict, http):
    http.add('GET', '/ict/settings', {'data': [{'key': 'school_year', 'value': '2024-2025'}]})
    http.add('GET', '/ict/backups', {'data': []})
    http.add('GET', '/ict/property-custodians', {'data': []})
    response = ict.get('/dashboard')
    assert b'school_year' in response.data


def test_dashboard_backup_rejects_unknown_type(ict, http):
    response = ict.post('/dashboard/backups', data={'type': 'partial'})
    assert 'tab=backups' in response.headers['Location']
    assert http.calls == []


def test_dashboard_backup_and_restore(ict, http):
    http.add('POST', '/ict/backups', {'data': {'id': 7}}, status=201)
    http.add('POST', '/ict/backups/5/restore', {'message': 'Restored'})
    ict.post('/dashboard/backups', data={'type': 'database', 'notes': 'Before enrolment'})
    ict.post('/dashboard/backups/5/restore')
    assert http.called('POST', '/ict/backups')[0]['json'] == {'type': 'database', 'notes': 'Before enrolment'}
    assert http.called('POST', '/ict/backups/5/restore')


def test_school_form_validates_contact_details(ict, http):
    response = ict.post('/dashboard/ict/schools/new', data={
        'name': 'Rizal ES', 'contact_phone': '12345', 'website': 'rizal.edu.ph'})
    assert b'Contact number must be exactly 11 digits' in response.data
    assert b'Enter a valid URL' in response.data
    assert not http.called('POST', '/ict/schools')


def test_school_create(ict, http):
    http.add('POST', '/ict/schools', {'data': {'id': 9}}, status=201)
    response = ict.post('/dashboard/ict/schools/new', data={
        'name': 'Rizal ES', 'contact_phone': '0951-341-9336', 'website': 'https://rizal.edu.ph'})
    assert response.headers['Location'].endswith('/dashboard/ict/schools')
    assert http.called('POST', '/ict/schools')[0]['json']['name'] == 'Rizal ES'


def test_custodian_list_counts(ict, http):
    http.add('GET', '/ict/property-custodians', {'data': CUSTODIANS})
    response = ict.get('/dashboard/ict/custodians?status=active')
    assert response.status_code == 200
    assert b'pc.rizal' in response.data
    assert b'pc.mabini' not in response.data


def test_custodian_school_must_be_free(ict, http):
    http.add('GET', '/ict/property-custodians', {'data': CUSTODIANS})
    http.add('GET', '/ict/schools', {'data': [{'id': 3, 'name': 'Rizal ES'}]})
    response = ict.post('/dashboard/ict/custodians/new', data={
        'username': 'PC.Rizal', 'first_name': 'Carl', 'last_name': 'Reyes', 'school_id': '3',
        'password': 'Secret123', 'password_confirmation': 'Secret123'})
    assert b'Rizal ES already has a property custodian assigned' in response.data
    assert b'This username is already taken' in response.data
    assert not http.called('POST', '/ict/property-custodians')


def test_custodian_edit_keeps_own_school_and_blank_password(ict, http):
    http.add('GET', '/ict/property-custodians', {'data': CUSTODIANS})
    http.add('PUT', '/ict/property-custodians/1', {'data': CUSTODIANS[0]})
    response = ict.post('/dashboard/ict/custodians/1/edit', data={
        'username': 'pc.rizal', 'first_name': 'Ana', 'last_name': 'Santos', 'school_id': '3',
        'password': '', 'password_confirmation': ''})
    assert response.headers['Location'].endswith('/dashboard/ict/custodians')
    body = http.called('PUT', '/ict/property-custodians/1')[0]['json']
    assert 'password' not in body
    assert body['school_id'] == '3'


def test_unknown_custodian_is_404(ict, http):
    http.add('GET', '/ict/property-custodians', {'data': CUSTODIANS})
    assert ict.get('/dashboard/ict/custodians/99/edit').status_code == 404


def test_accounting_account_deactivate_and_activate(ict, http):
    http.add('PATCH', '/ict/accountings/4/deactivate', {'message': 'ok'})
    http.add('PATCH', '/ict/accountings/4/activate', {'message': 'ok'})
    ict.post('/dashboard/ict/accounting/4/deactivate', data={'deactivate_reason': 'Resigned'})
    ict.post('/dashboard/ict/accounting/4/activate')
    assert http.called('PATCH', '/ict/accountings/4/deactivate')[0]['json'] == {'deactivate_reason': 'Resigned'}
    assert http.called('PATCH', '/ict/accountings/4/activate')


def test_settings_page_lists_system_settings(ict, http):
    http.add('GET', '/ict/settings', {'data': [{'key': 'maintenance_mode', 'value': 'off',
                                                'description': 'Read-only mode'}]})
    response = ict.get('/settings')
    assert response.status_code == 200
    assert b'maintenance_mode' in response.data


def test_health_reports_backend_status(client, http):
    http.add('GET', '', {'message': 'Not found'}, status=404)
    response = client.get('/health')
    assert response.status_code == 200
    assert response.get_json()['backend'] == 'healthy'


def test_health_is_503_when_backend_unreachable(client, http):
    http.fail('GET', '', requests.exceptions.ConnectionError('refused'))
    response = client.get('/health')
    assert response.status_code == 503
    assert response.get_json() == {'status': 'degraded', 'backend': 'down', 'api_base_url': BASE_URL}


def test_api_logs_returns_buffered_entries(ict):
    logging.getLogger('dbest_dashboard.tests').warning('Disk almost full')
    logging.getLogger('dbest_dashboard.tests').info('Routine message')
    logs = ict.get('/api/logs?level=warning').get_json()
    assert [entry['message'] for entry in logs] == ['Disk almost full']
    assert logs[0]['level'] == 'WARNING'


def test_system_logs_page(ict):
    logging.getLogger('dbest_dashboard.tests').error('Backup job failed')
    response = ict.get('/system/logs')
    assert b'Backup job failed' in response.data


def test_api_metrics_counts_backend_calls(ict, http):
    http.add('GET', '/backup/info', BACKUP_INFO)
    ict.get('/backups')
    metrics = ict.get('/api/system/metrics').get_json()
    assert metrics['resources']['backup/info']['requests'] == 1
    assert metrics['total_requests'] == 1
    assert metrics['total_errors'] == 0
