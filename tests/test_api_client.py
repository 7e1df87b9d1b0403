import pytest
import requests

from dbest_dashboard.core import api_metrics
from dbest_dashboard.core.api_client import (CONNECTION_ERROR_MESSAGE, ApiClient, extract_list, extract_record)
from dbest_dashboard.core.errors import AccountDeactivatedError, ApiRequestError, AuthenticationError

from .conftest import BASE_URL, FakeHttp, FakeResponse


@pytest.fixture
def api(http):
    return ApiClient(BASE_URL, token='abc', http=http)


def test_extract_list_handles_wrapped_and_bare_payloads():
    assert extract_list({'data': [1, 2]}) == [1, 2]
    assert extract_list({'items': [3]}) == [3]
    assert extract_list([4]) == [4]
    assert extract_list({'message': 'ok'}) == []
    assert extract_list(None) == []


def test_extract_list_tries_named_keys_first():
    payload = {'success': True, 'packages': [{'id': 1}], 'data': []}
    assert extract_list(payload, 'packages') == [{'id': 1}]
    assert extract_list(payload) == []
    assert extract_list({'schools': [{'id': 3}]}, 'schools') == [{'id': 3}]


def test_fetch_list_reads_named_key(api, http):
    http.add('GET', '/ict/dcp-packages', {'success': True, 'packages': [{'id': 2}]})
    assert api.fetch_list('/ict/dcp-packages', 'DCP packages', keys=('packages',)) == [{'id': 2}]


def test_extract_record_prefers_named_key():
    assert extract_record({'school': {'id': 1}, 'data': {'id': 2}}, 'school') == {'id': 1}
    assert extract_record({'data': {'id': 2}}) == {'id': 2}
    assert extract_record({'id': 3}) == {'id': 3}


def test_requests_carry_bearer_token_and_json_headers(api, http):
    http.add('GET', '/ict/schools', {'data': []})
    api.get('/ict/schools')
    headers = http.calls[0]['headers']
    assert headers['Authorization'] == 'Bearer abc'
    assert headers['Accept'] == 'application/json'


def test_anonymous_client_sends_no_authorization(http):
    http.add('POST', '/auth/login', {'token': 't'})
    ApiClient(BASE_URL, http=http).post('/auth/login', {'username': 'a'})
    assert 'Authorization' not in http.calls[0]['headers']
    assert http.calls[0]['json'] == {'username': 'a'}


def test_backend_message_becomes_error_message(api, http):
    http.add('POST', '/ict/schools', {'message': 'The name has already been taken.',
                                      'errors': {'name': ['The name has already been taken.']}}, status=422)
    with pytest.raises(ApiRequestError) as info:
        api.post('/ict/schools', {'name': 'Rizal ES'})
    assert info.value.message == 'The name has already been taken.'
    assert info.value.status_code == 422
    assert info.value.errors == {'name': ['The name has already been taken.']}


def test_missing_message_falls_back_to_label(api, http):
    http.add('GET', '/ict/backups', None, status=500)
    with pytest.raises(ApiRequestError) as info:
        api.get('/ict/backups', label='backups')
    assert info.value.message == 'Failed to fetch backups (500)'


def test_401_raises_authentication_error(api, http):
    http.add('GET', '/teacher/user', {'message': 'Unauthenticated.'}, status=401)
    with pytest.raises(AuthenticationError):
        api.get('/teacher/user')


def test_423_with_details_raises_deactivated(api, http):
    http.add('POST', '/auth/login', {'message': 'Account deactivated',
                                     'deactivation': {'reason': 'Transferred'}}, status=423)
    with pytest.raises(AccountDeactivatedError) as info:
        api.post('/auth/login')
    assert info.value.deactivation == {'reason': 'Transferred'}


def test_connection_failure_is_reported_and_counted(api, http):
    http.fail('GET', '/ict/settings', requests.exceptions.ConnectionError('refused'))
    with pytest.raises(ApiRequestError) as info:
        api.get('/ict/settings')
    assert info.value.message == CONNECTION_ERROR_MESSAGE
    assert api_metrics['ict/settings']['errors'] == 1


def test_metrics_count_requests_per_resource(api, http):
    http.add('GET', '/property-custodian/inventory', {'data': []})
    api.get('/property-custodian/inventory')
    api.get('/property-custodian/inventory')
    assert api_metrics['property-custodian/inventory']['requests'] == 2
    assert api_metrics['property-custodian/inventory']['last_status'] == 200


def test_fetch_all_pages_walks_until_last_page():
    pages = {1: {'data': [{'id': 1}], 'last_page': 2}, 2: {'data': [{'id': 2}], 'last_page': 2}}

    class PagedHttp(FakeHttp):
        def request(self, method, url, headers=None, json=None, params=None, timeout=None):
            self.calls.append({'params': params})
            return FakeResponse(200, pages[params['page']])

    http = PagedHttp()
    items = ApiClient(BASE_URL, http=http).fetch_all_pages('/accounting/inventory', per_page=1)
    assert items == [{'id': 1}, {'id': 2}]
    assert [call['params']['page'] for call in http.calls] == [1, 2]


def test_fetch_many_returns_every_result(api, http):
    http.add('GET', '/ict/settings', {'data': [{'key': 'a'}]})
    http.add('GET', '/ict/backups', [])
    results = api.fetch_many({'settings': ('/ict/settings', 'settings'), 'backups': ('/ict/backups', 'backups')})
    assert results == {'settings': {'data': [{'key': 'a'}]}, 'backups': []}


def test_fetch_many_prefers_authentication_failures(api, http):
    http.add('GET', '/a', None, status=500)
    http.add('GET', '/b', {'message': 'Unauthenticated.'}, status=401)
    with pytest.raises(AuthenticationError):
        api.fetch_many({'a': ('/a', 'a'), 'b': ('/b', 'b')})
    assert len(http.calls) == 2


def test_download_reads_filename_from_disposition(api, http):
    http.routes[('GET', '/backup/download/db.sql')] = FakeResponse(
        200, content=b'-- dump',
        headers={'Content-Disposition': 'attachment; filename="backup_2024.sql"',
                 'Content-Type': 'application/sql'})
    assert api.download('/backup/download/db.sql') == (b'-- dump', 'backup_2024.sql', 'application/sql')
