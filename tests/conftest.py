import json
import time

import pytest

from dbest_dashboard import create_app
from dbest_dashboard.config.settings import TestingConfig
from dbest_dashboard.core import api_metrics, system_logs

BASE_URL = TestingConfig.API_BASE_URL


class FakeResponse:
    def __init__(self, status_code=200, payload=None, content=None, headers=None):
        self.status_code = status_code
        if content is None:
            content = b'' if payload is None else json.dumps(payload).encode()
        self.content = content
        self.headers = headers or {'Content-Type': 'application/json'}

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        return json.loads(self.content.decode())


class FakeHttp:
    """Stands in for the requests module; answers by (method, path)"""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, method, path, payload=None, status=200, **kwargs):
        self.routes[(method, path)] = FakeResponse(status, payload, **kwargs)

    def fail(self, method, path, exc):
        self.routes[(method, path)] = exc

    def request(self, method, url, headers=None, json=None, params=None, timeout=None):
        path = url[len(BASE_URL):] if url.startswith(BASE_URL) else url
        self.calls.append({'method': method, 'path': path, 'headers': headers or {}, 'json': json,
                           'params': params})
        response = self.routes.get((method, path))
        if isinstance(response, Exception):
            raise response
        if response is None:
            return FakeResponse(404, {'message': 'Not found'})
        return response

    def called(self, method, path):
        return [call for call in self.calls if call['method'] == method and call['path'] == path]


@pytest.fixture(autouse=True)
def reset_state():
    system_logs.clear()
    api_metrics.clear()
    yield


@pytest.fixture
def http():
    return FakeHttp()


@pytest.fixture
def app(http):
    app = create_app(TestingConfig)
    app.extensions['dbest_http'] = http
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def sign_in(client, user_type, user=None, token='test-token', timestamp=None):
    with client.session_transaction() as sess:
        sess['access_token'] = token
        sess['user_type'] = user_type
        sess['token_timestamp'] = time.time() if timestamp is None else timestamp
        sess['user'] = user or {'id': 1, 'first_name': 'Ana', 'last_name': 'Santos'}


@pytest.fixture
def custodian(client):
    sign_in(client, 'property_custodian')
    return client


@pytest.fixture
def teacher(client):
    sign_in(client, 'teacher')
    return client


@pytest.fixture
def ict(client):
    sign_in(client, 'ict')
    return client


@pytest.fixture
def accounting(client):
    sign_in(client, 'accounting')
    return client
