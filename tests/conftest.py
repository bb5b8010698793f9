"""
Shared fixtures: a Flask test app whose backend calls go to FakeSession
"""
import json
from urllib.parse import urlsplit

import pytest

from hostel_dashboard import create_app
from hostel_dashboard.core import attendance_drafts, system_logs

API_BASE_URL = 'http://backend.test'


class FakeResponse:
    """Just enough of requests.Response for HostelApiClient"""

    def __init__(self, status_code=200, body=None, raw=None):
        self.status_code = status_code
        if raw is not None:
            self.content = raw.encode()
        elif body is None:
            self.content = b''
        else:
            self.content = json.dumps(body).encode()

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        return json.loads(self.content.decode())


class FakeSession:
    """Stands in for requests.Session; routes are keyed by (METHOD, path)"""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, method, path, body=None, status=200, raw=None):
        self.routes[(method.upper(), path)] = FakeResponse(status, body, raw)

    def add_error(self, method, path, exc):
        self.routes[(method.upper(), path)] = exc

    def request(self, method, url, headers=None, params=None, json=None, timeout=None):
        path = urlsplit(url).path
        self.calls.append({
            'method': method,
            'path': path,
            'headers': headers or {},
            'params': params,
            'json': json,
            'timeout': timeout,
        })
        response = self.routes.get((method.upper(), path))
        if response is None:
            return FakeResponse(404, {'message': f'No route for {method} {path}'})
        if isinstance(response, Exception):
            raise response
        return response

    def calls_to(self, method, path):
        return [c for c in self.calls if c['method'] == method and c['path'] == path]


@pytest.fixture
def backend():
    return FakeSession()


@pytest.fixture
def app(backend):
    app = create_app(
        config={
            'TESTING': True,
            'SECRET_KEY': 'test-secret',
            'API_BASE_URL': API_BASE_URL,
            'RATELIMIT_ENABLED': False,
        },
        http_session=backend,
    )
    yield app
    attendance_drafts.clear()
    system_logs.clear()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client, app):
    """Store a token for a role in the test client's session"""
    def _login(role, token='tok-123', user=None):
        key = app.config['ROLES'][role]['token_key']
        with client.session_transaction() as sess:
            sess[key] = token
            if user is not None:
                sess[f'{role}_user'] = user
        return client
    return _login


@pytest.fixture
def flashes(client):
    """Messages flashed so far and not yet rendered"""
    def _flashes():
        with client.session_transaction() as sess:
            return [message for _, message in sess.get('_flashes', [])]
    return _flashes
