import base64
import copy
import json
import itertools

import pytest
import requests

from teamops import create_app
from teamops.exceptions import DocumentNotFound, GitHubError
from teamops.github import Document


class FakeDocumentStore:
    """Repository contents held in a dict of path -> (data, sha)"""

    def __init__(self, documents=None):
        self._shas = itertools.count(1)
        self.documents = {}
        self.writes = []
        self.fail_reads = set()
        self.fail_writes = False
        for path, data in (documents or {}).items():
            self.put(path, data)

    def put(self, path, data):
        self.documents[path] = (copy.deepcopy(data), f'sha-{next(self._shas)}')

    def data(self, path):
        return self.documents[path][0]

    def sha(self, path):
        return self.documents[path][1]

    def read_document(self, path):
        if path in self.fail_reads:
            raise GitHubError(f'Failed to read {path}: HTTP 500', status=500)
        if path not in self.documents:
            raise DocumentNotFound(path)
        data, sha = self.documents[path]
        return Document(copy.deepcopy(data), sha)

    def write_document(self, path, data, message, sha=None):
        if self.fail_writes:
            raise GitHubError(f'Failed to write {path}: HTTP 500', status=500)
        current = self.documents.get(path)
        if current is not None and current[1] != sha:
            raise GitHubError(f'Failed to write {path}: HTTP 409', status=409)
        if current is None and sha is not None:
            raise GitHubError(f'Failed to write {path}: HTTP 422', status=422)
        self.writes.append({'path': path, 'message': message, 'sha': sha})
        self.put(path, data)
        return True


class FakeResponse:
    """Just enough of ``requests.Response`` for the API clients"""

    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError('No JSON body')
        return self._payload

    def raise_for_status(self):
        if not self.ok:
            raise requests.HTTPError(f'HTTP {self.status_code}')


class FakeSession:
    """Records requests and replays queued responses"""

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []

    def _next(self, method, url, **kwargs):
        self.calls.append(dict(kwargs, method=method, url=url))
        return self.responses.pop(0)

    def get(self, url, **kwargs):
        return self._next('GET', url, **kwargs)

    def put(self, url, **kwargs):
        return self._next('PUT', url, **kwargs)


def encode_content(data):
    return base64.b64encode(json.dumps(data).encode('utf-8')).decode('ascii')


def admin_header(username='admin', role='admin'):
    token = base64.b64encode(json.dumps({'username': username, 'role': role}).encode('utf-8')).decode('ascii')
    return {'X-Admin-Auth': token}


ASSIGNMENTS = {
    'data': [
        {'projectName': 'Spot Welding Line', 'engineer': 'Keerthi', 'startDate': '2025-01-01',
         'endDate': '2025-03-01', 'status': 'In Progress', 'notes': 'PLC programming'},
        {'projectName': 'Spot Welding Line', 'engineer': 'Sachin', 'startDate': '2025-01-01',
         'endDate': '2025-03-01', 'status': 'In Progress'},
        {'projectName': 'Nozzle Cleaner', 'engineer': 'Keerthi', 'startDate': '2024-07-07',
         'endDate': '2024-09-22', 'status': 'Completed'},
    ]
}

CREDENTIALS = {
    'engineers': [
        {'id': 'admin-1', 'name': 'Admin', 'username': 'admin', 'password': 'admin@drb',
         'role': 'admin', 'isActive': True},
        {'id': '2', 'name': 'Keerthi', 'username': 'keerthi', 'password': 'drb@123',
         'role': 'engineer', 'isActive': True},
        {'id': '5', 'name': 'Sachin', 'username': 'sachin', 'password': 'drb@123',
         'role': 'engineer', 'isActive': False},
    ],
    'lastUpdated': '2025-01-01T00:00:00Z',
}


@pytest.fixture
def document_store():
    return FakeDocumentStore({
        'data.json': ASSIGNMENTS,
        'engineers_auth.json': CREDENTIALS,
    })


@pytest.fixture
def app(document_store):
    app = create_app('testing', document_store=document_store)
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_headers():
    return admin_header()
