import base64
import json

import pytest

from conftest import FakeResponse, FakeSession, encode_content
from teamops.connectors import ConnectorTokenProvider
from teamops.exceptions import ConnectorError, DocumentNotFound, GitHubError
from teamops.github import GitHubDocumentStore, load_document, save_document


def make_store(responses, branch=None):
    session = FakeSession(responses)
    store = GitHubDocumentStore('Github2drb', 'Controls_Team_Tracker',
                                ConnectorTokenProvider('github', static_token='secret'),
                                branch=branch, session=session)
    return store, session


def test_read_document_decodes_content_and_sha():
    store, session = make_store([FakeResponse(200, {'content': encode_content({'a': 1}), 'sha': 'abc'})])

    document = store.read_document('data.json')

    assert document.data == {'a': 1}
    assert document.sha == 'abc'
    call = session.calls[0]
    assert call['url'] == 'https://api.github.com/repos/Github2drb/Controls_Team_Tracker/contents/data.json'
    assert call['headers']['Authorization'] == 'Bearer secret'


def test_read_document_passes_branch_as_ref():
    store, session = make_store([FakeResponse(200, {'content': encode_content({}), 'sha': 'abc'})],
                                branch='main')
    store.read_document('data.json')
    assert session.calls[0]['params'] == {'ref': 'main'}


def test_read_missing_document_raises_not_found():
    store, _ = make_store([FakeResponse(404, {'message': 'Not Found'})])
    with pytest.raises(DocumentNotFound):
        store.read_document('weekly-assignments.json')


def test_read_directory_is_an_error():
    store, _ = make_store([FakeResponse(200, [{'name': 'data.json'}])])
    with pytest.raises(GitHubError):
        store.read_document('')


def test_write_document_sends_sha_and_encoded_json():
    store, session = make_store([FakeResponse(200, {'content': {'sha': 'new'}})])

    assert store.write_document('data.json', {'a': 1}, 'Update data', sha='abc')

    payload = session.calls[0]['json']
    assert session.calls[0]['method'] == 'PUT'
    assert payload['sha'] == 'abc'
    assert payload['message'] == 'Update data'
    assert json.loads(base64.b64decode(payload['content'])) == {'a': 1}


def test_write_new_document_omits_sha():
    store, session = make_store([FakeResponse(201, {'content': {'sha': 'new'}})])
    store.write_document('weekly-assignments.json', {'assignments': []}, 'Create')
    assert 'sha' not in session.calls[0]['json']


def test_write_conflict_raises_with_status():
    store, _ = make_store([FakeResponse(409, {'message': 'conflict'})])
    with pytest.raises(GitHubError) as excinfo:
        store.write_document('data.json', {}, 'Update', sha='stale')
    assert excinfo.value.status == 409


def test_unconnected_store_raises_github_error():
    store = GitHubDocumentStore('o', 'r', ConnectorTokenProvider('github'), session=FakeSession())
    with pytest.raises(GitHubError):
        store.read_document('data.json')


def test_connector_token_is_fetched_and_cached():
    session = FakeSession([FakeResponse(200, {'items': [
        {'settings': {'access_token': 'tok', 'expires_at': '2999-01-01T00:00:00Z'}}
    ]})])
    provider = ConnectorTokenProvider('github', hostname='connectors.example', identity='repl abc',
                                      session=session)

    assert provider.get_access_token() == 'tok'
    assert provider.get_access_token() == 'tok'
    assert len(session.calls) == 1
    assert session.calls[0]['url'] == 'https://connectors.example/api/v2/connection'
    assert session.calls[0]['params']['connector_names'] == 'github'
    assert session.calls[0]['headers']['X_REPLIT_TOKEN'] == 'repl abc'


def test_expired_connector_token_is_refreshed():
    session = FakeSession([
        FakeResponse(200, {'items': [{'settings': {'access_token': 'old', 'expires_at': '2000-01-01T00:00:00Z'}}]}),
        FakeResponse(200, {'items': [{'settings': {'oauth': {'credentials': {'access_token': 'new'}}}}]}),
    ])
    provider = ConnectorTokenProvider('sharepoint', hostname='connectors.example', identity='repl abc',
                                      session=session)

    assert provider.get_access_token() == 'old'
    assert provider.get_access_token() == 'new'


def test_connector_without_identity_is_not_connected():
    provider = ConnectorTokenProvider('github', hostname='connectors.example')
    with pytest.raises(ConnectorError):
        provider.get_access_token()
    assert not provider.is_connected()


def test_connector_without_connection_raises():
    session = FakeSession([FakeResponse(200, {'items': []})])
    provider = ConnectorTokenProvider('github', hostname='connectors.example', identity='repl abc',
                                      session=session)
    with pytest.raises(ConnectorError):
        provider.get_access_token()


def test_load_document_uses_defaults_when_missing(app):
    document = load_document('weekly-assignments.json', lambda: {'assignments': []})
    assert document.data == {'assignments': []}
    assert document.sha is None


def test_load_document_uses_defaults_on_error(app, document_store):
    document_store.fail_reads.add('data.json')
    document = load_document('data.json', dict)
    assert document.data == {}
    assert document.sha is None


def test_save_document_reports_failure(app, document_store):
    assert save_document('data.json', {}, 'Update', sha='stale') is False
    assert save_document('data.json', {}, 'Update', sha=document_store.sha('data.json')) is True
