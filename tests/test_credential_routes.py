from conftest import admin_header
from teamops.documents import ENGINEER_CREDENTIALS_PATH, ENGINEER_MASTER_LIST_PATH


def test_credentials_require_admin(client):
    assert client.get('/api/engineer-credentials').status_code == 403
    assert client.get('/api/engineer-credentials',
                      headers=admin_header('keerthi', 'engineer')).status_code == 403
    assert client.delete('/api/engineer-credentials/2').status_code == 403


def test_list_credentials_hides_passwords(client, admin_headers):
    response = client.get('/api/engineer-credentials', headers=admin_headers)

    assert response.status_code == 200
    engineers = response.get_json()['engineers']
    assert [e['username'] for e in engineers] == ['admin', 'keerthi', 'sachin']
    assert all('password' not in e for e in engineers)


def test_initialize_credentials(client, admin_headers, document_store):
    document_store.put(ENGINEER_MASTER_LIST_PATH, {'engineers': [{'id': '13', 'name': 'Veeresh'}]})

    response = client.post('/api/engineer-credentials/initialize', headers=admin_headers)

    assert response.get_json() == {'success': True, 'created': 1}
    usernames = [e['username'] for e in document_store.data(ENGINEER_CREDENTIALS_PATH)['engineers']]
    assert 'veeresh' in usernames


def test_create_and_update_credential(client, admin_headers, document_store):
    created = client.post('/api/engineer-credentials', headers=admin_headers,
                          json={'name': 'Anand', 'password': 'start123'})
    assert created.status_code == 200
    engineer = created.get_json()['engineer']
    assert engineer['username'] == 'anand'
    assert 'password' not in engineer

    updated = client.put(f"/api/engineer-credentials/{engineer['id']}", headers=admin_headers,
                         json={'isActive': False})
    assert updated.get_json()['engineer']['isActive'] is False

    stored = next(e for e in document_store.data(ENGINEER_CREDENTIALS_PATH)['engineers']
                  if e['username'] == 'anand')
    assert stored['password'] == 'start123'


def test_credential_role_is_validated(client, admin_headers):
    response = client.put('/api/engineer-credentials/2', headers=admin_headers, json={'role': 'owner'})
    assert response.status_code == 400


def test_delete_credential(client, admin_headers):
    assert client.delete('/api/engineer-credentials/2', headers=admin_headers).status_code == 200
    assert client.delete('/api/engineer-credentials/2', headers=admin_headers).status_code == 404


def test_reset_password(client):
    assert client.post('/api/engineer-credentials/reset-password', json={'username': 'keerthi'}).status_code == 400
    assert client.post('/api/engineer-credentials/reset-password',
                       json={'username': 'ghost', 'newPassword': 'x'}).status_code == 404

    response = client.post('/api/engineer-credentials/reset-password',
                           json={'username': 'keerthi', 'newPassword': 'changed'})
    assert response.status_code == 200
    assert client.post('/api/auth/login', json={'username': 'keerthi', 'password': 'changed'}).status_code == 200
