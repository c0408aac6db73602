"""Engineer login accounts kept in ``engineers_auth.json``."""
import time

from flask import current_app

from teamops.documents import ENGINEER_CREDENTIALS_PATH
from teamops.documents.engineers import read_engineer_master_list
from teamops.github import load_document, save_document, utc_timestamp
from teamops.metrics import company_from, username_for


def _empty():
    return {'engineers': [], 'lastUpdated': utc_timestamp()}


def read_engineer_credentials():
    document = load_document(ENGINEER_CREDENTIALS_PATH, _empty)
    document.data.setdefault('engineers', [])
    return document


def write_engineer_credentials(data, sha=None):
    return save_document(ENGINEER_CREDENTIALS_PATH, data,
                         f'Update engineer credentials - {utc_timestamp()}', sha=sha)


def public_credential(engineer):
    """Credential without its password"""
    return {key: value for key, value in engineer.items() if key != 'password'}


def find_active_admin(username):
    data, _ = read_engineer_credentials()
    return next((e for e in data['engineers']
                 if e.get('username') == username and e.get('role') == 'admin' and e.get('isActive')), None)


def find_credential(username):
    data, _ = read_engineer_credentials()
    return next((e for e in data['engineers']
                 if (e.get('username') or '').lower() == (username or '').lower()), None)


def authenticate_engineer(username, password):
    """Return the matching active credential and stamp its last login"""
    data, sha = read_engineer_credentials()
    engineer = next((e for e in data['engineers']
                     if (e.get('username') or '').lower() == username.lower()
                     and e.get('password') == password and e.get('isActive')), None)

    if engineer:
        engineer['lastLogin'] = utc_timestamp()
        write_engineer_credentials(data, sha=sha)
    return engineer


def update_engineer_password(username, new_password):
    data, sha = read_engineer_credentials()
    engineer = next((e for e in data['engineers']
                     if (e.get('username') or '').lower() == username.lower()), None)
    if not engineer:
        return False

    engineer['password'] = new_password
    data['lastUpdated'] = utc_timestamp()
    return write_engineer_credentials(data, sha=sha)


def initialize_engineer_credentials():
    """Create a login for every master-list engineer plus the admin account"""
    master_list, _ = read_engineer_master_list()
    data, sha = read_engineer_credentials()
    default_password = current_app.config['DEFAULT_ENGINEER_PASSWORD']

    created = 0
    existing_usernames = {(e.get('username') or '').lower() for e in data['engineers']}

    for engineer in master_list['engineers']:
        username = username_for(engineer['name'])
        if username in existing_usernames:
            continue
        data['engineers'].append({
            'id': engineer['id'],
            'name': engineer['name'],
            'username': username,
            'password': default_password,
            'role': 'engineer',
            'company': company_from(engineer['name']),
            'isActive': True,
            'createdAt': utc_timestamp(),
        })
        existing_usernames.add(username)
        created += 1

    if 'admin' not in existing_usernames:
        data['engineers'].append({
            'id': 'admin-1',
            'name': 'Admin',
            'username': 'admin',
            'password': current_app.config['DEFAULT_ADMIN_PASSWORD'],
            'role': 'admin',
            'isActive': True,
            'createdAt': utc_timestamp(),
        })
        created += 1

    data['lastUpdated'] = utc_timestamp()
    success = write_engineer_credentials(data, sha=sha)
    return {'success': success, 'created': created}


def upsert_engineer_credential(engineer):
    """Merge into the credential matching by id or username, or create a new one"""
    data, sha = read_engineer_credentials()
    username = (engineer.get('username') or '').lower()

    index = -1
    for i, existing in enumerate(data['engineers']):
        if (engineer.get('id') and existing.get('id') == engineer['id']) or \
                (username and (existing.get('username') or '').lower() == username):
            index = i
            break

    if index >= 0:
        data['engineers'][index] = {**data['engineers'][index], **engineer}
        saved = data['engineers'][index]
    else:
        saved = {
            'id': engineer.get('id') or f'eng-{int(time.time() * 1000)}',
            'name': engineer['name'],
            'username': engineer.get('username') or username_for(engineer['name']),
            'password': engineer.get('password') or current_app.config['DEFAULT_ENGINEER_PASSWORD'],
            'role': engineer.get('role') or 'engineer',
            'company': engineer.get('company'),
            'isActive': engineer.get('isActive') is not False,
            'createdAt': utc_timestamp(),
        }
        data['engineers'].append(saved)

    data['lastUpdated'] = utc_timestamp()
    success = write_engineer_credentials(data, sha=sha)
    return {'success': success, 'engineer': saved}


def delete_engineer_credential(engineer_id):
    data, sha = read_engineer_credentials()
    remaining = [e for e in data['engineers'] if e.get('id') != engineer_id]
    if len(remaining) == len(data['engineers']):
        return False

    data['engineers'] = remaining
    data['lastUpdated'] = utc_timestamp()
    return write_engineer_credentials(data, sha=sha)
