"""Engineer rosters: the master list and the daily-tasks configuration.

``engineers_master_list.json`` is the source of truth for who appears on the
daily tasks board. ``engineer-daily-tasks.json`` is an older copy of the same
list that is still initialized for clients reading it directly.
"""
from teamops.documents import ENGINEER_DAILY_TASKS_PATH, ENGINEER_MASTER_LIST_PATH
from teamops.github import load_document, save_document, utc_timestamp
from teamops.metrics import initials_for

DEFAULT_ENGINEERS = [
    {'id': '1', 'name': 'Susanth', 'initials': 'S'},
    {'id': '2', 'name': 'Keerthi', 'initials': 'K'},
    {'id': '4', 'name': 'Dyumith', 'initials': 'D'},
    {'id': '5', 'name': 'Sachin', 'initials': 'S'},
    {'id': '7', 'name': 'Prakash', 'initials': 'P'},
    {'id': '8', 'name': 'Deekshitha', 'initials': 'D'},
    {'id': '9', 'name': 'Praveen', 'initials': 'PK'},
    {'id': '10', 'name': 'Harikrishnan', 'initials': 'H'},
    {'id': '12', 'name': 'Shubam', 'initials': 'SS'},
    {'id': '13', 'name': 'Veeresh', 'initials': 'V'},
]


def _empty():
    return {'engineers': [], 'lastUpdated': utc_timestamp()}


def _read(path):
    document = load_document(path, _empty)
    document.data.setdefault('engineers', [])
    return document


def read_engineer_master_list():
    return _read(ENGINEER_MASTER_LIST_PATH)


def write_engineer_master_list(data, sha=None):
    return save_document(ENGINEER_MASTER_LIST_PATH, data,
                         f'Update engineers master list - {utc_timestamp()}', sha=sha)


def read_engineer_daily_tasks():
    return _read(ENGINEER_DAILY_TASKS_PATH)


def write_engineer_daily_tasks(data, sha=None):
    return save_document(ENGINEER_DAILY_TASKS_PATH, data,
                         f'Update engineer daily tasks config - {utc_timestamp()}', sha=sha)


def _default_roster():
    return {'engineers': [dict(e) for e in DEFAULT_ENGINEERS], 'lastUpdated': utc_timestamp()}


def initialize_engineer_master_list():
    data, sha = read_engineer_master_list()
    if data['engineers']:
        return {'success': True}
    return {'success': write_engineer_master_list(_default_roster(), sha=sha)}


def initialize_engineer_daily_tasks_file():
    data, sha = read_engineer_daily_tasks()
    if data['engineers']:
        return {'success': True}
    return {'success': write_engineer_daily_tasks(_default_roster(), sha=sha)}


def get_engineer_daily_tasks_config():
    data, _ = read_engineer_master_list()
    if not data['engineers']:
        initialize_engineer_master_list()
        data, _ = read_engineer_master_list()
    return data['engineers']


def build_master_list(engineers):
    """Fill in missing ids and initials for a roster submitted by a client"""
    roster = []
    for index, engineer in enumerate(engineers):
        roster.append({
            'id': engineer.get('id') or f'eng-{index + 1}',
            'name': engineer['name'],
            'initials': engineer.get('initials') or initials_for(engineer['name']),
        })
    return roster


def update_engineer_master_list(engineers):
    _, sha = read_engineer_master_list()
    data = {'engineers': build_master_list(engineers), 'lastUpdated': utc_timestamp()}
    success = write_engineer_master_list(data, sha=sha)
    return {'success': success, 'engineers': data['engineers']}
