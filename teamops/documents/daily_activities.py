import uuid

from teamops.documents import DAILY_ACTIVITIES_PATH
from teamops.github import load_document, save_document, utc_timestamp


def _empty():
    return {'engineerDailyData': []}


def read_daily_activities():
    document = load_document(DAILY_ACTIVITIES_PATH, _empty)
    if not document.data.get('engineerDailyData'):
        document.data['engineerDailyData'] = []
    return document


def _write(data, sha, message):
    return save_document(DAILY_ACTIVITIES_PATH, data, f'{message} - {utc_timestamp()}', sha=sha)


def _find_entry(data, engineer_name, date):
    for entry in data['engineerDailyData']:
        if entry.get('engineerName') == engineer_name and entry.get('date') == date:
            return entry
    return None


def get_engineer_data_by_date(date):
    data, _ = read_daily_activities()
    return [item for item in data['engineerDailyData'] if item.get('date') == date]


def _add_item(engineer_name, text, date, item_id, field):
    data, sha = read_daily_activities()
    item_id = item_id or uuid.uuid4().hex[:9]

    entry = _find_entry(data, engineer_name, date)
    if entry is None:
        entry = {
            'engineerName': engineer_name,
            'date': date,
            'targetTasks': [],
            'completedActivities': [],
        }
        data['engineerDailyData'].append(entry)
    entry.setdefault(field, []).append({'id': item_id, 'text': text})

    success = _write(data, sha, 'Update engineer daily activities')
    return {'id': item_id, 'success': success}


def _remove_item(engineer_name, item_id, date, field):
    data, sha = read_daily_activities()
    entry = _find_entry(data, engineer_name, date)
    if entry is not None:
        entry[field] = [item for item in entry.get(field, []) if item.get('id') != item_id]

    success = _write(data, sha, 'Update engineer daily activities')
    return {'success': success}


def add_engineer_activity(engineer_name, activity, date, activity_id=None):
    """Log a completed activity for an engineer on a date"""
    return _add_item(engineer_name, activity, date, activity_id, 'completedActivities')


def delete_engineer_activity(engineer_name, activity_id, date):
    return _remove_item(engineer_name, activity_id, date, 'completedActivities')


def set_engineer_target_task(engineer_name, task, date, task_id=None):
    """Add a target task for an engineer on a date"""
    return _add_item(engineer_name, task, date, task_id, 'targetTasks')


def delete_engineer_target_task(engineer_name, task_id, date):
    return _remove_item(engineer_name, task_id, date, 'targetTasks')
