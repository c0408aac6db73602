from flask import current_app

from teamops.documents import PROJECT_STATUS_PATH
from teamops.documents.assignments import get_project_assignments
from teamops.github import load_document, save_document, utc_timestamp
from teamops.metrics import status_completion_percentage


def _empty():
    return {'projectStatuses': [], 'lastUpdated': utc_timestamp()}


def read_project_status():
    document = load_document(PROJECT_STATUS_PATH, _empty)
    document.data.setdefault('projectStatuses', [])
    return document


def update_project_status(engineer_name, project_name, date, status):
    """Record the status an engineer reported for a project on one day"""
    data, sha = read_project_status()

    entry = next((p for p in data['projectStatuses']
                  if p.get('engineerName') == engineer_name and p.get('projectName') == project_name), None)
    if entry is None:
        entry = {'engineerName': engineer_name, 'projectName': project_name, 'statuses': {}}
        data['projectStatuses'].append(entry)

    entry.setdefault('statuses', {})[date] = status
    data['lastUpdated'] = utc_timestamp()

    success = save_document(PROJECT_STATUS_PATH, data,
                            f'Update project status tracking - {utc_timestamp()}', sha=sha)
    return {'success': success}


def get_project_status_tracking():
    assignments = get_project_assignments()
    data, _ = read_project_status()
    window_start = current_app.config.get('STATUS_WINDOW_START')
    window_end = current_app.config.get('STATUS_WINDOW_END')

    tracking = []
    for assignment in assignments:
        entry = next((p for p in data['projectStatuses']
                      if p.get('engineerName') == assignment['engineer']
                      and p.get('projectName') == assignment['projectName']), None)
        statuses = (entry or {}).get('statuses') or {}
        tracking.append({
            'engineerName': assignment['engineer'],
            'projectName': assignment['projectName'],
            'currentStatus': assignment['status'],
            'statuses': statuses,
            'completionPercentage': status_completion_percentage(statuses, window_start, window_end),
        })
    return tracking
