from teamops.documents import PROJECT_ACTIVITIES_PATH
from teamops.documents.assignments import get_project_assignments
from teamops.github import load_document, save_document, utc_timestamp


def _empty():
    return {'projectActivities': [], 'lastUpdated': utc_timestamp()}


def read_project_activities():
    document = load_document(PROJECT_ACTIVITIES_PATH, _empty)
    document.data.setdefault('projectActivities', [])
    return document


def _find(data, project_name):
    return next((p for p in data['projectActivities'] if p.get('projectName') == project_name), None)


def get_project_activities():
    """One row per assigned project, with its day-by-day activity log"""
    assignments = get_project_assignments()
    data, _ = read_project_activities()

    projects = {}
    for assignment in assignments:
        projects.setdefault(assignment['projectName'], assignment['status'])

    result = []
    for project_name, status in projects.items():
        entry = _find(data, project_name) or {}
        result.append({
            'projectName': project_name,
            'currentStatus': entry.get('currentStatus') or status,
            'activities': entry.get('activities') or {},
        })
    return result


def update_project_activity(project_name, date, activity):
    """Set the activity text for a date; an empty text clears that date"""
    data, sha = read_project_activities()

    entry = _find(data, project_name)
    if entry is None:
        entry = {'projectName': project_name, 'currentStatus': 'In Progress', 'activities': {}}
        data['projectActivities'].append(entry)

    activities = entry.setdefault('activities', {})
    if activity:
        activities[date] = activity
    else:
        activities.pop(date, None)
    data['lastUpdated'] = utc_timestamp()

    success = save_document(PROJECT_ACTIVITIES_PATH, data,
                            f'Update project activities - {utc_timestamp()}', sha=sha)
    return {'success': success}


def update_project_current_status(project_name, status):
    data, sha = read_project_activities()

    entry = _find(data, project_name)
    if entry is None:
        data['projectActivities'].append({'projectName': project_name, 'currentStatus': status, 'activities': {}})
    else:
        entry['currentStatus'] = status
    data['lastUpdated'] = utc_timestamp()

    success = save_document(PROJECT_ACTIVITIES_PATH, data,
                            f'Update project activities - {utc_timestamp()}', sha=sha)
    return {'success': success}
