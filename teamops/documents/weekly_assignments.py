from teamops.documents import WEEKLY_ASSIGNMENTS_PATH
from teamops.github import load_document, save_document, utc_timestamp


def _empty():
    return {'assignments': [], 'lastUpdated': utc_timestamp()}


def read_weekly_assignments():
    document = load_document(WEEKLY_ASSIGNMENTS_PATH, _empty)
    document.data.setdefault('assignments', [])
    return document


def _write(data, sha):
    data['lastUpdated'] = utc_timestamp()
    return save_document(WEEKLY_ASSIGNMENTS_PATH, data, 'Update weekly assignments', sha=sha)


def _index_of(items, item_id):
    for index, item in enumerate(items):
        if item.get('id') == item_id:
            return index
    return -1


def get_weekly_assignments(week_start=None):
    data, _ = read_weekly_assignments()
    if week_start:
        return [a for a in data['assignments'] if a.get('weekStart') == week_start]
    return data['assignments']


def get_weekly_assignment(assignment_id):
    data, _ = read_weekly_assignments()
    index = _index_of(data['assignments'], assignment_id)
    return data['assignments'][index] if index >= 0 else None


def upsert_weekly_assignment(assignment):
    """Replace the assignment with the same id, or append it"""
    data, sha = read_weekly_assignments()

    index = _index_of(data['assignments'], assignment['id'])
    if index >= 0:
        data['assignments'][index] = assignment
    else:
        data['assignments'].append(assignment)

    success = _write(data, sha)
    return {'success': success, 'assignment': assignment if success else None}


def save_weekly_assignments(assignments):
    """Upsert several assignments with a single write"""
    data, sha = read_weekly_assignments()
    for assignment in assignments:
        index = _index_of(data['assignments'], assignment['id'])
        if index >= 0:
            data['assignments'][index] = assignment
        else:
            data['assignments'].append(assignment)
    return _write(data, sha)


def delete_weekly_assignment(assignment_id):
    data, sha = read_weekly_assignments()

    index = _index_of(data['assignments'], assignment_id)
    if index < 0:
        return {'success': False}
    del data['assignments'][index]
    return {'success': _write(data, sha)}


def update_assignment_task(assignment_id, task):
    """Replace the task with the same id inside an assignment, or append it"""
    data, sha = read_weekly_assignments()

    index = _index_of(data['assignments'], assignment_id)
    if index < 0:
        return {'success': False}
    tasks = data['assignments'][index].setdefault('tasks', [])

    task_index = _index_of(tasks, task['id'])
    if task_index >= 0:
        tasks[task_index] = task
    else:
        tasks.append(task)
    return {'success': _write(data, sha)}


def delete_assignment_task(assignment_id, task_id):
    data, sha = read_weekly_assignments()

    index = _index_of(data['assignments'], assignment_id)
    if index < 0:
        return {'success': False}
    tasks = data['assignments'][index].setdefault('tasks', [])

    task_index = _index_of(tasks, task_id)
    if task_index < 0:
        return {'success': False}
    del tasks[task_index]
    return {'success': _write(data, sha)}
