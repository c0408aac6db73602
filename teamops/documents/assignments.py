"""Project assignments kept in ``data.json``.

The file is maintained by hand and has carried the list under several keys
over time, so every reader normalizes whatever it finds.
"""
import logging

from teamops.documents import ASSIGNMENTS_PATH
from teamops.exceptions import GitHubError
from teamops.github import get_document_store

logger = logging.getLogger(__name__)

ASSIGNMENT_KEYS = ('assignments', 'projectAssignments', 'projects', 'data')


def _read_raw():
    data, _ = get_document_store().read_document(ASSIGNMENTS_PATH)
    return data if isinstance(data, dict) else {}


def normalize_assignment(item):
    return {
        'projectName': item.get('projectName') or item.get('project') or '',
        'engineer': item.get('engineer') or item.get('engineerName') or '',
        'startDate': item.get('startDate') or '',
        'endDate': item.get('endDate') or '',
        'daysAssigned': item.get('daysAssigned') or 0,
        'remainingDays': item.get('remainingDays') or 0,
        'status': item.get('status') or 'In Progress',
        'notes': item.get('notes') or '',
    }


def get_project_assignments():
    try:
        data = _read_raw()
    except (GitHubError, ValueError) as e:
        logger.error('Error fetching project assignments from GitHub: %s', e)
        return []

    assignments = []
    for key in ASSIGNMENT_KEYS:
        if data.get(key):
            assignments = data[key]
            break
    if not isinstance(assignments, list):
        return []
    return [normalize_assignment(item) for item in assignments if isinstance(item, dict)]


def get_unique_engineers():
    engineers = {item['engineer'].strip() for item in get_project_assignments() if item['engineer'].strip()}
    return sorted(engineers)


def get_project_names():
    """Sorted unique project names; errors propagate so callers can report them"""
    data = _read_raw()
    names = {item.get('projectName') for item in data.get('data') or [] if isinstance(item, dict)}
    return sorted(name for name in names if name)
