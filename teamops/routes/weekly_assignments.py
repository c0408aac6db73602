import logging
import time
from flask import Blueprint, request, jsonify
from teamops.documents import weekly_assignments
from teamops.models import WeeklyTaskStatus, WeeklyAssignmentStatus
from teamops.utils import validate_weekly_task_status, validate_weekly_assignment_status

logger = logging.getLogger(__name__)

weekly_assignments_bp = Blueprint('weekly_assignments', __name__)

# Optional assignment fields copied from the request body as-is
ASSIGNMENT_FIELDS = ('projectTargetDate', 'resourceLockedFrom', 'resourceLockedTill', 'internalTarget',
                     'customerTarget', 'notes', 'constraint')

def _now_ms():
    return int(time.time() * 1000)

def _tasks_are_valid(tasks):
    return isinstance(tasks, list) and all(isinstance(task, dict) for task in tasks)

@weekly_assignments_bp.route('/api/weekly-assignments', methods=['GET'])
def get_weekly_assignments():
    """Get weekly assignments, optionally for a single week"""
    try:
        return jsonify(weekly_assignments.get_weekly_assignments(request.args.get('weekStart')))
    except Exception:
        logger.exception('Error fetching weekly assignments')
        return jsonify({'message': 'Failed to fetch weekly assignments'}), 503

@weekly_assignments_bp.route('/api/weekly-assignments', methods=['POST'])
def save_weekly_assignment():
    """Create an assignment, or overwrite the one with the same id"""
    data = request.get_json(silent=True) or {}

    if not data.get('engineerName') or not data.get('weekStart') or not data.get('projectName'):
        return jsonify({'message': 'Missing required fields: engineerName, weekStart, projectName'}), 400

    status = data.get('currentStatus') or WeeklyAssignmentStatus.NOT_STARTED.value
    is_valid, error = validate_weekly_assignment_status(status)
    if not is_valid:
        return jsonify({'message': error}), 400

    tasks = data.get('tasks') or []
    if not _tasks_are_valid(tasks):
        return jsonify({'message': 'tasks must be a list of objects'}), 400

    assignment = {
        'id': data.get('id') or f"{data['engineerName']}-{data['weekStart']}-{_now_ms()}",
        'engineerName': data['engineerName'],
        'weekStart': data['weekStart'],
        'projectName': data['projectName'],
        'tasks': tasks,
        'currentStatus': status,
    }
    for field in ASSIGNMENT_FIELDS:
        if field in data:
            assignment[field] = data[field]

    try:
        result = weekly_assignments.upsert_weekly_assignment(assignment)
    except Exception:
        logger.exception('Error saving weekly assignment')
        return jsonify({'message': 'Failed to save assignment'}), 500

    if not result['success']:
        return jsonify({'message': 'Failed to save assignment'}), 500
    return jsonify(result['assignment'])

@weekly_assignments_bp.route('/api/weekly-assignments/save-all', methods=['POST'])
def save_all_weekly_assignments():
    """Write every assignment of a week back in one commit"""
    data = request.get_json(silent=True) or {}
    try:
        assignments = weekly_assignments.get_weekly_assignments(data.get('weekStart'))
        if assignments and not weekly_assignments.save_weekly_assignments(assignments):
            return jsonify({'message': 'Failed to save assignments'}), 500
    except Exception:
        logger.exception('Error saving all assignments')
        return jsonify({'message': 'Failed to save assignments'}), 500

    return jsonify({
        'success': True,
        'message': 'All assignments saved',
        'count': len(assignments),
        'assignments': assignments
    })

@weekly_assignments_bp.route('/api/weekly-assignments/<assignment_id>', methods=['PATCH'])
def update_weekly_assignment(assignment_id):
    data = request.get_json(silent=True) or {}
    if data.get('currentStatus'):
        is_valid, error = validate_weekly_assignment_status(data['currentStatus'])
        if not is_valid:
            return jsonify({'message': error}), 400
    if 'tasks' in data and not _tasks_are_valid(data['tasks']):
        return jsonify({'message': 'tasks must be a list of objects'}), 400

    try:
        existing = weekly_assignments.get_weekly_assignment(assignment_id)
        if existing is None:
            return jsonify({'message': 'Assignment not found'}), 404

        updated = dict(existing, **data)
        updated['id'] = assignment_id
        result = weekly_assignments.upsert_weekly_assignment(updated)
    except Exception:
        logger.exception('Error updating weekly assignment')
        return jsonify({'message': 'Failed to update assignment'}), 500

    if not result['success']:
        return jsonify({'message': 'Failed to update assignment'}), 500
    return jsonify(result['assignment'])

@weekly_assignments_bp.route('/api/weekly-assignments/<assignment_id>', methods=['DELETE'])
def delete_weekly_assignment(assignment_id):
    try:
        result = weekly_assignments.delete_weekly_assignment(assignment_id)
    except Exception:
        logger.exception('Error deleting weekly assignment')
        return jsonify({'message': 'Failed to delete assignment'}), 500

    if not result['success']:
        return jsonify({'message': 'Assignment not found'}), 404
    return jsonify({'message': 'Assignment deleted'})

@weekly_assignments_bp.route('/api/weekly-assignments/<assignment_id>/tasks', methods=['POST'])
def add_assignment_task(assignment_id):
    data = request.get_json(silent=True) or {}
    if not data.get('taskName'):
        return jsonify({'message': 'Task name is required'}), 400

    status = data.get('status') or WeeklyTaskStatus.NOT_STARTED.value
    is_valid, error = validate_weekly_task_status(status)
    if not is_valid:
        return jsonify({'message': error}), 400

    task = {
        'id': f'task-{_now_ms()}',
        'taskName': data['taskName'],
        'targetDate': data.get('targetDate'),
        'completionDate': data.get('completionDate'),
        'status': status,
    }

    try:
        result = weekly_assignments.update_assignment_task(assignment_id, task)
    except Exception:
        logger.exception('Error adding task')
        return jsonify({'message': 'Failed to add task'}), 500

    if not result['success']:
        return jsonify({'message': 'Failed to add task'}), 500
    return jsonify(task)

@weekly_assignments_bp.route('/api/weekly-assignments/<assignment_id>/tasks/<task_id>', methods=['PATCH'])
def update_assignment_task(assignment_id, task_id):
    data = request.get_json(silent=True) or {}
    if data.get('status'):
        is_valid, error = validate_weekly_task_status(data['status'])
        if not is_valid:
            return jsonify({'message': error}), 400

    try:
        assignment = weekly_assignments.get_weekly_assignment(assignment_id)
        if assignment is None:
            return jsonify({'message': 'Assignment not found'}), 404

        existing = next((t for t in assignment.get('tasks') or [] if t.get('id') == task_id), None)
        if existing is None:
            return jsonify({'message': 'Task not found'}), 404

        updated = dict(existing, **data)
        updated['id'] = task_id
        result = weekly_assignments.update_assignment_task(assignment_id, updated)
    except Exception:
        logger.exception('Error updating task')
        return jsonify({'message': 'Failed to update task'}), 500

    if not result['success']:
        return jsonify({'message': 'Failed to update task'}), 500
    return jsonify(updated)

@weekly_assignments_bp.route('/api/weekly-assignments/<assignment_id>/tasks/<task_id>', methods=['DELETE'])
def delete_assignment_task(assignment_id, task_id):
    try:
        result = weekly_assignments.delete_assignment_task(assignment_id, task_id)
    except Exception:
        logger.exception('Error deleting task')
        return jsonify({'message': 'Failed to delete task'}), 500

    if not result['success']:
        return jsonify({'message': 'Task not found'}), 404
    return jsonify({'message': 'Task deleted'})
