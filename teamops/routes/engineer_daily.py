import logging
from flask import Blueprint, request, jsonify
from teamops import storage
from teamops.utils import validate_date_format

logger = logging.getLogger(__name__)

engineer_daily_bp = Blueprint('engineer_daily', __name__)

def _request_date():
    """Date of the request body or query string, today when neither carries one"""
    data = request.get_json(silent=True) or {}
    return data.get('date') or request.args.get('date') or storage.today_iso()

@engineer_daily_bp.route('/api/engineer-daily-tasks', methods=['GET'])
def get_engineer_daily_tasks():
    """Get every engineer's planned projects, activities and target tasks for a day"""
    day = request.args.get('date') or storage.today_iso()
    is_valid, result = validate_date_format(day)
    if not is_valid:
        return jsonify({'message': result}), 400

    try:
        return jsonify(storage.get_engineer_daily_tasks(day))
    except Exception:
        logger.exception('Error fetching engineer daily tasks')
        return jsonify({'message': 'Failed to fetch engineer daily tasks'}), 500

@engineer_daily_bp.route('/api/engineer-daily-tasks/<engineer_name>/<project_id>', methods=['PATCH'])
def update_task_completion(engineer_name, project_id):
    data = request.get_json(silent=True) or {}
    if not isinstance(data.get('completed'), bool):
        return jsonify({'message': 'completed must be a boolean'}), 400

    result = storage.update_engineer_task_completion(engineer_name, project_id, storage.today_iso(),
                                                     data['completed'])
    return jsonify(result)

@engineer_daily_bp.route('/api/engineer-daily-activities/<engineer_name>', methods=['POST'])
def add_daily_activity(engineer_name):
    data = request.get_json(silent=True) or {}
    activity = data.get('activity')
    if not isinstance(activity, str) or not activity.strip():
        return jsonify({'message': 'activity is required'}), 400

    day = _request_date()
    is_valid, result = validate_date_format(day)
    if not is_valid:
        return jsonify({'message': result}), 400

    try:
        return jsonify(storage.add_engineer_activity(engineer_name, activity.strip(), day))
    except Exception:
        logger.exception('Error adding activity for %s', engineer_name)
        return jsonify({'message': 'Failed to add activity'}), 500

@engineer_daily_bp.route('/api/engineer-daily-activities/<engineer_name>/<activity_id>', methods=['DELETE'])
def delete_daily_activity(engineer_name, activity_id):
    try:
        return jsonify(storage.delete_engineer_activity(engineer_name, activity_id, _request_date()))
    except Exception:
        logger.exception('Error deleting activity %s', activity_id)
        return jsonify({'message': 'Failed to delete activity'}), 500

@engineer_daily_bp.route('/api/engineer-target-tasks/<engineer_name>', methods=['POST'])
def add_target_task(engineer_name):
    data = request.get_json(silent=True) or {}
    task = data.get('task')
    if not isinstance(task, str) or not task.strip():
        return jsonify({'message': 'task is required'}), 400

    day = _request_date()
    is_valid, result = validate_date_format(day)
    if not is_valid:
        return jsonify({'message': result}), 400

    try:
        return jsonify(storage.set_engineer_target_task(engineer_name, task.strip(), day))
    except Exception:
        logger.exception('Error setting target task for %s', engineer_name)
        return jsonify({'message': 'Failed to set target task'}), 500

@engineer_daily_bp.route('/api/engineer-target-tasks/<engineer_name>/<task_id>', methods=['DELETE'])
def delete_target_task(engineer_name, task_id):
    try:
        return jsonify(storage.delete_engineer_target_task(engineer_name, task_id, _request_date()))
    except Exception:
        logger.exception('Error deleting target task %s', task_id)
        return jsonify({'message': 'Failed to delete target task'}), 500

@engineer_daily_bp.route('/api/pending-tasks/<engineer_name>', methods=['GET'])
def get_pending_tasks(engineer_name):
    """Target tasks an engineer set on earlier days"""
    return jsonify(storage.get_pending_engineer_tasks(engineer_name, storage.today_iso()))
