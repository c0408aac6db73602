import logging
from flask import Blueprint, current_app, request, jsonify
from teamops.documents import assignments, project_activities, project_status
from teamops.metrics import is_within_status_window
from teamops.utils import validate_date_format, validate_tracking_status, validate_project_stage

logger = logging.getLogger(__name__)

tracking_bp = Blueprint('tracking', __name__)

def _require_text(data, field, label, errors):
    value = data.get(field)
    if not isinstance(value, str) or not value:
        errors.append({'field': field, 'message': f'{label} is required'})

def _validation_failed(errors):
    return jsonify({'message': 'Validation failed', 'errors': errors}), 400

@tracking_bp.route('/api/project-status-tracking', methods=['GET'])
def get_project_status_tracking():
    """Per engineer and project statuses across the tracking window"""
    try:
        return jsonify(project_status.get_project_status_tracking())
    except Exception:
        logger.exception('Error fetching project status tracking')
        return jsonify({'message': 'Failed to fetch project status tracking'}), 500

@tracking_bp.route('/api/project-status-tracking', methods=['POST'])
def update_project_status():
    data = request.get_json(silent=True) or {}
    errors = []

    _require_text(data, 'engineerName', 'Engineer name', errors)
    _require_text(data, 'projectName', 'Project name', errors)

    is_valid, result = validate_date_format(data.get('date'))
    if not is_valid:
        errors.append({'field': 'date', 'message': result})
    elif not is_within_status_window(result, current_app.config.get('STATUS_WINDOW_START'),
                                     current_app.config.get('STATUS_WINDOW_END')):
        errors.append({'field': 'date', 'message': 'Date is outside the status tracking window'})

    is_valid, status = validate_tracking_status(data.get('status'))
    if not is_valid:
        errors.append({'field': 'status', 'message': status})

    if errors:
        return _validation_failed(errors)

    try:
        return jsonify(project_status.update_project_status(
            data['engineerName'], data['projectName'], data['date'], status.value))
    except Exception:
        logger.exception('Error updating project status')
        return jsonify({'message': 'Failed to update project status'}), 500

@tracking_bp.route('/api/project-assignments', methods=['GET'])
def get_project_assignments():
    try:
        return jsonify(assignments.get_project_assignments())
    except Exception:
        logger.exception('Error fetching project assignments')
        return jsonify({'message': 'Failed to fetch project assignments'}), 500

@tracking_bp.route('/api/project-activities', methods=['GET'])
def get_project_activities():
    try:
        return jsonify(project_activities.get_project_activities())
    except Exception:
        logger.exception('Error fetching project activities')
        return jsonify({'message': 'Failed to fetch project activities'}), 500

@tracking_bp.route('/api/project-activities', methods=['POST'])
def update_project_activity():
    """Set or clear a project's activity text for one day"""
    data = request.get_json(silent=True) or {}
    errors = []

    _require_text(data, 'projectName', 'Project name', errors)
    is_valid, result = validate_date_format(data.get('date'))
    if not is_valid:
        errors.append({'field': 'date', 'message': result})
    if not isinstance(data.get('activity'), str):
        errors.append({'field': 'activity', 'message': 'activity must be a string'})

    if errors:
        return _validation_failed(errors)

    try:
        return jsonify(project_activities.update_project_activity(
            data['projectName'], data['date'], data['activity']))
    except Exception:
        logger.exception('Error updating project activity')
        return jsonify({'message': 'Failed to update project activity'}), 500

@tracking_bp.route('/api/project-activities/status', methods=['POST'])
def update_project_stage():
    data = request.get_json(silent=True) or {}
    errors = []

    _require_text(data, 'projectName', 'Project name', errors)
    is_valid, stage = validate_project_stage(data.get('status'))
    if not is_valid:
        errors.append({'field': 'status', 'message': stage})

    if errors:
        return _validation_failed(errors)

    try:
        return jsonify(project_activities.update_project_current_status(data['projectName'], stage.value))
    except Exception:
        logger.exception('Error updating project stage')
        return jsonify({'message': 'Failed to update project status'}), 500

@tracking_bp.route('/api/project-names', methods=['GET'])
def get_project_names():
    try:
        return jsonify(assignments.get_project_names())
    except Exception:
        logger.exception('Error fetching project names')
        return jsonify({'message': 'Failed to fetch project names'}), 503
