import logging
from flask import Blueprint, request, jsonify
from teamops.documents import engineers

logger = logging.getLogger(__name__)

engineers_bp = Blueprint('engineers', __name__)

@engineers_bp.route('/api/engineer-daily-tasks-config', methods=['GET'])
def get_engineer_daily_tasks_config():
    """Engineers shown on the daily tasks board"""
    try:
        return jsonify(engineers.get_engineer_daily_tasks_config())
    except Exception:
        logger.exception('Error fetching engineer daily tasks config')
        return jsonify({'message': 'Failed to fetch engineer daily tasks config'}), 503

@engineers_bp.route('/api/engineer-daily-tasks-config/initialize', methods=['POST'])
def initialize_engineer_daily_tasks_config():
    try:
        return jsonify(engineers.initialize_engineer_daily_tasks_file())
    except Exception:
        logger.exception('Error initializing engineer daily tasks config')
        return jsonify({'message': 'Failed to initialize engineer daily tasks config'}), 500

@engineers_bp.route('/api/engineers-master-list/initialize', methods=['POST'])
def initialize_engineers_master_list():
    try:
        return jsonify(engineers.initialize_engineer_master_list())
    except Exception:
        logger.exception('Error initializing engineers master list')
        return jsonify({'message': 'Failed to initialize engineers master list'}), 500

@engineers_bp.route('/api/engineers-master-list', methods=['PUT'])
def update_engineers_master_list():
    """Replace the master list with the submitted roster"""
    data = request.get_json(silent=True) or {}
    roster = data.get('engineers')
    if not isinstance(roster, list):
        return jsonify({'message': 'Engineers must be an array'}), 400
    if not all(isinstance(e, dict) and isinstance(e.get('name'), str) and e['name'] for e in roster):
        return jsonify({'message': 'Every engineer needs a name'}), 400

    try:
        result = engineers.update_engineer_master_list(roster)
    except Exception:
        logger.exception('Error updating engineers master list')
        return jsonify({'message': 'Failed to update engineers master list'}), 500

    if not result['success']:
        return jsonify({'message': 'Failed to update engineers master list'}), 500
    return jsonify(result)
