import logging
from flask import Blueprint, request, jsonify
from teamops.documents import credentials
from teamops.models import CredentialRole
from teamops.utils import admin_required

logger = logging.getLogger(__name__)

engineer_credentials_bp = Blueprint('engineer_credentials', __name__)

CREDENTIAL_FIELDS = ('id', 'name', 'username', 'password', 'role', 'company', 'isActive')

def _credential_payload(data):
    """Keep only credential fields from a request body"""
    return {key: data[key] for key in CREDENTIAL_FIELDS if key in data}

def _validate_role(data):
    if 'role' not in data:
        return True
    try:
        CredentialRole(data['role'])
        return True
    except ValueError:
        return False

@engineer_credentials_bp.route('/api/engineer-credentials', methods=['GET'])
@admin_required
def get_engineer_credentials():
    """List engineer logins without their passwords"""
    try:
        data, _ = credentials.read_engineer_credentials()
        return jsonify({
            'engineers': [credentials.public_credential(e) for e in data['engineers']],
            'lastUpdated': data.get('lastUpdated')
        })
    except Exception:
        logger.exception('Error fetching engineer credentials')
        return jsonify({'message': 'Failed to fetch engineer credentials'}), 500

@engineer_credentials_bp.route('/api/engineer-credentials/initialize', methods=['POST'])
@admin_required
def initialize_engineer_credentials():
    """Create logins for every engineer on the master list"""
    try:
        return jsonify(credentials.initialize_engineer_credentials())
    except Exception:
        logger.exception('Error initializing engineer credentials')
        return jsonify({'message': 'Failed to initialize engineer credentials'}), 500

@engineer_credentials_bp.route('/api/engineer-credentials', methods=['POST'])
@admin_required
def save_engineer_credential():
    data = request.get_json(silent=True) or {}

    if not data.get('name') and not data.get('id') and not data.get('username'):
        return jsonify({'message': 'name is required'}), 400
    if not _validate_role(data):
        return jsonify({'message': 'Invalid role'}), 400

    try:
        result = credentials.upsert_engineer_credential(_credential_payload(data))
    except KeyError:
        return jsonify({'message': 'name is required'}), 400
    except Exception:
        logger.exception('Error saving engineer credential')
        return jsonify({'message': 'Failed to save engineer credential'}), 500

    if not result['success']:
        return jsonify({'message': 'Failed to save engineer credential'}), 500
    return jsonify({'success': True, 'engineer': credentials.public_credential(result['engineer'])})

@engineer_credentials_bp.route('/api/engineer-credentials/<engineer_id>', methods=['PUT'])
@admin_required
def update_engineer_credential(engineer_id):
    data = request.get_json(silent=True) or {}
    if not _validate_role(data):
        return jsonify({'message': 'Invalid role'}), 400

    payload = dict(_credential_payload(data), id=engineer_id)
    try:
        result = credentials.upsert_engineer_credential(payload)
    except KeyError:
        return jsonify({'message': 'name is required'}), 400
    except Exception:
        logger.exception('Error updating engineer credential')
        return jsonify({'message': 'Failed to update engineer credential'}), 500

    if not result['success']:
        return jsonify({'message': 'Failed to update engineer credential'}), 500
    return jsonify({'success': True, 'engineer': credentials.public_credential(result['engineer'])})

@engineer_credentials_bp.route('/api/engineer-credentials/<engineer_id>', methods=['DELETE'])
@admin_required
def delete_engineer_credential(engineer_id):
    try:
        success = credentials.delete_engineer_credential(engineer_id)
    except Exception:
        logger.exception('Error deleting engineer credential')
        return jsonify({'message': 'Failed to delete engineer credential'}), 500

    if not success:
        return jsonify({'message': 'Engineer not found'}), 404
    return jsonify({'success': True})

@engineer_credentials_bp.route('/api/engineer-credentials/reset-password', methods=['POST'])
def reset_engineer_password():
    data = request.get_json(silent=True) or {}
    if not data.get('username') or not data.get('newPassword'):
        return jsonify({'message': 'Username and new password required'}), 400

    try:
        success = credentials.update_engineer_password(data['username'], data['newPassword'])
    except Exception:
        logger.exception('Error resetting password')
        return jsonify({'message': 'Failed to reset password'}), 500

    if not success:
        return jsonify({'message': 'Engineer not found'}), 404
    return jsonify({'success': True, 'message': 'Password updated successfully'})
