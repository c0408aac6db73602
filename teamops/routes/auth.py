from flask import Blueprint, current_app, request, jsonify
from teamops import storage
from teamops.documents import credentials
from teamops.extensions import db
from teamops.models import User, UserStatus
from teamops.utils import validate_required_fields, validate_email_format, decode_auth_header, admin_required

auth_bp = Blueprint('auth', __name__)

def _credential_profile(engineer):
    return {
        'id': engineer['id'],
        'username': engineer['username'],
        'name': engineer['name'],
        'role': engineer['role'],
        'company': engineer.get('company'),
        'email': f"{engineer['username']}@{current_app.config['EMAIL_DOMAIN']}",
        'status': 'active' if engineer.get('isActive') else 'inactive'
    }

@auth_bp.route('/api/auth/login', methods=['POST'])
def login():
    """Log in with engineer credentials, falling back to dashboard users"""
    data = request.get_json(silent=True)

    is_valid, error = validate_required_fields(data, ['username', 'password'])
    if not is_valid or not isinstance(data['username'], str) or not isinstance(data['password'], str):
        return jsonify({'message': 'Invalid request data'}), 400

    engineer = credentials.authenticate_engineer(data['username'], data['password'])
    if engineer:
        return jsonify(_credential_profile(engineer))

    user = storage.get_user_by_username(data['username'])
    if not user or not user.check_password(data['password']):
        return jsonify({'message': 'Invalid credentials'}), 401
    if user.status != UserStatus.ACTIVE:
        return jsonify({'message': f'Account is {user.status.value.replace("_", " ")}'}), 403

    return jsonify(user.to_dict())

@auth_bp.route('/api/auth/me', methods=['GET'])
def me():
    """Resolve the caller from the X-Admin-Auth header"""
    decoded = decode_auth_header(request.headers.get('X-Admin-Auth'))
    if not decoded:
        return jsonify({'message': 'Not authenticated'}), 401

    engineer = credentials.find_credential(decoded['username'])
    if not engineer or not engineer.get('isActive') or engineer.get('role') != decoded['role']:
        return jsonify({'message': 'Not authenticated'}), 401

    return jsonify(_credential_profile(engineer))

@auth_bp.route('/api/auth/register', methods=['POST'])
def register():
    """Sign up for a dashboard account pending admin approval"""
    data = request.get_json(silent=True)

    is_valid, error = validate_required_fields(data, ['username', 'password', 'name', 'email'])
    if not is_valid:
        return jsonify({'message': error}), 400

    is_valid, error = validate_email_format(data['email'])
    if not is_valid:
        return jsonify({'message': error}), 400

    if storage.get_user_by_username(data['username']):
        return jsonify({'message': 'Username already taken'}), 400

    user = storage.register_user(data['username'], data['password'], data['name'], data['email'])
    return jsonify(user.to_dict()), 201

@auth_bp.route('/api/auth/pending-users', methods=['GET'])
@admin_required
def pending_users():
    """List accounts waiting for approval"""
    return jsonify([user.to_dict() for user in storage.get_pending_users()])

@auth_bp.route('/api/auth/users/<user_id>/approve', methods=['POST'])
@admin_required
def approve_user(user_id):
    if not storage.approve_user(user_id):
        return jsonify({'message': 'User not found'}), 404
    return jsonify({'success': True})

@auth_bp.route('/api/auth/users/<user_id>/reject', methods=['POST'])
@admin_required
def reject_user(user_id):
    if not storage.reject_user(user_id):
        return jsonify({'message': 'User not found'}), 404
    return jsonify({'success': True})

@auth_bp.route('/api/auth/change-password', methods=['POST'])
def change_password():
    data = request.get_json(silent=True)

    is_valid, error = validate_required_fields(data, ['userId', 'oldPassword', 'newPassword'])
    if not is_valid:
        return jsonify({'message': error}), 400

    if db.session.get(User, data['userId']) is None:
        return jsonify({'message': 'User not found'}), 404

    if not storage.change_password(data['userId'], data['oldPassword'], data['newPassword']):
        return jsonify({'message': 'Current password is incorrect'}), 400
    return jsonify({'success': True})
