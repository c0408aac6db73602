from flask import Blueprint, request, jsonify
from teamops.extensions import db
from teamops.models import TeamMember, MemberStatus
from teamops.utils import validate_required_fields, validate_email_format, validate_member_status

team_members_bp = Blueprint('team_members', __name__)

@team_members_bp.route('/api/team-members', methods=['GET'])
def get_team_members():
    """Get all team members"""
    return jsonify([member.to_dict() for member in TeamMember.query.all()])

@team_members_bp.route('/api/team-members', methods=['POST'])
def create_team_member():
    """Create a new team member"""
    data = request.get_json(silent=True)

    is_valid, error = validate_required_fields(data, ['name', 'role', 'email', 'department'])
    if not is_valid:
        return jsonify({'message': error}), 400

    is_valid, error = validate_email_format(data['email'])
    if not is_valid:
        return jsonify({'message': error}), 400

    status = MemberStatus.ACTIVE
    if data.get('status'):
        is_valid, status = validate_member_status(data['status'])
        if not is_valid:
            return jsonify({'message': status}), 400

    name = data['name'].strip() if isinstance(data['name'], str) else ''
    if not name:
        return jsonify({'message': 'name is required'}), 400

    member = TeamMember(
        name=name,
        role=data['role'],
        email=data['email'],
        department=data['department'],
        status=status,
        avatar=data.get('avatar')
    )

    try:
        db.session.add(member)
        db.session.commit()
        return jsonify(member.to_dict()), 201
    except Exception:
        db.session.rollback()
        return jsonify({'message': 'Failed to create team member'}), 500

@team_members_bp.route('/api/team-members/<member_id>', methods=['GET'])
def get_team_member(member_id):
    member = db.session.get(TeamMember, member_id)
    if member is None:
        return jsonify({'message': 'Team member not found'}), 404
    return jsonify(member.to_dict())

@team_members_bp.route('/api/team-members/<member_id>', methods=['PATCH'])
def update_team_member(member_id):
    """Rename a team member; other fields are left untouched"""
    member = db.session.get(TeamMember, member_id)
    if member is None:
        return jsonify({'message': 'Team member not found'}), 404

    data = request.get_json(silent=True) or {}
    name = data.get('name')
    if not isinstance(name, str) or not name.strip():
        return jsonify({'message': 'name is required'}), 400

    try:
        member.name = name.strip()
        db.session.commit()
        return jsonify(member.to_dict())
    except Exception:
        db.session.rollback()
        return jsonify({'message': 'Failed to update team member'}), 500
