from flask import Blueprint, jsonify
from teamops.models import (UserRole, UserStatus, CredentialRole, MemberStatus, ProjectStatus, ProjectPriority,
                            NotificationType, WeeklyTaskStatus, WeeklyAssignmentStatus, TrackingStatus,
                            ProjectStage)

utils_bp = Blueprint('utils', __name__)

@utils_bp.route('/api/enums', methods=['GET'])
def get_enums():
    """Get all available enum values for frontend"""
    return jsonify({
        'user_roles': [e.value for e in UserRole],
        'user_statuses': [e.value for e in UserStatus],
        'credential_roles': [e.value for e in CredentialRole],
        'member_statuses': [e.value for e in MemberStatus],
        'project_statuses': [e.value for e in ProjectStatus],
        'project_priorities': [e.value for e in ProjectPriority],
        'notification_types': [e.value for e in NotificationType],
        'weekly_task_statuses': [e.value for e in WeeklyTaskStatus],
        'weekly_assignment_statuses': [e.value for e in WeeklyAssignmentStatus],
        'tracking_statuses': [e.value for e in TrackingStatus],
        'project_stages': [e.value for e in ProjectStage]
    })
