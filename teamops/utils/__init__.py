from .validators import (
    validate_required_fields, validate_date_format, validate_member_status,
    validate_project_status, validate_project_priority, validate_notification_type,
    validate_weekly_task_status, validate_weekly_assignment_status,
    validate_tracking_status, validate_project_stage, validate_email_format, decode_auth_header
)
from .auth import admin_required, is_admin_request

__all__ = [
    'validate_required_fields', 'validate_date_format', 'validate_member_status',
    'validate_project_status', 'validate_project_priority', 'validate_notification_type',
    'validate_weekly_task_status', 'validate_weekly_assignment_status',
    'validate_tracking_status', 'validate_project_stage', 'validate_email_format', 'decode_auth_header',
    'admin_required', 'is_admin_request'
]
