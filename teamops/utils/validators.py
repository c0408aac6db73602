import base64
import binascii
import json
import re
from datetime import datetime
from teamops.models import (MemberStatus, ProjectStatus, ProjectPriority, NotificationType,
                            WeeklyTaskStatus, WeeklyAssignmentStatus, TrackingStatus, ProjectStage)

DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')

def validate_required_fields(data, required_fields):
    """Validate that required fields are present in data"""
    if not data:
        return False, "No data provided"

    for field in required_fields:
        if field not in data or not data.get(field):
            return False, f"{field} is required"

    return True, ""

def validate_date_format(date_string):
    """Validate date string is in YYYY-MM-DD format"""
    if not isinstance(date_string, str) or not DATE_PATTERN.match(date_string):
        return False, "Date must be in YYYY-MM-DD format"
    try:
        parsed_date = datetime.strptime(date_string, '%Y-%m-%d').date()
        return True, parsed_date
    except ValueError:
        return False, "Date must be in YYYY-MM-DD format"

def _validate_enum(enum_cls, value, message):
    try:
        return True, enum_cls(value)
    except ValueError:
        return False, message

def validate_member_status(status_str):
    """Validate team member status enum"""
    return _validate_enum(MemberStatus, status_str, "Invalid team member status")

def validate_project_status(status_str):
    """Validate project status enum"""
    return _validate_enum(ProjectStatus, status_str, "Invalid project status")

def validate_project_priority(priority_str):
    """Validate project priority enum"""
    return _validate_enum(ProjectPriority, priority_str, "Invalid project priority")

def validate_notification_type(type_str):
    """Validate notification type enum"""
    return _validate_enum(NotificationType, type_str, "Invalid notification type")

def validate_weekly_task_status(status_str):
    """Validate weekly assignment task status enum"""
    return _validate_enum(WeeklyTaskStatus, status_str, "Invalid task status")

def validate_weekly_assignment_status(status_str):
    """Validate weekly assignment status enum"""
    return _validate_enum(WeeklyAssignmentStatus, status_str, "Invalid assignment status")

def validate_tracking_status(status_str):
    """Validate daily project status tracking value"""
    return _validate_enum(TrackingStatus, status_str,
                          f"status must be one of {[s.value for s in TrackingStatus]}")

def validate_project_stage(stage_str):
    """Validate project stage enum"""
    return _validate_enum(ProjectStage, stage_str,
                          f"status must be one of {[s.value for s in ProjectStage]}")

def validate_email_format(email):
    """Basic email format validation"""
    email_pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
    if isinstance(email, str) and re.match(email_pattern, email):
        return True, ""
    return False, "Invalid email format"

def decode_auth_header(header_value):
    """Decode an X-Admin-Auth header: base64 encoded JSON with username and role"""
    if not header_value:
        return None
    try:
        decoded = json.loads(base64.b64decode(header_value).decode('utf-8'))
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return None
    if not isinstance(decoded, dict):
        return None
    username, role = decoded.get('username'), decoded.get('role')
    if not isinstance(username, str) or not isinstance(role, str) or not username or not role:
        return None
    return decoded
