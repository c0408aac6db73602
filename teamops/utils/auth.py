from functools import wraps
from flask import request, jsonify
from teamops.documents.credentials import find_active_admin
from teamops.utils.validators import decode_auth_header

def is_admin_request():
    """True when X-Admin-Auth names an active admin in the credentials document"""
    decoded = decode_auth_header(request.headers.get('X-Admin-Auth'))
    if not decoded:
        return False
    return find_active_admin(decoded['username']) is not None

def admin_required(view):
    """Reject the request with 403 unless it carries a valid admin header"""
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not is_admin_request():
            return jsonify({'message': 'Admin access required'}), 403
        return view(*args, **kwargs)
    return wrapper
