from flask import Blueprint, request, jsonify
from teamops.extensions import db
from teamops.models import Notification
from teamops.utils import validate_required_fields, validate_notification_type

notifications_bp = Blueprint('notifications', __name__)

@notifications_bp.route('/api/notifications', methods=['GET'])
def get_notifications():
    """Get all notifications, newest first"""
    notifications = Notification.query.order_by(Notification.created_at.desc()).all()
    return jsonify([n.to_dict() for n in notifications])

@notifications_bp.route('/api/notifications', methods=['POST'])
def create_notification():
    data = request.get_json(silent=True)

    is_valid, error = validate_required_fields(data, ['type', 'title', 'message'])
    if not is_valid:
        return jsonify({'message': error}), 400

    is_valid, notification_type = validate_notification_type(data['type'])
    if not is_valid:
        return jsonify({'message': notification_type}), 400

    notification = Notification(
        type=notification_type,
        title=data['title'],
        message=data['message'],
        read=bool(data.get('read', False)),
        project_id=data.get('projectId'),
        user_id=data.get('userId')
    )

    try:
        db.session.add(notification)
        db.session.commit()
        return jsonify(notification.to_dict()), 201
    except Exception:
        db.session.rollback()
        return jsonify({'message': 'Failed to create notification'}), 500

@notifications_bp.route('/api/notifications/read-all', methods=['PATCH'])
def mark_all_notifications_read():
    try:
        Notification.query.filter_by(read=False).update({'read': True})
        db.session.commit()
        return jsonify({'success': True})
    except Exception:
        db.session.rollback()
        return jsonify({'message': 'Failed to update notifications'}), 500

@notifications_bp.route('/api/notifications/<notification_id>/read', methods=['PATCH'])
def mark_notification_read(notification_id):
    notification = db.session.get(Notification, notification_id)
    if notification is None:
        return jsonify({'message': 'Notification not found'}), 404

    try:
        notification.read = True
        db.session.commit()
        return jsonify({'success': True})
    except Exception:
        db.session.rollback()
        return jsonify({'message': 'Failed to update notification'}), 500
