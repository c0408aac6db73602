import logging
from flask import Blueprint, request, jsonify
from teamops import storage
from teamops.extensions import db
from teamops.models import Project, Comment, ProjectStatus, ProjectPriority
from teamops.utils import (validate_required_fields, validate_date_format, validate_project_status,
                           validate_project_priority)

logger = logging.getLogger(__name__)

projects_bp = Blueprint('projects', __name__)

STATUS_ORDER = {'in_progress': 0, 'at_risk': 1, 'completed': 2, 'pending': 3}

def sort_projects(projects):
    """Order by status, then most progressed first"""
    return sorted(projects, key=lambda p: (STATUS_ORDER.get(p['status'], len(STATUS_ORDER)), -p['progress']))

@projects_bp.route('/api/projects', methods=['GET'])
def get_projects():
    """Get all projects with progress refreshed from today's tasks"""
    try:
        return jsonify(sort_projects(storage.get_projects()))
    except Exception:
        logger.exception('Error fetching projects')
        return jsonify({'message': 'Failed to fetch projects'}), 500

@projects_bp.route('/api/projects', methods=['POST'])
def create_project():
    """Create a new project"""
    data = request.get_json(silent=True)

    is_valid, error = validate_required_fields(data, ['name'])
    if not is_valid:
        return jsonify({'message': error}), 400

    status = ProjectStatus.IN_PROGRESS
    if data.get('status'):
        is_valid, status = validate_project_status(data['status'])
        if not is_valid:
            return jsonify({'message': status}), 400

    priority = ProjectPriority.MEDIUM
    if data.get('priority'):
        is_valid, priority = validate_project_priority(data['priority'])
        if not is_valid:
            return jsonify({'message': priority}), 400

    progress = data.get('progress', 0)
    if not isinstance(progress, int) or isinstance(progress, bool) or not 0 <= progress <= 100:
        return jsonify({'message': 'progress must be an integer between 0 and 100'}), 400

    for field in ('startDate', 'dueDate'):
        if data.get(field):
            is_valid, error = validate_date_format(data[field])
            if not is_valid:
                return jsonify({'message': f'{field}: {error}'}), 400

    project = Project(
        name=data['name'],
        description=data.get('description'),
        status=status,
        progress=progress,
        priority=priority,
        start_date=data.get('startDate'),
        due_date=data.get('dueDate')
    )

    try:
        db.session.add(project)
        db.session.commit()
        return jsonify(project.to_dict()), 201
    except Exception:
        db.session.rollback()
        return jsonify({'message': 'Failed to create project'}), 500

@projects_bp.route('/api/projects/<project_id>', methods=['GET'])
def get_project(project_id):
    project = db.session.get(Project, project_id)
    if project is None:
        return jsonify({'message': 'Project not found'}), 404
    return jsonify(project.to_dict())

@projects_bp.route('/api/projects/<project_id>/comments', methods=['GET'])
def get_project_comments(project_id):
    """Comments on a project, oldest first"""
    comments = Comment.query.filter_by(project_id=project_id).order_by(Comment.created_at).all()
    return jsonify([comment.to_dict() for comment in comments])

@projects_bp.route('/api/projects/<project_id>/comments', methods=['POST'])
def create_project_comment(project_id):
    if db.session.get(Project, project_id) is None:
        return jsonify({'message': 'Project not found'}), 404

    data = request.get_json(silent=True)
    is_valid, error = validate_required_fields(data, ['content', 'authorId', 'authorName'])
    if not is_valid:
        return jsonify({'message': error}), 400

    mentions = data.get('mentions')
    if isinstance(mentions, list):
        mentions = ','.join(str(m) for m in mentions)

    comment = Comment(
        content=data['content'],
        project_id=project_id,
        author_id=data['authorId'],
        author_name=data['authorName'],
        mentions=mentions
    )

    try:
        db.session.add(comment)
        db.session.commit()
        return jsonify(comment.to_dict()), 201
    except Exception:
        db.session.rollback()
        return jsonify({'message': 'Failed to create comment'}), 500
