import logging
from flask import Flask, jsonify
from config import config
from teamops.extensions import db, cors
from teamops.github import GitHubDocumentStore

logger = logging.getLogger(__name__)

def create_app(config_name='default', document_store=None):
    """Application factory pattern"""
    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config[config_name])
    config[config_name].init_app(app)

    logging.basicConfig(level=app.config.get('LOG_LEVEL', 'INFO'))

    # Initialize extensions
    db.init_app(app)
    cors.init_app(app)  # Allow all domains for all routes

    # Remote JSON documents; tests hand in their own store
    app.extensions['document_store'] = document_store or GitHubDocumentStore.from_config(app.config)

    # Import models to ensure they're registered with SQLAlchemy
    from teamops.models import (  # noqa: F401
        User, TeamMember, Project, Notification, Comment, EngineerTaskCompletion, EngineerDailyEntry
    )

    # Register blueprints
    from teamops.routes import (
        auth_bp, engineer_credentials_bp, engineer_daily_bp, dashboard_bp, team_members_bp,
        projects_bp, notifications_bp, tracking_bp, engineers_bp, weekly_assignments_bp, utils_bp
    )

    app.register_blueprint(auth_bp)
    app.register_blueprint(engineer_credentials_bp)
    app.register_blueprint(engineer_daily_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(team_members_bp)
    app.register_blueprint(projects_bp)
    app.register_blueprint(notifications_bp)
    app.register_blueprint(tracking_bp)
    app.register_blueprint(engineers_bp)
    app.register_blueprint(weekly_assignments_bp)
    app.register_blueprint(utils_bp)

    # Error handlers
    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'message': 'Resource not found'}), 404

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        return jsonify({'message': 'Internal server error'}), 500

    # Create the in-process store
    with app.app_context():
        db.create_all()
        if app.config.get('SEED_DATA'):
            from teamops.storage import seed_data
            seed_data()
            logger.info('Seeded in-process store')

    return app
