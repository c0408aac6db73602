from .auth import auth_bp
from .engineer_credentials import engineer_credentials_bp
from .engineer_daily import engineer_daily_bp
from .dashboard import dashboard_bp
from .team_members import team_members_bp
from .projects import projects_bp
from .notifications import notifications_bp
from .tracking import tracking_bp
from .engineers import engineers_bp
from .weekly_assignments import weekly_assignments_bp
from .utils import utils_bp

__all__ = [
    'auth_bp', 'engineer_credentials_bp', 'engineer_daily_bp', 'dashboard_bp',
    'team_members_bp', 'projects_bp', 'notifications_bp', 'tracking_bp',
    'engineers_bp', 'weekly_assignments_bp', 'utils_bp'
]
