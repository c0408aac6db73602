import logging
import os


def _connector_identity():
    """Credential presented to the connectors host, if the environment provides one"""
    if os.environ.get('REPL_IDENTITY'):
        return 'repl ' + os.environ['REPL_IDENTITY']
    if os.environ.get('WEB_REPL_RENEWAL'):
        return 'depl ' + os.environ['WEB_REPL_RENEWAL']
    return None


def _http_timeout():
    """Seconds for outbound HTTP calls; empty or 'None' disables the timeout"""
    value = os.environ.get('HTTP_TIMEOUT', '10').strip()
    if not value or value.lower() == 'none':
        return None
    return float(value)


class Config:
    """Base configuration class"""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'teamops-dev-secret'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # The in-process store only lives as long as the server process
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///:memory:'
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    SEED_DATA = True

    # Remote JSON documents
    GITHUB_API_URL = os.environ.get('GITHUB_API_URL', 'https://api.github.com')
    GITHUB_OWNER = os.environ.get('GITHUB_OWNER', 'Github2drb')
    GITHUB_REPO = os.environ.get('GITHUB_REPO', 'Controls_Team_Tracker')
    GITHUB_BRANCH = os.environ.get('GITHUB_BRANCH')
    GITHUB_TOKEN = os.environ.get('GITHUB_TOKEN')

    # Hosted connector handing out OAuth tokens
    CONNECTORS_HOSTNAME = os.environ.get('REPLIT_CONNECTORS_HOSTNAME')
    CONNECTOR_IDENTITY = _connector_identity()

    # Attendance workbook
    GRAPH_API_URL = os.environ.get('GRAPH_API_URL', 'https://graph.microsoft.com/v1.0')
    SHAREPOINT_TOKEN = os.environ.get('SHAREPOINT_TOKEN')
    SHAREPOINT_SHARE_URL = os.environ.get('SHAREPOINT_SHARE_URL') or \
        'https://3dcadglobal-my.sharepoint.com/:x:/g/personal/rameshbabu_d_3dcad-global_com/EeKNvRpu-l1EnPEMeoBHi60BqNxSjxcthBpLTzZ4dYDlYg'

    HTTP_TIMEOUT = _http_timeout()

    # Fixed window used by the project status tracker
    STATUS_WINDOW_START = '2024-12-05'
    STATUS_WINDOW_END = '2025-02-28'

    DEFAULT_ENGINEER_PASSWORD = os.environ.get('DEFAULT_ENGINEER_PASSWORD', 'drb@123')
    DEFAULT_ADMIN_PASSWORD = os.environ.get('DEFAULT_ADMIN_PASSWORD', 'admin@drb')
    EMAIL_DOMAIN = os.environ.get('EMAIL_DOMAIN', 'drbtechverse.in')

    @staticmethod
    def init_app(app):
        pass

class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')

class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False

    @classmethod
    def init_app(cls, app):
        if not (cls.GITHUB_TOKEN or (cls.CONNECTORS_HOSTNAME and cls.CONNECTOR_IDENTITY)):
            logging.getLogger(__name__).warning(
                'No GitHub credentials configured; tracker documents will fall back to defaults')

class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SEED_DATA = False
    GITHUB_TOKEN = None
    SHAREPOINT_TOKEN = None
    CONNECTORS_HOSTNAME = None
    CONNECTOR_IDENTITY = None

# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
