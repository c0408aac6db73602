class ConnectorError(Exception):
    """The hosted connector could not hand out an access token"""


class GitHubError(Exception):
    """A call to the GitHub contents API failed"""

    def __init__(self, message, status=None):
        super().__init__(message)
        self.status = status


class DocumentNotFound(GitHubError):
    """The requested document does not exist in the repository"""

    def __init__(self, path):
        super().__init__(f'{path} not found', status=404)
        self.path = path


class SharePointError(Exception):
    """A call to Microsoft Graph failed"""
