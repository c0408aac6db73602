"""JSON documents kept in a GitHub repository.

Every document is read together with its blob SHA. Writers send the SHA they
read back to GitHub, so a stale write is rejected by the API rather than
silently merged. A document that does not exist yet is created by writing
without a SHA.
"""
import base64
import json
import logging
from collections import namedtuple
from datetime import datetime, timezone

import requests
from flask import current_app

from teamops.connectors import ConnectorTokenProvider
from teamops.exceptions import ConnectorError, DocumentNotFound, GitHubError

logger = logging.getLogger(__name__)

Document = namedtuple('Document', ['data', 'sha'])


def utc_timestamp():
    """ISO-8601 UTC timestamp used for lastUpdated and commit messages"""
    return datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')


class GitHubDocumentStore:
    """Read and write JSON files through the GitHub contents API"""

    def __init__(self, owner, repo, token_provider, api_url='https://api.github.com',
                 branch=None, timeout=None, session=None):
        self.owner = owner
        self.repo = repo
        self.token_provider = token_provider
        self.api_url = api_url.rstrip('/')
        self.branch = branch
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, app_config):
        token_provider = ConnectorTokenProvider(
            'github',
            hostname=app_config.get('CONNECTORS_HOSTNAME'),
            identity=app_config.get('CONNECTOR_IDENTITY'),
            static_token=app_config.get('GITHUB_TOKEN'),
            timeout=app_config.get('HTTP_TIMEOUT'),
        )
        return cls(
            owner=app_config['GITHUB_OWNER'],
            repo=app_config['GITHUB_REPO'],
            token_provider=token_provider,
            api_url=app_config.get('GITHUB_API_URL', 'https://api.github.com'),
            branch=app_config.get('GITHUB_BRANCH'),
            timeout=app_config.get('HTTP_TIMEOUT'),
        )

    def _url(self, path):
        return f'{self.api_url}/repos/{self.owner}/{self.repo}/contents/{path}'

    def _headers(self):
        try:
            token = self.token_provider.get_access_token()
        except ConnectorError as e:
            raise GitHubError(f'GitHub not connected: {e}') from e
        return {
            'Accept': 'application/vnd.github+json',
            'Authorization': f'Bearer {token}',
        }

    def read_document(self, path):
        """Return the decoded JSON content of ``path`` and its blob SHA"""
        params = {'ref': self.branch} if self.branch else None
        try:
            response = self.session.get(self._url(path), headers=self._headers(),
                                        params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise GitHubError(f'Failed to read {path}: {e}') from e

        if response.status_code == 404:
            raise DocumentNotFound(path)
        if not response.ok:
            raise GitHubError(f'Failed to read {path}: HTTP {response.status_code}',
                              status=response.status_code)

        body = response.json()
        if isinstance(body, list):
            raise GitHubError(f'Expected a file at {path}, got a directory')
        if 'content' not in body:
            raise GitHubError(f'{path} has no content')

        content = base64.b64decode(body['content']).decode('utf-8')
        return Document(json.loads(content), body.get('sha'))

    def write_document(self, path, data, message, sha=None):
        """Create or replace ``path``; ``sha`` must be the revision last read"""
        encoded = base64.b64encode(json.dumps(data, indent=2).encode('utf-8')).decode('ascii')
        payload = {'message': message, 'content': encoded}
        if sha:
            payload['sha'] = sha
        if self.branch:
            payload['branch'] = self.branch

        try:
            response = self.session.put(self._url(path), headers=self._headers(),
                                        json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise GitHubError(f'Failed to write {path}: {e}') from e

        if not response.ok:
            raise GitHubError(f'Failed to write {path}: HTTP {response.status_code}',
                              status=response.status_code)
        return True


def get_document_store():
    return current_app.extensions['document_store']


def load_document(path, default_factory):
    """Read ``path``, substituting ``default_factory()`` when it is missing or unreadable"""
    try:
        document = get_document_store().read_document(path)
    except DocumentNotFound:
        logger.info('%s does not exist yet, using defaults', path)
        return Document(default_factory(), None)
    except (GitHubError, ValueError) as e:
        logger.error('Error reading %s from GitHub: %s', path, e)
        return Document(default_factory(), None)
    if not isinstance(document.data, dict):
        logger.error('Unexpected content in %s, using defaults', path)
        return Document(default_factory(), document.sha)
    return document


def save_document(path, data, message, sha=None):
    """Write ``path`` back with the revision it was read at; False on failure"""
    try:
        return get_document_store().write_document(path, data, message, sha=sha)
    except GitHubError as e:
        logger.error('Error writing %s to GitHub: %s', path, e)
        return False
