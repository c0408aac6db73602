"""Access tokens handed out by the hosted connectors service.

GitHub and SharePoint credentials are not stored by the application. The
connectors host keeps the OAuth grant and returns a short-lived access token
for a named connector.
"""
import logging
from datetime import datetime, timezone

import requests

from teamops.exceptions import ConnectorError

logger = logging.getLogger(__name__)


def _parse_expiry(value):
    if not value:
        return None
    try:
        expires_at = datetime.fromisoformat(str(value).replace('Z', '+00:00'))
    except ValueError:
        return None
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    return expires_at


class ConnectorTokenProvider:
    """Fetch and cache the access token of one connector"""

    def __init__(self, connector_name, hostname=None, identity=None, static_token=None,
                 timeout=None, session=None):
        self.connector_name = connector_name
        self.hostname = hostname
        self.identity = identity
        self.static_token = static_token
        self.timeout = timeout
        self.session = session or requests.Session()
        self._settings = None

    def _cached_token(self):
        if not self._settings:
            return None
        expires_at = _parse_expiry(self._settings.get('expires_at'))
        if expires_at and expires_at > datetime.now(timezone.utc):
            return self._settings.get('access_token')
        return None

    def get_access_token(self):
        if self.static_token:
            return self.static_token

        cached = self._cached_token()
        if cached:
            return cached

        if not self.identity:
            raise ConnectorError('X_REPLIT_TOKEN not found for repl/depl')
        if not self.hostname:
            raise ConnectorError(f'{self.connector_name} not connected: connectors hostname not set')

        try:
            response = self.session.get(
                f'https://{self.hostname}/api/v2/connection',
                params={'include_secrets': 'true', 'connector_names': self.connector_name},
                headers={'Accept': 'application/json', 'X_REPLIT_TOKEN': self.identity},
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as e:
            raise ConnectorError(f'Failed to reach connectors host: {e}') from e

        items = payload.get('items') or []
        connection = items[0] if items else None
        settings = (connection or {}).get('settings') or {}
        access_token = settings.get('access_token') or \
            ((settings.get('oauth') or {}).get('credentials') or {}).get('access_token')

        if not connection or not access_token:
            raise ConnectorError(f'{self.connector_name} not connected')

        self._settings = dict(settings, access_token=access_token)
        logger.debug('Obtained %s access token from connectors host', self.connector_name)
        return access_token

    def is_connected(self):
        try:
            self.get_access_token()
            return True
        except ConnectorError:
            return False
