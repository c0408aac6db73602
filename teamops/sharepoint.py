"""Attendance figures read from a shared Excel workbook via Microsoft Graph."""
import base64
import logging

import requests
from flask import current_app

from teamops.connectors import ConnectorTokenProvider
from teamops.exceptions import ConnectorError, SharePointError
from teamops.metrics import round_half_up

logger = logging.getLogger(__name__)


def _token_provider():
    provider = current_app.extensions.get('sharepoint_tokens')
    if provider is None:
        provider = ConnectorTokenProvider(
            'sharepoint',
            hostname=current_app.config.get('CONNECTORS_HOSTNAME'),
            identity=current_app.config.get('CONNECTOR_IDENTITY'),
            static_token=current_app.config.get('SHAREPOINT_TOKEN'),
            timeout=current_app.config.get('HTTP_TIMEOUT'),
        )
        current_app.extensions['sharepoint_tokens'] = provider
    return provider


def is_sharepoint_connected():
    return _token_provider().is_connected()


def encode_share_url(url):
    """Graph ``/shares`` id for a sharing link: ``u!`` plus unpadded URL-safe base64"""
    encoded = base64.b64encode(url.encode('utf-8')).decode('ascii')
    return 'u!' + encoded.rstrip('=').replace('/', '_').replace('+', '-')


def _graph_get(path, token):
    url = current_app.config['GRAPH_API_URL'].rstrip('/') + path
    try:
        response = requests.get(url, headers={'Authorization': f'Bearer {token}'},
                                timeout=current_app.config.get('HTTP_TIMEOUT'))
        response.raise_for_status()
        return response.json()
    except (requests.RequestException, ValueError) as e:
        raise SharePointError(f'Graph request {path} failed: {e}') from e


def get_attendance_data():
    try:
        token = _token_provider().get_access_token()
        share_id = encode_share_url(current_app.config['SHAREPOINT_SHARE_URL'])
        base = f'/shares/{share_id}/driveItem'

        _graph_get(base, token)
        worksheets = _graph_get(f'{base}/workbook/worksheets', token).get('value') or []
        if not worksheets:
            logger.info('Attendance workbook has no worksheets')
            return []

        used_range = _graph_get(f"{base}/workbook/worksheets/{worksheets[0]['id']}/usedRange", token)
        return parse_attendance_data(used_range.get('values'))
    except (ConnectorError, SharePointError) as e:
        logger.error('Error fetching attendance data from SharePoint: %s', e)
        return []


def _cell_text(value):
    return '' if value is None else str(value).strip()


def parse_attendance_data(values):
    """Per-engineer count of days with any attendance entry.

    The first row holds headers. The name column is the first header mentioning
    "name" or "engineer"; every non-empty header after it is a day.
    """
    if not values or len(values) < 2:
        return []

    headers = values[0]
    name_index = next((i for i, h in enumerate(headers)
                       if 'name' in _cell_text(h).lower() or 'engineer' in _cell_text(h).lower()), -1)
    if name_index == -1:
        logger.info('Could not find name column in attendance data')
        return []

    total_days = len([h for h in headers[name_index + 1:] if _cell_text(h)])

    stats = {}
    for row in values[1:]:
        if len(row) <= name_index:
            continue
        engineer_name = _cell_text(row[name_index])
        if not engineer_name:
            continue

        updated_days = 0
        last_update = None
        for j in range(name_index + 1, min(len(row), name_index + total_days + 1)):
            if _cell_text(row[j]):
                updated_days += 1
                last_update = headers[j] if j < len(headers) else None

        stats[engineer_name] = {
            'engineerName': engineer_name,
            'totalDays': total_days,
            'updatedDays': updated_days,
            'updateRate': round_half_up(updated_days / total_days * 100) if total_days > 0 else 0,
            'lastUpdate': last_update,
        }
    return list(stats.values())
