import logging
from flask import Blueprint, jsonify
from teamops import storage

logger = logging.getLogger(__name__)

dashboard_bp = Blueprint('dashboard', __name__)

@dashboard_bp.route('/api/stats', methods=['GET'])
def get_stats():
    """Headline dashboard numbers"""
    try:
        return jsonify(storage.get_dashboard_stats())
    except Exception:
        logger.exception('Error fetching dashboard stats')
        return jsonify({'message': 'Failed to fetch stats'}), 500

@dashboard_bp.route('/api/analytics', methods=['GET'])
def get_analytics():
    try:
        return jsonify(storage.get_analytics())
    except Exception:
        logger.exception('Error fetching analytics')
        return jsonify({'message': 'Failed to fetch analytics'}), 500

@dashboard_bp.route('/api/analytics/engineer-workload', methods=['GET'])
def get_engineer_workload():
    try:
        return jsonify(storage.get_engineer_workload())
    except Exception:
        logger.exception('Error fetching engineer workload')
        return jsonify({'message': 'Failed to fetch engineer workload'}), 500

@dashboard_bp.route('/api/analytics/performance', methods=['GET'])
def get_performance():
    """Performance scores built from SharePoint attendance and GitHub documents"""
    try:
        report = storage.get_performance_report()
    except Exception:
        logger.exception('Error building performance report')
        return jsonify({'message': 'Performance data unavailable', 'data': []}), 503

    sources = report['dataSources']
    if not sources['github'] and not sources['activities']:
        return jsonify({
            'message': 'Unable to fetch performance data from GitHub',
            'dataSources': sources,
            'data': []
        }), 503

    if sources['sharepoint']:
        report['message'] = 'Full performance data available'
    else:
        report['message'] = 'Partial data - attendance unavailable from SharePoint'
    return jsonify(report)
