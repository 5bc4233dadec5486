"""
System Logs Component Routes
"""
from flask import Blueprint, jsonify, request

from .service import SystemLogsService

system_logs_bp = Blueprint('system_logs', __name__)

service = SystemLogsService()


@system_logs_bp.route('/api/logs')
def api_logs():
    """Get captured application logs, optionally filtered by level"""
    level_filter = request.args.get('level', 'ALL')
    try:
        limit = int(request.args.get('limit', 50))
    except ValueError:
        return jsonify({'success': False, 'error': 'limit must be an integer'}), 400

    logs = service.get_logs(level_filter=level_filter, limit=limit)
    return jsonify(logs)
