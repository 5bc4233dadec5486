"""
Database Settings Routes
Status/test API used by the admin console and the rendered status panel
"""
import logging

from flask import Blueprint, current_app, jsonify, render_template

from .service import DatabaseSettingsService

logger = logging.getLogger(__name__)

database_settings_bp = Blueprint(
    'database_settings',
    __name__,
    template_folder='templates',
)


def _service():
    return current_app.extensions['database_settings']


@database_settings_bp.route('/api/database/status', methods=['GET'])
def api_database_status():
    """Get MongoDB connection status"""
    try:
        status = _service().get_status()
        return jsonify({'success': True, 'data': status.to_dict()})
    except Exception as e:
        logger.exception(f'Database status failed: {e}')
        return jsonify({'success': False, 'error': str(e)}), 500


@database_settings_bp.route('/api/database/test', methods=['POST'])
def api_database_test():
    """Run an on-demand connection test"""
    try:
        result = _service().test_connection()
        return jsonify({'success': result['success'], 'data': result})
    except Exception as e:
        logger.exception(f'Database test failed: {e}')
        return jsonify({'success': False, 'error': str(e)}), 500


@database_settings_bp.route('/components/database_settings', methods=['GET'])
def render_component():
    """Render the database status panel"""
    service = _service()
    status = service.get_status()
    return render_template(
        'database_settings.html',
        **service.panel_state(status, last_error=status.error),
    )


@database_settings_bp.route('/components/database_settings', methods=['POST'])
def render_component_after_test():
    """Run a connection test, then render the panel with its outcome"""
    service = _service()
    result = service.test_connection()

    if result['success']:
        toast = {'type': 'success', 'message': f"连接测试成功！延迟: {result['latency']}ms"}
        status = service.get_status()
        last_error = status.error
    else:
        last_error = result.get('error') or '连接测试失败'
        toast = {'type': 'error', 'message': last_error}
        status = service.failed_status(last_error)

    return render_template(
        'database_settings.html',
        **service.panel_state(status, last_error=last_error, toast=toast),
    )


def init_database_settings(app):
    """Initialize database settings component with Flask app"""
    app.extensions['database_settings'] = DatabaseSettingsService(
        uri=app.config.get('MONGODB_URI'),
        db_name=app.config.get('MONGODB_DB_NAME'),
        timeout_ms=app.config.get('MONGODB_TIMEOUT_MS', 5000),
    )
    app.register_blueprint(database_settings_bp)
    return database_settings_bp
