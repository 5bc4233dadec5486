"""
Home Routes
"""
from datetime import datetime

from flask import Blueprint, current_app, render_template

home_bp = Blueprint(
    'home',
    __name__,
    template_folder='templates',
)


@home_bp.app_context_processor
def inject_site_info():
    """Expose app name and copyright year to every template"""
    return {
        'app_name': current_app.config.get('APP_NAME'),
        'current_year': datetime.now().year,
    }


@home_bp.route('/components/footer')
def render_footer():
    """Render the footer component HTML"""
    return render_template('footer.html')


def init_home(app):
    """Initialize home component with Flask app"""
    app.register_blueprint(home_bp)
    return home_bp
