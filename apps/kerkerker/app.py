"""
kerkerker web application
Player front-end with danmaku search and an admin console
"""
import logging

from flask import Flask
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from kerkerker.config.settings import AppConfig
from kerkerker.core import install_log_buffer, system_logs
from kerkerker.routes.main_routes import main_bp

from kerkerker.components.danmaku import init_danmaku
from kerkerker.components.database_settings import init_database_settings
from kerkerker.components.home import init_home
from kerkerker.components.system_logs import init_system_logs

logger = logging.getLogger(__name__)


class KerkerkerApp:
    """Main application class"""

    def __init__(self):
        self.app = None

    def create_app(self, overrides=None):
        """Create and configure Flask application"""
        self.app = Flask(__name__)

        self.app.config.from_object(AppConfig)
        if overrides:
            self.app.config.update(overrides)

        Limiter(
            key_func=get_remote_address,
            app=self.app,
            default_limits=[self.app.config['RATELIMIT_DEFAULT']],
            storage_uri=self.app.config['RATELIMIT_STORAGE_URI'],
        )

        install_log_buffer(system_logs)

        # Components
        init_home(self.app)
        init_danmaku(self.app)
        init_database_settings(self.app)
        init_system_logs(self.app)

        self.app.register_blueprint(main_bp)

        img_src = ' '.join(["'self'", 'data:'] + AppConfig.image_sources(
            self.app.config['IMAGE_REMOTE_PATTERNS']))

        @self.app.after_request
        def allow_remote_images(response):
            response.headers.setdefault('Content-Security-Policy', f'img-src {img_src}')
            return response

        return self.app

    def run(self):
        """Start the application"""
        host = self.app.config['HOST']
        port = self.app.config['PORT']

        logger.info('=' * 60)
        logger.info(f"{self.app.config['APP_NAME']} starting on: http://{host}:{port}")
        logger.info('Endpoints:')
        logger.info(f'   - Player:          http://{host}:{port}/player')
        logger.info(f'   - Admin:           http://{host}:{port}/admin')
        logger.info(f'   - Database status: http://{host}:{port}/api/database/status')
        logger.info('=' * 60)

        self.app.run(host=host, port=port, debug=False)


def create_app(overrides=None):
    """Application factory for WSGI servers"""
    return KerkerkerApp().create_app(overrides)


def main():
    """Main entry point"""
    logging.basicConfig(level=logging.INFO)
    kerkerker = KerkerkerApp()
    kerkerker.create_app()
    kerkerker.run()


if __name__ == '__main__':
    main()
