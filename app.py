# app.py
"""
Flask Application Factory for the Bryan Fire Safety marketing site

This application factory wires together:
- Environment-based configuration, loaded once at startup
- Path-traversal guard and security headers on every request
- Static homepage and asset serving from a fixed root
- Contact form relay to the business inbox over SMTP
- Error handling and logging suitable for systemd deployments
"""

import sys
import logging
from typing import Optional

from flask import Flask, request, jsonify
from werkzeug.exceptions import HTTPException

from config.messages import SITE_NAME
from config.security import SecurityConfig
from config.settings import Settings, load_settings
from core.errors import ForbiddenPath, AssetNotFound
from middleware.security import init_request_middleware
from routes.contact import contact_bp
from routes.site import site_bp

LOG_HANDLER_NAME = "site"


def setup_logging(app: Flask, settings: Settings) -> None:
    """
    Configure logging for systemd journal integration

    Falls back to stderr when the journal bindings are not installed, which
    is also what container runtimes collect.
    """
    app.logger.handlers.clear()

    journal_formatter = logging.Formatter(
        fmt='%(name)s[%(process)d]: %(levelname)s %(message)s'
    )
    stream_formatter = logging.Formatter(
        fmt='%(asctime)s %(name)-28s %(levelname)-8s %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    log_level = getattr(logging, settings.log_level, logging.INFO)

    try:
        import systemd.journal
        handler = systemd.journal.JournalHandler()
        handler.setFormatter(journal_formatter)
    except ImportError:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(stream_formatter)
    handler.set_name(LOG_HANDLER_NAME)
    handler.setLevel(log_level)

    # Module loggers (core.*, routes.*, services.*) propagate to the root logger
    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        if existing.get_name() == LOG_HANDLER_NAME:
            root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)
    app.logger.setLevel(log_level)

    if not settings.debug:
        logging.getLogger('werkzeug').setLevel(logging.WARNING)


def register_blueprints(app: Flask) -> None:
    app.register_blueprint(site_bp)
    app.register_blueprint(contact_bp)


def configure_error_handlers(app: Flask) -> None:
    """
    Map domain and HTTP errors to responses without leaking internals
    """
    @app.errorhandler(ForbiddenPath)
    def forbidden_path(error):
        app.logger.warning(f"Forbidden asset request from {request.remote_addr}: {error}")
        return forbidden(error)

    @app.errorhandler(AssetNotFound)
    def asset_not_found(error):
        app.logger.debug(str(error))
        return not_found(error)

    @app.errorhandler(403)
    def forbidden(error):
        return jsonify({
            'error': 'Forbidden',
            'status_code': 403
        }), 403

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({
            'error': 'Not Found',
            'message': 'The requested resource was not found',
            'status_code': 404
        }), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({
            'error': 'Method Not Allowed',
            'status_code': 405
        }), 405

    @app.errorhandler(413)
    def payload_too_large(error):
        app.logger.warning(f"Oversized request body from {request.remote_addr}")
        return jsonify({
            'error': 'Payload Too Large',
            'status_code': 413
        }), 413

    @app.errorhandler(500)
    def internal_error(error):
        app.logger.error(f"Internal server error: {error}")
        return jsonify({
            'error': 'Internal Server Error',
            'message': 'An unexpected error occurred',
            'status_code': 500
        }), 500

    @app.errorhandler(Exception)
    def handle_exception(e):
        """Handle unexpected exceptions"""
        if isinstance(e, HTTPException):
            return e

        app.logger.error(f"Unhandled exception: {e}", exc_info=True)
        return jsonify({
            'error': 'Internal Server Error',
            'message': 'An unexpected error occurred',
            'status_code': 500
        }), 500


def configure_health_checks(app: Flask) -> None:
    @app.route('/health')
    def health_check():
        """Liveness probe, succeeds whenever the process is serving"""
        return jsonify({'healthy': True})


def create_app(settings: Optional[Settings] = None) -> Flask:
    """
    Flask application factory

    Args:
        settings: Pre-built configuration, read from the environment when omitted

    Returns:
        Configured Flask application instance
    """
    settings = settings or load_settings()

    app = Flask(__name__, static_folder=None)
    app.config.from_object(SecurityConfig)
    app.config['SITE_SETTINGS'] = settings
    app.config['DEBUG'] = settings.debug

    setup_logging(app, settings)
    app.logger.info(
        f"Starting {SITE_NAME} site in {settings.environment} mode, "
        f"serving {settings.static_root}"
    )
    app.logger.info(
        f"Mail relay: host={settings.mail_host or '<unset>'} port={settings.mail_port} "
        f"tls={'implicit' if settings.uses_implicit_tls else 'starttls'} "
        f"recipient={settings.recipient_address or '<unset>'}"
    )
    if not settings.mail_configured:
        app.logger.warning("SMTP_HOST or TO_EMAIL is empty, contact form submissions will fail")

    configure_health_checks(app)
    register_blueprints(app)
    configure_error_handlers(app)
    init_request_middleware(app)

    return app


# Production WSGI application
application = create_app()

if __name__ == '__main__':
    site_settings = application.config['SITE_SETTINGS']
    application.logger.info(f"{SITE_NAME} server listening on :{site_settings.listen_port}")
    application.run(
        host='0.0.0.0',
        port=int(site_settings.listen_port),
        debug=site_settings.debug,
        threaded=True,
        use_reloader=False,
    )
