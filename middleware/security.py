# middleware/security.py
"""
Security Middleware for Request Processing
"""

import time
import logging

from flask import Flask, request, abort, g

from config.security import SecurityConfig
from core.asset_resolver import check_traversal
from core.errors import ForbiddenPath

logger = logging.getLogger(__name__)


def build_csp(policy: dict) -> str:
    return '; '.join(f"{directive} {sources}" for directive, sources in policy.items())


def prevent_directory_traversal():
    """Reject any request whose path could escape the serving root"""
    try:
        check_traversal(request.path)
    except ForbiddenPath as e:
        logger.warning(f"Blocked request from {request.remote_addr}: {e}")
        abort(403)


def security_headers(response):
    """Add security headers to all responses"""
    for header, value in SecurityConfig.SECURITY_HEADERS.items():
        response.headers.setdefault(header, value)
    response.headers.setdefault('Content-Security-Policy', build_csp(SecurityConfig.CSP_POLICY))

    return response


def init_request_middleware(app: Flask) -> None:
    """
    Configure request/response middleware for security and access logging
    """
    @app.before_request
    def before_request():
        g.start_time = time.perf_counter()
        prevent_directory_traversal()

    @app.after_request
    def after_request(response):
        response = security_headers(response)

        if hasattr(g, 'start_time'):
            duration = (time.perf_counter() - g.start_time) * 1000
            line = f"{request.method} {request.path} {response.status_code} {duration:.0f}ms"
            if duration > app.config.get('SLOW_REQUEST_THRESHOLD', 1000):
                app.logger.warning(f"Slow request: {line}")
            else:
                app.logger.info(line)

        return response
