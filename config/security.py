# config/security.py
"""
Security Configuration for the public site
"""


class SecurityConfig:
    """Flask settings applied with app.config.from_object"""

    # Contact form bodies are tiny
    MAX_CONTENT_LENGTH = 1024 * 1024  # 1MB

    # Content Security Policy
    CSP_POLICY = {
        'default-src': "'self'",
        'script-src': "'self' 'unsafe-inline'",
        'style-src': "'self' 'unsafe-inline'",
        'img-src': "'self' data: https:",
        'connect-src': "'self'",
        'font-src': "'self'",
        'object-src': "'none'",
        'base-uri': "'self'",
        'form-action': "'self'"
    }

    # Security headers
    SECURITY_HEADERS = {
        'X-Content-Type-Options': 'nosniff',
        'X-Frame-Options': 'DENY',
        'Referrer-Policy': 'strict-origin-when-cross-origin',
        'Permissions-Policy': 'camera=(), microphone=(), geolocation=()'
    }

    # Slow request threshold for the access log, in milliseconds
    SLOW_REQUEST_THRESHOLD = 1000


# Static asset extensions the site is allowed to serve (case-sensitive)
ALLOWED_ASSET_EXTENSIONS = frozenset({
    '.css', '.js', '.png', '.jpg', '.jpeg',
    '.svg', '.webp', '.ico', '.gif',
})

HOMEPAGE_FILE = 'index.html'
