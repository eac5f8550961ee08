# core/errors.py
"""
Exception hierarchy for the site backend
"""


class SiteError(Exception):
    """Base exception for request handling failures"""
    pass


class ForbiddenPath(SiteError):
    """Requested path tries to escape the serving root or reach a hidden file"""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Forbidden path {path!r}: {reason}")
        self.path = path
        self.reason = reason


class AssetNotFound(SiteError):
    """Asset is missing or its extension is not served"""

    def __init__(self, path: str, reason: str = 'not found'):
        super().__init__(f"Asset {path!r} {reason}")
        self.path = path
        self.reason = reason


class FormValidationError(SiteError):
    """Contact form submission failed a required-field or format check"""

    def __init__(self, field: str, reason: str):
        super().__init__(f"Field {field!r} {reason}")
        self.field = field
        self.reason = reason


class EmailDispatchError(SiteError):
    """Base exception for email delivery operations"""
    pass


class MailConfigurationError(EmailDispatchError):
    """Mail settings are incomplete, nothing was sent"""
    pass


class DeliveryError(EmailDispatchError):
    """SMTP connection, authentication or send failure"""
    pass
