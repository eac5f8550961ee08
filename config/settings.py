# config/settings.py
"""
Process configuration loaded from the environment

Settings are read once at startup and never change afterwards. Missing or
malformed values are tolerated here; they only surface as failures when the
setting is first used (e.g. dispatch refuses to run without a mail host).
"""

import os
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_LISTEN_PORT = '8080'
SMTP_SUBMISSION_PORT = 587
SMTP_SSL_PORT = 465


@dataclass(frozen=True)
class Settings:
    """Immutable runtime configuration shared by every request handler"""
    listen_port: str = DEFAULT_LISTEN_PORT
    mail_host: str = ''
    mail_port: int = SMTP_SUBMISSION_PORT
    mail_username: str = ''
    mail_password: str = field(default='', repr=False)
    recipient_address: str = ''
    static_root: str = '.'
    environment: str = 'production'
    log_level: str = 'INFO'

    @property
    def debug(self) -> bool:
        return self.environment == 'development'

    @property
    def uses_implicit_tls(self) -> bool:
        return self.mail_port == SMTP_SSL_PORT

    @property
    def mail_configured(self) -> bool:
        return bool(self.mail_host and self.recipient_address)


def _parse_mail_port(raw: str) -> int:
    # Anything other than the literal "465" falls back to submission/STARTTLS
    if raw == str(SMTP_SSL_PORT):
        return SMTP_SSL_PORT
    if raw not in ('', str(SMTP_SUBMISSION_PORT)):
        logger.warning(
            f"Unrecognised SMTP_PORT {raw!r}, using {SMTP_SUBMISSION_PORT} with STARTTLS"
        )
    return SMTP_SUBMISSION_PORT


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from environment variables

    Args:
        environ: Mapping to read from, defaults to os.environ

    Returns:
        Frozen Settings instance
    """
    env = os.environ if environ is None else environ

    environment = env.get('FLASK_ENV', 'production')
    default_level = 'DEBUG' if environment == 'development' else 'INFO'

    return Settings(
        listen_port=env.get('PORT') or DEFAULT_LISTEN_PORT,
        mail_host=env.get('SMTP_HOST', ''),
        mail_port=_parse_mail_port(env.get('SMTP_PORT', '')),
        mail_username=env.get('SMTP_USER', ''),
        mail_password=env.get('SMTP_PASS', ''),
        recipient_address=env.get('TO_EMAIL', ''),
        static_root=str(Path(env.get('STATIC_ROOT') or '.').resolve()),
        environment=environment,
        log_level=(env.get('LOG_LEVEL') or default_level).upper(),
    )
