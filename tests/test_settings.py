import dataclasses
import logging
from pathlib import Path

import pytest

from config.settings import Settings, load_settings


def test_defaults_from_empty_environment():
    settings = load_settings({})
    assert settings.listen_port == '8080'
    assert settings.mail_host == ''
    assert settings.mail_port == 587
    assert settings.mail_username == ''
    assert settings.mail_password == ''
    assert settings.recipient_address == ''
    assert settings.static_root == str(Path('.').resolve())
    assert settings.environment == 'production'
    assert settings.log_level == 'INFO'
    assert not settings.mail_configured


def test_reads_all_variables(tmp_path):
    settings = load_settings({
        'PORT': '9000',
        'SMTP_HOST': 'smtp.example.com',
        'SMTP_PORT': '465',
        'SMTP_USER': 'web@bryanfire.com',
        'SMTP_PASS': 's3cret',
        'TO_EMAIL': 'info@bryanfire.com',
        'STATIC_ROOT': str(tmp_path),
    })
    assert settings.listen_port == '9000'
    assert settings.mail_host == 'smtp.example.com'
    assert settings.mail_port == 465
    assert settings.uses_implicit_tls
    assert settings.mail_username == 'web@bryanfire.com'
    assert settings.mail_password == 's3cret'
    assert settings.recipient_address == 'info@bryanfire.com'
    assert settings.static_root == str(tmp_path.resolve())
    assert settings.mail_configured


@pytest.mark.parametrize('raw', ['', '587'])
def test_submission_port_without_warning(raw, caplog):
    with caplog.at_level(logging.WARNING, logger='config.settings'):
        settings = load_settings({'SMTP_PORT': raw})
    assert settings.mail_port == 587
    assert not settings.uses_implicit_tls
    assert caplog.records == []


@pytest.mark.parametrize('raw', ['25', '2525', 'abc', ' 465'])
def test_unrecognised_port_falls_back_to_587(raw, caplog):
    with caplog.at_level(logging.WARNING, logger='config.settings'):
        settings = load_settings({'SMTP_PORT': raw})
    assert settings.mail_port == 587
    assert 'Unrecognised SMTP_PORT' in caplog.text


def test_development_mode_enables_debug_logging():
    settings = load_settings({'FLASK_ENV': 'development'})
    assert settings.debug
    assert settings.log_level == 'DEBUG'


def test_log_level_override_is_uppercased():
    assert load_settings({'LOG_LEVEL': 'warning'}).log_level == 'WARNING'


def test_settings_are_immutable():
    settings = Settings()
    with pytest.raises(dataclasses.FrozenInstanceError):
        settings.mail_host = 'smtp.example.com'


def test_password_is_not_in_repr():
    settings = Settings(mail_password='hunter2')
    assert 'hunter2' not in repr(settings)


@pytest.mark.parametrize('host, recipient, expected', [
    ('smtp.example.com', 'info@bryanfire.com', True),
    ('', 'info@bryanfire.com', False),
    ('smtp.example.com', '', False),
])
def test_mail_configured(host, recipient, expected):
    assert Settings(mail_host=host, recipient_address=recipient).mail_configured is expected
