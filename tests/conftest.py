import pytest
import aiosmtplib
from aiosmtplib.email import extract_recipients, extract_sender

from app import create_app
from config.settings import Settings
from services import email_dispatcher


class FakeSMTP:
    """Stands in for aiosmtplib.SMTP and records the session"""

    def __init__(self, recorder, **kwargs):
        self.recorder = recorder
        self.options = kwargs
        self.is_connected = False
        self.calls = []
        self.sent = []

    async def connect(self):
        self.calls.append('connect')
        if self.recorder.fail_on == 'connect':
            raise aiosmtplib.SMTPConnectError("connection refused")
        self.is_connected = True

    async def starttls(self, server_hostname=None):
        self.calls.append(('starttls', server_hostname))

    async def login(self, username, password):
        self.calls.append(('login', username, password))
        if self.recorder.fail_on == 'login':
            raise aiosmtplib.SMTPAuthenticationError(535, "authentication failed")

    async def send_message(self, message):
        self.calls.append('send_message')
        # Same envelope checks aiosmtplib performs before talking to the server
        if extract_sender(message) is None:
            raise ValueError("No From header provided in message")
        if not extract_recipients(message):
            raise ValueError("No recipient headers provided in message")
        self.sent.append(message)

    async def quit(self):
        self.calls.append('quit')
        self.is_connected = False

    def close(self):
        self.calls.append('close')
        self.is_connected = False


class SMTPRecorder:
    def __init__(self):
        self.sessions = []
        self.fail_on = None

    def factory(self, **kwargs):
        session = FakeSMTP(self, **kwargs)
        self.sessions.append(session)
        return session

    @property
    def sent_messages(self):
        return [msg for session in self.sessions for msg in session.sent]


@pytest.fixture
def smtp_server(monkeypatch):
    recorder = SMTPRecorder()
    monkeypatch.setattr(email_dispatcher.aiosmtplib, 'SMTP', recorder.factory)
    return recorder


@pytest.fixture
def site_root(tmp_path):
    (tmp_path / 'index.html').write_text('<html><body>Bryan Fire Safety</body></html>')
    (tmp_path / 'styles.css').write_text('body { color: #b22; }')
    (tmp_path / 'script.js').write_text('console.log("hi");')
    (tmp_path / 'logo.png').write_bytes(b'\x89PNG\r\n\x1a\n')
    (tmp_path / 'notes.txt').write_text('internal notes')
    (tmp_path / '.env').write_text('SMTP_PASS=hunter2')
    (tmp_path / 'folder.css').mkdir()
    return tmp_path


@pytest.fixture
def settings(site_root):
    return Settings(
        mail_host='smtp.example.com',
        mail_port=587,
        mail_username='web@bryanfire.com',
        mail_password='s3cret',
        recipient_address='info@bryanfire.com',
        static_root=str(site_root),
    )


@pytest.fixture
def app(settings):
    app = create_app(settings)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client
