"""Shared fixtures: in-memory SQLite engine, recording mail transport, base test cases."""

import threading
import unittest

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import docuploader.core.security as security
from docuploader.core.database import get_db
from docuploader.main import app
from docuploader.models import Base
from docuploader.schemas.registration import RegistrationRequest
from docuploader.services.context import RequestContext
from docuploader.services.notifications import EmailMessage, NotificationDispatcher, get_dispatcher

# Fast hashes in tests.
security.BCRYPT_ROUNDS = 4

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

CONTEXT = RequestContext(locale="en", base_url="http://frontend.test")


class RecordingTransport:
    """Mail transport that keeps every message instead of sending it."""

    def __init__(self) -> None:
        self.sent: list[EmailMessage] = []
        self._lock = threading.Lock()

    def send(self, message: EmailMessage) -> None:
        with self._lock:
            self.sent.append(message)


def registration_payload(
    email: str = "a@b.com",
    account_name: str = "acct1",
    password: str = "x",
    service_level: str = "BRONZE",
    role: str = "ROLE_USER",
) -> dict:
    """camelCase registration body as the API receives it."""
    return {
        "user": {
            "email": email,
            "password": password,
            "firstName": "A",
            "lastName": "B",
            "enabled": False,
        },
        "account": {"name": account_name, "serviceLevel": service_level},
        "authGroup": {"username": email, "role": role},
    }


def registration_request(**kwargs: str) -> RegistrationRequest:
    return RegistrationRequest.model_validate(registration_payload(**kwargs))


class DatabaseTestCase(unittest.TestCase):
    """Fresh schema, a session and a running dispatcher with a recording transport per test."""

    def setUp(self) -> None:
        Base.metadata.create_all(engine)
        self.db = TestingSessionLocal()
        self.transport = RecordingTransport()
        self.dispatcher = NotificationDispatcher(self.transport)
        self.dispatcher.start()

    def tearDown(self) -> None:
        self.dispatcher.stop()
        self.db.close()
        Base.metadata.drop_all(engine)

    def sent_emails(self) -> list[EmailMessage]:
        """Wait for the worker to drain the queue and return what it sent."""
        self.dispatcher.join()
        return list(self.transport.sent)


class ApiTestCase(DatabaseTestCase):
    """DatabaseTestCase plus a TestClient wired to the test session and dispatcher."""

    def setUp(self) -> None:
        super().setUp()

        def override_get_db():
            db = TestingSessionLocal()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_dispatcher] = lambda: self.dispatcher
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        super().tearDown()
