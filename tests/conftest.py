"""Pytest fixtures for testing"""

import pytest
from email.message import EmailMessage
from typing import List
from fastapi.testclient import TestClient
from guarantee_quote.api.main import create_app
from guarantee_quote.api.dependencies import get_coupon_store, get_dispatcher
from guarantee_quote.config import MailSettings
from guarantee_quote.domain.coupons import CouponStore
from guarantee_quote.domain.models import Coupon
from guarantee_quote.infrastructure.mail.dispatcher import NotificationDispatcher
from guarantee_quote.infrastructure.storage.json_file import JsonFileCouponRepository


class RecordingTransport:
    """Mail transport that keeps messages instead of sending them"""

    def __init__(self):
        self.messages: List[EmailMessage] = []

    def send(self, message: EmailMessage) -> None:
        self.messages.append(message)


@pytest.fixture
def coupon_path(tmp_path):
    return tmp_path / "coupons.json"


@pytest.fixture
def coupon_store(coupon_path) -> CouponStore:
    """Store with a small known inventory, persisted to a temp file"""
    store = CouponStore(
        JsonFileCouponRepository(coupon_path),
        defaults=[
            Coupon(code="RAICES10PLUS", percent=10, remaining=5),
            Coupon(code="ALQUILA20YA", percent=20, remaining=1),
            Coupon(code="AGOTADO", percent=30, remaining=0),
        ],
    )
    store.load()
    return store


@pytest.fixture
def mail_settings() -> MailSettings:
    return MailSettings(
        email_from="cotizaciones@gmail.com",
        email_user="cotizaciones@gmail.com",
        email_pass="app-password",
        email_admin="admin@inmobiliaria.com.ar",
    )


@pytest.fixture
def recording_transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def dispatcher(mail_settings, recording_transport) -> NotificationDispatcher:
    return NotificationDispatcher(
        timeout=1.0,
        settings_provider=lambda: mail_settings,
        transport_factory=lambda _: recording_transport,
    )


@pytest.fixture
def client(coupon_store: CouponStore, dispatcher: NotificationDispatcher) -> TestClient:
    """Create FastAPI test client with temp coupon store and fake mail transport"""
    app = create_app()
    app.dependency_overrides[get_coupon_store] = lambda: coupon_store
    app.dependency_overrides[get_dispatcher] = lambda: dispatcher
    return TestClient(app)
