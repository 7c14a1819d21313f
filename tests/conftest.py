"""
Shared fixtures: mongomock-backed stores, a recording mailer and a mocked
MarzPay client, wired into the FastAPI app through dependency overrides.
"""

import os

# Must be set before anything imports starinvest.config
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("FRONTEND_URL", "http://frontend.test")
os.environ.setdefault("MARZPAY_AUTH_HEADER", "dGVzdDp0ZXN0")

from unittest.mock import MagicMock
from urllib.parse import urlparse, parse_qs
import re

import mongomock
import pytest
from fastapi.testclient import TestClient

from starinvest.db import ensure_indexes
from starinvest.dependencies import get_account_manager, get_payment_manager
from starinvest.main import app
from starinvest.schemas.auth import RegisterRequest
from starinvest.services.accounts import AccountManager
from starinvest.services.payments import PaymentManager
from starinvest.stores.transactions import TransactionLedger
from starinvest.stores.users import UserStore
from starinvest.utils.marzpay import MarzPayClient

PHONE = "+256700000001"
EMAIL = "a@x.com"
PASSWORD = "secret1"


class RecordingMailer:
    """Stands in for EmailSender; remembers every message it was asked to send."""

    def __init__(self):
        self.sent = []
        self.succeed = True

    def send(self, to_email, subject, html):
        self.sent.append({"to": to_email, "subject": subject, "html": html})
        return self.succeed

    def last_token(self):
        url = re.search(r'href="([^"]+)"', self.sent[-1]["html"]).group(1)
        return parse_qs(urlparse(url).query)["token"][0]


@pytest.fixture
def mongo_db():
    db = mongomock.MongoClient().star_investments_test
    ensure_indexes(db["users"], db["transactions"])
    return db


@pytest.fixture
def user_store(mongo_db):
    return UserStore(mongo_db["users"])


@pytest.fixture
def ledger(mongo_db):
    return TransactionLedger(mongo_db["transactions"])


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def gateway():
    return MagicMock(spec=MarzPayClient)


@pytest.fixture
def accounts(user_store, mailer):
    return AccountManager(user_store, mailer)


@pytest.fixture
def payments(gateway, ledger):
    return PaymentManager(gateway, ledger)


@pytest.fixture
def client(accounts, payments):
    app.dependency_overrides[get_account_manager] = lambda: accounts
    app.dependency_overrides[get_payment_manager] = lambda: payments
    # Not used as a context manager, so the startup hook never touches a real MongoDB
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def register_request():
    def build(phone=PHONE, email=EMAIL, password=PASSWORD, confirm=None, referral=None):
        return RegisterRequest(
            phone=phone,
            email=email,
            password=password,
            confirmPassword=password if confirm is None else confirm,
            referralCode=referral,
        )
    return build


@pytest.fixture
def collect_response():
    """Shape of the ``data`` object MarzPay returns for a collection request."""
    def build(uuid="txn-0001", status="processing"):
        return {
            "transaction": {"uuid": uuid, "status": status, "reference": "ignored"},
            "collection": {"provider": "mtn", "amount": {"raw": 500, "currency": "UGX"}},
        }
    return build
