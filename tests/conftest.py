"""
Test fixtures for the Admin API test suite.

This module provides shared fixtures used across all test files:

  - db_engine / db_session: Fresh in-memory SQLite database for each test
  - admin_accounts: Two configured admin accounts (autouse)
  - client: Async HTTP test client (unauthenticated)
  - auth_client: Test client logged in as admin-1 via /api/auth/login
  - make_user / make_appointment / ...: Factories that insert rows directly
  - outbox: Captures emails instead of sending them

Key design decisions:
  - In-memory SQLite (sqlite+aiosqlite://) is used for speed and isolation.
    Each test gets a completely fresh database.
  - FastAPI's get_db dependency is overridden to inject a session on the
    test engine, so the application code runs exactly as in production.
  - Admin accounts live in configuration, so they are monkeypatched onto
    the settings singleton rather than inserted into the database.
  - Rows the dashboard only reads (users, appointments, payments...) are
    written by the main backend in production; the factories insert them
    directly.
"""

import os

# Settings() requires a signing key; set one before the app is imported.
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from admin_dashboard.config import AdminAccount, settings
from admin_dashboard.database import Base, get_db
from admin_dashboard.main import app
from admin_dashboard.models.appointment import Appointment
from admin_dashboard.models.payment import PaymentTransaction
from admin_dashboard.models.subscription import Plan, Subscription
from admin_dashboard.models.user import User
from admin_dashboard.models.withdrawal import DoctorWallet, WithdrawalRequest
from admin_dashboard.security import hash_password
from admin_dashboard.services import email_service


# In-memory SQLite for fast, isolated tests
TEST_DATABASE_URL = "sqlite+aiosqlite://"

ADMIN_EMAIL = "ops@docavailable.test"
ADMIN_PASSWORD = "CorrectHorse42!"
SECOND_ADMIN_EMAIL = "finance@docavailable.test"
SECOND_ADMIN_PASSWORD = "BatteryStaple7!"

# Hashed once per session; Argon2 is deliberately slow
_ADMIN_ACCOUNTS = [
    AdminAccount(
        id="admin-1",
        email=ADMIN_EMAIL,
        name="Ops Admin",
        password_hash=hash_password(ADMIN_PASSWORD),
    ),
    AdminAccount(
        id="admin-2",
        email=SECOND_ADMIN_EMAIL,
        name="Finance Admin",
        role="finance",
        password_hash=hash_password(SECOND_ADMIN_PASSWORD),
    ),
]


@pytest.fixture(autouse=True)
def admin_accounts(monkeypatch):
    """Configure two admin accounts for every test."""
    monkeypatch.setattr(settings, "ADMIN_ACCOUNTS", list(_ADMIN_ACCOUNTS))
    return _ADMIN_ACCOUNTS


@pytest_asyncio.fixture
async def db_engine():
    """Create a fresh async engine with all tables for each test."""
    engine = create_async_engine(TEST_DATABASE_URL)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    """Provide an async session bound to the test engine."""
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with async_session() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_engine):
    """
    Async HTTP test client with the test database injected.

    This overrides the get_db dependency so all requests hit the
    in-memory test database instead of the real one.
    """
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async def override_get_db():
        async with async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def auth_client(client):
    """
    Test client logged in as admin-1.

    Goes through the real login endpoint, then sets the Authorization
    header on the client for all subsequent requests.
    """
    response = await client.post(
        "/api/auth/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200, f"Login failed: {response.text}"
    token = response.json()["token"]
    client.headers["Authorization"] = f"Bearer {token}"
    return client


@pytest.fixture
def outbox(monkeypatch):
    """
    Record emails instead of sending them.

    Each entry is (template, data). Set ``outbox.succeed = False`` to make
    delivery report failure.
    """

    class Outbox(list):
        succeed = True

    sent = Outbox()

    async def fake_send_email(template, data):
        sent.append((template, data))
        return sent.succeed

    monkeypatch.setattr(email_service, "send_email", fake_send_email)
    return sent


# ---------------------------------------------------------------------------
# Row factories
# ---------------------------------------------------------------------------

@pytest.fixture
def make_user(db_session):
    counter = {"n": 0}

    async def _make_user(**fields):
        counter["n"] += 1
        values = {
            "first_name": f"User{counter['n']}",
            "last_name": "Phiri",
            "email": f"user{counter['n']}@example.com",
            "user_type": "patient",
            "status": "approved",
        }
        values.update(fields)
        user = User(**values)
        db_session.add(user)
        await db_session.commit()
        return user

    return _make_user


@pytest_asyncio.fixture
async def doctor(make_user):
    return await make_user(
        first_name="Chikondi",
        last_name="Banda",
        email="dr.banda@example.com",
        user_type="doctor",
        status="pending",
        specialization="General Practice",
    )


@pytest_asyncio.fixture
async def patient(make_user):
    return await make_user(
        first_name="Thoko",
        last_name="Mwale",
        email="thoko@example.com",
        user_type="patient",
    )


@pytest.fixture
def make_appointment(db_session):
    async def _make_appointment(doctor, patient, **fields):
        values = {
            "doctor_id": doctor.id,
            "patient_id": patient.id,
            "appointment_type": "video",
            "status": "pending",
            "appointment_date": date.today(),
            "appointment_time": "10:30",
        }
        values.update(fields)
        appointment = Appointment(**values)
        db_session.add(appointment)
        await db_session.commit()
        return appointment

    return _make_appointment


@pytest.fixture
def make_payment(db_session):
    async def _make_payment(user, **fields):
        values = {
            "user_id": user.id,
            "amount": Decimal("15000.00"),
            "currency": "MWK",
            "payment_status": "pending",
            "payment_method": "mobile_money",
            "gateway": "paychangu",
            "transaction_id": f"tx-{user.id}",
        }
        values.update(fields)
        payment = PaymentTransaction(**values)
        db_session.add(payment)
        await db_session.commit()
        return payment

    return _make_payment


@pytest.fixture
def make_plan(db_session):
    async def _make_plan(**fields):
        values = {
            "name": "Basic",
            "price": Decimal("10000.00"),
            "currency": "MWK",
            "duration": 30,
            "text_sessions": 5,
            "voice_calls": 2,
            "video_calls": 1,
            "features": ["Priority booking"],
        }
        values.update(fields)
        plan = Plan(**values)
        db_session.add(plan)
        await db_session.commit()
        return plan

    return _make_plan


@pytest.fixture
def make_subscription(db_session):
    async def _make_subscription(user, **fields):
        now = datetime.now(timezone.utc)
        values = {
            "user_id": user.id,
            "plan_name": "Basic",
            "plan_price": Decimal("10000.00"),
            "plan_currency": "MWK",
            "status": "active",
            "is_active": True,
            "start_date": now,
            "end_date": now + timedelta(days=30),
        }
        values.update(fields)
        subscription = Subscription(**values)
        db_session.add(subscription)
        await db_session.commit()
        return subscription

    return _make_subscription


@pytest.fixture
def make_withdrawal(db_session):
    async def _make_withdrawal(doctor, **fields):
        values = {
            "doctor_id": doctor.id,
            "amount": Decimal("5000.00"),
            "payment_method": "bank_transfer",
            "status": "pending",
            "bank_name": "National Bank of Malawi",
            "bank_account": "100200300",
            "account_holder_name": "Chikondi Banda",
        }
        values.update(fields)
        withdrawal = WithdrawalRequest(**values)
        db_session.add(withdrawal)
        await db_session.commit()
        return withdrawal

    return _make_withdrawal


@pytest.fixture
def make_wallet(db_session):
    async def _make_wallet(doctor, balance="20000.00"):
        wallet = DoctorWallet(doctor_id=doctor.id, balance=Decimal(balance))
        db_session.add(wallet)
        await db_session.commit()
        return wallet

    return _make_wallet
