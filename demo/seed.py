#!/usr/bin/env python3
"""
Demo seed script — populates the database with sample data for demos.

!! NOT FOR PRODUCTION !!
In production, users, appointments, payments and withdrawal requests are
written by the main DocAvailable backend; the dashboard only reviews them.
This script writes a small, realistic data set straight into the database
so the dashboard has something to show during local development.

Usage (after `pip install -e ".[demo]"`):
    # Create tables (if needed) and seed DATABASE_URL:
    python demo/seed.py

    # Drop every table first:
    python demo/seed.py --reset

    # After seeding, log in to a running API and print the dashboard stats
    # (requires httpx and an admin account configured in ADMIN_ACCOUNTS):
    python demo/seed.py --check --email ops@example.com --password '...'
"""

import argparse
import asyncio
import random
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import httpx
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from admin_dashboard.config import settings
from admin_dashboard.database import Base
from admin_dashboard.models import (
    Appointment,
    DoctorWallet,
    PaymentTransaction,
    Plan,
    Subscription,
    User,
    WithdrawalRequest,
)

# ---------------------------------------------------------------------------
# Demo data
# ---------------------------------------------------------------------------

PLANS = [
    {"name": "Basic", "price": Decimal("10000"), "currency": "MWK",
     "text_sessions": 5, "voice_calls": 1, "video_calls": 0,
     "features": ["Text consultations"]},
    {"name": "Premium", "price": Decimal("25000"), "currency": "MWK",
     "text_sessions": 15, "voice_calls": 5, "video_calls": 2,
     "features": ["Text consultations", "Voice calls", "Priority booking"]},
    {"name": "Executive", "price": Decimal("30"), "currency": "USD",
     "text_sessions": 40, "voice_calls": 15, "video_calls": 10,
     "features": ["Unlimited chat", "Video consultations", "Dedicated doctor"]},
]

DOCTORS = [
    ("Chikondi", "Banda", "General Practice", "approved"),
    ("Mphatso", "Kachingwe", "Paediatrics", "approved"),
    ("Yamikani", "Chirwa", "Dermatology", "pending"),
    ("Tadala", "Nkhoma", "Psychiatry", "pending"),
]

PATIENTS = [
    ("Thoko", "Mwale"), ("Kondwani", "Zulu"), ("Grace", "Phiri"),
    ("Madalitso", "Tembo"), ("Alinafe", "Gondwe"), ("Chisomo", "Kamanga"),
]

REASONS = [
    "Persistent headache", "Follow-up on blood pressure", "Skin rash",
    "Child has a fever", "Trouble sleeping", "Prescription renewal",
]


def log(msg: str) -> None:
    print(f"  {msg}")


def email_for(first: str, last: str) -> str:
    return f"{first.lower()}.{last.lower()}@example.com"


# ---------------------------------------------------------------------------
# Seed logic
# ---------------------------------------------------------------------------

async def seed(reset: bool) -> None:
    print("\n========================================")
    print("  DEMO SEED — NOT FOR PRODUCTION")
    print("========================================\n")

    engine = create_async_engine(settings.DATABASE_URL)
    async with engine.begin() as conn:
        if reset:
            await conn.run_sync(Base.metadata.drop_all)
            log("Dropped all tables")
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    now = datetime.now(timezone.utc)

    async with session_factory() as session:
        plans = [Plan(**fields) for fields in PLANS]
        session.add_all(plans)

        for admin in settings.ADMIN_ACCOUNTS:
            first, _, last = admin.name.partition(" ")
            session.add(User(first_name=first, last_name=last, email=admin.email, user_type="admin"))

        doctors = []
        for first, last, specialization, status in DOCTORS:
            doctor = User(
                first_name=first, last_name=last, email=email_for(first, last),
                user_type="doctor", status=status, specialization=specialization,
                medical_licence=f"MCM-{random.randint(1000, 9999)}",
                city="Lilongwe", country="Malawi",
            )
            doctors.append(doctor)
        patients = [
            User(first_name=first, last_name=last, email=email_for(first, last),
                 city=random.choice(["Lilongwe", "Blantyre", "Mzuzu"]), country="Malawi")
            for first, last in PATIENTS
        ]
        session.add_all(doctors + patients)
        await session.flush()
        log(f"{len(doctors)} doctors, {len(patients)} patients, {len(plans)} plans")

        approved_doctors = [d for d in doctors if d.status == "approved"]

        # --- Subscriptions and their payments ---
        for patient in patients:
            plan = random.choice(plans)
            started = now - timedelta(days=random.randint(0, 45))
            active = started + timedelta(days=plan.duration) > now
            session.add(Subscription(
                user_id=patient.id, plan_id=plan.id, plan_name=plan.name,
                plan_price=plan.price, plan_currency=plan.currency,
                status="active" if active else "expired", is_active=active,
                start_date=started, end_date=started + timedelta(days=plan.duration),
                created_at=started,
            ))
            session.add(PaymentTransaction(
                user_id=patient.id, amount=plan.price, currency=plan.currency,
                payment_status=random.choice(["completed", "completed", "pending", "failed"]),
                payment_method="mobile_money", gateway="paychangu",
                transaction_id=f"PC-{random.randint(100000, 999999)}",
                created_at=started,
            ))
        log(f"{len(patients)} subscriptions and payments")

        # --- Appointments ---
        count = 0
        for patient in patients:
            for _ in range(random.randint(1, 4)):
                day = date.today() + timedelta(days=random.randint(-20, 10))
                session.add(Appointment(
                    doctor_id=random.choice(approved_doctors).id,
                    patient_id=patient.id,
                    appointment_type=random.choice(["text", "voice", "video"]),
                    status="completed" if day < date.today() else random.choice(["pending", "confirmed"]),
                    appointment_date=day,
                    appointment_time=f"{random.randint(8, 16):02d}:{random.choice(['00', '30'])}",
                    duration_minutes=30,
                    reason=random.choice(REASONS),
                ))
                count += 1
        log(f"{count} appointments")

        # --- Wallets and withdrawal requests ---
        for doctor in approved_doctors:
            session.add(DoctorWallet(doctor_id=doctor.id, balance=Decimal("60000")))
            session.add(WithdrawalRequest(
                doctor_id=doctor.id, amount=Decimal("15000"), payment_method="bank_transfer",
                bank_name="National Bank of Malawi", bank_account=f"{random.randint(10**8, 10**9 - 1)}",
                bank_branch="Capital City", account_holder_name=doctor.name,
            ))
            session.add(WithdrawalRequest(
                doctor_id=doctor.id, amount=Decimal("8000"), payment_method="mobile_money",
                mobile_provider="Airtel Money", mobile_number="0999000111", status="approved",
            ))
        log(f"{len(approved_doctors) * 2} withdrawal requests")

        await session.commit()

    await engine.dispose()

    print("\n========================================")
    print("  SEED COMPLETE")
    print("========================================\n")


async def check(base_url: str, email: str, password: str) -> None:
    """Log in to a running API and print the dashboard stats."""
    async with httpx.AsyncClient(base_url=base_url) as client:
        resp = await client.post("/api/auth/login", json={"email": email, "password": password})
        resp.raise_for_status()
        token = resp.json()["token"]
        resp = await client.get(
            "/api/dashboard/stats", headers={"Authorization": f"Bearer {token}"}
        )
        resp.raise_for_status()

    for key, value in resp.json()["stats"].items():
        log(f"{key:<24s} {value}")
    print()


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Demo seed script — NOT FOR PRODUCTION",
        epilog="Writes sample doctors, patients, subscriptions and withdrawals.",
    )
    parser.add_argument("--reset", action="store_true", help="Drop all tables before seeding")
    parser.add_argument("--check", action="store_true", help="Print dashboard stats from a running API")
    parser.add_argument("--base-url", default="http://localhost:8000")
    parser.add_argument("--email", help="Admin email for --check")
    parser.add_argument("--password", help="Admin password for --check")
    args = parser.parse_args()

    await seed(args.reset)

    if args.check:
        if not (args.email and args.password):
            parser.error("--check needs --email and --password")
        await check(args.base_url, args.email, args.password)


if __name__ == "__main__":
    asyncio.run(main())
