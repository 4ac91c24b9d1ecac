"""
FastAPI application factory and entry point.

This module creates and configures the FastAPI application:
  1. Logging — one basicConfig call at LOG_LEVEL
  2. Lifespan manager — creates tables on startup, disposes the engine on shutdown
  3. CORS middleware — lets the dashboard frontend call the API
  4. Exception handlers — maps domain errors to {"message": ...} responses
  5. Router registration — mounts every endpoint group under /api

Running locally:
    uvicorn admin_dashboard.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from admin_dashboard import models  # noqa: F401  registers tables on Base.metadata
from admin_dashboard.config import settings
from admin_dashboard.database import engine, Base
from admin_dashboard.exceptions import register_exception_handlers
from admin_dashboard.routers import (
    admin,
    admins,
    appointments,
    auth,
    dashboard,
    debug,
    payments,
    subscriptions,
    users,
    withdrawals,
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup:
      Creates any missing tables. Against the shared production database the
      tables already exist and this is a no-op.

    Shutdown:
      Disposes of the database engine, closing all pooled connections.
    """
    # --- Startup ---
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    if not settings.ADMIN_ACCOUNTS:
        logger.warning("ADMIN_ACCOUNTS is empty; nobody can log in")
    logger.info("%s %s started", settings.APP_NAME, settings.APP_VERSION)
    yield
    # --- Shutdown ---
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Admin API for the telemedicine dashboard: users, appointments, "
                "payments, subscriptions and doctor withdrawals",
    lifespan=lifespan,
)

# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

register_exception_handlers(app)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(admins.router, prefix="/api/admins", tags=["Auth"])
app.include_router(users.router, prefix="/api/users", tags=["Users"])
app.include_router(users.pending_doctors_router, prefix="/api/pending-doctors", tags=["Users"])
app.include_router(appointments.router, prefix="/api/appointments", tags=["Appointments"])
app.include_router(payments.router, prefix="/api/payments", tags=["Payments"])
app.include_router(subscriptions.router, prefix="/api/subscriptions", tags=["Subscriptions"])
app.include_router(subscriptions.plans_router, prefix="/api/plans", tags=["Plans"])
app.include_router(withdrawals.router, prefix="/api/withdraw-requests", tags=["Withdrawals"])
app.include_router(admin.router, prefix="/api/admin", tags=["Admin"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["Dashboard"])
app.include_router(debug.router, prefix="/api/debug", tags=["Debug"])


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------

@app.get("/health", tags=["Health"])
async def health_check():
    """Liveness probe; does not touch the database."""
    return {"status": "ok", "version": settings.APP_VERSION}
