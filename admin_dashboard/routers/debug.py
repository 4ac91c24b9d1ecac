"""
Debug router — database connectivity check.

Endpoints:
  GET /api/debug/database — Row counts per table

Only served when DEBUG is enabled; otherwise it answers 404 like any
unknown path. On failure it returns the error text and stack trace, so it
must never be enabled in production.
"""

import logging
import traceback

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from admin_dashboard.config import AdminAccount, settings
from admin_dashboard.database import get_db
from admin_dashboard.dependencies import get_current_admin
from admin_dashboard.exceptions import NotFoundError
from admin_dashboard.services import diagnostics_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/database", summary="Check database access")
async def debug_database(
    admin: AdminAccount = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    if not settings.DEBUG:
        raise NotFoundError("Endpoint")

    try:
        counts = await diagnostics_service.table_row_counts(db)
    except Exception as exc:
        logger.exception("Database check failed")
        return JSONResponse(
            status_code=500,
            content={
                "message": "Database check failed",
                "error": str(exc),
                "stack": traceback.format_exc(),
            },
        )

    return {"message": "Database connection OK", "tables": counts}
