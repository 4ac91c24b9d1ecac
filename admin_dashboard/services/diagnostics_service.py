"""Row counts per table, used by the debug endpoint to check database access."""

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from admin_dashboard.database import Base


async def table_row_counts(db: AsyncSession) -> dict[str, int]:
    counts = {}
    for table in Base.metadata.sorted_tables:
        counts[table.name] = await db.scalar(select(func.count()).select_from(table))
    return counts
