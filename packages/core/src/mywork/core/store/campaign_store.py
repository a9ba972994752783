"""CampaignStore SQLite 实现 -- 活动分派（员工维度）"""

import aiosqlite

from ..models.enums import ASSIGNMENT_ACTIONABLE_STATUSES
from ..models.query import DueDateRange
from ..models.sources import CampaignAssignmentRecord
from .sql import due_range_clause, from_db_datetime, placeholders, to_db_datetime

_ACTIONABLE = [s.value for s in ASSIGNMENT_ACTIONABLE_STATUSES]

_SELECT = """
SELECT a.*, cp.name AS campaign_name, cp.type AS campaign_type
FROM campaign_assignments a
JOIN campaigns cp ON cp.id = a.campaign_id
"""


class SqliteCampaignStore:
    """CampaignAssignmentReader 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def create_campaign(
        self,
        campaign_id: str,
        organization_id: str,
        name: str,
        campaign_type: str,
    ) -> None:
        await self._conn.execute(
            "INSERT INTO campaigns (id, organization_id, name, type) VALUES (?, ?, ?, ?)",
            (campaign_id, organization_id, name, campaign_type),
        )

    async def create_assignment(self, assignment: CampaignAssignmentRecord) -> None:
        await self._conn.execute(
            """
            INSERT INTO campaign_assignments (id, organization_id, campaign_id, due_date,
                                              status, employee_id, assigned_at, reminder_count)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                assignment.id,
                assignment.organization_id,
                assignment.campaign_id,
                to_db_datetime(assignment.due_date),
                assignment.status.value,
                assignment.employee_id,
                to_db_datetime(assignment.assigned_at),
                assignment.reminder_count,
            ),
        )

    async def list_open(
        self,
        organization_id: str,
        user_id: str,
        due_range: DueDateRange | None,
        limit: int,
    ) -> list[CampaignAssignmentRecord]:
        range_sql, range_params = due_range_clause("a.due_date", due_range)
        cursor = await self._conn.execute(
            f"""
            {_SELECT}
            WHERE a.organization_id = ?
              AND a.employee_id = ?
              AND a.status IN ({placeholders(_ACTIONABLE)}){range_sql}
            ORDER BY a.assigned_at DESC
            LIMIT ?
            """,
            (organization_id, user_id, *_ACTIONABLE, *range_params, limit),
        )
        rows = await cursor.fetchall()
        return [self._row_to_assignment(row) for row in rows]

    async def count_open(self, organization_id: str, user_id: str) -> int:
        cursor = await self._conn.execute(
            f"""
            SELECT COUNT(*) FROM campaign_assignments
            WHERE organization_id = ?
              AND employee_id = ?
              AND status IN ({placeholders(_ACTIONABLE)})
            """,
            (organization_id, user_id, *_ACTIONABLE),
        )
        row = await cursor.fetchone()
        return row[0]

    @staticmethod
    def _row_to_assignment(row: aiosqlite.Row) -> CampaignAssignmentRecord:
        return CampaignAssignmentRecord(
            id=row["id"],
            organization_id=row["organization_id"],
            campaign_id=row["campaign_id"],
            campaign_name=row["campaign_name"],
            campaign_type=row["campaign_type"],
            due_date=from_db_datetime(row["due_date"]),
            status=row["status"],
            employee_id=row["employee_id"],
            assigned_at=from_db_datetime(row["assigned_at"]),
            reminder_count=row["reminder_count"],
        )
