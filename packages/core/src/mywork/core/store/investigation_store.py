"""InvestigationStore SQLite 实现"""

from datetime import datetime

import aiosqlite

from ..models.enums import INVESTIGATION_EXCLUDED_STATUSES, InvestigationStatus
from ..models.query import DueDateRange
from ..models.sources import InvestigationRecord
from .sql import due_range_clause, from_db_datetime, placeholders, to_db_datetime

_EXCLUDED = [s.value for s in INVESTIGATION_EXCLUDED_STATUSES]

_SELECT = """
SELECT i.*, c.reference_number AS case_reference_number
FROM investigations i
JOIN cases c ON c.id = i.case_id
"""


class SqliteInvestigationStore:
    """InvestigationReader 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def create_investigation(self, investigation: InvestigationRecord) -> None:
        """创建调查记录（case_reference_number 来自关联案件，不落库）"""
        await self._conn.execute(
            """
            INSERT INTO investigations (id, organization_id, case_id, status, due_date,
                                        sla_status, primary_investigator_id,
                                        investigation_type, department, findings_summary,
                                        assigned_at, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                investigation.id,
                investigation.organization_id,
                investigation.case_id,
                investigation.status.value,
                to_db_datetime(investigation.due_date),
                investigation.sla_status.value,
                investigation.primary_investigator_id,
                investigation.investigation_type,
                investigation.department,
                investigation.findings_summary,
                to_db_datetime(investigation.assigned_at),
                to_db_datetime(investigation.created_at),
            ),
        )

    async def list_open(
        self,
        organization_id: str,
        user_id: str,
        due_range: DueDateRange | None,
        limit: int,
    ) -> list[InvestigationRecord]:
        """查询用户作为主调查人的未关闭调查"""
        range_sql, range_params = due_range_clause("i.due_date", due_range)
        cursor = await self._conn.execute(
            f"""
            {_SELECT}
            WHERE i.organization_id = ?
              AND i.primary_investigator_id = ?
              AND i.status NOT IN ({placeholders(_EXCLUDED)}){range_sql}
            ORDER BY i.created_at DESC
            LIMIT ?
            """,
            (organization_id, user_id, *_EXCLUDED, *range_params, limit),
        )
        rows = await cursor.fetchall()
        return [self._row_to_investigation(row) for row in rows]

    async def count_open(self, organization_id: str, user_id: str) -> int:
        cursor = await self._conn.execute(
            f"""
            SELECT COUNT(*) FROM investigations
            WHERE organization_id = ?
              AND primary_investigator_id = ?
              AND status NOT IN ({placeholders(_EXCLUDED)})
            """,
            (organization_id, user_id, *_EXCLUDED),
        )
        row = await cursor.fetchone()
        return row[0]

    async def get_investigation(
        self,
        organization_id: str,
        investigation_id: str,
    ) -> InvestigationRecord | None:
        cursor = await self._conn.execute(
            f"{_SELECT} WHERE i.organization_id = ? AND i.id = ?",
            (organization_id, investigation_id),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_investigation(row)

    async def close_investigation(
        self,
        organization_id: str,
        investigation_id: str,
        closed_by_id: str,
        closed_at: datetime,
    ) -> None:
        await self._conn.execute(
            """
            UPDATE investigations
            SET status = ?, closed_at = ?, closed_by_id = ?, updated_by_id = ?
            WHERE organization_id = ? AND id = ?
            """,
            (
                InvestigationStatus.CLOSED.value,
                to_db_datetime(closed_at),
                closed_by_id,
                closed_by_id,
                organization_id,
                investigation_id,
            ),
        )

    @staticmethod
    def _row_to_investigation(row: aiosqlite.Row) -> InvestigationRecord:
        return InvestigationRecord(
            id=row["id"],
            organization_id=row["organization_id"],
            case_id=row["case_id"],
            case_reference_number=row["case_reference_number"],
            status=row["status"],
            due_date=from_db_datetime(row["due_date"]),
            sla_status=row["sla_status"],
            primary_investigator_id=row["primary_investigator_id"],
            investigation_type=row["investigation_type"],
            department=row["department"],
            findings_summary=row["findings_summary"],
            assigned_at=from_db_datetime(row["assigned_at"]),
            created_at=from_db_datetime(row["created_at"]),
        )
