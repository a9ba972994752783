"""CaseStore SQLite 实现

案件没有显式截止时间，截止时间范围筛选映射到 created_at。
案件创建人即负责人（created_by_id）。
"""

import aiosqlite

from ..models.enums import CASE_EXCLUDED_STATUSES, CaseStatus
from ..models.query import DueDateRange
from ..models.sources import CaseRecord
from .sql import due_range_clause, from_db_datetime, placeholders, to_db_datetime

_EXCLUDED = [s.value for s in CASE_EXCLUDED_STATUSES]


class SqliteCaseStore:
    """CaseReader 的 SQLite 实现，附带任务操作需要的写方法"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def create_case(self, case: CaseRecord) -> None:
        """创建案件记录"""
        await self._conn.execute(
            """
            INSERT INTO cases (id, organization_id, reference_number, status, severity,
                               summary, details, source_channel, case_type, category_name,
                               created_at, created_by_id, is_merged)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                case.id,
                case.organization_id,
                case.reference_number,
                case.status.value,
                case.severity.value if case.severity else None,
                case.summary,
                case.details,
                case.source_channel,
                case.case_type,
                case.category_name,
                to_db_datetime(case.created_at),
                case.created_by_id,
                int(case.is_merged),
            ),
        )

    async def list_open(
        self,
        organization_id: str,
        user_id: str,
        due_range: DueDateRange | None,
        limit: int,
    ) -> list[CaseRecord]:
        """查询用户负责的未关闭、未合并案件"""
        range_sql, range_params = due_range_clause("created_at", due_range)
        cursor = await self._conn.execute(
            f"""
            SELECT * FROM cases
            WHERE organization_id = ?
              AND created_by_id = ?
              AND status NOT IN ({placeholders(_EXCLUDED)})
              AND is_merged = 0{range_sql}
            ORDER BY created_at DESC
            LIMIT ?
            """,
            (organization_id, user_id, *_EXCLUDED, *range_params, limit),
        )
        rows = await cursor.fetchall()
        return [self._row_to_case(row) for row in rows]

    async def count_open(self, organization_id: str, user_id: str) -> int:
        cursor = await self._conn.execute(
            f"""
            SELECT COUNT(*) FROM cases
            WHERE organization_id = ?
              AND created_by_id = ?
              AND status NOT IN ({placeholders(_EXCLUDED)})
              AND is_merged = 0
            """,
            (organization_id, user_id, *_EXCLUDED),
        )
        row = await cursor.fetchone()
        return row[0]

    async def list_unassigned(
        self,
        organization_id: str,
        limit: int,
    ) -> list[CaseRecord]:
        """新建未认领案件，按创建时间倒序"""
        cursor = await self._conn.execute(
            """
            SELECT * FROM cases
            WHERE organization_id = ?
              AND status = ?
              AND is_merged = 0
            ORDER BY created_at DESC
            LIMIT ?
            """,
            (organization_id, CaseStatus.NEW.value, limit),
        )
        rows = await cursor.fetchall()
        return [self._row_to_case(row) for row in rows]

    async def get_case(self, organization_id: str, case_id: str) -> CaseRecord | None:
        cursor = await self._conn.execute(
            "SELECT * FROM cases WHERE organization_id = ? AND id = ?",
            (organization_id, case_id),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_case(row)

    async def update_case_status(
        self,
        organization_id: str,
        case_id: str,
        status: CaseStatus,
        updated_by_id: str,
    ) -> None:
        await self._conn.execute(
            """
            UPDATE cases SET status = ?, updated_by_id = ?
            WHERE organization_id = ? AND id = ?
            """,
            (status.value, updated_by_id, organization_id, case_id),
        )

    @staticmethod
    def _row_to_case(row: aiosqlite.Row) -> CaseRecord:
        return CaseRecord(
            id=row["id"],
            organization_id=row["organization_id"],
            reference_number=row["reference_number"],
            status=row["status"],
            severity=row["severity"],
            summary=row["summary"],
            details=row["details"],
            source_channel=row["source_channel"],
            case_type=row["case_type"],
            category_name=row["category_name"],
            created_at=from_db_datetime(row["created_at"]),
            created_by_id=row["created_by_id"],
            is_merged=bool(row["is_merged"]),
        )
