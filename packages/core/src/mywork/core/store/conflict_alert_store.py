"""ConflictAlertStore SQLite 实现

冲突告警是组织级审核队列：由任意合规人员领取处理，
因此查询不按用户过滤，这是有意保留的不对称。
告警没有截止时间概念，截止时间范围筛选不作用于此数据源。
"""

import aiosqlite

from ..models.enums import CONFLICT_ACTIONABLE_STATUSES
from ..models.query import DueDateRange
from ..models.sources import ConflictAlertRecord
from .sql import from_db_datetime, placeholders, to_db_datetime

_ACTIONABLE = [s.value for s in CONFLICT_ACTIONABLE_STATUSES]


class SqliteConflictAlertStore:
    """ConflictAlertReader 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def create_alert(self, alert: ConflictAlertRecord) -> None:
        await self._conn.execute(
            """
            INSERT INTO conflict_alerts (id, organization_id, disclosure_id, summary,
                                         conflict_type, matched_entity, severity,
                                         match_confidence, status, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                alert.id,
                alert.organization_id,
                alert.disclosure_id,
                alert.summary,
                alert.conflict_type,
                alert.matched_entity,
                alert.severity.value,
                alert.match_confidence,
                alert.status.value,
                to_db_datetime(alert.created_at),
            ),
        )

    async def list_open(
        self,
        organization_id: str,
        user_id: str,
        due_range: DueDateRange | None,
        limit: int,
    ) -> list[ConflictAlertRecord]:
        cursor = await self._conn.execute(
            f"""
            SELECT * FROM conflict_alerts
            WHERE organization_id = ?
              AND status IN ({placeholders(_ACTIONABLE)})
            ORDER BY created_at DESC
            LIMIT ?
            """,
            (organization_id, *_ACTIONABLE, limit),
        )
        rows = await cursor.fetchall()
        return [self._row_to_alert(row) for row in rows]

    async def count_open(self, organization_id: str, user_id: str) -> int:
        cursor = await self._conn.execute(
            f"""
            SELECT COUNT(*) FROM conflict_alerts
            WHERE organization_id = ?
              AND status IN ({placeholders(_ACTIONABLE)})
            """,
            (organization_id, *_ACTIONABLE),
        )
        row = await cursor.fetchone()
        return row[0]

    @staticmethod
    def _row_to_alert(row: aiosqlite.Row) -> ConflictAlertRecord:
        return ConflictAlertRecord(
            id=row["id"],
            organization_id=row["organization_id"],
            disclosure_id=row["disclosure_id"],
            summary=row["summary"],
            conflict_type=row["conflict_type"],
            matched_entity=row["matched_entity"],
            severity=row["severity"],
            match_confidence=row["match_confidence"],
            status=row["status"],
            created_at=from_db_datetime(row["created_at"]),
        )
