"""WorkflowStore SQLite 实现 -- 审批请求

活跃的工作流实例在组织范围内可见，尚未按步骤审批人过滤。
"""

import aiosqlite

from ..models.enums import WORKFLOW_ACTIONABLE_STATUSES
from ..models.query import DueDateRange
from ..models.sources import WorkflowInstanceRecord
from .sql import due_range_clause, from_db_datetime, placeholders, to_db_datetime

_ACTIONABLE = [s.value for s in WORKFLOW_ACTIONABLE_STATUSES]

_SELECT = """
SELECT w.*, t.name AS template_name
FROM workflow_instances w
JOIN workflow_templates t ON t.id = w.template_id
"""


class SqliteWorkflowStore:
    """WorkflowInstanceReader 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def create_template(
        self,
        template_id: str,
        organization_id: str,
        name: str,
    ) -> None:
        await self._conn.execute(
            "INSERT INTO workflow_templates (id, organization_id, name) VALUES (?, ?, ?)",
            (template_id, organization_id, name),
        )

    async def create_instance(self, instance: WorkflowInstanceRecord) -> None:
        await self._conn.execute(
            """
            INSERT INTO workflow_instances (id, organization_id, template_id, entity_type,
                                            entity_id, due_date, status, current_stage,
                                            current_step, sla_status, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                instance.id,
                instance.organization_id,
                instance.template_id,
                instance.entity_type,
                instance.entity_id,
                to_db_datetime(instance.due_date),
                instance.status.value,
                instance.current_stage,
                instance.current_step,
                instance.sla_status.value,
                to_db_datetime(instance.created_at),
            ),
        )

    async def list_open(
        self,
        organization_id: str,
        user_id: str,
        due_range: DueDateRange | None,
        limit: int,
    ) -> list[WorkflowInstanceRecord]:
        range_sql, range_params = due_range_clause("w.due_date", due_range)
        cursor = await self._conn.execute(
            f"""
            {_SELECT}
            WHERE w.organization_id = ?
              AND w.status IN ({placeholders(_ACTIONABLE)}){range_sql}
            ORDER BY w.created_at DESC
            LIMIT ?
            """,
            (organization_id, *_ACTIONABLE, *range_params, limit),
        )
        rows = await cursor.fetchall()
        return [self._row_to_instance(row) for row in rows]

    async def count_open(self, organization_id: str, user_id: str) -> int:
        cursor = await self._conn.execute(
            f"""
            SELECT COUNT(*) FROM workflow_instances
            WHERE organization_id = ?
              AND status IN ({placeholders(_ACTIONABLE)})
            """,
            (organization_id, *_ACTIONABLE),
        )
        row = await cursor.fetchone()
        return row[0]

    @staticmethod
    def _row_to_instance(row: aiosqlite.Row) -> WorkflowInstanceRecord:
        return WorkflowInstanceRecord(
            id=row["id"],
            organization_id=row["organization_id"],
            template_id=row["template_id"],
            template_name=row["template_name"],
            entity_type=row["entity_type"],
            entity_id=row["entity_id"],
            due_date=from_db_datetime(row["due_date"]),
            status=row["status"],
            current_stage=row["current_stage"],
            current_step=row["current_step"],
            sla_status=row["sla_status"],
            created_at=from_db_datetime(row["created_at"]),
        )
