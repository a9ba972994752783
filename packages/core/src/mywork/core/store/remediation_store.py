"""RemediationStore SQLite 实现

整改步骤挂在整改计划下，计划挂在案件下。
完成步骤时同步递增计划的 completed_steps。
"""

from datetime import datetime

import aiosqlite

from ..models.enums import STEP_EXCLUDED_STATUSES, StepStatus
from ..models.query import DueDateRange
from ..models.sources import RemediationStepRecord
from .sql import due_range_clause, from_db_datetime, placeholders, to_db_datetime

_EXCLUDED = [s.value for s in STEP_EXCLUDED_STATUSES]

_SELECT = """
SELECT s.*, p.title AS plan_title, p.case_id AS case_id,
       c.reference_number AS case_reference_number
FROM remediation_steps s
JOIN remediation_plans p ON p.id = s.plan_id
LEFT JOIN cases c ON c.id = p.case_id
"""


class SqliteRemediationStore:
    """RemediationStepReader 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def create_plan(
        self,
        plan_id: str,
        organization_id: str,
        case_id: str,
        title: str,
    ) -> None:
        await self._conn.execute(
            """
            INSERT INTO remediation_plans (id, organization_id, case_id, title)
            VALUES (?, ?, ?, ?)
            """,
            (plan_id, organization_id, case_id, title),
        )

    async def create_step(self, step: RemediationStepRecord) -> None:
        """创建整改步骤（plan_title / case 字段来自关联计划，不落库）"""
        await self._conn.execute(
            """
            INSERT INTO remediation_steps (id, organization_id, plan_id, title, description,
                                           due_date, status, assignee_user_id, step_order,
                                           requires_co_approval, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                step.id,
                step.organization_id,
                step.plan_id,
                step.title,
                step.description,
                to_db_datetime(step.due_date),
                step.status.value,
                step.assignee_user_id,
                step.order,
                int(step.requires_co_approval),
                to_db_datetime(step.created_at),
            ),
        )

    async def list_open(
        self,
        organization_id: str,
        user_id: str,
        due_range: DueDateRange | None,
        limit: int,
    ) -> list[RemediationStepRecord]:
        """查询分派给用户、未完成且未跳过的整改步骤"""
        range_sql, range_params = due_range_clause("s.due_date", due_range)
        cursor = await self._conn.execute(
            f"""
            {_SELECT}
            WHERE s.organization_id = ?
              AND s.assignee_user_id = ?
              AND s.status NOT IN ({placeholders(_EXCLUDED)}){range_sql}
            ORDER BY s.created_at DESC
            LIMIT ?
            """,
            (organization_id, user_id, *_EXCLUDED, *range_params, limit),
        )
        rows = await cursor.fetchall()
        return [self._row_to_step(row) for row in rows]

    async def count_open(self, organization_id: str, user_id: str) -> int:
        cursor = await self._conn.execute(
            f"""
            SELECT COUNT(*) FROM remediation_steps
            WHERE organization_id = ?
              AND assignee_user_id = ?
              AND status NOT IN ({placeholders(_EXCLUDED)})
            """,
            (organization_id, user_id, *_EXCLUDED),
        )
        row = await cursor.fetchone()
        return row[0]

    async def get_step(
        self,
        organization_id: str,
        step_id: str,
    ) -> RemediationStepRecord | None:
        cursor = await self._conn.execute(
            f"{_SELECT} WHERE s.organization_id = ? AND s.id = ?",
            (organization_id, step_id),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_step(row)

    async def get_plan_completed_steps(self, organization_id: str, plan_id: str) -> int | None:
        cursor = await self._conn.execute(
            "SELECT completed_steps FROM remediation_plans WHERE organization_id = ? AND id = ?",
            (organization_id, plan_id),
        )
        row = await cursor.fetchone()
        return None if row is None else row[0]

    async def complete_step(
        self,
        organization_id: str,
        step_id: str,
        plan_id: str,
        completed_by_id: str,
        completed_at: datetime,
        notes: str | None = None,
    ) -> None:
        """标记步骤完成并递增计划完成数（调用方负责提交事务）"""
        await self._conn.execute(
            """
            UPDATE remediation_steps
            SET status = ?, completed_at = ?, completed_by_id = ?, completion_notes = ?
            WHERE organization_id = ? AND id = ?
            """,
            (
                StepStatus.COMPLETED.value,
                to_db_datetime(completed_at),
                completed_by_id,
                notes,
                organization_id,
                step_id,
            ),
        )
        await self._conn.execute(
            """
            UPDATE remediation_plans SET completed_steps = completed_steps + 1
            WHERE organization_id = ? AND id = ?
            """,
            (organization_id, plan_id),
        )

    @staticmethod
    def _row_to_step(row: aiosqlite.Row) -> RemediationStepRecord:
        return RemediationStepRecord(
            id=row["id"],
            organization_id=row["organization_id"],
            plan_id=row["plan_id"],
            plan_title=row["plan_title"],
            case_id=row["case_id"],
            case_reference_number=row["case_reference_number"],
            title=row["title"],
            description=row["description"],
            due_date=from_db_datetime(row["due_date"]),
            status=row["status"],
            assignee_user_id=row["assignee_user_id"],
            order=row["step_order"],
            requires_co_approval=bool(row["requires_co_approval"]),
            created_at=from_db_datetime(row["created_at"]),
        )
