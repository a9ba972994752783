"""TaskActionService -- 任务完成 / 认领 / 延后

按组合任务 ID 中的类型路由到对应数据源的写操作。
聚合器本身只读，所有写操作集中在这里，且全部按租户隔离。
"""

from datetime import UTC, datetime

import structlog
from mywork.core.exceptions import TaskActionError, TaskNotFoundError
from mywork.core.models import (
    STEP_EXCLUDED_STATUSES,
    CaseStatus,
    InvestigationStatus,
    TaskType,
    ensure_utc,
)
from mywork.core.store import StoreGroup
from mywork.core.task_id import parse_task_id

log = structlog.get_logger()

# 需在各自业务界面完成的任务类型
_EXTERNALLY_COMPLETED: dict[TaskType, str] = {
    TaskType.CAMPAIGN_RESPONSE: "Campaign responses must be completed through the disclosure portal",
    TaskType.DISCLOSURE_REVIEW: "Disclosure reviews must be resolved through the conflicts interface",
    TaskType.APPROVAL_REQUEST: "Approval requests must be handled through the workflow interface",
}


class TaskActionService:
    """任务操作业务服务"""

    def __init__(self, store_group: StoreGroup) -> None:
        self._stores = store_group

    async def complete(
        self,
        organization_id: str,
        user_id: str,
        task_id: str,
        notes: str | None = None,
    ) -> str:
        """标记任务完成

        Returns:
            完成提示信息

        Raises:
            InvalidTaskIdError: 任务 ID 无法解析
            TaskNotFoundError: 源记录不存在
            TaskActionError: 已是终态或该类型不支持在此完成
        """
        task_type, entity_id = parse_task_id(task_id)

        if task_type in _EXTERNALLY_COMPLETED:
            raise TaskActionError(_EXTERNALLY_COMPLETED[task_type])

        try:
            if task_type == TaskType.CASE_ASSIGNMENT:
                await self._complete_case(organization_id, user_id, entity_id)
            elif task_type == TaskType.INVESTIGATION_STEP:
                await self._complete_investigation(organization_id, user_id, entity_id)
            elif task_type == TaskType.REMEDIATION_TASK:
                await self._complete_remediation_step(
                    organization_id, user_id, entity_id, notes
                )
            else:
                raise TaskActionError(f"Unknown task type: {task_type.value}")
            await self._stores.conn.commit()
        except Exception:
            await self._stores.conn.rollback()
            raise

        await log.ainfo(
            "task_completed",
            task_id=task_id,
            task_type=task_type.value,
            user_id=user_id,
        )
        return "Task marked as complete"

    async def claim(self, organization_id: str, user_id: str, task_id: str) -> str:
        """认领未分派任务 -- 目前只有新建案件可认领"""
        task_type, entity_id = parse_task_id(task_id)

        if task_type != TaskType.CASE_ASSIGNMENT:
            raise TaskActionError(f"Task type {task_type.value} cannot be claimed")

        case_store = self._stores.case_store
        case = await case_store.get_case(organization_id, entity_id)
        if case is None:
            raise TaskNotFoundError(f"Case not found: {entity_id}")
        if case.status != CaseStatus.NEW:
            raise TaskActionError("Case is already assigned or in progress")

        try:
            await case_store.update_case_status(
                organization_id, entity_id, CaseStatus.OPEN, user_id
            )
            await self._stores.conn.commit()
        except Exception:
            await self._stores.conn.rollback()
            raise

        await log.ainfo("task_claimed", task_id=task_id, user_id=user_id)
        return f"Case {case.reference_number} claimed successfully"

    async def snooze(
        self,
        organization_id: str,
        user_id: str,
        task_id: str,
        until: datetime,
        now: datetime | None = None,
    ) -> datetime:
        """延后任务

        目前只记录日志，不持久化，也不会从队列中过滤。
        """
        task_type, entity_id = parse_task_id(task_id)
        until = ensure_utc(until)
        now = ensure_utc(now) if now is not None else datetime.now(UTC)

        if until <= now:
            raise TaskActionError("Snooze date must be in the future")

        await log.ainfo(
            "task_snoozed",
            task_id=task_id,
            task_type=task_type.value,
            entity_id=entity_id,
            organization_id=organization_id,
            user_id=user_id,
            snoozed_until=until.isoformat(),
        )
        return until

    async def _complete_case(
        self,
        organization_id: str,
        user_id: str,
        entity_id: str,
    ) -> None:
        case_store = self._stores.case_store
        case = await case_store.get_case(organization_id, entity_id)
        if case is None:
            raise TaskNotFoundError(f"Case not found: {entity_id}")
        if case.status == CaseStatus.CLOSED:
            raise TaskActionError("Case is already closed")
        await case_store.update_case_status(
            organization_id, entity_id, CaseStatus.CLOSED, user_id
        )

    async def _complete_investigation(
        self,
        organization_id: str,
        user_id: str,
        entity_id: str,
    ) -> None:
        store = self._stores.investigation_store
        investigation = await store.get_investigation(organization_id, entity_id)
        if investigation is None:
            raise TaskNotFoundError(f"Investigation not found: {entity_id}")
        if investigation.status == InvestigationStatus.CLOSED:
            raise TaskActionError("Investigation is already closed")
        await store.close_investigation(
            organization_id, entity_id, user_id, datetime.now(UTC)
        )

    async def _complete_remediation_step(
        self,
        organization_id: str,
        user_id: str,
        entity_id: str,
        notes: str | None,
    ) -> None:
        store = self._stores.remediation_store
        step = await store.get_step(organization_id, entity_id)
        if step is None:
            raise TaskNotFoundError(f"Remediation step not found: {entity_id}")
        if step.status in STEP_EXCLUDED_STATUSES:
            raise TaskActionError(f"Step is already {step.status.value.lower()}")
        await store.complete_step(
            organization_id,
            entity_id,
            step.plan_id,
            user_id,
            datetime.now(UTC),
            notes,
        )
