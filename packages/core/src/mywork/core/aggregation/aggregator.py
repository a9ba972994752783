"""TaskAggregator -- 统一 "My Work" 任务队列

流程：
1. 校验查询参数（非法输入在抓取前拒绝）
2. 并发抓取 6 个数据源（fan-out / fan-in）
3. 同步转换为 UnifiedTask 并合并
4. 筛选 -> 排序 -> 分页

任一数据源失败即整个请求失败，不返回残缺队列。
聚合器是纯读路径，不做鉴权、不修改源实体、不缓存。
"""

import asyncio
import time
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

import structlog
from pydantic import BaseModel, ValidationError

from ..config import SOURCE_FETCH_LIMIT
from ..exceptions import InvalidTaskQueryError, TaskAggregationError
from ..models.enums import SortBy, TaskType
from ..models.query import (
    AvailableTasksQuery,
    AvailableTasksResult,
    MyTasksQuery,
    TaskFetchResult,
    TaskFilters,
    ensure_utc,
)
from ..models.task import TaskCountsByType, UnifiedTask
from ..store import StoreGroup
from ..store.protocols import (
    CampaignAssignmentReader,
    CaseReader,
    ConflictAlertReader,
    InvestigationReader,
    RemediationStepReader,
    WorkflowInstanceReader,
)
from .filtering import apply_filters
from .ranking import sort_by_priority_due_date, sort_tasks
from .transformers import (
    approval_to_task,
    campaign_to_task,
    case_to_task,
    disclosure_to_task,
    investigation_to_task,
    remediation_to_task,
)

SourceReader = (
    CaseReader
    | InvestigationReader
    | RemediationStepReader
    | ConflictAlertReader
    | CampaignAssignmentReader
    | WorkflowInstanceReader
)

log = structlog.get_logger()


@dataclass(frozen=True)
class _Source:
    """数据源注册项：任务类型 + reader + transformer"""

    task_type: TaskType
    reader: SourceReader
    transform: Callable[..., UnifiedTask]


def _validate(model: type[BaseModel], **kwargs: Any) -> Any:
    try:
        return model(**kwargs)
    except ValidationError as e:
        raise InvalidTaskQueryError(str(e)) from e


class TaskAggregator:
    """跨数据源任务聚合服务"""

    def __init__(
        self,
        case_reader: CaseReader,
        investigation_reader: InvestigationReader,
        remediation_reader: RemediationStepReader,
        conflict_alert_reader: ConflictAlertReader,
        campaign_reader: CampaignAssignmentReader,
        workflow_reader: WorkflowInstanceReader,
        fetch_limit: int = SOURCE_FETCH_LIMIT,
    ) -> None:
        self._case_reader = case_reader
        self._fetch_limit = fetch_limit
        self._sources: tuple[_Source, ...] = (
            _Source(TaskType.CASE_ASSIGNMENT, case_reader, case_to_task),
            _Source(TaskType.INVESTIGATION_STEP, investigation_reader, investigation_to_task),
            _Source(TaskType.REMEDIATION_TASK, remediation_reader, remediation_to_task),
            _Source(TaskType.DISCLOSURE_REVIEW, conflict_alert_reader, disclosure_to_task),
            _Source(TaskType.CAMPAIGN_RESPONSE, campaign_reader, campaign_to_task),
            _Source(TaskType.APPROVAL_REQUEST, workflow_reader, approval_to_task),
        )

    @classmethod
    def from_store_group(
        cls,
        store_group: StoreGroup,
        fetch_limit: int = SOURCE_FETCH_LIMIT,
    ) -> "TaskAggregator":
        """使用 SQLite StoreGroup 中的各数据源 Store 构建"""
        return cls(
            case_reader=store_group.case_store,
            investigation_reader=store_group.investigation_store,
            remediation_reader=store_group.remediation_store,
            conflict_alert_reader=store_group.conflict_alert_store,
            campaign_reader=store_group.campaign_store,
            workflow_reader=store_group.workflow_store,
            fetch_limit=fetch_limit,
        )

    async def get_my_tasks(
        self,
        organization_id: str,
        user_id: str,
        filters: TaskFilters | dict | None = None,
        sort_by: SortBy | str = SortBy.PRIORITY_DUE_DATE,
        limit: int | None = None,
        offset: int = 0,
        now: datetime | None = None,
    ) -> TaskFetchResult:
        """获取分派给用户的全部任务（排序 + 分页）

        Args:
            organization_id: 租户标识
            user_id: 当前用户
            filters: 类型/优先级/状态/截止时间范围筛选
            sort_by: 排序策略，默认优先级加权截止时间
            limit: 分页大小
            offset: 分页偏移
            now: 参考时间（测试注入），默认当前 UTC 时间

        Raises:
            InvalidTaskQueryError: 参数非法（在抓取之前）
            TaskAggregationError: 任一数据源抓取失败
        """
        kwargs: dict[str, Any] = {
            "organization_id": organization_id,
            "user_id": user_id,
            "sort_by": sort_by,
            "offset": offset,
        }
        if filters is not None:
            kwargs["filters"] = filters
        if limit is not None:
            kwargs["limit"] = limit
        query = _validate(MyTasksQuery, **kwargs)

        now = ensure_utc(now) if now is not None else datetime.now(UTC)
        start_time = time.monotonic()

        results = await self._fetch_all(
            [
                (source.task_type.value, self._fetch_source(source, query))
                for source in self._sources
            ]
        )

        # 同步转换并合并
        all_tasks: list[UnifiedTask] = []
        per_source: dict[str, int] = {}
        for source, records in zip(self._sources, results, strict=True):
            per_source[source.task_type.value] = len(records)
            all_tasks.extend(
                source.transform(record, query.organization_id, now) for record in records
            )

        filtered = apply_filters(all_tasks, query.filters)
        ranked = sort_tasks(filtered, query.sort_by, now)

        total = len(ranked)
        page = ranked[query.offset:query.offset + query.limit]

        await log.ainfo(
            "my_tasks_aggregated",
            organization_id=query.organization_id,
            user_id=query.user_id,
            per_source=per_source,
            total=total,
            returned=len(page),
            elapsed_ms=int((time.monotonic() - start_time) * 1000),
        )

        return TaskFetchResult(
            tasks=page,
            total=total,
            has_more=query.offset + len(page) < total,
        )

    async def get_available_tasks(
        self,
        organization_id: str,
        user_id: str,
        user_role: str,
        user_region: str | None = None,
        limit: int | None = None,
        now: datetime | None = None,
    ) -> AvailableTasksResult:
        """获取用户可认领的未分派任务

        目前只有新建未认领的案件；user_role / user_region 暂不参与过滤。
        """
        kwargs: dict[str, Any] = {
            "organization_id": organization_id,
            "user_id": user_id,
            "user_role": user_role,
            "user_region": user_region,
        }
        if limit is not None:
            kwargs["limit"] = limit
        query = _validate(AvailableTasksQuery, **kwargs)

        now = ensure_utc(now) if now is not None else datetime.now(UTC)

        [cases] = await self._fetch_all(
            [
                (
                    "available_cases",
                    self._case_reader.list_unassigned(query.organization_id, query.limit),
                )
            ]
        )
        tasks = [case_to_task(c, query.organization_id, now) for c in cases]
        ranked = sort_by_priority_due_date(tasks, now)

        await log.ainfo(
            "available_tasks_aggregated",
            organization_id=query.organization_id,
            user_id=query.user_id,
            user_role=query.user_role,
            user_region=query.user_region,
            total=len(ranked),
        )

        return AvailableTasksResult(tasks=ranked[:query.limit], total=len(ranked))

    async def get_task_counts(
        self,
        organization_id: str,
        user_id: str,
    ) -> TaskCountsByType:
        """按类型统计任务数（仪表盘用）

        独立于 get_my_tasks，只做 count 查询，不构建 UnifiedTask。
        """
        if not organization_id or not user_id:
            raise InvalidTaskQueryError("organization_id and user_id are required")

        counts = await self._fetch_all(
            [
                (
                    source.task_type.value,
                    source.reader.count_open(organization_id, user_id),
                )
                for source in self._sources
            ]
        )
        return {
            source.task_type: count
            for source, count in zip(self._sources, counts, strict=True)
        }

    async def _fetch_source(self, source: _Source, query: MyTasksQuery) -> list:
        """抓取单个数据源；类型筛选排除该类型时整源跳过"""
        if not query.filters.includes_type(source.task_type):
            return []
        return await source.reader.list_open(
            query.organization_id,
            query.user_id,
            query.filters.due_range,
            self._fetch_limit,
        )

    async def _fetch_all(
        self,
        named_calls: Sequence[tuple[str, Awaitable[Any]]],
    ) -> list[Any]:
        """并发执行所有抓取；任一失败则取消其余并抛出 TaskAggregationError"""

        async def _guarded(name: str, call: Awaitable[Any]) -> Any:
            try:
                return await call
            except Exception as e:
                await log.aerror(
                    "task_source_fetch_failed",
                    source=name,
                    error_type=type(e).__name__,
                    error=str(e),
                )
                raise TaskAggregationError(name, e) from e

        try:
            async with asyncio.TaskGroup() as tg:
                tasks = [tg.create_task(_guarded(name, call)) for name, call in named_calls]
        except ExceptionGroup as eg:
            # 并发失败时只上报第一个数据源错误
            raise eg.exceptions[0] from eg.exceptions[0].__cause__
        return [task.result() for task in tasks]
