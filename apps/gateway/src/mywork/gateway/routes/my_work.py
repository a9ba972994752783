"""My Work 统一任务队列路由

GET  /api/v1/my-work: 我的任务（可选附带可认领任务分区）
GET  /api/v1/my-work/counts: 各类型任务数
POST /api/v1/my-work/{task_id}/complete: 标记完成
POST /api/v1/my-work/{task_id}/snooze: 延后
POST /api/v1/my-work/{task_id}/claim: 认领

所有接口按调用者所在租户隔离；组合任务 ID 格式为 {type}-{entityId}。
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Query
from mywork.core.config import AVAILABLE_SECTION_LIMIT
from mywork.core.models import AvailableTasksResult, TaskSection
from pydantic import BaseModel, Field

from ..deps import RequestUser, get_aggregator, get_current_user, get_store_group
from ..services.task_action_service import TaskActionService

router = APIRouter(prefix="/api/v1/my-work")


class MyWorkResponse(BaseModel):
    """队列响应"""

    sections: list[TaskSection]
    total: int = Field(description="My Tasks 与 Available 总数之和")
    has_more: bool = Field(description="My Tasks 是否还有下一页")


class CompleteTaskRequest(BaseModel):
    notes: str | None = None


class SnoozeTaskRequest(BaseModel):
    until: datetime


class TaskActionResponse(BaseModel):
    success: bool
    message: str


class SnoozeTaskResponse(BaseModel):
    success: bool
    snoozed_until: str


@router.get("", response_model=MyWorkResponse)
async def get_my_work(
    types: list[str] | None = Query(default=None, description="任务类型筛选"),
    priorities: list[str] | None = Query(default=None, description="优先级筛选"),
    statuses: list[str] | None = Query(default=None, description="状态筛选"),
    due_date_start: str | None = Query(default=None, alias="dueDateStart"),
    due_date_end: str | None = Query(default=None, alias="dueDateEnd"),
    sort_by: str = Query(default="priority_due_date", alias="sortBy"),
    limit: int | None = Query(default=None),
    offset: int = Query(default=0),
    include_available: bool = Query(default=False, alias="includeAvailable"),
    user: RequestUser = Depends(get_current_user),
    aggregator=Depends(get_aggregator),
):
    """我的任务队列，按优先级加权截止时间排序（逾期优先）"""
    my_tasks = await aggregator.get_my_tasks(
        organization_id=user.organization_id,
        user_id=user.id,
        filters={
            "types": types,
            "priorities": priorities,
            "statuses": statuses,
            "due_date_start": due_date_start,
            "due_date_end": due_date_end,
        },
        sort_by=sort_by,
        limit=limit,
        offset=offset,
    )

    available = AvailableTasksResult()
    if include_available:
        available = await aggregator.get_available_tasks(
            organization_id=user.organization_id,
            user_id=user.id,
            user_role=user.role,
            user_region=user.region,
            limit=AVAILABLE_SECTION_LIMIT,
        )

    return MyWorkResponse(
        sections=[
            TaskSection(title="My Tasks", tasks=my_tasks.tasks, count=my_tasks.total),
            TaskSection(title="Available", tasks=available.tasks, count=available.total),
        ],
        total=my_tasks.total + available.total,
        has_more=my_tasks.has_more,
    )


@router.get("/counts")
async def get_task_counts(
    user: RequestUser = Depends(get_current_user),
    aggregator=Depends(get_aggregator),
) -> dict[str, int]:
    """各类型任务数（仪表盘组件用）"""
    counts = await aggregator.get_task_counts(user.organization_id, user.id)
    return {task_type.value: count for task_type, count in counts.items()}


@router.post("/{task_id}/complete", response_model=TaskActionResponse)
async def complete_task(
    task_id: str,
    body: CompleteTaskRequest | None = None,
    user: RequestUser = Depends(get_current_user),
    store_group=Depends(get_store_group),
):
    """标记任务完成，按任务类型路由到对应数据源"""
    service = TaskActionService(store_group)
    message = await service.complete(
        user.organization_id,
        user.id,
        task_id,
        notes=body.notes if body else None,
    )
    return TaskActionResponse(success=True, message=message)


@router.post("/{task_id}/snooze", response_model=SnoozeTaskResponse)
async def snooze_task(
    task_id: str,
    body: SnoozeTaskRequest,
    user: RequestUser = Depends(get_current_user),
    store_group=Depends(get_store_group),
):
    """延后任务到指定时间"""
    service = TaskActionService(store_group)
    until = await service.snooze(user.organization_id, user.id, task_id, body.until)
    return SnoozeTaskResponse(success=True, snoozed_until=until.isoformat())


@router.post("/{task_id}/claim", response_model=TaskActionResponse)
async def claim_task(
    task_id: str,
    user: RequestUser = Depends(get_current_user),
    store_group=Depends(get_store_group),
):
    """认领未分派任务"""
    service = TaskActionService(store_group)
    message = await service.claim(user.organization_id, user.id, task_id)
    return TaskActionResponse(success=True, message=message)
