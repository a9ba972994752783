"""UnifiedTask Domain Model

统一任务是运行时记录，每次请求基于实时数据源重新构建，不落库、不缓存。
id 采用 {type}-{sourceId} 组合格式，跨数据源全局唯一且对同一源记录稳定。
"""

from collections import defaultdict
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from .enums import SOURCE_TASK_TYPES, TaskPriority, TaskStatus, TaskType


class UnifiedTask(BaseModel):
    """统一任务 -- 一条任务恰好对应一条数据源记录"""

    id: str = Field(description="组合 ID：{type}-{sourceId}")
    type: TaskType = Field(description="任务类型")
    entity_type: str = Field(description="源实体类型（弱引用）")
    entity_id: str = Field(description="源实体 ID（弱引用）")
    title: str = Field(description="展示标题")
    description: str | None = Field(default=None, description="展示描述")
    url: str = Field(description="前端跳转地址")
    due_date: datetime | None = Field(default=None, description="截止时间，无截止概念时为 None")
    priority: TaskPriority = Field(description="归一化优先级")
    status: TaskStatus = Field(description="推导状态")
    assigned_at: datetime = Field(description="分派时间")
    assignee_id: str | None = Field(
        default=None,
        description="负责人，组织级任务（如冲突审核）为 None",
    )
    metadata: dict[str, Any] = Field(default_factory=dict, description="数据源特有字段")
    organization_id: str = Field(description="租户标识")

    # 展示用附加字段
    case_number: str | None = Field(default=None, description="关联案件编号")
    category_name: str | None = Field(default=None, description="案件分类名称")
    severity: str | None = Field(default=None, description="源严重程度")


class TaskSection(BaseModel):
    """展示分区（My Tasks / Available）"""

    title: str
    tasks: list[UnifiedTask] = Field(default_factory=list)
    count: int = Field(default=0, description="分区总数（非当前页条数）")


class TaskGroup(BaseModel):
    """按某个维度聚合的展示分组"""

    key: str
    tasks: list[UnifiedTask] = Field(default_factory=list)
    count: int = 0


GroupKey = Literal["type", "priority", "status"]


def group_tasks(tasks: list[UnifiedTask], by: GroupKey = "type") -> list[TaskGroup]:
    """按 type / priority / status 对任务分组

    分组顺序按各组首个任务在输入中出现的顺序，组内保持输入顺序，
    因此对已排序的列表分组不会打乱排序结果。
    """
    buckets: dict[str, list[UnifiedTask]] = defaultdict(list)
    for task in tasks:
        buckets[str(getattr(task, by))].append(task)
    return [
        TaskGroup(key=key, tasks=items, count=len(items))
        for key, items in buckets.items()
    ]


# 固定形状：仅包含接入了数据源的 6 种类型
TaskCountsByType = dict[TaskType, int]


def empty_task_counts() -> TaskCountsByType:
    """返回全部为 0 的计数表"""
    return {task_type: 0 for task_type in SOURCE_TASK_TYPES}
