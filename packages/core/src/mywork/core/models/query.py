"""查询参数与结果模型

查询参数在进入聚合器时即完成校验，非法输入在抓取任何数据源之前被拒绝。
"""

from datetime import UTC, datetime

from pydantic import BaseModel, Field, field_validator, model_validator

from ..config import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from .enums import SortBy, TaskPriority, TaskStatus, TaskType
from .task import UnifiedTask


def ensure_utc(value: datetime | None) -> datetime | None:
    """无时区的时间按 UTC 解释，带时区的统一换算到 UTC"""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class DueDateRange(BaseModel):
    """截止时间范围（闭区间）"""

    start: datetime | None = None
    end: datetime | None = None

    @property
    def is_empty(self) -> bool:
        return self.start is None and self.end is None


class TaskFilters(BaseModel):
    """用户筛选条件

    各维度之间为 AND，同一维度内多个取值为 OR；空列表等同于未指定。
    """

    types: list[TaskType] | None = None
    priorities: list[TaskPriority] | None = None
    statuses: list[TaskStatus] | None = None
    due_date_start: datetime | None = None
    due_date_end: datetime | None = None

    @field_validator("due_date_start", "due_date_end")
    @classmethod
    def _normalize_tz(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value)

    @model_validator(mode="after")
    def _check_range(self) -> "TaskFilters":
        if (
            self.due_date_start is not None
            and self.due_date_end is not None
            and self.due_date_start > self.due_date_end
        ):
            raise ValueError("due_date_start must not be after due_date_end")
        return self

    def includes_type(self, task_type: TaskType) -> bool:
        """类型筛选是否包含该类型（未指定时视为全部包含）"""
        return not self.types or task_type in self.types

    @property
    def due_range(self) -> DueDateRange:
        return DueDateRange(start=self.due_date_start, end=self.due_date_end)


class MyTasksQuery(BaseModel):
    """getMyTasks 参数"""

    organization_id: str = Field(min_length=1)
    user_id: str = Field(min_length=1)
    filters: TaskFilters = Field(default_factory=TaskFilters)
    sort_by: SortBy = SortBy.PRIORITY_DUE_DATE
    limit: int = Field(default=DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT)
    offset: int = Field(default=0, ge=0)


class AvailableTasksQuery(BaseModel):
    """getAvailableTasks 参数

    user_role / user_region 目前仅记录，不参与可认领过滤。
    """

    organization_id: str = Field(min_length=1)
    user_id: str = Field(min_length=1)
    user_role: str
    user_region: str | None = None
    limit: int = Field(default=DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT)


class TaskFetchResult(BaseModel):
    """My Tasks 分页结果"""

    tasks: list[UnifiedTask] = Field(default_factory=list)
    total: int = 0
    has_more: bool = False


class AvailableTasksResult(BaseModel):
    """可认领任务结果"""

    tasks: list[UnifiedTask] = Field(default_factory=list)
    total: int = 0
