"""Domain Models 单元测试

测试内容：
1. 枚举值与优先级权重
2. 查询参数校验（未知类型、时间范围、分页边界）
3. 展示分组与计数表
"""

from datetime import UTC, datetime, timedelta, timezone

import pytest
from mywork.core.models import (
    PRIORITY_WEIGHTS,
    SOURCE_TASK_TYPES,
    MyTasksQuery,
    SortBy,
    TaskFilters,
    TaskPriority,
    TaskStatus,
    TaskType,
    UnifiedTask,
    empty_task_counts,
    group_tasks,
)
from pydantic import ValidationError


def _task(task_id: str, task_type: TaskType, priority: TaskPriority) -> UnifiedTask:
    return UnifiedTask(
        id=f"{task_type.value}-{task_id}",
        type=task_type,
        entity_type="Case",
        entity_id=task_id,
        title=task_id,
        url=f"/x/{task_id}",
        priority=priority,
        status=TaskStatus.PENDING,
        assigned_at=datetime(2026, 1, 1, tzinfo=UTC),
        organization_id="org-1",
    )


class TestEnums:
    """枚举测试"""

    def test_task_type_values(self):
        assert TaskType.CASE_ASSIGNMENT == "case_assignment"
        assert TaskType("approval_request") == TaskType.APPROVAL_REQUEST
        assert len(TaskType) == 7

    def test_source_task_types_exclude_project_task(self):
        assert len(SOURCE_TASK_TYPES) == 6
        assert TaskType.PROJECT_TASK not in SOURCE_TASK_TYPES

    def test_priority_weights(self):
        assert PRIORITY_WEIGHTS[TaskPriority.CRITICAL] == 4
        assert PRIORITY_WEIGHTS[TaskPriority.HIGH] == 3
        assert PRIORITY_WEIGHTS[TaskPriority.MEDIUM] == 2
        assert PRIORITY_WEIGHTS[TaskPriority.LOW] == 1

    def test_sort_by_values(self):
        assert SortBy("priority_due_date") == SortBy.PRIORITY_DUE_DATE
        assert SortBy.CREATED_AT == "created_at"


class TestTaskFilters:
    """筛选参数校验"""

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            TaskFilters(types=["not_a_type"])

    def test_reversed_range_rejected(self):
        with pytest.raises(ValidationError):
            TaskFilters(
                due_date_start="2026-03-10T00:00:00Z",
                due_date_end="2026-03-01T00:00:00Z",
            )

    def test_naive_dates_are_utc(self):
        filters = TaskFilters(due_date_start=datetime(2026, 3, 1, 9, 0))
        assert filters.due_date_start == datetime(2026, 3, 1, 9, 0, tzinfo=UTC)

    def test_offset_dates_normalized_to_utc(self):
        tz = timezone(timedelta(hours=8))
        filters = TaskFilters(due_date_end=datetime(2026, 3, 1, 8, 0, tzinfo=tz))
        assert filters.due_date_end == datetime(2026, 3, 1, 0, 0, tzinfo=UTC)

    def test_includes_type(self):
        assert TaskFilters().includes_type(TaskType.CASE_ASSIGNMENT)
        assert TaskFilters(types=[]).includes_type(TaskType.CASE_ASSIGNMENT)
        filters = TaskFilters(types=[TaskType.INVESTIGATION_STEP])
        assert filters.includes_type(TaskType.INVESTIGATION_STEP)
        assert not filters.includes_type(TaskType.CASE_ASSIGNMENT)

    def test_due_range(self):
        assert TaskFilters().due_range.is_empty
        filters = TaskFilters(due_date_start="2026-03-01T00:00:00+00:00")
        assert not filters.due_range.is_empty
        assert filters.due_range.end is None


class TestMyTasksQuery:
    def test_defaults(self):
        query = MyTasksQuery(organization_id="org", user_id="u")
        assert query.limit == 50
        assert query.offset == 0
        assert query.sort_by == SortBy.PRIORITY_DUE_DATE

    @pytest.mark.parametrize("limit", [0, -1, 101])
    def test_limit_bounds(self, limit):
        with pytest.raises(ValidationError):
            MyTasksQuery(organization_id="org", user_id="u", limit=limit)

    def test_negative_offset_rejected(self):
        with pytest.raises(ValidationError):
            MyTasksQuery(organization_id="org", user_id="u", offset=-1)

    def test_empty_tenant_rejected(self):
        with pytest.raises(ValidationError):
            MyTasksQuery(organization_id="", user_id="u")


class TestGrouping:
    def test_group_by_type_preserves_order(self):
        tasks = [
            _task("1", TaskType.INVESTIGATION_STEP, TaskPriority.HIGH),
            _task("2", TaskType.CASE_ASSIGNMENT, TaskPriority.LOW),
            _task("3", TaskType.INVESTIGATION_STEP, TaskPriority.MEDIUM),
        ]
        groups = group_tasks(tasks)
        assert [g.key for g in groups] == ["investigation_step", "case_assignment"]
        assert groups[0].count == 2
        assert [t.entity_id for t in groups[0].tasks] == ["1", "3"]

    def test_group_by_priority(self):
        tasks = [
            _task("1", TaskType.CASE_ASSIGNMENT, TaskPriority.HIGH),
            _task("2", TaskType.CASE_ASSIGNMENT, TaskPriority.HIGH),
        ]
        groups = group_tasks(tasks, by="priority")
        assert len(groups) == 1
        assert groups[0].key == "HIGH"

    def test_empty_task_counts_shape(self):
        counts = empty_task_counts()
        assert set(counts) == set(SOURCE_TASK_TYPES)
        assert all(v == 0 for v in counts.values())
