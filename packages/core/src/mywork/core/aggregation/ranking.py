"""排序引擎

默认策略为"优先级加权截止时间"：
1. 已逾期（due_date < now）的任务整体排在最前，组内按 due_date 升序（逾期最久者在前）
2. 未逾期任务按 score = (due_date - now) / weight(priority) 升序；无截止时间的 score 为 +inf
3. score 相同时，权重高者在前

加权公式会让高优先级"放大"紧急度：1 天后到期的 LOW 与 3 天后到期的 HIGH 得分相同，
由权重决胜，HIGH 排前。
"""

import math
from datetime import UTC, datetime

from ..models.enums import PRIORITY_WEIGHTS, SortBy
from ..models.query import ensure_utc
from ..models.task import UnifiedTask


def _priority_due_date_key(task: UnifiedTask, now: datetime) -> tuple:
    weight = PRIORITY_WEIGHTS[task.priority]
    if task.due_date is not None and task.due_date < now:
        # 逾期分区：仅按 due_date 升序
        return (0, task.due_date.timestamp(), 0)
    if task.due_date is None:
        score = math.inf
    else:
        score = (task.due_date - now).total_seconds() / weight
    return (1, score, -weight)


def sort_by_priority_due_date(
    tasks: list[UnifiedTask],
    now: datetime | None = None,
) -> list[UnifiedTask]:
    """优先级加权截止时间排序，返回新列表（稳定排序）"""
    now = ensure_utc(now) if now is not None else datetime.now(UTC)
    return sorted(tasks, key=lambda task: _priority_due_date_key(task, now))


def sort_by_due_date(tasks: list[UnifiedTask]) -> list[UnifiedTask]:
    """按截止时间升序，无截止时间的排最后"""
    return sorted(
        tasks,
        key=lambda task: (
            task.due_date is None,
            task.due_date.timestamp() if task.due_date is not None else 0.0,
        ),
    )


def sort_by_created_at(tasks: list[UnifiedTask]) -> list[UnifiedTask]:
    """按分派时间倒序（最新在前）"""
    return sorted(tasks, key=lambda task: task.assigned_at, reverse=True)


def sort_tasks(
    tasks: list[UnifiedTask],
    sort_by: SortBy = SortBy.PRIORITY_DUE_DATE,
    now: datetime | None = None,
) -> list[UnifiedTask]:
    """按指定策略排序"""
    if sort_by == SortBy.DUE_DATE:
        return sort_by_due_date(tasks)
    if sort_by == SortBy.CREATED_AT:
        return sort_by_created_at(tasks)
    return sort_by_priority_due_date(tasks, now)
