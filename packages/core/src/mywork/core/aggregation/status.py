"""任务状态推导

统一状态只有 PENDING / IN_PROGRESS / OVERDUE 三种，是纯函数推导结果，
不是持久化的状态机。调用方传入同一个 now，保证单次请求内结论一致。
"""

from datetime import UTC, datetime

from ..models.enums import AssignmentStatus, TaskStatus
from ..models.query import ensure_utc


def determine_task_status(
    due_date: datetime | None,
    is_in_progress: bool,
    now: datetime | None = None,
) -> TaskStatus:
    """共享状态策略：已过截止时间优先于进行中标记

    Args:
        due_date: 截止时间，None 表示无截止概念
        is_in_progress: 数据源是否处于进行中
        now: 参考时间，默认当前 UTC 时间
    """
    now = ensure_utc(now) if now is not None else datetime.now(UTC)
    due_date = ensure_utc(due_date)

    if due_date is not None and due_date < now:
        return TaskStatus.OVERDUE
    if is_in_progress:
        return TaskStatus.IN_PROGRESS
    return TaskStatus.PENDING


def assignment_status_to_task_status(
    status: AssignmentStatus,
    due_date: datetime,
    now: datetime | None = None,
) -> TaskStatus:
    """活动分派专用策略：过期且未完成即 OVERDUE，与分派状态无关"""
    now = ensure_utc(now) if now is not None else datetime.now(UTC)

    if ensure_utc(due_date) < now and status != AssignmentStatus.COMPLETED:
        return TaskStatus.OVERDUE
    if status == AssignmentStatus.IN_PROGRESS:
        return TaskStatus.IN_PROGRESS
    return TaskStatus.PENDING
