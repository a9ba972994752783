"""合并结果筛选

类型在数据源层已经筛过一次（整源跳过），此处再筛一次；
优先级与状态只能在转换后筛选，因为它们是推导字段。
"""

from ..models.query import TaskFilters
from ..models.task import UnifiedTask


def apply_filters(
    tasks: list[UnifiedTask],
    filters: TaskFilters | None,
) -> list[UnifiedTask]:
    """维度间 AND，维度内 OR；空列表视为未指定"""
    if filters is None:
        return tasks

    result = tasks
    if filters.types:
        result = [t for t in result if t.type in filters.types]
    if filters.priorities:
        result = [t for t in result if t.priority in filters.priorities]
    if filters.statuses:
        result = [t for t in result if t.status in filters.statuses]
    return result
