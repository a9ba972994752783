"""组合任务 ID 编解码

格式：{type}-{sourceId}。sourceId 本身可能包含 "-"，因此按已知类型前缀解析。
"""

from .exceptions import InvalidTaskIdError
from .models.enums import TaskType


def build_task_id(task_type: TaskType, source_id: str) -> str:
    return f"{task_type.value}-{source_id}"


def parse_task_id(task_id: str) -> tuple[TaskType, str]:
    """解析组合 ID

    Returns:
        (task_type, entity_id)

    Raises:
        InvalidTaskIdError: 前缀不是已知任务类型或 entity_id 为空
    """
    for task_type in TaskType:
        prefix = f"{task_type.value}-"
        if task_id.startswith(prefix) and len(task_id) > len(prefix):
            return task_type, task_id[len(prefix):]
    raise InvalidTaskIdError(task_id)
