"""MyWork 异常体系"""


class MyWorkError(Exception):
    """MyWork 基础异常"""


class InvalidTaskQueryError(MyWorkError):
    """查询参数非法（未知类型、非法分页、时间范围颠倒等）

    在抓取任何数据源之前抛出。
    """


class InvalidTaskIdError(MyWorkError):
    """组合任务 ID 无法解析"""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Invalid task ID format: {task_id}")
        self.task_id = task_id


class TaskAggregationError(MyWorkError):
    """数据源抓取失败 -- 整个聚合请求失败，不返回残缺队列"""

    def __init__(self, source: str, original_error: BaseException) -> None:
        """
        Args:
            source: 失败的数据源名称
            original_error: 原始异常
        """
        super().__init__(f"Task source '{source}' failed: {original_error}")
        self.source = source
        self.original_error = original_error


class TaskNotFoundError(MyWorkError):
    """任务对应的源记录不存在（或不属于当前租户）"""


class TaskActionError(MyWorkError):
    """任务操作被拒绝（已是终态、类型不支持该操作等）"""
