"""MyWork Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .enums import (
    ASSIGNMENT_ACTIONABLE_STATUSES,
    CASE_EXCLUDED_STATUSES,
    CONFLICT_ACTIONABLE_STATUSES,
    INVESTIGATION_EXCLUDED_STATUSES,
    PRIORITY_WEIGHTS,
    SOURCE_TASK_TYPES,
    STEP_EXCLUDED_STATUSES,
    WORKFLOW_ACTIONABLE_STATUSES,
    AssignmentStatus,
    CaseStatus,
    ConflictSeverity,
    ConflictStatus,
    InvestigationStatus,
    Severity,
    SlaStatus,
    SortBy,
    StepStatus,
    TaskPriority,
    TaskStatus,
    TaskType,
    WorkflowInstanceStatus,
)
from .query import (
    AvailableTasksQuery,
    AvailableTasksResult,
    DueDateRange,
    MyTasksQuery,
    TaskFetchResult,
    TaskFilters,
    ensure_utc,
)
from .sources import (
    CampaignAssignmentRecord,
    CaseRecord,
    ConflictAlertRecord,
    InvestigationRecord,
    RemediationStepRecord,
    WorkflowInstanceRecord,
)
from .task import (
    TaskCountsByType,
    TaskGroup,
    TaskSection,
    UnifiedTask,
    empty_task_counts,
    group_tasks,
)

__all__ = [
    # 统一任务枚举
    "TaskType",
    "TaskPriority",
    "TaskStatus",
    "SortBy",
    "PRIORITY_WEIGHTS",
    "SOURCE_TASK_TYPES",
    # 数据源状态词表
    "CaseStatus",
    "Severity",
    "InvestigationStatus",
    "SlaStatus",
    "StepStatus",
    "ConflictStatus",
    "ConflictSeverity",
    "AssignmentStatus",
    "WorkflowInstanceStatus",
    "CASE_EXCLUDED_STATUSES",
    "INVESTIGATION_EXCLUDED_STATUSES",
    "STEP_EXCLUDED_STATUSES",
    "CONFLICT_ACTIONABLE_STATUSES",
    "ASSIGNMENT_ACTIONABLE_STATUSES",
    "WORKFLOW_ACTIONABLE_STATUSES",
    # UnifiedTask
    "UnifiedTask",
    "TaskSection",
    "TaskGroup",
    "TaskCountsByType",
    "empty_task_counts",
    "group_tasks",
    # 数据源记录
    "CaseRecord",
    "InvestigationRecord",
    "RemediationStepRecord",
    "ConflictAlertRecord",
    "CampaignAssignmentRecord",
    "WorkflowInstanceRecord",
    # 查询
    "TaskFilters",
    "DueDateRange",
    "MyTasksQuery",
    "AvailableTasksQuery",
    "TaskFetchResult",
    "AvailableTasksResult",
    "ensure_utc",
]
