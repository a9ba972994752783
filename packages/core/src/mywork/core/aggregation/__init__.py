"""任务聚合流水线：数据源转换、状态推导、筛选、排序、聚合"""

from .aggregator import TaskAggregator
from .filtering import apply_filters
from .priority import (
    conflict_severity_to_priority,
    severity_to_priority,
    sla_status_to_priority,
)
from .ranking import (
    sort_by_created_at,
    sort_by_due_date,
    sort_by_priority_due_date,
    sort_tasks,
)
from .status import assignment_status_to_task_status, determine_task_status
from .transformers import (
    approval_to_task,
    campaign_to_task,
    case_to_task,
    disclosure_to_task,
    investigation_to_task,
    remediation_to_task,
)

__all__ = [
    "TaskAggregator",
    "apply_filters",
    "severity_to_priority",
    "sla_status_to_priority",
    "conflict_severity_to_priority",
    "determine_task_status",
    "assignment_status_to_task_status",
    "case_to_task",
    "investigation_to_task",
    "remediation_to_task",
    "disclosure_to_task",
    "campaign_to_task",
    "approval_to_task",
    "sort_tasks",
    "sort_by_priority_due_date",
    "sort_by_due_date",
    "sort_by_created_at",
]
