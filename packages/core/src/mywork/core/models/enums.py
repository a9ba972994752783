"""枚举定义

统一任务的类型、优先级、状态、排序策略，以及各数据源自身的状态词表。
数据源状态词表由各自所属模块维护，此处只做只读镜像。
"""

from enum import StrEnum


class TaskType(StrEnum):
    """统一任务类型 -- 决定由哪个 fetcher/transformer 产生"""

    CASE_ASSIGNMENT = "case_assignment"
    INVESTIGATION_STEP = "investigation_step"
    REMEDIATION_TASK = "remediation_task"
    DISCLOSURE_REVIEW = "disclosure_review"
    CAMPAIGN_RESPONSE = "campaign_response"
    APPROVAL_REQUEST = "approval_request"
    # 预留：项目任务暂无数据源
    PROJECT_TASK = "project_task"


# 当前接入了数据源的任务类型（计数接口按此固定形状返回）
SOURCE_TASK_TYPES: tuple[TaskType, ...] = (
    TaskType.CASE_ASSIGNMENT,
    TaskType.INVESTIGATION_STEP,
    TaskType.REMEDIATION_TASK,
    TaskType.DISCLOSURE_REVIEW,
    TaskType.CAMPAIGN_RESPONSE,
    TaskType.APPROVAL_REQUEST,
)


class TaskPriority(StrEnum):
    """归一化优先级"""

    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


PRIORITY_WEIGHTS: dict[TaskPriority, int] = {
    TaskPriority.CRITICAL: 4,
    TaskPriority.HIGH: 3,
    TaskPriority.MEDIUM: 2,
    TaskPriority.LOW: 1,
}


class TaskStatus(StrEnum):
    """统一任务状态 -- 始终推导得出，不直接复制数据源状态"""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    OVERDUE = "OVERDUE"


class SortBy(StrEnum):
    """排序策略"""

    PRIORITY_DUE_DATE = "priority_due_date"
    DUE_DATE = "due_date"
    CREATED_AT = "created_at"


# ---- 数据源状态词表 ----


class CaseStatus(StrEnum):
    NEW = "NEW"
    OPEN = "OPEN"
    CLOSED = "CLOSED"


class Severity(StrEnum):
    """案件严重程度"""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class InvestigationStatus(StrEnum):
    NEW = "NEW"
    ASSIGNED = "ASSIGNED"
    INVESTIGATING = "INVESTIGATING"
    PENDING_REVIEW = "PENDING_REVIEW"
    CLOSED = "CLOSED"
    ON_HOLD = "ON_HOLD"


class SlaStatus(StrEnum):
    ON_TRACK = "ON_TRACK"
    WARNING = "WARNING"
    OVERDUE = "OVERDUE"


class StepStatus(StrEnum):
    """整改步骤状态"""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    SKIPPED = "SKIPPED"
    BLOCKED = "BLOCKED"


class ConflictStatus(StrEnum):
    OPEN = "OPEN"
    DISMISSED = "DISMISSED"
    ESCALATED = "ESCALATED"
    RESOLVED = "RESOLVED"


class ConflictSeverity(StrEnum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class AssignmentStatus(StrEnum):
    """活动（campaign）分派状态"""

    PENDING = "PENDING"
    NOTIFIED = "NOTIFIED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    OVERDUE = "OVERDUE"
    SKIPPED = "SKIPPED"
    EXPIRED = "EXPIRED"


class WorkflowInstanceStatus(StrEnum):
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    PAUSED = "PAUSED"


# ---- 各数据源"可处理"状态集合（终态绝不能进入队列） ----

CASE_EXCLUDED_STATUSES: set[CaseStatus] = {CaseStatus.CLOSED}

INVESTIGATION_EXCLUDED_STATUSES: set[InvestigationStatus] = {
    InvestigationStatus.CLOSED,
}

STEP_EXCLUDED_STATUSES: set[StepStatus] = {
    StepStatus.COMPLETED,
    StepStatus.SKIPPED,
}

CONFLICT_ACTIONABLE_STATUSES: set[ConflictStatus] = {ConflictStatus.OPEN}

ASSIGNMENT_ACTIONABLE_STATUSES: set[AssignmentStatus] = {
    AssignmentStatus.PENDING,
    AssignmentStatus.NOTIFIED,
    AssignmentStatus.IN_PROGRESS,
}

WORKFLOW_ACTIONABLE_STATUSES: set[WorkflowInstanceStatus] = {
    WorkflowInstanceStatus.ACTIVE,
}
