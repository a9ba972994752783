"""数据源记录 -> UnifiedTask 转换

每种数据源一个显式、完备的纯函数映射：无 I/O，对合法输入不抛异常。
"""

from datetime import datetime

from ..config import DESCRIPTION_MAX_LENGTH
from ..models.enums import (
    CaseStatus,
    InvestigationStatus,
    StepStatus,
    TaskPriority,
    TaskStatus,
    TaskType,
)
from ..models.query import ensure_utc
from ..models.sources import (
    CampaignAssignmentRecord,
    CaseRecord,
    ConflictAlertRecord,
    InvestigationRecord,
    RemediationStepRecord,
    WorkflowInstanceRecord,
)
from ..models.task import UnifiedTask
from ..task_id import build_task_id
from .priority import (
    conflict_severity_to_priority,
    severity_to_priority,
    sla_status_to_priority,
)
from .status import assignment_status_to_task_status, determine_task_status


def case_to_task(
    case: CaseRecord,
    organization_id: str,
    now: datetime | None = None,
) -> UnifiedTask:
    """案件 -> 任务

    案件没有显式截止时间（SLA 派生的紧急度未接入此映射），due_date 恒为 None。
    """
    due_date = None
    description = case.summary or (
        case.details[:DESCRIPTION_MAX_LENGTH] if case.details else None
    )

    return UnifiedTask(
        id=build_task_id(TaskType.CASE_ASSIGNMENT, case.id),
        type=TaskType.CASE_ASSIGNMENT,
        entity_type="Case",
        entity_id=case.id,
        title=f"Case {case.reference_number}",
        description=description,
        url=f"/cases/{case.id}",
        due_date=due_date,
        priority=severity_to_priority(case.severity),
        status=determine_task_status(due_date, case.status == CaseStatus.OPEN, now),
        assigned_at=ensure_utc(case.created_at),
        assignee_id=case.created_by_id,
        metadata={
            "sourceChannel": case.source_channel,
            "caseType": case.case_type,
            "status": case.status.value,
        },
        organization_id=organization_id,
        case_number=case.reference_number,
        category_name=case.category_name,
        severity=case.severity.value if case.severity else None,
    )


def investigation_to_task(
    investigation: InvestigationRecord,
    organization_id: str,
    now: datetime | None = None,
) -> UnifiedTask:
    """调查 -> 任务，优先级取自 SLA 状态"""
    due_date = ensure_utc(investigation.due_date)

    return UnifiedTask(
        id=build_task_id(TaskType.INVESTIGATION_STEP, investigation.id),
        type=TaskType.INVESTIGATION_STEP,
        entity_type="Investigation",
        entity_id=investigation.id,
        title=f"Investigation for {investigation.case_reference_number}",
        description=investigation.findings_summary or None,
        url=f"/investigations/{investigation.id}",
        due_date=due_date,
        priority=sla_status_to_priority(investigation.sla_status),
        status=determine_task_status(
            due_date,
            investigation.status == InvestigationStatus.INVESTIGATING,
            now,
        ),
        assigned_at=ensure_utc(investigation.assigned_at or investigation.created_at),
        assignee_id=investigation.primary_investigator_id,
        metadata={
            "investigationType": investigation.investigation_type,
            "department": investigation.department,
            "status": investigation.status.value,
            "slaStatus": investigation.sla_status.value,
        },
        organization_id=organization_id,
        case_number=investigation.case_reference_number,
    )


def remediation_to_task(
    step: RemediationStepRecord,
    organization_id: str,
    now: datetime | None = None,
) -> UnifiedTask:
    """整改步骤 -> 任务

    步骤没有紧急度信号，优先级固定 MEDIUM；标题取步骤而非所属计划。
    """
    due_date = ensure_utc(step.due_date)

    return UnifiedTask(
        id=build_task_id(TaskType.REMEDIATION_TASK, step.id),
        type=TaskType.REMEDIATION_TASK,
        entity_type="RemediationStep",
        entity_id=step.id,
        title=step.title,
        description=step.description or None,
        url=f"/cases/{step.case_id}/remediation/{step.plan_id}",
        due_date=due_date,
        priority=TaskPriority.MEDIUM,
        status=determine_task_status(
            due_date,
            step.status == StepStatus.IN_PROGRESS,
            now,
        ),
        assigned_at=ensure_utc(step.created_at),
        assignee_id=step.assignee_user_id,
        metadata={
            "planTitle": step.plan_title,
            "planId": step.plan_id,
            "order": step.order,
            "requiresCoApproval": step.requires_co_approval,
            "status": step.status.value,
        },
        organization_id=organization_id,
        case_number=step.case_reference_number,
    )


def disclosure_to_task(
    alert: ConflictAlertRecord,
    organization_id: str,
    now: datetime | None = None,
) -> UnifiedTask:
    """冲突告警 -> 任务

    组织级任务，无负责人；无截止时间也无进度概念，状态恒为 PENDING。
    """
    return UnifiedTask(
        id=build_task_id(TaskType.DISCLOSURE_REVIEW, alert.id),
        type=TaskType.DISCLOSURE_REVIEW,
        entity_type="ConflictAlert",
        entity_id=alert.id,
        title=f"Conflict Alert: {alert.summary}",
        description=f"{alert.conflict_type} - {alert.matched_entity}",
        url="/compliance/conflicts",
        due_date=None,
        priority=conflict_severity_to_priority(alert.severity),
        status=TaskStatus.PENDING,
        assigned_at=ensure_utc(alert.created_at),
        assignee_id=None,
        metadata={
            "conflictType": alert.conflict_type,
            "severity": alert.severity.value,
            "matchConfidence": alert.match_confidence,
            "disclosureId": alert.disclosure_id,
        },
        organization_id=organization_id,
        severity=alert.severity.value,
    )


def campaign_to_task(
    assignment: CampaignAssignmentRecord,
    organization_id: str,
    now: datetime | None = None,
) -> UnifiedTask:
    """活动分派 -> 任务，优先级固定 MEDIUM，状态走分派专用策略"""
    due_date = ensure_utc(assignment.due_date)

    return UnifiedTask(
        id=build_task_id(TaskType.CAMPAIGN_RESPONSE, assignment.id),
        type=TaskType.CAMPAIGN_RESPONSE,
        entity_type="CampaignAssignment",
        entity_id=assignment.id,
        title=assignment.campaign_name,
        description=f"Complete your {assignment.campaign_type.lower()} response",
        url=f"/disclosures/respond/{assignment.id}",
        due_date=due_date,
        priority=TaskPriority.MEDIUM,
        status=assignment_status_to_task_status(assignment.status, due_date, now),
        assigned_at=ensure_utc(assignment.assigned_at),
        assignee_id=assignment.employee_id,
        metadata={
            "campaignId": assignment.campaign_id,
            "campaignType": assignment.campaign_type,
            "reminderCount": assignment.reminder_count,
            "status": assignment.status.value,
        },
        organization_id=organization_id,
    )


def approval_to_task(
    instance: WorkflowInstanceRecord,
    organization_id: str,
    now: datetime | None = None,
) -> UnifiedTask:
    """工作流实例 -> 审批任务

    实例一旦处于活跃状态即视为可处理，状态按"进行中"推导。
    """
    due_date = ensure_utc(instance.due_date)

    return UnifiedTask(
        id=build_task_id(TaskType.APPROVAL_REQUEST, instance.id),
        type=TaskType.APPROVAL_REQUEST,
        entity_type="WorkflowInstance",
        entity_id=instance.id,
        title=f"Approval: {instance.template_name}",
        description=f"Workflow at stage: {instance.current_stage}",
        url=f"/workflows/{instance.id}",
        due_date=due_date,
        priority=sla_status_to_priority(instance.sla_status),
        status=determine_task_status(due_date, True, now),
        assigned_at=ensure_utc(instance.created_at),
        assignee_id=None,
        metadata={
            "templateId": instance.template_id,
            "entityType": instance.entity_type,
            "entityId": instance.entity_id,
            "currentStage": instance.current_stage,
            "currentStep": instance.current_step,
            "slaStatus": instance.sla_status.value,
        },
        organization_id=organization_id,
    )
