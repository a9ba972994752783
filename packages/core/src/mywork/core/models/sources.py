"""数据源记录模型

每个数据源只声明聚合器真正读取的字段。这些记录由各自所属模块拥有，
聚合器只读，不持有也不修改。
"""

from datetime import datetime

from pydantic import BaseModel, Field

from .enums import (
    AssignmentStatus,
    CaseStatus,
    ConflictSeverity,
    ConflictStatus,
    InvestigationStatus,
    Severity,
    SlaStatus,
    StepStatus,
    WorkflowInstanceStatus,
)


class CaseRecord(BaseModel):
    """案件"""

    id: str
    organization_id: str
    reference_number: str
    status: CaseStatus
    severity: Severity | None = None
    summary: str | None = None
    details: str | None = None
    source_channel: str | None = None
    case_type: str | None = None
    category_name: str | None = None
    created_at: datetime
    created_by_id: str | None = None
    is_merged: bool = False


class InvestigationRecord(BaseModel):
    """调查"""

    id: str
    organization_id: str
    case_id: str
    case_reference_number: str
    status: InvestigationStatus
    due_date: datetime | None = None
    sla_status: SlaStatus = SlaStatus.ON_TRACK
    primary_investigator_id: str | None = None
    investigation_type: str | None = None
    department: str | None = None
    findings_summary: str | None = None
    assigned_at: datetime | None = None
    created_at: datetime


class RemediationStepRecord(BaseModel):
    """整改计划中的单个步骤"""

    id: str
    organization_id: str
    plan_id: str
    plan_title: str
    case_id: str
    case_reference_number: str | None = None
    title: str
    description: str | None = None
    due_date: datetime | None = None
    status: StepStatus
    assignee_user_id: str | None = None
    order: int = 0
    requires_co_approval: bool = False
    created_at: datetime


class ConflictAlertRecord(BaseModel):
    """利益冲突告警 -- 组织级审核队列，无单一负责人"""

    id: str
    organization_id: str
    disclosure_id: str
    summary: str
    conflict_type: str
    matched_entity: str
    severity: ConflictSeverity
    match_confidence: float = Field(ge=0, le=1)
    status: ConflictStatus
    created_at: datetime


class CampaignAssignmentRecord(BaseModel):
    """活动分派（员工需完成的申报/确认）"""

    id: str
    organization_id: str
    campaign_id: str
    campaign_name: str
    campaign_type: str
    due_date: datetime
    status: AssignmentStatus
    employee_id: str
    assigned_at: datetime
    reminder_count: int = 0


class WorkflowInstanceRecord(BaseModel):
    """工作流实例（审批请求）"""

    id: str
    organization_id: str
    template_id: str
    template_name: str
    entity_type: str
    entity_id: str
    due_date: datetime | None = None
    status: WorkflowInstanceStatus
    current_stage: str
    current_step: str | None = None
    sla_status: SlaStatus = SlaStatus.ON_TRACK
    created_at: datetime
