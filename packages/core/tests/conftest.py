"""packages/core 测试配置 -- 固定时间 + 数据源记录工厂 + fake reader"""

from datetime import UTC, datetime, timedelta

import pytest
from mywork.core.aggregation import TaskAggregator
from mywork.core.models import (
    AssignmentStatus,
    CampaignAssignmentRecord,
    CaseRecord,
    CaseStatus,
    ConflictAlertRecord,
    ConflictSeverity,
    ConflictStatus,
    InvestigationRecord,
    InvestigationStatus,
    RemediationStepRecord,
    Severity,
    SlaStatus,
    StepStatus,
    WorkflowInstanceRecord,
    WorkflowInstanceStatus,
)

ORG_ID = "org-acme"
USER_ID = "user-alice"
NOW = datetime(2026, 3, 10, 12, 0, tzinfo=UTC)


class FakeReader:
    """内存版数据源 Reader，记录调用参数"""

    def __init__(self, records=None, count=None, error: Exception | None = None):
        self.records = list(records or [])
        self.count = count
        self.error = error
        self.list_calls: list[dict] = []
        self.count_calls: list[tuple[str, str]] = []
        self.unassigned = []

    async def list_open(self, organization_id, user_id, due_range, limit):
        self.list_calls.append(
            {
                "organization_id": organization_id,
                "user_id": user_id,
                "due_range": due_range,
                "limit": limit,
            }
        )
        if self.error is not None:
            raise self.error
        return self.records[:limit]

    async def count_open(self, organization_id, user_id):
        self.count_calls.append((organization_id, user_id))
        if self.error is not None:
            raise self.error
        return self.count if self.count is not None else len(self.records)

    async def list_unassigned(self, organization_id, limit):
        if self.error is not None:
            raise self.error
        return self.unassigned[:limit]


class Readers:
    """6 个 fake reader 的集合"""

    def __init__(self) -> None:
        self.case = FakeReader()
        self.investigation = FakeReader()
        self.remediation = FakeReader()
        self.conflict = FakeReader()
        self.campaign = FakeReader()
        self.workflow = FakeReader()

    def all(self) -> list[FakeReader]:
        return [
            self.case,
            self.investigation,
            self.remediation,
            self.conflict,
            self.campaign,
            self.workflow,
        ]

    def aggregator(self, fetch_limit: int = 100) -> TaskAggregator:
        return TaskAggregator(
            case_reader=self.case,
            investigation_reader=self.investigation,
            remediation_reader=self.remediation,
            conflict_alert_reader=self.conflict,
            campaign_reader=self.campaign,
            workflow_reader=self.workflow,
            fetch_limit=fetch_limit,
        )


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def readers() -> Readers:
    return Readers()


@pytest.fixture
def make_case():
    def _make(case_id="c1", **overrides) -> CaseRecord:
        data = {
            "id": case_id,
            "organization_id": ORG_ID,
            "reference_number": f"ETH-2026-{case_id}",
            "status": CaseStatus.OPEN,
            "severity": Severity.HIGH,
            "summary": "Expense report irregularities",
            "details": "Long form details of the report",
            "source_channel": "HOTLINE",
            "case_type": "REPORT",
            "category_name": "Fraud",
            "created_at": NOW - timedelta(days=5),
            "created_by_id": USER_ID,
        }
        data.update(overrides)
        return CaseRecord(**data)

    return _make


@pytest.fixture
def make_investigation():
    def _make(investigation_id="i1", **overrides) -> InvestigationRecord:
        data = {
            "id": investigation_id,
            "organization_id": ORG_ID,
            "case_id": "c1",
            "case_reference_number": "ETH-2026-c1",
            "status": InvestigationStatus.INVESTIGATING,
            "due_date": NOW + timedelta(days=3),
            "sla_status": SlaStatus.ON_TRACK,
            "primary_investigator_id": USER_ID,
            "investigation_type": "FULL",
            "department": "HR",
            "findings_summary": None,
            "assigned_at": NOW - timedelta(days=2),
            "created_at": NOW - timedelta(days=4),
        }
        data.update(overrides)
        return InvestigationRecord(**data)

    return _make


@pytest.fixture
def make_step():
    def _make(step_id="s1", **overrides) -> RemediationStepRecord:
        data = {
            "id": step_id,
            "organization_id": ORG_ID,
            "plan_id": "p1",
            "plan_title": "Tighten expense approvals",
            "case_id": "c1",
            "case_reference_number": "ETH-2026-c1",
            "title": "Update expense policy",
            "description": "Add dual sign-off",
            "due_date": NOW + timedelta(days=7),
            "status": StepStatus.PENDING,
            "assignee_user_id": USER_ID,
            "order": 1,
            "requires_co_approval": False,
            "created_at": NOW - timedelta(days=1),
        }
        data.update(overrides)
        return RemediationStepRecord(**data)

    return _make


@pytest.fixture
def make_alert():
    def _make(alert_id="a1", **overrides) -> ConflictAlertRecord:
        data = {
            "id": alert_id,
            "organization_id": ORG_ID,
            "disclosure_id": "d1",
            "summary": "Vendor owned by employee spouse",
            "conflict_type": "VENDOR_MATCH",
            "matched_entity": "Acme Supplies LLC",
            "severity": ConflictSeverity.CRITICAL,
            "match_confidence": 0.92,
            "status": ConflictStatus.OPEN,
            "created_at": NOW - timedelta(hours=6),
        }
        data.update(overrides)
        return ConflictAlertRecord(**data)

    return _make


@pytest.fixture
def make_assignment():
    def _make(assignment_id="ca1", **overrides) -> CampaignAssignmentRecord:
        data = {
            "id": assignment_id,
            "organization_id": ORG_ID,
            "campaign_id": "camp1",
            "campaign_name": "2026 Annual COI Disclosure",
            "campaign_type": "DISCLOSURE",
            "due_date": NOW + timedelta(days=10),
            "status": AssignmentStatus.NOTIFIED,
            "employee_id": USER_ID,
            "assigned_at": NOW - timedelta(days=3),
            "reminder_count": 1,
        }
        data.update(overrides)
        return CampaignAssignmentRecord(**data)

    return _make


@pytest.fixture
def make_instance():
    def _make(instance_id="w1", **overrides) -> WorkflowInstanceRecord:
        data = {
            "id": instance_id,
            "organization_id": ORG_ID,
            "template_id": "t1",
            "template_name": "Policy Approval",
            "entity_type": "POLICY",
            "entity_id": "pol1",
            "due_date": NOW + timedelta(days=2),
            "status": WorkflowInstanceStatus.ACTIVE,
            "current_stage": "legal_review",
            "current_step": "approve",
            "sla_status": SlaStatus.WARNING,
            "created_at": NOW - timedelta(days=1),
        }
        data.update(overrides)
        return WorkflowInstanceRecord(**data)

    return _make
