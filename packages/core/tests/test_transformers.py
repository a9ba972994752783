"""数据源 -> UnifiedTask 转换测试"""

from datetime import timedelta

from mywork.core.aggregation import (
    approval_to_task,
    campaign_to_task,
    case_to_task,
    disclosure_to_task,
    investigation_to_task,
    remediation_to_task,
)
from mywork.core.models import (
    AssignmentStatus,
    CaseStatus,
    InvestigationStatus,
    Severity,
    SlaStatus,
    StepStatus,
    TaskPriority,
    TaskStatus,
    TaskType,
)

ORG_ID = "org-acme"


class TestCaseToTask:
    def test_open_case(self, make_case, now):
        task = case_to_task(make_case("c1"), ORG_ID, now)
        assert task.id == "case_assignment-c1"
        assert task.type == TaskType.CASE_ASSIGNMENT
        assert task.entity_type == "Case"
        assert task.entity_id == "c1"
        assert task.title == "Case ETH-2026-c1"
        assert task.url == "/cases/c1"
        assert task.due_date is None
        assert task.priority == TaskPriority.HIGH
        assert task.status == TaskStatus.IN_PROGRESS
        assert task.assignee_id == "user-alice"
        assert task.category_name == "Fraud"
        assert task.metadata == {
            "sourceChannel": "HOTLINE",
            "caseType": "REPORT",
            "status": "OPEN",
        }
        assert task.organization_id == ORG_ID

    def test_new_case_pending(self, make_case, now):
        task = case_to_task(make_case(status=CaseStatus.NEW), ORG_ID, now)
        assert task.status == TaskStatus.PENDING

    def test_low_and_missing_severity(self, make_case, now):
        assert case_to_task(make_case(severity=Severity.LOW), ORG_ID, now).priority == TaskPriority.LOW
        assert case_to_task(make_case(severity=None), ORG_ID, now).priority == TaskPriority.LOW

    def test_description_falls_back_to_truncated_details(self, make_case, now):
        task = case_to_task(make_case(summary=None, details="x" * 500), ORG_ID, now)
        assert task.description == "x" * 200

    def test_id_is_stable(self, make_case, now):
        record = make_case("c9")
        assert case_to_task(record, ORG_ID, now).id == case_to_task(record, ORG_ID, now).id


class TestInvestigationToTask:
    def test_mapping(self, make_investigation, now):
        task = investigation_to_task(
            make_investigation("i1", sla_status=SlaStatus.WARNING), ORG_ID, now
        )
        assert task.id == "investigation_step-i1"
        assert task.title == "Investigation for ETH-2026-c1"
        assert task.priority == TaskPriority.HIGH
        assert task.status == TaskStatus.IN_PROGRESS
        assert task.due_date == now + timedelta(days=3)
        assert task.metadata["slaStatus"] == "WARNING"
        assert task.case_number == "ETH-2026-c1"

    def test_overdue(self, make_investigation, now):
        task = investigation_to_task(
            make_investigation(due_date=now - timedelta(days=1)), ORG_ID, now
        )
        assert task.status == TaskStatus.OVERDUE
        assert task.priority == TaskPriority.MEDIUM

    def test_assigned_at_falls_back_to_created_at(self, make_investigation, now):
        record = make_investigation(assigned_at=None, status=InvestigationStatus.ASSIGNED)
        task = investigation_to_task(record, ORG_ID, now)
        assert task.assigned_at == record.created_at
        assert task.status == TaskStatus.PENDING


class TestRemediationToTask:
    def test_fixed_medium_and_step_title(self, make_step, now):
        task = remediation_to_task(make_step("s1"), ORG_ID, now)
        assert task.priority == TaskPriority.MEDIUM
        assert task.title == "Update expense policy"
        assert task.url == "/cases/c1/remediation/p1"
        assert task.metadata["planTitle"] == "Tighten expense approvals"
        assert task.status == TaskStatus.PENDING

    def test_in_progress(self, make_step, now):
        task = remediation_to_task(make_step(status=StepStatus.IN_PROGRESS), ORG_ID, now)
        assert task.status == TaskStatus.IN_PROGRESS


class TestDisclosureToTask:
    def test_org_level_pending_without_due_date(self, make_alert, now):
        task = disclosure_to_task(make_alert("a1"), ORG_ID, now)
        assert task.id == "disclosure_review-a1"
        assert task.title == "Conflict Alert: Vendor owned by employee spouse"
        assert task.description == "VENDOR_MATCH - Acme Supplies LLC"
        assert task.due_date is None
        assert task.assignee_id is None
        assert task.status == TaskStatus.PENDING
        assert task.priority == TaskPriority.HIGH
        assert task.metadata["matchConfidence"] == 0.92


class TestCampaignToTask:
    def test_mapping(self, make_assignment, now):
        task = campaign_to_task(make_assignment("ca1"), ORG_ID, now)
        assert task.title == "2026 Annual COI Disclosure"
        assert task.description == "Complete your disclosure response"
        assert task.url == "/disclosures/respond/ca1"
        assert task.priority == TaskPriority.MEDIUM
        assert task.status == TaskStatus.PENDING
        assert task.metadata["reminderCount"] == 1

    def test_past_due_overdue(self, make_assignment, now):
        task = campaign_to_task(
            make_assignment(
                due_date=now - timedelta(hours=1),
                status=AssignmentStatus.IN_PROGRESS,
            ),
            ORG_ID,
            now,
        )
        assert task.status == TaskStatus.OVERDUE


class TestApprovalToTask:
    def test_active_instance_in_progress(self, make_instance, now):
        task = approval_to_task(make_instance("w1"), ORG_ID, now)
        assert task.id == "approval_request-w1"
        assert task.title == "Approval: Policy Approval"
        assert task.description == "Workflow at stage: legal_review"
        assert task.priority == TaskPriority.HIGH
        assert task.status == TaskStatus.IN_PROGRESS
        assert task.assignee_id is None
        assert task.metadata["entityId"] == "pol1"

    def test_overdue(self, make_instance, now):
        task = approval_to_task(
            make_instance(due_date=now - timedelta(days=1), sla_status=SlaStatus.ON_TRACK),
            ORG_ID,
            now,
        )
        assert task.status == TaskStatus.OVERDUE
        assert task.priority == TaskPriority.MEDIUM
