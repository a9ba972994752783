"""数据源 Reader Protocol 接口定义

每个数据源一个窄接口，只暴露聚合器需要的只读查询，
使用 Python Protocol 实现结构化子类型（duck typing），测试可直接注入 fake。

约定：
- 所有查询必须按 organization_id 做租户隔离
- list_open / count_open 只返回"可处理"状态的记录，终态记录不得泄漏
- due_range 映射到该数据源语义上的"截止"字段
"""

from typing import Protocol

from ..models.query import DueDateRange
from ..models.sources import (
    CampaignAssignmentRecord,
    CaseRecord,
    ConflictAlertRecord,
    InvestigationRecord,
    RemediationStepRecord,
    WorkflowInstanceRecord,
)


class CaseReader(Protocol):
    """案件 Reader -- 用户维度为 created_by_id，due_range 映射到 created_at"""

    async def list_open(
        self,
        organization_id: str,
        user_id: str,
        due_range: DueDateRange | None,
        limit: int,
    ) -> list[CaseRecord]:
        ...

    async def count_open(self, organization_id: str, user_id: str) -> int:
        ...

    async def list_unassigned(
        self,
        organization_id: str,
        limit: int,
    ) -> list[CaseRecord]:
        """新建未认领案件（status=NEW，未合并），按创建时间倒序"""
        ...


class InvestigationReader(Protocol):
    """调查 Reader -- 用户维度为 primary_investigator_id"""

    async def list_open(
        self,
        organization_id: str,
        user_id: str,
        due_range: DueDateRange | None,
        limit: int,
    ) -> list[InvestigationRecord]:
        ...

    async def count_open(self, organization_id: str, user_id: str) -> int:
        ...


class RemediationStepReader(Protocol):
    """整改步骤 Reader -- 用户维度为 assignee_user_id"""

    async def list_open(
        self,
        organization_id: str,
        user_id: str,
        due_range: DueDateRange | None,
        limit: int,
    ) -> list[RemediationStepRecord]:
        ...

    async def count_open(self, organization_id: str, user_id: str) -> int:
        ...


class ConflictAlertReader(Protocol):
    """冲突告警 Reader -- 组织级队列，不按用户过滤，也不支持 due_range"""

    async def list_open(
        self,
        organization_id: str,
        user_id: str,
        due_range: DueDateRange | None,
        limit: int,
    ) -> list[ConflictAlertRecord]:
        ...

    async def count_open(self, organization_id: str, user_id: str) -> int:
        ...


class CampaignAssignmentReader(Protocol):
    """活动分派 Reader -- 用户维度为 employee_id"""

    async def list_open(
        self,
        organization_id: str,
        user_id: str,
        due_range: DueDateRange | None,
        limit: int,
    ) -> list[CampaignAssignmentRecord]:
        ...

    async def count_open(self, organization_id: str, user_id: str) -> int:
        ...


class WorkflowInstanceReader(Protocol):
    """工作流实例 Reader -- 组织级，不按用户过滤"""

    async def list_open(
        self,
        organization_id: str,
        user_id: str,
        due_range: DueDateRange | None,
        limit: int,
    ) -> list[WorkflowInstanceRecord]:
        ...

    async def count_open(self, organization_id: str, user_id: str) -> int:
        ...
