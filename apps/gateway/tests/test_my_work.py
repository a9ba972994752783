"""My Work 队列路由测试

测试内容：
1. 队列排序：逾期调查排在进行中案件之前
2. Available 分区与计数接口
3. 身份缺失 401、非法参数 400、数据源失败 503
"""

from httpx import AsyncClient
from mywork.core.aggregation import TaskAggregator
from mywork.core.models import TaskStatus

ORG_ID = "org-acme"


class _BrokenReader:
    async def list_open(self, organization_id, user_id, due_range, limit):
        raise RuntimeError("database is locked")

    async def count_open(self, organization_id, user_id):
        raise RuntimeError("database is locked")


class TestGetMyWork:
    async def test_overdue_investigation_ranks_first(self, client: AsyncClient, seeded):
        resp = await client.get("/api/v1/my-work")
        assert resp.status_code == 200

        data = resp.json()
        my_tasks, available = data["sections"]
        assert my_tasks["title"] == "My Tasks"
        assert my_tasks["count"] == 2
        assert [t["id"] for t in my_tasks["tasks"]] == [
            "investigation_step-i1",
            "case_assignment-c1",
        ]
        assert my_tasks["tasks"][0]["status"] == TaskStatus.OVERDUE
        assert my_tasks["tasks"][1]["status"] == TaskStatus.IN_PROGRESS
        assert available == {"title": "Available", "tasks": [], "count": 0}
        assert data["total"] == 2
        assert data["has_more"] is False

    async def test_include_available(self, client: AsyncClient, seeded):
        resp = await client.get("/api/v1/my-work", params={"includeAvailable": "true"})
        assert resp.status_code == 200

        data = resp.json()
        available = data["sections"][1]
        assert [t["id"] for t in available["tasks"]] == ["case_assignment-c-new"]
        assert available["tasks"][0]["status"] == TaskStatus.PENDING
        assert data["total"] == 3

    async def test_type_filter_and_pagination(self, client: AsyncClient, seeded):
        resp = await client.get(
            "/api/v1/my-work",
            params={"types": ["case_assignment"], "limit": 1},
        )
        assert resp.status_code == 200
        my_tasks = resp.json()["sections"][0]
        assert [t["type"] for t in my_tasks["tasks"]] == ["case_assignment"]

        resp = await client.get("/api/v1/my-work", params={"limit": 1})
        data = resp.json()
        assert len(data["sections"][0]["tasks"]) == 1
        assert data["has_more"] is True

    async def test_other_tenant_sees_nothing(self, client: AsyncClient, seeded):
        resp = await client.get(
            "/api/v1/my-work",
            headers={"X-Organization-Id": "org-globex"},
        )
        assert resp.status_code == 200
        assert resp.json()["total"] == 0

    async def test_missing_identity_returns_401(self, test_app):
        from httpx import ASGITransport

        async with AsyncClient(
            transport=ASGITransport(app=test_app),
            base_url="http://test",
        ) as anonymous:
            resp = await anonymous.get("/api/v1/my-work")
        assert resp.status_code == 401
        assert resp.json()["error"]["code"] == "UNAUTHORIZED"

    async def test_invalid_query_returns_400(self, client: AsyncClient, seeded):
        cases = [
            {"types": ["not_a_type"]},
            {"sortBy": "alphabetical"},
            {"limit": 0},
            {"dueDateStart": "2026-03-10T00:00:00Z", "dueDateEnd": "2026-03-01T00:00:00Z"},
        ]
        for params in cases:
            resp = await client.get("/api/v1/my-work", params=params)
            assert resp.status_code == 400, params
            assert resp.json()["error"]["code"] == "INVALID_QUERY"

    async def test_source_failure_returns_503(self, client: AsyncClient, test_app):
        stores = test_app.state.store_group
        test_app.state.aggregator = TaskAggregator(
            case_reader=stores.case_store,
            investigation_reader=_BrokenReader(),
            remediation_reader=stores.remediation_store,
            conflict_alert_reader=stores.conflict_alert_store,
            campaign_reader=stores.campaign_store,
            workflow_reader=stores.workflow_store,
        )

        resp = await client.get("/api/v1/my-work")
        assert resp.status_code == 503
        error = resp.json()["error"]
        assert error["code"] == "WORK_QUEUE_UNAVAILABLE"
        assert error["message"] == "Unable to load work queue"
        assert "locked" not in error["message"]

    async def test_request_id_header(self, client: AsyncClient, seeded):
        resp = await client.get("/api/v1/my-work")
        assert "X-Request-ID" in resp.headers


class TestTaskCounts:
    async def test_counts_by_type(self, client: AsyncClient, seeded):
        resp = await client.get("/api/v1/my-work/counts")
        assert resp.status_code == 200

        counts = resp.json()
        assert counts == {
            "case_assignment": 1,
            "investigation_step": 1,
            "remediation_task": 0,
            "disclosure_review": 0,
            "campaign_response": 0,
            "approval_request": 0,
        }

    async def test_counts_source_failure(self, client: AsyncClient, test_app):
        stores = test_app.state.store_group
        test_app.state.aggregator = TaskAggregator(
            case_reader=stores.case_store,
            investigation_reader=stores.investigation_store,
            remediation_reader=stores.remediation_store,
            conflict_alert_reader=_BrokenReader(),
            campaign_reader=stores.campaign_store,
            workflow_reader=stores.workflow_store,
        )
        resp = await client.get("/api/v1/my-work/counts")
        assert resp.status_code == 503
