"""apps/gateway 测试配置 -- httpx AsyncClient + 临时 SQLite 数据源"""

import os
from collections.abc import AsyncGenerator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mywork.core.aggregation import TaskAggregator
from mywork.core.models import (
    CaseRecord,
    CaseStatus,
    InvestigationRecord,
    InvestigationStatus,
    Severity,
)
from mywork.core.store import create_store_group

ORG_ID = "org-acme"
USER_ID = "user-alice"


@pytest_asyncio.fixture
async def test_app(tmp_path: Path):
    """创建测试用 FastAPI app 实例（手动初始化，绕过 lifespan）"""
    os.environ["MYWORK_DB_PATH"] = str(tmp_path / "test.db")
    os.environ["LOGFIRE_SEND_TO_LOGFIRE"] = "false"

    from mywork.gateway.main import create_app

    app = create_app()

    store_group = await create_store_group(str(tmp_path / "test.db"))
    app.state.store_group = store_group
    app.state.aggregator = TaskAggregator.from_store_group(store_group)

    yield app

    await store_group.conn.close()
    os.environ.pop("MYWORK_DB_PATH", None)
    os.environ.pop("LOGFIRE_SEND_TO_LOGFIRE", None)


@pytest_asyncio.fixture
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient，默认携带调用者身份请求头"""
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
        headers={
            "X-Organization-Id": ORG_ID,
            "X-User-Id": USER_ID,
            "X-User-Role": "INVESTIGATOR",
        },
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def seeded(test_app):
    """写入一个进行中案件、一个新建未认领案件和一个昨天到期的调查"""
    store_group = test_app.state.store_group
    now = datetime.now(UTC)

    await store_group.case_store.create_case(
        CaseRecord(
            id="c1",
            organization_id=ORG_ID,
            reference_number="ETH-2026-0001",
            status=CaseStatus.OPEN,
            severity=Severity.HIGH,
            summary="Expense report irregularities",
            created_at=now - timedelta(days=5),
            created_by_id=USER_ID,
        )
    )
    await store_group.case_store.create_case(
        CaseRecord(
            id="c-new",
            organization_id=ORG_ID,
            reference_number="ETH-2026-0002",
            status=CaseStatus.NEW,
            severity=Severity.MEDIUM,
            summary="Anonymous hotline report",
            created_at=now - timedelta(hours=3),
            created_by_id=None,
        )
    )
    await store_group.investigation_store.create_investigation(
        InvestigationRecord(
            id="i1",
            organization_id=ORG_ID,
            case_id="c1",
            case_reference_number="ETH-2026-0001",
            status=InvestigationStatus.INVESTIGATING,
            due_date=now - timedelta(days=1),
            primary_investigator_id=USER_ID,
            assigned_at=now - timedelta(days=4),
            created_at=now - timedelta(days=4),
        )
    )
    await store_group.conn.commit()
    return store_group
