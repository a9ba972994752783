"""MyWork Core Store -- 数据源 SQLite 实现

提供工厂函数创建共享数据库连接的 Store 实例组。
"""

from pathlib import Path

import aiosqlite

from .campaign_store import SqliteCampaignStore
from .case_store import SqliteCaseStore
from .conflict_alert_store import SqliteConflictAlertStore
from .investigation_store import SqliteInvestigationStore
from .remediation_store import SqliteRemediationStore
from .sqlite_init import init_db
from .workflow_store import SqliteWorkflowStore


class StoreGroup:
    """Store 实例组 -- 共享同一个数据库连接"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self.conn = conn
        self.case_store = SqliteCaseStore(conn)
        self.investigation_store = SqliteInvestigationStore(conn)
        self.remediation_store = SqliteRemediationStore(conn)
        self.conflict_alert_store = SqliteConflictAlertStore(conn)
        self.campaign_store = SqliteCampaignStore(conn)
        self.workflow_store = SqliteWorkflowStore(conn)


async def create_store_group(db_path: str) -> StoreGroup:
    """创建 Store 实例组

    Args:
        db_path: SQLite 数据库文件路径

    Returns:
        StoreGroup 实例
    """
    # 确保数据库目录存在
    db_dir = Path(db_path).parent
    db_dir.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(db_path)
    await init_db(conn)

    return StoreGroup(conn=conn)


__all__ = [
    "StoreGroup",
    "create_store_group",
    "SqliteCaseStore",
    "SqliteInvestigationStore",
    "SqliteRemediationStore",
    "SqliteConflictAlertStore",
    "SqliteCampaignStore",
    "SqliteWorkflowStore",
    "init_db",
]
