"""配置常量模块 -- 可通过环境变量覆盖

包含数据库路径、单数据源抓取上限、分页默认值等可配置常量。
"""

import os
from pathlib import Path


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("MYWORK_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "MYWORK_DB_PATH",
        str(_get_base_dir() / "sqlite" / "mywork.db"),
    )


# 单个数据源每次请求最多抓取的记录数（防止 fan-out 无界放大）
SOURCE_FETCH_LIMIT: int = int(os.environ.get("MYWORK_SOURCE_FETCH_LIMIT", "100"))

# My Tasks 默认分页大小
DEFAULT_PAGE_LIMIT: int = int(os.environ.get("MYWORK_DEFAULT_PAGE_LIMIT", "50"))

# 单页最大条数
MAX_PAGE_LIMIT: int = int(os.environ.get("MYWORK_MAX_PAGE_LIMIT", "100"))

# "Available" 分区最多展示的可认领任务数
AVAILABLE_SECTION_LIMIT: int = int(
    os.environ.get("MYWORK_AVAILABLE_SECTION_LIMIT", "20")
)

# 任务描述截断长度
DESCRIPTION_MAX_LENGTH: int = int(
    os.environ.get("MYWORK_DESCRIPTION_MAX_LENGTH", "200")
)
