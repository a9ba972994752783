"""CLI 入口模块 -- python -m mywork.core <command>

支持的命令：
  init-db                    初始化数据源表结构
  counts <org_id> <user_id>  输出指定用户各类型任务数
"""

import asyncio
import sys

from .config import get_db_path


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        print("用法: python -m mywork.core <command>")
        print("命令:")
        print("  init-db                    初始化数据源表结构")
        print("  counts <org_id> <user_id>  输出各类型任务数")
        sys.exit(1)

    command = sys.argv[1]

    if command == "init-db":
        asyncio.run(init_database())
    elif command == "counts":
        if len(sys.argv) != 4:
            print("用法: python -m mywork.core counts <org_id> <user_id>")
            sys.exit(1)
        asyncio.run(print_counts(sys.argv[2], sys.argv[3]))
    else:
        print(f"未知命令: {command}")
        print("可用命令: init-db, counts")
        sys.exit(1)


async def init_database() -> None:
    """创建数据库与表结构"""
    from .store import create_store_group

    db_path = get_db_path()
    print(f"数据库路径: {db_path}")

    store_group = await create_store_group(db_path)
    await store_group.conn.close()
    print("初始化完成")


async def print_counts(organization_id: str, user_id: str) -> None:
    """输出任务计数"""
    from .aggregation import TaskAggregator
    from .store import create_store_group

    store_group = await create_store_group(get_db_path())
    try:
        aggregator = TaskAggregator.from_store_group(store_group)
        counts = await aggregator.get_task_counts(organization_id, user_id)
        for task_type, count in counts.items():
            print(f"{task_type.value:<20} {count}")
    finally:
        await store_group.conn.close()


if __name__ == "__main__":
    main()
