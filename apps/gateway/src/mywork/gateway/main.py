"""FastAPI 应用主文件

app 创建 + lifespan 管理：数据源 Store 初始化/关闭 + 聚合器装配 + 路由注册。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from mywork.core.aggregation import TaskAggregator
from mywork.core.config import SOURCE_FETCH_LIMIT, get_db_path
from mywork.core.store import create_store_group

from .errors import register_error_handlers
from .middleware.logging_config import setup_logfire, setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .middleware.tenant_mw import TenantContextMiddleware
from .routes import health, my_work

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时打开数据库并装配聚合器，关闭时清理连接"""
    db_path = get_db_path()
    store_group = await create_store_group(db_path)
    app.state.store_group = store_group
    app.state.aggregator = TaskAggregator.from_store_group(
        store_group,
        fetch_limit=SOURCE_FETCH_LIMIT,
    )
    log.info("work_queue_initialized", db_path=db_path, fetch_limit=SOURCE_FETCH_LIMIT)

    yield

    if hasattr(app.state, "store_group") and app.state.store_group:
        await app.state.store_group.conn.close()


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    app = FastAPI(
        title="MyWork Gateway",
        version="0.1.0",
        description="统一 My Work 任务队列 API",
        lifespan=lifespan,
    )

    # 注册中间件（顺序：先 Tenant 后 Logging，Logging 在最外层）
    app.add_middleware(TenantContextMiddleware)
    app.add_middleware(LoggingMiddleware)

    setup_logging()
    setup_logfire(app)

    register_error_handlers(app)

    app.include_router(my_work.router, tags=["my-work"])
    app.include_router(health.router, tags=["health"])

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()
