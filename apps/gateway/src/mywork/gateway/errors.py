"""异常 -> HTTP 错误响应映射

统一错误结构：{"error": {"code": ..., "message": ...}}。
聚合失败只返回通用提示，不暴露底层数据源细节。
"""

import structlog
from fastapi import FastAPI, Request
from mywork.core.exceptions import (
    InvalidTaskIdError,
    InvalidTaskQueryError,
    MyWorkError,
    TaskActionError,
    TaskAggregationError,
    TaskNotFoundError,
)
from starlette.responses import JSONResponse

from .deps import MissingIdentityError

log = structlog.get_logger()

WORK_QUEUE_UNAVAILABLE_MESSAGE = "Unable to load work queue"


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message}},
    )


async def handle_mywork_error(request: Request, exc: Exception) -> JSONResponse:
    """MyWorkError 体系统一处理"""
    if isinstance(exc, MissingIdentityError):
        return error_response(401, "UNAUTHORIZED", str(exc))
    if isinstance(exc, InvalidTaskQueryError):
        return error_response(400, "INVALID_QUERY", str(exc))
    if isinstance(exc, InvalidTaskIdError):
        return error_response(400, "INVALID_TASK_ID", str(exc))
    if isinstance(exc, TaskActionError):
        return error_response(400, "TASK_ACTION_REJECTED", str(exc))
    if isinstance(exc, TaskNotFoundError):
        return error_response(404, "TASK_NOT_FOUND", str(exc))
    if isinstance(exc, TaskAggregationError):
        await log.aerror(
            "work_queue_unavailable",
            source=exc.source,
            error_type=type(exc.original_error).__name__,
        )
        return error_response(503, "WORK_QUEUE_UNAVAILABLE", WORK_QUEUE_UNAVAILABLE_MESSAGE)
    return error_response(500, "INTERNAL_ERROR", "Internal error")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MyWorkError, handle_mywork_error)
