"""TenantContextMiddleware

把上游鉴权解析出的租户与用户标识绑定到 structlog contextvars，
贯穿本次请求的所有日志。身份校验本身不在这里做。
"""

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response


class TenantContextMiddleware(BaseHTTPMiddleware):
    """租户上下文中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        organization_id = request.headers.get("X-Organization-Id")
        user_id = request.headers.get("X-User-Id")

        if organization_id:
            structlog.contextvars.bind_contextvars(organization_id=organization_id)
        if user_id:
            structlog.contextvars.bind_contextvars(user_id=user_id)

        return await call_next(request)
