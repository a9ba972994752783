"""依赖注入模块 -- 通过 FastAPI Depends 注入 Store / 聚合器 / 调用者身份

Store 实例与聚合器通过 app.state 管理，在 lifespan 中初始化/清理。
调用者身份由上游鉴权/租户中间件解析后以请求头传入，此处只做读取。
"""

from fastapi import Request
from mywork.core.aggregation import TaskAggregator
from mywork.core.exceptions import MyWorkError
from mywork.core.store import StoreGroup
from pydantic import BaseModel


class MissingIdentityError(MyWorkError):
    """请求缺少租户或用户身份"""


class RequestUser(BaseModel):
    """已鉴权的调用者"""

    id: str
    organization_id: str
    role: str = ""
    region: str | None = None


def get_store_group(request: Request) -> StoreGroup:
    """从 app.state 获取 StoreGroup 实例"""
    return request.app.state.store_group


def get_aggregator(request: Request) -> TaskAggregator:
    """从 app.state 获取 TaskAggregator 实例"""
    return request.app.state.aggregator


def get_current_user(request: Request) -> RequestUser:
    """从请求头读取调用者身份"""
    organization_id = request.headers.get("X-Organization-Id")
    user_id = request.headers.get("X-User-Id")
    if not organization_id or not user_id:
        raise MissingIdentityError("Missing organization or user identity")
    return RequestUser(
        id=user_id,
        organization_id=organization_id,
        role=request.headers.get("X-User-Role", ""),
        region=request.headers.get("X-User-Region"),
    )
