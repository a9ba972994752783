"""Gateway 日志配置

structlog 作为唯一日志前端，标准库 logging 只做输出通道：
- MYWORK_LOG_FORMAT=json: 每行一个 JSON 对象，供日志平台采集
- MYWORK_LOG_FORMAT=dev（默认）: 彩色控制台输出
- MYWORK_LOG_LEVEL: 根 logger 级别，默认 INFO

队列请求的租户/用户/request_id 由中间件绑定到 contextvars，
这里通过 merge_contextvars 合并进每一条日志。
"""

import logging
import os

import structlog
from fastapi import FastAPI

# 每次请求都会产生的第三方日志，压到 WARNING 避免淹没队列日志
_NOISY_LOGGERS = ("aiosqlite", "uvicorn.access")


def _build_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def setup_logging(log_format: str | None = None, log_level: str | None = None) -> None:
    """配置 structlog 与标准库 logging

    Args:
        log_format: "json" 或 "dev"，缺省读取 MYWORK_LOG_FORMAT
        log_level: 日志级别名，缺省读取 MYWORK_LOG_LEVEL
    """
    log_format = (log_format or os.environ.get("MYWORK_LOG_FORMAT", "dev")).lower()
    log_level = (log_level or os.environ.get("MYWORK_LOG_LEVEL", "INFO")).upper()

    processors = _build_processors()
    if log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer(
            ensure_ascii=False
        )
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[*processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=processors)
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level, logging.INFO))

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_logfire(app: FastAPI) -> bool:
    """按需接入 Logfire APM（需安装 apm extra）

    LOGFIRE_SEND_TO_LOGFIRE=true 时配置 Logfire 并对 app 做 FastAPI 埋点；
    初始化失败时记录告警并继续使用本地日志，队列服务照常启动。

    Returns:
        是否已启用 Logfire
    """
    if os.environ.get("LOGFIRE_SEND_TO_LOGFIRE", "false").lower() != "true":
        return False

    log = structlog.get_logger()
    try:
        import logfire

        logfire.configure(service_name="mywork-gateway")
        logfire.instrument_fastapi(app)
    except Exception as e:
        log.warning(
            "logfire_init_failed",
            error_type=type(e).__name__,
            error=str(e),
        )
        return False

    log.info("logfire_enabled", service_name="mywork-gateway")
    return True
