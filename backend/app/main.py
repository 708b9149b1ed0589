"""
项目主入口文件
backend/app/main.py
"""
import logging
import uuid
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from sqlalchemy.exc import IntegrityError
from starlette.middleware.cors import CORSMiddleware

from app.api import api_router
from app.core.config import DEFAULT_TZ, settings
from app.core.exceptions import AppException
from app.di.container import Container
from app.schemas.responses import ErrorResponse, ResponseCode
from app.utils.request_context import RequestIDFilter, request_id_ctx


def init_global_logger() -> logging.Logger:
    """
    初始化全局日志
    - 控制台输出始终开启；LOG_TO_FILE_FLAG=True 时追加按大小轮转的文件输出
    - 日志格式包含request_id、模块、级别
    - 日志时间使用全局时区
    """
    # 避免重复初始化
    logger = logging.getLogger()
    if any(isinstance(f, RequestIDFilter) for h in logger.handlers for f in h.filters):
        return logger

    log_level = logging.DEBUG if settings.ENVIRONMENT == "local" else getattr(
        logging, settings.LOG_LEVEL.upper(), logging.INFO
    )
    formatter = logging.Formatter(
        "%(asctime)s | %(request_id)s | %(name)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S %z"
    )
    formatter.converter = lambda *args: datetime.now(DEFAULT_TZ).timetuple()

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if settings.LOG_TO_FILE_FLAG:
        log_path = Path(settings.LOG_FILE_PATH)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(
            filename=str(log_path),
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8"
        ))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(log_level)
        handler.addFilter(RequestIDFilter())
        logger.addHandler(handler)
    logger.setLevel(log_level)

    # 第三方库日志统一走根处理器
    for logger_name in ("passlib", "uvicorn", "uvicorn.access", "uvicorn.error"):
        third_logger = logging.getLogger(logger_name)
        third_logger.handlers.clear()
        third_logger.propagate = True

    # SQLAlchemy日志避免过冗余
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    return logger


logger = init_global_logger()


def custom_generate_unique_id(route: APIRoute) -> str:
    if not route.tags:
        return f"untagged-{route.name}"
    return f"{route.tags[0]}-{route.name}"


# Sentry初始化
if settings.SENTRY_DSN and settings.ENVIRONMENT != "local":
    sentry_sdk.init(
        dsn=str(settings.SENTRY_DSN),
        enable_tracing=True,
        environment=settings.ENVIRONMENT
    )


def _error_response(status_code: int, msg: str, details=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(ErrorResponse(
            code=ResponseCode.from_status(status_code),
            msg=msg,
            details=details,
            request_id=request_id_ctx.get() or "unknown",
            timestamp=datetime.now(DEFAULT_TZ)
        ))
    )


def create_app(container: Container | None = None) -> FastAPI:
    # 1. 初始化DI容器并扫描API模块（测试可传入已覆盖会话工厂的容器）
    container = container or Container()
    container.wire(modules=[
        "app.api.v1.endpoints.i18n_modules",
        "app.api.v1.endpoints.i18n",
        "app.api.v1.endpoints.users",
        "app.api.v1.endpoints.roles",
        "app.api.v1.endpoints.depts",
        "app.api.v1.endpoints.menus",
    ])

    # 2. 创建FastAPI应用
    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        generate_unique_id_function=custom_generate_unique_id,
    )

    # 3. request_id中间件：写入上下文，响应头返回X-Request-ID
    @app.middleware("http")
    async def add_request_id_middleware(request: Request, call_next):
        request_id = str(uuid.uuid4())
        token = request_id_ctx.set(request_id)
        logger.debug(f"开始处理请求 | 路径：{request.url.path} | 方法：{request.method}")
        try:
            response = await call_next(request)
        finally:
            request_id_ctx.reset(token)
        response.headers["X-Request-ID"] = request_id
        return response

    # 4. 配置CORS
    if settings.all_cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.all_cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID"],
        )

    # 5. 异常处理器：统一返回 ErrorResponse
    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException):
        logger.warning(f"应用异常 | 路径：{request.url.path} | 状态码：{exc.status_code} | 详情：{exc.detail}")
        return _error_response(exc.status_code, exc.detail)

    @app.exception_handler(IntegrityError)
    async def integrity_exception_handler(request: Request, exc: IntegrityError):
        logger.error(f"数据库完整性异常 | 路径：{request.url.path} | 详情：{exc.orig}")
        return _error_response(409, "数据已存在或违反约束", details=str(exc.orig))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"请求参数校验失败 | 路径：{request.url.path} | 错误详情：{exc.errors()}")
        return _error_response(422, "请求参数校验失败", details={"errors": exc.errors()})

    # 6. 挂载API路由
    app.include_router(api_router, prefix=settings.API_V1_STR)

    # 7. 附加容器到app.state
    app.state.container = container
    return app


app = create_app()

logger.info(
    f"{settings.PROJECT_NAME} 应用启动 | 环境：{settings.ENVIRONMENT} | API前缀：{settings.API_V1_STR} "
    f"| 时区：{settings.DEFAULT_TIMEZONE} | 日志落文件：{settings.LOG_TO_FILE_FLAG}",
    extra={"request_id": "app_startup"}
)
