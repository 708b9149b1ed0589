# 项目核心配置文件，包含数据库、CORS、日志、分页等全局配置，支持从.env文件加载环境变量
# backend/app/core/config.py
#  - DATABASE_URL 可直接覆盖PostgreSQL连接串（测试环境使用sqlite+aiosqlite）
#  - 迁移脚本与API共用同一份数据库连接配置
#  - 全局时区DEFAULT_TZ供Service层和日志统一使用

import os
from typing import Annotated, Any, Literal
from zoneinfo import ZoneInfo

from pydantic import (
    AnyUrl,
    BeforeValidator,
    Field,
    HttpUrl,
    computed_field,
    model_validator,
)
from pydantic_core import MultiHostUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",")]
    elif isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Use top level .env file (one level above ./backend/)
        env_file=os.getenv("ENV_FILE_PATH", "../.env"),
        env_ignore_empty=True,
        extra="ignore",
    )
    PROJECT_NAME: str = "Nova Admin"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    FRONTEND_HOST: str = "http://localhost:3000"

    # 密码加密
    BCRYPT_ROUNDS: int = 12
    # 管理员角色编码（该角色的用户不可删除/禁用）
    ADMIN_ROLE_CODE: str = "admin"

    # 分页默认值
    DEFAULT_PAGE_SIZE: int = Field(10, description="列表接口默认每页数量")
    TRANSLATION_PAGE_SIZE: int = Field(50, description="旧版翻译表默认每页数量")

    # 日志配置
    LOG_LEVEL: str = Field("INFO", description="非local环境的日志级别")
    LOG_TO_FILE_FLAG: bool = Field(
        default=False,
        description="日志落文件开关（True：控制台+文件输出；False：仅控制台输出）"
    )
    LOG_FILE_PATH: str = Field(
        default="logs/app.log",
        description="日志文件存储路径"
    )

    BACKEND_CORS_ORIGINS: Annotated[
        list[AnyUrl] | str, BeforeValidator(parse_cors)
    ] = []

    @computed_field  # type: ignore[prop-decorator]
    @property
    def all_cors_origins(self) -> list[str]:
        return [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS] + [
            self.FRONTEND_HOST
        ]

    SENTRY_DSN: HttpUrl | None = None

    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DB: str = "nova_admin"
    # 完整连接串，设置后优先于POSTGRES_*字段
    DATABASE_URL: str | None = None

    # 数据库连接池配置
    DB_POOL_SIZE: int = Field(20, description="数据库连接池大小")
    DB_MAX_OVERFLOW: int = Field(100, description="最大溢出连接数")
    DB_POOL_RECYCLE: int = Field(3600, description="连接回收时间(秒)")
    DB_POOL_PRE_PING: bool = Field(True, description="连接有效性检查")

    # 全局时区配置，默认北京时间
    DEFAULT_TIMEZONE: str = Field(
        "Asia/Shanghai",
        description="项目全局默认时区（如Asia/Shanghai、UTC等）"
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return str(MultiHostUrl.build(
            scheme="postgresql+psycopg",
            username=self.POSTGRES_USER,
            password=self.POSTGRES_PASSWORD or None,
            host=self.POSTGRES_SERVER,
            port=self.POSTGRES_PORT,
            path=self.POSTGRES_DB,
        ))

    @model_validator(mode="after")
    def _check_page_sizes(self) -> "Settings":
        if self.DEFAULT_PAGE_SIZE < 1 or self.TRANSLATION_PAGE_SIZE < 1:
            raise ValueError("DEFAULT_PAGE_SIZE / TRANSLATION_PAGE_SIZE 必须大于0")
        return self


# 全局settings对象
settings = Settings()  # type: ignore

# 导出全局时区对象
DEFAULT_TZ = ZoneInfo(settings.DEFAULT_TIMEZONE)
