"""
测试配置和 Fixtures
提供测试用的数据库引擎、会话工厂、Service实例和HTTP客户端
"""
import os

# 必须在导入项目模块之前设置
os.environ.setdefault("ENV_FILE_PATH", "/nonexistent/.env")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from typing import AsyncGenerator

import pytest_asyncio
from dependency_injector import providers
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.models import Base
from app.repositories.i18n_module_repository import I18nModuleRepository
from app.repositories.i18n_repository import I18nRepository
from app.repositories.sys_dept_repository import DeptRepository
from app.repositories.sys_menu_repository import MenuRepository
from app.repositories.sys_role_repository import RoleRepository
from app.repositories.sys_user_repository import UserRepository
from app.services.i18n_module_service import I18nModuleService
from app.services.i18n_service import I18nService
from app.services.sys_dept_service import DeptService
from app.services.sys_menu_service import MenuService
from app.services.sys_role_service import RoleService
from app.services.sys_user_service import UserService

# 使用 SQLite 内存数据库进行测试
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def create_test_engine() -> AsyncEngine:
    """
    内存SQLite引擎：StaticPool 保证所有会话共用同一个连接；
    由SQLAlchemy显式发出 BEGIN，使 DDL 也在事务内（可回滚）
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _do_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return engine


# ==================== Fixtures ====================

@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """每个测试函数独立的空数据库"""
    test_engine = create_test_engine()
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest_asyncio.fixture
async def bare_engine() -> AsyncGenerator[AsyncEngine, None]:
    """不建表的空数据库（迁移脚本测试用）"""
    test_engine = create_test_engine()
    yield test_engine
    await test_engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine: AsyncEngine) -> sessionmaker:
    return sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def module_service(session_factory) -> I18nModuleService:
    return I18nModuleService(I18nModuleRepository(session_factory))


@pytest_asyncio.fixture
async def i18n_service(session_factory) -> I18nService:
    return I18nService(I18nRepository(session_factory), I18nModuleRepository(session_factory))


@pytest_asyncio.fixture
async def user_service(session_factory) -> UserService:
    return UserService(UserRepository(session_factory))


@pytest_asyncio.fixture
async def role_service(session_factory) -> RoleService:
    return RoleService(RoleRepository(session_factory))


@pytest_asyncio.fixture
async def dept_service(session_factory) -> DeptService:
    return DeptService(DeptRepository(session_factory))


@pytest_asyncio.fixture
async def menu_service(session_factory) -> MenuService:
    return MenuService(MenuRepository(session_factory))


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """HTTP测试客户端：容器的会话工厂替换为测试库"""
    from app.main import app

    container = app.state.container
    container.async_session_factory.override(providers.Object(session_factory))
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
    finally:
        container.async_session_factory.reset_override()
