"""
DI容器
项目核心框架文件
backend/app/di/container.py
"""
from dependency_injector import containers, providers
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from app.core.config import settings
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


def create_db_engine(database_url: str) -> AsyncEngine:
    """创建异步引擎（SQLite 不支持连接池参数）"""
    if database_url.startswith("sqlite"):
        return create_async_engine(database_url, echo=False)
    return create_async_engine(
        database_url,
        echo=False,
        pool_pre_ping=settings.DB_POOL_PRE_PING,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_recycle=settings.DB_POOL_RECYCLE,
    )


class Container(containers.DeclarativeContainer):
    # 1. 底层：数据库引擎（单例，全局唯一）
    async_engine = providers.Singleton(
        create_db_engine,
        settings.SQLALCHEMY_DATABASE_URI,
    )

    # 2. 中层：会话工厂（单例，全局唯一）
    async_session_factory = providers.Singleton(
        sessionmaker,
        bind=async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False
    )

    # 3. Repo层：注入会话工厂
    i18n_module_repository = providers.Factory(
        I18nModuleRepository,
        async_session_factory=async_session_factory
    )
    i18n_repository = providers.Factory(
        I18nRepository,
        async_session_factory=async_session_factory
    )
    user_repository = providers.Factory(
        UserRepository,
        async_session_factory=async_session_factory
    )
    role_repository = providers.Factory(
        RoleRepository,
        async_session_factory=async_session_factory
    )
    dept_repository = providers.Factory(
        DeptRepository,
        async_session_factory=async_session_factory
    )
    menu_repository = providers.Factory(
        MenuRepository,
        async_session_factory=async_session_factory
    )

    # 4. Service层：注入Repo
    i18n_module_service = providers.Factory(
        I18nModuleService,
        i18n_module_repository=i18n_module_repository
    )
    i18n_service = providers.Factory(
        I18nService,
        i18n_repository=i18n_repository,
        i18n_module_repository=i18n_module_repository
    )
    user_service = providers.Factory(
        UserService,
        user_repository=user_repository
    )
    role_service = providers.Factory(
        RoleService,
        role_repository=role_repository
    )
    dept_service = providers.Factory(
        DeptService,
        dept_repository=dept_repository
    )
    menu_service = providers.Factory(
        MenuService,
        menu_repository=menu_repository
    )

    # 5. 模块扫描：API端点模块
    wiring_config = containers.WiringConfiguration(
        modules=[
            "app.api.v1.endpoints.i18n_modules",
            "app.api.v1.endpoints.i18n",
            "app.api.v1.endpoints.users",
            "app.api.v1.endpoints.roles",
            "app.api.v1.endpoints.depts",
            "app.api.v1.endpoints.menus",
            "app.api.deps"
        ]
    )
