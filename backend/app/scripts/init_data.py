"""
初始化基础数据（建表 + 管理员角色/用户 + 默认部门/菜单/多语言模块）
backend/app/scripts/init_data.py

执行方式：python -m app.scripts.init_data
已存在的数据跳过，可重复执行。
"""
import asyncio
import logging
import os
from typing import Any, Dict, List, Optional

from app.core.config import settings
from app.di.container import Container
from app.models import Base

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_PASSWORD = os.getenv("INIT_ADMIN_PASSWORD", "admin123")

I18N_MODULES: List[Dict[str, str]] = [
    {"code": "common", "name": "通用", "description": "通用文案（按钮、提示）"},
    {"code": "menu", "name": "菜单", "description": "菜单名称"},
    {"code": "system", "name": "系统管理", "description": "系统管理页面文案"},
]

# (名称, 多语言键, 路径, 图标, 类型, 排序, 父菜单名称)
MENUS = [
    ("系统管理", "menu.system", "/system", "SettingOutlined", 1, 1, None),
    ("用户管理", "menu.user", "/system/user", "UserOutlined", 2, 1, "系统管理"),
    ("角色管理", "menu.role", "/system/role", "TeamOutlined", 2, 2, "系统管理"),
    ("部门管理", "menu.dept", "/system/dept", "AppstoreOutlined", 2, 3, "系统管理"),
    ("菜单管理", "menu.menu", "/system/menu", "MenuOutlined", 2, 4, "系统管理"),
    ("多语言管理", "menu.i18n", "/system/i18n", "GlobalOutlined", 2, 5, "系统管理"),
]


async def create_tables(container: Container) -> None:
    engine = container.async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("数据表检查/创建完成")


async def init_i18n_modules(container: Container) -> int:
    service = container.i18n_module_service()
    added_count = 0
    for module in I18N_MODULES:
        if await service.get_by_unique_field("code", module["code"]) is None:
            await service.create(module)
            added_count += 1
    logger.info(f"多语言模块初始化完成，新增 {added_count} 条记录")
    return added_count


async def init_dept(container: Container) -> Optional[Any]:
    service = container.dept_service()
    dept = await service.get_by_unique_field("code", "HQ")
    if dept is None:
        dept = await service.create({"name": "总部", "code": "HQ", "sort": 1})
        logger.info("部门数据初始化完成，新增 1 条记录")
    return dept


async def init_menus(container: Container) -> List[Any]:
    service = container.menu_service()
    existing = {menu.path: menu for menu in await container.menu_repository().get_all_menus()}
    by_name: Dict[str, Any] = {}
    added_count = 0
    for name, name_i18n, path, icon, menu_type, sort, parent_name in MENUS:
        menu = existing.get(path)
        if menu is None:
            parent = by_name.get(parent_name) if parent_name else None
            menu = await service.create({
                "name": name,
                "name_i18n": name_i18n,
                "path": path,
                "icon": icon,
                "type": menu_type,
                "sort": sort,
                "parent_id": parent.id if parent else None,
            })
            added_count += 1
        by_name[name] = menu
    logger.info(f"菜单数据初始化完成，新增 {added_count} 条记录")
    return list(by_name.values())


async def init_admin(container: Container, menus: List[Any], dept: Optional[Any]) -> None:
    role_service = container.role_service()
    role = await role_service.get_by_unique_field("code", settings.ADMIN_ROLE_CODE)
    if role is None:
        role = await role_service.create({
            "name": "超级管理员",
            "code": settings.ADMIN_ROLE_CODE,
            "description": "拥有全部菜单权限",
            "menu_ids": [menu.id for menu in menus],
        })
        logger.info("管理员角色初始化完成")

    user_service = container.user_service()
    if await user_service.get_by_unique_field("username", "admin") is None:
        await user_service.create({
            "username": "admin",
            "nickname": "系统管理员",
            "password": DEFAULT_ADMIN_PASSWORD,
            "dept_id": dept.id if dept else None,
            "role_ids": [role.id],
        })
        logger.info("管理员用户初始化完成（用户名：admin）")


async def main() -> None:
    container = Container()
    try:
        await create_tables(container)
        await init_i18n_modules(container)
        dept = await init_dept(container)
        menus = await init_menus(container)
        await init_admin(container, menus, dept)
    finally:
        await container.async_engine().dispose()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(name)s | %(levelname)s | %(message)s")
    asyncio.run(main())
