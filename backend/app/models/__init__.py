"""
模型统一导出入口
作用：
1. 集中管理所有模型导入，避免散落在业务代码中的重复导入
2. 按SQLAlchemy依赖顺序导入（被依赖的底层模型在前）
3. 统一导出所有模型，简化业务层导入（如：from app.models import SysUser）

backend/app/models/__init__.py
"""
# 1. 基础依赖
from app.models.base import Base

# 2. 核心模型：底层 → 上层
from app.models.i18n_module import I18nModule
from app.models.i18n import I18nEntry, LOCALE_COLUMNS
from app.models.sys_dept import SysDept
from app.models.sys_menu import SysMenu
from app.models.sys_role import SysRole, sys_role_menu
from app.models.sys_user import SysUser, sys_user_role

__all__ = [
    'Base',
    'I18nModule',
    'I18nEntry',
    'LOCALE_COLUMNS',
    'SysDept',
    'SysMenu',
    'SysRole',
    'SysUser',
    # 中间表
    'sys_role_menu',
    'sys_user_role',
]
