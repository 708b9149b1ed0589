# 功能：统一导出所有Schema模型，对外提供一致的导入入口
# 文件相对项目根目录路径：backend/app/schemas/__init__.py
from app.schemas.base import BaseSchema, TimestampSchema, IDSchema
from app.schemas.pagination import PaginationQuery, BatchDeleteRequest, Page
from app.schemas.responses import ApiResponse, ErrorResponse, ResponseCode
from app.schemas.i18n_module import (
    I18nModuleCreate, I18nModuleUpdate, I18nModuleOut, I18nModuleOption
)
from app.schemas.i18n import (
    I18nCreate, I18nUpdate, I18nOut, I18nImportItem, I18nImportModule,
    I18nImportRequest, I18nImportResult
)
from app.schemas.sys_user import (
    UserCreate, UserUpdate, UserOut, UserStatusUpdate, UserRolesUpdate, PasswordReset
)
from app.schemas.sys_role import (
    RoleCreate, RoleUpdate, RoleOut, RoleOption, RoleMenusUpdate, RoleCopy
)
from app.schemas.sys_dept import DeptCreate, DeptUpdate, DeptOut
from app.schemas.sys_menu import (
    MenuCreate, MenuUpdate, MenuOut, MenuSortItem, MenuSortRequest, MenuCopy
)

__all__ = [
    # Base
    'BaseSchema', 'TimestampSchema', 'IDSchema',
    'PaginationQuery', 'BatchDeleteRequest', 'Page',
    'ApiResponse', 'ErrorResponse', 'ResponseCode',

    # I18n
    'I18nModuleCreate', 'I18nModuleUpdate', 'I18nModuleOut', 'I18nModuleOption',
    'I18nCreate', 'I18nUpdate', 'I18nOut', 'I18nImportItem', 'I18nImportModule',
    'I18nImportRequest', 'I18nImportResult',

    # User
    'UserCreate', 'UserUpdate', 'UserOut', 'UserStatusUpdate', 'UserRolesUpdate', 'PasswordReset',

    # Role
    'RoleCreate', 'RoleUpdate', 'RoleOut', 'RoleOption', 'RoleMenusUpdate', 'RoleCopy',

    # Dept / Menu
    'DeptCreate', 'DeptUpdate', 'DeptOut',
    'MenuCreate', 'MenuUpdate', 'MenuOut', 'MenuSortItem', 'MenuSortRequest', 'MenuCopy',
]
