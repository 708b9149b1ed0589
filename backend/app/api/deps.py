"""
API 依赖项配置文件
backend/app/api/deps.py
"""
from typing import Annotated, Optional

from dependency_injector.wiring import Provide
from fastapi import Depends, Query

from app.core.config import settings
from app.di.container import Container
from app.schemas.pagination import PaginationQuery
from app.services.base_service import build_pagination_query
from app.services.i18n_module_service import I18nModuleService
from app.services.i18n_service import I18nService
from app.services.sys_dept_service import DeptService
from app.services.sys_menu_service import MenuService
from app.services.sys_role_service import RoleService
from app.services.sys_user_service import UserService


# ------------------------------
# 分页参数依赖：非法值在访问存储前抛 ValidationError
# ------------------------------
def get_pagination(
        page: Optional[int] = Query(None, description="页码，从1开始"),
        page_size: Optional[int] = Query(None, alias="pageSize", description="每页数量"),
        keyword: Optional[str] = Query(None, description="关键词"),
) -> PaginationQuery:
    return build_pagination_query(page, page_size, keyword)


def get_translation_pagination(
        page: Optional[int] = Query(None, description="页码，从1开始"),
        page_size: Optional[int] = Query(None, alias="pageSize", description="每页数量，默认50"),
        keyword: Optional[str] = Query(None, description="关键词"),
) -> PaginationQuery:
    return build_pagination_query(page, page_size, keyword, default_page_size=settings.TRANSLATION_PAGE_SIZE)


PaginationDep = Annotated[PaginationQuery, Depends(get_pagination)]
TranslationPaginationDep = Annotated[PaginationQuery, Depends(get_translation_pagination)]

# 依赖类型注解（简化写法）
I18nModuleServiceDep = Annotated[I18nModuleService, Depends(Provide[Container.i18n_module_service])]
I18nServiceDep = Annotated[I18nService, Depends(Provide[Container.i18n_service])]
UserServiceDep = Annotated[UserService, Depends(Provide[Container.user_service])]
RoleServiceDep = Annotated[RoleService, Depends(Provide[Container.role_service])]
DeptServiceDep = Annotated[DeptService, Depends(Provide[Container.dept_service])]
MenuServiceDep = Annotated[MenuService, Depends(Provide[Container.menu_service])]
