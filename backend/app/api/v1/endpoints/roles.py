"""
角色模块接口文件
backend/app/api/v1/endpoints/roles.py
"""
import uuid
from typing import Any, Optional

from dependency_injector.wiring import inject
from fastapi import APIRouter, Query

from app.api.deps import PaginationDep, RoleServiceDep
from app.schemas.pagination import BatchDeleteRequest
from app.schemas.responses import ApiResponse
from app.schemas.sys_menu import MenuOut
from app.schemas.sys_role import RoleCopy, RoleCreate, RoleMenusUpdate, RoleOption, RoleOut, RoleUpdate

router = APIRouter(prefix="/roles", tags=["roles"])


@router.get("/options", response_model=ApiResponse, summary="角色下拉选项")
@inject
async def get_role_options(role_service: RoleServiceDep) -> Any:
    """仅返回启用状态的角色"""
    roles = await role_service.list_options()
    return ApiResponse.success(data=[RoleOption.serialize(role) for role in roles], msg="获取角色选项成功")


# ============ 基础CRUD操作 ============
@router.get("", response_model=ApiResponse, summary="角色分页列表")
@inject
async def list_roles(
        query: PaginationDep,
        role_service: RoleServiceDep,
        status: Optional[int] = Query(None, description="状态(1-正常 0-停用)"),
) -> Any:
    """默认排序：按创建时间降序"""
    page = await role_service.list(query, status=status)
    return ApiResponse.success(data=page.to_response(RoleOut))


@router.get("/{role_id}", response_model=ApiResponse, summary="角色详情")
@inject
async def get_role(role_id: uuid.UUID, role_service: RoleServiceDep) -> Any:
    role = await role_service.get_or_raise(role_id)
    return ApiResponse.success(data=RoleOut.serialize(role))


@router.post("", response_model=ApiResponse, summary="创建角色")
@inject
async def create_role(role_in: RoleCreate, role_service: RoleServiceDep) -> Any:
    role = await role_service.create(role_in.model_dump(exclude_none=True))
    return ApiResponse.success(data=RoleOut.serialize(role), msg="创建成功")


@router.put("/{role_id}", response_model=ApiResponse, summary="更新角色")
@inject
async def update_role(role_id: uuid.UUID, role_in: RoleUpdate, role_service: RoleServiceDep) -> Any:
    role = await role_service.update(role_id, role_in.model_dump(exclude_unset=True))
    return ApiResponse.success(data=RoleOut.serialize(role), msg="更新成功")


@router.delete("/{role_id}", response_model=ApiResponse, summary="删除角色")
@inject
async def delete_role(role_id: uuid.UUID, role_service: RoleServiceDep) -> Any:
    await role_service.delete(role_id)
    return ApiResponse.success(msg="删除成功")


@router.post("/batch-delete", response_model=ApiResponse, summary="批量删除角色")
@inject
async def batch_delete_roles(body: BatchDeleteRequest, role_service: RoleServiceDep) -> Any:
    await role_service.batch_delete(body.ids)
    return ApiResponse.success(msg="批量删除成功")


# ============ 菜单权限 ============
@router.get("/{role_id}/menus", response_model=ApiResponse, summary="角色菜单列表")
@inject
async def get_role_menus(role_id: uuid.UUID, role_service: RoleServiceDep) -> Any:
    menus = await role_service.get_role_menus(role_id)
    return ApiResponse.success(data=[MenuOut.serialize(menu) for menu in menus])


@router.put("/{role_id}/menus", response_model=ApiResponse, summary="分配角色菜单")
@inject
async def assign_role_menus(role_id: uuid.UUID, body: RoleMenusUpdate, role_service: RoleServiceDep) -> Any:
    role = await role_service.assign_menus(role_id, body.menu_ids)
    return ApiResponse.success(data=RoleOut.serialize(role), msg="菜单分配成功")


@router.post("/{role_id}/copy", response_model=ApiResponse, summary="复制角色")
@inject
async def copy_role(role_id: uuid.UUID, role_service: RoleServiceDep, body: Optional[RoleCopy] = None) -> Any:
    role = await role_service.copy_role(role_id, body.name if body else None)
    return ApiResponse.success(data=RoleOut.serialize(role), msg="复制成功")
