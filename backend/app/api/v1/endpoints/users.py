"""
用户模块接口文件
backend/app/api/v1/endpoints/users.py
"""
import uuid
from typing import Any, Optional

from dependency_injector.wiring import inject
from fastapi import APIRouter, Query

from app.api.deps import PaginationDep, UserServiceDep
from app.schemas.pagination import BatchDeleteRequest
from app.schemas.responses import ApiResponse
from app.schemas.sys_user import PasswordReset, UserCreate, UserOut, UserRolesUpdate, UserStatusUpdate, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])


# ============ 基础CRUD操作 ============
@router.get("", response_model=ApiResponse, summary="用户分页列表")
@inject
async def list_users(
        query: PaginationDep,
        user_service: UserServiceDep,
        status: Optional[int] = Query(None, description="状态(1-正常 0-禁用)"),
        dept_id: Optional[uuid.UUID] = Query(None, alias="deptId", description="部门ID"),
) -> Any:
    """
    获取用户列表
    关键词匹配 username / nickname / email / phone，按创建时间倒序
    """
    page = await user_service.list(query, status=status, dept_id=dept_id)
    return ApiResponse.success(data=page.to_response(UserOut))


@router.get("/{user_id}", response_model=ApiResponse, summary="用户详情")
@inject
async def get_user(user_id: uuid.UUID, user_service: UserServiceDep) -> Any:
    user = await user_service.get_or_raise(user_id)
    return ApiResponse.success(data=UserOut.serialize(user))


@router.post("", response_model=ApiResponse, summary="创建用户")
@inject
async def create_user(user_in: UserCreate, user_service: UserServiceDep) -> Any:
    user = await user_service.create(user_in.model_dump(exclude_none=True))
    return ApiResponse.success(data=UserOut.serialize(user), msg="创建成功")


@router.put("/{user_id}", response_model=ApiResponse, summary="更新用户")
@inject
async def update_user(user_id: uuid.UUID, user_in: UserUpdate, user_service: UserServiceDep) -> Any:
    user = await user_service.update(user_id, user_in.model_dump(exclude_unset=True))
    return ApiResponse.success(data=UserOut.serialize(user), msg="更新成功")


@router.delete("/{user_id}", response_model=ApiResponse, summary="删除用户")
@inject
async def delete_user(user_id: uuid.UUID, user_service: UserServiceDep) -> Any:
    """管理员用户不能删除"""
    await user_service.delete(user_id)
    return ApiResponse.success(msg="删除成功")


@router.post("/batch-delete", response_model=ApiResponse, summary="批量删除用户")
@inject
async def batch_delete_users(body: BatchDeleteRequest, user_service: UserServiceDep) -> Any:
    """管理员用户自动跳过"""
    await user_service.batch_delete(body.ids)
    return ApiResponse.success(msg="批量删除成功")


# ============ 扩展操作 ============
@router.put("/{user_id}/status", response_model=ApiResponse, summary="启用/禁用用户")
@inject
async def update_user_status(user_id: uuid.UUID, body: UserStatusUpdate, user_service: UserServiceDep) -> Any:
    user = await user_service.update_status(user_id, body.status)
    return ApiResponse.success(data=UserOut.serialize(user), msg="状态更新成功")


@router.put("/{user_id}/roles", response_model=ApiResponse, summary="分配用户角色")
@inject
async def assign_user_roles(user_id: uuid.UUID, body: UserRolesUpdate, user_service: UserServiceDep) -> Any:
    user = await user_service.assign_roles(user_id, body.role_ids)
    return ApiResponse.success(data=UserOut.serialize(user), msg="角色分配成功")


@router.post("/{user_id}/reset-password", response_model=ApiResponse, summary="重置用户密码")
@inject
async def reset_user_password(
        user_id: uuid.UUID,
        user_service: UserServiceDep,
        body: Optional[PasswordReset] = None,
) -> Any:
    result = await user_service.reset_password(user_id, body.password if body else None)
    return ApiResponse.success(data=result, msg="密码重置成功")


@router.get("/{user_id}/menus", response_model=ApiResponse, summary="用户可访问的菜单ID")
@inject
async def get_user_menus(user_id: uuid.UUID, user_service: UserServiceDep) -> Any:
    menu_ids = await user_service.get_user_menu_ids(user_id)
    return ApiResponse.success(data=[str(menu_id) for menu_id in menu_ids])
