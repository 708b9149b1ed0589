"""
菜单模块接口文件
backend/app/api/v1/endpoints/menus.py
"""
import uuid
from typing import Any, Optional

from dependency_injector.wiring import inject
from fastapi import APIRouter, Query

from app.api.deps import MenuServiceDep, PaginationDep
from app.schemas.pagination import BatchDeleteRequest
from app.schemas.responses import ApiResponse
from app.schemas.sys_menu import MenuCopy, MenuCreate, MenuOut, MenuSortRequest, MenuUpdate
from app.utils.field_mapper import default_mapper

router = APIRouter(prefix="/menus", tags=["menus"])


@router.get("/tree", response_model=ApiResponse, summary="菜单树")
@inject
async def get_menu_tree(menu_service: MenuServiceDep) -> Any:
    tree = await menu_service.get_tree()
    return ApiResponse.success(data=default_mapper.backend_to_frontend(tree))


@router.get("/icons", response_model=ApiResponse, summary="可选菜单图标")
@inject
async def get_menu_icons(menu_service: MenuServiceDep) -> Any:
    return ApiResponse.success(data=menu_service.get_icons())


@router.put("/sort", response_model=ApiResponse, summary="调整菜单排序")
@inject
async def update_menu_sort(body: MenuSortRequest, menu_service: MenuServiceDep) -> Any:
    await menu_service.update_sort([item.model_dump(exclude_unset=True) for item in body.menus])
    return ApiResponse.success(msg="排序更新成功")


# ============ 基础CRUD操作 ============
@router.get("", response_model=ApiResponse, summary="菜单分页列表")
@inject
async def list_menus(
        query: PaginationDep,
        menu_service: MenuServiceDep,
        type: Optional[int] = Query(None, description="菜单类型"),
        status: Optional[int] = Query(None, description="状态"),
) -> Any:
    page = await menu_service.list(query, type=type, status=status)
    return ApiResponse.success(data=page.to_response(MenuOut))


@router.get("/{menu_id}", response_model=ApiResponse, summary="菜单详情")
@inject
async def get_menu(menu_id: uuid.UUID, menu_service: MenuServiceDep) -> Any:
    menu = await menu_service.get_or_raise(menu_id)
    return ApiResponse.success(data=MenuOut.serialize(menu))


@router.post("", response_model=ApiResponse, summary="创建菜单")
@inject
async def create_menu(menu_in: MenuCreate, menu_service: MenuServiceDep) -> Any:
    menu = await menu_service.create(menu_in.model_dump())
    return ApiResponse.success(data=MenuOut.serialize(menu), msg="创建成功")


@router.put("/{menu_id}", response_model=ApiResponse, summary="更新菜单")
@inject
async def update_menu(menu_id: uuid.UUID, menu_in: MenuUpdate, menu_service: MenuServiceDep) -> Any:
    menu = await menu_service.update(menu_id, menu_in.model_dump(exclude_unset=True))
    return ApiResponse.success(data=MenuOut.serialize(menu), msg="更新成功")


@router.delete("/{menu_id}", response_model=ApiResponse, summary="删除菜单（含子菜单）")
@inject
async def delete_menu(menu_id: uuid.UUID, menu_service: MenuServiceDep) -> Any:
    await menu_service.delete(menu_id)
    return ApiResponse.success(msg="删除成功")


@router.post("/batch-delete", response_model=ApiResponse, summary="批量删除菜单（含子菜单）")
@inject
async def batch_delete_menus(body: BatchDeleteRequest, menu_service: MenuServiceDep) -> Any:
    await menu_service.batch_delete(body.ids)
    return ApiResponse.success(msg="批量删除成功")


@router.post("/{menu_id}/copy", response_model=ApiResponse, summary="复制菜单")
@inject
async def copy_menu(menu_id: uuid.UUID, menu_service: MenuServiceDep, body: Optional[MenuCopy] = None) -> Any:
    menu = await menu_service.copy_menu(menu_id, body.parent_id if body else None)
    return ApiResponse.success(data=MenuOut.serialize(menu), msg="复制成功")
