# app/api/v1/endpoints/depts.py
"""
部门管理API
"""
import uuid
from typing import Any, Optional

from dependency_injector.wiring import inject
from fastapi import APIRouter, Query

from app.api.deps import DeptServiceDep, PaginationDep
from app.schemas.pagination import BatchDeleteRequest
from app.schemas.responses import ApiResponse
from app.schemas.sys_dept import DeptCreate, DeptOut, DeptUpdate
from app.utils.field_mapper import default_mapper

router = APIRouter(prefix="/depts", tags=["部门管理"])


@router.get("/tree", response_model=ApiResponse, summary="部门树")
@inject
async def get_dept_tree(
        dept_service: DeptServiceDep,
        status: Optional[int] = Query(None, description="状态过滤"),
) -> Any:
    tree = await dept_service.get_tree(status=status)
    return ApiResponse.success(data=default_mapper.backend_to_frontend(tree))


@router.get("", response_model=ApiResponse, summary="部门分页列表")
@inject
async def list_depts(
        query: PaginationDep,
        dept_service: DeptServiceDep,
        status: Optional[int] = Query(None, description="状态过滤"),
) -> Any:
    page = await dept_service.list(query, status=status)
    return ApiResponse.success(data=page.to_response(DeptOut))


@router.get("/{dept_id}", response_model=ApiResponse, summary="部门详情")
@inject
async def get_dept(dept_id: uuid.UUID, dept_service: DeptServiceDep) -> Any:
    dept = await dept_service.get_or_raise(dept_id)
    return ApiResponse.success(data=DeptOut.serialize(dept))


@router.post("", response_model=ApiResponse, summary="创建部门")
@inject
async def create_dept(dept_in: DeptCreate, dept_service: DeptServiceDep) -> Any:
    dept = await dept_service.create(dept_in.model_dump())
    return ApiResponse.success(data=DeptOut.serialize(dept), msg="创建成功")


@router.put("/{dept_id}", response_model=ApiResponse, summary="更新部门")
@inject
async def update_dept(dept_id: uuid.UUID, dept_in: DeptUpdate, dept_service: DeptServiceDep) -> Any:
    dept = await dept_service.update(dept_id, dept_in.model_dump(exclude_unset=True))
    return ApiResponse.success(data=DeptOut.serialize(dept), msg="更新成功")


@router.delete("/{dept_id}", response_model=ApiResponse, summary="删除部门")
@inject
async def delete_dept(dept_id: uuid.UUID, dept_service: DeptServiceDep) -> Any:
    """存在子部门时不能删除"""
    await dept_service.delete(dept_id)
    return ApiResponse.success(msg="删除成功")


@router.post("/batch-delete", response_model=ApiResponse, summary="批量删除部门")
@inject
async def batch_delete_depts(body: BatchDeleteRequest, dept_service: DeptServiceDep) -> Any:
    await dept_service.batch_delete(body.ids)
    return ApiResponse.success(msg="批量删除成功")
