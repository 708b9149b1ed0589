"""
多语言模块接口文件
backend/app/api/v1/endpoints/i18n_modules.py
"""
import uuid
from typing import Any

from dependency_injector.wiring import inject
from fastapi import APIRouter

from app.api.deps import I18nModuleServiceDep, PaginationDep
from app.schemas.i18n_module import I18nModuleCreate, I18nModuleOption, I18nModuleOut, I18nModuleUpdate
from app.schemas.pagination import BatchDeleteRequest
from app.schemas.responses import ApiResponse

router = APIRouter(prefix="/i18n-modules", tags=["i18n-modules"])


@router.get("", response_model=ApiResponse, summary="多语言模块分页列表")
@inject
async def list_modules(query: PaginationDep, module_service: I18nModuleServiceDep) -> Any:
    """关键词匹配 code / name / description，按创建时间倒序"""
    page = await module_service.list(query)
    return ApiResponse.success(data=page.to_response(I18nModuleOut))


@router.get("/options", response_model=ApiResponse, summary="多语言模块下拉选项")
@inject
async def list_module_options(module_service: I18nModuleServiceDep) -> Any:
    modules = await module_service.list_all()
    return ApiResponse.success(data=[I18nModuleOption.serialize(m) for m in modules])


@router.get("/{module_id}", response_model=ApiResponse, summary="多语言模块详情")
@inject
async def get_module(module_id: uuid.UUID, module_service: I18nModuleServiceDep) -> Any:
    module = await module_service.get_or_raise(module_id)
    return ApiResponse.success(data=I18nModuleOut.serialize(module))


@router.post("", response_model=ApiResponse, summary="创建多语言模块")
@inject
async def create_module(module_in: I18nModuleCreate, module_service: I18nModuleServiceDep) -> Any:
    module = await module_service.create(module_in.model_dump())
    return ApiResponse.success(data=I18nModuleOut.serialize(module), msg="创建成功")


@router.put("/{module_id}", response_model=ApiResponse, summary="更新多语言模块")
@inject
async def update_module(
        module_id: uuid.UUID,
        module_in: I18nModuleUpdate,
        module_service: I18nModuleServiceDep
) -> Any:
    """模块代码不可修改，传入的 code 会被忽略"""
    module = await module_service.update(module_id, module_in.model_dump(exclude_unset=True))
    return ApiResponse.success(data=I18nModuleOut.serialize(module), msg="更新成功")


@router.delete("/{module_id}", response_model=ApiResponse, summary="删除多语言模块（连同其词条）")
@inject
async def delete_module(module_id: uuid.UUID, module_service: I18nModuleServiceDep) -> Any:
    await module_service.delete(module_id)
    return ApiResponse.success(msg="删除成功")


@router.post("/batch-delete", response_model=ApiResponse, summary="批量删除多语言模块")
@inject
async def batch_delete_modules(body: BatchDeleteRequest, module_service: I18nModuleServiceDep) -> Any:
    await module_service.batch_delete(body.ids)
    return ApiResponse.success(msg="批量删除成功")
