"""
多语言词条接口文件
backend/app/api/v1/endpoints/i18n.py
"""
import uuid
from typing import Any, Optional

from dependency_injector.wiring import inject
from fastapi import APIRouter, Query

from app.api.deps import I18nServiceDep, TranslationPaginationDep
from app.schemas.i18n import I18nCreate, I18nImportRequest, I18nImportResult, I18nOut, I18nUpdate
from app.schemas.pagination import BatchDeleteRequest
from app.schemas.responses import ApiResponse

router = APIRouter(prefix="/i18n", tags=["i18n"])


@router.get("", response_model=ApiResponse, summary="多语言词条分页列表")
@inject
async def list_entries(
        query: TranslationPaginationDep,
        i18n_service: I18nServiceDep,
        module_id: Optional[uuid.UUID] = Query(None, alias="moduleId", description="所属模块ID"),
) -> Any:
    """关键词匹配 key 和三种语言的译文"""
    page = await i18n_service.list(query, module_id=module_id)
    return ApiResponse.success(data=page.to_response(I18nOut))


@router.get("/translations", response_model=ApiResponse, summary="全部翻译（按语言分组）")
@inject
async def get_all_translations(i18n_service: I18nServiceDep) -> Any:
    # 键为 "模块代码.键名"，不做驼峰转换
    return ApiResponse.success(data=await i18n_service.get_all_translations())


@router.get("/export/{locale}", response_model=ApiResponse, summary="导出单个语言的嵌套JSON")
@inject
async def export_locale(locale: str, i18n_service: I18nServiceDep) -> Any:
    return ApiResponse.success(data=await i18n_service.export_nested(locale))


@router.post("/import", response_model=ApiResponse, summary="批量导入多语言词条")
@inject
async def import_entries(body: I18nImportRequest, i18n_service: I18nServiceDep) -> Any:
    """
    items：扁平词条 [{module, key, zhCn, enUs, arSa}]
    nested：按语言分组的嵌套JSON {"zh-CN": {...}, "en-US": {...}}
    """
    result = I18nImportResult()
    if body.items or body.modules:
        result = I18nImportResult.model_validate(await i18n_service.import_data(
            [item.model_dump() for item in body.items],
            modules=[module.model_dump() for module in body.modules],
            overwrite=body.overwrite,
        ))
    if body.nested:
        nested = I18nImportResult.model_validate(
            await i18n_service.import_nested(body.nested, overwrite=body.overwrite)
        )
        result = I18nImportResult(
            created=result.created + nested.created,
            updated=result.updated + nested.updated,
            skipped=result.skipped + nested.skipped,
            errors=result.errors + nested.errors,
        )
    return ApiResponse.success(data=result.model_dump(by_alias=True), msg="导入完成")


@router.get("/{entry_id}", response_model=ApiResponse, summary="多语言词条详情")
@inject
async def get_entry(entry_id: uuid.UUID, i18n_service: I18nServiceDep) -> Any:
    entry = await i18n_service.get_or_raise(entry_id)
    return ApiResponse.success(data=I18nOut.serialize(entry))


@router.post("", response_model=ApiResponse, summary="创建多语言词条")
@inject
async def create_entry(entry_in: I18nCreate, i18n_service: I18nServiceDep) -> Any:
    entry = await i18n_service.create(entry_in.model_dump())
    return ApiResponse.success(data=I18nOut.serialize(entry), msg="创建成功")


@router.put("/{entry_id}", response_model=ApiResponse, summary="更新多语言词条")
@inject
async def update_entry(entry_id: uuid.UUID, entry_in: I18nUpdate, i18n_service: I18nServiceDep) -> Any:
    """所属模块不可修改，传入的 moduleId 会被忽略"""
    entry = await i18n_service.update(entry_id, entry_in.model_dump(exclude_unset=True))
    return ApiResponse.success(data=I18nOut.serialize(entry), msg="更新成功")


@router.delete("/{entry_id}", response_model=ApiResponse, summary="删除多语言词条")
@inject
async def delete_entry(entry_id: uuid.UUID, i18n_service: I18nServiceDep) -> Any:
    await i18n_service.delete(entry_id)
    return ApiResponse.success(msg="删除成功")


@router.post("/batch-delete", response_model=ApiResponse, summary="批量删除多语言词条")
@inject
async def batch_delete_entries(body: BatchDeleteRequest, i18n_service: I18nServiceDep) -> Any:
    await i18n_service.batch_delete(body.ids)
    return ApiResponse.success(msg="批量删除成功")
