"""
多语言词条相关的Pydantic Schemas
backend/app/schemas/i18n.py
"""
import uuid
from typing import Any, Dict, List, Optional

from pydantic import Field

from app.schemas.base import BaseSchema, IDSchema, TimestampSchema


class I18nValues(BaseSchema):
    zh_cn: Optional[str] = Field(None, description="中文（zh-CN）")
    en_us: Optional[str] = Field(None, description="英文（en-US）")
    ar_sa: Optional[str] = Field(None, description="阿拉伯文（ar-SA）")
    remark: Optional[str] = Field(None, max_length=255, description="备注")


class I18nCreate(I18nValues):
    module_id: uuid.UUID = Field(..., description="所属模块ID")
    key: str = Field(..., min_length=1, max_length=100, description="键名（模块内唯一）", examples=["btn.save"])


class I18nUpdate(I18nValues):
    # module_id 不可修改，传入时静默忽略
    module_id: Optional[uuid.UUID] = None
    key: Optional[str] = Field(None, min_length=1, max_length=100)


class I18nOut(I18nValues, TimestampSchema, IDSchema):
    module_id: uuid.UUID
    module_code: Optional[str] = None
    key: str


class I18nImportItem(I18nValues):
    module: str = Field(..., description="模块代码")
    key: str = Field(..., description="键名")


class I18nImportModule(BaseSchema):
    code: str
    name: Optional[str] = None
    description: Optional[str] = None


class I18nImportRequest(BaseSchema):
    """
    导入请求：items 为扁平词条；nested 为按语言分组的嵌套JSON（{"zh-CN": {...}}），两者可同时提供
    """
    items: List[I18nImportItem] = Field(default_factory=list)
    modules: List[I18nImportModule] = Field(default_factory=list)
    nested: Optional[Dict[str, Dict[str, Any]]] = None
    overwrite: bool = False


class I18nImportError(BaseSchema):
    module: Optional[str] = None
    key: Optional[str] = None
    error: str


class I18nImportResult(BaseSchema):
    created: int = 0
    updated: int = 0
    skipped: int = 0
    errors: List[I18nImportError] = Field(default_factory=list)
