"""
多语言模块相关的Pydantic Schemas
backend/app/schemas/i18n_module.py
"""
from typing import Optional

from pydantic import Field

from app.schemas.base import BaseSchema, IDSchema, TimestampSchema


class I18nModuleBase(BaseSchema):
    name: str = Field(..., min_length=1, max_length=100, description="模块名称", examples=["通用"])
    description: Optional[str] = Field(None, max_length=255, description="模块描述")
    remark: Optional[str] = Field(None, max_length=255, description="备注")


class I18nModuleCreate(I18nModuleBase):
    code: str = Field(
        ..., min_length=1, max_length=50, pattern=r"^[A-Za-z][A-Za-z0-9_\-]*$",
        description="模块代码（创建后不可修改）", examples=["common"]
    )


class I18nModuleUpdate(BaseSchema):
    # code 不可修改，传入时静默忽略
    code: Optional[str] = None
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=255)
    remark: Optional[str] = Field(None, max_length=255)


class I18nModuleOut(I18nModuleBase, TimestampSchema, IDSchema):
    code: str


class I18nModuleOption(IDSchema):
    code: str
    name: str
