"""
菜单相关的Pydantic Schemas
backend/app/schemas/sys_menu.py
"""
import uuid
from typing import List, Optional

from pydantic import Field

from app.schemas.base import BaseSchema, IDSchema, TimestampSchema


class MenuBase(BaseSchema):
    parent_id: Optional[uuid.UUID] = Field(None, description="父菜单ID")
    name: str = Field(..., min_length=1, max_length=50, description="菜单名称")
    name_i18n: Optional[str] = Field(None, max_length=100, description="多语言键（module.key）")
    path: Optional[str] = Field(None, max_length=200)
    component: Optional[str] = Field(None, max_length=200)
    redirect: Optional[str] = Field(None, max_length=200)
    icon: Optional[str] = Field(None, max_length=50, description="图标名称（见 /menus/icons）")
    type: int = Field(2, description="菜单类型（1-目录 2-菜单 3-按钮）")
    permission: Optional[str] = Field(None, max_length=100)
    sort: int = 0
    visible: int = Field(1, ge=0, le=1)
    status: int = Field(1, ge=0, le=1)
    is_external: int = Field(0, ge=0, le=1)
    is_cache: int = Field(0, ge=0, le=1)


class MenuCreate(MenuBase):
    pass


class MenuUpdate(BaseSchema):
    parent_id: Optional[uuid.UUID] = None
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    name_i18n: Optional[str] = Field(None, max_length=100)
    path: Optional[str] = Field(None, max_length=200)
    component: Optional[str] = Field(None, max_length=200)
    redirect: Optional[str] = Field(None, max_length=200)
    icon: Optional[str] = Field(None, max_length=50)
    type: Optional[int] = None
    permission: Optional[str] = Field(None, max_length=100)
    sort: Optional[int] = None
    visible: Optional[int] = Field(None, ge=0, le=1)
    status: Optional[int] = Field(None, ge=0, le=1)
    is_external: Optional[int] = Field(None, ge=0, le=1)
    is_cache: Optional[int] = Field(None, ge=0, le=1)


class MenuOut(MenuBase, TimestampSchema, IDSchema):
    pass


class MenuSortItem(BaseSchema):
    id: uuid.UUID
    sort: int = 0
    parent_id: Optional[uuid.UUID] = None


class MenuSortRequest(BaseSchema):
    menus: List[MenuSortItem] = Field(..., min_length=1)


class MenuCopy(BaseSchema):
    parent_id: Optional[uuid.UUID] = None
