"""
角色相关的Pydantic Schemas
backend/app/schemas/sys_role.py
"""
import uuid
from typing import List, Optional

from pydantic import Field

from app.schemas.base import BaseSchema, IDSchema, TimestampSchema


class RoleBase(BaseSchema):
    name: str = Field(..., min_length=1, max_length=50, description="角色名称", examples=["管理员"])
    code: str = Field(..., min_length=1, max_length=50, description="角色编码", examples=["admin"])
    description: Optional[str] = Field(None, max_length=255, description="角色描述")
    sort: int = Field(0, description="显示顺序")
    status: int = Field(1, ge=0, le=1, description="状态(1-正常 0-停用)")


class RoleCreate(RoleBase):
    menu_ids: Optional[List[uuid.UUID]] = Field(None, description="菜单ID列表")


class RoleUpdate(BaseSchema):
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    code: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = Field(None, max_length=255)
    sort: Optional[int] = None
    status: Optional[int] = Field(None, ge=0, le=1)
    menu_ids: Optional[List[uuid.UUID]] = None


class RoleOut(RoleBase, TimestampSchema, IDSchema):
    menu_ids: List[uuid.UUID] = Field(default_factory=list)


class RoleOption(IDSchema):
    name: str
    code: str


class RoleMenusUpdate(BaseSchema):
    menu_ids: List[uuid.UUID] = Field(default_factory=list)


class RoleCopy(BaseSchema):
    name: Optional[str] = Field(None, min_length=1, max_length=50, description="新角色名称")
