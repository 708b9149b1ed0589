# app/schemas/sys_dept.py
from typing import Optional
from uuid import UUID

from pydantic import Field

from app.schemas.base import BaseSchema, IDSchema, TimestampSchema


class DeptBase(BaseSchema):
    """部门基础模型"""
    name: str = Field(..., min_length=1, max_length=50)
    code: Optional[str] = Field(None, max_length=50)
    parent_id: Optional[UUID] = None
    leader: Optional[str] = Field(None, max_length=50)
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[str] = Field(None, max_length=100)
    sort: int = 0
    status: int = Field(1, ge=0, le=1)


class DeptCreate(DeptBase):
    """部门创建模型"""
    pass


class DeptUpdate(BaseSchema):
    """部门更新模型"""
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    code: Optional[str] = Field(None, max_length=50)
    parent_id: Optional[UUID] = None
    leader: Optional[str] = Field(None, max_length=50)
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[str] = Field(None, max_length=100)
    sort: Optional[int] = None
    status: Optional[int] = Field(None, ge=0, le=1)


class DeptOut(DeptBase, TimestampSchema, IDSchema):
    """部门输出模型"""
