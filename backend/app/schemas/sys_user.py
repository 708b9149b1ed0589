"""
用户相关的Pydantic Schemas
backend/app/schemas/sys_user.py
"""
import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field

from app.schemas.base import BaseSchema, IDSchema, TimestampSchema


class UserBase(BaseSchema):
    username: str = Field(..., min_length=1, max_length=50, description="用户名", examples=["admin"])
    nickname: Optional[str] = Field(None, max_length=50, description="昵称")
    email: Optional[EmailStr] = Field(None, description="邮箱")
    phone: Optional[str] = Field(None, max_length=20, description="联系方式")
    avatar: Optional[str] = Field(None, max_length=255, description="头像")
    gender: int = Field(0, ge=0, le=2, description="性别(1-男 2-女 0-保密)")
    status: int = Field(1, ge=0, le=1, description="状态(1-正常 0-禁用)")
    dept_id: Optional[uuid.UUID] = Field(None, description="部门ID")


class UserCreate(UserBase):
    password: str = Field(..., min_length=6, max_length=128, description="密码")
    role_ids: Optional[List[uuid.UUID]] = Field(None, description="角色ID列表")


class UserUpdate(BaseSchema):
    username: Optional[str] = Field(None, min_length=1, max_length=50)
    nickname: Optional[str] = Field(None, max_length=50)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=20)
    avatar: Optional[str] = Field(None, max_length=255)
    gender: Optional[int] = Field(None, ge=0, le=2)
    status: Optional[int] = Field(None, ge=0, le=1)
    dept_id: Optional[uuid.UUID] = None
    password: Optional[str] = Field(None, min_length=6, max_length=128)
    role_ids: Optional[List[uuid.UUID]] = None


class UserRoleBrief(IDSchema):
    name: str
    code: str


class UserOut(UserBase, TimestampSchema, IDSchema):
    """用户输出（不含密码）"""
    email: Optional[str] = None
    last_login_at: Optional[datetime] = None
    roles: List[UserRoleBrief] = Field(default_factory=list)


class UserStatusUpdate(BaseSchema):
    status: int = Field(..., ge=0, le=1)


class UserRolesUpdate(BaseSchema):
    role_ids: List[uuid.UUID] = Field(default_factory=list)


class PasswordReset(BaseSchema):
    password: Optional[str] = Field(None, min_length=6, max_length=128, description="新密码，不传则随机生成")
