"""
用户模块数据访问层
backend/app/repositories/sys_user_repository.py
"""
from typing import List, Optional, Sequence
from uuid import UUID

from sqlmodel import delete, select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.models import SysRole, SysUser, sys_user_role
from app.repositories.base_repository import BaseRepository


class UserRepository(BaseRepository[SysUser]):
    """
    用户Repo层：
    1. 角色集合通过 selectin 预加载，序列化时无需额外查询
    2. 纯DB操作，无业务逻辑
    """
    model = SysUser
    keyword_fields = ("username", "nickname", "email", "phone")
    equal_fields = ("status", "dept_id")

    async def get_by_username(self, username: str, exclude_id: Optional[UUID] = None) -> Optional[SysUser]:
        return await self.get_by_field("username", username, exclude_id=exclude_id)

    async def get_by_email(self, email: str, exclude_id: Optional[UUID] = None) -> Optional[SysUser]:
        return await self.get_by_field("email", email, exclude_id=exclude_id)

    async def set_roles(self, user: SysUser, role_ids: Sequence[UUID], session: AsyncSession) -> SysUser:
        """替换用户角色（仅保留存在且未删除的角色）"""
        roles: List[SysRole] = []
        if role_ids:
            stmt = select(SysRole).where(SysRole.id.in_(list(role_ids)), SysRole.is_deleted == 0)
            roles = list((await session.execute(stmt)).scalars().all())
        user.roles = roles
        await session.flush()
        return user

    async def delete_by_ids(self, ids: Sequence[UUID], session: AsyncSession) -> int:
        """物理删除用户，先清理用户角色关联"""
        if not ids:
            return 0
        await session.execute(delete(sys_user_role).where(sys_user_role.c.user_id.in_(list(ids))))
        return await super().delete_by_ids(ids, session)
