"""
角色模块数据访问层
backend/app/repositories/sys_role_repository.py
"""
from typing import List, Sequence
from uuid import UUID

from sqlmodel import delete, select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.models import SysMenu, SysRole, sys_role_menu, sys_user_role
from app.repositories.base_repository import BaseRepository


class RoleRepository(BaseRepository[SysRole]):
    """角色Repo层：逻辑删除，名称/编码唯一性只在未删除记录中校验"""
    model = SysRole
    keyword_fields = ("name", "code", "description")
    equal_fields = ("status",)
    soft_delete = True

    async def get_options(self) -> List[SysRole]:
        """启用状态且未删除的角色"""
        return await self.list_all(SysRole.sort, SysRole.created_at.desc(), status=1)

    async def set_menus(self, role: SysRole, menu_ids: Sequence[UUID], session: AsyncSession) -> SysRole:
        """替换角色菜单（仅保留存在且未删除的菜单）"""
        menus: List[SysMenu] = []
        if menu_ids:
            stmt = select(SysMenu).where(SysMenu.id.in_(list(menu_ids)), SysMenu.is_deleted == 0)
            menus = list((await session.execute(stmt)).scalars().all())
        role.menus = menus
        await session.flush()
        return role

    async def delete_by_ids(self, ids: Sequence[UUID], session: AsyncSession) -> int:
        """逻辑删除角色，并解除其与用户、菜单的关联"""
        if not ids:
            return 0
        affected = await super().delete_by_ids(ids, session)
        await session.execute(delete(sys_user_role).where(sys_user_role.c.role_id.in_(list(ids))))
        await session.execute(delete(sys_role_menu).where(sys_role_menu.c.role_id.in_(list(ids))))
        return affected
