# app/repositories/sys_menu_repository.py
"""
菜单模块数据访问层
"""
from typing import List, Sequence, Set
from uuid import UUID

from sqlmodel import delete, select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.models import SysMenu, sys_role_menu
from app.repositories.base_repository import BaseRepository


class MenuRepository(BaseRepository[SysMenu]):
    model = SysMenu
    keyword_fields = ("name", "path", "permission")
    equal_fields = ("type", "status", "parent_id")
    soft_delete = True

    async def get_all_menus(self) -> List[SysMenu]:
        """获取所有未删除菜单（按排序字段）"""
        return await self.list_all(SysMenu.sort, SysMenu.created_at)

    async def collect_descendant_ids(self, root_ids: Sequence[UUID], session: AsyncSession) -> Set[UUID]:
        """收集根节点及其全部后代的ID（逐层向下查询）"""
        collected: Set[UUID] = set()
        frontier = [menu_id for menu_id in root_ids]
        while frontier:
            collected.update(frontier)
            stmt = select(SysMenu.id).where(
                SysMenu.parent_id.in_(frontier),
                SysMenu.is_deleted == 0
            )
            result = await session.execute(stmt)
            frontier = [menu_id for menu_id in result.scalars().all() if menu_id not in collected]
        return collected

    async def delete_by_ids(self, ids: Sequence[UUID], session: AsyncSession) -> int:
        """逻辑删除菜单（含全部子菜单），并解除角色关联"""
        if not ids:
            return 0
        all_ids = await self.collect_descendant_ids(ids, session)
        affected = await super().delete_by_ids(list(all_ids), session)
        await session.execute(delete(sys_role_menu).where(sys_role_menu.c.menu_id.in_(list(all_ids))))
        return affected
