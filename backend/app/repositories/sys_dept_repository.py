# app/repositories/sys_dept_repository.py
"""
部门模块数据访问层
"""
from typing import List
from uuid import UUID

from sqlmodel import func, select

from app.models import SysDept
from app.repositories.base_repository import BaseRepository


class DeptRepository(BaseRepository[SysDept]):
    """
    部门仓储层（邻接表 + 逻辑删除）
    """
    model = SysDept
    keyword_fields = ("name", "code", "leader")
    equal_fields = ("status", "parent_id")
    soft_delete = True

    async def get_all_depts(self) -> List[SysDept]:
        """获取所有未删除部门（按显示顺序）"""
        return await self.list_all(SysDept.sort, SysDept.created_at)

    async def check_has_children(self, dept_id: UUID) -> bool:
        """检查部门是否有未删除的子部门"""
        async with self.transaction() as session:
            stmt = select(func.count(SysDept.id)).where(
                SysDept.parent_id == dept_id,
                SysDept.is_deleted == 0
            )
            result = await session.execute(stmt)
            count = result.scalar() or 0
            return count > 0
