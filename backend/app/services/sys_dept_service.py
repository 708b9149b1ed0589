# app/services/sys_dept_service.py
"""
部门服务层
"""
import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from app.core.exceptions import BadRequest, NotFoundError
from app.models import SysDept
from app.repositories.sys_dept_repository import DeptRepository
from app.services.base_service import CrudService
from app.utils.tree import build_tree, collect_ancestor_ids

logger = logging.getLogger(__name__)


class DeptService(CrudService[SysDept]):
    """
    部门服务
    - 邻接表存储（parent_id），树形结构由 build_tree 组装
    - 存在子部门时不允许删除
    """

    resource_name = "部门"
    unique_fields = {"code": "部门编码已存在"}

    def __init__(self, dept_repository: DeptRepository):
        super().__init__(dept_repository)
        self.dept_repository = dept_repository

    async def _check_parent(self, parent_id: Optional[UUID], dept_id: Optional[UUID] = None) -> None:
        if parent_id is None:
            return
        if dept_id is not None and parent_id == dept_id:
            raise BadRequest(detail="上级部门不能是自身")
        parent = await self.dept_repository.get_by_id(parent_id)
        if parent is None:
            raise NotFoundError(detail="上级部门不存在")
        if dept_id is None:
            return
        # 新的上级不能是自己的后代
        depts = await self.dept_repository.get_all_depts()
        parent_of = {dept.id: dept.parent_id for dept in depts}
        if dept_id in collect_ancestor_ids(parent_id, parent_of):
            raise BadRequest(detail="上级部门不能是当前部门的子部门")

    async def _prepare_create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        await self._check_parent(data.get("parent_id"))
        return data

    async def _prepare_update(self, entity: SysDept, data: Dict[str, Any]) -> Dict[str, Any]:
        if "parent_id" in data and data["parent_id"] != entity.parent_id:
            await self._check_parent(data["parent_id"], entity.id)
        return data

    async def _before_delete(self, entity: SysDept) -> None:
        if await self.dept_repository.check_has_children(entity.id):
            logger.warning(f"部门存在子部门，拒绝删除：{entity.name}")
            raise BadRequest(detail="存在子部门，无法删除")

    async def _filter_deletable(self, ids: List[UUID]) -> List[UUID]:
        """批量删除跳过仍有子部门（且子部门不在本批次内）的部门"""
        depts = await self.dept_repository.get_all_depts()
        requested = set(ids)
        blocked: set = set()
        while True:
            deletable = requested - blocked
            newly_blocked = {
                dept.parent_id for dept in depts
                if dept.parent_id in deletable and dept.id not in deletable
            }
            if not newly_blocked:
                break
            blocked |= newly_blocked
        if blocked:
            logger.warning(f"批量删除跳过存在子部门的部门：{sorted(str(i) for i in blocked)}")
        return [dept_id for dept_id in ids if dept_id not in blocked]

    async def get_tree(self, status: Optional[int] = None) -> List[Dict[str, Any]]:
        """部门树（按 sort 排序，父部门缺失的节点作为根节点）"""
        depts = await self.dept_repository.get_all_depts()
        if status is not None:
            depts = [dept for dept in depts if dept.status == status]
        return build_tree(depts, self._to_node)

    @staticmethod
    def _to_node(dept: SysDept) -> Dict[str, Any]:
        return {
            "id": dept.id,
            "parent_id": dept.parent_id,
            "name": dept.name,
            "code": dept.code,
            "leader": dept.leader,
            "phone": dept.phone,
            "email": dept.email,
            "sort": dept.sort,
            "status": dept.status,
            "created_at": dept.created_at,
        }
