"""
角色模块业务层
backend/app/services/sys_role_service.py
"""
import logging
import time
from typing import Any, Dict, List, Optional, Sequence
from uuid import UUID

from sqlmodel.ext.asyncio.session import AsyncSession

from app.models import SysMenu, SysRole
from app.repositories.sys_role_repository import RoleRepository
from app.services.base_service import CrudService, validate_ids

logger = logging.getLogger(__name__)


class RoleService(CrudService[SysRole]):
    """角色服务：名称、编码唯一（仅未删除角色），逻辑删除"""

    resource_name = "角色"
    unique_fields = {"name": "角色名称已存在", "code": "角色编码已存在"}
    relation_fields = ("menu_ids",)

    def __init__(self, role_repository: RoleRepository):
        super().__init__(role_repository)
        self.role_repository = role_repository

    async def _apply_relations(self, entity: SysRole, relations: Dict[str, Any], session: AsyncSession) -> None:
        menu_ids = relations.get("menu_ids")
        if menu_ids is not None:
            await self.role_repository.set_menus(entity, validate_ids(menu_ids), session)

    async def list_options(self) -> List[SysRole]:
        """启用状态的角色（下拉选项）"""
        return await self.role_repository.get_options()

    async def assign_menus(self, role_id: UUID, menu_ids: Sequence[Any]) -> SysRole:
        """替换角色菜单集合"""
        return await self.update(role_id, {"menu_ids": list(menu_ids)})

    async def get_role_menus(self, role_id: UUID) -> List[SysMenu]:
        role = await self.get_or_raise(role_id)
        menus = [menu for menu in role.menus if not menu.is_deleted]
        return sorted(menus, key=lambda menu: (menu.sort or 0, menu.created_at))

    async def copy_role(self, role_id: UUID, name: Optional[str] = None) -> SysRole:
        """
        复制角色（含菜单权限）
        名称默认 "{原名称}(副本)"，编码为 "{原编码}_copy_{毫秒时间戳}"
        """
        source = await self.get_or_raise(role_id)
        data = {
            "name": name or f"{source.name}(副本)",
            "code": f"{source.code}_copy_{int(time.time() * 1000)}",
            "description": source.description,
            "sort": source.sort,
            "status": source.status,
            "menu_ids": source.menu_ids,
        }
        role = await self.create(data)
        logger.info(f"复制角色：{source.code} -> {role.code}")
        return role
