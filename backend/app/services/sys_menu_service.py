"""
菜单模块业务层
backend/app/services/sys_menu_service.py
"""
import logging
from typing import Any, Dict, List, Optional, Sequence
from uuid import UUID

from app.core.exceptions import BadRequest, NotFoundError, ValidationError
from app.enums.menu_icons import MenuIcon
from app.models import SysMenu
from app.repositories.sys_menu_repository import MenuRepository
from app.services.base_service import CrudService, validate_ids
from app.utils.tree import build_tree, collect_ancestor_ids, has_cycle

logger = logging.getLogger(__name__)

MENU_TYPES = (1, 2, 3)


class MenuService(CrudService[SysMenu]):
    """菜单服务：逻辑删除时连同全部子菜单一起删除"""

    resource_name = "菜单"

    def __init__(self, menu_repository: MenuRepository):
        super().__init__(menu_repository)
        self.menu_repository = menu_repository

    # ------------------------------
    # 校验
    # ------------------------------
    @staticmethod
    def _check_fields(data: Dict[str, Any]) -> None:
        icon = data.get("icon")
        if icon and not MenuIcon.is_valid(icon):
            raise ValidationError(detail=f"无效的菜单图标：{icon}")
        menu_type = data.get("type")
        if menu_type is not None and menu_type not in MENU_TYPES:
            raise ValidationError(detail="菜单类型只能为1（目录）、2（菜单）、3（按钮）")

    async def _check_parent(self, parent_id: Optional[UUID], menu_id: Optional[UUID] = None) -> None:
        if parent_id is None:
            return
        if menu_id is not None and parent_id == menu_id:
            raise BadRequest(detail="上级菜单不能是自身")
        if await self.menu_repository.get_by_id(parent_id) is None:
            raise NotFoundError(detail="上级菜单不存在")
        if menu_id is not None:
            menus = await self.menu_repository.get_all_menus()
            parent_of = {menu.id: menu.parent_id for menu in menus}
            if menu_id in collect_ancestor_ids(parent_id, parent_of):
                raise BadRequest(detail="上级菜单不能是当前菜单的子菜单")

    async def _prepare_create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        self._check_fields(data)
        await self._check_parent(data.get("parent_id"))
        return data

    async def _prepare_update(self, entity: SysMenu, data: Dict[str, Any]) -> Dict[str, Any]:
        self._check_fields(data)
        if "parent_id" in data and data["parent_id"] != entity.parent_id:
            await self._check_parent(data["parent_id"], entity.id)
        return data

    # ------------------------------
    # 扩展业务
    # ------------------------------
    async def get_tree(self) -> List[Dict[str, Any]]:
        menus = await self.menu_repository.get_all_menus()
        return build_tree(menus, self._to_node)

    async def update_sort(self, items: Sequence[Dict[str, Any]]) -> None:
        """
        批量调整排序和上级菜单：[{id, sort, parent_id}]
        上级菜单按整批调整后的结果校验存在性和环路，任一项不合法则整批不生效
        """
        parsed = [(validate_ids([item["id"]])[0], item) for item in items]
        ids = [menu_id for menu_id, _ in parsed]
        if len(set(ids)) != len(ids):
            raise ValidationError(detail="排序列表中存在重复的菜单ID")

        menus = await self.menu_repository.get_all_menus()
        parent_of = {menu.id: menu.parent_id for menu in menus}
        for menu_id, item in parsed:
            if menu_id not in parent_of:
                raise NotFoundError(detail=self.not_found_message)
            if "parent_id" not in item or item["parent_id"] == parent_of[menu_id]:
                continue
            parent_id = item["parent_id"]
            if parent_id is not None:
                if parent_id == menu_id:
                    raise BadRequest(detail="上级菜单不能是自身")
                if parent_id not in parent_of:
                    raise NotFoundError(detail="上级菜单不存在")
            parent_of[menu_id] = parent_id
        for menu_id in ids:
            if has_cycle(menu_id, parent_of):
                raise BadRequest(detail="上级菜单不能是当前菜单的子菜单")

        async with self._write() as session:
            for menu_id, item in parsed:
                data = {"sort": item.get("sort", 0)}
                if "parent_id" in item:
                    data["parent_id"] = item["parent_id"]
                if await self.menu_repository.update(menu_id, data, session) is None:
                    raise NotFoundError(detail=self.not_found_message)
        logger.info(f"调整菜单排序：{len(ids)}项")

    async def copy_menu(self, menu_id: UUID, parent_id: Optional[UUID] = None) -> SysMenu:
        """复制单个菜单（不含子菜单），名称追加"(副本)"，未指定上级时沿用原上级"""
        source = await self.get_or_raise(menu_id)
        data = {
            column: getattr(source, column)
            for column in (
                "name_i18n", "path", "component", "redirect", "icon", "type",
                "permission", "sort", "visible", "status", "is_external", "is_cache",
            )
        }
        data["name"] = f"{source.name}(副本)"
        data["parent_id"] = parent_id if parent_id is not None else source.parent_id
        return await self.create(data)

    @staticmethod
    def get_icons() -> List[Dict[str, str]]:
        return [icon.to_dict() for icon in MenuIcon]

    @staticmethod
    def _to_node(menu: SysMenu) -> Dict[str, Any]:
        return {
            "id": menu.id,
            "parent_id": menu.parent_id,
            "name": menu.name,
            "name_i18n": menu.name_i18n,
            "path": menu.path,
            "component": menu.component,
            "redirect": menu.redirect,
            "icon": menu.icon,
            "type": menu.type,
            "permission": menu.permission,
            "sort": menu.sort,
            "visible": menu.visible,
            "status": menu.status,
            "is_external": menu.is_external,
            "is_cache": menu.is_cache,
        }
