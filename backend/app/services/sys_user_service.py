"""
用户模块业务层
backend/app/services/sys_user_service.py
"""
import logging
from typing import Any, Dict, List, Optional, Sequence
from uuid import UUID

from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import settings
from app.core.exceptions import BadRequest, ValidationError
from app.core.security import generate_random_password, get_password_hash
from app.models import SysUser
from app.repositories.sys_user_repository import UserRepository
from app.services.base_service import CrudService, validate_ids

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class UserService(CrudService[SysUser]):
    """用户Service层：仅管业务逻辑，事务由Repo提供"""

    resource_name = "用户"
    unique_fields = {"username": "用户名已存在", "email": "邮箱已存在"}
    relation_fields = ("role_ids",)

    def __init__(self, user_repository: UserRepository):
        super().__init__(user_repository)
        self.user_repository = user_repository

    @staticmethod
    def is_admin(user: SysUser) -> bool:
        return user.has_role(settings.ADMIN_ROLE_CODE)

    # ------------------------------
    # 创建/更新前的数据加工
    # ------------------------------
    @staticmethod
    def _hash_password(data: Dict[str, Any]) -> Dict[str, Any]:
        password = data.get("password")
        if password is None:
            return data
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(detail=f"密码长度不能少于{MIN_PASSWORD_LENGTH}位")
        # 密码加密由Service层负责，Repo不碰密码逻辑
        return {**data, "password": get_password_hash(password)}

    async def _prepare_create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        if not data.get("password"):
            raise ValidationError(detail="密码不能为空")
        return self._hash_password(data)

    async def _prepare_update(self, entity: SysUser, data: Dict[str, Any]) -> Dict[str, Any]:
        if data.get("status") == 0 and self.is_admin(entity):
            raise BadRequest(detail="不能禁用管理员用户")
        if not data.get("password"):
            data = {k: v for k, v in data.items() if k != "password"}
        return self._hash_password(data)

    async def _apply_relations(self, entity: SysUser, relations: Dict[str, Any], session: AsyncSession) -> None:
        role_ids = relations.get("role_ids")
        if role_ids is not None:
            await self.user_repository.set_roles(entity, validate_ids(role_ids), session)

    # ------------------------------
    # 删除：管理员保护
    # ------------------------------
    async def _before_delete(self, entity: SysUser) -> None:
        if self.is_admin(entity):
            logger.warning(f"拒绝删除管理员用户：{entity.username}")
            raise BadRequest(detail="不能删除管理员用户")

    async def _filter_deletable(self, ids: List[UUID]) -> List[UUID]:
        users = await self.user_repository.get_by_ids(ids)
        admin_ids = {user.id for user in users if self.is_admin(user)}
        if admin_ids:
            logger.warning(f"批量删除跳过管理员用户：{sorted(str(i) for i in admin_ids)}")
        return [user_id for user_id in ids if user_id not in admin_ids]

    # ------------------------------
    # 扩展业务
    # ------------------------------
    async def update_status(self, user_id: UUID, status: int) -> SysUser:
        """启用/禁用用户（管理员不能禁用）"""
        if status not in (0, 1):
            raise ValidationError(detail="状态值只能为0或1")
        return await self.update(user_id, {"status": status})

    async def assign_roles(self, user_id: UUID, role_ids: Sequence[Any]) -> SysUser:
        """替换用户角色集合（不存在或已删除的角色忽略）"""
        return await self.update(user_id, {"role_ids": list(role_ids)})

    async def reset_password(self, user_id: UUID, password: Optional[str] = None) -> Dict[str, str]:
        """重置密码，未指定时生成8位随机密码；明文只在本次响应中返回"""
        plain = password or generate_random_password()
        await self.update(user_id, {"password": plain})
        logger.info(f"重置用户密码：id={user_id}")
        return {"password": plain}

    async def get_user_menu_ids(self, user_id: UUID) -> List[UUID]:
        """用户所有角色的菜单ID并集（保持首次出现顺序）"""
        user = await self.get_or_raise(user_id)
        menu_ids: List[UUID] = []
        for role in user.roles:
            if role.is_deleted or role.status != 1:
                continue
            for menu in role.menus:
                if not menu.is_deleted and menu.id not in menu_ids:
                    menu_ids.append(menu.id)
        return menu_ids
