# app/repositories/i18n_module_repository.py
"""
多语言模块数据访问层
"""
from typing import Optional, Sequence
from uuid import UUID

from sqlmodel import delete
from sqlmodel.ext.asyncio.session import AsyncSession

from app.models import I18nEntry, I18nModule
from app.repositories.base_repository import BaseRepository


class I18nModuleRepository(BaseRepository[I18nModule]):
    model = I18nModule
    keyword_fields = ("code", "name", "description")

    async def get_by_code(self, code: str, session: Optional[AsyncSession] = None) -> Optional[I18nModule]:
        return await self.get_by_field("code", code, session=session)

    async def delete_by_ids(self, ids: Sequence[UUID], session: AsyncSession) -> int:
        """物理删除模块，同时删除其下词条（不依赖数据库级联）"""
        if not ids:
            return 0
        await session.execute(delete(I18nEntry).where(I18nEntry.module_id.in_(list(ids))))
        return await super().delete_by_ids(ids, session)
