# app/repositories/i18n_repository.py
"""
多语言词条数据访问层
"""
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.models import I18nEntry, I18nModule
from app.repositories.base_repository import BaseRepository


class I18nRepository(BaseRepository[I18nEntry]):
    model = I18nEntry
    keyword_fields = ("key", "zh_cn", "en_us", "ar_sa")
    equal_fields = ("module_id",)

    async def get_by_module_and_key(
            self,
            module_id: UUID,
            key: str,
            exclude_id: Optional[UUID] = None,
            session: Optional[AsyncSession] = None,
    ) -> Optional[I18nEntry]:
        """(module_id, key) 组合唯一键查询"""
        return await self.get_by_field(
            "key", key, exclude_id=exclude_id, scope={"module_id": module_id}, session=session
        )

    async def list_with_module_codes(self) -> List[Tuple[I18nEntry, Optional[str]]]:
        """全部词条及所属模块代码（导出用）"""
        async with self.transaction() as session:
            stmt = (
                select(I18nEntry, I18nModule.code)
                .outerjoin(I18nModule, I18nEntry.module_id == I18nModule.id)
                .order_by(I18nModule.code, I18nEntry.key)
            )
            result = await session.execute(stmt)
            return [(row[0], row[1]) for row in result.all()]

    async def map_by_module_and_key(self, session: AsyncSession) -> Dict[Tuple[UUID, str], I18nEntry]:
        """导入时按 (module_id, key) 建立索引"""
        result = await session.execute(select(I18nEntry))
        return {(entry.module_id, entry.key): entry for entry in result.scalars().all()}
