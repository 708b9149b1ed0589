# app/repositories/base_repository.py
"""
通用数据访问层
- 事务上下文：begin → commit，异常时 rollback 并继续抛出，最终关闭会话
- 读操作自开事务；写操作使用 Service 传入的会话
- soft_delete=True 的资源所有查询自动排除 is_deleted=1 的记录
"""
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Generic, List, Optional, Sequence, Tuple, TypeVar
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.orm import sessionmaker
from sqlmodel import delete, func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.query_builder import KEYWORD_STRATEGY, create_resource_query_builder
from app.models.base import now

ModelT = TypeVar("ModelT")


class BaseRepository(Generic[ModelT]):
    """资源仓储基类，子类声明 model / keyword_fields / equal_fields / soft_delete"""

    model: Any = None
    keyword_fields: Tuple[str, ...] = ()
    equal_fields: Tuple[str, ...] = ()
    soft_delete: bool = False

    def __init__(self, async_session_factory: sessionmaker):
        self.async_session_factory = async_session_factory

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[AsyncSession, None]:
        """事务上下文管理器"""
        session: AsyncSession = self.async_session_factory()
        try:
            await session.begin()
            yield session
            await session.commit()
        except Exception as e:
            await session.rollback()
            raise e
        finally:
            await session.close()

    @asynccontextmanager
    async def _use_session(self, session: Optional[AsyncSession] = None) -> AsyncGenerator[AsyncSession, None]:
        """复用调用方会话，没有则新开事务"""
        if session is not None:
            yield session
        else:
            async with self.transaction() as new_session:
                yield new_session

    def _live(self, stmt):
        if self.soft_delete:
            stmt = stmt.where(self.model.is_deleted == 0)
        return stmt

    def _base_select(self):
        return self._live(select(self.model))

    # ------------------------------
    # 查询
    # ------------------------------
    async def get_by_id(self, entity_id: UUID, session: Optional[AsyncSession] = None) -> Optional[ModelT]:
        """根据ID获取未删除的记录"""
        async with self._use_session(session) as s:
            stmt = self._base_select().where(self.model.id == entity_id)
            result = await s.execute(stmt)
            return result.scalars().first()

    async def get_by_field(
            self,
            field_name: str,
            value: Any,
            exclude_id: Optional[UUID] = None,
            scope: Optional[Dict[str, Any]] = None,
            session: Optional[AsyncSession] = None,
    ) -> Optional[ModelT]:
        """按字段值查询（唯一性预检查用），scope 用于组合唯一键"""
        async with self._use_session(session) as s:
            stmt = self._base_select().where(getattr(self.model, field_name) == value)
            for scope_field, scope_value in (scope or {}).items():
                stmt = stmt.where(getattr(self.model, scope_field) == scope_value)
            if exclude_id is not None:
                stmt = stmt.where(self.model.id != exclude_id)
            result = await s.execute(stmt)
            return result.scalars().first()

    async def get_by_ids(self, ids: Sequence[UUID], session: Optional[AsyncSession] = None) -> List[ModelT]:
        if not ids:
            return []
        async with self._use_session(session) as s:
            stmt = self._base_select().where(self.model.id.in_(list(ids)))
            result = await s.execute(stmt)
            return list(result.scalars().all())

    async def list_all(self, *order_by, **filters) -> List[ModelT]:
        """不分页查询（树形结构、下拉选项用）"""
        async with self.transaction() as session:
            stmt = self._base_select()
            for field_name, value in filters.items():
                stmt = stmt.where(getattr(self.model, field_name) == value)
            if order_by:
                stmt = stmt.order_by(*order_by)
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def paginate(
            self,
            offset: int,
            limit: int,
            keyword: Optional[str] = None,
            **filters: Any,
    ) -> Tuple[List[ModelT], int]:
        """分页查询，返回（当前页数据，过滤后分页前的总数）"""
        builder = create_resource_query_builder(self.model, self.keyword_fields, self.equal_fields)
        builder.filter(**{KEYWORD_STRATEGY: keyword})
        builder.filter(**{f"{name}__eq": value for name, value in filters.items()})

        async with self.transaction() as session:
            filtered = builder.build(self._base_select())
            count_stmt = select(func.count()).select_from(filtered.subquery())
            total = (await session.execute(count_stmt)).scalar() or 0

            page_stmt = builder.paginate(offset, limit).build_paginated(self._base_select())
            result = await session.execute(page_stmt)
            return list(result.scalars().all()), total

    # ------------------------------
    # 写操作（需在事务内执行）
    # ------------------------------
    async def create(self, data: Dict[str, Any], session: AsyncSession) -> ModelT:
        entity = self.model(**data)
        session.add(entity)
        await session.flush()
        await session.refresh(entity)
        return entity

    async def update(self, entity_id: UUID, data: Dict[str, Any], session: AsyncSession) -> Optional[ModelT]:
        """在当前会话内查询并合并字段，不存在返回None"""
        entity = await self.get_by_id(entity_id, session=session)
        if entity is None:
            return None
        for key, value in data.items():
            setattr(entity, key, value)
        entity.updated_at = now()
        await session.flush()
        await session.refresh(entity)
        return entity

    async def delete_by_ids(self, ids: Sequence[UUID], session: AsyncSession) -> int:
        """按ID集合删除（逻辑删除或物理删除），不存在的ID忽略，返回受影响行数"""
        if not ids:
            return 0
        if self.soft_delete:
            stmt = (
                update(self.model)
                .where(self.model.id.in_(list(ids)), self.model.is_deleted == 0)
                .values(is_deleted=1, updated_at=now())
                .execution_options(synchronize_session=False)
            )
        else:
            stmt = delete(self.model).where(self.model.id.in_(list(ids)))
        result = await session.execute(stmt)
        return result.rowcount or 0
