"""
通用分页资源服务层
backend/app/services/base_service.py

每种资源（多语言模块、多语言词条、用户、角色、部门、菜单）实例化一次：
1. list：关键词多字段模糊匹配 + created_at 倒序 + 分页前总数，越界页返回空列表
2. create / update：唯一字段先查后写，数据库唯一约束冲突同样转换为 ConflictError
3. update：仅合并传入字段，不可变字段静默忽略
4. delete：不存在抛 NotFoundError；batch_delete 对不存在的ID宽容处理
"""
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, FrozenSet, Generic, Iterable, List, Optional, Sequence, Tuple, TypeVar
from uuid import UUID

import pydantic
from sqlalchemy.exc import IntegrityError
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import settings
from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.repositories.base_repository import BaseRepository
from app.schemas.pagination import Page, PaginationQuery

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


# ====================== 入参校验（在访问存储之前执行） ======================
def build_pagination_query(
        page: Optional[int] = None,
        page_size: Optional[int] = None,
        keyword: Optional[str] = None,
        default_page_size: Optional[int] = None,
) -> PaginationQuery:
    """构造分页参数，缺省值补齐，非法值抛 ValidationError"""
    try:
        return PaginationQuery(
            page=1 if page is None else page,
            page_size=(default_page_size or settings.DEFAULT_PAGE_SIZE) if page_size is None else page_size,
            keyword=keyword.strip() if keyword and keyword.strip() else None,
        )
    except pydantic.ValidationError as e:
        raise ValidationError(detail=f"分页参数不合法：page、pageSize 必须为正整数（{e.error_count()}处错误）")


def validate_ids(ids: Iterable[Any]) -> List[UUID]:
    """校验ID集合，返回去重后的UUID列表"""
    result: List[UUID] = []
    for raw in ids:
        try:
            value = raw if isinstance(raw, UUID) else UUID(str(raw))
        except (TypeError, ValueError):
            raise ValidationError(detail=f"无效的ID：{raw}")
        if value not in result:
            result.append(value)
    return result


class CrudService(Generic[ModelT]):
    """
    通用CRUD服务

    子类配置：
    - resource_name：资源中文名，用于默认提示语
    - unique_fields：{字段: 冲突提示}
    - immutable_fields：更新时静默忽略的字段
    - relation_fields：不直接落库、交由 _apply_relations 处理的字段（如 role_ids）
    """

    resource_name: str = "资源"
    unique_fields: Dict[str, str] = {}
    immutable_fields: FrozenSet[str] = frozenset()
    relation_fields: Tuple[str, ...] = ()
    default_page_size: Optional[int] = None

    _ALWAYS_IMMUTABLE = frozenset({"id", "created_at", "updated_at", "is_deleted"})

    def __init__(self, repository: BaseRepository[ModelT]):
        self.repository = repository

    @property
    def not_found_message(self) -> str:
        return f"{self.resource_name}不存在"

    @property
    def conflict_message(self) -> str:
        return f"{self.resource_name}已存在"

    # ------------------------------
    # 查询
    # ------------------------------
    async def list(self, query: Optional[PaginationQuery] = None, **filters: Any) -> Page:
        """分页列表：skip=(page-1)*pageSize，total 为分页前总数"""
        if query is None:
            query = build_pagination_query(default_page_size=self.default_page_size)
        items, total = await self.repository.paginate(
            offset=query.offset,
            limit=query.page_size,
            keyword=query.keyword,
            **{key: value for key, value in filters.items() if value is not None},
        )
        return Page(items=items, total=total, page=query.page, page_size=query.page_size)

    async def get_by_id(self, entity_id: UUID) -> Optional[ModelT]:
        """未命中返回None，由调用方决定如何处理"""
        return await self.repository.get_by_id(entity_id)

    async def get_or_raise(self, entity_id: UUID) -> ModelT:
        entity = await self.repository.get_by_id(entity_id)
        if entity is None:
            raise NotFoundError(detail=self.not_found_message)
        return entity

    async def get_by_unique_field(self, field_name: str, value: Any) -> Optional[ModelT]:
        return await self.repository.get_by_field(field_name, value)

    # ------------------------------
    # 写操作
    # ------------------------------
    @asynccontextmanager
    async def _write(self) -> AsyncGenerator[AsyncSession, None]:
        """写事务：数据库唯一约束冲突转换为 ConflictError"""
        try:
            async with self.repository.transaction() as session:
                yield session
        except IntegrityError as e:
            logger.warning(f"{self.resource_name}写入违反唯一约束：{e.orig}")
            raise ConflictError(detail=self.conflict_message) from e

    async def _check_unique(self, data: Dict[str, Any], current: Optional[ModelT] = None) -> None:
        """创建/重命名前的唯一性预检查（非原子，数据库约束兜底）"""
        for field_name, message in self.unique_fields.items():
            value = data.get(field_name)
            if value is None:
                continue
            if current is not None and getattr(current, field_name) == value:
                continue
            existing = await self.repository.get_by_field(
                field_name, value, exclude_id=current.id if current is not None else None
            )
            if existing is not None:
                logger.warning(f"{self.resource_name}唯一字段冲突：{field_name}={value}")
                raise ConflictError(detail=message)

    def _split_relations(self, data: Dict[str, Any]) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        columns = {k: v for k, v in data.items() if k not in self.relation_fields}
        relations = {k: v for k, v in data.items() if k in self.relation_fields}
        return columns, relations

    async def _prepare_create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """创建前的业务校验/数据加工，子类按需覆盖"""
        return data

    async def _prepare_update(self, entity: ModelT, data: Dict[str, Any]) -> Dict[str, Any]:
        """更新前的业务校验/数据加工，子类按需覆盖"""
        return data

    async def _apply_relations(self, entity: ModelT, relations: Dict[str, Any], session: AsyncSession) -> None:
        """处理关联字段（多对多等），子类按需覆盖"""

    async def create(self, data: Dict[str, Any]) -> ModelT:
        data = {k: v for k, v in data.items() if k not in self._ALWAYS_IMMUTABLE}
        await self._check_unique(data)
        data = await self._prepare_create(data)
        columns, relations = self._split_relations(data)

        async with self._write() as session:
            entity = await self.repository.create(columns, session)
            if relations:
                await self._apply_relations(entity, relations, session)
                await session.refresh(entity)

        logger.info(f"创建{self.resource_name}成功：id={entity.id}")
        return entity

    async def update(self, entity_id: UUID, data: Dict[str, Any]) -> ModelT:
        entity = await self.get_or_raise(entity_id)

        ignored = set(data) & (self.immutable_fields | self._ALWAYS_IMMUTABLE)
        if ignored:
            logger.info(f"更新{self.resource_name}时忽略不可变字段：{sorted(ignored)}")
        data = {k: v for k, v in data.items() if k not in ignored}

        await self._check_unique(data, current=entity)
        data = await self._prepare_update(entity, data)
        columns, relations = self._split_relations(data)

        async with self._write() as session:
            updated = await self.repository.update(entity_id, columns, session)
            if updated is None:
                raise NotFoundError(detail=self.not_found_message)
            if relations:
                await self._apply_relations(updated, relations, session)
                await session.refresh(updated)

        logger.info(f"更新{self.resource_name}成功：id={entity_id}，字段={sorted(data)}")
        return updated

    async def _before_delete(self, entity: ModelT) -> None:
        """删除前的业务校验，子类按需覆盖"""

    async def _filter_deletable(self, ids: List[UUID]) -> List[UUID]:
        """批量删除时过滤不可删除的ID，子类按需覆盖"""
        return ids

    async def delete(self, entity_id: UUID) -> None:
        entity = await self.get_or_raise(entity_id)
        await self._before_delete(entity)

        async with self._write() as session:
            affected = await self.repository.delete_by_ids([entity_id], session)
            if not affected:
                raise NotFoundError(detail=self.not_found_message)

        logger.info(f"删除{self.resource_name}成功：id={entity_id}")

    async def batch_delete(self, ids: Sequence[Any]) -> None:
        """批量删除：存在的删除，不存在的忽略"""
        id_list = await self._filter_deletable(validate_ids(ids))
        if not id_list:
            return

        async with self._write() as session:
            affected = await self.repository.delete_by_ids(id_list, session)

        logger.info(f"批量删除{self.resource_name}：请求{len(id_list)}条，实际删除{affected}条")
