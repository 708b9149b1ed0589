"""
高级查询构建器模块 - 策略模式实现
backend/app/core/query_builder.py
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional
from sqlalchemy.sql import Select
from sqlalchemy.orm import InstrumentedAttribute
from sqlalchemy import or_


# ==================== 策略基类 ====================
class BaseFilterStrategy(ABC):
    """过滤策略基类"""

    @abstractmethod
    def apply(self, query: Select, value: Any, **kwargs) -> Select:
        """应用过滤条件到查询"""
        pass

    def validate(self, value: Any) -> bool:
        """验证输入值是否有效"""
        return value is not None and value != ""


# ==================== 具体过滤策略 ====================
class EqualFilter(BaseFilterStrategy):
    """等于过滤"""

    def __init__(self, field: InstrumentedAttribute):
        self.field = field

    def apply(self, query: Select, value: Any, **kwargs) -> Select:
        return query.filter(self.field == value)


class MultiFieldKeywordFilter(BaseFilterStrategy):
    """多字段关键词搜索（各字段子串匹配，OR 组合；% 和 _ 按字面匹配）"""

    def __init__(self, fields: List[InstrumentedAttribute]):
        self.fields = fields

    def apply(self, query: Select, value: Any, **kwargs) -> Select:
        conditions = [field.ilike(f"%{value}%", autoescape=True) for field in self.fields]
        return query.filter(or_(*conditions))


# ==================== 查询构建器 ====================
class QueryBuilder:
    """高级查询构建器"""

    def __init__(self, model_class):
        self.model_class = model_class
        self.strategies: Dict[str, BaseFilterStrategy] = {}
        self.conditions: List[Dict[str, Any]] = []

    def register_strategy(self, name: str, strategy: BaseFilterStrategy) -> 'QueryBuilder':
        """注册过滤策略"""
        self.strategies[name] = strategy
        return self

    def auto_register_field_strategies(self, fields_config: Dict[str, Dict[str, Any]]) -> 'QueryBuilder':
        """自动注册字段策略"""
        for field_name, config in fields_config.items():
            if not hasattr(self.model_class, field_name):
                raise AttributeError(f"{self.model_class.__name__} 不存在字段 {field_name}")
            field = getattr(self.model_class, field_name)

            if config.get('allow_equal', True):
                self.register_strategy(f"{field_name}__eq", EqualFilter(field))

        return self

    def filter(self, **kwargs) -> 'QueryBuilder':
        """添加过滤条件（支持链式调用），空值忽略"""
        for key, value in kwargs.items():
            if value is not None and value != "":
                self.conditions.append({"key": key, "value": value})
        return self

    def build(self, base_query: Select) -> Select:
        """构建查询"""
        query = base_query

        for condition in self.conditions:
            key = condition["key"]
            value = condition["value"]

            if key in self.strategies:
                strategy = self.strategies[key]
                if strategy.validate(value):
                    query = strategy.apply(query, value)

        return query


# ==================== 分页查询构建器 ====================
class PaginatedQueryBuilder(QueryBuilder):
    """支持分页的查询构建器"""

    def __init__(self, model_class):
        super().__init__(model_class)
        self._offset = 0
        self._limit: Optional[int] = None
        self._order_by = []

    def paginate(self, offset: int = 0, limit: Optional[int] = None) -> 'PaginatedQueryBuilder':
        """设置分页参数"""
        self._offset = offset
        self._limit = limit
        return self

    def order_by(self, *fields) -> 'PaginatedQueryBuilder':
        """设置排序字段"""
        for field in fields:
            if isinstance(field, str):
                if hasattr(self.model_class, field):
                    self._order_by.append(getattr(self.model_class, field))
            else:
                self._order_by.append(field)
        return self

    def build_paginated(self, base_query: Select) -> Select:
        """构建分页查询"""
        query = self.build(base_query)

        if self._order_by:
            query = query.order_by(*self._order_by)

        if self._limit:
            query = query.limit(self._limit).offset(self._offset)

        return query


# ==================== 资源查询构建器工厂 ====================
KEYWORD_STRATEGY = "keyword"


def create_resource_query_builder(
        model_class,
        keyword_fields: Iterable[str],
        equal_fields: Iterable[str] = (),
) -> PaginatedQueryBuilder:
    """
    创建通用资源查询构建器

    - keyword：在 keyword_fields 上做子串匹配（OR 组合）
    - <field>__eq：等值过滤
    - 默认按 created_at 倒序（最新创建的在前）
    """
    builder = PaginatedQueryBuilder(model_class)

    builder.auto_register_field_strategies({
        field_name: {"allow_equal": True} for field_name in equal_fields
    })

    builder.register_strategy(
        KEYWORD_STRATEGY,
        MultiFieldKeywordFilter([getattr(model_class, name) for name in keyword_fields])
    )

    builder.order_by(model_class.created_at.desc())

    return builder
