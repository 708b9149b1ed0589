"""
测试查询构建器
"""
import pytest
from sqlalchemy import select

from app.core.query_builder import (
    KEYWORD_STRATEGY, EqualFilter, MultiFieldKeywordFilter, create_resource_query_builder
)
from app.models import I18nModule, SysUser


def _sql(query) -> str:
    return str(query.compile(compile_kwargs={"literal_binds": True}))


def test_query_builder_basic():
    """测试资源查询构建器的策略注册"""
    builder = create_resource_query_builder(SysUser, ("username", "nickname"), ("status", "dept_id"))

    assert isinstance(builder.strategies["status__eq"], EqualFilter)
    assert isinstance(builder.strategies["dept_id__eq"], EqualFilter)
    assert isinstance(builder.strategies[KEYWORD_STRATEGY], MultiFieldKeywordFilter)
    assert "username__eq" not in builder.strategies


def test_multi_field_keyword_filter():
    """测试多字段关键词搜索：各字段 OR 组合"""
    builder = create_resource_query_builder(I18nModule, ("code", "name", "description"))
    builder.filter(**{KEYWORD_STRATEGY: "common"})

    sql = _sql(builder.build(select(I18nModule)))

    assert "i18n_modules.code" in sql
    assert "i18n_modules.description" in sql
    assert " OR " in sql
    assert "%common%" in sql


def test_empty_values_are_ignored():
    """测试空值过滤条件被忽略"""
    builder = create_resource_query_builder(SysUser, ("username",), ("status",))
    builder.filter(**{KEYWORD_STRATEGY: None}, status__eq="")

    assert builder.conditions == []
    assert "WHERE" not in _sql(builder.build(select(SysUser)))


def test_unknown_field_rejected():
    """测试注册不存在的字段"""
    with pytest.raises(AttributeError):
        create_resource_query_builder(SysUser, ("username",), ("not_a_column",))


def test_unregistered_condition_is_skipped():
    """测试未注册的条件不会生成SQL"""
    builder = create_resource_query_builder(SysUser, ("username",))
    builder.filter(password__eq="secret")

    assert "WHERE" not in _sql(builder.build(select(SysUser)))


def test_paginated_query_default_order():
    """测试分页查询：默认按创建时间倒序"""
    builder = create_resource_query_builder(SysUser, ("username",), ("status",))
    builder.filter(status__eq=1).paginate(offset=20, limit=10)

    sql = _sql(builder.build_paginated(select(SysUser)))

    assert "sys_user.status = 1" in sql
    assert "ORDER BY sys_user.created_at DESC" in sql
    assert "LIMIT 10" in sql
    assert "OFFSET 20" in sql


def test_keyword_wildcards_escaped():
    """测试关键词中的 % 和 _ 按字面匹配"""
    builder = create_resource_query_builder(SysUser, ("username",))
    builder.filter(**{KEYWORD_STRATEGY: "50%_off"})

    sql = _sql(builder.build(select(SysUser)))

    assert "%50/%/_off%" in sql
    assert "ESCAPE '/'" in sql
