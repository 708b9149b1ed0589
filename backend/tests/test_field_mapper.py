"""
测试字段映射工具（snake_case ↔ camelCase）
"""
import pytest

from app.utils.field_mapper import default_mapper


class TestFieldMapper:

    @pytest.mark.parametrize("snake,camel", [
        ("page_size", "pageSize"),
        ("parent_id", "parentId"),
        ("created_at", "createdAt"),
        ("name_i18n", "nameI18n"),
        ("id", "id"),
    ])
    def test_case_conversion(self, snake, camel):
        assert default_mapper.to_camel_case(snake) == camel
        assert default_mapper.to_snake_case(camel) == snake

    def test_nested_tree_conversion(self):
        """树形结构的 children 递归转换"""
        tree = [{
            "parent_id": None,
            "is_cache": 0,
            "children": [{"parent_id": "1", "children": []}],
        }]

        result = default_mapper.backend_to_frontend(tree)

        assert result == [{
            "parentId": None,
            "isCache": 0,
            "children": [{"parentId": "1", "children": []}],
        }]
        assert default_mapper.frontend_to_backend(result) == tree

    def test_values_untouched(self):
        data = {"module_code": "user_profile"}
        assert default_mapper.backend_to_frontend(data) == {"moduleCode": "user_profile"}

    def test_max_depth(self):
        deep = current = {}
        for _ in range(40):
            current["child"] = {}
            current = current["child"]

        with pytest.raises(RecursionError):
            default_mapper.backend_to_frontend(deep)
