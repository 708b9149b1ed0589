"""
字段映射工具 - 处理前后端字段名转换
backend/app/utils/field_mapper.py
数据库层保持snake_case，API层接收和返回camelCase
"""
from typing import Any, Callable, Dict, List, Union
import re

import inflection


class FieldMapper:
    """
    字段映射器

    1. 数据库层：snake_case
    2. API层：camelCase
    """

    def to_snake_case(self, text: str) -> str:
        """camelCase/PascalCase 转换为 snake_case"""
        if not text:
            return text
        # 处理连续大写（如HTMLParser -> html_parser）
        s1 = re.sub('(.)([A-Z][a-z]+)', r'\1_\2', text)
        # 处理单个大写字母（如userId -> user_id）
        s2 = re.sub('([a-z0-9])([A-Z])', r'\1_\2', s1)
        return s2.lower()

    def to_camel_case(self, text: str, first_upper: bool = False) -> str:
        """snake_case 转换为 camelCase（first_upper=True 时为 PascalCase）"""
        if not text:
            return text
        return inflection.camelize(text, uppercase_first_letter=first_upper)

    def _convert_keys(
            self,
            data: Any,
            conversion_func: Callable[[str], str],
            depth: int = 0,
            max_depth: int = 32
    ) -> Any:
        """递归转换字典键名，树形结构深度受max_depth限制"""
        if depth > max_depth:
            raise RecursionError(f"Maximum recursion depth ({max_depth}) exceeded")

        if isinstance(data, dict):
            return {
                conversion_func(key) if isinstance(key, str) else key:
                    self._convert_keys(value, conversion_func, depth + 1, max_depth)
                for key, value in data.items()
            }
        if isinstance(data, list):
            return [self._convert_keys(item, conversion_func, depth + 1, max_depth) for item in data]
        return data

    def backend_to_frontend(self, data: Union[Dict, List]) -> Union[Dict, List]:
        """后端数据转换为前端格式（snake_case -> camelCase）"""
        return self._convert_keys(data, self.to_camel_case)

    def frontend_to_backend(self, data: Union[Dict, List]) -> Union[Dict, List]:
        """前端数据转换为后端格式（camelCase -> snake_case）"""
        return self._convert_keys(data, self.to_snake_case)


# 全局实例
default_mapper = FieldMapper()
