"""
多语言JSON解析工具（i18next 兼容的嵌套JSON ↔ 扁平 module/key 记录）
backend/app/utils/json_parser.py
"""
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple


def flatten_json(data: Mapping[str, Any]) -> List[Dict[str, str]]:
    """
    嵌套JSON → 扁平记录列表

    路径第一段作为 module，其余段用"."拼接作为 key；
    只有一段时 module 和 key 相同。叶子值统一转为字符串。

    >>> flatten_json({"common": {"btn": {"save": "保存"}}})
    [{'module': 'common', 'key': 'btn.save', 'value': '保存'}]
    """
    result: List[Dict[str, str]] = []

    def _flatten(node: Mapping[str, Any], parent_key: str = "") -> None:
        for key, value in node.items():
            full_key = f"{parent_key}.{key}" if parent_key else key
            if isinstance(value, Mapping):
                _flatten(value, full_key)
            else:
                module, _, rest = full_key.partition(".")
                result.append({
                    "module": module,
                    "key": rest or key,
                    "value": str(value),
                })

    _flatten(data)
    return result


def set_nested_value(target: Dict[str, Any], path: str, value: Any) -> None:
    keys = path.split(".")
    current = target
    for key in keys[:-1]:
        if not isinstance(current.get(key), dict):
            current[key] = {}
        current = current[key]
    current[keys[-1]] = value


def get_nested_value(source: Mapping[str, Any], path: str) -> Optional[Any]:
    current: Any = source
    for key in path.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def unflatten_json(items: Iterable[Tuple[str, str, Any]]) -> Dict[str, Any]:
    """(module, key, value) 记录 → 嵌套JSON"""
    result: Dict[str, Any] = {}
    for module, key, value in items:
        set_nested_value(result, f"{module}.{key}", value)
    return result


def validate_json(data: Any) -> bool:
    """校验嵌套JSON：必须是对象，所有叶子节点为字符串或数字"""
    if not isinstance(data, Mapping):
        return False

    def _validate_node(node: Any) -> bool:
        if isinstance(node, bool):
            return False
        if isinstance(node, (str, int, float)):
            return True
        if isinstance(node, Mapping):
            return all(_validate_node(v) for v in node.values())
        return False

    return all(_validate_node(v) for v in data.values())
