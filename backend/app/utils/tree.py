"""
邻接表 → 树形结构
backend/app/utils/tree.py
"""
from typing import Any, Callable, Dict, List, Optional, Sequence


def build_tree(
        nodes: Sequence[Any],
        to_dict: Callable[[Any], Dict[str, Any]],
        sort_key: Optional[Callable[[Any], Any]] = None,
) -> List[Dict[str, Any]]:
    """
    扁平节点列表组装为树

    :param nodes: 带 id / parent_id 属性的节点（ORM对象）
    :param to_dict: 单个节点的序列化函数
    :param sort_key: 同级排序，默认按 sort 字段
    :return: 根节点列表，每个节点带 children（叶子为空列表）

    父节点不在列表中（已删除或不存在）的节点提升为根节点。
    """
    if sort_key is None:
        sort_key = lambda node: getattr(node, "sort", 0) or 0  # noqa: E731

    ordered = sorted(nodes, key=sort_key)
    node_map: Dict[Any, Dict[str, Any]] = {}
    for node in ordered:
        item = to_dict(node)
        item["children"] = []
        node_map[node.id] = item

    roots: List[Dict[str, Any]] = []
    for node in ordered:
        item = node_map[node.id]
        parent = node_map.get(node.parent_id) if node.parent_id is not None else None
        if parent is None or node.parent_id == node.id:
            roots.append(item)
        else:
            parent["children"].append(item)
    return roots


def collect_ancestor_ids(node_id: Any, parent_of: Dict[Any, Any]) -> List[Any]:
    """沿 parent 链向上收集祖先ID（遇到环时停止）"""
    ancestors: List[Any] = []
    current = parent_of.get(node_id)
    while current is not None and current not in ancestors and current != node_id:
        ancestors.append(current)
        current = parent_of.get(current)
    return ancestors


def has_cycle(node_id: Any, parent_of: Dict[Any, Any]) -> bool:
    """沿 parent 链向上能否回到自身"""
    seen = set()
    current = parent_of.get(node_id)
    while current is not None and current not in seen:
        if current == node_id:
            return True
        seen.add(current)
        current = parent_of.get(current)
    return False
