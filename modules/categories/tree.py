"""
Category tree assembly over a flat list of records.
"""
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional


def _node_dict(record) -> Dict[str, Any]:
    if isinstance(record, Mapping):
        return dict(record)
    if hasattr(record, 'to_tree_dict'):
        return record.to_tree_dict()
    return {k: v for k, v in vars(record).items() if not k.startswith('_')}


def _record_id(record):
    if isinstance(record, Mapping):
        return record.get('id')
    return getattr(record, 'id', None)


def _parent_id(record) -> Optional[Any]:
    """Parent reference of a record, accepting ``parent_id`` or ``parent``."""
    if isinstance(record, Mapping):
        parent = record.get('parent_id', record.get('parent'))
    else:
        parent = getattr(record, 'parent_id', None)
    if isinstance(parent, Mapping):
        return parent.get('id')
    return getattr(parent, 'id', parent)


def build_category_tree(categories: Iterable) -> List[Dict[str, Any]]:
    """Nest a flat category list into a forest.

    Roots are the records without a parent. Every node is a dict copy of
    its record with a ``children`` list (empty for leaves). Sibling order
    follows the input order. Records whose parent is not in the list are
    dropped.
    """
    records = list(categories)

    def build(parent_id) -> List[Dict[str, Any]]:
        nodes = []
        for record in records:
            if _parent_id(record) != parent_id:
                continue
            node = _node_dict(record)
            node['children'] = build(_record_id(record))
            nodes.append(node)
        return nodes

    return build(None)


def flatten_tree(tree: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Depth-first list of nodes without their ``children``."""
    flat = []
    for node in tree:
        flat.append({k: v for k, v in node.items() if k != 'children'})
        flat.extend(flatten_tree(node.get('children', [])))
    return flat
