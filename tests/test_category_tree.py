"""
Category tree assembly tests (no database).
"""
from modules.categories.tree import build_category_tree, flatten_tree


def test_nests_flat_list():
    flat = [
        {'id': 1, 'parent': None},
        {'id': 2, 'parent': 1},
        {'id': 3, 'parent': 1},
        {'id': 4, 'parent': 2},
    ]

    tree = build_category_tree(flat)

    assert len(tree) == 1
    root = tree[0]
    assert root['id'] == 1
    assert [child['id'] for child in root['children']] == [2, 3]
    assert [child['id'] for child in root['children'][0]['children']] == [4]
    assert root['children'][1]['children'] == []


def test_accepts_parent_id_and_nested_parent():
    flat = [
        {'id': 10, 'parent_id': None, 'name': 'Dental'},
        {'id': 11, 'parent': {'id': 10}, 'name': 'Endodontics'},
    ]
    tree = build_category_tree(flat)
    assert tree[0]['children'][0]['name'] == 'Endodontics'


def test_orphans_are_dropped():
    tree = build_category_tree([{'id': 1, 'parent': None}, {'id': 5, 'parent': 42}])
    assert [node['id'] for node in tree] == [1]


def test_input_is_not_mutated():
    flat = [{'id': 1, 'parent': None}]
    build_category_tree(flat)
    assert flat == [{'id': 1, 'parent': None}]


def test_flatten_is_depth_first():
    flat = [
        {'id': 1, 'parent': None},
        {'id': 2, 'parent': 1},
        {'id': 3, 'parent': None},
        {'id': 4, 'parent': 2},
    ]
    assert [node['id'] for node in flatten_tree(build_category_tree(flat))] == [1, 2, 4, 3]
