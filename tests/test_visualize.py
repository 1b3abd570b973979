import json

import pytest

from astcc.nodes import NodeType, create_leaf, create_node, node_type_name
from astcc.visualize import (
    ast_to_json,
    escape_dot_label,
    export_ast_to_json,
    generate_dot,
    node_color,
    write_dot_file,
)


def _tree():
    call = create_node(
        NodeType.FUNCTION_CALL,
        create_leaf(NodeType.IDENTIFIER, "printf"),
        create_leaf(NodeType.LITERAL, '"a<b>\n"'),
    )
    body = create_node(NodeType.COMPOUND_STMT, call, create_node(NodeType.RETURN, create_leaf(NodeType.NUMBER, "0")))
    return create_node(NodeType.TRANS, create_node(NodeType.FUNCTION_DEF, body))


def _flatten_json(item):
    rows = [(item["type"], item["value"], len(item["children"]))]
    for child in item["children"]:
        rows.extend(_flatten_json(child))
    return rows


def test_escape_dot_label():
    assert escape_dot_label('say "hi"') == 'say \\"hi\\"'
    assert escape_dot_label("a\nb") == "a\\nb"
    assert escape_dot_label("x<y>z") == "x&lt;y&gt;z"
    assert escape_dot_label("plain") == "plain"


@pytest.mark.parametrize(
    "node_type, color",
    [
        (NodeType.TRANS, "lightgreen"),
        (NodeType.FUNCTION_DEF, "orange"),
        (NodeType.BLOCK, "lightyellow"),
        (NodeType.ITERATION_STMT, "lightcoral"),
        (NodeType.DECLARATION, "lightgray"),
        (NodeType.IDENTIFIER, "lightcyan"),
        (NodeType.LITERAL, "lightpink"),
        (NodeType.FUNCTION_CALL, "gold"),
        (NodeType.RETURN, "thistle"),
        (NodeType.SWITCH, "lightblue"),
    ],
)
def test_node_color(node_type, color):
    assert node_color(node_type) == color


def test_generate_dot_structure():
    tree = _tree()
    dot = generate_dot(tree)
    assert dot.startswith("digraph AST {\n  rankdir=TB;\n")
    assert dot.endswith("}\n")
    node_count = len(list(tree.walk()))
    lines = dot.splitlines()
    assert sum(1 for line in lines if "[label=" in line) == node_count
    assert sum(1 for line in lines if " -> " in line) == node_count - 1


def test_generate_dot_ids_are_preorder():
    dot = generate_dot(_tree())
    assert '  node0 [label="TranslationUnit", shape=box, style=filled, fillcolor=lightgreen];' in dot
    assert "  node0 -> node1;" in dot
    assert "  node1 -> node2;" in dot


def test_generate_dot_escapes_values():
    dot = generate_dot(_tree())
    assert escape_dot_label('"a<b>\n"') in dot
    assert "Identifier\\n[printf]" in dot


def test_generate_dot_skips_none_children():
    tree = create_node(NodeType.LIST, None, create_leaf(NodeType.NUMBER, "1"))
    dot = generate_dot(tree)
    assert "  node0 -> node1;" in dot
    assert "node2" not in dot


def test_generate_dot_rejects_none():
    with pytest.raises(ValueError):
        generate_dot(None)


def test_write_dot_file(tmp_path):
    tree = _tree()
    target = tmp_path / "tree.dot"
    write_dot_file(tree, target)
    assert target.read_text(encoding="utf-8") == generate_dot(tree)


def test_ast_to_json_round_trip():
    tree = _tree()
    data = json.loads(ast_to_json(tree))
    expected = [(node_type_name(n.type), n.value, n.child_count) for n in tree.walk()]
    assert _flatten_json(data) == expected
    assert data["type"] == "TranslationUnit"


def test_ast_to_json_leaf_and_null_child():
    leaf_text = ast_to_json(create_leaf(NodeType.NUMBER, "7"))
    assert leaf_text.endswith('"children": []\n}')
    data = json.loads(ast_to_json(create_node(NodeType.LIST, None)))
    assert data["children"] == [None]
    assert ast_to_json(None) == "null"


def test_export_ast_to_json(tmp_path):
    tree = _tree()
    target = tmp_path / "ast.json"
    export_ast_to_json(tree, target)
    assert target.read_text(encoding="utf-8") == ast_to_json(tree)


def test_export_ast_to_json_none_writes_nothing(tmp_path):
    target = tmp_path / "none.json"
    export_ast_to_json(None, target)
    assert not target.exists()