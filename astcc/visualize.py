"""Export a syntax tree as a Graphviz DOT graph or as JSON."""

from __future__ import annotations

import json
import os
from typing import Optional, Union

from .nodes import ASTNode, NodeType, node_type_name

__all__ = [
    "escape_dot_label",
    "node_color",
    "generate_dot",
    "write_dot_file",
    "ast_to_json",
    "export_ast_to_json",
]

_PathLike = Union[str, "os.PathLike[str]"]

_COLORS: dict[NodeType, str] = {
    NodeType.TRANS: "lightgreen",
    NodeType.FUNCTION_DEF: "orange",
    NodeType.COMPOUND_STMT: "lightyellow",
    NodeType.BLOCK: "lightyellow",
    NodeType.IF: "lightcoral",
    NodeType.ITERATION_STMT: "lightcoral",
    NodeType.DECLARATION: "lightgray",
    NodeType.IDENTIFIER: "lightcyan",
    NodeType.NUMBER: "lightpink",
    NodeType.LITERAL: "lightpink",
    NodeType.FUNCTION_CALL: "gold",
    NodeType.RETURN: "thistle",
}

_DOT_HEADER = (
    "digraph AST {\n"
    "  rankdir=TB;\n"
    '  node [fontname="Arial", fontsize=10];\n'
    '  edge [fontname="Arial", fontsize=8];\n'
    '  bgcolor="white";\n'
    '  label="Abstract Syntax Tree Visualization";\n'
    '  labelloc="t";\n'
    "  fontsize=16;\n"
    '  fontname="Arial Bold";\n\n'
)


def escape_dot_label(value: str) -> str:
    """Escape quotes, newlines and angle brackets for a DOT label."""
    return (
        value.replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
    )


def node_color(node_type: Union[NodeType, int]) -> str:
    """Return the fill colour used for nodes of ``node_type``."""
    return _COLORS.get(node_type, "lightblue")  # type: ignore[call-overload]


def generate_dot(node: Optional[ASTNode]) -> str:
    """Return the DOT description of the tree rooted at ``node``."""
    if node is None:
        raise ValueError("cannot generate DOT output for an empty tree")

    parts: list[str] = [_DOT_HEADER]
    next_id = 0

    def visit(current: ASTNode) -> None:
        nonlocal next_id
        current_id = next_id
        next_id += 1
        label = node_type_name(current.type)
        if current.value:
            label += "\\n[" + escape_dot_label(current.value) + "]"
        parts.append(
            f'  node{current_id} [label="{label}", shape=box, style=filled, '
            f"fillcolor={node_color(current.type)}];\n"
        )
        for child in current.children:
            if child is not None:
                child_id = next_id
                visit(child)
                parts.append(f"  node{current_id} -> node{child_id};\n")

    visit(node)
    parts.append("}\n")
    return "".join(parts)


def write_dot_file(node: Optional[ASTNode], path: _PathLike) -> None:
    """Write the DOT description of the tree to ``path``."""
    text = generate_dot(node)
    with open(path, "w", encoding="utf-8") as fh:
        fh.write(text)


def ast_to_json(node: Optional[ASTNode]) -> str:
    """Return the tree as indented JSON with ``type``, ``value`` and ``children``."""

    def render(current: Optional[ASTNode], indent: int) -> str:
        if current is None:
            return "null"
        pad = " " * (indent * 2)
        out = [
            "{\n",
            f"{pad}  \"type\": {json.dumps(node_type_name(current.type))},\n",
            f"{pad}  \"value\": {json.dumps(current.value, ensure_ascii=False)},\n",
            f"{pad}  \"children\": [",
        ]
        if current.children:
            out.append("\n")
            last = len(current.children) - 1
            for i, child in enumerate(current.children):
                out.append(pad + "    " + render(child, indent + 2))
                if i < last:
                    out.append(",")
                out.append("\n")
            out.append(pad + "  ")
        out.append("]\n")
        out.append(pad + "}")
        return "".join(out)

    return render(node, 0)


def export_ast_to_json(node: Optional[ASTNode], path: _PathLike) -> None:
    """Write the JSON form of the tree to ``path``; nothing is written for no tree."""
    if node is None:
        return
    with open(path, "w", encoding="utf-8") as fh:
        fh.write(ast_to_json(node))