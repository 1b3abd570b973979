"""Normalisation passes that bring equivalent C syntax trees to one shape."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from .nodes import ASTNode, NodeType, create_leaf, create_node

__all__ = [
    "ConditionValue",
    "is_empty_block",
    "evaluate_condition",
    "remove_child_subtree",
    "clone_node",
    "normalize_variable_declarations",
    "normalize_ast",
]

_MEANINGFUL_OPS = frozenset(
    {
        NodeType.ASSIGNMENT,
        NodeType.RETURN,
        NodeType.PLUS,
        NodeType.MINUS,
        NodeType.MUL,
        NodeType.DIV,
        NodeType.MOD,
        NodeType.MEMBER_ACCESS,
        NodeType.PTR_MEMBER_ACCESS,
        NodeType.IF,
        NodeType.ITERATION_STMT,
        NodeType.SWITCH,
        NodeType.FUNCTION_CALL,
        NodeType.LT,
        NodeType.GT,
        NodeType.LE,
        NodeType.GE,
        NodeType.EQUALS,
        NodeType.NOT_EQUALS,
        NodeType.UNARY_PLUS,
        NodeType.UNARY_MINUS,
    }
)

_DECLARATION_CONTAINERS = frozenset(
    {
        NodeType.COMPOUND_STMT,
        NodeType.BLOCK,
        NodeType.TRANS,
        NodeType.LIST,
        NodeType.FUNCTION_DEF,
    }
)


class ConditionValue(Enum):
    """Statically known truth value of a condition."""

    ALWAYS_FALSE = 0
    ALWAYS_TRUE = 1
    UNKNOWN = 2


def is_empty_block(node: Optional[ASTNode]) -> bool:
    """True if the subtree holds no statement or operation of any effect."""
    if node is None:
        return True
    if node.type in _MEANINGFUL_OPS or (node.type == NodeType.DECLARATION and node.children):
        return False
    return all(child is None or is_empty_block(child) for child in node.children)


def evaluate_condition(node: Optional[ASTNode]) -> ConditionValue:
    """Evaluate a constant condition: ``0`` is false, any other literal true."""
    if node is None:
        return ConditionValue.UNKNOWN
    if node.type in (NodeType.NUMBER, NodeType.LITERAL):
        return ConditionValue.ALWAYS_FALSE if node.value == "0" else ConditionValue.ALWAYS_TRUE
    return ConditionValue.UNKNOWN


def remove_child_subtree(node: Optional[ASTNode], index: int) -> Optional[ASTNode]:
    """Detach and return the child at ``index``; None when there is no such child."""
    if node is None or not 0 <= index < node.child_count:
        return None
    return node.children.pop(index)


def clone_node(node: Optional[ASTNode]) -> Optional[ASTNode]:
    """Return a deep copy of the subtree, keeping ``None`` child slots."""
    if node is None:
        return None
    root = ASTNode(node.type, node.value, [None] * node.child_count, node.val)
    stack: list[tuple[ASTNode, ASTNode]] = [(node, root)]
    while stack:
        original, copy = stack.pop()
        for index, child in enumerate(original.children):
            if child is None:
                continue
            child_copy = ASTNode(child.type, child.value, [None] * child.child_count, child.val)
            copy.children[index] = child_copy
            if child.children:
                stack.append((child, child_copy))
    return root


def _variable_name(node: Optional[ASTNode]) -> str:
    if node is None:
        return ""
    if node.type == NodeType.IDENTIFIER:
        return node.value
    for child in node.children:
        name = _variable_name(child)
        if name:
            return name
    return ""


def _single_declaration(type_spec: ASTNode, declarator: Optional[ASTNode]) -> ASTNode:
    return create_node(
        NodeType.DECLARATION,
        create_node(NodeType.LIST, clone_node(type_spec)),
        create_node(NodeType.LIST, clone_node(declarator)),
    )


def _split_declaration(child: ASTNode) -> Optional[list[ASTNode]]:
    """Split one declaration statement; None if it stays as it is."""
    if child.type != NodeType.DECLARATION or child.child_count < 2:
        return None
    type_list, decl_list = child.children[0], child.children[1]
    if (
        type_list is None
        or decl_list is None
        or type_list.type != NodeType.LIST
        or decl_list.type != NodeType.LIST
    ):
        return None

    type_spec = next(
        (c for c in type_list.children if c is not None and c.type == NodeType.TYPE_SPECIFIER),
        None,
    )
    if type_spec is None:
        return None

    declarators = [d for d in decl_list.children if d is not None]
    has_initializer = any(d.type == NodeType.INIT_DECLARATOR for d in declarators)
    if not has_initializer and len(declarators) <= 1:
        return None

    result: list[ASTNode] = []
    for declarator in declarators:
        if declarator.type == NodeType.INIT_DECLARATOR and declarator.child_count >= 2:
            var_declarator, initializer = declarator.children[0], declarator.children[1]
            result.append(_single_declaration(type_spec, var_declarator))
            name = _variable_name(var_declarator)
            if name and initializer is not None:
                result.append(
                    create_node(
                        NodeType.ASSIGNMENT,
                        create_leaf(NodeType.IDENTIFIER, name),
                        clone_node(initializer),
                    )
                )
        elif declarator.type == NodeType.DECLARATOR:
            result.append(_single_declaration(type_spec, declarator))
    return result


def normalize_variable_declarations(node: Optional[ASTNode]) -> None:
    """Split multi-variable and initialised declarations throughout the subtree.

    ``int a, b = 5;`` becomes ``int a; int b; b = 5;``.
    """
    if node is None:
        return
    stack: list[ASTNode] = [node]
    while stack:
        current = stack.pop()
        if current.type in _DECLARATION_CONTAINERS:
            new_children: list[Optional[ASTNode]] = []
            changed = False
            for child in current.children:
                if child is None:
                    continue
                parts = _split_declaration(child)
                if parts is None:
                    new_children.append(child)
                else:
                    new_children.extend(parts)
                    changed = True
            if changed:
                current.children = new_children
        stack.extend(child for child in current.children if child is not None)


def normalize_ast(node: Optional[ASTNode]) -> None:
    """Normalise the tree in place.

    Children are normalised first; then declarations are split, empty child
    slots dropped, children of the same kind as their parent flattened into
    it, constant-true ``if`` statements replaced by their body, and empty
    ``if`` branches removed.
    """
    if node is None:
        return
    for child in list(node.children):
        normalize_ast(child)

    normalize_variable_declarations(node)

    i = 0
    while i < len(node.children):
        child = node.children[i]
        if child is None:
            del node.children[i]
        elif child.type == node.type and node.type != NodeType.IF:
            node.children[i : i + 1] = child.children
        elif child.type == NodeType.IF:
            if child.child_count < 2:
                break
            if evaluate_condition(child.children[0]) is ConditionValue.ALWAYS_TRUE:
                node.children[i] = child.children[1]
            else:
                if child.child_count >= 2 and is_empty_block(child.children[1]):
                    del child.children[1]
                if child.child_count >= 3 and is_empty_block(child.children[2]):
                    del child.children[2]
                if child.child_count < 2:
                    remove_child_subtree(node, i)
                else:
                    i += 1
        else:
            i += 1