"""Abstract syntax tree nodes and helpers for printing and searching them."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterator, Optional, Union

__all__ = [
    "NodeType",
    "ASTNode",
    "node_type_name",
    "create_node",
    "create_leaf",
    "format_ast",
    "print_ast",
    "format_side_by_side",
    "extract_element",
    "is_function_prototype",
]


class NodeType(IntEnum):
    """Kinds of AST node; the values are the primes used in subtree hashing."""

    FUNCTION_DEF = 2
    PARAM_LIST = 3
    PARAM = 5
    DECLARATION = 7
    INIT_DECLARATOR = 11
    ASSIGNMENT = 13
    FUNCTION_PROTOTYPE = 16
    PREPROCESSOR = 17
    PLUS = 19
    MINUS = 23
    MUL = 29
    DIV = 31
    MOD = 37
    LT = 41
    GT = 43
    LE = 47
    GE = 53
    EQUALS = 379
    NOT_EQUALS = 383
    UNARY_PLUS = 389
    UNARY_MINUS = 397
    FUNCTION_CALL = 59
    FUNCTION_DECLARATOR = 61
    IDENTIFIER = 67
    LITERAL = 71
    NUMBER = 73
    RETURN = 79
    IF = 83
    ITERATION_STMT = 89
    COMPOUND_STMT = 149
    ARRAY_ACCESS = 151
    STRUCT_DECL = 157
    TYPEDEF = 163
    INIT_LIST = 167
    POINTER_DEREF = 173
    ADDRESS_OF = 179
    BREAK = 181
    CONTNUE = 191
    SIZEOF = 193
    POINTER = 197
    TYPE_QUALIFIER = 199
    TYPE_SPECIFIER = 211
    FUNCTION_SPECIFIER = 223
    TRANS = 227
    LIST = 229
    BLOCK = 233
    ALIGNMENT_SPECIFIER = 239
    STORAGE_CLASS_SPECIFIER = 241
    DECLARATOR = 251
    ENUM = 257
    TYPE_NAME = 263
    CONTINUE = 269
    MEMBER_ACCESS = 271
    PTR_MEMBER_ACCESS = 277
    POST_INCREMENT = 281
    POST_DECREMENT = 282
    NULL = 283
    PLUS_ASSIGN = 293
    MINUS_ASSIGN = 307
    MUL_ASSIGN = 311
    DIV_ASSIGN = 313
    MOD_ASSIGN = 317
    BIT_AND_ASSIGN = 331
    BIT_OR_ASSIGN = 337
    BIT_XOR_ASSIGN = 347
    SHIFT_LEFT_ASSIGN = 349
    SHIFT_RIGHT_ASSIGN = 353
    SWITCH = 359
    CASE = 367
    DEFAULT = 373
    TRANSLATION_UNIT = 401
    GOTO_STMT = 409
    LABELED_STMT = 419
    BIT_NOT = 421
    LOGICAL_NOT = 431
    SHIFT_LEFT = 433
    SHIFT_RIGHT = 439
    BIT_AND = 443
    BIT_XOR = 449
    BIT_OR = 457
    LOGICAL_AND = 461
    LOGICAL_OR = 463
    CONDITIONAL = 467
    COMMA = 479
    ELSE = 487
    ARRAY_DECLARATOR = 491


_N = NodeType

_TYPE_NAMES: dict[NodeType, str] = {
    _N.FUNCTION_DEF: "FunctionDef",
    _N.PARAM_LIST: "ParamList",
    _N.PARAM: "Param",
    _N.DECLARATION: "Declaration",
    _N.INIT_DECLARATOR: "InitDeclarator",
    _N.ASSIGNMENT: "Assignment",
    _N.FUNCTION_PROTOTYPE: "FunctionPrototype",
    _N.PREPROCESSOR: "Preprocessor",
    _N.PLUS: "Plus",
    _N.MINUS: "Minus",
    _N.MUL: "Multiply",
    _N.DIV: "Divide",
    _N.MOD: "Modulo",
    _N.LT: "LessThan",
    _N.GT: "GreaterThan",
    _N.LE: "LessEqual",
    _N.GE: "GreaterEqual",
    _N.EQUALS: "Equals",
    _N.NOT_EQUALS: "NotEquals",
    _N.FUNCTION_CALL: "FunctionCall",
    _N.FUNCTION_DECLARATOR: "FunctionDeclarator",
    _N.IDENTIFIER: "Identifier",
    _N.LITERAL: "Literal",
    _N.NUMBER: "Number",
    _N.RETURN: "Return",
    _N.IF: "If",
    _N.ELSE: "Else",
    _N.ITERATION_STMT: "IterationStmt",
    _N.COMPOUND_STMT: "CompoundStmt",
    _N.ARRAY_ACCESS: "ArrayAccess",
    _N.STRUCT_DECL: "StructDecl",
    _N.TYPEDEF: "Typedef",
    _N.INIT_LIST: "InitList",
    _N.POINTER_DEREF: "PointerDeref",
    _N.ADDRESS_OF: "AddressOf",
    _N.BREAK: "Break",
    _N.CONTINUE: "Continue",
    _N.SIZEOF: "Sizeof",
    _N.POINTER: "Pointer",
    _N.TYPE_QUALIFIER: "TypeQualifier",
    _N.TYPE_SPECIFIER: "TypeSpecifier",
    _N.FUNCTION_SPECIFIER: "FunctionSpecifier",
    _N.TRANS: "TranslationUnit",
    _N.LIST: "List",
    _N.BLOCK: "Block",
    _N.ALIGNMENT_SPECIFIER: "AlignmentSpecifier",
    _N.STORAGE_CLASS_SPECIFIER: "StorageClassSpecifier",
    _N.DECLARATOR: "Declarator",
    _N.ARRAY_DECLARATOR: "ArrayDeclarator",
    _N.ENUM: "EnumSpecifier",
    _N.TYPE_NAME: "TypeName",
    _N.MEMBER_ACCESS: "MemberAccess",
    _N.PTR_MEMBER_ACCESS: "PtrMemberAccess",
    _N.POST_INCREMENT: "PostIncrement",
    _N.POST_DECREMENT: "PostDecrement",
    _N.PLUS_ASSIGN: "PlusAssign",
    _N.MINUS_ASSIGN: "MinusAssign",
    _N.MUL_ASSIGN: "MultiplyAssign",
    _N.DIV_ASSIGN: "DivideAssign",
    _N.MOD_ASSIGN: "ModuloAssign",
    _N.BIT_AND_ASSIGN: "BitAndAssign",
    _N.BIT_OR_ASSIGN: "BitOrAssign",
    _N.BIT_XOR_ASSIGN: "BitXorAssign",
    _N.SHIFT_LEFT_ASSIGN: "ShiftLeftAssign",
    _N.SHIFT_RIGHT_ASSIGN: "ShiftRightAssign",
    _N.SWITCH: "AST_SWITCH",
    _N.CASE: "AST_CASE",
    _N.DEFAULT: "AST_DEFAULT",
    _N.UNARY_PLUS: "UnaryPlus",
    _N.UNARY_MINUS: "UnaryMinus",
    _N.TRANSLATION_UNIT: "TranslationUnit",
    _N.GOTO_STMT: "GotoStmt",
    _N.LABELED_STMT: "LabeledStmt",
    _N.BIT_NOT: "BitNot",
    _N.LOGICAL_NOT: "LogicalNot",
    _N.SHIFT_LEFT: "ShiftLeft",
    _N.SHIFT_RIGHT: "ShiftRight",
    _N.BIT_AND: "BitAnd",
    _N.BIT_XOR: "BitXor",
    _N.BIT_OR: "BitOr",
    _N.LOGICAL_AND: "LogicalAnd",
    _N.LOGICAL_OR: "LogicalOr",
    _N.CONDITIONAL: "Conditional",
    _N.COMMA: "Comma",
}

del _N


def node_type_name(node_type: Union[NodeType, int]) -> str:
    """Return the display name of a node type, ``"Unknown"`` if it has none."""
    try:
        return _TYPE_NAMES.get(NodeType(node_type), "Unknown")
    except ValueError:
        return "Unknown"


@dataclass(eq=False)
class ASTNode:
    """A node of the syntax tree; children may contain ``None`` placeholders.

    Nodes compare and hash by identity so they can serve as dictionary keys.
    """

    type: Union[NodeType, int]
    value: str = ""
    children: list[Optional["ASTNode"]] = field(default_factory=list)
    val: int = 0

    @property
    def child_count(self) -> int:
        return len(self.children)

    def describe(self) -> str:
        """Return the type name, followed by ``(value)`` when the node has one."""
        name = node_type_name(self.type)
        return f"{name}({self.value})" if self.value else name

    def walk(self) -> Iterator["ASTNode"]:
        """Yield this node and all its descendants in pre-order."""
        stack: list[ASTNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(child for child in reversed(node.children) if child is not None)


def create_node(node_type: Union[NodeType, int], *args: Optional[ASTNode]) -> ASTNode:
    """Create an interior node whose children are ``args`` in order."""
    return ASTNode(node_type, "", list(args))


def create_leaf(node_type: Union[NodeType, int], value: str) -> ASTNode:
    """Create a leaf node holding ``value``."""
    return ASTNode(node_type, value)


def format_ast(node: Optional[ASTNode], depth: int = 0) -> str:
    """Render the tree one node per line, children indented two more spaces."""
    if node is None:
        return ""
    lines: list[str] = []

    def visit(current: Optional[ASTNode], indent: int) -> None:
        if current is None:
            return
        lines.append(" " * indent + current.describe() + "\n")
        for child in current.children:
            visit(child, indent + 2)

    visit(node, depth)
    return "".join(lines)


def print_ast(node: Optional[ASTNode], depth: int = 0) -> None:
    """Print the tree as rendered by :func:`format_ast`."""
    print(format_ast(node, depth), end="")


_COLUMN_WIDTH = 45
_SEPARATOR = " " * 5


def _split_lines(text: str) -> list[str]:
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def format_side_by_side(original: Optional[ASTNode], suspected: Optional[ASTNode]) -> str:
    """Render two trees in adjacent columns under a two-column header."""
    left_lines = _split_lines(format_ast(original))
    right_lines = _split_lines(format_ast(suspected))

    out = [
        "Original File".ljust(_COLUMN_WIDTH) + _SEPARATOR + "Suspected File\n",
        "-" * _COLUMN_WIDTH + _SEPARATOR + "-" * 45 + "\n",
    ]
    for i in range(max(len(left_lines), len(right_lines))):
        left = left_lines[i] if i < len(left_lines) else ""
        right = right_lines[i] if i < len(right_lines) else ""
        if len(left) > _COLUMN_WIDTH:
            left = left[: _COLUMN_WIDTH - 3] + "..."
        out.append(left.ljust(_COLUMN_WIDTH) + _SEPARATOR + right + "\n")
    return "".join(out)


def extract_element(
    node: Optional[ASTNode],
    target_type: Union[NodeType, int],
    child_index: int = -1,
) -> Optional[ASTNode]:
    """Find the first node of ``target_type`` in pre-order.

    With ``child_index`` of -1 or 0 the node itself is returned; with a valid
    positive index its child at that position is returned instead.
    """
    if node is None:
        return None
    if node.type == target_type:
        if child_index in (-1, 0):
            return node
        if 0 < child_index < node.child_count:
            return node.children[child_index]
    for child in node.children:
        if child is not None:
            found = extract_element(child, target_type, child_index)
            if found is not None:
                return found
    return None


def is_function_prototype(node: Optional[ASTNode]) -> bool:
    """True if the subtree contains a function declarator."""
    if node is None:
        return False
    queue: deque[ASTNode] = deque([node])
    while queue:
        current = queue.popleft()
        if current.type == NodeType.FUNCTION_DECLARATOR:
            return True
        queue.extend(child for child in current.children if child is not None)
    return False