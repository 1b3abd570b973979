# astcc

`astcc` measures how alike two C programs are in structure. It works on their
abstract syntax trees, not on their text. Every subtree is hashed from its
node types and shape. The score is the Jaccard coefficient of the two
multisets of subtree signatures. Identifier names and literal values do not
enter the hash, so renamed variables do not change the score.

## Modules

- `astcc.nodes`: the tree model.
  - `NodeType` is an `IntEnum` of node kinds, such as `NodeType.RETURN`,
    `NodeType.PLUS` and `NodeType.IDENTIFIER`. Their values are the numbers
    used in hashing.
  - `ASTNode` has `type`, `value`, `children` and `val`, plus `child_count`,
    `describe()` and `walk()`. `walk()` yields the nodes in pre-order.
    Nodes compare by identity.
  - `create_node(type, *children)` and `create_leaf(type, value)` build trees.
  - `node_type_name` gives a node type's display name.
  - `format_ast` and `print_ast` render a tree one node per line, indented.
  - `format_side_by_side` renders two trees in columns.
  - `extract_element` finds the first node of a given type.
  - `is_function_prototype` reports whether a subtree contains a function
    declarator.
- `astcc.normalize`: in-place normalisation before comparison.
  - `normalize_ast` normalises the whole tree.
    - It splits declarations: `int a, b = 5;` becomes
      `int a; int b; b = 5;`.
    - It drops `None` child slots.
    - It flattens children of the same kind as their parent. `If` nodes are
      not flattened.
    - It replaces an `if` whose condition is a nonzero literal with its body.
    - It removes empty `if` branches, and the whole `if` when no branch is
      left.
  - `normalize_variable_declarations` runs only the declaration-splitting step.
  - The helpers are `is_empty_block`, `evaluate_condition` (returns a
    `ConditionValue`), `clone_node` and `remove_child_subtree`.
- `astcc.similarity`: hashing and scoring.
  - `build_hash_list(root)` returns one `NodeInfo` per node, in post-order,
    with the root last. A subtree's hash is its node type plus its size
    times the sum of its children's hashes, wrapped to signed 64 bits.
    `NodeInfo.signature()` is `(subtree_hash, subtree_size)`.
  - `jaccard_components` returns the multiset intersection size, the union
    size and the matched `MatchingSubtree` pairs, as a `JaccardComponents`.
  - `similarity_score` returns a rounded percentage. Two empty lists score
    100. If only one list is empty, the score is 0.
- `astcc.plagcheck`: whole-tree comparison.
  - `compare_trees(original, suspected)` returns a `Comparison`. It holds
    the two tree sizes, the score, all matches, and `unique_matches`.
  - `unique_matches` comes from `filter_matches`. It keeps matches of at
    least three nodes that do not lie inside another kept match.
  - `format_report` renders the analysis as text, with each unique match
    shown side by side.
- `astcc.visualize`: export.
  - `generate_dot` and `write_dot_file` produce a Graphviz DOT graph. Both
    raise `ValueError` for no tree.
  - `ast_to_json` and `export_ast_to_json` produce indented JSON.
    `export_ast_to_json` writes nothing for no tree.

## Example

```python
from astcc.nodes import NodeType, create_leaf, create_node
from astcc.normalize import normalize_ast
from astcc.plagcheck import compare_trees, format_report


def ret_sum(left, right):
    return create_node(
        NodeType.RETURN,
        create_node(
            NodeType.PLUS,
            create_leaf(NodeType.IDENTIFIER, left),
            create_leaf(NodeType.IDENTIFIER, right),
        ),
    )


original = create_node(NodeType.COMPOUND_STMT, ret_sum("a", "b"))
suspected = create_node(NodeType.COMPOUND_STMT, ret_sum("x", "y"))

normalize_ast(original)
normalize_ast(suspected)

comparison = compare_trees(original, suspected)
print(comparison.score)  # 100
print(format_report(comparison, "original.c", "suspected.c"))
```

## What it does not do

The package has no C lexer or parser. It does not read `.c` files. You
build the trees to compare yourself, with `create_node` and `create_leaf`
or with a parser of your own. There is also no command-line program. You
use the package as a library.