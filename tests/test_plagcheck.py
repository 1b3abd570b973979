from astcc.nodes import NodeType, create_leaf, create_node
from astcc.plagcheck import Comparison, compare_trees, filter_matches, format_report
from astcc.similarity import build_hash_list, jaccard_components


def _function(name, var):
    return create_node(
        NodeType.FUNCTION_DEF,
        create_leaf(NodeType.IDENTIFIER, name),
        create_node(
            NodeType.COMPOUND_STMT,
            create_node(
                NodeType.ASSIGNMENT,
                create_leaf(NodeType.IDENTIFIER, var),
                create_leaf(NodeType.NUMBER, "1"),
            ),
            create_node(NodeType.RETURN, create_leaf(NodeType.IDENTIFIER, var)),
        ),
    )


def _other_function():
    return create_node(
        NodeType.FUNCTION_DEF,
        create_leaf(NodeType.IDENTIFIER, "g"),
        create_node(
            NodeType.ITERATION_STMT,
            create_node(
                NodeType.LT,
                create_leaf(NodeType.IDENTIFIER, "i"),
                create_leaf(NodeType.NUMBER, "9"),
            ),
        ),
    )


def test_identical_trees_keep_only_root():
    original = _function("f", "x")
    suspected = _function("f", "x")
    result = compare_trees(original, suspected)
    assert result.score == 100
    assert result.original_size == len(list(original.walk()))
    assert result.suspected_size == result.original_size
    assert len(result.matches) == result.original_size
    assert len(result.unique_matches) == 1
    assert result.unique_matches[0].original.node is original
    assert result.unique_matches[0].suspected.node is suspected


def test_renamed_variables_still_match():
    result = compare_trees(_function("f", "x"), _function("compute", "total"))
    assert result.score == 100


def test_small_matches_are_dropped():
    a = build_hash_list(create_leaf(NodeType.IDENTIFIER, "a"))
    b = build_hash_list(create_leaf(NodeType.IDENTIFIER, "b"))
    matches = jaccard_components(a, b).matches
    assert len(matches) == 1
    assert filter_matches(matches) == []


def test_filtered_matches_are_not_nested():
    original = create_node(NodeType.TRANS, _function("f", "x"), _function("h", "y"))
    suspected = create_node(NodeType.TRANS, _function("f", "x"), _other_function())
    result = compare_trees(original, suspected)
    kept = [m.original.node for m in result.unique_matches]
    assert kept
    assert all(m.original.subtree_size >= 3 for m in result.unique_matches)
    for node in kept:
        inner = {d for c in node.children if c is not None for d in c.walk()}
        assert not inner.intersection(kept)
    assert original not in kept
    assert 0 < result.score < 100


def test_filter_keeps_largest_first():
    tree = _function("f", "x")
    infos = build_hash_list(tree)
    matches = jaccard_components(infos, build_hash_list(_function("f", "x"))).matches
    unique = filter_matches(list(reversed(matches)))
    assert [m.original.node for m in unique] == [tree]


def test_empty_trees():
    result = compare_trees(None, None)
    assert result.score == 100
    assert (result.original_size, result.suspected_size) == (0, 0)
    assert result.unique_matches == []
    one_sided = compare_trees(_function("f", "x"), None)
    assert one_sided.score == 0
    assert one_sided.matches == []


def test_report_contents():
    result = compare_trees(_function("f", "x"), _function("f", "x"))
    report = format_report(result, "a.c", "b.c")
    assert "Original file: a.c\n" in report
    assert "Suspected file: b.c\n" in report
    assert "AST-CC Similarity score: 100%\n" in report
    assert (
        f"Found 1 unique matching subtrees (filtered from {len(result.matches)} total matches)"
        in report
    )
    assert f"Match #1 - FunctionDef (Size: {result.original_size} nodes)" in report
    assert "Original File" in report and "Suspected File" in report
    assert report.endswith("=========================\n")


def test_report_without_matches():
    report = format_report(Comparison(0, 0, 100), "a.c", "b.c")
    assert "Found 0 unique matching subtrees (filtered from 0 total matches)" in report
    assert "Match #" not in report