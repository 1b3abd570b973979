"""Compare two syntax trees and report the subtrees they share."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from .nodes import ASTNode, format_side_by_side
from .similarity import MatchingSubtree, build_hash_list, jaccard_components, similarity_score

__all__ = ["Comparison", "filter_matches", "compare_trees", "format_report"]

_MIN_REPORTED_SIZE = 3


@dataclass
class Comparison:
    """Outcome of comparing an original tree with a suspected one."""

    original_size: int
    suspected_size: int
    score: int
    matches: list[MatchingSubtree] = field(default_factory=list)
    unique_matches: list[MatchingSubtree] = field(default_factory=list)


def filter_matches(matches: Sequence[MatchingSubtree]) -> list[MatchingSubtree]:
    """Keep the largest matches, dropping those inside another kept match.

    Matches smaller than three nodes are never kept.
    """
    ordered = sorted(matches, key=lambda m: m.original.subtree_size, reverse=True)
    candidates: dict[ASTNode, MatchingSubtree] = {}
    for match in ordered:
        if match.original.subtree_size >= _MIN_REPORTED_SIZE:
            candidates[match.original.node] = match

    for match in ordered:
        node = match.original.node
        if node in candidates:
            for child in node.children:
                if child is None:
                    continue
                for descendant in child.walk():
                    candidates.pop(descendant, None)
    return list(candidates.values())


def _tree_size(infos: Sequence) -> int:
    return infos[-1].subtree_size if infos else 0


def compare_trees(original: Optional[ASTNode], suspected: Optional[ASTNode]) -> Comparison:
    """Hash both trees and compute their similarity and shared subtrees."""
    original_infos = build_hash_list(original)
    suspected_infos = build_hash_list(suspected)
    score = similarity_score(original_infos, suspected_infos)
    matches: list[MatchingSubtree] = []
    if original_infos and suspected_infos:
        matches = jaccard_components(original_infos, suspected_infos).matches
    return Comparison(
        original_size=_tree_size(original_infos),
        suspected_size=_tree_size(suspected_infos),
        score=score,
        matches=matches,
        unique_matches=filter_matches(matches),
    )


def format_report(comparison: Comparison, original_name: str, suspected_name: str) -> str:
    """Render the similarity analysis with each unique match side by side."""
    lines = [
        "\n=== Similarity Analysis ===\n",
        f"Original file: {original_name}\n",
        f"Suspected file: {suspected_name}\n",
        f"Original AST size: {comparison.original_size} nodes\n",
        f"Suspected AST size: {comparison.suspected_size} nodes\n",
        f"AST-CC Similarity score: {comparison.score}%\n",
        f"Found {len(comparison.unique_matches)} unique matching subtrees "
        f"(filtered from {len(comparison.matches)} total matches):\n\n",
    ]
    for number, match in enumerate(comparison.unique_matches, start=1):
        lines.append(
            f"Match #{number} - {match.description} "
            f"(Size: {match.original.subtree_size} nodes)\n\n"
        )
        lines.append(format_side_by_side(match.original.node, match.suspected.node))
        lines.append("\n" + "=" * 50 + "\n\n")
    lines.append("=========================\n")
    return "".join(lines)