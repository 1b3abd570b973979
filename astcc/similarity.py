"""Subtree hashing and the AST-CC similarity score (Jaccard on multisets)."""

from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass, field
from typing import NamedTuple, Optional, Sequence

from .nodes import ASTNode

__all__ = [
    "NodeInfo",
    "MatchingSubtree",
    "JaccardComponents",
    "build_hash_list",
    "jaccard_components",
    "similarity_score",
]

_MASK = (1 << 64) - 1
_SIGN = 1 << 63


def _wrap64(value: int) -> int:
    """Reduce ``value`` to a signed 64-bit integer, wrapping on overflow."""
    value &= _MASK
    return value - (1 << 64) if value & _SIGN else value


@dataclass(eq=False)
class NodeInfo:
    """Hash information about the subtree rooted at one node."""

    node: ASTNode
    parent: Optional[ASTNode]
    childs_hash_sum: int
    subtree_hash: int
    subtree_size: int
    parent_hash_sum: int = 0
    line_number: int = 0

    def __post_init__(self) -> None:
        if self.parent is not None and not self.parent_hash_sum:
            self.parent_hash_sum = int(self.parent.type)

    def signature(self) -> tuple[int, int]:
        """Return ``(subtree_hash, subtree_size)``, the key used for matching."""
        return (self.subtree_hash, self.subtree_size)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NodeInfo):
            return NotImplemented
        return (
            self.subtree_hash == other.subtree_hash
            and self.subtree_size == other.subtree_size
            and self.node.type == other.node.type
        )

    def __hash__(self) -> int:
        return hash((self.subtree_hash, self.subtree_size, int(self.node.type)))

    def __lt__(self, other: "NodeInfo") -> bool:
        if self.subtree_size != other.subtree_size:
            return self.subtree_size < other.subtree_size
        return self.subtree_hash < other.subtree_hash


@dataclass
class MatchingSubtree:
    """A pair of subtrees, one from each file, with the same signature."""

    original: NodeInfo
    suspected: NodeInfo
    description: str = field(init=False)

    def __post_init__(self) -> None:
        self.description = self.original.node.describe()


class JaccardComponents(NamedTuple):
    """Multiset intersection and union sizes, and the matched subtree pairs."""

    intersection: int
    union: int
    matches: list[MatchingSubtree]


@dataclass
class _Frame:
    node: ASTNode
    parent: Optional[ASTNode]
    index: int = 0
    size: int = 0
    hash_sum: int = 0
    child_infos: list[NodeInfo] = field(default_factory=list)


def build_hash_list(root: Optional[ASTNode]) -> list[NodeInfo]:
    """Hash every subtree of ``root`` in post-order; the root's entry is last.

    A subtree's hash is its node type plus its size times the sum of its
    children's hashes.
    """
    infos: list[NodeInfo] = []
    if root is None:
        return infos
    frames = [_Frame(root, None)]
    while frames:
        frame = frames[-1]
        if frame.index < len(frame.node.children):
            child = frame.node.children[frame.index]
            frame.index += 1
            if child is not None:
                frames.append(_Frame(child, frame.node))
            continue
        frames.pop()
        size = frame.size + 1
        subtree_hash = _wrap64(int(frame.node.type) + size * frame.hash_sum)
        for child_info in frame.child_infos:
            child_info.parent_hash_sum = subtree_hash
        info = NodeInfo(frame.node, frame.parent, frame.hash_sum, subtree_hash, size)
        infos.append(info)
        if frames:
            parent = frames[-1]
            parent.size += size
            parent.hash_sum = _wrap64(parent.hash_sum + subtree_hash)
            parent.child_infos.append(info)
    return infos


def jaccard_components(
    original: Sequence[NodeInfo], suspected: Sequence[NodeInfo]
) -> JaccardComponents:
    """Compare the signature multisets of two hash lists.

    Signatures are visited in sorted order; for each shared one, as many
    pairs are recorded as both sides can supply.
    """
    by_sig_a: defaultdict[tuple[int, int], list[NodeInfo]] = defaultdict(list)
    by_sig_b: defaultdict[tuple[int, int], list[NodeInfo]] = defaultdict(list)
    for info in original:
        by_sig_a[info.signature()].append(info)
    for info in suspected:
        by_sig_b[info.signature()].append(info)

    counts_a = Counter({sig: len(nodes) for sig, nodes in by_sig_a.items()})
    counts_b = Counter({sig: len(nodes) for sig, nodes in by_sig_b.items()})

    intersection = 0
    union = 0
    matches: list[MatchingSubtree] = []
    for sig in sorted(counts_a.keys() | counts_b.keys()):
        count_a, count_b = counts_a[sig], counts_b[sig]
        intersection += min(count_a, count_b)
        union += max(count_a, count_b)
        if count_a and count_b:
            matches.extend(
                MatchingSubtree(orig, susp) for orig, susp in zip(by_sig_a[sig], by_sig_b[sig])
            )
    return JaccardComponents(intersection, union, matches)


def similarity_score(original: Sequence[NodeInfo], suspected: Sequence[NodeInfo]) -> int:
    """Return the AST-CC similarity as a rounded percentage from 0 to 100."""
    if not original and not suspected:
        return 100
    if not original or not suspected:
        return 0
    intersection, union, _ = jaccard_components(original, suspected)
    if union == 0:
        return 0
    percentage = int(intersection / union * 100.0 + 0.5)
    return min(percentage, 100)