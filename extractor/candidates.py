"""
Candidate collection for example blocks

A candidate is a ``<code>`` element annotated with the facts the heuristics look
at. Candidates keep a reference into the page tree instead of copying text out.
"""

from dataclasses import dataclass
from typing import List

from bs4 import Tag

from extractor.tree_adapter import PageTree

CODE_TAG = 'code'


@dataclass(frozen=True)
class Candidate:
    tag: Tag
    inner_html: str
    line_count: int
    child_count: int

    @classmethod
    def from_tag(cls, tag: Tag) -> 'Candidate':
        inner = PageTree.inner_html(tag)
        return cls(
            tag=tag,
            inner_html=inner,
            line_count=count_lines(inner),
            child_count=PageTree.child_count(tag),
        )

    @property
    def is_multi_line(self) -> bool:
        return self.line_count > 1


def count_lines(text: str) -> int:
    """
    Number of newline separated lines.

    A trailing newline does not start a new line and the empty string has none.
    """
    if not text:
        return 0
    newlines = text.count('\n')
    return newlines if text.endswith('\n') else newlines + 1


def collect_candidates(tree: PageTree) -> List[Candidate]:
    return [Candidate.from_tag(tag) for tag in tree.tags(CODE_TAG)]


def collect_multi_line(tree: PageTree) -> List[Candidate]:
    """All multi-line ``<code>`` elements in document order."""
    return [c for c in collect_candidates(tree) if c.is_multi_line]


def collect_single_line(tree: PageTree) -> List[Candidate]:
    """All ``<code>`` elements with at most one line, in document order."""
    return [c for c in collect_candidates(tree) if not c.is_multi_line]


def has_single_child(candidate: Candidate) -> bool:
    """
    Plain text blocks parse to exactly one text child.

    Blocks carrying decoration (for example a hidden styling ``<span>``, as in
    2022 day 7) have two or more children and are rejected. This is a proxy, not
    proof, that the block is the real example.
    """
    return candidate.child_count == 1
