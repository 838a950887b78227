import os, sys
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from extractor.candidates import Candidate, count_lines, has_single_child, collect_multi_line, collect_single_line
from extractor.normalizer import fixup
from extractor.tree_adapter import PageTree


def test_fixup_decodes_angle_entities():
    assert fixup("a &gt; b &lt; c") == "a > b < c"


def test_fixup_strips_decorative_tags():
    assert fixup("<em>1</em>,<code>2</code>") == "1,2"


def test_fixup_keeps_other_entities_and_tags():
    assert fixup("a &amp; b <span>c</span>") == "a &amp; b <span>c</span>"


def test_fixup_trims_only_trailing_newlines():
    assert fixup("  1\n2  \n\n\n") == "  1\n2  "
    assert fixup("\n\n1") == "\n\n1"


def test_fixup_of_escaped_tags_removes_them():
    assert fixup("&lt;em&gt;x&lt;/em&gt;") == "x"


@pytest.mark.parametrize('markup', [
    "1,2,3\n4,5,6\n",
    "<em>A</em> &gt; B\n\n",
    "",
    "\n\n",
])
def test_fixup_is_idempotent(markup):
    once = fixup(markup)
    assert fixup(once) == once


@pytest.mark.parametrize('text,expected', [
    ("", 0),
    ("a", 1),
    ("a\n", 1),
    ("\n", 1),
    ("a\nb", 2),
    ("a\nb\n", 2),
    ("a\n\nb", 3),
])
def test_count_lines(text, expected):
    assert count_lines(text) == expected


def test_candidates_are_split_by_line_count():
    tree = PageTree.parse("<p><code>one</code></p><pre><code>1\n2\n</code></pre><code>x\n</code>")
    multi = collect_multi_line(tree)
    single = collect_single_line(tree)

    assert [c.inner_html for c in multi] == ["1\n2\n"]
    assert [c.inner_html for c in single] == ["one", "x\n"]


def test_single_child_predicate():
    tree = PageTree.parse("<code>plain\ntext</code><code><span>a</span>\nb</code><code></code>")
    plain, decorated, empty = [Candidate.from_tag(tag) for tag in tree.tags('code')]

    assert has_single_child(plain)
    assert decorated.child_count == 2
    assert not has_single_child(decorated)
    assert not has_single_child(empty)
