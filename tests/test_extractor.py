import os, sys
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
import logging

import pytest

from extractor.config import ExtractorConfig
from extractor.example_extractor import ExampleExtractor, Page, extract_example
from extractor.heuristics import DEFAULT_ATTEMPTS
from extractor.reporter import ExtractionReporter, LoggingReporter
from extractor.tree_adapter import PageTree
from utils.error_handler import MarkupParseError

SINGLE_BLOCK_HTML = (
    "<article><p>The input looks like this:</p>"
    "<pre><code>1,2,3\n4,5,6\n</code></pre></article>"
)

DECORATED_SINGLE_BLOCK_HTML = (
    "<article><pre><code><em>1</em>,2\n3,4\n</code></pre></article>"
)

ANCHOR_SINGLE_LINE_HTML = (
    "<article><p>For example:</p>\n<pre><code>A &gt; B</code></pre></article>"
)

# Modelled on 2022 day 7: the first block is flavour text with a hidden span.
DAY7_HTML = """<html><body><main><article class="day-desc">
<h2>--- Day 7: No Space Left On Device ---</h2>
<p>You try to update the device:</p>
<pre><code>$ system-update --please --pretty-please-with-sugar-on-top
<span class="quiet">Error</span>: No space left on device
</code></pre>
<p>Perhaps you can delete some files. For example:</p>
<pre><code>$ cd /
$ ls
dir a
14848514 b.txt
</code></pre>
<p>Within the terminal output, lines that begin with <code>$</code> are commands.</p>
</article></main></body></html>"""

STRUCTURAL_HTML = """<article>
<pre><code>ignored
<span class="quiet">hidden</span> block
</code></pre>
<p>Here is some sample data:</p>
<pre><code>3   4
4   3
2   5
</code></pre>
<pre><code>7 6 4 2 1
1 2 7 8 9
</code></pre>
</article>"""

ANCHOR_PRECEDENCE_HTML = """<article>
<pre><code>plain
but irrelevant
</code></pre>
<p>For example, suppose you have the following list:</p>
<pre><code>1000
<em>2000</em>
3000
</code></pre>
</article>"""

ANCHOR_WITHOUT_CODE_HTML = """<article>
<p>For example:</p>
<pre>not
code
</pre>
<pre><code><em>a</em>
b
</code></pre>
<pre><code>c
d
</code></pre>
</article>"""

SINGLE_LINE_FALLBACK_HTML = """<article>
<pre><code><em>1</em>
<em>2</em>
</code></pre>
<pre><code>3
<span>4</span>
</code></pre>
<p>The answer for <code><em>x</em>y</code> is in <code>target</code> here.</p>
</article>"""

ALL_DECORATED_HTML = """<article>
<pre><code><em>1</em>
<em>2</em>
</code></pre>
<pre><code>3
<span>4</span>
</code></pre>
</article>"""

NO_CODE_HTML = "<article><h2>--- Day 1 ---</h2><p>No code at all.</p></article>"

ANCHOR_DECORATED_SINGLE_LINE_HTML = (
    "<article><p>For example:</p>\n<pre><code><em>7</em> &gt; 3</code></pre></article>"
)

ANCHOR_AFTER_INLINE_CODE_HTML = (
    "<article><p>Use <code>x</code> here.</p><p>For example:</p>\n"
    "<pre><code>A <em>B</em></code></pre></article>"
)


class RecordingReporter(ExtractionReporter):
    def __init__(self):
        self.calls = []

    def no_code_blocks(self, year, day):
        self.calls.append(('none', year, day))

    def no_match(self, year, day, n_blocks):
        self.calls.append(('no_match', year, day, n_blocks))


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def extractor(reporter):
    return ExampleExtractor(reporter=reporter)


def extract(extractor, html, year=2022, day=1):
    return extractor.extract(Page(raw_html=html, year=year, day=day))


def test_single_block_is_returned(extractor, reporter):
    assert extract(extractor, SINGLE_BLOCK_HTML) == "1,2,3\n4,5,6"
    assert reporter.calls == []


def test_single_block_ignores_child_count(extractor):
    assert extract(extractor, DECORATED_SINGLE_BLOCK_HTML) == "1,2\n3,4"


def test_anchor_followed_by_pre_code(extractor):
    assert extract(extractor, ANCHOR_SINGLE_LINE_HTML) == "A > B"


def test_anchor_takes_precedence_over_plain_block(extractor):
    assert extract(extractor, ANCHOR_PRECEDENCE_HTML) == "1000\n2000\n3000"


def test_day7_style_page(extractor):
    assert extract(extractor, DAY7_HTML, day=7) == "$ cd /\n$ ls\ndir a\n14848514 b.txt"


def test_day7_without_anchor_uses_structure(extractor):
    html = DAY7_HTML.replace("For example:", "Consider this session:")
    assert extract(extractor, html, day=7) == "$ cd /\n$ ls\ndir a\n14848514 b.txt"


def test_structural_tie_break_picks_first_plain_block(extractor):
    assert extract(extractor, STRUCTURAL_HTML) == "3   4\n4   3\n2   5"


def test_anchor_pre_without_code_falls_through(extractor):
    assert extract(extractor, ANCHOR_WITHOUT_CODE_HTML) == "c\nd"


def test_anchor_used_without_multi_line_blocks(extractor, reporter):
    assert extract(extractor, ANCHOR_DECORATED_SINGLE_LINE_HTML) == "7 > 3"
    assert reporter.calls == []


def test_anchor_beats_plain_single_line_block(extractor):
    assert extract(extractor, ANCHOR_AFTER_INLINE_CODE_HTML) == "A B"


def test_anchor_phrase_is_case_insensitive_in_config(reporter):
    config = ExtractorConfig(anchor_phrase="  For Example ", container_tag="PRE")
    assert config.anchor_phrase == "for example"
    assert config.container_tag == "pre"

    custom = ExampleExtractor(config=config, reporter=reporter)
    assert extract(custom, ANCHOR_PRECEDENCE_HTML) == "1000\n2000\n3000"


def test_short_lookahead_misses_anchor(reporter):
    narrow = ExampleExtractor(config=ExtractorConfig(lookahead=1), reporter=reporter)
    assert extract(narrow, ANCHOR_PRECEDENCE_HTML) == "plain\nbut irrelevant"


def test_single_line_fallback(extractor, reporter):
    assert extract(extractor, SINGLE_LINE_FALLBACK_HTML) == "target"
    assert reporter.calls == []


def test_no_code_blocks_reported(extractor, reporter):
    assert extract(extractor, NO_CODE_HTML, year=2021, day=3) is None
    assert reporter.calls == [('none', 2021, 3)]


def test_no_match_reported_with_block_count(extractor, reporter):
    assert extract(extractor, ALL_DECORATED_HTML, year=2020, day=12) is None
    assert reporter.calls == [('no_match', 2020, 12, 2)]


def test_empty_markup_is_a_miss_not_an_error(extractor, reporter):
    assert extract(extractor, "") is None
    assert reporter.calls == [('none', 2022, 1)]


def test_extraction_is_deterministic(extractor):
    first = extract(extractor, DAY7_HTML, day=7)
    second = extract(extractor, DAY7_HTML, day=7)
    assert first == second


@pytest.mark.parametrize('markup', [None, b"<code>1\n2</code>", 42])
def test_unparseable_markup_raises(extractor, markup):
    with pytest.raises(MarkupParseError) as excinfo:
        extract(extractor, markup, year=2019, day=4)
    assert excinfo.value.error_info.context == {"year": 2019, "day": 4}


def test_custom_attempt_can_override_a_day(reporter):
    def day_override(context):
        if (context.page.year, context.page.day) == (2022, 7):
            return "override"
        return None

    custom = ExampleExtractor(reporter=reporter, attempts=(day_override,) + DEFAULT_ATTEMPTS)
    assert extract(custom, DAY7_HTML, day=7) == "override"
    assert extract(custom, DAY7_HTML, day=8) == "$ cd /\n$ ls\ndir a\n14848514 b.txt"


def test_extract_example_wrapper():
    assert extract_example(2022, 1, SINGLE_BLOCK_HTML) == "1,2,3\n4,5,6"


def test_logging_reporter_messages(caplog):
    with caplog.at_level(logging.ERROR):
        assert extract_example(2021, 3, NO_CODE_HTML, reporter=LoggingReporter()) is None
        assert extract_example(2020, 12, ALL_DECORATED_HTML, reporter=LoggingReporter()) is None

    assert "AoC 2021 day 3" in caplog.text
    assert "couldn't find any code blocks" in caplog.text
    assert "We found 2 <code>, and none worked." in caplog.text


def test_page_tree_nodes_are_in_document_order():
    tree = PageTree.parse("<div><p>first</p><pre><code>x</code></pre></div>")
    names = [getattr(node, 'name', None) or str(node) for node in tree.nodes()]
    assert names.index('p') < names.index('first') < names.index('pre') < names.index('code')
    assert tree.rfind(lambda node: 'first' in tree.inner_html(node)) == names.index('first')
