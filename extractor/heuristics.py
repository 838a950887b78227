"""
Example selection heuristics

Each heuristic is an attempt: it looks at the extraction context and either
commits to an example (normalized text) or returns None to let the next attempt
run. ``DEFAULT_ATTEMPTS`` is the order the extractor tries them in.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, TYPE_CHECKING

from extractor.candidates import (
    Candidate, CODE_TAG, collect_single_line, has_single_child
)
from extractor.config import ExtractorConfig
from extractor.normalizer import fixup
from extractor.tree_adapter import PageTree

if TYPE_CHECKING:
    from extractor.example_extractor import Page

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractionContext:
    """Everything one extraction call works on; discarded afterwards."""
    page: 'Page'
    tree: PageTree
    config: ExtractorConfig
    candidates: List[Candidate]


Attempt = Callable[[ExtractionContext], Optional[str]]


def first_success(attempts: Iterable[Attempt], context: ExtractionContext) -> Optional[str]:
    """Run attempts in order and return the first result that is not None."""
    for attempt in attempts:
        result = attempt(context)
        if result is not None:
            return result
    return None


def first_single_child(candidates: Iterable[Candidate]) -> Optional[Candidate]:
    for candidate in candidates:
        if has_single_child(candidate):
            return candidate
    return None


def only_candidate(context: ExtractionContext) -> Optional[str]:
    """With a single multi-line block there is nothing to choose between."""
    if len(context.candidates) != 1:
        return None

    logger.debug("Only found a single code block, using that directly")
    return fixup(context.candidates[0].inner_html)


def anchored_example(context: ExtractionContext) -> Optional[str]:
    """
    Use the ``<pre><code>`` block right after the anchor phrase.

    Ancestors contain the markup of their descendants, so the LAST node whose
    markup holds the phrase is the innermost one. The container is searched for
    in a short window starting at that node. A lone multi-line block has
    already been taken by ``only_candidate``.
    """
    n_codes = len(context.candidates)
    if n_codes == 1:
        return None

    logger.debug(f"Found {n_codes} multi-line <{CODE_TAG}>, looking for \"{context.config.anchor_phrase}\"")

    tree = context.tree
    phrase = context.config.anchor_phrase
    container_tag = context.config.container_tag

    search_start = tree.rfind(lambda node: phrase in tree.inner_html(node).lower())
    if search_start is None:
        logger.debug(f"Couldn't find \"{phrase}\" at all")
        return None

    container = next(
        (node for node in tree.window(search_start, context.config.lookahead)
         if tree.is_tag(node, container_tag)),
        None
    )
    if container is not None:
        inner = tree.inner_html(container)
        if f"<{CODE_TAG}>" in inner:
            logger.debug(f"Found <{container_tag}> after \"{phrase}\" with <{CODE_TAG}>, using that")
            return fixup(inner)
        logger.debug(f"Found <{container_tag}> after \"{phrase}\" but it didn't contain <{CODE_TAG}>")

    logger.debug(f"Found \"{phrase}\" but couldn't find a <{container_tag}><{CODE_TAG}> block after it")
    return None


def plain_multi_line(context: ExtractionContext) -> Optional[str]:
    """
    First multi-line block without nested markup.

    Most of the time the first block is the example, but some pages open with an
    irrelevant block that carries an invisible styling tag.
    """
    candidate = first_single_child(context.candidates)
    if candidate is None:
        return None

    logger.debug(f"Found a multi-line <{CODE_TAG}> with 1 child, using that")
    return fixup(candidate.inner_html)


def plain_single_line(context: ExtractionContext) -> Optional[str]:
    """Last resort: the first single-line block without nested markup."""
    candidate = first_single_child(collect_single_line(context.tree))
    if candidate is None:
        return None

    logger.debug(f"Found a single-line <{CODE_TAG}> with 1 child, using that")
    return fixup(candidate.inner_html)


DEFAULT_ATTEMPTS = (
    only_candidate,
    anchored_example,
    plain_multi_line,
    plain_single_line,
)
