"""
Example input extractor for puzzle pages

This module ties the pieces of the extractor together: it parses the page,
collects the ``<code>`` candidates, runs the selection heuristics in order and
reports total failures.

The extractor is a pure function of its input. Each call builds its own tree and
keeps no state between calls, so one ExampleExtractor can be shared by threads.

Example:
    >>> extract_example(2022, 1, "<p>For example:</p><pre><code>1\\n2\\n</code></pre>")
    '1\\n2'

Note:
    A page for which no heuristic works yields None. Markup that cannot be parsed
    raises MarkupParseError instead.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from extractor.candidates import collect_multi_line
from extractor.config import ExtractorConfig
from extractor.heuristics import (
    Attempt, DEFAULT_ATTEMPTS, ExtractionContext, first_success
)
from extractor.reporter import ExtractionReporter, LoggingReporter
from extractor.tree_adapter import PageTree

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Page:
    """
    A puzzle page as supplied by the host.

    Attributes:
        raw_html (str): Rendered page markup
        year (int): Puzzle year
        day (int): Puzzle day

    Note:
        year and day are not used by the built-in heuristics. They are passed to
        every attempt so tricky days can get their own attempt without touching
        the traversal logic.
    """
    raw_html: str
    year: int
    day: int


class ExampleExtractor:
    """
    Runs the example selection heuristics against puzzle pages.

    Attributes:
        config (ExtractorConfig): Anchor phrase and lookahead settings
        reporter (ExtractionReporter): Receives diagnostics on total failure
        attempts (Sequence[Attempt]): Heuristics in the order they are tried
    """

    def __init__(self, config: Optional[ExtractorConfig] = None,
                 reporter: Optional[ExtractionReporter] = None,
                 attempts: Sequence[Attempt] = DEFAULT_ATTEMPTS):
        self.config = config or ExtractorConfig()
        self.reporter = reporter or LoggingReporter()
        self.attempts = tuple(attempts)

    def extract(self, page: Page) -> Optional[str]:
        """
        Extract the example input of a page.

        Returns:
            Optional[str]: Example text without trailing blank lines, or None if
            no heuristic identified an example

        Raises:
            MarkupParseError: If the page markup cannot be parsed
        """
        tree = PageTree.parse(page.raw_html, page.year, page.day)
        context = ExtractionContext(
            page=page,
            tree=tree,
            config=self.config,
            candidates=collect_multi_line(tree),
        )
        logger.debug(f"AoC {page.year} day {page.day}: "
                     f"{len(context.candidates)} multi-line <code> candidates")

        result = first_success(self.attempts, context)
        if result is None:
            self.reporter.report_failure(page.year, page.day, len(context.candidates))
        return result


def extract_example(year: int, day: int, html: str,
                    reporter: Optional[ExtractionReporter] = None) -> Optional[str]:
    """Convenience wrapper around ExampleExtractor with default settings."""
    return ExampleExtractor(reporter=reporter).extract(Page(raw_html=html, year=year, day=day))
