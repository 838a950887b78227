"""
Tree adapter for puzzle page markup

Wraps a BeautifulSoup document (lxml parser) behind the handful of queries the
example heuristics need: tag-filtered iteration, the flattened document-order node
sequence, rendered inner markup and direct child counts.
"""

import logging
from typing import Callable, List, Optional

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.builder import ParserRejectedMarkup
from bs4.element import PageElement

from utils.error_handler import MarkupParseError

logger = logging.getLogger(__name__)

PARSER = 'lxml'


class PageTree:
    """
    Parsed puzzle page.

    Nodes handed out by this class belong to the underlying soup and are only
    meaningful while the PageTree is alive.
    """

    def __init__(self, soup: BeautifulSoup):
        self.soup = soup
        self._nodes: Optional[List[PageElement]] = None

    @classmethod
    def parse(cls, html: str, year: Optional[int] = None, day: Optional[int] = None) -> 'PageTree':
        """
        Build a tree from raw markup.

        Raises:
            MarkupParseError: If the markup is not text or the parser rejects it
        """
        if not isinstance(html, str):
            raise MarkupParseError(
                f"Expected page markup as str, got {type(html).__name__}", year=year, day=day
            )

        try:
            soup = BeautifulSoup(html, PARSER)
        except ParserRejectedMarkup as e:
            raise MarkupParseError(f"Parser rejected page markup: {e}",
                                   original_exception=e, year=year, day=day) from e

        logger.debug(f"Parsed {len(html)} characters of markup for {year} day {day}")
        return cls(soup)

    def tags(self, name: str) -> List[Tag]:
        """All tags called ``name`` in document order."""
        return self.soup.find_all(name)

    def nodes(self) -> List[PageElement]:
        """Every node (tags and text) in document order, parents before children."""
        if self._nodes is None:
            self._nodes = list(self.soup.descendants)
        return self._nodes

    def rfind(self, predicate: Callable[[PageElement], bool]) -> Optional[int]:
        """Position of the last node matching ``predicate``."""
        nodes = self.nodes()
        for position in range(len(nodes) - 1, -1, -1):
            if predicate(nodes[position]):
                return position
        return None

    def window(self, start: int, size: int) -> List[PageElement]:
        """At most ``size`` nodes starting at ``start`` (inclusive)."""
        return self.nodes()[start:start + size]

    @staticmethod
    def inner_html(node: PageElement) -> str:
        """Serialized markup of a node's descendants; text nodes render as themselves."""
        if isinstance(node, Tag):
            return node.decode_contents()
        if isinstance(node, NavigableString):
            return str(node)
        return ''

    @staticmethod
    def child_count(tag: Tag) -> int:
        return len(tag.contents)

    @staticmethod
    def is_tag(node: PageElement, name: str) -> bool:
        return isinstance(node, Tag) and node.name == name
