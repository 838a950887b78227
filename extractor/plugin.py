"""
Plugin entry point for puzzle runner hosts

Hosts hand over a page object exposing ``raw_html``, ``year`` and ``day`` plus any
previously known data, and expect a list of answers back. The example parser only
knows the example input, so both answers are left empty.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from extractor.example_extractor import ExampleExtractor, Page
from utils.error_handler import ExtractorError

logger = logging.getLogger(__name__)

PAGE_ATTRIBUTES = ('raw_html', 'year', 'day')


@dataclass
class Answer:
    input_data: str
    answer_a: str = ""
    answer_b: str = ""
    extra: Any = None


def page_from_host(page: Any) -> Page:
    """Copy the attributes the extractor needs off a host page object."""
    missing = [name for name in PAGE_ATTRIBUTES if not hasattr(page, name)]
    if missing:
        raise ExtractorError(f"Page object is missing attributes: {', '.join(missing)}")

    try:
        year, day = int(page.year), int(page.day)
    except (TypeError, ValueError) as e:
        raise ExtractorError(f"Page year/day must be integers: {e}") from e

    return Page(raw_html=page.raw_html, year=year, day=day)


def advent_example_parser(page: Any, datas: Any = None,
                          extractor: Optional[ExampleExtractor] = None) -> List[Answer]:
    """
    Return ``[Answer(input_data=example)]``, or ``[]`` when no example was found.

    ``datas`` is part of the host calling convention and is not used.
    """
    extractor = extractor or ExampleExtractor()
    host_page = page_from_host(page)

    input_data = extractor.extract(host_page)
    if input_data is None:
        return []

    logger.debug(f"Extracted {len(input_data)} characters of example input "
                 f"for {host_page.year} day {host_page.day}")
    return [Answer(input_data=input_data)]
