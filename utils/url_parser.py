"""
URL Parser for AoC Example Extractor

This module validates and parses Advent of Code puzzle URLs and maps them to the
(year, day) pair the extractor threads through its heuristics. It also recognises
the year/day naming conventions used for saved puzzle pages on disk.

Example:
    >>> parser = URLParser()
    >>> result = parser.parse_url("https://adventofcode.com/2022/day/7")
    >>> print(result['year'], result['day'])
    2022 7
    >>> parser.puzzle_url(2022, 7)
    'https://adventofcode.com/2022/day/7'
"""

import re
from pathlib import Path
from typing import Dict, Optional, Tuple, Any
from urllib.parse import urlparse
import logging

from utils.error_handler import URLValidationError, handle_exception

logger = logging.getLogger(__name__)

BASE_URL = 'https://adventofcode.com'

FIRST_YEAR = 2015
LAST_DAY = 25


class URLParser:
    """
    Utility class for parsing and validating puzzle page URLs.

    Supported URL formats:
        - Puzzle pages: https://adventofcode.com/{year}/day/{day}
        - Puzzle inputs: https://adventofcode.com/{year}/day/{day}/input

    Saved page file names:
        - 2022_07.html, 2022-7.html, aoc2022day07.html, 2022/day07.html
    """

    PUZZLE_PATTERNS = {
        'puzzle': r'https://adventofcode\.com/(\d{4})/day/(\d{1,2})/?(?:[?#].*)?$',
        'input': r'https://adventofcode\.com/(\d{4})/day/(\d{1,2})/input/?$',
    }

    FILENAME_PATTERNS = [
        r'(\d{4})[_\-/](?:day)?[_\-]?(\d{1,2})(?!\d)',
        r'(\d{4})\D*day\D*(\d{1,2})(?!\d)',
    ]

    def normalize_url(self, url: str) -> str:
        """
        Normalize URL to standard format, handling different variations

        Args:
            url (str): URL to normalize

        Returns:
            str: Normalized URL
        """
        url = url.strip()

        # Add https if no scheme provided
        if not url.startswith(('http://', 'https://')):
            url = 'https://' + url

        parsed = urlparse(url)
        domain = parsed.netloc.lower()
        if domain.startswith('www.'):
            domain = domain[4:]

        path = parsed.path.rstrip('/')
        normalized = f"https://{domain}{path}"
        if parsed.fragment:
            normalized += f"#{parsed.fragment}"
        return normalized

    def parse_url(self, url: str) -> Dict[str, Any]:
        """
        Parse URL and extract the puzzle it refers to.

        Returns:
            Dict[str, Any]: Parsed URL information containing:
                - original_url (str): The input URL as provided
                - normalized_url (str): Cleaned and standardized URL
                - type (str): 'puzzle' or 'input'
                - year (int), day (int)
                - url (str): Canonical puzzle page URL
                - is_valid (bool): Whether the URL is a supported puzzle URL
                - error (str): Error message if parsing failed

        Note:
            Always check 'is_valid' before using the data.
        """
        result = {
            'original_url': url,
            'normalized_url': None,
            'type': None,
            'is_valid': False
        }

        if not url or not url.strip():
            result['error'] = 'Empty URL'
            return result

        normalized_url = self.normalize_url(url)
        result['normalized_url'] = normalized_url

        for url_type, pattern in self.PUZZLE_PATTERNS.items():
            match = re.match(pattern, normalized_url)
            if not match:
                continue

            year, day = int(match.group(1)), int(match.group(2))
            if not self.is_valid_puzzle(year, day):
                result['error'] = f'No puzzle exists for year {year} day {day}'
                return result

            result.update({
                'type': url_type,
                'year': year,
                'day': day,
                'url': self.puzzle_url(year, day),
                'is_valid': True
            })
            return result

        result['error'] = 'Not an Advent of Code puzzle URL'
        return result

    @handle_exception
    def identify_puzzle(self, url: str) -> Tuple[int, int]:
        """
        Return (year, day) for a puzzle URL.

        Raises:
            URLValidationError: If URL is not a supported puzzle URL
        """
        result = self.parse_url(url)
        if not result['is_valid']:
            raise URLValidationError(f"Invalid puzzle URL {url!r}: {result['error']}", url)

        logger.debug(f"Identified puzzle {result['year']} day {result['day']} from {url}")
        return result['year'], result['day']

    @staticmethod
    def is_valid_puzzle(year: int, day: int) -> bool:
        return year >= FIRST_YEAR and 1 <= day <= LAST_DAY

    @staticmethod
    def puzzle_url(year: int, day: int) -> str:
        return f"{BASE_URL}/{year}/day/{day}"

    def infer_from_filename(self, path: str) -> Optional[Tuple[int, int]]:
        """
        Guess (year, day) from the name of a saved puzzle page.

        Only the last two path components are considered so unrelated digits in
        parent directories are ignored.
        """
        candidate = '/'.join(Path(path).parts[-2:]).lower()

        for pattern in self.FILENAME_PATTERNS:
            match = re.search(pattern, candidate)
            if match:
                year, day = int(match.group(1)), int(match.group(2))
                if self.is_valid_puzzle(year, day):
                    return year, day

        return None
