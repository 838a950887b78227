"""
Puzzle page fetcher for AoC Example Extractor

Downloads puzzle page markup for the command line host. The extraction core never
performs I/O; it only receives the markup returned from here.

The PuzzlePageFetcher implements:
- Requests session configuration with browser-like headers
- Optional ``session`` cookie for pages that need a logged-in user
- Rate limiting to respect server resources
- Retries with exponential backoff for transient network failures
- Mapping of HTTP failures onto the project's error classes

Example:
    >>> fetcher = PuzzlePageFetcher(timeout=10)
    >>> html = fetcher.fetch_puzzle(2022, 7)
"""

import logging
import time
from typing import Optional

import requests
from requests.exceptions import HTTPError

from utils.error_handler import (
    NetworkError, ContentMissingError, RateLimitError, URLValidationError,
    ErrorDetector, retry_on_error, handle_exception
)
from utils.url_parser import URLParser

logger = logging.getLogger(__name__)

USER_AGENT = 'aoc-example-extractor (+https://github.com/aoc-example-extractor)'


class PuzzlePageFetcher:
    """
    HTTP client for puzzle pages.

    Attributes:
        timeout (int): Request timeout in seconds
        rate_limit (float): Minimum seconds between requests
        max_retries (int): Attempts for transient network failures
        session (requests.Session): Configured HTTP session
    """

    def __init__(self, timeout: int = 30, rate_limit: float = 1.0,
                 max_retries: int = 3, session_cookie: Optional[str] = None):
        self.timeout = timeout
        self.rate_limit = rate_limit
        self.max_retries = max_retries
        self.last_request_time = 0.0
        self.url_parser = URLParser()

        self.session = requests.Session()
        self.session.headers.update({
            'User-Agent': USER_AGENT,
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
            'Accept-Language': 'en-US,en;q=0.5',
        })
        if session_cookie:
            self.session.cookies.set('session', session_cookie, domain='.adventofcode.com')

    def _enforce_rate_limit(self) -> None:
        """
        Enforce rate limiting between requests
        """
        current_time = time.time()
        time_since_last = current_time - self.last_request_time

        if time_since_last < self.rate_limit:
            sleep_time = self.rate_limit - time_since_last
            logger.debug(f"Rate limiting: sleeping for {sleep_time:.2f} seconds")
            time.sleep(sleep_time)

        self.last_request_time = time.time()

    def fetch_puzzle(self, year: int, day: int) -> str:
        """Fetch the puzzle page for (year, day)."""
        if not self.url_parser.is_valid_puzzle(year, day):
            raise URLValidationError(f"No puzzle exists for year {year} day {day}")
        return self.fetch(self.url_parser.puzzle_url(year, day))

    @handle_exception
    def fetch(self, url: str) -> str:
        """
        Fetch raw markup from a URL.

        Raises:
            URLValidationError: If URL is empty
            NetworkError: For connection failures and unexpected HTTP errors
            ContentMissingError: For 404 responses or empty bodies
            RateLimitError: For 429/503 responses
        """
        if not url or not url.strip():
            raise URLValidationError("Empty URL provided", url)

        self._enforce_rate_limit()
        logger.info(f"Fetching puzzle page: {url}")

        try:
            response = self._get(url)
        except Exception as e:
            if not ErrorDetector.is_network_error(e):
                raise
            raise NetworkError(f"Network error after {self.max_retries} attempts: {str(e)}",
                               original_exception=e, url=url)

        if response.status_code == 404:
            raise ContentMissingError("Content not found (404)", url, status_code=404)

        if response.status_code in (429, 503):
            retry_after = ErrorDetector.retry_after_seconds(response.headers, default=60)
            raise RateLimitError(f"Rate limited (HTTP {response.status_code})", retry_after, url)

        try:
            response.raise_for_status()
        except HTTPError as e:
            _, status_code = ErrorDetector.is_http_error(e)
            raise NetworkError(f"HTTP error {status_code}: {str(e)}",
                               original_exception=e, url=url)

        if not response.text or not response.text.strip():
            raise ContentMissingError("No content received from server", url)

        logger.info(f"Fetched {len(response.text)} characters from {url}")
        return response.text

    def _get(self, url: str) -> requests.Response:
        @retry_on_error(max_attempts=self.max_retries, delay=1.0, backoff_factor=2.0)
        def get():
            return self.session.get(
                url,
                timeout=(max(1, self.timeout // 2), self.timeout),  # (connect_timeout, read_timeout)
                allow_redirects=True
            )
        return get()

    def close(self) -> None:
        self.session.close()
