"""
Utils package for AoC Example Extractor
Contains error handling, puzzle URL parsing and page fetching
"""

from .url_parser import URLParser
from .page_fetcher import PuzzlePageFetcher

__all__ = ['URLParser', 'PuzzlePageFetcher']
