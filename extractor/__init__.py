"""
Extractor package for AoC Example Extractor
Contains the example selection pipeline and its plugin entry point
"""

from .example_extractor import ExampleExtractor, Page, extract_example
from .config import ExtractorConfig
from .normalizer import fixup
from .plugin import Answer, advent_example_parser
from .reporter import ExtractionReporter, LoggingReporter

__all__ = [
    'ExampleExtractor',
    'ExtractorConfig',
    'ExtractionReporter',
    'LoggingReporter',
    'Page',
    'Answer',
    'advent_example_parser',
    'extract_example',
    'fixup'
]
