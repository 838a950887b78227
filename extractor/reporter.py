"""
Outcome reporting for failed extractions

The extractor calls a reporter only after every heuristic has failed. Reporters
observe; they never change the (absent) result.
"""

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class ExtractionReporter(ABC):
    """Receives diagnostics about puzzles for which no example was found."""

    def report_failure(self, year: int, day: int, n_blocks: int) -> None:
        """Dispatch on whether there was anything to choose from at all."""
        if n_blocks == 0:
            self.no_code_blocks(year, day)
        else:
            self.no_match(year, day, n_blocks)

    @abstractmethod
    def no_code_blocks(self, year: int, day: int) -> None:
        """The page had no multi-line ``<code>`` blocks to check."""

    @abstractmethod
    def no_match(self, year: int, day: int, n_blocks: int) -> None:
        """``n_blocks`` multi-line ``<code>`` blocks existed and all were rejected."""


class LoggingReporter(ExtractionReporter):
    """Default reporter: complain loudly in the log."""

    def __init__(self, log: logging.Logger = logger):
        self.log = log

    def no_code_blocks(self, year: int, day: int) -> None:
        self.log.error(
            f"Failed to find an example for AoC {year} day {day}. "
            f"We couldn't find any code blocks to check"
        )

    def no_match(self, year: int, day: int, n_blocks: int) -> None:
        self.log.error(
            f"Failed to find an example for AoC {year} day {day}. "
            f"We found {n_blocks} <code>, and none worked."
        )
