#!/usr/bin/env python3
"""
AoC Example Extractor
Main entry point for the application

This module provides:
- Command-line argument parsing for files, URLs and year/day lookups
- Logging configuration and management
- INI configuration loading
- Batch extraction over several saved pages
- Error reporting and exit status handling
"""

__version__ = "1.0.0"
__author__ = "AoC Example Extractor Team"
__license__ = "MIT"
__description__ = "Extract the example input block from Advent of Code puzzle pages"

import sys
import os
import argparse
import logging
import traceback
import configparser
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple
from concurrent.futures import ThreadPoolExecutor

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from extractor.config import ExtractorConfig
from extractor.example_extractor import ExampleExtractor, Page
from utils.page_fetcher import PuzzlePageFetcher
from utils.url_parser import URLParser
from utils.error_handler import (
    ExtractorError, FileSystemError, ErrorInfo, ErrorCategory, ErrorSeverity,
    error_reporter
)

SESSION_ENV_VAR = 'AOC_SESSION'


@dataclass
class ExtractionJob:
    """One page to process and where its markup comes from."""
    label: str
    year: int
    day: int
    path: Optional[str] = None
    url: Optional[str] = None


class ApplicationManager:
    """
    Application manager that handles configuration, logging and the
    extraction runs of the AoC Example Extractor.
    """

    def __init__(self, config_file: Optional[Path] = None):
        self.config_dir = Path.home() / ".aoc_example_extractor"
        self.config_file = config_file or self.config_dir / "config.ini"
        self.config = configparser.ConfigParser()

        self.url_parser = URLParser()
        self.extractor: Optional[ExampleExtractor] = None
        self.fetcher: Optional[PuzzlePageFetcher] = None

        self.default_settings = {
            "log_level": "INFO",
            "log_file": "",
            "timeout": 30,
            "rate_limit": 1.0,
            "max_retries": 3,
            "max_workers": 4,
        }
        self.settings = self.default_settings.copy()

    def initialize(self, log_level: Optional[str] = None, session_cookie: Optional[str] = None):
        """
        Initialize the application with all necessary configurations.
        """
        self._load_configuration()
        if log_level:
            self.settings["log_level"] = log_level

        self._setup_logging()

        self.extractor = ExampleExtractor(config=ExtractorConfig.from_config(self.config))
        self.fetcher = PuzzlePageFetcher(
            timeout=int(self.settings["timeout"]),
            rate_limit=float(self.settings["rate_limit"]),
            max_retries=int(self.settings["max_retries"]),
            session_cookie=session_cookie or os.environ.get(SESSION_ENV_VAR),
        )
        logging.debug("Application initialized successfully")

    def _load_configuration(self):
        """
        Load configuration from INI file.
        """
        if not self.config_file.exists():
            logging.debug(f"No configuration file at {self.config_file}, using defaults")
            return

        try:
            self.config.read(self.config_file, encoding='utf-8')
        except configparser.Error as e:
            raise FileSystemError(f"Invalid configuration file: {e}",
                                  str(self.config_file), original_exception=e)

        defaults = self.config.defaults()
        for key in ("timeout", "rate_limit", "max_retries", "max_workers"):
            if key in defaults:
                self.settings[key] = defaults[key]

        if self.config.has_section('Logging'):
            logging_section = self.config['Logging']
            self.settings["log_level"] = logging_section.get('log_level', self.settings["log_level"])
            self.settings["log_file"] = logging_section.get('log_file', self.settings["log_file"])

    def _setup_logging(self):
        """
        Configure logging with console and optional file handlers.

        The console goes to stderr so stdout only carries extracted examples.
        """
        log_level = getattr(logging, str(self.settings.get("log_level", "INFO")).upper(), logging.INFO)

        detailed_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
        )
        simple_formatter = logging.Formatter(
            '%(asctime)s - %(levelname)s - %(message)s'
        )

        root_logger = logging.getLogger()
        root_logger.setLevel(log_level)
        root_logger.handlers.clear()

        log_file = self.settings.get("log_file")
        if log_file:
            try:
                file_handler = logging.FileHandler(log_file, encoding='utf-8')
                file_handler.setLevel(logging.DEBUG)
                file_handler.setFormatter(detailed_formatter)
                root_logger.addHandler(file_handler)
            except OSError as e:
                print(f"Warning: Could not setup file logging: {e}", file=sys.stderr)

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(simple_formatter)
        root_logger.addHandler(console_handler)

        logging.debug(f"Logging configured. Level: {log_level}, Log file: {log_file or 'none'}")

    def build_jobs(self, files: List[str], url: Optional[str] = None,
                   year: Optional[int] = None, day: Optional[int] = None) -> List[ExtractionJob]:
        """
        Turn command line inputs into extraction jobs.

        Raises:
            URLValidationError: If the URL is not a puzzle URL
        """
        jobs = []

        for path in files:
            job_year, job_day = self._year_day_for_file(path, year, day)
            jobs.append(ExtractionJob(label=path, year=job_year, day=job_day, path=path))

        if url:
            url_year, url_day = self.url_parser.identify_puzzle(url)
            jobs.append(ExtractionJob(label=url, year=url_year, day=url_day,
                                      url=self.url_parser.puzzle_url(url_year, url_day)))

        if not files and not url and year is not None and day is not None:
            puzzle_url = self.url_parser.puzzle_url(year, day)
            jobs.append(ExtractionJob(label=puzzle_url, year=year, day=day, url=puzzle_url))

        return jobs

    def _year_day_for_file(self, path: str, year: Optional[int],
                           day: Optional[int]) -> Tuple[int, int]:
        if year is not None and day is not None:
            return year, day

        inferred = self.url_parser.infer_from_filename(path) if path != '-' else None
        if inferred:
            return year if year is not None else inferred[0], day if day is not None else inferred[1]

        logging.debug(f"Could not infer year/day for {path}")
        return year or 0, day or 0

    def load_markup(self, job: ExtractionJob) -> str:
        """
        Read or fetch the markup for a job.

        Raises:
            FileSystemError: If a file cannot be read
            NetworkError: If a page cannot be fetched
        """
        if job.url:
            return self.fetcher.fetch(job.url)

        if job.path == '-':
            return sys.stdin.read()

        try:
            return Path(job.path).read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise FileSystemError(f"Cannot read {job.path}: {e}", job.path, original_exception=e)

    def process_job(self, job: ExtractionJob) -> Optional[str]:
        """Extract the example for one job; errors are reported and yield None."""
        try:
            markup = self.load_markup(job)
            return self.extractor.extract(Page(raw_html=markup, year=job.year, day=job.day))
        except ExtractorError as e:
            self._handle_error(e, job.label)
            return None

    def run(self, jobs: List[ExtractionJob], output: Optional[str] = None) -> Tuple[int, int]:
        """
        Process every job and write the examples out.

        Returns:
            Tuple[int, int]: (successful, failed) counts
        """
        max_workers = max(1, min(int(self.settings["max_workers"]), len(jobs)))
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results = list(executor.map(self.process_job, jobs))

        successful = 0
        failed = 0
        chunks = []
        for job, example in zip(jobs, results):
            if example is None:
                logging.warning(f"No example extracted from {job.label}")
                failed += 1
                continue

            successful += 1
            if len(jobs) > 1:
                chunks.append(f"==> {job.label} <==\n{example}")
            else:
                chunks.append(example)

        if chunks:
            self._write_output("\n\n".join(chunks) + "\n", output)

        logging.info(f"Extraction finished: {successful} successful, {failed} failed")
        return successful, failed

    def _write_output(self, text: str, output: Optional[str]):
        if not output:
            sys.stdout.write(text)
            return

        try:
            Path(output).write_text(text, encoding='utf-8')
            logging.info(f"Example written to {output}")
        except OSError as e:
            raise FileSystemError(f"Cannot write {output}: {e}", output, original_exception=e)

    def _handle_error(self, error: Exception, context: str = ""):
        """
        Report an error with the context it occurred in.
        """
        if isinstance(error, ExtractorError):
            error_info = error.error_info
        else:
            error_info = ErrorInfo(
                message=str(error),
                category=ErrorCategory.UNKNOWN,
                severity=ErrorSeverity.HIGH,
                original_exception=error,
                traceback_str=traceback.format_exc()
            )

        error_info.context.setdefault("source", context)
        # Errors raised through @handle_exception are already in the history
        if not any(reported is error_info for reported in error_reporter.error_history):
            error_reporter.report_error(error_info)

        if error_info.user_message:
            logging.error(f"{context}: {error_info.user_message}")

    def shutdown(self):
        if self.fetcher:
            self.fetcher.close()


def parse_arguments(argv: Optional[List[str]] = None):
    """
    Parse command line arguments.

    Returns:
        argparse.Namespace: Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="AoC Example Extractor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s day07.html                               # Extract from a saved page
  %(prog)s 2022_07.html 2022_08.html                # Several pages at once
  %(prog)s - --year 2022 --day 7 < page.html        # Read markup from stdin
  %(prog)s --url https://adventofcode.com/2022/day/7
  %(prog)s --year 2022 --day 7 -o example.txt       # Fetch and save
  %(prog)s day07.html --log-level DEBUG             # Show the heuristic trail
        """
    )

    parser.add_argument(
        'files',
        nargs='*',
        help='Saved puzzle pages to extract from ("-" reads stdin)'
    )

    parser.add_argument(
        '--url', '-u',
        type=str,
        help='Fetch and process a puzzle URL'
    )

    parser.add_argument(
        '--year', '-y',
        type=int,
        help='Puzzle year (fetches the page when no files are given)'
    )

    parser.add_argument(
        '--day', '-d',
        type=int,
        help='Puzzle day (fetches the page when no files are given)'
    )

    parser.add_argument(
        '--session',
        type=str,
        help=f'Session cookie for adventofcode.com (default: ${SESSION_ENV_VAR})'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Write the example to a file instead of stdout'
    )

    parser.add_argument(
        '--log-level', '-l',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Set logging level (default: INFO)'
    )

    parser.add_argument(
        '--config', '-c',
        type=str,
        help='Path to custom configuration file'
    )

    parser.add_argument(
        '--version', '-v',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    args = parser.parse_args(argv)

    if not args.files and not args.url and (args.year is None or args.day is None):
        parser.error("give input files, --url, or both --year and --day")

    return args


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function of the AoC Example Extractor.
    """
    args = parse_arguments(argv)
    app_manager = ApplicationManager(Path(args.config) if args.config else None)

    try:
        app_manager.initialize(log_level=args.log_level, session_cookie=args.session)

        jobs = app_manager.build_jobs(args.files, url=args.url, year=args.year, day=args.day)
        successful, failed = app_manager.run(jobs, output=args.output)

        summary = error_reporter.get_error_summary()
        if summary["total_errors"]:
            logging.warning(f"{summary['total_errors']} error(s) during extraction: "
                            f"{summary['categories']}")

        return 1 if failed or not successful else 0

    except KeyboardInterrupt:
        logging.info("Application interrupted by user")
        return 130

    except ExtractorError as e:
        app_manager._handle_error(e, "Main Application")
        return 1

    finally:
        app_manager.shutdown()


if __name__ == "__main__":
    sys.exit(main())
