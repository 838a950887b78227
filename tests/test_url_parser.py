import os, sys
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from utils.url_parser import URLParser
from utils.error_handler import URLValidationError

PUZZLE_URL = "https://adventofcode.com/2022/day/7"


@pytest.fixture
def parser():
    return URLParser()


@pytest.mark.parametrize('url', [
    PUZZLE_URL,
    "http://www.adventofcode.com/2022/day/7/",
    "adventofcode.com/2022/day/7",
    "https://adventofcode.com/2022/day/7#part2",
])
def test_parse_puzzle_url_variants(parser, url):
    result = parser.parse_url(url)
    assert result['is_valid']
    assert result['type'] == 'puzzle'
    assert (result['year'], result['day']) == (2022, 7)
    assert result['url'] == PUZZLE_URL


def test_parse_input_url(parser):
    result = parser.parse_url("https://adventofcode.com/2015/day/25/input")
    assert result['is_valid']
    assert result['type'] == 'input'
    assert result['url'] == "https://adventofcode.com/2015/day/25"


@pytest.mark.parametrize('url', [
    "",
    "https://example.com/2022/day/7",
    "https://adventofcode.com/2022/day/26",
    "https://adventofcode.com/2014/day/1",
    "https://adventofcode.com/2022",
])
def test_parse_invalid_urls(parser, url):
    result = parser.parse_url(url)
    assert not result['is_valid']
    assert result['error']


def test_identify_puzzle(parser):
    assert parser.identify_puzzle(PUZZLE_URL) == (2022, 7)
    with pytest.raises(URLValidationError):
        parser.identify_puzzle("https://codeforces.com/contest/1/problem/A")


def test_puzzle_url(parser):
    assert parser.puzzle_url(2023, 1) == "https://adventofcode.com/2023/day/1"


@pytest.mark.parametrize('path,expected', [
    ("pages/2022_07.html", (2022, 7)),
    ("2022-7.html", (2022, 7)),
    ("cache/aoc2021day12.html", (2021, 12)),
    ("cache/2020/day05.html", (2020, 5)),
    ("/home/user/1999/stuff/page.html", None),
    ("notes.html", None),
])
def test_infer_from_filename(parser, path, expected):
    assert parser.infer_from_filename(path) == expected
