"""
Extraction settings

Values come from the ``[Extraction]`` section of the application INI file; every
setting has a default so the extractor works without any configuration.
"""

import configparser
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

SECTION = 'Extraction'

DEFAULT_ANCHOR_PHRASE = 'for example'
DEFAULT_LOOKAHEAD = 5
DEFAULT_CONTAINER_TAG = 'pre'


@dataclass(frozen=True)
class ExtractorConfig:
    """
    Attributes:
        anchor_phrase (str): Lower-case phrase that usually precedes the example
        lookahead (int): Nodes inspected after the anchor, the anchor included
        container_tag (str): Block tag expected to wrap the example ``<code>``
    """
    anchor_phrase: str = DEFAULT_ANCHOR_PHRASE
    lookahead: int = DEFAULT_LOOKAHEAD
    container_tag: str = DEFAULT_CONTAINER_TAG

    def __post_init__(self):
        # Markup is lower-cased before the phrase is searched for
        object.__setattr__(self, 'anchor_phrase', self.anchor_phrase.strip().lower())
        object.__setattr__(self, 'container_tag', self.container_tag.strip().lower())
        if not self.anchor_phrase:
            raise ValueError("anchor_phrase must not be empty")
        if self.lookahead < 1:
            raise ValueError(f"lookahead must be positive, got {self.lookahead}")

    @classmethod
    def from_config(cls, config: configparser.ConfigParser) -> 'ExtractorConfig':
        if not config.has_section(SECTION):
            logger.debug(f"No [{SECTION}] section in configuration, using defaults")
            return cls()

        section = config[SECTION]
        return cls(
            anchor_phrase=section.get('anchor_phrase', DEFAULT_ANCHOR_PHRASE),
            lookahead=section.getint('lookahead', DEFAULT_LOOKAHEAD),
            container_tag=section.get('container_tag', DEFAULT_CONTAINER_TAG),
        )
