"""
Text normalization for selected example blocks

Only the decorations that actually show up inside puzzle example blocks are
removed; this is not a general purpose HTML-to-text converter.
"""

# Order matters: entities are decoded before tags are stripped.
ENTITY_REPLACEMENTS = [
    ('&gt;', '>'),
    ('&lt;', '<'),
]

DECORATIVE_TAGS = ['<em>', '</em>', '<code>', '</code>']


def fixup(markup: str) -> str:
    """
    Turn the inner markup of an example block into plain text.

    >>> fixup('<em>1</em>,2\\n3 &gt; 2\\n\\n')
    '1,2\\n3 > 2'
    """
    text = markup
    for entity, replacement in ENTITY_REPLACEMENTS:
        text = text.replace(entity, replacement)

    for tag in DECORATIVE_TAGS:
        text = text.replace(tag, '')

    # Puzzle inputs never end in blank lines
    return text.rstrip('\n')
