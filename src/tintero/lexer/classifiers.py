"""Line classification table for the tokenizer.

Each source line is trimmed and tested against LINE_CLASSIFIERS from top
to bottom; the first pattern that matches decides the token type. The
patterns overlap (a block macro line also looks like a description list
item, a table delimiter is also a table row), so the order is part of the
format and must not be rearranged or merged into one alternation.

The three trailing delimiter kinds (open, literal, passthrough) come after
every other entry so they cannot change how any earlier line classifies.

"""

import re

from tintero.tokens import TokenType

LINE_CLASSIFIERS: tuple[tuple[re.Pattern[str], TokenType], ...] = (
    (re.compile(r"^=+\s+.+"), TokenType.HEADER),
    (re.compile(r"^(\*+|\d+\.)\s+(\[[ xX]\]\s+)?.+"), TokenType.LIST_ITEM),
    (re.compile(r"^\|===+$"), TokenType.TABLE_DELIMITER),
    (re.compile(r"^\|.*$"), TokenType.TABLE_ROW),
    (re.compile(r"^_{4,}$"), TokenType.BLOCK_QUOTE_DELIMITER),
    (re.compile(r"^\*{4,}$"), TokenType.SIDEBAR_DELIMITER),
    (re.compile(r"^={4,}$"), TokenType.EXAMPLE_DELIMITER),
    (re.compile(r"^:[^:!]+!?:\s*.*$"), TokenType.ATTRIBUTE_LINE),
    (re.compile(r"^\[[^\]]+\]$"), TokenType.ATTRIBUTE_BLOCK_LINE),
    (re.compile(r"^----\w*$"), TokenType.CODE_BLOCK_DELIMITER),
    (
        re.compile(r"^(NOTE|TIP|IMPORTANT|WARNING|CAUTION):\s*.*$"),
        TokenType.ADMONITION_BLOCK,
    ),
    (re.compile(r"^toc::\s*\[.*\]$"), TokenType.TABLE_OF_CONTENTS),
    (re.compile(r"^\w+::[^\[]*\[[^\]]*\]$"), TokenType.BLOCK_MACRO),
    (re.compile(r"^[^:\[\]]+::\s*.*$"), TokenType.DESCRIPTION_LIST_ITEM),
    # Delimiters without a counterpart in the table above
    (re.compile(r"^--$"), TokenType.OPEN_DELIMITER),
    (re.compile(r"^\.{4,}$"), TokenType.LITERAL_DELIMITER),
    (re.compile(r"^\+{4,}$"), TokenType.PASSTHROUGH_DELIMITER),
)


def classify_line(text: str) -> TokenType:
    """Classify a trimmed, non-empty line.

    Args:
        text: Line content with surrounding whitespace removed

    Returns:
        The first matching TokenType, or TEXT when nothing matches.

    Examples:
        >>> classify_line("== Install")
        <TokenType.HEADER: ...>
        >>> classify_line("image::logo.png[Logo]")
        <TokenType.BLOCK_MACRO: ...>
        >>> classify_line("Just words")
        <TokenType.TEXT: ...>
    """
    for pattern, token_type in LINE_CLASSIFIERS:
        if pattern.match(text):
            return token_type
    return TokenType.TEXT


__all__ = ["LINE_CLASSIFIERS", "classify_line"]
