"""Token and TokenType definitions for the Tintero tokenizer.

The tokenizer classifies each source line and produces a stream of Token
objects that the parser consumes. Each Token has a type, the trimmed line
text, and its source position.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenType is an enum (inherently immutable).

"""

from dataclasses import dataclass
from enum import Enum, auto

from tintero.location import SourceLocation


class TokenType(Enum):
    """Token types produced by the tokenizer.

    One token per classified source line, plus NEW_LINE tokens for the
    line breaks between them and a single trailing EOF.

    """

    # Document structure
    EOF = auto()
    NEW_LINE = auto()
    EMPTY_LINE = auto()
    TEXT = auto()

    # Section titles
    HEADER = auto()  # == Title

    # Lists
    LIST_ITEM = auto()  # * item, 1. item
    DESCRIPTION_LIST_ITEM = auto()  # term:: description

    # Tables
    TABLE_DELIMITER = auto()  # |===
    TABLE_ROW = auto()  # |a |b

    # Delimited blocks
    BLOCK_QUOTE_DELIMITER = auto()  # ____
    SIDEBAR_DELIMITER = auto()  # ****
    EXAMPLE_DELIMITER = auto()  # ====
    OPEN_DELIMITER = auto()  # --
    LITERAL_DELIMITER = auto()  # ....
    PASSTHROUGH_DELIMITER = auto()  # ++++
    CODE_BLOCK_DELIMITER = auto()  # ---- or ----python

    # Attributes
    ATTRIBUTE_LINE = auto()  # :name: value
    ATTRIBUTE_BLOCK_LINE = auto()  # [source,python]

    # Single-line blocks
    ADMONITION_BLOCK = auto()  # NOTE: text
    TABLE_OF_CONTENTS = auto()  # toc::[]
    BLOCK_MACRO = auto()  # image::a.png[Alt]


# Tokens that carry no content between blocks.
BLANK_TOKENS = frozenset({TokenType.EMPTY_LINE, TokenType.NEW_LINE})


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the tokenizer.

    Attributes:
        type: The token type (from TokenType enum)
        value: The trimmed line text ("\\n" for NEW_LINE, "" for EOF)
        line: Line number (1-indexed)
        column: Column where the line text starts (1-indexed)
        position: Absolute start offset in the source (0-indexed)
        source_file: Optional source file path

    Thread Safety:
        Frozen dataclass ensures immutability for safe sharing.

    """

    type: TokenType
    value: str
    line: int
    column: int
    position: int
    source_file: str | None = None

    @property
    def location(self) -> SourceLocation:
        """Source location of this token."""
        return SourceLocation(
            lineno=self.line,
            col_offset=self.column,
            offset=self.position,
            source_file=self.source_file,
        )

    @property
    def is_blank(self) -> bool:
        """True for EMPTY_LINE and NEW_LINE tokens."""
        return self.type in BLANK_TOKENS

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.type.name}, {val!r}, {self.line}:{self.column})"
