"""Line-classifying tokenizer.

Scans the source one line at a time: a line is read whole, trimmed, and
classified against the ordered table in ``tintero.lexer.classifiers``.
Line breaks are reported as separate NEW_LINE tokens so the parser can
tell a paragraph continuation from a blank line.

Tokens are produced lazily, one per ``next_token()`` call. A Tokenizer
can be rewound to the beginning with ``reset()`` but not seeked.

Thread Safety:
Tokenizer instances hold cursor state. Create one per source string.

"""

from __future__ import annotations

from collections.abc import Iterator

from tintero.errors import ParseInputError
from tintero.lexer.classifiers import classify_line
from tintero.tokens import Token, TokenType

# Intra-line whitespace skipped before every token (never the newline).
_INLINE_WHITESPACE = frozenset(" \t\r\f\v")


class Tokenizer:
    """Turns AsciiDoc source into a stream of line-classified tokens.

    Usage:
            >>> tokenizer = Tokenizer("= Title\\n\\nSome text")
            >>> for token in tokenizer.tokenize():
            ...     print(token)
        Token(HEADER, '= Title', 1:1)
        Token(NEW_LINE, '\\n', 1:8)
        Token(EMPTY_LINE, '', 2:1)
        Token(NEW_LINE, '\\n', 2:1)
        Token(TEXT, 'Some text', 3:1)
        Token(EOF, '', 3:10)

    A blank line yields EMPTY_LINE followed by its NEW_LINE. Whitespace at
    the very end of the source yields nothing.

    """

    __slots__ = (
        "_source",
        "_source_len",
        "_pos",
        "_line",
        "_column",
        "_at_line_start",
        "_source_file",
        "_pending",
    )

    def __init__(self, source: str, source_file: str | None = None) -> None:
        """Initialize tokenizer with source text.

        Args:
            source: AsciiDoc source text
            source_file: Optional source file path for token locations

        Raises:
            ParseInputError: If source is None
        """
        self._source_file = source_file
        self._pending = 0
        self.reset(source)

    @property
    def source(self) -> str:
        return self._source

    @property
    def source_file(self) -> str | None:
        return self._source_file

    def reset(self, source: str) -> None:
        """Point the tokenizer at ``source`` and rewind to line 1, column 1."""
        if source is None:
            raise ParseInputError("Tokenizer source cannot be None")
        self._source = source
        self._source_len = len(source)
        self._pos = 0
        self._line = 1
        self._column = 1
        self._at_line_start = True

    def tokenize(self, source: str | None = None) -> Iterator[Token]:
        """Yield every token up to and including a single EOF.

        Args:
            source: New source to tokenize; the current one when omitted

        Yields:
            Token objects one at a time
        """
        if source is not None:
            self.reset(source)
        while True:
            token = self.next_token()
            yield token
            if token.type is TokenType.EOF:
                return

    def line_text(self, token: Token) -> str:
        """Return the untrimmed source line a token was read from.

        Leading indentation is kept (listing and literal blocks need it);
        trailing whitespace is dropped.
        """
        start = token.position - (token.column - 1)
        end = self._source.find("\n", start)
        if end == -1:
            end = self._source_len
        return self._source[start:end].rstrip()

    def next_token(self) -> Token:
        """Return the next token; EOF once (and every time after) input is used up."""
        self._skip_whitespace()

        if self._pos >= self._source_len:
            return self._make_token(TokenType.EOF, "")

        if self._source[self._pos] == "\n":
            if self._at_line_start:
                # Blank line: report it, leave the newline for the next call.
                self._at_line_start = False
                return self._make_token(TokenType.EMPTY_LINE, "")
            token = self._make_token(TokenType.NEW_LINE, "\n")
            self._pos += 1
            self._line += 1
            self._column = 1
            self._at_line_start = True
            return token

        if self._at_line_start:
            self._at_line_start = False
            text = self._read_line()
            if not text:
                return self._make_token(TokenType.EMPTY_LINE, "", consume=True)
            return self._make_token(classify_line(text), text, consume=True)

        text = self._read_line()
        return self._make_token(TokenType.TEXT, text, consume=True)

    # =========================================================================
    # Cursor helpers
    # =========================================================================

    def _skip_whitespace(self) -> None:
        source = self._source
        while self._pos < self._source_len and source[self._pos] in _INLINE_WHITESPACE:
            self._pos += 1
            self._column += 1

    def _read_line(self) -> str:
        """Consume up to (not including) the next newline; return it trimmed.

        The cursor stays where the line text started until the token is
        built, so ``_make_token`` can record the start position; the
        actual advance happens through ``_pending``.
        """
        end = self._source.find("\n", self._pos)
        if end == -1:
            end = self._source_len
        raw = self._source[self._pos : end]
        self._pending = end - self._pos
        return raw.strip()

    def _make_token(self, token_type: TokenType, value: str, consume: bool = False) -> Token:
        token = Token(
            type=token_type,
            value=value,
            line=self._line,
            column=self._column,
            position=self._pos,
            source_file=self._source_file,
        )
        if consume:
            step = self._pending
            self._pos += step
            self._column += step
        return token


__all__ = ["Tokenizer"]
