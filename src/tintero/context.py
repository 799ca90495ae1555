"""Parse context: the cursor and per-parse state shared by all parse routines.

A ParseContext wraps one Tokenizer and keeps the current token plus a short
lookahead buffer. Everything that must survive across included files (the
document attributes, the footnote numbering) lives in objects the context
shares with the child contexts it derives for includes.

Thread Safety:
A ParseContext belongs to a single parse call. Nothing in it is global,
so concurrent parses on different threads never share state.

"""

from __future__ import annotations

from dataclasses import dataclass, field

from tintero.errors import ParseError
from tintero.lexer import Tokenizer
from tintero.nodes import DocumentAttributes, Node
from tintero.tokens import BLANK_TOKENS, Token, TokenType


@dataclass(slots=True)
class FootnoteRegistry:
    """Sequential footnote labels for one document.

    Every distinct footnote id gets the next number the first time it is
    seen; later references to the same id reuse that number.

        >>> registry = FootnoteRegistry()
        >>> registry.next_anonymous_id()
        '_footnotedef_1'
        >>> registry.label_for("_footnotedef_1"), registry.label_for("disclaimer")
        ('1', '2')
        >>> registry.label_for("disclaimer")
        '2'

    """

    _counter: int = 0
    _labels: dict[str, str] = field(default_factory=dict)

    def next_anonymous_id(self) -> str:
        """Id for a footnote:[text] without an explicit id."""
        return f"_footnotedef_{self._counter + 1}"

    def label_for(self, footnote_id: str) -> str:
        label = self._labels.get(footnote_id)
        if label is None:
            self._counter += 1
            label = str(self._counter)
            self._labels[footnote_id] = label
        return label

    def __len__(self) -> int:
        return self._counter


class ParseContext:
    """Cursor over the token stream plus document-wide parse state.

    Attributes:
        global_attributes: Attributes set by ``:name: value`` lines
        footnotes: Footnote numbering for the whole document
        current_file_path: Absolute path of the file being parsed, if any
        base_path: Directory (or file) relative includes resolve against
        include_stack: Absolute paths of the files currently being expanded
        block_title: Pending ``.Title`` line for the next block

    """

    __slots__ = (
        "_tokenizer",
        "_tokens",
        "_current",
        "_lookahead",
        "_elements",
        "global_attributes",
        "footnotes",
        "current_file_path",
        "base_path",
        "include_stack",
        "block_title",
    )

    def __init__(
        self,
        tokenizer: Tokenizer,
        *,
        base_path: str | None = None,
        current_file_path: str | None = None,
        include_stack: tuple[str, ...] = (),
        global_attributes: DocumentAttributes | None = None,
        footnotes: FootnoteRegistry | None = None,
    ) -> None:
        if tokenizer is None:
            raise ParseError("ParseContext requires a tokenizer")
        self._tokenizer = tokenizer
        self._tokens = tokenizer.tokenize()
        self._lookahead: list[Token] = []
        self._current = next(self._tokens)
        self._elements: list[Node] = []
        self.global_attributes = (
            global_attributes if global_attributes is not None else DocumentAttributes()
        )
        self.footnotes = footnotes if footnotes is not None else FootnoteRegistry()
        self.current_file_path = current_file_path
        self.base_path = base_path
        self.include_stack = tuple(include_stack)
        self.block_title: str | None = None

    def derive(
        self,
        tokenizer: Tokenizer,
        file_path: str,
        include_stack: tuple[str, ...],
    ) -> ParseContext:
        """Child context for an included file.

        Shares the document attributes and footnote numbering with this
        context; the included file becomes the base for its own includes.
        """
        return ParseContext(
            tokenizer,
            base_path=file_path,
            current_file_path=file_path,
            include_stack=include_stack,
            global_attributes=self.global_attributes,
            footnotes=self.footnotes,
        )

    # =========================================================================
    # Token navigation
    # =========================================================================

    @property
    def tokenizer(self) -> Tokenizer:
        return self._tokenizer

    @property
    def current_token(self) -> Token:
        return self._current

    @property
    def at_end(self) -> bool:
        return self._current.type is TokenType.EOF

    def advance(self) -> Token:
        """Move to the next token and return it. Stays on EOF once reached."""
        if self._current.type is TokenType.EOF:
            return self._current
        if self._lookahead:
            self._current = self._lookahead.pop(0)
        else:
            self._current = next(self._tokens)
        return self._current

    def peek(self, offset: int = 1) -> Token:
        """Token ``offset`` positions after the current one (EOF past the end)."""
        if self._current.type is TokenType.EOF:
            return self._current
        while len(self._lookahead) < offset:
            if self._lookahead and self._lookahead[-1].type is TokenType.EOF:
                return self._lookahead[-1]
            self._lookahead.append(next(self._tokens))
        return self._lookahead[offset - 1]

    def accept(self, token_type: TokenType) -> bool:
        """Consume the current token if it has ``token_type``."""
        if self._current.type is token_type:
            self.advance()
            return True
        return False

    def expect(self, token_type: TokenType) -> Token:
        """Consume and return the current token, which must have ``token_type``.

        Raises:
            ParseError: The current token has a different type
        """
        token = self._current
        if token.type is not token_type:
            raise ParseError(
                f"Expected {token_type.name}, found {token.type.name}",
                token.line,
                token.column,
                self.current_file_path,
            )
        self.advance()
        return token

    def skip_blank_lines(self) -> None:
        while self._current.type in BLANK_TOKENS:
            self.advance()

    def line_text(self, token: Token | None = None) -> str:
        """Untrimmed source line of ``token`` (the current token by default)."""
        return self._tokenizer.line_text(token or self._current)

    def take_block_title(self) -> str | None:
        """Return the pending ``.Title`` and clear it."""
        title, self.block_title = self.block_title, None
        return title

    def error(self, message: str, token: Token | None = None) -> ParseError:
        """ParseError anchored at ``token`` (the current token by default)."""
        token = token or self._current
        return ParseError(message, token.line, token.column, self.current_file_path)

    # =========================================================================
    # Element stack
    # =========================================================================

    def push_element(self, element: Node) -> None:
        self._elements.append(element)

    def pop_element(self) -> Node | None:
        return self._elements.pop() if self._elements else None

    def peek_element(self) -> Node | None:
        return self._elements[-1] if self._elements else None

    @property
    def depth(self) -> int:
        """Number of files being expanded above this context."""
        return len(self.include_stack)


__all__ = ["FootnoteRegistry", "ParseContext"]
