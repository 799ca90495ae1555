"""Recursive descent parser producing the Tintero document tree.

Consumes the token stream from the Tokenizer (through a ParseContext) and
builds the typed, mutable document tree.

Architecture:
The parser uses a mixin-based design for separation of concerns:
- `MacroParsingMixin`: Block macros, ``include::`` expansion, ``toc::[]``
- `InlineParsingMixin`: Inline spans (strong, emphasis, links, footnotes)
- `BlockParsingMixin`: Block-level content (sections, lists, tables, blocks)

Thread Safety:
- All per-parse state lives in the ParseContext created by each call
- Configuration is read from ContextVar (thread-local)
- A Parser instance can be shared between threads

"""

from __future__ import annotations

import os
import re
from collections.abc import Iterator

from tintero.config import ParseConfig, get_parse_config
from tintero.context import ParseContext
from tintero.errors import ParseInputError
from tintero.include import IncludeProcessor
from tintero.lexer import Tokenizer
from tintero.location import SourceLocation
from tintero.nodes import Document, Node, TableOfContents
from tintero.parsing import BlockParsingMixin, InlineParsingMixin, MacroParsingMixin
from tintero.tokens import TokenType
from tintero.utils.logger import get_logger
from tintero.visitor import build_toc_entries, collect_sections

logger = get_logger(__name__)

_DOCUMENT_TITLE = re.compile(r"^=\s+(.+?)(?:\s+=)?$")

# Document attributes that fill the DocumentHeader fields.
_HEADER_ATTRIBUTES = (
    ("author", "author"),
    ("email", "email"),
    ("revision", "revnumber"),
    ("date", "revdate"),
)


class Parser(
    MacroParsingMixin,
    InlineParsingMixin,
    BlockParsingMixin,
):
    """Recursive descent parser for AsciiDoc.

    Builds a Document from source text, a file, or a single fragment.

    Usage:
            >>> parser = Parser()
            >>> doc = parser.parse("= Guide\\n\\n== Install\\n\\nRun *make*.")
            >>> doc.header.title
            'Guide'
            >>> [e.element_type for e in doc.elements]
            ['section', 'paragraph']

    Thread Safety:
        The parser keeps no per-parse state: every call builds its own
        ParseContext, so one instance may serve concurrent calls.
        Configuration is read from ContextVar (thread-local).

    """

    __slots__ = ("_include_processor",)

    def __init__(self) -> None:
        self._include_processor = IncludeProcessor(self)

    @property
    def _config(self) -> ParseConfig:
        """Get current parse configuration (thread-local)."""
        return get_parse_config()

    @property
    def include_processor(self) -> IncludeProcessor:
        return self._include_processor

    # =========================================================================
    # Entry points
    # =========================================================================

    def parse(
        self,
        source: str,
        *,
        base_path: str | None = None,
        source_file: str | None = None,
    ) -> Document:
        """Parse AsciiDoc source into a Document.

        Args:
            source: AsciiDoc source text
            base_path: Directory (or file) that relative includes resolve
                against; defaults to the directory of ``source_file``, then
                the working directory
            source_file: Optional source file path for locations and errors

        Returns:
            Document root node

        Raises:
            ParseInputError: ``source`` is None, empty or whitespace only
            ParseError: A construct is malformed, or an include is circular,
                too deep, or (with ``strict_includes``) missing
        """
        if source is None or not source.strip():
            raise ParseInputError("Input cannot be null or empty", source_file=source_file)

        include_stack: tuple[str, ...] = ()
        current_file: str | None = None
        if source_file is not None:
            current_file = os.path.abspath(source_file)
            include_stack = (current_file,)
        if base_path is None and current_file is not None:
            base_path = os.path.dirname(current_file)

        logger.debug("Parsing %d chars (base path %s)", len(source), base_path or ".")
        context = ParseContext(
            Tokenizer(source, source_file=source_file),
            base_path=base_path,
            current_file_path=current_file,
            include_stack=include_stack,
        )
        document = self._parse_document(context)
        logger.debug(
            "Parsed %d top-level elements, %d footnotes",
            len(document.elements),
            len(context.footnotes),
        )
        return document

    def parse_file(self, path: str | os.PathLike[str], *, base_path: str | None = None) -> Document:
        """Read ``path`` as UTF-8 and parse it.

        The file's directory becomes the include base path unless
        ``base_path`` is given, and the file itself starts the include
        stack, so a file that includes itself is reported as a cycle.

        Raises:
            ParseInputError: The path is empty or the file has no content
            OSError: The file cannot be opened
        """
        path = os.fspath(path)
        if not path:
            raise ParseInputError("File path cannot be null or empty")
        with open(path, encoding="utf-8") as f:
            source = f.read()
        return self.parse(source, base_path=base_path, source_file=path)

    def parse_element(self, source: str | ParseContext) -> Node | None:
        """Parse one element.

        Given a string, parses its first element in isolation (leading blank
        lines are skipped) and returns None for empty input. Given a
        ParseContext, this is the per-token dispatcher: it parses the
        element at the current token and leaves the context after it.
        """
        if isinstance(source, ParseContext):
            return self._parse_element(source)
        if not source:
            return None
        context = ParseContext(Tokenizer(source))
        context.skip_blank_lines()
        while not context.at_end:
            element = self._parse_element(context)
            if element is not None:
                return element
        return None

    # =========================================================================
    # Document driver
    # =========================================================================

    def _parse_document(self, context: ParseContext) -> Document:
        document = Document(
            location=SourceLocation(
                lineno=1, col_offset=1, source_file=context.tokenizer.source_file
            )
        )
        context.push_element(document)

        context.skip_blank_lines()
        token = context.current_token
        if token.type is TokenType.HEADER:
            title = _DOCUMENT_TITLE.match(token.value)
            if title is not None:
                document.header.title = title.group(1).strip()
                context.advance()

        while not context.at_end:
            element = self._parse_element(context)
            if element is not None:
                document.add_child(element)

        context.pop_element()
        self._finish_document(document, context)
        return document

    def _finish_document(self, document: Document, context: ParseContext) -> None:
        """Copy document attributes into place and fill TOC entries."""
        for name, value in context.global_attributes.items():
            document.attributes[name] = value
            document.header.attributes[name] = value
        for field_name, attribute in _HEADER_ATTRIBUTES:
            value = context.global_attributes.get_attribute(attribute)
            if value is not None:
                setattr(document.header, field_name, value)

        if not self._config.populate_toc:
            return
        tocs = [n for n in _walk(document) if isinstance(n, TableOfContents)]
        if not tocs:
            return
        sections = collect_sections(document)
        for toc in tocs:
            toc.clear_children()
            toc.add_children(build_toc_entries(sections, toc.max_depth))


def _walk(node: Node) -> Iterator[Node]:
    for child in node.children:
        yield child
        yield from _walk(child)


__all__ = ["Parser"]
