"""
Tintero: AsciiDoc Parser for Python

Turns AsciiDoc markup into a typed document tree and renders it to HTML.
Supports sections, lists, tables, delimited blocks, admonitions, macros,
footnotes and ``include::`` directives with line, tag, indent and
level-offset filtering. Zero runtime dependencies.

Quick Start:
    >>> from tintero import parse, render
    >>> doc = parse("= Guide\\n\\n== Install\\n\\nRun *make*.")
    >>> doc.header.title
    'Guide'
    >>> print(render(doc))
    <h1>Guide</h1>
    <h3 id="install">Install</h3>
    <p>Run <strong>make</strong>.</p>

    >>> # Or use the high-level AsciiDoc class
    >>> from tintero import AsciiDoc
    >>> adoc = AsciiDoc(strict_includes=True)
    >>> html = adoc("NOTE: Mind the gap.")

Installation:
    pip install tintero              # Core parser and HTML renderer (zero deps)
    pip install tintero[syntax]      # + Syntax highlighting via Rosettes
"""

import os

from tintero.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from tintero.errors import (
    CircularIncludeError,
    IncludeDepthError,
    IncludeError,
    ParseError,
    ParseInputError,
    RenderError,
    TinteroError,
)
from tintero.lexer import Tokenizer
from tintero.location import SourceLocation
from tintero.nodes import (
    Admonition,
    AdmonitionType,
    Anchor,
    Block,
    BlockQuote,
    CodeBlock,
    CrossReference,
    DescriptionList,
    DescriptionListItem,
    Document,
    DocumentAttributes,
    DocumentHeader,
    Emphasis,
    Example,
    Footnote,
    Highlight,
    Image,
    ImageMacro,
    IncludeMacro,
    Inline,
    InlineCode,
    Link,
    List,
    ListItem,
    Listing,
    ListType,
    Literal,
    Macro,
    MacroType,
    Node,
    Open,
    Paragraph,
    Passthrough,
    Section,
    Sidebar,
    Strong,
    Subscript,
    Superscript,
    Table,
    TableCell,
    TableHeader,
    TableOfContents,
    TableOfContentsEntry,
    TableRow,
    Text,
    Verse,
    VideoMacro,
)
from tintero.parser import Parser
from tintero.renderers.html import HtmlRenderer
from tintero.renderers.protocol import ASTRenderer
from tintero.tokens import Token, TokenType
from tintero.visitor import BaseVisitor, collect_sections

__version__ = "0.1.0"


def parse(
    source: str,
    *,
    base_path: str | None = None,
    source_file: str | None = None,
) -> Document:
    """Parse AsciiDoc source into a Document.

    Args:
        source: AsciiDoc source text
        base_path: Directory that relative includes resolve against
        source_file: Optional source file path for error messages

    Returns:
        Document root node

    Example:
        >>> doc = parse(":toc:\\n\\n== Intro")
        >>> doc.attributes.get_attribute("toc")
        'true'
    """
    return Parser().parse(source, base_path=base_path, source_file=source_file)


def parse_file(path: str | os.PathLike[str], *, base_path: str | None = None) -> Document:
    """Read and parse an AsciiDoc file; its directory is the include base."""
    return Parser().parse_file(path, base_path=base_path)


def parse_element(source: str) -> Node | None:
    """Parse the first element of an AsciiDoc fragment (None for empty input)."""
    return Parser().parse_element(source)


def render(doc: Document, *, highlight: bool = False, standalone: bool = False) -> str:
    """Render a Document to HTML.

    Args:
        doc: Document to render
        highlight: Enable syntax highlighting for code blocks
        standalone: Wrap the output in a complete HTML5 page

    Returns:
        HTML string
    """
    return HtmlRenderer(highlight=highlight, standalone=standalone).render(doc)


class AsciiDoc:
    """High-level AsciiDoc processor combining parser and renderer.

    Usage:
        >>> adoc = AsciiDoc()
        >>> adoc("Hello *World*")
        '<p>Hello <strong>World</strong></p>\\n'

        >>> # Access the tree
        >>> doc = adoc.parse("== Heading")
        >>> doc.elements[0].level
        2

        >>> # Fail on missing includes instead of leaving placeholders
        >>> adoc = AsciiDoc(strict_includes=True)

    Thread Safety:
        Uses ContextVar for thread-local configuration. Safe to use multiple
        AsciiDoc instances concurrently from different threads.

    """

    __slots__ = ("_config", "_highlight", "_parser", "_standalone")

    def __init__(
        self,
        *,
        highlight: bool = False,
        standalone: bool = False,
        strict_includes: bool = False,
        max_include_depth: int = 64,
        populate_toc: bool = True,
        implicit_table_header: bool = True,
        section_ids: bool = True,
    ) -> None:
        """Initialize AsciiDoc processor.

        Args:
            highlight: Enable syntax highlighting for code blocks
            standalone: Render complete HTML5 pages
            strict_includes: Raise when a non-optional include is missing
            max_include_depth: Maximum nesting of include directives
            populate_toc: Fill ``toc::[]`` entries from the document sections
            implicit_table_header: Treat a first table row followed by a
                blank line as the header row
            section_ids: Give sections an ``id`` attribute from their title
        """
        self._highlight = highlight
        self._standalone = standalone
        self._parser = Parser()

        # Build immutable config once (thread-safe, reused across calls)
        self._config = ParseConfig(
            strict_includes=strict_includes,
            max_include_depth=max_include_depth,
            populate_toc=populate_toc,
            implicit_table_header=implicit_table_header,
            section_ids=section_ids,
        )

    @property
    def config(self) -> ParseConfig:
        return self._config

    def __call__(self, source: str) -> str:
        """Parse and render AsciiDoc in one call."""
        return self.render(self.parse(source))

    def parse(
        self,
        source: str,
        *,
        base_path: str | None = None,
        source_file: str | None = None,
    ) -> Document:
        """Parse AsciiDoc source with this processor's configuration."""
        with parse_config_context(self._config):
            return self._parser.parse(source, base_path=base_path, source_file=source_file)

    def parse_file(
        self, path: str | os.PathLike[str], *, base_path: str | None = None
    ) -> Document:
        """Parse an AsciiDoc file with this processor's configuration."""
        with parse_config_context(self._config):
            return self._parser.parse_file(path, base_path=base_path)

    def render(self, doc: Document) -> str:
        """Render a Document to HTML."""
        renderer = HtmlRenderer(highlight=self._highlight, standalone=self._standalone)
        return renderer.render(doc)


__all__ = [  # noqa: RUF022 - grouped by category for maintainability
    # Version
    "__version__",
    # Core API
    "parse",
    "parse_file",
    "parse_element",
    "render",
    # High-level
    "AsciiDoc",
    # Document and blocks
    "Node",
    "Block",
    "Document",
    "DocumentAttributes",
    "DocumentHeader",
    "Section",
    "Paragraph",
    "List",
    "ListItem",
    "ListType",
    "DescriptionList",
    "DescriptionListItem",
    "Table",
    "TableHeader",
    "TableRow",
    "TableCell",
    "CodeBlock",
    "Listing",
    "Literal",
    "Verse",
    "Passthrough",
    "BlockQuote",
    "Sidebar",
    "Example",
    "Open",
    "Admonition",
    "AdmonitionType",
    "TableOfContents",
    "TableOfContentsEntry",
    # Inline nodes
    "Inline",
    "Text",
    "Emphasis",
    "Strong",
    "Highlight",
    "Superscript",
    "Subscript",
    "InlineCode",
    "Link",
    "Image",
    "Anchor",
    "CrossReference",
    "Footnote",
    # Macros
    "Macro",
    "MacroType",
    "ImageMacro",
    "VideoMacro",
    "IncludeMacro",
    # Parser components
    "Tokenizer",
    "Parser",
    "Token",
    "TokenType",
    # Renderer
    "HtmlRenderer",
    "ASTRenderer",
    # Visitor
    "BaseVisitor",
    "collect_sections",
    # Configuration (ContextVar-based)
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    # Errors
    "TinteroError",
    "ParseError",
    "ParseInputError",
    "IncludeError",
    "CircularIncludeError",
    "IncludeDepthError",
    "RenderError",
    # Location
    "SourceLocation",
]
