"""Typed document tree for Tintero.

All nodes are slotted dataclasses. Unlike a frozen AST, the tree is built
incrementally by the parser, so nodes are mutable containers:

- ``children`` is an ordered list owned by the node and exposed as a tuple;
- ``parent`` is a weak back-reference kept consistent by ``add_child`` and
  ``remove_child``;
- ``element_type`` is a class-level constant.

Node Hierarchy:
Node (base)
├── Document
├── Block (block-level elements)
│   ├── Section
│   ├── Paragraph
│   ├── List / ListItem
│   ├── DescriptionList / DescriptionListItem
│   ├── Table / TableHeader / TableRow / TableCell
│   ├── CodeBlock, Listing, Literal, Verse, Passthrough
│   ├── BlockQuote
│   ├── Sidebar, Example, Open
│   ├── Admonition
│   └── TableOfContents / TableOfContentsEntry
├── Inline (span-level elements)
│   ├── Text
│   ├── Emphasis, Strong, Highlight, Superscript, Subscript
│   ├── InlineCode, Link, Image
│   └── Anchor, CrossReference, Footnote
└── Macro (block or inline)
    ├── ImageMacro
    ├── VideoMacro
    └── IncludeMacro

Thread Safety:
Nodes are mutable. A tree belongs to the parse call that built it; share it
across threads only after parsing is finished and only for reading.

"""

from __future__ import annotations

import posixpath
import weakref
from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

from tintero.location import SourceLocation
from tintero.utils.text import parse_bool, parse_int, slugify

# =============================================================================
# Attributes
# =============================================================================


class DocumentAttributes(MutableMapping[str, str]):
    """String-keyed attribute table for documents and elements.

    Supports both the named accessors and plain mapping access:

        >>> attrs = DocumentAttributes()
        >>> attrs.set_attribute("toc", "true")
        >>> attrs["toc"]
        'true'
        >>> attrs.get_attribute("missing", "n/a")
        'n/a'

    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(values) if values else {}

    def get_attribute(self, name: str, default: str | None = None) -> str | None:
        return self._values.get(name, default)

    def has_attribute(self, name: str) -> bool:
        return name in self._values

    def set_attribute(self, name: str, value: str) -> None:
        self._values[name] = value

    def remove_attribute(self, name: str) -> bool:
        """Remove ``name``; return False if it was not set."""
        return self._values.pop(name, None) is not None

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._values)

    def __getitem__(self, name: str) -> str:
        return self._values[name]

    def __setitem__(self, name: str, value: str) -> None:
        self._values[name] = value

    def __delitem__(self, name: str) -> None:
        del self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"DocumentAttributes({self._values!r})"


# =============================================================================
# Enumerations
# =============================================================================


class ListType(Enum):
    ORDERED = "ordered"
    UNORDERED = "unordered"
    DEFINITION = "definition"


class AdmonitionType(Enum):
    NOTE = "note"
    TIP = "tip"
    IMPORTANT = "important"
    WARNING = "warning"
    CAUTION = "caution"

    @property
    def label(self) -> str:
        """Display label, e.g. "Warning"."""
        return self.value.capitalize()


class MacroType(Enum):
    BLOCK = "block"
    INLINE = "inline"


# =============================================================================
# Base Node
# =============================================================================


@dataclass(slots=True, weakref_slot=True, eq=False)
class Node:
    """Base class for all tree nodes.

    Nodes compare by identity: two paragraphs with the same text are still
    different elements of the tree.

    """

    element_type: ClassVar[str] = "element"

    location: SourceLocation = field(
        default_factory=SourceLocation.unknown, kw_only=True, repr=False
    )
    attributes: DocumentAttributes = field(
        default_factory=DocumentAttributes, kw_only=True, repr=False
    )
    _children: list[Node] = field(default_factory=list, init=False, repr=False)
    _parent: weakref.ref[Node] | None = field(default=None, init=False, repr=False)

    @property
    def children(self) -> tuple[Node, ...]:
        return tuple(self._children)

    @property
    def parent(self) -> Node | None:
        ref = self._parent
        return ref() if ref is not None else None

    def add_child(self, child: Node) -> Node:
        """Append ``child``, detaching it from any previous parent.

        Returns the child so calls can be chained into assignments.
        """
        if child is self:
            raise ValueError(f"{self.element_type} cannot be its own child")
        previous = child.parent
        if previous is not None:
            previous.remove_child(child)
        self._children.append(child)
        child._parent = weakref.ref(self)
        return child

    def add_children(self, children: Iterable[Node]) -> None:
        for child in children:
            self.add_child(child)

    def remove_child(self, child: Node) -> bool:
        """Detach ``child``; return False if it was not a child of this node."""
        for index, existing in enumerate(self._children):
            if existing is child:
                del self._children[index]
                child._parent = None
                return True
        return False

    def clear_children(self) -> None:
        for child in self._children:
            child._parent = None
        self._children.clear()


@dataclass(slots=True, eq=False)
class Block(Node):
    """Base class for block-level elements."""


@dataclass(slots=True, eq=False)
class Inline(Node):
    """Base class for span-level elements inside paragraphs and items."""


# =============================================================================
# Document
# =============================================================================


@dataclass(slots=True)
class DocumentHeader:
    """Document title and metadata.

    ``author``, ``email``, ``revision`` and ``date`` are filled from the
    ``author``, ``email``, ``revnumber`` and ``revdate`` attributes.

    """

    title: str = ""
    author: str = ""
    email: str = ""
    revision: str = ""
    date: str = ""
    attributes: DocumentAttributes = field(default_factory=DocumentAttributes)


@dataclass(slots=True, eq=False)
class Document(Node):
    """Root of the tree: the header plus the top-level elements."""

    element_type: ClassVar[str] = "document"

    header: DocumentHeader = field(default_factory=DocumentHeader)

    @property
    def elements(self) -> tuple[Node, ...]:
        return tuple(self._children)

    @property
    def title(self) -> str:
        return self.header.title


# =============================================================================
# Inline Nodes
# =============================================================================


@dataclass(slots=True, eq=False)
class Text(Inline):
    """Plain text."""

    element_type: ClassVar[str] = "text"

    content: str


@dataclass(slots=True, eq=False)
class Emphasis(Inline):
    """_text_ or __text__ → <em>."""

    element_type: ClassVar[str] = "emphasis"

    text: str


@dataclass(slots=True, eq=False)
class Strong(Inline):
    """*text* or **text** → <strong>."""

    element_type: ClassVar[str] = "strong"

    text: str


@dataclass(slots=True, eq=False)
class Highlight(Inline):
    """#text# → <mark>."""

    element_type: ClassVar[str] = "highlight"

    text: str


@dataclass(slots=True, eq=False)
class Superscript(Inline):
    """^text^ → <sup>."""

    element_type: ClassVar[str] = "superscript"

    text: str


@dataclass(slots=True, eq=False)
class Subscript(Inline):
    """~text~ → <sub>."""

    element_type: ClassVar[str] = "subscript"

    text: str


@dataclass(slots=True, eq=False)
class InlineCode(Inline):
    """`code` → <code>."""

    element_type: ClassVar[str] = "inline_code"

    content: str


@dataclass(slots=True, eq=False)
class Link(Inline):
    """https://example.org[text]; ``text`` falls back to the URL."""

    element_type: ClassVar[str] = "link"

    url: str
    text: str = ""
    title: str | None = None


@dataclass(slots=True, eq=False)
class Image(Inline):
    """Inline image: image:src[alt]."""

    element_type: ClassVar[str] = "image"

    src: str
    alt: str = ""
    title: str | None = None


@dataclass(slots=True, eq=False)
class Anchor(Inline):
    """[[id]] or [[id,label]]."""

    element_type: ClassVar[str] = "anchor"

    id: str
    label: str = ""


@dataclass(slots=True, eq=False)
class CrossReference(Inline):
    """<<target>> or <<target,text>>."""

    element_type: ClassVar[str] = "cross_reference"

    target_id: str
    link_text: str = ""


@dataclass(slots=True, eq=False)
class Footnote(Inline):
    """footnote:[text], footnote:id[text] or the reference form footnote:id[].

    ``reference_label`` is the number shown in the text; references share the
    label of the definition with the same id.

    """

    element_type: ClassVar[str] = "footnote"

    id: str
    text: str = ""
    reference_label: str = ""
    is_reference: bool = False


# =============================================================================
# Block Nodes
# =============================================================================


@dataclass(slots=True, eq=False)
class Section(Block):
    """Section title plus the elements nested under it.

    ``level`` is the number of ``=`` characters. Level 0 marks a heading-less
    container synthesized when an include expands to several elements.

    """

    element_type: ClassVar[str] = "section"

    title: str
    level: int = 1
    id: str | None = None

    @property
    def anchor_id(self) -> str:
        return self.id or slugify(self.title)

    @property
    def is_container(self) -> bool:
        return self.level == 0


@dataclass(slots=True, eq=False)
class Paragraph(Block):
    """Paragraph; children are inline nodes, ``text`` is the source fallback."""

    element_type: ClassVar[str] = "paragraph"

    text: str = ""


@dataclass(slots=True, eq=False)
class List(Block):
    """Ordered or unordered list; children are ListItem nodes."""

    element_type: ClassVar[str] = "list"

    list_type: ListType = ListType.UNORDERED
    start_number: int = 1

    @property
    def items(self) -> tuple[ListItem, ...]:
        return tuple(c for c in self._children if isinstance(c, ListItem))

    @property
    def ordered(self) -> bool:
        return self.list_type is ListType.ORDERED


@dataclass(slots=True, eq=False)
class ListItem(Block):
    """List item; children are the inline nodes parsed from ``text``."""

    element_type: ClassVar[str] = "list_item"

    text: str
    level: int = 1
    is_checkbox: bool = False
    is_checked: bool = False


@dataclass(slots=True, eq=False)
class DescriptionList(Block):
    """term:: description pairs; children are DescriptionListItem nodes."""

    element_type: ClassVar[str] = "description_list"

    @property
    def list_type(self) -> ListType:
        return ListType.DEFINITION

    @property
    def items(self) -> tuple[DescriptionListItem, ...]:
        return tuple(c for c in self._children if isinstance(c, DescriptionListItem))


@dataclass(slots=True, eq=False)
class DescriptionListItem(Block):
    element_type: ClassVar[str] = "description_list_item"

    term: str
    description: str = ""


@dataclass(slots=True, eq=False)
class TableCell(Block):
    """Table cell; children are the inline nodes parsed from ``content``."""

    element_type: ClassVar[str] = "table_cell"

    content: str
    is_header: bool = False
    col_span: int = 1
    row_span: int = 1
    alignment: str | None = None


@dataclass(slots=True, eq=False)
class TableRow(Block):
    element_type: ClassVar[str] = "table_row"

    @property
    def cells(self) -> tuple[TableCell, ...]:
        return tuple(c for c in self._children if isinstance(c, TableCell))


@dataclass(slots=True, eq=False)
class TableHeader(TableRow):
    """The header row of a table; its cells have ``is_header`` set."""

    element_type: ClassVar[str] = "table_header"


@dataclass(slots=True, eq=False)
class Table(Block):
    """Table; children are body rows, ``header`` is the optional header row."""

    element_type: ClassVar[str] = "table"

    header: TableHeader | None = None

    @property
    def rows(self) -> tuple[TableRow, ...]:
        return tuple(c for c in self._children if isinstance(c, TableRow))

    def set_header(self, header: TableHeader | None) -> None:
        if self.header is not None:
            self.header._parent = None
        self.header = header
        if header is not None:
            previous = header.parent
            if previous is not None:
                previous.remove_child(header)
            header._parent = weakref.ref(self)


@dataclass(slots=True, eq=False)
class CodeBlock(Block):
    """---- delimited code, or [source,lang] listing."""

    element_type: ClassVar[str] = "code_block"

    content: str
    language: str | None = None


@dataclass(slots=True, eq=False)
class Listing(Block):
    element_type: ClassVar[str] = "listing"

    content: str
    title: str | None = None


@dataclass(slots=True, eq=False)
class Literal(Block):
    element_type: ClassVar[str] = "literal"

    content: str
    title: str | None = None


@dataclass(slots=True, eq=False)
class Verse(Block):
    """[verse, author, citation] block; line breaks are preserved."""

    element_type: ClassVar[str] = "verse"

    content: str
    title: str | None = None
    author: str | None = None
    citation: str | None = None


@dataclass(slots=True, eq=False)
class Passthrough(Block):
    """++++ block or [pass] paragraph; content is emitted verbatim."""

    element_type: ClassVar[str] = "passthrough"

    content: str
    title: str | None = None
    substitutions: str | None = None


@dataclass(slots=True, eq=False)
class BlockQuote(Block):
    element_type: ClassVar[str] = "block_quote"

    content: str = ""
    attribution: str = ""
    cite: str = ""


@dataclass(slots=True, eq=False)
class Sidebar(Block):
    element_type: ClassVar[str] = "sidebar"

    title: str | None = None


@dataclass(slots=True, eq=False)
class Example(Block):
    element_type: ClassVar[str] = "example"

    title: str | None = None


@dataclass(slots=True, eq=False)
class Open(Block):
    """-- delimited open block; ``masquerade_type`` is its declared style."""

    element_type: ClassVar[str] = "open"

    title: str | None = None
    masquerade_type: str | None = None


@dataclass(slots=True, eq=False)
class Admonition(Block):
    """NOTE: text, or a [NOTE] styled paragraph or example block.

    Children are inline nodes for the paragraph forms and block nodes for the
    compound (delimited) form.

    """

    element_type: ClassVar[str] = "admonition"

    admonition_type: AdmonitionType
    content: str = ""
    title: str | None = None


@dataclass(slots=True, eq=False)
class TableOfContentsEntry(Block):
    """One section in the TOC; children are entries for its subsections."""

    element_type: ClassVar[str] = "table_of_contents_entry"

    title: str
    level: int = 1
    anchor_id: str = ""

    @property
    def entries(self) -> tuple[TableOfContentsEntry, ...]:
        return tuple(c for c in self._children if isinstance(c, TableOfContentsEntry))


@dataclass(slots=True, eq=False)
class TableOfContents(Block):
    """toc::[] placeholder; children are the top-level entries."""

    element_type: ClassVar[str] = "table_of_contents"

    title: str = "Table of Contents"
    max_depth: int = 3

    @property
    def entries(self) -> tuple[TableOfContentsEntry, ...]:
        return tuple(c for c in self._children if isinstance(c, TableOfContentsEntry))


# =============================================================================
# Macros
# =============================================================================


@dataclass(slots=True, eq=False)
class Macro(Node):
    """name::target[params] (block) or name:target[params] (inline).

    Unrecognized macro names produce a plain Macro rather than an error.

    """

    element_type: ClassVar[str] = "macro"

    name: str
    target: str
    parameters: dict[str, str] = field(default_factory=dict)
    macro_type: MacroType = MacroType.BLOCK

    def get_parameter(self, key: str, default: str | None = None) -> str | None:
        return self.parameters.get(key, default)

    @property
    def is_inline(self) -> bool:
        return self.macro_type is MacroType.INLINE


@dataclass(slots=True, eq=False)
class ImageMacro(Macro):
    """image::src[alt, width, height, link=..., align=..., float=...]."""

    element_type: ClassVar[str] = "image_macro"

    name: str = field(default="image", init=False)

    @property
    def src(self) -> str:
        return self.target

    @property
    def alt(self) -> str:
        alt = self.parameters.get("alt")
        if alt is not None:
            return alt
        stem, _ = posixpath.splitext(posixpath.basename(self.target))
        return stem

    @property
    def title(self) -> str:
        return self.parameters.get("title", "")

    @property
    def width(self) -> int | None:
        return parse_int(self.parameters.get("width", self.parameters.get("param1")))

    @property
    def height(self) -> int | None:
        return parse_int(self.parameters.get("height", self.parameters.get("param2")))

    @property
    def link(self) -> str:
        return self.parameters.get("link", "")

    @property
    def align(self) -> str:
        return self.parameters.get("align", "")

    @property
    def float(self) -> str:
        return self.parameters.get("float", "")


_VIDEO_FORMATS = {
    ".mp4": "mp4",
    ".webm": "webm",
    ".ogg": "ogg",
    ".avi": "avi",
    ".mov": "mov",
}


@dataclass(slots=True, eq=False)
class VideoMacro(Macro):
    """video::src[width=..., height=..., poster=..., autoplay, controls, ...]."""

    element_type: ClassVar[str] = "video_macro"

    name: str = field(default="video", init=False)

    @property
    def src(self) -> str:
        return self.target

    @property
    def title(self) -> str:
        return self.parameters.get("title", "")

    @property
    def width(self) -> int | None:
        return parse_int(self.parameters.get("width"))

    @property
    def height(self) -> int | None:
        return parse_int(self.parameters.get("height"))

    @property
    def poster(self) -> str:
        return self.parameters.get("poster", "")

    @property
    def autoplay(self) -> bool:
        return parse_bool(self.parameters.get("autoplay"))

    @property
    def controls(self) -> bool:
        return parse_bool(self.parameters.get("controls"), default=True)

    @property
    def loop(self) -> bool:
        return parse_bool(self.parameters.get("loop"))

    @property
    def muted(self) -> bool:
        return parse_bool(self.parameters.get("muted"))

    @property
    def video_format(self) -> str:
        explicit = self.parameters.get("format")
        if explicit:
            return explicit
        _, ext = posixpath.splitext(self.target.lower())
        return _VIDEO_FORMATS.get(ext, "mp4")


@dataclass(slots=True, eq=False)
class IncludeMacro(Macro):
    """include::path[lines=..., tags=..., leveloffset=..., indent=..., optional=...].

    Stays in the tree only as a placeholder when the include could not be
    expanded (or expanded to nothing).

    """

    element_type: ClassVar[str] = "include_macro"

    name: str = field(default="include", init=False)

    @property
    def file_path(self) -> str:
        return self.target

    @property
    def level_offset(self) -> str:
        return self.parameters.get("leveloffset", "")

    @property
    def lines(self) -> str:
        return self.parameters.get("lines", "")

    @property
    def tags(self) -> str:
        return self.parameters.get("tags", self.parameters.get("tag", ""))

    @property
    def indent_level(self) -> str:
        return self.parameters.get("indent", "")

    @property
    def optional(self) -> bool:
        if parse_bool(self.parameters.get("optional")):
            return True
        # opts=optional is the Asciidoctor spelling
        return "optional" in self.parameters.get("opts", "").split(",")


__all__ = [
    "Admonition",
    "AdmonitionType",
    "Anchor",
    "Block",
    "BlockQuote",
    "CodeBlock",
    "CrossReference",
    "DescriptionList",
    "DescriptionListItem",
    "Document",
    "DocumentAttributes",
    "DocumentHeader",
    "Emphasis",
    "Example",
    "Footnote",
    "Highlight",
    "Image",
    "ImageMacro",
    "IncludeMacro",
    "Inline",
    "InlineCode",
    "Link",
    "List",
    "ListItem",
    "ListType",
    "Listing",
    "Literal",
    "Macro",
    "MacroType",
    "Node",
    "Open",
    "Paragraph",
    "Passthrough",
    "Section",
    "Sidebar",
    "Strong",
    "Subscript",
    "Superscript",
    "Table",
    "TableCell",
    "TableHeader",
    "TableOfContents",
    "TableOfContentsEntry",
    "TableRow",
    "Text",
    "Verse",
    "VideoMacro",
]
