"""Tree visitor for Tintero documents.

Provides a base visitor class with match-based dispatch over every node
kind, plus ``collect_sections`` which the parser uses to fill
``toc::[]`` entries.

Example: collect all cross references:

    class XrefCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.targets: list[str] = []

        def visit_cross_reference(self, node: CrossReference) -> None:
            self.targets.append(node.target_id)

    collector = XrefCollector()
    collector.visit(doc)

Thread Safety:
    Visitors are NOT shared across threads by default (they may accumulate
    mutable state). Create a new visitor per thread.

"""

from typing import Generic, TypeVar

from tintero.nodes import (
    Admonition,
    Anchor,
    BlockQuote,
    CodeBlock,
    CrossReference,
    DescriptionList,
    DescriptionListItem,
    Document,
    Emphasis,
    Example,
    Footnote,
    Highlight,
    Image,
    ImageMacro,
    IncludeMacro,
    InlineCode,
    Link,
    List,
    ListItem,
    Listing,
    Literal,
    Macro,
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


T = TypeVar("T")


class BaseVisitor(Generic[T]):
    """Base tree visitor with match-based dispatch.

    Subclass and override ``visit_*`` methods for node types you care about.
    Unhandled node types fall through to ``visit_default``. Children are
    walked automatically after the ``visit_*`` call; a table's header row is
    walked before its body rows.

    Type parameter ``T`` is the return type of visit methods (use ``None``
    for side-effect-only visitors).

    """

    def visit(self, node: Node) -> T:
        """Dispatch to the appropriate ``visit_*`` method, then walk children."""
        result = self._dispatch(node)
        self._walk_children(node)
        return result

    def visit_default(self, node: Node) -> T:
        """Called for node types without a specific ``visit_*`` method.

        Override this for catch-all behavior. Default returns None
        (suitable for ``BaseVisitor[None]``).

        """
        return None  # type: ignore[return-value]

    # -- Block visitors --------------------------------------------------------

    def visit_document(self, node: Document) -> T:
        return self.visit_default(node)

    def visit_section(self, node: Section) -> T:
        return self.visit_default(node)

    def visit_paragraph(self, node: Paragraph) -> T:
        return self.visit_default(node)

    def visit_list(self, node: List) -> T:
        return self.visit_default(node)

    def visit_list_item(self, node: ListItem) -> T:
        return self.visit_default(node)

    def visit_description_list(self, node: DescriptionList) -> T:
        return self.visit_default(node)

    def visit_description_list_item(self, node: DescriptionListItem) -> T:
        return self.visit_default(node)

    def visit_table(self, node: Table) -> T:
        return self.visit_default(node)

    def visit_table_header(self, node: TableHeader) -> T:
        return self.visit_default(node)

    def visit_table_row(self, node: TableRow) -> T:
        return self.visit_default(node)

    def visit_table_cell(self, node: TableCell) -> T:
        return self.visit_default(node)

    def visit_code_block(self, node: CodeBlock) -> T:
        return self.visit_default(node)

    def visit_listing(self, node: Listing) -> T:
        return self.visit_default(node)

    def visit_literal(self, node: Literal) -> T:
        return self.visit_default(node)

    def visit_verse(self, node: Verse) -> T:
        return self.visit_default(node)

    def visit_passthrough(self, node: Passthrough) -> T:
        return self.visit_default(node)

    def visit_block_quote(self, node: BlockQuote) -> T:
        return self.visit_default(node)

    def visit_sidebar(self, node: Sidebar) -> T:
        return self.visit_default(node)

    def visit_example(self, node: Example) -> T:
        return self.visit_default(node)

    def visit_open(self, node: Open) -> T:
        return self.visit_default(node)

    def visit_admonition(self, node: Admonition) -> T:
        return self.visit_default(node)

    def visit_table_of_contents(self, node: TableOfContents) -> T:
        return self.visit_default(node)

    def visit_table_of_contents_entry(self, node: TableOfContentsEntry) -> T:
        return self.visit_default(node)

    # -- Macro visitors --------------------------------------------------------

    def visit_image_macro(self, node: ImageMacro) -> T:
        return self.visit_default(node)

    def visit_video_macro(self, node: VideoMacro) -> T:
        return self.visit_default(node)

    def visit_include_macro(self, node: IncludeMacro) -> T:
        return self.visit_default(node)

    def visit_macro(self, node: Macro) -> T:
        return self.visit_default(node)

    # -- Inline visitors -------------------------------------------------------

    def visit_text(self, node: Text) -> T:
        return self.visit_default(node)

    def visit_emphasis(self, node: Emphasis) -> T:
        return self.visit_default(node)

    def visit_strong(self, node: Strong) -> T:
        return self.visit_default(node)

    def visit_highlight(self, node: Highlight) -> T:
        return self.visit_default(node)

    def visit_superscript(self, node: Superscript) -> T:
        return self.visit_default(node)

    def visit_subscript(self, node: Subscript) -> T:
        return self.visit_default(node)

    def visit_inline_code(self, node: InlineCode) -> T:
        return self.visit_default(node)

    def visit_link(self, node: Link) -> T:
        return self.visit_default(node)

    def visit_image(self, node: Image) -> T:
        return self.visit_default(node)

    def visit_anchor(self, node: Anchor) -> T:
        return self.visit_default(node)

    def visit_cross_reference(self, node: CrossReference) -> T:
        return self.visit_default(node)

    def visit_footnote(self, node: Footnote) -> T:
        return self.visit_default(node)

    # -- Internal dispatch -----------------------------------------------------

    def _dispatch(self, node: Node) -> T:
        """Match-based dispatch to visit_* methods.

        Subclasses are matched before their bases (TableHeader before
        TableRow, the macro specializations before Macro).
        """
        match node:
            case Document():
                return self.visit_document(node)
            case Section():
                return self.visit_section(node)
            case Paragraph():
                return self.visit_paragraph(node)
            case List():
                return self.visit_list(node)
            case ListItem():
                return self.visit_list_item(node)
            case DescriptionList():
                return self.visit_description_list(node)
            case DescriptionListItem():
                return self.visit_description_list_item(node)
            case Table():
                return self.visit_table(node)
            case TableHeader():
                return self.visit_table_header(node)
            case TableRow():
                return self.visit_table_row(node)
            case TableCell():
                return self.visit_table_cell(node)
            case CodeBlock():
                return self.visit_code_block(node)
            case Listing():
                return self.visit_listing(node)
            case Literal():
                return self.visit_literal(node)
            case Verse():
                return self.visit_verse(node)
            case Passthrough():
                return self.visit_passthrough(node)
            case BlockQuote():
                return self.visit_block_quote(node)
            case Sidebar():
                return self.visit_sidebar(node)
            case Example():
                return self.visit_example(node)
            case Open():
                return self.visit_open(node)
            case Admonition():
                return self.visit_admonition(node)
            case TableOfContents():
                return self.visit_table_of_contents(node)
            case TableOfContentsEntry():
                return self.visit_table_of_contents_entry(node)
            case ImageMacro():
                return self.visit_image_macro(node)
            case VideoMacro():
                return self.visit_video_macro(node)
            case IncludeMacro():
                return self.visit_include_macro(node)
            case Macro():
                return self.visit_macro(node)
            case Text():
                return self.visit_text(node)
            case Emphasis():
                return self.visit_emphasis(node)
            case Strong():
                return self.visit_strong(node)
            case Highlight():
                return self.visit_highlight(node)
            case Superscript():
                return self.visit_superscript(node)
            case Subscript():
                return self.visit_subscript(node)
            case InlineCode():
                return self.visit_inline_code(node)
            case Link():
                return self.visit_link(node)
            case Image():
                return self.visit_image(node)
            case Anchor():
                return self.visit_anchor(node)
            case CrossReference():
                return self.visit_cross_reference(node)
            case Footnote():
                return self.visit_footnote(node)
            case _:
                return self.visit_default(node)

    def _walk_children(self, node: Node) -> None:
        """Recursively visit child nodes."""
        if isinstance(node, Table) and node.header is not None:
            self.visit(node.header)
        for child in node.children:
            self.visit(child)


class SectionCollector(BaseVisitor[None]):
    """Collects every titled section in document order.

    Level-0 include containers are walked but not collected.
    """

    def __init__(self) -> None:
        self.sections: list[Section] = []

    def visit_section(self, node: Section) -> None:
        if not node.is_container:
            self.sections.append(node)


def collect_sections(root: Node) -> list[Section]:
    """All titled sections below ``root``, in document order."""
    collector = SectionCollector()
    collector.visit(root)
    return collector.sections


def build_toc_entries(sections: list[Section], max_depth: int) -> list[TableOfContentsEntry]:
    """Nest ``sections`` into TOC entries by level.

    ``==`` sections are depth 1, ``===`` depth 2 and so on; sections deeper
    than ``max_depth`` are left out. A section that skips a
    level (``==`` straight to ``====``) nests under the nearest shallower
    entry.

    Example:
        >>> from tintero.nodes import Section
        >>> entries = build_toc_entries(
        ...     [Section("Intro", 2), Section("Scope", 3), Section("Usage", 2)], 3
        ... )
        >>> [(e.title, [c.title for c in e.entries]) for e in entries]
        [('Intro', ['Scope']), ('Usage', [])]
    """
    roots: list[TableOfContentsEntry] = []
    stack: list[TableOfContentsEntry] = []
    for section in sections:
        if section.level - 1 > max_depth:
            continue
        entry = TableOfContentsEntry(section.title, section.level, section.anchor_id)
        while stack and stack[-1].level >= section.level:
            stack.pop()
        if stack:
            stack[-1].add_child(entry)
        else:
            roots.append(entry)
        stack.append(entry)
    return roots


__all__ = ["BaseVisitor", "SectionCollector", "build_toc_entries", "collect_sections"]
