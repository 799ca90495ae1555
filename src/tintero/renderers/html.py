"""HTML renderer using StringBuilder pattern.

Renders the Tintero document tree to HTML in a single walk.

Thread Safety:
All per-render state is encapsulated in RenderContext, created fresh for each
render() call. Multiple threads can safely share a single HtmlRenderer instance
and call render() concurrently without synchronization.

Footnotes:
Footnote definitions are numbered by the parser; the renderer emits a
superscript link where each footnote appears and a ``#footnotes`` block
listing the definitions after the body.
"""

import logging
from dataclasses import dataclass, field

from tintero.errors import RenderError
from tintero.nodes import (
    Admonition,
    Anchor,
    Block,
    BlockQuote,
    CodeBlock,
    CrossReference,
    DescriptionList,
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
    TableOfContents,
    TableOfContentsEntry,
    TableRow,
    Text,
    Verse,
    VideoMacro,
)
from tintero.stringbuilder import StringBuilder
from tintero.utils.text import escape_html

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RenderContext:
    """Per-render mutable state.

    Created fresh for each render, ensuring thread safety when sharing
    HtmlRenderer instances across threads.
    """

    heading_offset: int = 0
    footnotes: dict[str, Footnote] = field(default_factory=dict)


class HtmlRenderer:
    """Render a Document to HTML using StringBuilder pattern.

    Usage:
        >>> from tintero.parser import Parser
        >>> doc = Parser().parse("Hello *World*")
        >>> HtmlRenderer().render(doc)
        '<p>Hello <strong>World</strong></p>\\n'

    Section headings are shifted down one level when the document has a
    title, which is rendered as the only ``<h1>``.

    Thread Safety:
        Multiple threads can safely share a single HtmlRenderer instance.
    """

    __slots__ = ("_highlight", "_standalone")

    def __init__(self, *, highlight: bool = False, standalone: bool = False) -> None:
        """Initialize renderer.

        Args:
            highlight: Enable syntax highlighting for code blocks with a language
            standalone: Wrap the output in a complete HTML5 page
        """
        self._highlight = highlight
        self._standalone = standalone

    def render(self, node: Document) -> str:
        """Render a Document to an HTML string.

        Raises:
            RenderError: ``node`` is not a Document
        """
        if not isinstance(node, Document):
            raise RenderError(f"Expected a Document, got {type(node).__name__}")
        ctx = RenderContext(heading_offset=1 if node.header.title else 0)
        sb = StringBuilder()

        self._render_header(node, sb)
        for child in node.children:
            self._render_node(child, sb, ctx)
        if ctx.footnotes:
            self._render_footnotes_section(sb, ctx)

        body = sb.build()
        if self._standalone:
            return self._wrap_page(body, node)
        return body

    # =========================================================================
    # Dispatch
    # =========================================================================

    def _render_node(self, node: Node, sb: StringBuilder, ctx: RenderContext) -> None:
        match node:
            case Section():
                self._render_section(node, sb, ctx)
            case Paragraph():
                self._render_paragraph(node, sb, ctx)
            case List():
                self._render_list(node, sb, ctx)
            case DescriptionList():
                self._render_description_list(node, sb, ctx)
            case Table():
                self._render_table(node, sb, ctx)
            case CodeBlock():
                self._render_code_block(node, sb)
            case Listing():
                self._render_verbatim("listingblock", node.content, node.title, sb)
            case Literal():
                self._render_verbatim("literalblock", node.content, node.title, sb)
            case Verse():
                self._render_verse(node, sb)
            case Passthrough():
                sb.append_line(node.content)
            case BlockQuote():
                self._render_block_quote(node, sb)
            case Sidebar():
                self._render_compound("sidebarblock", node.title, node, sb, ctx)
            case Example():
                self._render_compound("exampleblock", node.title, node, sb, ctx)
            case Open():
                css = "openblock"
                if node.masquerade_type:
                    css = f"openblock {escape_html(node.masquerade_type)}"
                self._render_compound(css, node.title, node, sb, ctx)
            case Admonition():
                self._render_admonition(node, sb, ctx)
            case TableOfContents():
                self._render_table_of_contents(node, sb)
            case ImageMacro() if not node.is_inline:
                sb.append('<div class="imageblock"><div class="content">')
                self._render_image_macro(node, sb)
                sb.append_line("</div></div>")
            case VideoMacro() if not node.is_inline:
                sb.append('<div class="videoblock"><div class="content">')
                self._render_video_macro(node, sb)
                sb.append_line("</div></div>")
            case IncludeMacro():
                self._render_include_macro(node, sb)
                sb.append_line()
            case Macro() if not node.is_inline:
                self._render_macro(node, sb)
                sb.append_line()
            case Block():
                # Unknown block kind: render whatever it contains
                for child in node.children:
                    self._render_node(child, sb, ctx)
            case _:
                self._render_inline(node, sb, ctx)

    # =========================================================================
    # Block rendering
    # =========================================================================

    def _render_header(self, doc: Document, sb: StringBuilder) -> None:
        header = doc.header
        if header.title:
            sb.append_line(f"<h1>{escape_html(header.title)}</h1>")
        if header.author:
            sb.append_line(f'<div class="author">{escape_html(header.author)}</div>')
        if header.revision:
            sb.append_line(f'<div class="revision">{escape_html(header.revision)}</div>')

    def _render_section(self, section: Section, sb: StringBuilder, ctx: RenderContext) -> None:
        # Level-0 containers (multi-element includes) have no heading.
        if not section.is_container and section.title:
            level = min(section.level + ctx.heading_offset, 6)
            anchor = section.attributes.get("id") or section.id
            id_attr = f' id="{escape_html(anchor)}"' if anchor else ""
            sb.append_line(f"<h{level}{id_attr}>{escape_html(section.title)}</h{level}>")
        for child in section.children:
            self._render_node(child, sb, ctx)

    def _render_paragraph(self, para: Paragraph, sb: StringBuilder, ctx: RenderContext) -> None:
        self._render_title(para.attributes.get("title"), sb)
        sb.append("<p>")
        if para.children:
            self._render_inlines(para.children, sb, ctx)
        else:
            sb.append(escape_html(para.text))
        sb.append_line("</p>")

    def _render_list(self, lst: List, sb: StringBuilder, ctx: RenderContext) -> None:
        """Render items, rebuilding nesting from each item's marker depth."""
        tag = "ol" if lst.ordered else "ul"
        if lst.ordered and lst.start_number != 1:
            sb.append_line(f'<ol start="{lst.start_number}">')
        else:
            sb.append_line(f"<{tag}>")

        items = lst.items
        base = items[0].level if items else 1
        depth = 0
        for index, item in enumerate(items):
            level = min(max(item.level - base, 0), depth + 1)
            if index > 0:
                if level > depth:
                    sb.append_line()
                    sb.append_line(f"<{tag}>")
                    depth = level
                else:
                    sb.append_line("</li>")
                    while depth > level:
                        sb.append_line(f"</{tag}>")
                        sb.append_line("</li>")
                        depth -= 1
            self._render_list_item(item, sb, ctx)
        if items:
            sb.append_line("</li>")
        while depth > 0:
            sb.append_line(f"</{tag}>")
            sb.append_line("</li>")
            depth -= 1
        sb.append_line(f"</{tag}>")

    def _render_list_item(self, item: ListItem, sb: StringBuilder, ctx: RenderContext) -> None:
        sb.append("<li>")
        if item.is_checkbox:
            checked = " checked" if item.is_checked else ""
            sb.append(f'<input type="checkbox" disabled{checked}> ')
        if item.children:
            self._render_inlines(item.children, sb, ctx)
        else:
            sb.append(escape_html(item.text))

    def _render_description_list(
        self, dlist: DescriptionList, sb: StringBuilder, ctx: RenderContext
    ) -> None:
        sb.append_line("<dl>")
        for item in dlist.items:
            sb.append_line(f"<dt>{escape_html(item.term)}</dt>")
            sb.append("<dd>")
            if item.children:
                self._render_inlines(item.children, sb, ctx)
            else:
                sb.append(escape_html(item.description))
            sb.append_line("</dd>")
        sb.append_line("</dl>")

    def _render_table(self, table: Table, sb: StringBuilder, ctx: RenderContext) -> None:
        sb.append_line('<table class="tableblock frame-all grid-all">')
        title = table.attributes.get("title")
        if title:
            sb.append_line(f'<caption class="title">{escape_html(title)}</caption>')
        if table.header is not None:
            sb.append_line("<thead>")
            self._render_table_row(table.header, sb, ctx, "th")
            sb.append_line("</thead>")
        rows = table.rows
        if rows:
            sb.append_line("<tbody>")
            for row in rows:
                self._render_table_row(row, sb, ctx, "td")
            sb.append_line("</tbody>")
        sb.append_line("</table>")

    def _render_table_row(
        self, row: TableRow, sb: StringBuilder, ctx: RenderContext, tag: str
    ) -> None:
        sb.append("<tr>")
        for cell in row.cells:
            self._render_table_cell(cell, sb, ctx, "th" if cell.is_header else tag)
        sb.append_line("</tr>")

    def _render_table_cell(
        self, cell: TableCell, sb: StringBuilder, ctx: RenderContext, tag: str
    ) -> None:
        sb.append(f"<{tag}")
        if cell.col_span > 1:
            sb.append(f' colspan="{cell.col_span}"')
        if cell.row_span > 1:
            sb.append(f' rowspan="{cell.row_span}"')
        if cell.alignment:
            sb.append(f' class="halign-{escape_html(cell.alignment)}"')
        sb.append(">")
        if cell.children:
            self._render_inlines(cell.children, sb, ctx)
        else:
            sb.append(escape_html(cell.content))
        sb.append(f"</{tag}>")

    def _render_code_block(self, code: CodeBlock, sb: StringBuilder) -> None:
        self._render_title(code.attributes.get("title"), sb)
        lang = code.language
        if self._highlight and lang:
            try:
                from tintero.highlighting import highlight

                sb.append_line(highlight(code.content, lang))
                return
            except Exception:
                logger.debug("Syntax highlighting failed for language %r", lang, exc_info=True)

        lang_class = f' class="language-{escape_html(lang)}"' if lang else ""
        sb.append(f"<pre><code{lang_class}>")
        sb.append(escape_html(code.content))
        sb.append_line("</code></pre>")

    def _render_verbatim(
        self, css: str, content: str, title: str | None, sb: StringBuilder
    ) -> None:
        sb.append_line(f'<div class="{css}">')
        self._render_title(title, sb)
        sb.append_line(f'<div class="content"><pre>{escape_html(content)}</pre></div>')
        sb.append_line("</div>")

    def _render_verse(self, verse: Verse, sb: StringBuilder) -> None:
        sb.append_line('<div class="verseblock">')
        self._render_title(verse.title, sb)
        sb.append_line(f'<pre class="content">{escape_html(verse.content)}</pre>')
        if verse.author or verse.citation:
            sb.append('<div class="attribution">')
            if verse.author:
                sb.append(f"&#8212; {escape_html(verse.author)}")
            if verse.citation:
                sb.append(f"<br><cite>{escape_html(verse.citation)}</cite>")
            sb.append_line("</div>")
        sb.append_line("</div>")

    def _render_block_quote(self, quote: BlockQuote, sb: StringBuilder) -> None:
        self._render_title(quote.attributes.get("title"), sb)
        sb.append_line("<blockquote>")
        for paragraph in quote.content.split("\n\n"):
            if paragraph.strip():
                sb.append_line(f"<p>{escape_html(paragraph.strip())}</p>")
        if quote.attribution:
            sb.append(f"<cite>{escape_html(quote.attribution)}")
            if quote.cite:
                sb.append(f", <em>{escape_html(quote.cite)}</em>")
            sb.append_line("</cite>")
        sb.append_line("</blockquote>")

    def _render_compound(
        self,
        css: str,
        title: str | None,
        block: Node,
        sb: StringBuilder,
        ctx: RenderContext,
    ) -> None:
        sb.append_line(f'<div class="{css}">')
        self._render_title(title, sb)
        sb.append_line('<div class="content">')
        for child in block.children:
            self._render_node(child, sb, ctx)
        sb.append_line("</div>")
        sb.append_line("</div>")

    def _render_admonition(self, admonition: Admonition, sb: StringBuilder, ctx: RenderContext) -> None:
        kind = admonition.admonition_type
        sb.append_line(f'<div class="admonitionblock {kind.value}">')
        sb.append_line("<table>")
        sb.append_line("<tr>")
        sb.append_line(f'<td class="icon"><div class="title">{kind.label}</div></td>')
        sb.append_line('<td class="content">')
        self._render_title(admonition.title, sb)
        children = admonition.children
        if children and isinstance(children[0], Block):
            for child in children:
                self._render_node(child, sb, ctx)
        else:
            sb.append('<div class="paragraph"><p>')
            if children:
                self._render_inlines(children, sb, ctx)
            else:
                sb.append(escape_html(admonition.content))
            sb.append_line("</p></div>")
        sb.append_line("</td>")
        sb.append_line("</tr>")
        sb.append_line("</table>")
        sb.append_line("</div>")

    def _render_table_of_contents(self, toc: TableOfContents, sb: StringBuilder) -> None:
        sb.append_line('<div id="toc" class="toc">')
        if toc.title:
            sb.append_line(f'<div id="toctitle" class="toc-title">{escape_html(toc.title)}</div>')
        if toc.entries:
            self._render_toc_entries(toc.entries, sb)
        sb.append_line("</div>")

    def _render_toc_entries(
        self, entries: tuple[TableOfContentsEntry, ...], sb: StringBuilder
    ) -> None:
        sb.append_line("<ul>")
        for entry in entries:
            sb.append(
                f'<li><a href="#{escape_html(entry.anchor_id)}">{escape_html(entry.title)}</a>'
            )
            if entry.entries:
                sb.append_line()
                self._render_toc_entries(entry.entries, sb)
            sb.append_line("</li>")
        sb.append_line("</ul>")

    def _render_title(self, title: str | None, sb: StringBuilder) -> None:
        if title:
            sb.append_line(f'<div class="title">{escape_html(title)}</div>')

    # =========================================================================
    # Inline rendering
    # =========================================================================

    def _render_inlines(
        self, children: tuple[Node, ...], sb: StringBuilder, ctx: RenderContext
    ) -> None:
        for child in children:
            self._render_inline(child, sb, ctx)

    def _render_inline(self, node: Node, sb: StringBuilder, ctx: RenderContext) -> None:
        match node:
            case Text():
                sb.append(escape_html(node.content))
            case Emphasis():
                sb.append(f"<em>{escape_html(node.text)}</em>")
            case Strong():
                sb.append(f"<strong>{escape_html(node.text)}</strong>")
            case Highlight():
                sb.append(f"<mark>{escape_html(node.text)}</mark>")
            case Superscript():
                sb.append(f"<sup>{escape_html(node.text)}</sup>")
            case Subscript():
                sb.append(f"<sub>{escape_html(node.text)}</sub>")
            case InlineCode():
                sb.append(f"<code>{escape_html(node.content)}</code>")
            case Link():
                sb.append(f'<a href="{escape_html(node.url)}"')
                if node.title:
                    sb.append(f' title="{escape_html(node.title)}"')
                sb.append(f">{escape_html(node.text or node.url)}</a>")
            case Image():
                sb.append(f'<img src="{escape_html(node.src)}" alt="{escape_html(node.alt)}"')
                if node.title:
                    sb.append(f' title="{escape_html(node.title)}"')
                sb.append("/>")
            case Anchor():
                sb.append(f'<a id="{escape_html(node.id)}">{escape_html(node.label)}</a>')
            case CrossReference():
                text = node.link_text or f"[{node.target_id}]"
                sb.append(
                    f'<a href="#{escape_html(node.target_id)}" class="xref">{escape_html(text)}</a>'
                )
            case Footnote():
                self._render_footnote(node, sb, ctx)
            case ImageMacro():
                self._render_image_macro(node, sb)
            case VideoMacro():
                self._render_video_macro(node, sb)
            case IncludeMacro():
                self._render_include_macro(node, sb)
            case Macro():
                self._render_macro(node, sb)
            case _:
                logger.debug("No HTML rendering for %s", node.element_type)
                for child in node.children:
                    self._render_node(child, sb, ctx)

    def _render_footnote(self, note: Footnote, sb: StringBuilder, ctx: RenderContext) -> None:
        label = escape_html(note.reference_label)
        if not note.is_reference and note.reference_label not in ctx.footnotes:
            ctx.footnotes[note.reference_label] = note
            sb.append(
                f'<sup class="footnote">[<a id="_footnoteref_{label}" class="footnote" '
                f'href="#_footnotedef_{label}" title="View footnote.">{label}</a>]</sup>'
            )
        else:
            sb.append(
                f'<sup class="footnoteref">[<a class="footnote" '
                f'href="#_footnotedef_{label}" title="View footnote.">{label}</a>]</sup>'
            )

    def _render_footnotes_section(self, sb: StringBuilder, ctx: RenderContext) -> None:
        sb.append_line('<div id="footnotes">')
        sb.append_line("<hr>")
        for label, note in ctx.footnotes.items():
            label = escape_html(label)
            sb.append_line(
                f'<div class="footnote" id="_footnotedef_{label}">'
                f'<a href="#_footnoteref_{label}">{label}</a>. {escape_html(note.text)}</div>'
            )
        sb.append_line("</div>")

    # =========================================================================
    # Macros
    # =========================================================================

    def _render_image_macro(self, image: ImageMacro, sb: StringBuilder) -> None:
        if image.link:
            sb.append(f'<a class="image" href="{escape_html(image.link)}">')
        sb.append(f'<img src="{escape_html(image.src)}" alt="{escape_html(image.alt)}"')
        if image.title and image.title != image.alt:
            sb.append(f' title="{escape_html(image.title)}"')
        if image.width is not None:
            sb.append(f' width="{image.width}"')
        if image.height is not None:
            sb.append(f' height="{image.height}"')
        if image.align:
            sb.append(f' class="align-{escape_html(image.align)}"')
        sb.append("/>")
        if image.link:
            sb.append("</a>")

    def _render_video_macro(self, video: VideoMacro, sb: StringBuilder) -> None:
        sb.append("<video")
        if video.width is not None:
            sb.append(f' width="{video.width}"')
        if video.height is not None:
            sb.append(f' height="{video.height}"')
        if video.controls:
            sb.append(" controls")
        if video.autoplay:
            sb.append(" autoplay")
        if video.loop:
            sb.append(" loop")
        if video.muted:
            sb.append(" muted")
        if video.poster:
            sb.append(f' poster="{escape_html(video.poster)}"')
        sb.append(">")
        sb.append(
            f'<source src="{escape_html(video.src)}" '
            f'type="video/{escape_html(video.video_format)}">'
        )
        sb.append("Your browser does not support the video tag.</video>")
        if video.title:
            sb.append(f'<div class="video-title">{escape_html(video.title)}</div>')

    def _render_include_macro(self, include: IncludeMacro, sb: StringBuilder) -> None:
        """Unresolved include: leave a comment naming the file."""
        # "--" may not appear inside an HTML comment
        path = escape_html(include.file_path).replace("--", "&#45;&#45;")
        sb.append(f"<!-- Include: {path}")
        if include.lines:
            sb.append(f" (lines: {escape_html(include.lines)})")
        if include.tags:
            sb.append(f" (tags: {escape_html(include.tags)})")
        sb.append(" -->")

    def _render_macro(self, macro: Macro, sb: StringBuilder) -> None:
        name = escape_html(macro.name)
        sb.append(f'<span class="macro {name}" data-macro="{name}"')
        sb.append(f' data-target="{escape_html(macro.target)}"')
        for key, value in macro.parameters.items():
            sb.append(f' data-{escape_html(key)}="{escape_html(value)}"')
        separator = ":" if macro.is_inline else "::"
        params = ",".join(f"{k}={v}" for k, v in macro.parameters.items())
        sb.append(f">{name}{separator}{escape_html(macro.target)}[{escape_html(params)}]</span>")

    # =========================================================================
    # Page wrapper
    # =========================================================================

    def _wrap_page(self, body: str, doc: Document) -> str:
        title = escape_html(doc.header.title or "AsciiDoc Document")
        return (
            "<!DOCTYPE html>\n"
            '<html lang="en">\n'
            "<head>\n"
            '<meta charset="utf-8">\n'
            f"<title>{title}</title>\n"
            "</head>\n"
            "<body>\n"
            f"{body}"
            "</body>\n"
            "</html>\n"
        )


__all__ = ["HtmlRenderer", "RenderContext"]
