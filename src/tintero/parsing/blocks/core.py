"""Core block parsing for Tintero parser.

Provides block dispatch and the line-oriented blocks: section titles,
paragraphs, admonition paragraphs and ``:name: value`` attribute lines.

Every routine starts on the token that selected it and returns with the
context on the first token it did not consume. The dispatcher always
consumes at least one token, so the document loop cannot stall.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from tintero.config import get_parse_config
from tintero.nodes import Admonition, AdmonitionType, Node, Paragraph, Section
from tintero.tokens import TokenType

if TYPE_CHECKING:
    from tintero.context import ParseContext

_HEADER = re.compile(r"^(=+)\s+(.+?)(?:\s+=+)?$")
_ADMONITION = re.compile(r"^(NOTE|TIP|IMPORTANT|WARNING|CAUTION):\s*(.*)$")
_ATTRIBUTE_LINE = re.compile(r"^:([^:!]+)(!?):\s*(.*)$")
_BLOCK_TITLE = re.compile(r"^\.([^.\s].*)$")


def is_block_title(text: str) -> bool:
    """True for a ``.Title`` line naming the next block."""
    return _BLOCK_TITLE.match(text) is not None


class BlockParsingCoreMixin:
    """Block dispatch plus sections, paragraphs and attribute lines.

    Required Host Methods:
        - _parse_inline(text, context) -> list[Node]
        - _parse_list(context) -> List
        - _parse_description_list(context) -> DescriptionList
        - _parse_table(context, attributes=None) -> Table
        - _parse_block_quote(context) -> BlockQuote
        - _parse_sidebar(context) -> Sidebar
        - _parse_example(context) -> Example
        - _parse_open(context) -> Open
        - _parse_literal(context) -> Literal
        - _parse_passthrough(context) -> Passthrough
        - _parse_code_block(context) -> CodeBlock
        - _parse_attribute_block(context) -> Node
        - _parse_table_of_contents(context) -> TableOfContents
        - _parse_block_macro(context) -> Node

    """

    def _parse_element(self, context: ParseContext) -> Node | None:
        """Parse the element starting at the current token.

        Returns None for tokens that produce no element (blank lines,
        attribute lines, block titles, stray table rows); those tokens are
        still consumed.
        """
        token = context.current_token
        match token.type:
            case TokenType.HEADER:
                return self._parse_section_title(context)
            case TokenType.LIST_ITEM:
                return self._parse_list(context)
            case TokenType.DESCRIPTION_LIST_ITEM:
                return self._parse_description_list(context)
            case TokenType.TABLE_DELIMITER:
                return self._parse_table(context)
            case TokenType.BLOCK_QUOTE_DELIMITER:
                return self._parse_block_quote(context)
            case TokenType.SIDEBAR_DELIMITER:
                return self._parse_sidebar(context)
            case TokenType.EXAMPLE_DELIMITER:
                return self._parse_example(context)
            case TokenType.OPEN_DELIMITER:
                return self._parse_open(context)
            case TokenType.LITERAL_DELIMITER:
                return self._parse_literal(context)
            case TokenType.PASSTHROUGH_DELIMITER:
                return self._parse_passthrough(context)
            case TokenType.CODE_BLOCK_DELIMITER:
                return self._parse_code_block(context)
            case TokenType.ATTRIBUTE_LINE:
                self._parse_attribute_line(context)
                return None
            case TokenType.ATTRIBUTE_BLOCK_LINE:
                return self._parse_attribute_block(context)
            case TokenType.ADMONITION_BLOCK:
                return self._parse_admonition(context)
            case TokenType.TABLE_OF_CONTENTS:
                return self._parse_table_of_contents(context)
            case TokenType.BLOCK_MACRO:
                return self._parse_block_macro(context)
            case TokenType.TEXT:
                return self._parse_paragraph(context)
            case TokenType.EOF:
                return None
            case _:
                context.advance()
                return None

    def parse_elements(self, context: ParseContext) -> list[Node]:
        """Parse every remaining element in ``context``."""
        elements: list[Node] = []
        while not context.at_end:
            element = self._parse_element(context)
            if element is not None:
                elements.append(element)
        return elements

    # =========================================================================
    # Sections
    # =========================================================================

    def _parse_section_title(self, context: ParseContext) -> Section:
        token = context.current_token
        match = _HEADER.match(token.value)
        if match is None:
            raise context.error(f"Invalid header format: {token.value}")
        context.advance()

        section = Section(match.group(2).strip(), len(match.group(1)), location=token.location)
        if get_parse_config().section_ids:
            section.attributes["id"] = section.anchor_id
        title = context.take_block_title()
        if title is not None:
            section.attributes["title"] = title
        return section

    # =========================================================================
    # Paragraphs
    # =========================================================================

    def _collect_text_lines(self, context: ParseContext, *, raw: bool = False) -> list[str]:
        """Consume a run of TEXT lines joined by single line breaks.

        Stops before a blank line, any other kind of line, or a ``.Title``
        line (which names the next block). With ``raw`` the untrimmed source
        lines are returned.
        """
        token = context.current_token
        lines = [context.line_text(token) if raw else token.value]
        context.advance()
        while context.current_token.type is TokenType.NEW_LINE:
            following = context.peek()
            if following.type is not TokenType.TEXT or is_block_title(following.value):
                break
            context.advance()
            token = context.current_token
            lines.append(context.line_text(token) if raw else token.value)
            context.advance()
        return lines

    def _parse_paragraph(self, context: ParseContext) -> Paragraph | None:
        token = context.current_token
        title = _BLOCK_TITLE.match(token.value)
        if title is not None:
            context.block_title = title.group(1).strip()
            context.advance()
            return None

        text = "\n".join(self._collect_text_lines(context))
        paragraph = Paragraph(text, location=token.location)
        paragraph.add_children(self._parse_inline(text, context))
        block_title = context.take_block_title()
        if block_title is not None:
            paragraph.attributes["title"] = block_title
        return paragraph

    # =========================================================================
    # Admonitions
    # =========================================================================

    def _parse_admonition(self, context: ParseContext) -> Admonition:
        """``NOTE: text`` and its continuation lines."""
        token = context.current_token
        match = _ADMONITION.match(token.value)
        if match is None:
            raise context.error(f"Invalid admonition format: {token.value}")

        lines = [match.group(2).strip()]
        context.advance()
        if context.current_token.type is TokenType.NEW_LINE:
            following = context.peek()
            if following.type is TokenType.TEXT and not is_block_title(following.value):
                context.advance()
                lines.extend(self._collect_text_lines(context))

        content = "\n".join(lines).strip()
        admonition = Admonition(
            AdmonitionType[match.group(1)],
            content,
            context.take_block_title(),
            location=token.location,
        )
        admonition.add_children(self._parse_inline(content, context))
        return admonition

    # =========================================================================
    # Attribute lines
    # =========================================================================

    def _parse_attribute_line(self, context: ParseContext) -> None:
        """``:name: value`` sets a document attribute; ``:name!:`` unsets it.

        An unset attribute is stored as "false" and an empty value as
        "true", so later lookups can tell "unset" from "never mentioned".
        """
        token = context.current_token
        context.advance()
        match = _ATTRIBUTE_LINE.match(token.value)
        if match is None:
            return

        name = match.group(1).strip()
        if match.group(2):
            value = "false"
        else:
            value = match.group(3).strip() or "true"
        context.global_attributes[name] = value
