"""Delimited block parsing for Tintero parser.

Two families of delimited blocks:

Verbatim blocks (``----`` code/listing, ``....`` literal, ``++++``
passthrough, ``____`` under ``[verse]``) keep their lines as written,
indentation included.

Compound blocks (``****`` sidebar, ``====`` example, ``--`` open) contain
ordinary elements, parsed recursively until the matching delimiter.

A block left open at end of input closes there.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from tintero.nodes import (
    BlockQuote,
    CodeBlock,
    Example,
    Listing,
    Literal,
    Node,
    Open,
    Passthrough,
    Sidebar,
    Verse,
)
from tintero.tokens import TokenType

if TYPE_CHECKING:
    from tintero.context import ParseContext

_CODE_DELIMITER = re.compile(r"^----(\w+)?$")


def _trim_blank_lines(lines: list[str]) -> str:
    start, end = 0, len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return "\n".join(lines[start:end])


class DelimitedBlockMixin:
    """Mixin for delimited block parsing.

    Required Host Methods:
        - _parse_element(context) -> Node | None

    """

    def _collect_delimited_lines(
        self, context: ParseContext, closing: TokenType, *, raw: bool = True
    ) -> list[str]:
        """Consume the opening delimiter, the body and the closing delimiter.

        Returns one entry per body line; blank lines are "". With ``raw``
        each line is the untrimmed source line.
        """
        context.advance()
        lines: list[str] = []
        while not context.at_end and context.current_token.type is not closing:
            token = context.current_token
            if token.type is TokenType.EMPTY_LINE:
                lines.append("")
            elif token.type is not TokenType.NEW_LINE:
                lines.append(context.line_text(token) if raw else token.value)
            context.advance()
        context.accept(closing)
        return lines

    def _parse_compound(self, context: ParseContext, block: Node, closing: TokenType) -> Node:
        """Parse elements into ``block`` until the ``closing`` delimiter."""
        context.advance()
        context.push_element(block)
        try:
            while True:
                context.skip_blank_lines()
                if context.at_end or context.current_token.type is closing:
                    break
                element = self._parse_element(context)
                if element is not None:
                    block.add_child(element)
        finally:
            context.pop_element()
        context.accept(closing)
        return block

    # =========================================================================
    # Verbatim blocks
    # =========================================================================

    def _parse_code_block(self, context: ParseContext) -> CodeBlock:
        token = context.current_token
        match = _CODE_DELIMITER.match(token.value)
        language = match.group(1) if match else None
        title = context.take_block_title()
        content = _trim_blank_lines(
            self._collect_delimited_lines(context, TokenType.CODE_BLOCK_DELIMITER)
        )
        block = CodeBlock(content, language, location=token.location)
        if title is not None:
            block.attributes["title"] = title
        return block

    def _parse_listing(self, context: ParseContext) -> Listing:
        token = context.current_token
        title = context.take_block_title()
        content = _trim_blank_lines(
            self._collect_delimited_lines(context, TokenType.CODE_BLOCK_DELIMITER)
        )
        return Listing(content, title, location=token.location)

    def _parse_literal(self, context: ParseContext) -> Literal:
        token = context.current_token
        title = context.take_block_title()
        content = _trim_blank_lines(
            self._collect_delimited_lines(context, TokenType.LITERAL_DELIMITER)
        )
        return Literal(content, title, location=token.location)

    def _parse_passthrough(self, context: ParseContext, substitutions: str | None = None) -> Passthrough:
        """``++++`` block; the body is kept exactly as written."""
        token = context.current_token
        title = context.take_block_title()
        lines = self._collect_delimited_lines(context, TokenType.PASSTHROUGH_DELIMITER)
        return Passthrough("\n".join(lines), title, substitutions, location=token.location)

    def _parse_verse(
        self,
        context: ParseContext,
        author: str | None = None,
        citation: str | None = None,
    ) -> Verse:
        token = context.current_token
        title = context.take_block_title()
        content = _trim_blank_lines(
            self._collect_delimited_lines(context, TokenType.BLOCK_QUOTE_DELIMITER)
        )
        return Verse(content, title, author, citation, location=token.location)

    def _parse_block_quote(
        self,
        context: ParseContext,
        attribution: str | None = None,
        cite: str | None = None,
    ) -> BlockQuote:
        """``____`` quote; a trailing ``-- Author, Source`` line names the source."""
        token = context.current_token
        lines = self._collect_delimited_lines(
            context, TokenType.BLOCK_QUOTE_DELIMITER, raw=False
        )

        body: list[str] = []
        for line in lines:
            if line.startswith("-- "):
                author, _, source = line[3:].partition(", ")
                attribution = author.strip()
                if source.strip():
                    cite = source.strip()
            else:
                body.append(line)

        quote = BlockQuote(
            "\n".join(body).strip(),
            attribution or "",
            cite or "",
            location=token.location,
        )
        title = context.take_block_title()
        if title is not None:
            quote.attributes["title"] = title
        return quote

    # =========================================================================
    # Compound blocks
    # =========================================================================

    def _parse_sidebar(self, context: ParseContext) -> Sidebar:
        sidebar = Sidebar(context.take_block_title(), location=context.current_token.location)
        self._parse_compound(context, sidebar, TokenType.SIDEBAR_DELIMITER)
        return sidebar

    def _parse_example(self, context: ParseContext) -> Example:
        example = Example(context.take_block_title(), location=context.current_token.location)
        self._parse_compound(context, example, TokenType.EXAMPLE_DELIMITER)
        return example

    def _parse_open(self, context: ParseContext, masquerade_type: str | None = None) -> Open:
        block = Open(
            context.take_block_title(),
            masquerade_type,
            location=context.current_token.location,
        )
        self._parse_compound(context, block, TokenType.OPEN_DELIMITER)
        return block
