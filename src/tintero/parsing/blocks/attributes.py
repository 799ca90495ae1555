"""Block attribute lists for Tintero parser.

A ``[style, positional, key=value]`` line applies to the block that
follows it. The first positional entry is the block style and may carry
shorthands: ``#id``, ``.role`` and ``%option`` (``[quote#intro.lead]``).

Some styles change what the following block is (``[verse]`` on a
``____`` block, ``[source,python]`` on a ``----`` block, ``[NOTE]`` on a
paragraph); the rest are merged into the attributes of whatever element
the following lines produce.
"""

from __future__ import annotations

import re
import textwrap
from typing import TYPE_CHECKING

from tintero.nodes import (
    Admonition,
    AdmonitionType,
    BlockQuote,
    CodeBlock,
    Listing,
    Literal,
    Node,
    Paragraph,
    Passthrough,
    Section,
    Text,
    Verse,
)
from tintero.parsing.blocks.core import is_block_title
from tintero.parsing.macros import split_macro_parameters, strip_quotes
from tintero.tokens import Token, TokenType

if TYPE_CHECKING:
    from tintero.context import ParseContext

_ATTRIBUTE_BLOCK = re.compile(r"^\[([^\]]+)\]$")
_SHORTHAND = re.compile(r"([#.%])([^#.%]+)")
_NAMED = re.compile(r"^([A-Za-z_][\w-]*)=(.*)$")

_ADMONITION_STYLES = frozenset(t.name for t in AdmonitionType)


def parse_block_attributes(content: str) -> dict[str, str]:
    """Parse the inside of a block attribute line.

    The style is stored under ``style``; later positional entries under
    ``param1``, ``param2``... Shorthand ids set ``id``, roles are joined
    into ``role`` and options into ``options``.

    Examples:
        >>> parse_block_attributes("quote, Albert Einstein, Speech")
        {'style': 'quote', 'param1': 'Albert Einstein', 'param2': 'Speech'}
        >>> parse_block_attributes("#intro.lead%header")
        {'id': 'intro', 'role': 'lead', 'options': 'header'}
    """
    attributes: dict[str, str] = {}
    roles: list[str] = []
    options: list[str] = []
    positional = 0

    for raw in split_macro_parameters(content):
        part = raw.strip()
        if not part:
            positional += 1
            continue
        named = _NAMED.match(part)
        if named is not None:
            key, value = named.group(1), strip_quotes(named.group(2).strip())
            if key == "opts":
                key = "options"
            if key == "options":
                options.extend(o.strip() for o in value.split(",") if o.strip())
            elif key == "role":
                roles.extend(value.split())
            else:
                attributes[key] = value
            continue

        part = strip_quotes(part)
        if positional == 0:
            cut = min((part.index(c) for c in "#.%" if c in part), default=len(part))
            style = part[:cut].strip()
            if style:
                attributes["style"] = style
            for shorthand in _SHORTHAND.finditer(part[cut:]):
                marker, value = shorthand.group(1), shorthand.group(2).strip()
                if marker == "#":
                    attributes["id"] = value
                elif marker == ".":
                    roles.append(value)
                else:
                    options.append(value)
        else:
            attributes[f"param{positional}"] = part
        positional += 1

    if roles:
        attributes["role"] = " ".join(roles)
    if options:
        attributes["options"] = ",".join(options)
    return attributes


class AttributeBlockMixin:
    """Mixin for ``[...]`` block attribute lines.

    Required Host Methods:
        - _parse_element(context) -> Node | None
        - _parse_attribute_line(context) -> None
        - _parse_inline(text, context) -> list[Node]
        - _collect_text_lines(context, raw=False) -> list[str]
        - _parse_compound(context, block, closing) -> Node
        - _parse_table(context, attributes) -> Table
        - delimited block routines from DelimitedBlockMixin

    """

    def _parse_attribute_block(self, context: ParseContext) -> Node:
        token = context.current_token
        match = _ATTRIBUTE_BLOCK.match(token.value)
        if match is None:
            raise context.error(f"Invalid attribute block format: {token.value}")
        content = match.group(1).strip()
        attributes = parse_block_attributes(content)
        context.advance()

        # .Title and :name: value lines may sit between the attribute line
        # and its block.
        context.skip_blank_lines()
        while True:
            current = context.current_token
            if current.type is TokenType.ATTRIBUTE_LINE:
                self._parse_attribute_line(context)
            elif current.type is TokenType.TEXT and is_block_title(current.value):
                context.block_title = current.value[1:].strip()
                context.advance()
            else:
                break
            context.skip_blank_lines()

        if context.at_end:
            return self._attribute_fallback(content, token)

        element = self._parse_styled_block(context, attributes)
        if element is None:
            return self._attribute_fallback(content, token)

        for key, value in attributes.items():
            element.attributes[key] = value
        if isinstance(element, Section) and "id" in attributes:
            element.id = attributes["id"]
        return element

    def _parse_styled_block(self, context: ParseContext, attributes: dict[str, str]) -> Node | None:
        style = attributes.get("style", "")
        kind = context.current_token.type
        first = attributes.get("param1")
        second = attributes.get("param2")

        match (style.lower(), kind):
            case ("verse", TokenType.BLOCK_QUOTE_DELIMITER):
                return self._parse_verse(context, first, second)
            case ("verse", TokenType.TEXT):
                token = context.current_token
                text = "\n".join(self._collect_text_lines(context))
                return Verse(text, context.take_block_title(), first, second, location=token.location)
            case ("quote", TokenType.BLOCK_QUOTE_DELIMITER):
                return self._parse_block_quote(context, first, second)
            case ("quote", TokenType.TEXT):
                token = context.current_token
                text = "\n".join(self._collect_text_lines(context))
                quote = BlockQuote(text, first or "", second or "", location=token.location)
                title = context.take_block_title()
                if title is not None:
                    quote.attributes["title"] = title
                return quote
            case ("literal", TokenType.LITERAL_DELIMITER):
                return self._parse_literal(context)
            case ("literal", TokenType.TEXT):
                token = context.current_token
                text = textwrap.dedent("\n".join(self._collect_text_lines(context, raw=True)))
                return Literal(text, context.take_block_title(), location=token.location)
            case ("source", TokenType.CODE_BLOCK_DELIMITER):
                block = self._parse_code_block(context)
                block.language = first or attributes.get("language") or block.language
                return block
            case ("source", TokenType.TEXT):
                token = context.current_token
                text = textwrap.dedent("\n".join(self._collect_text_lines(context, raw=True)))
                block = CodeBlock(text, first or attributes.get("language"), location=token.location)
                title = context.take_block_title()
                if title is not None:
                    block.attributes["title"] = title
                return block
            case ("listing", TokenType.CODE_BLOCK_DELIMITER):
                return self._parse_listing(context)
            case ("listing", TokenType.TEXT):
                token = context.current_token
                text = textwrap.dedent("\n".join(self._collect_text_lines(context, raw=True)))
                return Listing(text, context.take_block_title(), location=token.location)
            case ("pass", TokenType.PASSTHROUGH_DELIMITER):
                return self._parse_passthrough(context, attributes.get("subs"))
            case ("pass", TokenType.TEXT):
                token = context.current_token
                text = "\n".join(self._collect_text_lines(context, raw=True))
                return Passthrough(
                    text, context.take_block_title(), attributes.get("subs"), location=token.location
                )
            case (name, TokenType.OPEN_DELIMITER) if name:
                return self._parse_open(context, style)
            case (name, TokenType.EXAMPLE_DELIMITER) if name.upper() in _ADMONITION_STYLES:
                token = context.current_token
                admonition = Admonition(
                    AdmonitionType[name.upper()],
                    title=context.take_block_title(),
                    location=token.location,
                )
                return self._parse_compound(context, admonition, TokenType.EXAMPLE_DELIMITER)
            case (name, TokenType.TEXT) if name.upper() in _ADMONITION_STYLES and not is_block_title(
                context.current_token.value
            ):
                token = context.current_token
                text = "\n".join(self._collect_text_lines(context))
                admonition = Admonition(
                    AdmonitionType[name.upper()],
                    text,
                    context.take_block_title(),
                    location=token.location,
                )
                admonition.add_children(self._parse_inline(text, context))
                return admonition
            case (_, TokenType.TABLE_DELIMITER):
                return self._parse_table(context, attributes)
            case _:
                return self._parse_element(context)

    def _attribute_fallback(self, content: str, token: Token) -> Paragraph:
        """An attribute line with nothing to apply to is kept as text."""
        paragraph = Paragraph(f"[{content}]", location=token.location)
        paragraph.add_child(Text(f"[{content}]"))
        return paragraph
