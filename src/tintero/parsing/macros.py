"""Macro parsing for Tintero parser.

Handles block macros (``name::target[params]``), the ``toc::[]`` macro and
the bracketed parameter lists shared by every macro form. Include macros
are handed to the IncludeProcessor; the outcome decides what node the
include site turns into.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from tintero.config import get_parse_config
from tintero.include import IncludeFailed, IncludeResolved
from tintero.nodes import (
    ImageMacro,
    IncludeMacro,
    Macro,
    MacroType,
    Node,
    Section,
    TableOfContents,
    VideoMacro,
)
from tintero.utils.logger import get_logger
from tintero.utils.text import parse_int

if TYPE_CHECKING:
    from tintero.context import ParseContext
    from tintero.include import IncludeProcessor

logger = get_logger(__name__)

_BLOCK_MACRO = re.compile(r"^(\w+)::([^\[]*)\[([^\]]*)\]$")
_TABLE_OF_CONTENTS = re.compile(r"^toc::\s*\[(.*)\]$")

DEFAULT_TOC_TITLE = "Table of Contents"
DEFAULT_TOC_LEVELS = 3


def split_macro_parameters(parameter_string: str) -> list[str]:
    """Split a bracketed parameter list on top-level commas.

    Commas inside single- or double-quoted values do not split; the quotes
    are kept so the caller can tell quoted values apart.

    Examples:
        >>> split_macro_parameters('Alt text,width=200')
        ['Alt text', 'width=200']
        >>> split_macro_parameters('title="One, two",3')
        ['title="One, two"', '3']
    """
    parts: list[str] = []
    current: list[str] = []
    quote: str | None = None
    for char in parameter_string:
        if quote is None and char in "\"'":
            quote = char
            current.append(char)
        elif quote is not None and char == quote:
            quote = None
            current.append(char)
        elif quote is None and char == ",":
            parts.append("".join(current))
            current.clear()
        else:
            current.append(char)
    if current:
        parts.append("".join(current))
    return parts


def strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def parse_macro_parameters(parameter_string: str) -> dict[str, str]:
    """Classify macro parameters into a flat string map.

    ``key=value`` parts are named parameters (surrounding quotes removed).
    The first positional part is stored as both ``alt`` and ``title``; later
    positional parts become ``param1``, ``param2`` and so on.

    Examples:
        >>> parse_macro_parameters('Company logo,200,100,link="https://example.org"')
        {'alt': 'Company logo', 'title': 'Company logo', 'param1': '200', 'param2': '100', 'link': 'https://example.org'}
    """
    parameters: dict[str, str] = {}
    if not parameter_string:
        return parameters

    positional = 0
    for raw in split_macro_parameters(parameter_string):
        part = raw.strip()
        if not part:
            continue
        key, sep, value = part.partition("=")
        if sep and key.strip():
            parameters[key.strip()] = strip_quotes(value.strip())
            continue
        part = strip_quotes(part)
        if positional == 0:
            parameters["alt"] = part
            parameters["title"] = part
        else:
            parameters[f"param{positional}"] = part
        positional += 1
    return parameters


class MacroParsingMixin:
    """Block macro, include and TOC parsing.

    Required Host Attributes:
        - _include_processor: IncludeProcessor

    """

    _include_processor: IncludeProcessor

    def _parse_block_macro(self, context: ParseContext) -> Node:
        token = context.current_token
        match = _BLOCK_MACRO.match(token.value)
        if match is None:
            raise context.error(f"Invalid block macro format: {token.value}")

        name = match.group(1).strip()
        target = match.group(2).strip()
        parameters = parse_macro_parameters(match.group(3).strip())
        context.advance()

        element = self._create_macro_element(name, target, parameters, MacroType.BLOCK, context)
        if isinstance(element, Macro):
            element.location = token.location
        title = context.take_block_title()
        if title is not None:
            element.attributes["title"] = title
        return element

    def _create_macro_element(
        self,
        name: str,
        target: str,
        parameters: dict[str, str],
        macro_type: MacroType,
        context: ParseContext | None = None,
    ) -> Node:
        """Build the node for a macro; block includes are expanded when a context is given."""
        match name.lower():
            case "image":
                return ImageMacro(target, parameters, macro_type)
            case "video":
                return VideoMacro(target, parameters, macro_type)
            case "include":
                macro = IncludeMacro(target, parameters, macro_type)
                if context is None or macro_type is MacroType.INLINE:
                    return macro
                return self._expand_include(macro, context)
            case _:
                return Macro(name, target, parameters, macro_type)

    def _expand_include(self, macro: IncludeMacro, context: ParseContext) -> Node:
        """Replace an include directive with the content it resolves to.

        No elements leave the directive as a placeholder, one element takes
        its place directly, and several are wrapped in a level-0 Section so
        the include site still yields a single node.
        """
        outcome = self._include_processor.expand(macro, context)
        match outcome:
            case IncludeResolved(elements=[]):
                return macro
            case IncludeResolved(elements=[element]):
                return element
            case IncludeResolved(elements=elements):
                container = Section("", 0)
                container.add_children(elements)
                return container
            case IncludeFailed(error=error):
                if get_parse_config().strict_includes:
                    raise error
                logger.warning("Include left unresolved: %s", error)
                return macro

    def _parse_table_of_contents(self, context: ParseContext) -> TableOfContents:
        token = context.current_token
        match = _TABLE_OF_CONTENTS.match(token.value)
        if match is None:
            raise context.error(f"Invalid table of contents format: {token.value}")

        parameters = parse_macro_parameters(match.group(1).strip())
        title = parameters.get("title", DEFAULT_TOC_TITLE)
        levels = parse_int(parameters.get("levels"))
        context.advance()
        context.take_block_title()

        # Entries are filled in once the whole document has been parsed.
        return TableOfContents(
            title,
            levels if levels is not None else DEFAULT_TOC_LEVELS,
            location=token.location,
        )
