"""Inline parsing for Tintero parser.

Splits paragraph, list item and cell text into inline nodes. Every pattern
is searched from the current position and the earliest match wins; when two
patterns match at the same offset the one listed first in
``_INLINE_PATTERNS`` wins. Text between matches becomes Text nodes.

Single-character marks (``*bold*``, ``_em_``, ``#mark#``) are constrained:
they only pair up at word boundaries, so ``snake_case_name`` and ``2*3*4``
stay plain text. Doubled marks (``**``, ``__``, ``##``) work anywhere.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from tintero.nodes import (
    Anchor,
    CrossReference,
    Emphasis,
    Footnote,
    Highlight,
    Image,
    InlineCode,
    Link,
    MacroType,
    Node,
    Strong,
    Subscript,
    Superscript,
    Text,
)
from tintero.parsing.macros import parse_macro_parameters

if TYPE_CHECKING:
    from tintero.context import ParseContext

_STRONG = re.compile(r"\*\*(.+?)\*\*|(?<![\w*])\*(?=\S)([^*]+?)(?<=\S)\*(?![\w*])")
_EMPHASIS = re.compile(r"__(.+?)__|(?<![\w_])_(?=\S)([^_]+?)(?<=\S)_(?![\w_])")
_HIGHLIGHT = re.compile(r"##(.+?)##|(?<![\w#])#(?=\S)([^#]+?)(?<=\S)#(?![\w#])")
_SUPERSCRIPT = re.compile(r"\^([^\^\s]+)\^")
_SUBSCRIPT = re.compile(r"~([^~\s]+)~")
_INLINE_CODE = re.compile(r"`([^`]+)`")
_LINK = re.compile(r"(https?://[^\s\[\]<>]+)(?:\[([^\]]*)\])?")
_IMAGE = re.compile(r"image::?([^\s\[]+)\[([^\]]*)\]")
_ANCHOR = re.compile(r"\[\[([^\]]+)\]\]")
_CROSS_REFERENCE = re.compile(r"<<([^,>]+?)(?:,(.+?))?>>")
_FOOTNOTE = re.compile(r"footnote:([^:\[\]\s]*?)\[([^\]]*)\]")
_INLINE_MACRO = re.compile(r"(\w+):([^\s\[]*)\[([^\]]*)\]")

_INLINE_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("strong", _STRONG),
    ("emphasis", _EMPHASIS),
    ("highlight", _HIGHLIGHT),
    ("superscript", _SUPERSCRIPT),
    ("subscript", _SUBSCRIPT),
    ("code", _INLINE_CODE),
    ("link", _LINK),
    ("image", _IMAGE),
    ("anchor", _ANCHOR),
    ("xref", _CROSS_REFERENCE),
    ("footnote", _FOOTNOTE),
    ("macro", _INLINE_MACRO),
)

# Punctuation that ends a sentence rather than a bare URL.
_URL_TRAILING = ".,;:!?)'\""


class InlineParsingMixin:
    """Mixin for inline content parsing.

    Required Host Methods:
        - _create_macro_element(name, target, parameters, macro_type, context) -> Node

    """

    def _parse_inline(self, text: str, context: ParseContext) -> list[Node]:
        """Split ``text`` into inline nodes.

        Examples:
            "A *B* C" -> [Text("A "), Strong("B"), Text(" C")]
        """
        nodes: list[Node] = []
        pos = 0
        length = len(text)

        while pos < length:
            best: re.Match[str] | None = None
            best_kind = ""
            for kind, pattern in _INLINE_PATTERNS:
                match = pattern.search(text, pos)
                if match is not None and (best is None or match.start() < best.start()):
                    best, best_kind = match, kind
                    if match.start() == pos:
                        break

            if best is None:
                nodes.append(Text(text[pos:]))
                break

            if best.start() > pos:
                nodes.append(Text(text[pos : best.start()]))
            node, pos = self._create_inline_element(best_kind, best, context)
            nodes.append(node)

        return nodes

    def _create_inline_element(
        self, kind: str, match: re.Match[str], context: ParseContext
    ) -> tuple[Node, int]:
        """Build the node for ``match``; returns it with the offset just past it."""
        end = match.end()
        match kind:
            case "strong":
                return Strong(match.group(1) or match.group(2)), end
            case "emphasis":
                return Emphasis(match.group(1) or match.group(2)), end
            case "highlight":
                return Highlight(match.group(1) or match.group(2)), end
            case "superscript":
                return Superscript(match.group(1)), end
            case "subscript":
                return Subscript(match.group(1)), end
            case "code":
                return InlineCode(match.group(1)), end
            case "link":
                url = match.group(1)
                label = match.group(2)
                if label is None:
                    url = url.rstrip(_URL_TRAILING)
                    end = match.start(1) + len(url)
                return Link(url, label.strip() if label else url), end
            case "image":
                parameters = parse_macro_parameters(match.group(2))
                return Image(match.group(1), parameters.get("alt", ""), parameters.get("title")), end
            case "anchor":
                anchor_id, _, label = match.group(1).partition(",")
                return Anchor(anchor_id.strip(), label.strip()), end
            case "xref":
                return CrossReference(match.group(1).strip(), (match.group(2) or "").strip()), end
            case "footnote":
                return self._parse_footnote(match, context), end
            case _:
                return self._parse_inline_macro(match, context), end

    def _parse_footnote(self, match: re.Match[str], context: ParseContext) -> Footnote:
        """footnote:[text], footnote:id[text] or a footnote:id[] back-reference."""
        footnote_id = match.group(1).strip()
        text = match.group(2).strip()
        registry = context.footnotes

        if not footnote_id:
            footnote_id = registry.next_anonymous_id()
            return Footnote(footnote_id, text, registry.label_for(footnote_id))

        label = registry.label_for(footnote_id)
        if not text:
            return Footnote(footnote_id, "", label, is_reference=True)
        return Footnote(footnote_id, text, label)

    def _parse_inline_macro(self, match: re.Match[str], context: ParseContext) -> Node:
        name = match.group(1)
        target = match.group(2).strip()
        bracket = match.group(3).strip()

        match name.lower():
            case "xref":
                return CrossReference(target, bracket)
            case "link" | "mailto":
                url = target if name.lower() == "link" else f"mailto:{target}"
                return Link(url, bracket or target)
            case _:
                parameters = parse_macro_parameters(bracket)
                return self._create_macro_element(
                    name, target, parameters, MacroType.INLINE, context
                )
