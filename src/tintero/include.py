"""Include directive expansion.

``include::path[...]`` splices another file into the document. The
IncludeProcessor resolves the path, guards against cycles and runaway
nesting, reads the file, applies the line, tag and indent filters, and
parses the result with a context derived from the including one (so
attributes and footnote numbering carry across files).

Expansion outcomes are values rather than exceptions: ``expand`` returns
IncludeResolved or IncludeFailed and the caller decides how to degrade.
Cycles and depth overruns are not outcomes; they always propagate.

"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeAlias

from tintero.config import get_parse_config
from tintero.context import ParseContext
from tintero.errors import CircularIncludeError, IncludeDepthError, IncludeError
from tintero.lexer import Tokenizer
from tintero.nodes import IncludeMacro, Node, Section
from tintero.utils.logger import get_logger
from tintero.utils.text import parse_int

if TYPE_CHECKING:
    from tintero.parser import Parser

logger = get_logger(__name__)

_TAG_START = re.compile(r"\btag::([^\[\s]+)\[\]")
_TAG_END = re.compile(r"\bend::([^\[\s]+)\[\]")


@dataclass(frozen=True, slots=True)
class IncludeResolved:
    """The include was read and parsed; ``elements`` may be empty."""

    macro: IncludeMacro
    elements: list[Node] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class IncludeFailed:
    """The include could not be read; the directive stays as a placeholder."""

    macro: IncludeMacro
    error: IncludeError


IncludeOutcome: TypeAlias = IncludeResolved | IncludeFailed


class IncludeProcessor:
    """Expands include macros on behalf of a Parser.

    The processor keeps no per-document state: the include stack and the
    shared attributes travel in the ParseContext.

    """

    __slots__ = ("_parser",)

    def __init__(self, parser: Parser) -> None:
        self._parser = parser

    def expand(self, macro: IncludeMacro, context: ParseContext) -> IncludeOutcome:
        """Expand ``macro`` relative to ``context``.

        Raises:
            CircularIncludeError: The file is already being expanded
            IncludeDepthError: Nesting exceeds ``max_include_depth``
        """
        base_path = context.base_path or context.current_file_path or ""
        try:
            elements = self.process_include(macro, base_path, context.include_stack, context)
        except IncludeError as error:
            return IncludeFailed(macro, error)
        return IncludeResolved(macro, elements)

    def process_include(
        self,
        macro: IncludeMacro,
        base_path: str,
        include_stack: tuple[str, ...] = (),
        parent: ParseContext | None = None,
    ) -> list[Node]:
        """Read, filter and parse the file named by ``macro``.

        Args:
            macro: The include directive
            base_path: File or directory the include path is relative to
            include_stack: Files currently being expanded, outermost first
            parent: Context whose attributes and footnotes the include shares

        Returns:
            Top-level elements of the included file (empty for a missing
            optional include)

        Raises:
            IncludeError: The file is missing or unreadable
            CircularIncludeError: The file is already in ``include_stack``
            IncludeDepthError: ``include_stack`` is already at the limit
        """
        resolved = self.resolve_include_path(macro.file_path, base_path, include_stack)

        if self.would_create_circular_reference(resolved, include_stack):
            raise CircularIncludeError(resolved, include_stack)

        max_depth = get_parse_config().max_include_depth
        if len(include_stack) >= max_depth:
            raise IncludeDepthError(resolved, max_depth, include_stack)

        if not os.path.isfile(resolved):
            if macro.optional:
                logger.debug("Skipping missing optional include %s", resolved)
                return []
            raise IncludeError(
                f"Include file not found: {resolved}", resolved, include_stack
            )

        try:
            with open(resolved, encoding="utf-8") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            if macro.optional:
                logger.debug("Skipping unreadable optional include %s: %s", resolved, e)
                return []
            raise IncludeError(
                f"Error reading include file '{resolved}': {e}", resolved, include_stack
            ) from e

        content = self._filter_content(content, macro)
        logger.debug("Including %s (%d chars)", resolved, len(content))

        stack = (*include_stack, resolved)
        tokenizer = Tokenizer(content, source_file=resolved)
        if parent is not None:
            context = parent.derive(tokenizer, resolved, stack)
        else:
            context = ParseContext(
                tokenizer,
                base_path=resolved,
                current_file_path=resolved,
                include_stack=stack,
            )
        elements = self._parser.parse_elements(context)

        if macro.level_offset:
            offset = parse_int(macro.level_offset)
            if offset:
                elements = _apply_level_offset(elements, offset)
        return elements

    def resolve_include_path(
        self,
        path: str,
        base_path: str | None,
        include_stack: tuple[str, ...] = (),
    ) -> str:
        """Absolute, normalized path for an include target.

        Relative targets resolve against ``base_path``: its directory when it
        names a file, the working directory when it is empty.
        """
        if not path or not path.strip():
            raise IncludeError("Include path cannot be empty", path or "", include_stack)
        path = path.strip()
        if os.path.isabs(path):
            return os.path.abspath(path)
        if not base_path:
            base_dir = os.getcwd()
        elif os.path.isfile(base_path):
            base_dir = os.path.dirname(base_path)
        else:
            base_dir = base_path
        return os.path.abspath(os.path.join(base_dir, path))

    def would_create_circular_reference(self, path: str, include_stack: tuple[str, ...]) -> bool:
        """True when ``path`` is already being expanded (compared case-insensitively)."""
        target = os.path.abspath(path).casefold()
        return any(os.path.abspath(entry).casefold() == target for entry in include_stack)

    def _filter_content(self, content: str, macro: IncludeMacro) -> str:
        """Apply the lines, tags and indent filters in that order.

        ``indent=N`` pads every non-empty line with N spaces; empty lines stay
        empty so no trailing whitespace is introduced.
        """
        lines = content.splitlines()
        if macro.lines:
            lines = select_lines(lines, macro.lines)
        if macro.tags:
            lines = select_tagged_lines(lines, macro.tags)
        if macro.indent_level:
            indent = parse_int(macro.indent_level)
            if indent and indent > 0:
                pad = " " * indent
                lines = [pad + line if line else line for line in lines]
        return "\n".join(lines)


def select_lines(lines: list[str], line_spec: str) -> list[str]:
    """Keep the lines named by ``line_spec``, in the order given.

    The spec is a comma- or semicolon-separated list of 1-based line numbers
    and inclusive ``start..end`` ranges; ``-1`` (or an empty end) means the
    last line. Out-of-range and malformed entries are skipped.

    Examples:
        >>> select_lines(["a", "b", "c", "d", "e"], "2..3")
        ['b', 'c']
        >>> select_lines(["a", "b", "c", "d", "e"], "1;4..-1")
        ['a', 'd', 'e']
    """
    total = len(lines)
    selected: list[str] = []
    for raw in re.split(r"[,;]", line_spec):
        part = raw.strip()
        if not part:
            continue
        if ".." in part:
            start_text, _, end_text = part.partition("..")
            start = parse_int(start_text.strip()) or 1
            end = parse_int(end_text.strip()) if end_text.strip() else -1
            if end is None:
                continue
            if end == -1:
                end = total
            start = max(start, 1)
            end = min(end, total)
            selected.extend(lines[start - 1 : end])
        else:
            number = parse_int(part)
            if number == -1:
                number = total
            if number is not None and 1 <= number <= total:
                selected.append(lines[number - 1])
    return selected


def select_tagged_lines(lines: list[str], tag_spec: str) -> list[str]:
    """Keep the lines between ``tag::name[]`` and ``end::name[]`` markers.

    ``tag_spec`` names one or more tags separated by commas or semicolons.
    Marker lines themselves are never included.
    """
    wanted = {t.strip() for t in re.split(r"[,;]", tag_spec) if t.strip()}
    open_tags: set[str] = set()
    selected: list[str] = []
    for line in lines:
        start = _TAG_START.search(line)
        if start is not None:
            open_tags.add(start.group(1))
            continue
        end = _TAG_END.search(line)
        if end is not None:
            open_tags.discard(end.group(1))
            continue
        if open_tags & wanted:
            selected.append(line)
    return selected


def _apply_level_offset(elements: list[Node], offset: int) -> list[Node]:
    """Shift section levels by ``offset`` (never below 1).

    Level-0 containers from nested includes are kept; their children are
    shifted instead.
    """
    shifted: list[Node] = []
    for element in elements:
        if isinstance(element, Section) and element.is_container:
            moved = _apply_level_offset(list(element.children), offset)
            element.clear_children()
            element.add_children(moved)
            shifted.append(element)
        elif isinstance(element, Section):
            section = Section(
                element.title,
                max(1, element.level + offset),
                element.id,
                location=element.location,
                attributes=element.attributes,
            )
            section.add_children(list(element.children))
            shifted.append(section)
        else:
            shifted.append(element)
    return shifted


__all__ = [
    "IncludeFailed",
    "IncludeOutcome",
    "IncludeProcessor",
    "IncludeResolved",
    "select_lines",
    "select_tagged_lines",
]
