"""Table parsing for Tintero parser.

Handles ``|===`` delimited tables with ``|`` separated cells. A cell may
carry a span prefix before its separator (``2+|`` spans two columns,
``.3+|`` three rows, ``2.3+|`` both).
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import TYPE_CHECKING

from tintero.config import get_parse_config
from tintero.nodes import Table, TableCell, TableHeader, TableRow
from tintero.tokens import TokenType

if TYPE_CHECKING:
    from tintero.context import ParseContext
    from tintero.tokens import Token

_CELL_SEPARATOR = re.compile(r"(?:(?<!\S)(?:(\d+)(?:\.(\d+))?|\.(\d+))\+([<^>])?)?\|")
# A row whose first cell carries a span prefix ("2+|a") does not start with "|".
_SPAN_ROW = re.compile(r"^(?:\d+(?:\.\d+)?|\.\d+)\+[<^>]?\|")

_ALIGNMENTS = {"<": "left", "^": "center", ">": "right"}


def column_alignments(cols: str | None) -> list[str | None]:
    """Per-column alignment from a ``cols`` attribute.

    Examples:
        >>> column_alignments("<1,^2,>1")
        ['left', 'center', 'right']
        >>> column_alignments("2*^")
        ['center', 'center']
    """
    if not cols:
        return []
    alignments: list[str | None] = []
    for raw in cols.split(","):
        spec = raw.strip()
        repeat = 1
        if "*" in spec:
            count, _, spec = spec.partition("*")
            repeat = int(count) if count.strip().isdigit() else 1
        alignment = next((_ALIGNMENTS[c] for c in spec if c in _ALIGNMENTS), None)
        alignments.extend([alignment] * repeat)
    return alignments


class TableParsingMixin:
    """Mixin for table parsing.

    Required Host Methods:
        - _parse_inline(text, context) -> list[Node]

    """

    def _parse_table(
        self, context: ParseContext, attributes: Mapping[str, str] | None = None
    ) -> Table:
        """Parse a table from its opening ``|===`` through the closing one.

        The first row becomes the header when the ``header`` option is set,
        or (with ``implicit_table_header``) when a blank line separates it
        from further rows. Lines inside the table that are not rows are
        skipped. A missing closing delimiter ends the table at end of input.
        """
        attributes = attributes or {}
        open_token = context.current_token
        context.advance()

        alignments = column_alignments(attributes.get("cols"))
        rows: list[TableRow] = []
        blank_after_first = False

        while not context.at_end and context.current_token.type is not TokenType.TABLE_DELIMITER:
            token = context.current_token
            if token.type is TokenType.TABLE_ROW or (
                token.type is TokenType.TEXT and _SPAN_ROW.match(token.value)
            ):
                rows.append(self._parse_table_row(token, alignments, context))
            elif token.type is TokenType.EMPTY_LINE and len(rows) == 1:
                blank_after_first = True
            context.advance()
        context.accept(TokenType.TABLE_DELIMITER)

        table = Table(location=open_token.location)
        title = context.take_block_title()
        if title is not None:
            table.attributes["title"] = title

        options = {o.strip() for o in attributes.get("options", "").split(",")}
        implicit = (
            get_parse_config().implicit_table_header
            and blank_after_first
            and len(rows) > 1
            and "noheader" not in options
        )
        if rows and ("header" in options or implicit):
            first = rows.pop(0)
            header = TableHeader(location=first.location)
            for cell in first.cells:
                cell.is_header = True
                header.add_child(cell)
            table.set_header(header)

        table.add_children(rows)
        return table

    def _parse_table_row(
        self,
        token: Token,
        alignments: list[str | None],
        context: ParseContext,
    ) -> TableRow:
        """Split a ``|a |b`` line into cells; empty cells are dropped."""
        line = token.value
        row = TableRow(location=token.location)
        separators = list(_CELL_SEPARATOR.finditer(line))
        column = 0

        for index, separator in enumerate(separators):
            end = separators[index + 1].start() if index + 1 < len(separators) else len(line)
            content = line[separator.end() : end].strip()
            if not content:
                continue

            col_span = int(separator.group(1)) if separator.group(1) else 1
            row_span_text = separator.group(2) or separator.group(3)
            alignment = _ALIGNMENTS.get(separator.group(4) or "")
            if alignment is None and column < len(alignments):
                alignment = alignments[column]

            cell = TableCell(
                content,
                col_span=col_span,
                row_span=int(row_span_text) if row_span_text else 1,
                alignment=alignment,
                location=token.location,
            )
            cell.add_children(self._parse_inline(content, context))
            row.add_child(cell)
            column += col_span

        return row
