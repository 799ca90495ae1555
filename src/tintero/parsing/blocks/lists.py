"""List parsing for Tintero parser.

Handles ``*`` bulleted and ``1.`` numbered lists (with ``[ ]``/``[x]``
checkbox items) and ``term:: description`` lists.

Nesting is recorded, not built: each ListItem carries its marker depth in
``level`` (``**`` is 2) and all items of a run land in one List. Renderers
rebuild the nesting from the levels.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from tintero.nodes import DescriptionList, DescriptionListItem, List, ListItem, ListType
from tintero.tokens import TokenType

if TYPE_CHECKING:
    from tintero.context import ParseContext

_LIST_ITEM = re.compile(r"^(\*+|\d+\.)\s+(\[[ xX]\]\s+)?(.+)$")
_DESCRIPTION_ITEM = re.compile(r"^([^:\[\]]+)::\s*(.*)$")


class ListParsingMixin:
    """Mixin for list parsing.

    Required Host Methods:
        - _parse_inline(text, context) -> list[Node]

    """

    def _parse_list(self, context: ParseContext) -> List:
        """Parse consecutive list items; blank lines between items are allowed.

        The first item decides whether the list is ordered and where the
        numbering starts.
        """
        token = context.current_token
        match = _LIST_ITEM.match(token.value)
        if match is None:
            raise context.error(f"Invalid list item format: {token.value}")

        marker = match.group(1)
        if marker[0].isdigit():
            lst = List(ListType.ORDERED, int(marker[:-1]), location=token.location)
        else:
            lst = List(ListType.UNORDERED, location=token.location)
        title = context.take_block_title()
        if title is not None:
            lst.attributes["title"] = title

        while True:
            lst.add_child(self._parse_list_item(context))
            context.skip_blank_lines()
            if context.current_token.type is not TokenType.LIST_ITEM:
                break
        return lst

    def _parse_list_item(self, context: ParseContext) -> ListItem:
        token = context.current_token
        match = _LIST_ITEM.match(token.value)
        if match is None:
            raise context.error(f"Invalid list item format: {token.value}")
        context.advance()

        marker = match.group(1)
        checkbox = match.group(2)
        text = match.group(3).strip()
        item = ListItem(
            text,
            len(marker) if marker[0] == "*" else 1,
            is_checkbox=checkbox is not None,
            is_checked=checkbox is not None and checkbox[1] in "xX",
            location=token.location,
        )
        item.add_children(self._parse_inline(text, context))
        return item

    def _parse_description_list(self, context: ParseContext) -> DescriptionList:
        token = context.current_token
        dlist = DescriptionList(location=token.location)
        title = context.take_block_title()
        if title is not None:
            dlist.attributes["title"] = title

        while True:
            item_token = context.current_token
            match = _DESCRIPTION_ITEM.match(item_token.value)
            if match is None:
                raise context.error(f"Invalid description list item format: {item_token.value}")
            context.advance()

            description = match.group(2).strip()
            item = DescriptionListItem(
                match.group(1).strip(), description, location=item_token.location
            )
            if description:
                item.add_children(self._parse_inline(description, context))
            dlist.add_child(item)

            context.skip_blank_lines()
            if context.current_token.type is not TokenType.DESCRIPTION_LIST_ITEM:
                break
        return dlist
