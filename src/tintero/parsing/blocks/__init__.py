"""Block parsing subsystem for Tintero parser.

Provides mixins for parsing block-level AsciiDoc content:
- Section titles, paragraphs and admonition paragraphs
- Lists (bulleted, numbered, checklists) and description lists
- Tables
- Delimited blocks (code, listing, literal, verse, passthrough, quote,
  sidebar, example, open)
- Block attribute lines (``[source,python]``, ``[quote, Author]``)

Architecture:
Block parsing is split into logical modules:
- core: Block dispatch and line-oriented blocks
- lists: List and description list parsing
- table: ``|===`` table parsing
- delimited: Verbatim and compound delimited blocks
- attributes: Block attribute lists and the styles they select

"""

from tintero.parsing.blocks.attributes import AttributeBlockMixin
from tintero.parsing.blocks.core import BlockParsingCoreMixin
from tintero.parsing.blocks.delimited import DelimitedBlockMixin
from tintero.parsing.blocks.lists import ListParsingMixin
from tintero.parsing.blocks.table import TableParsingMixin


class BlockParsingMixin(
    BlockParsingCoreMixin,
    ListParsingMixin,
    TableParsingMixin,
    DelimitedBlockMixin,
    AttributeBlockMixin,
):
    """Combined block parsing mixin.

    Combines all block parsing functionality into a single mixin
    that can be inherited by the Parser class.

    Required Host Methods:
        - _parse_inline(text, context) -> list[Node]
        - _parse_block_macro(context) -> Node
        - _parse_table_of_contents(context) -> TableOfContents

    """


__all__ = [
    "AttributeBlockMixin",
    "BlockParsingCoreMixin",
    "BlockParsingMixin",
    "DelimitedBlockMixin",
    "ListParsingMixin",
    "TableParsingMixin",
]
