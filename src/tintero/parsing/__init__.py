"""Parsing subsystem for Tintero AsciiDoc parser.

Provides mixin classes for modular parsing functionality:
- `InlineParsingMixin`: Inline content (strong, emphasis, links, footnotes)
- `MacroParsingMixin`: Block macros, includes and ``toc::[]``
- `BlockParsingMixin`: Block-level content (sections, lists, tables, blocks)

Architecture:
Each mixin handles one aspect of the grammar. All of them take the
ParseContext explicitly, so the Parser itself carries no per-parse state.

Example:
    >>> from tintero.parsing import (
    ...     BlockParsingMixin,
    ...     InlineParsingMixin,
    ...     MacroParsingMixin,
    ... )
    >>> class Parser(MacroParsingMixin, InlineParsingMixin, BlockParsingMixin):
    ...     pass

"""

from tintero.parsing.blocks import BlockParsingMixin
from tintero.parsing.inline import InlineParsingMixin
from tintero.parsing.macros import (
    MacroParsingMixin,
    parse_macro_parameters,
    split_macro_parameters,
)

__all__ = [
    "BlockParsingMixin",
    "InlineParsingMixin",
    "MacroParsingMixin",
    "parse_macro_parameters",
    "split_macro_parameters",
]
