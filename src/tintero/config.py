"""ContextVar-based parse configuration for Tintero.

Provides context-local configuration using Python's ContextVars (PEP 567).
Config is set once per AsciiDoc facade call and read by the parser, the
include processor and every nested parse of an included file.

Thread Safety:
    ContextVars are context-local by design. Each thread has independent
    storage, so concurrent parses with different configs never interfere.

Usage:
    # Through the facade
    adoc = AsciiDoc(strict_includes=True)
    doc = adoc.parse_file("book.adoc")

    # Direct parser usage
    from tintero.config import ParseConfig, parse_config_context

    with parse_config_context(ParseConfig(populate_toc=False)):
        doc = Parser().parse(source)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Attributes:
        strict_includes: Raise instead of leaving an include placeholder when
            a non-optional include cannot be found or read
        max_include_depth: Maximum nesting of include directives
        populate_toc: Fill ``toc::[]`` entries from the document's sections
        implicit_table_header: Treat a first table row followed by a blank
            line as the header row
        section_ids: Give every section an ``id`` attribute derived from
            its title

    """

    strict_includes: bool = False
    max_include_depth: int = 64
    populate_toc: bool = True
    implicit_table_header: bool = True
    section_ids: bool = True

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ParseConfig":
        """Create ParseConfig from a dictionary, ignoring unknown keys.

        Example:
            >>> config = ParseConfig.from_dict({
            ...     "strict_includes": True,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.strict_includes
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "tintero_parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get the parse configuration active in the current context."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set the parse configuration for the current context."""
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset the current context to the default configuration."""
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Use ``config`` for the duration of the block.

    Restores the previous config on exit, even if an exception is raised.

    Example:
        >>> with parse_config_context(ParseConfig(section_ids=False)):
        ...     doc = Parser().parse("== Intro")
        >>> # Previous config restored here

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "ParseConfig",
    "get_parse_config",
    "parse_config_context",
    "reset_parse_config",
    "set_parse_config",
]
