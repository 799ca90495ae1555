"""Exception classes for Tintero.

Provides standardized exceptions for error handling throughout Tintero.

Hierarchy:
    TinteroError
    ├── ParseError
    │   ├── ParseInputError (also a ValueError)
    │   ├── IncludeError
    │   ├── CircularIncludeError
    │   └── IncludeDepthError
    └── RenderError

CircularIncludeError and IncludeDepthError are siblings of IncludeError,
not subclasses: code that recovers from a missing include by catching
IncludeError can never swallow a cycle.
"""

from __future__ import annotations

from collections.abc import Sequence


class TinteroError(Exception):
    """Base exception for all Tintero errors.
    
    Subclass this for specific error categories.
    """

    pass


class ParseError(TinteroError):
    """Error during AsciiDoc parsing.
    
    Raised when the parser encounters invalid or unexpected input.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize parse error with optional location.
        
        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed, 0 = not
                anchored to a line)
            col_offset: Column offset where error occurred (1-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        # Build formatted message
        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno:
            location += f"{lineno}:"
            if col_offset:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class ParseInputError(ParseError, ValueError):
    """Top-level input that cannot be parsed at all (None or empty text)."""


class IncludeError(ParseError):
    """An include target could not be found or read.
    
    Recoverable: an ``optional`` include turns this into an empty result.
    """

    def __init__(
        self,
        message: str,
        path: str,
        include_chain: Sequence[str] = (),
        source_file: str | None = None,
    ) -> None:
        self.path = path
        self.include_chain = tuple(include_chain)
        super().__init__(message, 0, 0, source_file)


class CircularIncludeError(ParseError):
    """A file includes itself, directly or through other files.
    
    Never recoverable, even when the include is marked optional.
    """

    def __init__(
        self,
        path: str,
        include_chain: Sequence[str],
        source_file: str | None = None,
    ) -> None:
        self.path = path
        self.include_chain = tuple(include_chain)
        name = _file_name(path)
        chain = " -> ".join(_file_name(p) for p in self.include_chain)
        message = (
            f"Circular include detected: {chain} -> {name}. "
            f"File '{name}' is already being processed in the include chain."
        )
        super().__init__(message, 0, 0, source_file)


class IncludeDepthError(ParseError):
    """Include nesting exceeded ``ParseConfig.max_include_depth``."""

    def __init__(
        self,
        path: str,
        max_depth: int,
        include_chain: Sequence[str] = (),
        source_file: str | None = None,
    ) -> None:
        self.path = path
        self.max_depth = max_depth
        self.include_chain = tuple(include_chain)
        super().__init__(
            f"Include depth limit of {max_depth} exceeded while including "
            f"'{_file_name(path)}'",
            0,
            0,
            source_file,
        )


class RenderError(TinteroError):
    """Error during HTML rendering.
    
    Raised when the renderer encounters an invalid document tree
    or fails to produce valid output.
    """

    pass


def _file_name(path: str) -> str:
    return path.replace("\\", "/").rsplit("/", 1)[-1]
