"""Source location tracking for error messages and debugging.

Provides SourceLocation dataclass for tracking positions in source text.
Used throughout Tintero for error messages, tree nodes, and debugging.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Source location for error messages and debugging.
    
    All positions are 1-indexed (lineno and col_offset start at 1).
    ``offset`` is the 0-based character position in the source buffer.
    Included files carry their own path in ``source_file``.
    
    Examples:
            >>> loc = SourceLocation(lineno=3, col_offset=1, source_file="guide.adoc")
            >>> str(loc)
            'guide.adoc:3:1'
    
    """

    lineno: int
    col_offset: int
    offset: int = 0
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "file.adoc:10:5" or "10:5"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    @classmethod
    def unknown(cls) -> SourceLocation:
        """Create an unknown/placeholder location.

        Use for nodes created synthetically or when location is unavailable.
        """
        return cls(lineno=0, col_offset=0)
