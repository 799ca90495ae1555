"""StringBuilder for HTML output.

Appends fragments to a list and joins once at the end, so rendering a
document is linear in the size of the output.

Thread Safety:
StringBuilder instances are local to each render() call.

"""

from __future__ import annotations


class StringBuilder:
    """Fragment accumulator used by the HTML renderer.

    Usage:
            >>> sb = StringBuilder()
            >>> sb.append("<p>").append("Hello").append_line("</p>")
            >>> sb.build()
            '<p>Hello</p>\\n'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, s: str) -> StringBuilder:
        """Append a fragment (empty strings are skipped); returns self."""
        if s:
            self._parts.append(s)
        return self

    def append_line(self, s: str = "") -> StringBuilder:
        """Append a fragment followed by a newline; returns self."""
        if s:
            self._parts.append(s)
        self._parts.append("\n")
        return self

    def build(self) -> str:
        """Join all fragments into the final string."""
        return "".join(self._parts)

    def __bool__(self) -> bool:
        return bool(self._parts)
