"""Syntax highlighting hook for code blocks.

Provides optional syntax highlighting for ``[source,lang]`` and
``----lang`` blocks rendered by the HtmlRenderer. When tintero[syntax] is
installed, Rosettes is used automatically.

Usage:
    # Automatic with tintero[syntax]
    from tintero import AsciiDoc
    adoc = AsciiDoc(highlight=True)

    # Manual injection
    from tintero.highlighting import set_highlighter

    def my_highlighter(code: str, language: str) -> str:
        return f'<pre class="language-{language}"><code>{code}</code></pre>'

    set_highlighter(my_highlighter)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from tintero.utils.text import escape_html


class Highlighter(Protocol):
    """Protocol for syntax highlighters.

    Thread Safety:
        Implementations must be thread-safe. The highlight() method
        may be called concurrently from multiple render threads.
    """

    def highlight(self, code: str, language: str) -> str:
        """Highlight code with syntax colors.

        Contract:
            - MUST return valid HTML (never raise for bad input)
            - MUST escape HTML entities in code
            - SHOULD fall back to plain text for unknown languages
        """
        ...

    def supports_language(self, language: str) -> bool:
        """Check if highlighter supports the given language (never raises)."""
        ...


# Support for simple callable-based highlighters
SimpleHighlighter = Callable[[str, str], str]

# Global highlighter
_highlighter: Highlighter | SimpleHighlighter | None = None
_tried_rosettes: bool = False


def set_highlighter(highlighter: Highlighter | SimpleHighlighter | None) -> None:
    """Set the global syntax highlighter.

    Args:
        highlighter: A Highlighter protocol implementation, or a simple
            function that takes (code, language) and returns HTML.
            Pass None to clear the highlighter.
    """
    global _highlighter
    _highlighter = highlighter


def _try_import_rosettes() -> bool:
    """Try to import and configure Rosettes highlighter."""
    global _highlighter, _tried_rosettes

    if _tried_rosettes:
        return _highlighter is not None

    _tried_rosettes = True

    try:
        import rosettes  # type: ignore[import-not-found]
    except ImportError:
        return False

    class RosettesHighlighter:
        """Rosettes-based syntax highlighter implementing Highlighter protocol."""

        def highlight(self, code: str, language: str) -> str:
            result: str = rosettes.highlight(code, language=language)
            return result

        def supports_language(self, language: str) -> bool:
            try:
                result: bool = rosettes.supports_language(language)
                return result
            except Exception:
                return False

    _highlighter = RosettesHighlighter()
    return True


def highlight(code: str, language: str) -> str:
    """Highlight code using the configured highlighter.

    Falls back to a plain ``<pre><code>`` block when no highlighter is
    available or the highlighter does not know the language.
    """
    if _highlighter is None:
        _try_import_rosettes()

    highlighter = _highlighter
    if highlighter is not None:
        if hasattr(highlighter, "highlight") and callable(highlighter.highlight):
            if highlighter.supports_language(language):
                return highlighter.highlight(code, language)
        elif callable(highlighter):
            return highlighter(code, language)

    lang_class = f' class="language-{escape_html(language)}"' if language else ""
    return f"<pre><code{lang_class}>{escape_html(code)}</code></pre>"


def has_highlighter() -> bool:
    """Check if a syntax highlighter is available."""
    if _highlighter is not None:
        return True
    return _try_import_rosettes()


__all__ = ["Highlighter", "has_highlighter", "highlight", "set_highlighter"]
