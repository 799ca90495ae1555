"""Text processing utilities for Tintero.

Example:
    >>> from tintero.utils.text import slugify
    >>> slugify("Getting Started!")
    'getting-started'
"""

from __future__ import annotations

import html as html_module
import re


def slugify(text: str, separator: str = "-") -> str:
    """Convert a section title to an anchor id.

    Keeps Unicode word characters so titles in any script produce a usable id.

    Args:
        text: Title text
        separator: Character placed between words

    Returns:
        Lowercase slug, or "" for empty input

    Examples:
        >>> slugify("Hello World!")
        'hello-world'
        >>> slugify("Install (Linux)")
        'install-linux'
        >>> slugify("Café")
        'café'
    """
    if not text:
        return ""
    text = html_module.unescape(text).lower().strip()
    text = re.sub(r"[^\w\s-]", "", text)
    text = re.sub(r"[-\s]+", separator, text)
    return text.strip(separator)


def escape_html(text: str) -> str:
    """Escape text for use in HTML content and attribute values.

    Examples:
        >>> escape_html("<b>\\"Tom\\" & 'Jerry'</b>")
        '&lt;b&gt;&quot;Tom&quot; &amp; &#39;Jerry&#39;&lt;/b&gt;'
    """
    if not text:
        return ""
    return html_module.escape(text, quote=True).replace("&#x27;", "&#39;")


def parse_bool(value: str | None, default: bool = False) -> bool:
    """Interpret a macro or attribute value as a boolean.

    "true", "yes" and "1" (any case) are true; any other given value is false.
    """
    if value is None:
        return default
    return value.strip().lower() in ("true", "yes", "1")


def parse_int(value: str | None) -> int | None:
    """Parse an integer parameter, returning None when absent or malformed."""
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None
