"""Utility modules for Tintero.

Provides:
- text: slugify, escape_html and parameter coercion helpers
- logger: get_logger for logging
"""

from tintero.utils.logger import get_logger
from tintero.utils.text import escape_html, parse_bool, parse_int, slugify

__all__ = [
    "escape_html",
    "get_logger",
    "parse_bool",
    "parse_int",
    "slugify",
]
