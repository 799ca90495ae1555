"""Tintero renderers.

Renderers convert the document tree into output formats.

Available Renderers:
- HtmlRenderer: Renders the tree to HTML using StringBuilder pattern

Thread Safety:
All renderers use StringBuilder local to each render() call.
Safe for concurrent use from multiple threads.

"""

from tintero.renderers.html import HtmlRenderer
from tintero.renderers.protocol import ASTRenderer

__all__ = ["ASTRenderer", "HtmlRenderer"]
