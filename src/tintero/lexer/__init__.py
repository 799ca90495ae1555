"""Line-classifying tokenizer for AsciiDoc source.

Public API:
Tokenizer: Produces the token stream consumed by the parser
classify_line: Classify one trimmed line against the ordered pattern table
LINE_CLASSIFIERS: The ordered (pattern, token type) table itself

"""

from tintero.lexer.classifiers import LINE_CLASSIFIERS, classify_line
from tintero.lexer.core import Tokenizer

__all__ = [
    "LINE_CLASSIFIERS",
    "Tokenizer",
    "classify_line",
]
