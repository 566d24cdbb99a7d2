"""simple-xml.

A small mutable in-memory XML-like document: parse a restricted XML dialect
into a tag tree, build trees programmatically, navigate them with a cursor and
write them back out as indented text.

Progressive API Disclosure:
- Level 1: Simple functions - parse_string(), parse_file()
- Level 2: Cursor document - SimpleXML class and TagCursor handles
- Level 3: Tree internals - Tag, TagParser, TagSerializer
"""

__version__ = "0.1.0"
__author__ = "simple-xml developers"

from .api import SimpleXML, TagCursor, parse_file, parse_string
from .character import decode, encode, escape, needs_escape
from .shared import (
    InvalidCursorStateError,
    MalformedInputError,
    SimpleXMLConfig,
    SimpleXMLError,
)
from .tree import Tag, TagParser, TagSerializer

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple parsing functions
    "parse_string",
    "parse_file",

    # Level 2: Document and cursors
    "SimpleXML",
    "TagCursor",

    # Level 3: Tree internals
    "Tag",
    "TagParser",
    "TagSerializer",

    # Escaping
    "decode",
    "encode",
    "escape",
    "needs_escape",

    # Configuration and errors
    "SimpleXMLConfig",
    "SimpleXMLError",
    "MalformedInputError",
    "InvalidCursorStateError",
]
