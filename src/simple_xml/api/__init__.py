"""Public document API for simple-xml.

Level 1: ``parse_string`` / ``parse_file`` helpers.
Level 2: the ``SimpleXML`` document with its cursor, and ``TagCursor`` handles.
"""

from .cursor import TagCursor
from .document import SimpleXML
from .parser import parse_file, parse_string

__all__ = [
    "SimpleXML",
    "TagCursor",
    "parse_file",
    "parse_string",
]
