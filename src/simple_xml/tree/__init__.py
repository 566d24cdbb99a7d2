"""Tag tree for simple-xml.

Key Components:
    Tag: Tree node with ordered attributes, data and owned children
    TagParser: Recursive-descent parser building tags from text
    TagSerializer: Indented text output for a tag subtree
"""

from .tag import Attribute, Tag
from .parser import TagParser
from .serializer import TagSerializer

__all__ = [
    "Attribute",
    "Tag",
    "TagParser",
    "TagSerializer",
]
