"""Character-level text transforms for simple-xml.

Provides entity encoding and decoding for element data and attribute values.
"""

from .escaping import (
    ATTRIBUTE_SPECIAL_CHARS,
    DATA_SPECIAL_CHARS,
    decode,
    encode,
    escape,
    needs_escape,
)

__all__ = [
    "ATTRIBUTE_SPECIAL_CHARS",
    "DATA_SPECIAL_CHARS",
    "decode",
    "encode",
    "escape",
    "needs_escape",
]
