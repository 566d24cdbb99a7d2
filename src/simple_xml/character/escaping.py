"""Entity escaping for element data and attribute values.

Values held in memory are always literal text. They are encoded when a tree is
serialized and decoded when a document is parsed. Encoding covers the three
characters that matter in element content, or all five reserved characters in
attribute mode. Decoding understands the five predefined entities and numeric
character references; anything else that starts with ``&`` is kept as it is.
"""

import re
from typing import Dict

# Characters that must be encoded, per mode
DATA_SPECIAL_CHARS = "<&>"
ATTRIBUTE_SPECIAL_CHARS = "<&>'\""

ENCODE_MAP: Dict[str, str] = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    "'": "&apos;",
    '"': "&quot;",
}

DECODE_MAP: Dict[str, str] = {
    "amp": "&",
    "lt": "<",
    "gt": ">",
    "apos": "'",
    "quot": '"',
}

MAX_CODE_POINT = 0x10FFFF
SURROGATE_RANGE_START = 0xD800
SURROGATE_RANGE_END = 0xDFFF

_DATA_PATTERN = re.compile("[<&>]")
_ATTRIBUTE_PATTERN = re.compile("[<&>'\"]")
_ENTITY_PATTERN = re.compile(r"&(amp|lt|gt|apos|quot|#[0-9]+|#[xX][0-9a-fA-F]+);")


def needs_escape(text: str, is_attribute: bool = False, is_decoding: bool = False) -> bool:
    """Check whether ``escape`` could change ``text``.

    This is a heuristic. A ``False`` result is exact, while ``True`` may be
    returned for text that ``escape`` leaves unchanged (a lone ``&`` when
    decoding, for instance).

    Args:
        text: Text to inspect
        is_attribute: Include quote characters in the encoding set
        is_decoding: Check for entity decoding instead of encoding

    Returns:
        True if escaping may be needed
    """
    if is_decoding:
        return "&" in text
    special = ATTRIBUTE_SPECIAL_CHARS if is_attribute else DATA_SPECIAL_CHARS
    return any(char in text for char in special)


def escape(
    text: str,
    is_attribute: bool = False,
    is_decoding: bool = False,
    decode_numeric: bool = True,
) -> str:
    """Encode reserved characters as entities, or decode entities back.

    Always safe to call; ``needs_escape`` is only a fast path in front of it.

    Args:
        text: Text to transform
        is_attribute: Also encode ``'`` and ``"`` (ignored when decoding)
        is_decoding: Decode entities instead of encoding characters
        decode_numeric: Decode ``&#NN;`` and ``&#xHH;`` references

    Returns:
        Transformed text; the same object when nothing had to change
    """
    if is_decoding:
        if "&" not in text:
            return text

        def _decode(match: "re.Match[str]") -> str:
            return _decode_entity(match, decode_numeric)

        return _ENTITY_PATTERN.sub(_decode, text)

    pattern = _ATTRIBUTE_PATTERN if is_attribute else _DATA_PATTERN
    if pattern.search(text) is None:
        return text
    return pattern.sub(lambda match: ENCODE_MAP[match.group(0)], text)


def _decode_entity(match: "re.Match[str]", decode_numeric: bool) -> str:
    name = match.group(1)
    if not name.startswith("#"):
        return DECODE_MAP[name]
    if not decode_numeric:
        return match.group(0)

    if name[1] in "xX":
        code_point = int(name[2:], 16)
    else:
        code_point = int(name[1:])

    # Unrepresentable references are passed through like unknown entities
    if code_point == 0 or code_point > MAX_CODE_POINT:
        return match.group(0)
    if SURROGATE_RANGE_START <= code_point <= SURROGATE_RANGE_END:
        return match.group(0)
    return chr(code_point)


def encode(text: str, is_attribute: bool = False) -> str:
    """Encode ``text`` for element data, or for an attribute value."""
    if not needs_escape(text, is_attribute):
        return text
    return escape(text, is_attribute)


def decode(text: str, decode_numeric: bool = True) -> str:
    """Decode entities in ``text``; unknown ones are left untouched."""
    if not needs_escape(text, is_decoding=True):
        return text
    return escape(text, is_decoding=True, decode_numeric=decode_numeric)
