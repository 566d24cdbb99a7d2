"""Recursive-descent parser for the simple-xml dialect.

The parser makes a single forward pass over a complete text buffer and builds
tags under a given parent. It only looks for what it needs to find tag
boundaries: names, quoted attributes, data and matching closing tags. Text
between sibling tags is skipped, and data that is followed by a child tag
rather than the closing tag is an error since mixed content is not modeled.
"""

from typing import Optional

from simple_xml.character.escaping import escape, needs_escape
from simple_xml.shared import (
    MalformedInputError,
    ParsingConfig,
    get_logger,
)
from simple_xml.tree.tag import Tag

WHITESPACE = " \t\r\n"
QUOTES = "'\""

_NAME_TERMINATORS = frozenset(WHITESPACE + "/>")
_ATTRIBUTE_NAME_TERMINATORS = frozenset(WHITESPACE + "=/>")


class TagParser:
    """Parser that turns text into tags attached to an existing parent."""

    def __init__(
        self,
        config: Optional[ParsingConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize tag parser.

        Args:
            config: Parsing limits and decoding options
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or ParsingConfig()
        self.logger = get_logger(__name__, correlation_id, "tag_parser")

        self._text = ""
        self._length = 0
        self._tags_created = 0

    @property
    def tags_created(self) -> int:
        """Number of tags created by the last parse."""
        return self._tags_created

    def parse_into(
        self,
        parent: Tag,
        text: str,
        offset: int = 0,
        depth: int = 0,
        is_root: bool = False,
    ) -> int:
        """Parse tags from ``text`` and attach them to ``parent``.

        Args:
            parent: Tag that receives the parsed tags as children
            text: Complete input buffer
            offset: Position to start scanning at
            depth: Nesting depth of the tags about to be parsed
            is_root: Parse every sibling tag up to the end of input instead of
                a single tag

        Returns:
            Offset just past the consumed input

        Raises:
            MalformedInputError: If tag boundaries cannot be determined
        """
        max_size = self.config.max_input_size
        if max_size is not None and len(text) > max_size:
            raise MalformedInputError(
                f"Input of {len(text)} characters exceeds limit of {max_size}", max_size
            )

        self._text = text
        self._length = len(text)
        self._tags_created = 0

        self.logger.debug(
            "Starting tag parse",
            extra={"input_length": self._length, "offset": offset, "is_root": is_root},
        )

        try:
            if is_root:
                position = self._parse_siblings(parent, offset, depth)
            else:
                start = self._skip_whitespace(offset)
                if start >= self._length or self._text[start] != "<":
                    raise MalformedInputError("Expected '<'", start)
                position = self._parse_tag(parent, start, depth)
        except MalformedInputError as e:
            self.logger.debug(
                "Tag parse failed",
                extra={"offset": e.offset, "tags_created": self._tags_created},
            )
            raise

        self.logger.debug(
            "Tag parse completed",
            extra={"offset": position, "tags_created": self._tags_created},
        )
        return position

    def _skip_whitespace(self, pos: int) -> int:
        text = self._text
        while pos < self._length and text[pos] in WHITESPACE:
            pos += 1
        return pos

    def _parse_siblings(self, parent: Tag, pos: int, depth: int) -> int:
        text = self._text
        seen_tag = False

        while True:
            pos = self._skip_whitespace(pos)
            if pos >= self._length:
                return pos

            if (
                not seen_tag
                and self.config.skip_xml_declaration
                and text.startswith("<?", pos)
            ):
                end = text.find("?>", pos + 2)
                if end == -1:
                    raise MalformedInputError("Unterminated XML declaration", pos)
                pos = end + 2
                continue

            if text.startswith("</", pos):
                raise MalformedInputError("Closing tag without matching opening tag", pos)

            if text[pos] != "<":
                next_tag = text.find("<", pos)
                if next_tag == -1:
                    return self._length
                pos = next_tag
                continue

            pos = self._parse_tag(parent, pos, depth)
            seen_tag = True

    def _parse_tag(self, parent: Tag, pos: int, depth: int) -> int:
        if depth >= self.config.max_depth:
            raise MalformedInputError(
                f"Tags nested deeper than {self.config.max_depth} levels", pos
            )

        text = self._text
        name_start = pos + 1
        name_end = name_start
        while name_end < self._length and text[name_end] not in _NAME_TERMINATORS:
            name_end += 1

        if name_end >= self._length:
            raise MalformedInputError("Unexpected end of input in tag name", name_end)
        if name_end == name_start:
            raise MalformedInputError("Missing tag name", name_start)

        tag = parent.add_child(text[name_start:name_end])
        self._tags_created += 1

        pos = self._parse_attributes(tag, name_end)
        if text[pos] == "/":
            return pos + 2

        pos += 1
        content_start = self._skip_whitespace(pos)
        if content_start >= self._length:
            raise MalformedInputError(
                f"Unexpected end of input, expected </{tag.name}>", content_start
            )

        if text[content_start] == "<":
            return self._parse_children(tag, pos, content_start, depth)

        data_end = text.find("<", content_start)
        if data_end == -1:
            raise MalformedInputError(
                f"Unexpected end of input in data of <{tag.name}>", self._length
            )

        tag.data = self._decode_data(text[pos:data_end])

        return self._parse_closing_tag(tag, data_end)

    def _parse_attributes(self, tag: Tag, pos: int) -> int:
        """Parse attributes up to the end of the opening tag.

        Returns the offset of the terminating ``>`` or of the ``/`` of ``/>``.
        """
        text = self._text

        while True:
            pos = self._skip_whitespace(pos)
            if pos >= self._length:
                raise MalformedInputError(f"Unterminated tag <{tag.name}>", pos)

            char = text[pos]
            if char == ">":
                return pos
            if char == "/":
                if text.startswith("/>", pos):
                    return pos
                raise MalformedInputError(f"Expected '/>' to close <{tag.name}>", pos)

            key_start = pos
            while pos < self._length and text[pos] not in _ATTRIBUTE_NAME_TERMINATORS:
                pos += 1
            key = text[key_start:pos]
            if not key:
                raise MalformedInputError(f"Missing attribute name in <{tag.name}>", pos)

            pos = self._skip_whitespace(pos)
            if pos >= self._length:
                raise MalformedInputError(f"Truncated attribute {key!r}", pos)
            if text[pos] != "=":
                raise MalformedInputError(f"Expected '=' after attribute {key!r}", pos)

            pos = self._skip_whitespace(pos + 1)
            if pos >= self._length:
                raise MalformedInputError(f"Truncated attribute {key!r}", pos)

            quote = text[pos]
            if quote not in QUOTES:
                raise MalformedInputError(
                    f"Expected quoted value for attribute {key!r}", pos
                )

            value_end = text.find(quote, pos + 1)
            if value_end == -1:
                raise MalformedInputError(f"Unterminated value of attribute {key!r}", pos)

            value = text[pos + 1:value_end]
            if needs_escape(value, is_attribute=True, is_decoding=True):
                value = escape(
                    value,
                    is_attribute=True,
                    is_decoding=True,
                    decode_numeric=self.config.decode_numeric_entities,
                )
            tag.add_attribute(key, value)
            pos = value_end + 1

    def _decode_data(self, data: str) -> str:
        if needs_escape(data, is_attribute=False, is_decoding=True):
            return escape(
                data,
                is_attribute=False,
                is_decoding=True,
                decode_numeric=self.config.decode_numeric_entities,
            )
        return data

    def _parse_children(self, tag: Tag, data_start: int, pos: int, depth: int) -> int:
        """Parse child tags up to the closing tag of ``tag``.

        A tag closed before any child keeps the whitespace in between as data.
        """
        text = self._text

        while True:
            next_tag = text.find("<", pos)
            if next_tag == -1:
                raise MalformedInputError(
                    f"Unexpected end of input, expected </{tag.name}>", self._length
                )
            if text.startswith("</", next_tag):
                if not tag.children:
                    tag.data = self._decode_data(text[data_start:next_tag])
                return self._parse_closing_tag(tag, next_tag)
            pos = self._parse_tag(tag, next_tag, depth + 1)

    def _parse_closing_tag(self, tag: Tag, pos: int) -> int:
        text = self._text
        if not text.startswith("</", pos):
            raise MalformedInputError(f"Expected </{tag.name}>", pos)

        end = text.find(">", pos + 2)
        if end == -1:
            raise MalformedInputError(f"Unterminated closing tag </{tag.name}", pos)

        name = text[pos + 2:end].rstrip(WHITESPACE)
        if name != tag.name:
            raise MalformedInputError(
                f"Mismatched closing tag </{name}>, expected </{tag.name}>", pos
            )
        return end + 1
