"""Text output for tag subtrees.

Each tag goes on its own line, indented one unit per nesting level.
Attributes are written in insertion order with double-quoted values. A tag
with neither data nor children is written self-closing, a tag with data keeps
it inline between its opening and closing tags, and a tag with children lists
them on the following lines. Data of a tag that also has children is not
written.
"""

from typing import List, Optional

from simple_xml.character.escaping import escape, needs_escape
from simple_xml.shared.config import SerializationConfig
from simple_xml.tree.tag import Tag


class TagSerializer:
    """Serializer that re-encodes a tag subtree into text."""

    def __init__(self, config: Optional[SerializationConfig] = None) -> None:
        self.config = config or SerializationConfig()

    def serialize(self, tag: Tag, indent_level: int = 0) -> str:
        """Render ``tag`` and its subtree.

        Args:
            tag: Tag to render
            indent_level: Nesting depth of ``tag`` in the output

        Returns:
            Text block with every line terminated by the configured line ending
        """
        if indent_level < 0:
            raise ValueError("indent_level must be >= 0")

        parts: List[str] = []
        self._append_tag(tag, indent_level, parts)
        return "".join(parts)

    def _append_tag(self, tag: Tag, indent_level: int, parts: List[str]) -> None:
        indent = self.config.indent_unit * indent_level
        line_ending = self.config.line_ending
        opening = indent + "<" + tag.name + self._attribute_string(tag)

        if not tag.children and not tag.data:
            parts.append(opening + "/>" + line_ending)
            return

        if not tag.children:
            data = tag.data
            if needs_escape(data, is_attribute=False):
                data = escape(data, is_attribute=False)
            parts.append(opening + ">" + data + "</" + tag.name + ">" + line_ending)
            return

        parts.append(opening + ">" + line_ending)
        for child in tag.children:
            self._append_tag(child, indent_level + 1, parts)
        parts.append(indent + "</" + tag.name + ">" + line_ending)

    @staticmethod
    def _attribute_string(tag: Tag) -> str:
        pieces = []
        for key, value in tag.attributes:
            if needs_escape(value, is_attribute=True):
                value = escape(value, is_attribute=True)
            pieces.append(f' {key}="{value}"')
        return "".join(pieces)
