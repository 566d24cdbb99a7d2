"""Document with a movable cursor for building and reading tag trees.

``SimpleXML`` owns a nameless root tag that is never written out; the real
document tag is its only child. A single cursor marks the current tag, and a
child scan over the current tag selects the child that ``get_child_data`` and
friends read from. Every call that moves the cursor restarts the scan.

Example:
    >>> xml = SimpleXML()
    >>> xml.add_tag("settings")
    >>> xml.step_in()
    >>> xml.add_tag("option", "on")
    >>> xml.add_child_attribute("name", "sound")
    >>> xml.step_out()
    >>> xml.step_in()
    >>> xml.find_child("option")
    True
    >>> xml.get_child_attribute("name")
    'sound'
"""

from typing import Optional, Union

from simple_xml.api.cursor import TagCursor
from simple_xml.character.escaping import escape, needs_escape
from simple_xml.shared import (
    InvalidCursorStateError,
    MalformedInputError,
    SimpleXMLConfig,
    get_logger,
)
from simple_xml.tree.parser import TagParser
from simple_xml.tree.serializer import TagSerializer
from simple_xml.tree.tag import Tag

Value = Union[str, int, bool]


def _to_text(value: Value) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


class SimpleXML:
    """In-memory document navigated through a single cursor.

    Not thread-safe: the tree and the cursor are plain mutable state and
    callers sharing a document must serialize access themselves.
    """

    escape = staticmethod(escape)
    needs_escape = staticmethod(needs_escape)

    def __init__(
        self,
        config: Optional[SimpleXMLConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize an empty document.

        Args:
            config: Parsing, serialization and document options
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or SimpleXMLConfig()
        self.correlation_id = correlation_id or self.config.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, "simple_xml")

        # Bumped whenever parse_document replaces the tree
        self.generation = 0
        self.root = Tag.create_root()
        self._cursor = TagCursor(self.root, self)

    @property
    def current(self) -> Tag:
        """Tag the cursor is positioned at."""
        return self._cursor.tag

    @property
    def found(self) -> bool:
        """Whether the last ``find_child`` matched."""
        return self._cursor.found

    def cursor(self) -> TagCursor:
        """Create an independent navigation handle at the current tag."""
        return TagCursor(self.current, self)

    # Building

    def add_tag(self, name: str, data: Value = "") -> None:
        """Add a child to the current tag and select it in the child scan.

        Raises:
            ValueError: If ``name`` is empty
            InvalidCursorStateError: If a second top-level tag is added while
                the document is limited to a single root
        """
        if not name:
            raise ValueError("Empty tag names not allowed")

        current = self.current
        if current is self.root and current.children and self.config.document.single_root:
            raise InvalidCursorStateError("Only one root tag allowed")

        current.add_child(name, _to_text(data))
        self._cursor.select_last()

    def add_attribute(self, key: str, value: Value) -> None:
        """Add an attribute to the current tag."""
        if self.current is self.root:
            raise InvalidCursorStateError("No tag is currently selected")
        self.current.add_attribute(key, _to_text(value))

    def add_child_attribute(self, key: str, value: Value) -> None:
        """Add an attribute to the selected child, normally the one just added."""
        child = self._cursor.selected
        if child is None:
            raise InvalidCursorStateError(
                f"No child of <{self.current.name}> is selected"
            )
        child.add_attribute(key, _to_text(value))

    # Navigation

    def get_data(self) -> str:
        """Data of the current tag."""
        return self.current.data

    def step_in(self) -> None:
        """Move to the selected child (the first one unless a scan moved on)."""
        self._cursor = self._cursor.step_in()

    def step_out(self) -> None:
        """Move to the parent, selecting the tag just left."""
        if self.current is self.root:
            raise InvalidCursorStateError("Already at lowest level")
        self._cursor = self._cursor.step_out()

    def reset_current_child(self) -> None:
        """Restart the child scan at the first child."""
        self._cursor.reset()

    def find_child(self, name: str) -> bool:
        """Scan forward for the next child named ``name``."""
        return self._cursor.find(name)

    def get_child_data(self) -> str:
        """Data of the selected child."""
        return self._cursor.child_data()

    def get_child_attribute(self, name: str, default: str = "") -> str:
        """Attribute of the selected child, or ``default`` when missing."""
        return self._cursor.child_attribute(name, default)

    def get_int_child_attribute(self, name: str) -> int:
        """Attribute of the selected child as an integer (0 when not numeric)."""
        return self._cursor.int_child_attribute(name)

    def get_long_child_attribute(self, name: str) -> int:
        """Attribute of the selected child as a 64-bit integer.

        Python integers are unbounded, so this decodes exactly like
        ``get_int_child_attribute``.
        """
        return self._cursor.int_child_attribute(name)

    def get_bool_child_attribute(self, name: str) -> bool:
        """Attribute of the selected child as a flag (``"1"`` means True)."""
        return self._cursor.bool_child_attribute(name)

    # Text conversion

    def parse_document(self, text: str) -> None:
        """Replace the tree with the one parsed from ``text``.

        The cursor returns to the root and cursors handed out earlier stop
        working.

        Raises:
            MalformedInputError: If the text cannot be parsed; the document
                should be discarded in that case
        """
        root = Tag.create_root()
        parser = TagParser(self.config.parsing, self.correlation_id)
        parser.parse_into(root, text, 0, 0, is_root=True)

        if self.config.document.single_root and len(root.children) != 1:
            raise MalformedInputError(
                f"Invalid document, expected one root tag but found {len(root.children)}"
            )

        self.root = root
        self.generation += 1
        self._cursor = TagCursor(self.root, self)

        self.logger.debug(
            "Document tree replaced",
            extra={"tags_created": parser.tags_created, "generation": self.generation},
        )

    def serialize_document(self) -> str:
        """Render the document tag and its subtree, or "" for an empty document."""
        if not self.root.children:
            return ""
        return TagSerializer(self.config.serialization).serialize(self.root.children[0])
