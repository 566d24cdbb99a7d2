"""Explicit navigation handles over a tag tree.

A ``TagCursor`` is positioned at one tag and keeps a forward-only scan over
that tag's children. Moving into a child or out to the parent returns a new
cursor and leaves the original one untouched, so independent traversals never
disturb each other. Cursors created from a document remember the tree they
were made for and refuse to work once ``parse_document`` has replaced it.
"""

import re
from typing import TYPE_CHECKING, Iterator, Optional

from simple_xml.shared import InvalidCursorStateError
from simple_xml.tree.tag import Tag

if TYPE_CHECKING:
    from simple_xml.api.document import SimpleXML

_INTEGER_PREFIX = re.compile(r"[ \t\r\n]*([+-]?[0-9]+)")


def to_int(value: str) -> int:
    """Decode the leading integer of ``value`` the lenient way.

    Leading ASCII whitespace and a sign are accepted, only ASCII digits
    count and trailing garbage is ignored. Text without a leading integer
    decodes to 0.
    """
    match = _INTEGER_PREFIX.match(value)
    if match is None:
        return 0
    return int(match.group(1))


def to_bool(value: str) -> bool:
    """Decode a stored flag: true only when the value starts with ``"1"``."""
    return value.startswith("1")


class TagCursor:
    """Handle positioned at a tag with a scan over its children.

    The scan starts at the first child. ``find`` moves it forward to the next
    child with a given name; after a match the following ``find`` continues
    just past it, which walks same-named siblings in order.
    """

    def __init__(self, tag: Tag, document: Optional["SimpleXML"] = None) -> None:
        self._tag = tag
        self._document = document
        self._generation = document.generation if document is not None else 0
        self._index = 0
        self._found = False

    def __repr__(self) -> str:
        return (
            f"TagCursor(tag={self._tag.name!r}, index={self._index}, "
            f"found={self._found})"
        )

    def _check_live(self) -> None:
        if self._document is not None and self._document.generation != self._generation:
            raise InvalidCursorStateError(
                "Cursor belongs to a document tree that has since been replaced"
            )

    @property
    def tag(self) -> Tag:
        """Tag the cursor is positioned at."""
        self._check_live()
        return self._tag

    @property
    def index(self) -> int:
        """Position of the child scan."""
        return self._index

    @property
    def found(self) -> bool:
        """Whether the last ``find`` matched."""
        return self._found

    @property
    def selected(self) -> Optional[Tag]:
        """Child at the scan position, or None when the scan is exhausted."""
        self._check_live()
        children = self._tag.children
        if self._index < len(children):
            return children[self._index]
        return None

    def reset(self) -> None:
        """Move the scan back to the first child."""
        self._check_live()
        self._index = 0
        self._found = False

    def select(self, child: Tag) -> None:
        """Position the scan on ``child``, as if ``find`` had matched it."""
        self._check_live()
        for index, candidate in enumerate(self._tag.children):
            if candidate is child:
                self._index = index
                self._found = True
                return
        raise InvalidCursorStateError(f"<{child.name}> is not a child of <{self._tag.name}>")

    def select_last(self) -> None:
        """Position the scan on the most recently added child.

        The child is selected but not marked as found, so a following ``find``
        starts by examining it.
        """
        self._check_live()
        if not self._tag.children:
            raise InvalidCursorStateError(f"<{self._tag.name}> has no children")
        self._index = len(self._tag.children) - 1
        self._found = False

    def find(self, name: str) -> bool:
        """Advance the scan to the next child named ``name``.

        Returns:
            True if a matching child was found. On a miss the scan is left
            exhausted.
        """
        self._check_live()
        children = self._tag.children

        if self._found and self._index < len(children):
            self._index += 1

        while self._index < len(children):
            if children[self._index].name == name:
                self._found = True
                return True
            self._index += 1

        self._found = False
        return False

    def iter_children(self, name: Optional[str] = None) -> Iterator[Tag]:
        """Iterate over children, optionally only those named ``name``.

        Does not move the scan.
        """
        self._check_live()
        for child in list(self._tag.children):
            if name is None or child.name == name:
                yield child

    def _require_selected(self) -> Tag:
        child = self.selected
        if child is None:
            raise InvalidCursorStateError(f"No child of <{self._tag.name}> is selected")
        return child

    def child_data(self) -> str:
        """Data of the selected child."""
        return self._require_selected().data

    def child_attribute(self, name: str, default: str = "") -> str:
        """Attribute of the selected child, or ``default`` when missing."""
        return self._require_selected().get_attribute(name, default)

    def int_child_attribute(self, name: str) -> int:
        """Attribute of the selected child decoded as an integer."""
        return to_int(self.child_attribute(name))

    def bool_child_attribute(self, name: str) -> bool:
        """Attribute of the selected child decoded as a flag."""
        return to_bool(self.child_attribute(name))

    def step_in(self) -> "TagCursor":
        """Return a cursor positioned at the selected child."""
        if not self.tag.children:
            raise InvalidCursorStateError(
                f"<{self._tag.name}> has no children to step into"
            )
        return TagCursor(self._require_selected(), self._document)

    def step_out(self) -> "TagCursor":
        """Return a cursor at the parent with this tag selected."""
        parent = self.tag.parent
        if parent is None:
            raise InvalidCursorStateError("Cannot step out of the document root")

        cursor = TagCursor(parent, self._document)
        cursor.select(self._tag)
        return cursor
