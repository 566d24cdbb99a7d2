"""Tag node of the simple-xml document tree."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

if TYPE_CHECKING:
    from simple_xml.shared.config import ParsingConfig, SerializationConfig

Attribute = Tuple[str, str]


@dataclass(eq=False)
class Tag:
    """A single tag in the document tree.

    A tag owns its children; every child refers back to the tag that created
    it through ``parent``. Attributes are kept as an ordered list of pairs:
    duplicate keys are accepted and lookups return the first match. Data and
    attribute values are always stored decoded.

    The synthetic document root is the only tag with an empty name and it
    never has a parent.
    """

    name: str
    data: str = ""
    attributes: List[Attribute] = field(default_factory=list)
    children: List["Tag"] = field(default_factory=list)
    parent: Optional["Tag"] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        """Validate the tag name and adopt any children passed in."""
        if not self.name and self.parent is not None:
            raise ValueError("Tag name cannot be empty")

        for child in self.children:
            child.parent = self

    @classmethod
    def create_root(cls) -> "Tag":
        """Create the nameless container tag a document hangs its tree from."""
        return cls(name="")

    @property
    def is_root(self) -> bool:
        """Check whether this is a nameless, parentless container tag."""
        return self.parent is None and not self.name

    @property
    def depth(self) -> int:
        """Number of ancestors above this tag."""
        depth = 0
        ancestor = self.parent
        while ancestor is not None:
            depth += 1
            ancestor = ancestor.parent
        return depth

    def add_attribute(self, key: str, value: str) -> None:
        """Append an attribute; an existing one with the same key is kept."""
        self.attributes.append((key, value))

    def get_attribute(self, key: str, default: str = "") -> str:
        """Get the value of the first attribute named ``key``."""
        for name, value in self.attributes:
            if name == key:
                return value
        return default

    def has_attribute(self, key: str) -> bool:
        """Check if the tag carries an attribute named ``key``."""
        return any(name == key for name, _ in self.attributes)

    def add_child(self, name: str, data: str = "") -> "Tag":
        """Create a child tag, append it and return it."""
        if not name:
            raise ValueError("Tag name cannot be empty")
        child = Tag(name=name, data=data, parent=self)
        self.children.append(child)
        return child

    def find_children(self, name: str) -> List["Tag"]:
        """Find all direct children with matching name."""
        return [child for child in self.children if child.name == name]

    def serialize(
        self, indent_level: int = 0, config: Optional["SerializationConfig"] = None
    ) -> str:
        """Render this tag and its subtree as indented text."""
        from simple_xml.tree.serializer import TagSerializer

        return TagSerializer(config).serialize(self, indent_level)

    def parse_from(
        self,
        text: str,
        offset: int = 0,
        depth: int = 0,
        is_root: bool = False,
        config: Optional["ParsingConfig"] = None,
    ) -> int:
        """Parse tags from ``text`` at ``offset`` and attach them as children.

        With ``is_root`` every sibling tag up to the end of the input is
        parsed; otherwise a single tag is.

        Returns:
            Offset just past the consumed input
        """
        from simple_xml.tree.parser import TagParser

        return TagParser(config).parse_into(self, text, offset, depth, is_root)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the subtree to a dictionary representation."""
        result: Dict[str, Any] = {"name": self.name}

        if self.attributes:
            result["attributes"] = [list(pair) for pair in self.attributes]

        if self.data:
            result["data"] = self.data

        if self.children:
            result["children"] = [child.to_dict() for child in self.children]

        return result
