"""Conversion between simple-xml trees and lxml elements.

Requires the optional ``lxml`` dependency (``pip install simple-xml[lxml]``).
Only names, attributes, data and children are carried across; lxml comments,
processing instructions, namespaces and tail text have no counterpart here and
are dropped when converting from lxml.
"""

from typing import Any, Optional, Union

from simple_xml.api.document import SimpleXML
from simple_xml.shared import SimpleXMLConfig, get_logger
from simple_xml.tree.tag import Tag

logger = get_logger(__name__, component="lxml_adapter")


def to_lxml(source: Union[SimpleXML, Tag]) -> Any:
    """Convert a document (its root tag) or a tag subtree to an lxml element.

    Duplicate attribute keys collapse to the first value, since lxml keeps
    one value per key.

    Raises:
        ValueError: If ``source`` is an empty document
    """
    import lxml.etree as ET

    if isinstance(source, SimpleXML):
        if not source.root.children:
            raise ValueError("Cannot convert an empty document")
        tag = source.root.children[0]
    else:
        tag = source

    element = _convert_tag_to_lxml(tag, ET)
    logger.debug("Converted tag tree to lxml", extra={"root_tag": tag.name})
    return element


def _convert_tag_to_lxml(tag: Tag, ET: Any) -> Any:
    element = ET.Element(tag.name)

    for key, value in tag.attributes:
        if key not in element.attrib:
            element.set(key, value)

    if tag.data and not tag.children:
        element.text = tag.data

    for child in tag.children:
        element.append(_convert_tag_to_lxml(child, ET))

    return element


def from_lxml(
    element: Any,
    config: Optional[SimpleXMLConfig] = None,
    correlation_id: Optional[str] = None,
) -> SimpleXML:
    """Build a document whose root tag mirrors an lxml element.

    Raises:
        TypeError: If ``element`` is not an lxml element
    """
    import lxml.etree as ET

    if not isinstance(element, ET._Element) or not isinstance(element.tag, str):
        raise TypeError("Expected an lxml element")

    document = SimpleXML(config, correlation_id)
    _convert_lxml_to_tag(element, document.root)
    logger.debug("Converted lxml element to tag tree", extra={"root_tag": element.tag})
    return document


def _convert_lxml_to_tag(element: Any, parent: Tag) -> None:
    tag = parent.add_child(element.tag)
    for key, value in element.attrib.items():
        tag.add_attribute(key, value)

    children = [child for child in element if isinstance(child.tag, str)]
    if children:
        for child in children:
            _convert_lxml_to_tag(child, tag)
    elif element.text:
        tag.data = element.text
