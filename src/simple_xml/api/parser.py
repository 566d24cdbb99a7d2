"""Module-level helpers for loading documents.

Thin wrappers around ``SimpleXML.parse_document`` for the common cases of
parsing a string or a file.
"""

from pathlib import Path
from typing import Optional, Union

from simple_xml.api.document import SimpleXML
from simple_xml.shared import SimpleXMLConfig, get_logger

# Max length for content preview in logs
PREVIEW_LENGTH = 100


def parse_string(
    xml_string: str,
    config: Optional[SimpleXMLConfig] = None,
    correlation_id: Optional[str] = None,
) -> SimpleXML:
    """Parse a document from a string.

    Args:
        xml_string: Document text
        config: Optional document configuration
        correlation_id: Optional correlation ID for request tracking

    Returns:
        SimpleXML document with the cursor at the root

    Raises:
        MalformedInputError: If the text cannot be parsed

    Examples:
        >>> xml = parse_string('<root><item id="1">Hello</item></root>')
        >>> xml.step_in()
        >>> xml.find_child("item")
        True
        >>> xml.get_child_attribute("id")
        '1'
    """
    logger = get_logger(__name__, correlation_id, "parse_string")
    logger.debug(
        "Starting string parse operation",
        extra={
            "content_length": len(xml_string),
            "preview": (
                xml_string[:PREVIEW_LENGTH] + "..."
                if len(xml_string) > PREVIEW_LENGTH else xml_string
            ),
        },
    )

    document = SimpleXML(config, correlation_id)
    document.parse_document(xml_string)
    return document


def parse_file(
    file_path: Union[str, Path],
    encoding: str = "utf-8",
    config: Optional[SimpleXMLConfig] = None,
    correlation_id: Optional[str] = None,
) -> SimpleXML:
    """Parse a document from a file.

    Args:
        file_path: Path to the document
        encoding: Text encoding of the file
        config: Optional document configuration
        correlation_id: Optional correlation ID for request tracking

    Returns:
        SimpleXML document with the cursor at the root

    Raises:
        OSError: If the file cannot be read
        MalformedInputError: If the content cannot be parsed
    """
    path_obj = Path(file_path)
    logger = get_logger(__name__, correlation_id, "parse_file")
    logger.debug(
        "Starting file parse operation",
        extra={"file_path": str(path_obj), "encoding": encoding},
    )

    with path_obj.open(encoding=encoding) as file:
        content = file.read()

    return parse_string(content, config, correlation_id)
