#!/usr/bin/env python3
"""
Quick Start Guide for simple-xml.

Builds a small settings document with the cursor API, writes it out,
parses it back and walks it with independent cursors.
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from simple_xml import SimpleXML, SimpleXMLConfig, parse_string


def build_document() -> str:
    """Build a document tag by tag and return its text."""
    print("Step 1: Building a document")
    print("-" * 30)

    xml = SimpleXML(SimpleXMLConfig.unix())
    xml.add_tag("settings")
    xml.add_child_attribute("version", 2)
    xml.step_in()
    xml.add_tag("option", "on")
    xml.add_child_attribute("name", "sound")
    xml.add_tag("option", "off")
    xml.add_child_attribute("name", "music")
    xml.add_tag("volume", 75)
    xml.add_tag("fullscreen", True)
    xml.step_out()

    text = xml.serialize_document()
    print(text)
    return text


def read_document(text: str) -> None:
    """Read the document back through the document cursor."""
    print("Step 2: Reading with the document cursor")
    print("-" * 30)

    xml = parse_string(text)
    xml.step_in()
    while xml.find_child("option"):
        print(f"  {xml.get_child_attribute('name')} = {xml.get_child_data()}")

    xml.reset_current_child()
    if xml.find_child("volume"):
        print(f"  volume = {xml.get_child_data()}")


def walk_with_cursors(text: str) -> None:
    """Walk the same tree with two handles that do not disturb each other."""
    print("\nStep 3: Independent cursors")
    print("-" * 30)

    xml = parse_string(text)
    settings = xml.cursor().step_in()
    options = xml.cursor().step_in()

    names = [tag.get_attribute("name") for tag in options.iter_children("option")]
    print(f"  options: {', '.join(names)}")
    if settings.find("fullscreen"):
        print(f"  fullscreen: {settings.child_data() == '1'}")


if __name__ == "__main__":
    document_text = build_document()
    read_document(document_text)
    walk_with_cursors(document_text)
