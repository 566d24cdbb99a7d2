"""Tests for the SimpleXML document and its cursor protocol."""

import pytest

from simple_xml import SimpleXML
from simple_xml.shared import (
    InvalidCursorStateError,
    MalformedInputError,
    SimpleXMLConfig,
)


def build_sample() -> SimpleXML:
    """Build <root><child name="x">data</child></root> through the cursor."""
    xml = SimpleXML()
    xml.add_tag("root")
    xml.step_in()
    xml.add_tag("child", "data")
    xml.add_child_attribute("name", "x")
    xml.step_out()
    return xml


class TestBuilding:
    """Test building a tree through the cursor."""

    def test_add_tag_does_not_move_cursor(self) -> None:
        """Test that add_tag leaves the cursor where it was."""
        xml = SimpleXML()
        xml.add_tag("root")

        assert xml.current is xml.root
        assert [tag.name for tag in xml.root.children] == ["root"]

    def test_add_tag_converts_integers(self) -> None:
        """Test numeric data is stored as text."""
        xml = SimpleXML()
        xml.add_tag("root")
        xml.step_in()
        xml.add_tag("count", 42)
        xml.add_tag("big", 2 ** 40)

        assert [tag.data for tag in xml.current.children] == ["42", "1099511627776"]

    def test_add_tag_with_empty_name_raises_error(self) -> None:
        """Test that tags must be named."""
        with pytest.raises(ValueError, match="Empty tag names not allowed"):
            SimpleXML().add_tag("")

    def test_second_root_tag_is_rejected(self) -> None:
        """Test the single root rule."""
        xml = SimpleXML()
        xml.add_tag("first")

        with pytest.raises(InvalidCursorStateError, match="Only one root tag allowed"):
            xml.add_tag("second")

    def test_second_root_tag_allowed_when_lenient(self) -> None:
        """Test that the single root rule can be turned off."""
        xml = SimpleXML(SimpleXMLConfig.lenient())
        xml.add_tag("first")
        xml.add_tag("second")

        assert len(xml.root.children) == 2

    def test_add_attribute_targets_current(self) -> None:
        """Test attributes added to the current tag."""
        xml = SimpleXML()
        xml.add_tag("root")
        xml.step_in()
        xml.add_attribute("version", 2)
        xml.add_attribute("enabled", True)
        xml.add_attribute("hidden", False)

        assert xml.current.attributes == [
            ("version", "2"), ("enabled", "1"), ("hidden", "0")
        ]

    def test_add_attribute_at_root_raises_error(self) -> None:
        """Test that the synthetic root cannot carry attributes."""
        with pytest.raises(InvalidCursorStateError, match="No tag is currently selected"):
            SimpleXML().add_attribute("a", "1")

    def test_add_child_attribute_targets_last_added_child(self) -> None:
        """Test that child attributes go to the most recent add_tag."""
        xml = SimpleXML()
        xml.add_tag("root")
        xml.step_in()
        xml.add_tag("first")
        xml.add_tag("second")
        xml.add_child_attribute("k", "v")

        first, second = xml.current.children
        assert first.attributes == []
        assert second.attributes == [("k", "v")]

    def test_add_child_attribute_without_children_raises_error(self) -> None:
        """Test that a child attribute needs a child."""
        xml = SimpleXML()
        xml.add_tag("root")
        xml.step_in()

        with pytest.raises(InvalidCursorStateError, match="No child of <root> is selected"):
            xml.add_child_attribute("k", "v")

    def test_duplicate_attributes_first_wins(self) -> None:
        """Test first-match lookup through the cursor."""
        xml = SimpleXML()
        xml.add_tag("root")
        xml.add_child_attribute("a", "1")
        xml.add_child_attribute("a", "2")

        assert xml.get_child_attribute("a") == "1"


class TestNavigation:
    """Test stepping and child scanning."""

    def test_find_child_and_read_data(self) -> None:
        """Test the basic read sequence on a built tree."""
        xml = build_sample()
        xml.step_in()

        assert xml.find_child("child")
        assert xml.get_child_data() == "data"
        assert xml.get_child_attribute("name") == "x"

    def test_find_child_right_after_add_tag(self) -> None:
        """Test that the freshly added child is found without a reset."""
        xml = SimpleXML()
        xml.add_tag("root")
        xml.step_in()
        xml.add_tag("child", "data")

        assert xml.find_child("child")
        assert xml.get_child_data() == "data"

    def test_step_out_of_root_raises_error(self) -> None:
        """Test that the document root cannot be left."""
        xml = build_sample()

        with pytest.raises(InvalidCursorStateError):
            xml.step_out()

    def test_step_in_without_children_raises_error(self) -> None:
        """Test stepping into a childless tag."""
        xml = SimpleXML()
        with pytest.raises(InvalidCursorStateError, match="no children"):
            xml.step_in()

        xml.add_tag("root")
        xml.step_in()
        with pytest.raises(InvalidCursorStateError, match="no children"):
            xml.step_in()

    def test_step_in_after_failed_find_raises_error(self) -> None:
        """Test that an exhausted scan has nothing to step into."""
        xml = build_sample()
        xml.step_in()

        assert not xml.find_child("missing")
        with pytest.raises(InvalidCursorStateError, match="No child of <root> is selected"):
            xml.step_in()

    def test_step_in_enters_first_child_by_default(self) -> None:
        """Test stepping in without a scan."""
        xml = SimpleXML()
        xml.parse_document("<a><b>1</b><c>2</c></a>")
        xml.step_in()
        xml.step_in()

        assert xml.current.name == "b"
        assert xml.get_data() == "1"

    def test_step_in_enters_found_child(self) -> None:
        """Test stepping into the child selected by find_child."""
        xml = SimpleXML()
        xml.parse_document("<a><b>1</b><c><d/></c></a>")
        xml.step_in()

        assert xml.find_child("c")
        xml.step_in()
        assert xml.current.name == "c"
        assert xml.find_child("d")

    def test_step_out_continues_scan_after_left_child(self) -> None:
        """Test iterating same-named siblings by stepping in and out."""
        xml = SimpleXML()
        xml.parse_document(
            "<list><item><v>1</v></item><other/><item><v>2</v></item></list>"
        )
        xml.step_in()

        values = []
        while xml.find_child("item"):
            xml.step_in()
            xml.find_child("v")
            values.append(xml.get_child_data())
            xml.step_out()

        assert values == ["1", "2"]

    def test_find_child_iterates_same_named_siblings(self) -> None:
        """Test repeated find_child calls without a reset."""
        xml = SimpleXML()
        xml.parse_document('<a><x n="1"/><y/><x n="2"/><x n="3"/></a>')
        xml.step_in()

        found = []
        while xml.find_child("x"):
            found.append(xml.get_child_attribute("n"))

        assert found == ["1", "2", "3"]
        assert not xml.found

    def test_find_child_never_scans_backward(self) -> None:
        """Test that a passed child is not found again until reset."""
        xml = SimpleXML()
        xml.parse_document("<a><x/><y/></a>")
        xml.step_in()

        assert xml.find_child("y")
        assert not xml.find_child("x")

        xml.reset_current_child()
        assert not xml.found
        assert xml.find_child("x")

    def test_reading_without_selected_child_raises_error(self) -> None:
        """Test child getters on an exhausted scan."""
        xml = SimpleXML()
        xml.parse_document("<a><x/></a>")
        xml.step_in()
        xml.find_child("missing")

        with pytest.raises(InvalidCursorStateError):
            xml.get_child_data()
        with pytest.raises(InvalidCursorStateError):
            xml.get_child_attribute("k")

    def test_reading_child_of_childless_tag_raises_error(self) -> None:
        """Test child getters on a tag without children."""
        xml = SimpleXML()
        xml.parse_document("<a/>")
        xml.step_in()

        with pytest.raises(InvalidCursorStateError):
            xml.get_child_data()

    def test_missing_child_attribute_returns_default(self) -> None:
        """Test that missing attributes are not errors."""
        xml = build_sample()
        xml.step_in()
        xml.find_child("child")

        assert xml.get_child_attribute("missing") == ""
        assert xml.get_child_attribute("missing", "fallback") == "fallback"

    def test_get_data_reads_current(self) -> None:
        """Test data of the current tag."""
        xml = SimpleXML()
        xml.parse_document("<a>text</a>")

        assert xml.get_data() == ""
        xml.step_in()
        assert xml.get_data() == "text"


class TestTypedAttributes:
    """Test the typed attribute getters."""

    @pytest.fixture
    def xml(self) -> SimpleXML:
        document = SimpleXML()
        document.parse_document(
            '<a><v i="42" n="-7" big="9007199254740993" pad=" 12abc" bad="x1"'
            ' t="1" f="0" yes="true" lead="10"/></a>'
        )
        document.step_in()
        document.find_child("v")
        return document

    def test_int_attributes(self, xml: SimpleXML) -> None:
        """Test integer decoding, including lenient prefixes."""
        assert xml.get_int_child_attribute("i") == 42
        assert xml.get_int_child_attribute("n") == -7
        assert xml.get_int_child_attribute("pad") == 12
        assert xml.get_int_child_attribute("bad") == 0
        assert xml.get_int_child_attribute("missing") == 0

    def test_long_attributes(self, xml: SimpleXML) -> None:
        """Test 64-bit integer decoding."""
        assert xml.get_long_child_attribute("big") == 9007199254740993

    def test_bool_attributes(self, xml: SimpleXML) -> None:
        """Test that only values starting with 1 are true."""
        assert xml.get_bool_child_attribute("t") is True
        assert xml.get_bool_child_attribute("lead") is True
        assert xml.get_bool_child_attribute("f") is False
        assert xml.get_bool_child_attribute("yes") is False
        assert xml.get_bool_child_attribute("missing") is False

    def test_typed_getters_need_a_selected_child(self) -> None:
        """Test typed getters on an empty scan."""
        xml = SimpleXML()
        xml.parse_document("<a/>")
        xml.step_in()

        with pytest.raises(InvalidCursorStateError):
            xml.get_int_child_attribute("i")
        with pytest.raises(InvalidCursorStateError):
            xml.get_bool_child_attribute("b")


class TestParseAndSerialize:
    """Test text conversion of whole documents."""

    def test_parse_document_builds_tree(self) -> None:
        """Test the parsed structure under the root."""
        xml = SimpleXML()
        xml.parse_document('<a><b attr="1">hi</b></a>')

        assert xml.current is xml.root
        a = xml.root.children[0]
        assert a.name == "a"
        assert len(a.children) == 1
        assert a.children[0].get_attribute("attr") == "1"
        assert a.children[0].data == "hi"

    def test_parse_document_replaces_tree(self) -> None:
        """Test that a second parse discards the first tree."""
        xml = SimpleXML()
        xml.parse_document("<a/>")
        xml.step_in()
        xml.parse_document("<b/>")

        assert xml.current is xml.root
        assert [tag.name for tag in xml.root.children] == ["b"]
        assert xml.generation == 2

    def test_parse_document_malformed(self) -> None:
        """Test mismatched closing tags."""
        with pytest.raises(MalformedInputError):
            SimpleXML().parse_document("<a><b></a>")

    @pytest.mark.parametrize("text", ["", "   ", "<a/><b/>"])
    def test_parse_document_requires_one_root(self, text: str) -> None:
        """Test the single root rule on parse."""
        with pytest.raises(MalformedInputError, match="expected one root tag"):
            SimpleXML().parse_document(text)

    def test_parse_document_lenient_roots(self) -> None:
        """Test multiple top-level tags when allowed."""
        xml = SimpleXML(SimpleXMLConfig.lenient())
        xml.parse_document("<a/><b/>")

        assert len(xml.root.children) == 2
        assert xml.serialize_document() == "<a/>\r\n"

    def test_serialize_empty_document(self) -> None:
        """Test that an empty document serializes to nothing."""
        assert SimpleXML().serialize_document() == ""

    def test_serialize_built_document(self) -> None:
        """Test the layout of a built tree."""
        xml = build_sample()

        assert xml.serialize_document() == (
            "<root>\r\n"
            '  <child name="x">data</child>\r\n'
            "</root>\r\n"
        )

    def test_round_trip_of_built_tree(self) -> None:
        """Test serialize(parse(serialize(tree))) == serialize(tree)."""
        xml = SimpleXML()
        xml.add_tag("settings")
        xml.step_in()
        xml.add_attribute("version", 3)
        xml.add_tag("name", "My App")
        xml.add_tag("flags")
        xml.add_child_attribute("a", True)
        xml.add_child_attribute("b", "two words")
        xml.step_in()
        xml.add_tag("flag", "x")
        xml.add_tag("flag", "y")
        xml.step_out()
        xml.add_tag("empty")

        text = xml.serialize_document()
        reparsed = SimpleXML()
        reparsed.parse_document(text)

        assert reparsed.serialize_document() == text

    @pytest.mark.parametrize("data", ["   ", "\t", " padded ", "  lead", "trail  "])
    def test_round_trip_keeps_whitespace_in_data(self, data: str) -> None:
        """Test that leading, trailing and whitespace-only data survive."""
        xml = SimpleXML()
        xml.add_tag("root")
        xml.step_in()
        xml.add_tag("pad", data)

        text = xml.serialize_document()
        reparsed = SimpleXML()
        reparsed.parse_document(text)
        reparsed.step_in()

        assert reparsed.find_child("pad")
        assert reparsed.get_child_data() == data
        assert reparsed.serialize_document() == text

    def test_round_trip_with_reserved_characters(self) -> None:
        """Test that escaped values come back literally."""
        xml = SimpleXML()
        xml.add_tag("a", "1 < 2 & 'q' \"d\"")
        xml.add_child_attribute("v", "<\"it's\" & more>")

        reparsed = SimpleXML()
        reparsed.parse_document(xml.serialize_document())
        reparsed.find_child("a")

        assert reparsed.get_child_data() == "1 < 2 & 'q' \"d\""
        assert reparsed.get_child_attribute("v") == "<\"it's\" & more>"

    def test_escape_helpers_on_class(self) -> None:
        """Test the static escaping helpers."""
        assert SimpleXML.escape("<", False) == "&lt;"
        assert SimpleXML.needs_escape("'", True)
        assert not SimpleXML.needs_escape("'", False)
