import xml.etree.ElementTree as ET

import pytest

from tmx_reader.errors import MalformedDocumentError
from tmx_reader.properties import Property, find_property, parse_properties


def _props(xml):
    return parse_properties(ET.fromstring(xml).findall('property'))


def test_value_and_type_kept_as_written():
    props = _props('<properties>'
                   '<property name="hp" type="int" value="100"/>'
                   '<property name="title" value="Cave"/>'
                   '</properties>')

    assert props == (Property("hp", "int", "100"), Property("title", None, "Cave"))


def test_value_falls_back_to_text_content():
    props = _props('<properties><property name="text">Hello\nworld</property></properties>')

    assert props[0].value == "Hello\nworld"


def test_missing_value_and_text_is_empty_string():
    assert _props('<properties><property name="flag"/></properties>')[0].value == ""


def test_missing_name_is_malformed():
    with pytest.raises(MalformedDocumentError, match="name"):
        _props('<properties><property value="1"/></properties>')


@pytest.mark.parametrize("prop, expected", [
    (Property("a", "int", "7"), 7),
    (Property("a", "float", "2.5"), 2.5),
    (Property("a", "bool", "true"), True),
    (Property("a", "bool", "false"), False),
    (Property("a", "object", "12"), 12),
    (Property("a", "color", "#ff00ff00"), "#ff00ff00"),
    (Property("a", None, "plain"), "plain"),
])
def test_converted(prop, expected):
    assert prop.converted() == expected


def test_find_property():
    props = (Property("a", None, "1"), Property("b", None, "2"))

    assert find_property(props, "b").value == "2"
    assert find_property(props, "c") is None
