"""Tests for the XML generator."""

from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest

from docrender.engine import RenderingEngine
from docrender.errors import GenerationFailure
from docrender.generators.xmldoc import XmlGenerator


def _parse(text: str) -> ET.Element:
    assert text.startswith('<?xml version="1.0" encoding="UTF-8"?>\n')
    return ET.fromstring(text.split("\n", 1)[1])


def test_xml_generator_takes_full_control() -> None:
    generator = XmlGenerator()
    assert generator.controls_object_output()
    assert generator.controls_index_output()


def test_xml_object_document(full_entity) -> None:
    root = _parse(RenderingEngine(XmlGenerator(), last_updated="2026-10-19").generate_for_object(full_entity))

    assert root.tag == "object"
    assert root.get("name") == "GBParser"
    assert root.get("kind") == "class"
    assert [child.tag for child in root.find("info")] == ["inherits", "conforms", "conforms", "declared"]
    assert [task.get("name") for task in root.find("tasks")] == ["Creating parsers", "Parsing"]
    groups = root.find("members")
    assert [group.get("type") for group in groups] == ["class", "instance", "property"]
    method = groups[1].find("member")
    assert [node.tag for node in method.find("prototype")] == ["value", "parameter", "value", "parameter"]
    assert method.find("exceptions/entry").get("name") == "NSInvalidArgumentException"
    assert root.findtext("lastUpdated") == "2026-10-19"


def test_xml_omits_absent_sections(foo_entity) -> None:
    root = _parse(RenderingEngine(XmlGenerator(indent=None)).generate_for_object(foo_entity))

    assert root.find("tasks") is None
    assert root.find("overview") is None
    assert root.find("lastUpdated") is None


def test_xml_accepts_tasks_listing_inherited_members(foo_entity) -> None:
    foo_entity["tasks"] = [{"header": "Describing", "members": ["description"]}, {"header": "Pending"}]

    root = _parse(RenderingEngine(XmlGenerator()).generate_for_object(foo_entity))

    assert root.find("tasks/task[@name='Describing']/ref").get("member") == "description"
    assert list(root.find("tasks/task[@name='Pending']")) == []
    assert root.find("members/group/member").get("name") == "bar"


def test_xml_rejects_control_characters(foo_entity) -> None:
    foo_entity["overview"] = "Bell \x07 character"

    with pytest.raises(GenerationFailure) as excinfo:
        RenderingEngine(XmlGenerator()).generate_for_object(foo_entity)

    assert "<overview>" in str(excinfo.value)
    assert excinfo.value.entity == "Foo"


def test_xml_index_document(index_data) -> None:
    root = _parse(RenderingEngine(XmlGenerator()).generate_for_index(index_data))

    assert root.get("title") == "Project Reference"
    assert [child.tag for child in root] == ["classes", "protocols"]
    assert root.find("classes/item[@name='GBStore']").text == "Stores objects."
    assert root.find("protocols/item").get("kind") == "protocol"
