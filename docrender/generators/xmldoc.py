"""Structured XML output built as a complete tree before serialization."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from typing import Optional

from ..errors import GenerationFailure
from ..models import Member
from .base import FormatGenerator, IndexContext, ObjectContext

_INVALID_XML_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")


class XmlGenerator(FormatGenerator):
    """Serializes objects and the index into a single XML document each.

    The document root carries the object name first while the member tree is
    assembled from tasks and groups, so this format takes full control of the
    output instead of streaming through the hooks.
    """

    name = "xml"
    extension = "xml"

    def __init__(self, indent: Optional[int] = 2) -> None:
        if indent is not None and indent < 0:
            raise ValueError("indent must be non-negative")
        self.indent = indent

    def render_object_direct(self, ctx: ObjectContext) -> str:
        data = ctx.data
        root = ET.Element("object", {"name": data.name})
        if data.header.kind:
            root.set("kind", data.header.kind)
        if data.header.file:
            root.set("file", data.header.file)
        if data.header.brief:
            ET.SubElement(root, "brief").text = data.header.brief

        if data.info_items:
            info = ET.SubElement(root, "info")
            for item in data.info_items:
                ET.SubElement(info, item.type.value).text = item.value

        overview = self.overview_text(data.overview)
        if overview:
            ET.SubElement(root, "overview").text = overview

        if data.tasks:
            tasks = ET.SubElement(root, "tasks")
            for task in data.tasks:
                task_node = ET.SubElement(tasks, "task", {"name": task.header})
                for member in task.members:
                    ref = ET.SubElement(task_node, "ref", {"member": member.name})
                    if member.type is not None:
                        ref.set("type", member.type.value)

        if data.member_groups:
            members = ET.SubElement(root, "members")
            for group in data.member_groups:
                group_node = ET.SubElement(members, "group", {"type": group.type.value})
                for member in group.members:
                    self._member_node(group_node, member)

        last_updated = self.last_updated_text(ctx)
        if last_updated:
            ET.SubElement(root, "lastUpdated").text = last_updated
        return self._serialize(root)

    def render_index_direct(self, ctx: IndexContext) -> str:
        root = ET.Element("index", {"title": ctx.data.title})
        for group in ctx.data.groups:
            group_node = ET.SubElement(root, group.type.value)
            for item in group.items:
                node = ET.SubElement(group_node, "item", {"name": item.name})
                if item.kind:
                    node.set("kind", item.kind)
                if item.brief:
                    node.text = item.brief
        last_updated = self.last_updated_text(ctx)
        if last_updated:
            ET.SubElement(root, "lastUpdated").text = last_updated
        return self._serialize(root)

    @staticmethod
    def _member_node(parent: ET.Element, member: Member) -> None:
        node = ET.SubElement(parent, "member", {"name": member.name})
        if member.prototype:
            prototype = ET.SubElement(node, "prototype")
            for item in member.prototype:
                ET.SubElement(prototype, item.type.value).text = item.value
        if member.brief:
            ET.SubElement(node, "brief").text = member.brief
        for section_type, entries in member.sections.items():
            section = ET.SubElement(node, section_type.value)
            for entry in entries:
                ET.SubElement(section, "entry", {"name": entry.name}).text = entry.description or None
        if member.returns:
            ET.SubElement(node, "returns").text = member.returns
        if member.description:
            ET.SubElement(node, "description").text = member.description

    @staticmethod
    def _check_characters(root: ET.Element) -> None:
        """XML 1.0 cannot carry most control characters, escaped or not."""
        for node in root.iter():
            for value in (node.text, *node.attrib.values()):
                if value and _INVALID_XML_CHARS.search(value):
                    raise GenerationFailure(f"<{node.tag}> contains characters XML cannot represent")

    def _serialize(self, root: ET.Element) -> str:
        self._check_characters(root)
        if self.indent:
            ET.indent(root, space=" " * self.indent)
        body = ET.tostring(root, encoding="unicode")
        return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}\n'


__all__ = ["XmlGenerator"]
