"""Tests for the Markdown generator."""

from __future__ import annotations

import pytest

from docrender.engine import RenderingEngine
from docrender.generators.markdown import MarkdownGenerator


def test_markdown_folds_info_items_by_type(full_entity) -> None:
    markdown = RenderingEngine(MarkdownGenerator()).generate_for_object(full_entity)

    assert "- **Inherits from:** NSObject\n" in markdown
    assert "- **Conforms to:** NSCopying, NSCoding\n" in markdown
    assert "- **Declared in:** `GBParser.h`\n" in markdown


def test_markdown_renders_members(full_entity) -> None:
    markdown = RenderingEngine(MarkdownGenerator()).generate_for_object(full_entity)

    assert markdown.startswith("# GBParser Class Reference\n")
    assert "## Tasks" in markdown
    assert "### Parsing" in markdown
    assert "- `parseFile:error:` Parses one file." in markdown
    assert "## Instance Methods" in markdown
    assert "```\n- (BOOL)parseFile: path error: error\n```" in markdown
    assert "- `path`: File to parse." in markdown
    assert "**Return Value** The new parser." in markdown


def test_markdown_heading_level(foo_entity) -> None:
    markdown = RenderingEngine(MarkdownGenerator(heading_level=2)).generate_for_object(foo_entity)

    assert markdown.startswith("## Foo Reference\n")
    assert "### Instance Methods" in markdown
    assert "#### bar" in markdown


def test_markdown_last_updated(foo_entity) -> None:
    engine = RenderingEngine(MarkdownGenerator())
    assert "Last updated" not in engine.generate_for_object(foo_entity)

    engine.last_updated = "October 2026"
    assert engine.generate_for_object(foo_entity).endswith("_Last updated: October 2026_\n")


def test_markdown_index(index_data) -> None:
    markdown = RenderingEngine(MarkdownGenerator()).generate_for_index(index_data)

    assert "## Classes" in markdown
    assert "- [GBParser](GBParser.md)" in markdown
    assert "- [GBStore](GBStore.md) Stores objects." in markdown
    assert "## Categories" not in markdown


def test_markdown_rejects_bad_heading_level() -> None:
    with pytest.raises(ValueError):
        MarkdownGenerator(heading_level=0)


def test_markdown_keeps_tasks_without_members() -> None:
    markdown = RenderingEngine(MarkdownGenerator()).generate_for_object(
        {"header": "Foo", "tasks": [{"header": "Pending"}, {"header": "Real", "members": ["bar"]}]}
    )

    assert markdown.index("### Pending") < markdown.index("### Real")
    assert "- `bar`" in markdown
