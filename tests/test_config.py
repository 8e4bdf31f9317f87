"""Tests for docrender.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from docrender.config import ConfigError, HtmlConfig, RenderConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, RenderConfig)
    assert config.root == tmp_path.resolve()
    assert config.last_updated is None
    assert config.formats == []
    assert config.html == HtmlConfig()
    assert config.markdown.heading_level == 1
    assert config.xml.indent == 2


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".docrender.yml"
    config_file.write_text(
        """
last_updated: "19 October 2026"
formats: [HTML, markdown]
html:
  templates_dir: "templates/html"
  stylesheet: "css/styles.css"
  title_prefix: "MyLib: "
markdown:
  heading_level: 2
xml:
  indent: 4
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.last_updated == "19 October 2026"
    assert config.formats == ["html", "markdown"]
    assert config.html.templates_dir == tmp_path.resolve() / "templates" / "html"
    assert config.html.stylesheet == "css/styles.css"
    assert config.html.title_prefix == "MyLib: "
    assert config.markdown.heading_level == 2
    assert config.xml.indent == 4
    assert config.generator_options("markdown") == {"heading_level": 2}
    assert config.generator_options("xml") == {"indent": 4}
    assert config.generator_options("custom") == {}


def test_unquoted_dates_become_iso_strings(tmp_path: Path) -> None:
    (tmp_path / ".docrender.yml").write_text("last_updated: 2026-10-19\n", encoding="utf-8")

    assert load_config(tmp_path).last_updated == "2026-10-19"


def test_config_path_resolves_sibling_file(tmp_path: Path) -> None:
    (tmp_path / ".docrender.yml").write_text("formats: xml\n", encoding="utf-8")

    assert load_config(tmp_path / "entities.json").formats == ["xml"]


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".docrender.yml").write_text("\n", encoding="utf-8")

    assert load_config(tmp_path).formats == []


@pytest.mark.parametrize(
    "text",
    [
        "- just\n- a list\n",
        "html: [unclosed\n",
        "markdown:\n  heading_level: 9\n",
        "xml:\n  indent: -1\n",
    ],
)
def test_invalid_config_raises(tmp_path: Path, text: str) -> None:
    (tmp_path / ".docrender.yml").write_text(text, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)
