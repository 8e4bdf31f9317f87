"""Configuration loading for docrender (.docrender.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".docrender.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class HtmlConfig:
    """Options for the HTML generator."""

    templates_dir: Optional[Path] = None
    stylesheet: Optional[str] = None
    title_prefix: Optional[str] = None


@dataclass
class MarkdownConfig:
    heading_level: int = 1


@dataclass
class XmlConfig:
    indent: Optional[int] = 2


@dataclass
class RenderConfig:
    """Represents the settings defined in .docrender.yml."""

    root: Path
    last_updated: Optional[str] = None
    formats: List[str] = field(default_factory=list)
    html: HtmlConfig = field(default_factory=HtmlConfig)
    markdown: MarkdownConfig = field(default_factory=MarkdownConfig)
    xml: XmlConfig = field(default_factory=XmlConfig)

    def generator_options(self, name: str) -> Dict[str, Any]:
        """Keyword arguments for the built-in generator called ``name``."""
        key = name.lower()
        if key == "html":
            return {
                "templates_dir": self.html.templates_dir,
                "stylesheet": self.html.stylesheet,
                "title_prefix": self.html.title_prefix,
            }
        if key == "markdown":
            return {"heading_level": self.markdown.heading_level}
        if key == "xml":
            return {"indent": self.xml.indent}
        return {}


def load_config(config_path: Path) -> RenderConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return RenderConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    html_data = _as_dict(data.get("html"))
    templates_dir_str = _as_str(html_data.get("templates_dir"))
    html = HtmlConfig(
        templates_dir=root / templates_dir_str if templates_dir_str else None,
        stylesheet=_as_str(html_data.get("stylesheet")),
        title_prefix=_as_str(html_data.get("title_prefix")),
    )

    markdown = MarkdownConfig()
    heading_level = _as_int(_as_dict(data.get("markdown")).get("heading_level"))
    if heading_level is not None:
        if not 1 <= heading_level <= 4:
            raise ConfigError("markdown.heading_level must be between 1 and 4")
        markdown.heading_level = heading_level

    xml = XmlConfig()
    xml_data = _as_dict(data.get("xml"))
    if "indent" in xml_data:
        indent = _as_int(xml_data.get("indent"))
        if xml_data.get("indent") is not None and (indent is None or indent < 0):
            raise ConfigError("xml.indent must be a non-negative integer")
        xml.indent = indent

    return RenderConfig(
        root=root,
        last_updated=_as_str(data.get("last_updated")),
        formats=[name.lower() for name in _as_str_list(data.get("formats"))],
        html=html,
        markdown=markdown,
        xml=xml,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    # YAML turns unquoted dates into date objects.
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "HtmlConfig",
    "MarkdownConfig",
    "RenderConfig",
    "XmlConfig",
    "load_config",
]
