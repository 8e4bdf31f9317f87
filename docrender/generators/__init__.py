"""Output format generators and discovery utilities."""

from __future__ import annotations

from importlib import metadata
from typing import Any, Callable, Dict, Iterable, List, Sequence, Set

from .base import FormatGenerator, GenerationContext, IndexContext, ObjectContext, OutputBuffer
from .html import HtmlGenerator
from .markdown import MarkdownGenerator
from .xmldoc import XmlGenerator

_ENTRY_POINT_GROUP = "docrender.generators"

_BUILTIN_FACTORIES: Dict[str, Callable[..., FormatGenerator]] = {
    "html": HtmlGenerator,
    "markdown": MarkdownGenerator,
    "xml": XmlGenerator,
}


def available_generators() -> List[str]:
    """Return the names of built-in and installed generators."""
    names = list(_BUILTIN_FACTORIES)
    for entry in _iter_entry_points():
        if entry.name.lower() not in names:
            names.append(entry.name.lower())
    return names


def create_generator(name: str, **options: Any) -> FormatGenerator:
    """Instantiate the generator registered under ``name``."""
    key = name.lower()
    factory = _BUILTIN_FACTORIES.get(key)
    if factory is None:
        for entry in _iter_entry_points():
            if entry.name.lower() != key:
                continue
            try:
                factory = entry.load()
            except Exception as exc:  # pragma: no cover - defensive guard
                raise RuntimeError(f"Failed to load generator entry point '{name}': {exc}") from exc
            break
    if factory is None:
        raise ValueError(f"Unknown generator: {name}")
    return _coerce_generator(factory, options)


def discover_generators(enabled: Sequence[str] | None = None) -> List[FormatGenerator]:
    """Return instantiated generators, honoring optional enabled names."""
    names = available_generators()
    if enabled is None:
        return [create_generator(name) for name in names]

    requested: List[str] = []
    seen: Set[str] = set()
    for name in enabled:
        key = name.lower()
        if key not in seen:
            requested.append(key)
            seen.add(key)
    missing = [name for name in requested if name not in names]
    if missing:
        raise ValueError(f"Unknown generators requested: {', '.join(sorted(missing))}")
    return [create_generator(name) for name in requested]


def _coerce_generator(obj: object, options: Dict[str, Any]) -> FormatGenerator:
    if isinstance(obj, FormatGenerator):
        if options:
            raise TypeError("Options cannot be applied to a generator instance")
        return obj
    if callable(obj):
        instance = obj(**options)
        if isinstance(instance, FormatGenerator):
            return instance
    raise TypeError("Generator entry point must be a FormatGenerator subclass or factory")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points().select(group=_ENTRY_POINT_GROUP)


__all__ = [
    "FormatGenerator",
    "GenerationContext",
    "HtmlGenerator",
    "IndexContext",
    "MarkdownGenerator",
    "ObjectContext",
    "OutputBuffer",
    "XmlGenerator",
    "available_generators",
    "create_generator",
    "discover_generators",
]
