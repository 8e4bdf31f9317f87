"""Generic rendering pipeline for documented objects and indexes."""

from __future__ import annotations

from typing import Optional

from .config import RenderConfig
from .engine import RenderingEngine
from .errors import DocRenderError, GenerationFailure, InvalidInput
from .generators import FormatGenerator, create_generator


def build_engine(name: str, config: Optional[RenderConfig] = None) -> RenderingEngine:
    """Create an engine for the generator ``name`` configured from ``config``."""
    if config is None:
        return RenderingEngine(create_generator(name))
    generator = create_generator(name, **config.generator_options(name))
    return RenderingEngine(generator, last_updated=config.last_updated)


__all__ = [
    "DocRenderError",
    "FormatGenerator",
    "GenerationFailure",
    "InvalidInput",
    "RenderingEngine",
    "build_engine",
]
