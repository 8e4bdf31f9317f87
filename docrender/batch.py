"""Batch rendering of many entities with per-entity failure isolation."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .engine import RenderingEngine
from .errors import DocRenderError
from .logging import get_logger
from .normalize import entity_name


@dataclass
class BatchFailure:
    """Entity that could not be rendered and the error raised for it."""

    entity: Optional[str]
    error: DocRenderError


@dataclass
class BatchResult:
    """Outputs keyed by entity name plus the failures collected on the way."""

    outputs: Dict[str, str] = field(default_factory=dict)
    failures: List[BatchFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class BatchRenderer:
    """Renders objects one after another, continuing past bad entities.

    Engines are not shareable between threads, so each worker thread builds
    its own engine from ``engine_factory``.
    """

    def __init__(self, engine_factory: Callable[[], RenderingEngine], *, workers: int = 1) -> None:
        if workers < 1:
            raise ValueError("workers must be at least 1")
        self.engine_factory = engine_factory
        self.workers = workers
        self.logger = get_logger("batch")
        self._local = threading.local()

    def render_objects(self, entities: Iterable[Mapping[str, Any]]) -> BatchResult:
        """Render every entity; failures are recorded instead of raised."""
        items: List[Tuple[int, Mapping[str, Any]]] = list(enumerate(entities))
        if self.workers == 1 or len(items) < 2:
            results = [self._render_one(item) for item in items]
        else:
            with ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="docrender") as pool:
                results = list(pool.map(self._render_one, items))
        return self._collect(results)

    def render_index(self, data: Mapping[str, Any]) -> BatchResult:
        result = BatchResult()
        try:
            result.outputs[entity_name(data) or "index"] = self._engine().generate_for_index(data)
        except DocRenderError as exc:
            self.logger.error("Index generation failed: %s", exc)
            result.failures.append(BatchFailure(entity=exc.entity, error=exc))
        return result

    def _render_one(self, item: Tuple[int, Mapping[str, Any]]) -> Tuple[str, Optional[str], Optional[DocRenderError]]:
        position, data = item
        key = entity_name(data) or f"#{position}"
        try:
            return key, self._engine().generate_for_object(data), None
        except DocRenderError as exc:
            return key, None, exc

    def _collect(self, results: Sequence[Tuple[str, Optional[str], Optional[DocRenderError]]]) -> BatchResult:
        result = BatchResult()
        for key, output, error in results:
            if error is not None:
                self.logger.error("Skipping %s: %s", key, error)
                result.failures.append(BatchFailure(entity=error.entity or key, error=error))
                continue
            if key in result.outputs:
                self.logger.warning("Duplicate entity %s; keeping the last output", key)
            result.outputs[key] = output or ""
        self.logger.info(
            "Rendered %d entities (%d failed)", len(result.outputs), len(result.failures)
        )
        return result

    def _engine(self) -> RenderingEngine:
        engine = getattr(self._local, "engine", None)
        if engine is None:
            engine = self.engine_factory()
            self._local.engine = engine
        return engine


__all__ = ["BatchFailure", "BatchRenderer", "BatchResult"]
