"""Rendering engine that drives format generators."""

from __future__ import annotations

import threading
from typing import Any, Callable, Optional

from .errors import DocRenderError, GenerationFailure, InvalidInput
from .generators.base import FormatGenerator, GenerationContext, IndexContext, ObjectContext
from .logging import get_logger
from .normalize import build_index_data, build_object_data, entity_name


class RenderingEngine:
    """Generates output for objects and the index through a ``FormatGenerator``.

    One engine can be reused for any number of sequential calls; each call
    builds a fresh ``GenerationContext`` and drops it when it returns. Only
    ``last_updated`` is carried from call to call. The engine is not safe for
    concurrent use: a second call made while one is running is rejected.
    """

    def __init__(self, generator: FormatGenerator, *, last_updated: Optional[str] = None) -> None:
        if not isinstance(generator, FormatGenerator):
            raise TypeError("generator must be a FormatGenerator instance")
        self.generator = generator
        self.last_updated = last_updated
        self.logger = get_logger("engine")
        self._context: Optional[GenerationContext[Any]] = None
        self._busy = threading.Lock()

    @property
    def last_updated(self) -> Optional[str]:
        return self._last_updated

    @last_updated.setter
    def last_updated(self, value: Optional[str]) -> None:
        if isinstance(value, str) and value.strip():
            self._last_updated: Optional[str] = value.strip()
        else:
            self._last_updated = None

    @property
    def context(self) -> Optional[GenerationContext[Any]]:
        """Context of the call in progress, ``None`` between calls."""
        return self._context

    def generate_for_object(self, data: Any) -> str:
        """Generate output for a single documented object.

        Raises ``InvalidInput`` when ``data`` is absent or malformed and
        ``GenerationFailure`` when the generator cannot produce output.
        """
        return self._generate("object", data)

    def generate_for_index(self, data: Any) -> str:
        """Generate output for the main index."""
        return self._generate("index", data)

    def _generate(self, kind: str, data: Any) -> str:
        if not self._busy.acquire(blocking=False):
            raise GenerationFailure(
                "engine is already generating; use one engine per worker",
                entity=entity_name(data),
                kind=kind,
            )
        try:
            try:
                if kind == "object":
                    context: GenerationContext[Any] = GenerationContext(
                        data=build_object_data(data), raw=data, last_updated=self.last_updated
                    )
                else:
                    context = GenerationContext(
                        data=build_index_data(data), raw=data, last_updated=self.last_updated
                    )
            except InvalidInput as exc:
                self.logger.warning("Rejected %s data: %s", kind, exc)
                raise

            self._context = context
            self.logger.debug("Generating %s output for %s via %s", kind, context.entity, self.generator.name)
            render: Callable[[Any], None] = self.render_object if kind == "object" else self.render_index
            try:
                render(context)
            except DocRenderError as exc:
                if exc.entity is None:
                    exc.entity = context.entity
                if exc.kind is None:
                    exc.kind = kind
                self.logger.warning("Generation failed: %s", exc)
                raise
            except Exception as exc:
                self.logger.warning("Generator %s failed for %s: %s", self.generator.name, context.entity, exc)
                raise GenerationFailure(
                    f"{self.generator.name} generator failed: {exc}", entity=context.entity, kind=kind
                ) from exc
            return context.out.getvalue()
        finally:
            self._context = None
            self._busy.release()

    def render_object(self, ctx: ObjectContext) -> None:
        """Run the full override or the default object traversal."""
        generator = self.generator
        if generator.controls_object_output():
            self._emit_direct(ctx, generator.render_object_direct(ctx))
            return

        data = ctx.data
        generator.append_object_header(ctx, data.header)

        if data.info_items:
            generator.append_info_header(ctx)
            for index, item in enumerate(data.info_items):
                generator.append_info_item(ctx, item, index)
            generator.append_info_footer(ctx)

        if data.overview is not None:
            generator.append_overview(ctx, data.overview)

        if data.tasks:
            generator.append_tasks_header(ctx)
            for task_index, task in enumerate(data.tasks):
                generator.append_task_header(ctx, task, task_index)
                for index, member in enumerate(task.members):
                    generator.append_task_member(ctx, member, index)
                generator.append_task_footer(ctx, task, task_index)
            generator.append_tasks_footer(ctx)

        if data.member_groups:
            generator.append_members_header(ctx)
            for group_index, group in enumerate(data.member_groups):
                generator.append_member_group_header(ctx, group, group_index)
                for index, member in enumerate(group.members):
                    generator.append_member(ctx, member, index)
                generator.append_member_group_footer(ctx, group, group_index)
            generator.append_members_footer(ctx)

        generator.append_object_footer(ctx)

    def render_index(self, ctx: IndexContext) -> None:
        """Run the full override or the default index traversal."""
        generator = self.generator
        if generator.controls_index_output():
            self._emit_direct(ctx, generator.render_index_direct(ctx))
            return

        generator.append_index_header(ctx, ctx.data.title)
        for group_index, group in enumerate(ctx.data.groups):
            generator.append_index_group_header(ctx, group, group_index)
            for index, item in enumerate(group.items):
                generator.append_index_item(ctx, item, index)
            generator.append_index_group_footer(ctx, group, group_index)
        generator.append_index_footer(ctx)

    @staticmethod
    def _emit_direct(ctx: GenerationContext[Any], result: Optional[str]) -> None:
        if result is None:
            return
        if not isinstance(result, str):
            raise GenerationFailure(f"direct rendering returned {type(result).__name__}, expected str")
        ctx.out.write(result)


__all__ = ["RenderingEngine"]
