"""Base classes for output format generators."""

from __future__ import annotations

from dataclasses import dataclass, field
from io import StringIO
from typing import Any, Generic, Mapping, Optional, Sequence, TypeVar, Union

from ..models import (
    IndexData,
    IndexGroup,
    IndexItem,
    InfoItem,
    Member,
    MemberGroup,
    ObjectData,
    ObjectHeader,
    Task,
)

DataT = TypeVar("DataT", ObjectData, IndexData)


class OutputBuffer:
    """Accumulates generated text for a single generation call."""

    def __init__(self) -> None:
        self._stream = StringIO()

    def write(self, text: str) -> None:
        if text:
            self._stream.write(text)

    def writeline(self, text: str = "") -> None:
        self._stream.write(text)
        self._stream.write("\n")

    def getvalue(self) -> str:
        return self._stream.getvalue()

    def __len__(self) -> int:
        return self._stream.tell()


@dataclass
class GenerationContext(Generic[DataT]):
    """Per-call state handed to every hook.

    ``data`` is the normalized view, ``raw`` the mapping supplied by the caller.
    ``last_updated`` is ``None`` when the engine has no non-blank value.
    """

    data: DataT
    raw: Mapping[str, Any]
    last_updated: Optional[str] = None
    out: OutputBuffer = field(default_factory=OutputBuffer)

    @property
    def entity(self) -> str:
        return self.data.name


ObjectContext = GenerationContext[ObjectData]
IndexContext = GenerationContext[IndexData]


class FormatGenerator:
    """Hook adapter for output formats.

    The engine drives the traversal and calls the ``append_*`` hooks in a fixed
    order; every hook is a no-op here, so a format overrides only the hooks it
    needs. Formats that need full control over ordering override
    ``render_object_direct`` and/or ``render_index_direct`` instead. When the
    direct method is active the engine calls nothing else for that output.
    """

    #: Registry name of the format.
    name: str = "base"
    #: Suggested file extension for callers that persist output.
    extension: str = "txt"

    # -- full control -------------------------------------------------------

    def controls_object_output(self) -> bool:
        """Return True when ``render_object_direct`` replaces the default traversal."""
        return type(self).render_object_direct is not FormatGenerator.render_object_direct

    def controls_index_output(self) -> bool:
        """Return True when ``render_index_direct`` replaces the default traversal."""
        return type(self).render_index_direct is not FormatGenerator.render_index_direct

    def render_object_direct(self, ctx: ObjectContext) -> Union[str, None]:
        """Render the whole object; return the text or write to ``ctx.out``."""
        raise NotImplementedError

    def render_index_direct(self, ctx: IndexContext) -> Union[str, None]:
        """Render the whole index; return the text or write to ``ctx.out``."""
        raise NotImplementedError

    # -- object hooks -------------------------------------------------------

    def append_object_header(self, ctx: ObjectContext, header: ObjectHeader) -> None:
        pass

    def append_info_header(self, ctx: ObjectContext) -> None:
        pass

    def append_info_item(self, ctx: ObjectContext, item: InfoItem, index: int) -> None:
        pass

    def append_info_footer(self, ctx: ObjectContext) -> None:
        pass

    def append_overview(self, ctx: ObjectContext, overview: Any) -> None:
        pass

    def append_tasks_header(self, ctx: ObjectContext) -> None:
        pass

    def append_task_header(self, ctx: ObjectContext, task: Task, index: int) -> None:
        pass

    def append_task_member(self, ctx: ObjectContext, member: Member, index: int) -> None:
        pass

    def append_task_footer(self, ctx: ObjectContext, task: Task, index: int) -> None:
        pass

    def append_tasks_footer(self, ctx: ObjectContext) -> None:
        pass

    def append_members_header(self, ctx: ObjectContext) -> None:
        pass

    def append_member_group_header(self, ctx: ObjectContext, group: MemberGroup, index: int) -> None:
        pass

    def append_member(self, ctx: ObjectContext, member: Member, index: int) -> None:
        pass

    def append_member_group_footer(self, ctx: ObjectContext, group: MemberGroup, index: int) -> None:
        pass

    def append_members_footer(self, ctx: ObjectContext) -> None:
        pass

    def append_object_footer(self, ctx: ObjectContext) -> None:
        pass

    # -- index hooks --------------------------------------------------------

    def append_index_header(self, ctx: IndexContext, title: str) -> None:
        pass

    def append_index_group_header(self, ctx: IndexContext, group: IndexGroup, index: int) -> None:
        pass

    def append_index_item(self, ctx: IndexContext, item: IndexItem, index: int) -> None:
        pass

    def append_index_group_footer(self, ctx: IndexContext, group: IndexGroup, index: int) -> None:
        pass

    def append_index_footer(self, ctx: IndexContext) -> None:
        pass

    # -- helpers ------------------------------------------------------------

    @staticmethod
    def last_updated_text(ctx: GenerationContext[Any]) -> str:
        """Return the call's last-updated value, or an empty string when unset."""
        return ctx.last_updated or ""

    @staticmethod
    def is_last(index: int, items: Sequence[object]) -> bool:
        return index == len(items) - 1

    @staticmethod
    def overview_text(overview: Any) -> str:
        """Flatten an overview blob into paragraphs separated by blank lines."""
        if overview is None:
            return ""
        if isinstance(overview, str):
            return overview.strip()
        if isinstance(overview, Mapping):
            for key in ("text", "description", "paragraphs", "body"):
                if key in overview:
                    return FormatGenerator.overview_text(overview[key])
            return ""
        if isinstance(overview, (list, tuple)):
            parts = [FormatGenerator.overview_text(part) for part in overview]
            return "\n\n".join(part for part in parts if part)
        return str(overview)


__all__ = [
    "FormatGenerator",
    "GenerationContext",
    "IndexContext",
    "ObjectContext",
    "OutputBuffer",
]
