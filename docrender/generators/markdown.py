"""Markdown output driven by the default traversal."""

from __future__ import annotations

from typing import Any

from ..models import (
    IndexGroup,
    IndexItem,
    InfoItem,
    Member,
    MemberGroup,
    ObjectHeader,
    SectionItemType,
    Task,
)
from .base import FormatGenerator, IndexContext, ObjectContext
from .html import GROUP_TITLES, INDEX_TITLES, INFO_LABELS, SECTION_TITLES


class MarkdownGenerator(FormatGenerator):
    """Plain Markdown pages.

    Info items of the same type are folded onto one line; the item index is
    used to decide where separators go.
    """

    name = "markdown"
    extension = "md"

    def __init__(self, heading_level: int = 1) -> None:
        if not 1 <= heading_level <= 4:
            raise ValueError("heading_level must be between 1 and 4")
        self.heading_level = heading_level

    def _heading(self, depth: int, text: str) -> str:
        return f"{'#' * (self.heading_level + depth)} {text}"

    def append_object_header(self, ctx: ObjectContext, header: ObjectHeader) -> None:
        title = f"{header.name} {header.kind.title()} Reference" if header.kind else f"{header.name} Reference"
        ctx.out.writeline(self._heading(0, title))
        ctx.out.writeline()
        if header.brief:
            ctx.out.writeline(f"_{header.brief}_")
            ctx.out.writeline()

    def append_info_item(self, ctx: ObjectContext, item: InfoItem, index: int) -> None:
        items = ctx.data.info_items
        starts_run = index == 0 or items[index - 1].type is not item.type
        ends_run = self.is_last(index, items) or items[index + 1].type is not item.type
        value = self._info_value(item)
        if starts_run:
            ctx.out.write(f"- **{INFO_LABELS[item.type]}:** {value}")
        else:
            ctx.out.write(f", {value}")
        if ends_run:
            ctx.out.writeline()

    def append_info_footer(self, ctx: ObjectContext) -> None:
        ctx.out.writeline()

    def append_overview(self, ctx: ObjectContext, overview: Any) -> None:
        text = self.overview_text(overview)
        if not text:
            return
        ctx.out.writeline(self._heading(1, "Overview"))
        ctx.out.writeline()
        ctx.out.writeline(text)
        ctx.out.writeline()

    def append_tasks_header(self, ctx: ObjectContext) -> None:
        ctx.out.writeline(self._heading(1, "Tasks"))
        ctx.out.writeline()

    def append_task_header(self, ctx: ObjectContext, task: Task, index: int) -> None:
        ctx.out.writeline(self._heading(2, task.header))
        ctx.out.writeline()

    def append_task_member(self, ctx: ObjectContext, member: Member, index: int) -> None:
        line = f"- `{member.name}`"
        if member.brief:
            line += f" {member.brief}"
        ctx.out.writeline(line)

    def append_task_footer(self, ctx: ObjectContext, task: Task, index: int) -> None:
        ctx.out.writeline()

    def append_member_group_header(self, ctx: ObjectContext, group: MemberGroup, index: int) -> None:
        ctx.out.writeline(self._heading(1, GROUP_TITLES[group.type]))
        ctx.out.writeline()

    def append_member(self, ctx: ObjectContext, member: Member, index: int) -> None:
        out = ctx.out
        out.writeline(self._heading(2, member.name))
        out.writeline()
        if member.brief:
            out.writeline(member.brief)
            out.writeline()
        if member.prototype:
            out.writeline("```")
            out.writeline(member.signature)
            out.writeline("```")
            out.writeline()
        for section_type, title in SECTION_TITLES:
            entries = member.section(section_type)
            if not entries:
                continue
            out.writeline(f"**{title}**")
            out.writeline()
            for entry in entries:
                if entry.description:
                    out.writeline(f"- `{entry.name}`: {entry.description}")
                else:
                    out.writeline(f"- `{entry.name}`")
            out.writeline()
        if member.returns:
            out.writeline(f"**Return Value** {member.returns}")
            out.writeline()
        if member.description:
            out.writeline(member.description)
            out.writeline()

    def append_object_footer(self, ctx: ObjectContext) -> None:
        self._last_updated(ctx)

    def append_index_header(self, ctx: IndexContext, title: str) -> None:
        ctx.out.writeline(self._heading(0, title))
        ctx.out.writeline()

    def append_index_group_header(self, ctx: IndexContext, group: IndexGroup, index: int) -> None:
        ctx.out.writeline(self._heading(1, INDEX_TITLES[group.type]))
        ctx.out.writeline()

    def append_index_item(self, ctx: IndexContext, item: IndexItem, index: int) -> None:
        line = f"- [{item.name}]({item.name}.{self.extension})"
        if item.brief:
            line += f" {item.brief}"
        ctx.out.writeline(line)

    def append_index_group_footer(self, ctx: IndexContext, group: IndexGroup, index: int) -> None:
        ctx.out.writeline()

    def append_index_footer(self, ctx: IndexContext) -> None:
        self._last_updated(ctx)

    @staticmethod
    def _info_value(item: InfoItem) -> str:
        if item.type is SectionItemType.DECLARED:
            return f"`{item.value}`"
        return item.value

    def _last_updated(self, ctx: Any) -> None:
        last_updated = self.last_updated_text(ctx)
        if last_updated:
            ctx.out.writeline("---")
            ctx.out.writeline()
            ctx.out.writeline(f"_Last updated: {last_updated}_")


__all__ = ["MarkdownGenerator"]
