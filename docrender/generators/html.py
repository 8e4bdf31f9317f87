"""XHTML output generated from per-hook Jinja templates."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Dict, List, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateNotFound

from ..errors import GenerationFailure
from ..models import (
    IndexGroup,
    IndexGroupType,
    IndexItem,
    InfoItem,
    Member,
    MemberGroup,
    MemberSectionType,
    MemberType,
    ObjectHeader,
    SectionItemType,
    Task,
)
from .base import FormatGenerator, GenerationContext, IndexContext, ObjectContext

_DEFAULT_TEMPLATES = Path(__file__).with_name("templates") / "html"

INFO_LABELS: Dict[SectionItemType, str] = {
    SectionItemType.INHERITS: "Inherits from",
    SectionItemType.CONFORMS: "Conforms to",
    SectionItemType.DECLARED: "Declared in",
}

GROUP_TITLES: Dict[MemberType, str] = {
    MemberType.CLASS: "Class Methods",
    MemberType.INSTANCE: "Instance Methods",
    MemberType.PROPERTY: "Properties",
}

INDEX_TITLES: Dict[IndexGroupType, str] = {
    IndexGroupType.CLASSES: "Classes",
    IndexGroupType.CATEGORIES: "Categories",
    IndexGroupType.PROTOCOLS: "Protocols",
}

SECTION_TITLES = (
    (MemberSectionType.PARAMETERS, "Parameters"),
    (MemberSectionType.EXCEPTIONS, "Exceptions"),
)

_ANCHOR_PATTERN = re.compile(r"[^A-Za-z0-9_]+")


class HtmlGenerator(FormatGenerator):
    """Writes one XHTML page per object and one for the index.

    Every hook renders ``<hook>.j2``; templates found in ``templates_dir``
    take precedence over the bundled ones.
    """

    name = "html"
    extension = "html"

    def __init__(
        self,
        templates_dir: Optional[Path] = None,
        *,
        stylesheet: Optional[str] = None,
        title_prefix: Optional[str] = None,
    ) -> None:
        self.templates_dir = templates_dir
        self.stylesheet = stylesheet
        self.title_prefix = title_prefix or ""
        self._env = self._create_env(templates_dir)

    # -- object hooks -------------------------------------------------------

    def append_object_header(self, ctx: ObjectContext, header: ObjectHeader) -> None:
        title = f"{header.name} {header.kind.title()} Reference" if header.kind else f"{header.name} Reference"
        self._write(ctx, "object_header", header=header, title=title)

    def append_info_header(self, ctx: ObjectContext) -> None:
        self._write(ctx, "info_header", header=ctx.data.header)

    def append_info_item(self, ctx: ObjectContext, item: InfoItem, index: int) -> None:
        self._write(ctx, "info_item", item=item, index=index, label=INFO_LABELS[item.type])

    def append_info_footer(self, ctx: ObjectContext) -> None:
        self._write(ctx, "info_footer")

    def append_overview(self, ctx: ObjectContext, overview: Any) -> None:
        paragraphs = [part.strip() for part in self.overview_text(overview).split("\n\n") if part.strip()]
        if paragraphs:
            self._write(ctx, "overview", paragraphs=paragraphs)

    def append_tasks_header(self, ctx: ObjectContext) -> None:
        self._write(ctx, "tasks_header")

    def append_task_header(self, ctx: ObjectContext, task: Task, index: int) -> None:
        self._write(ctx, "task_header", task=task, index=index)

    def append_task_member(self, ctx: ObjectContext, member: Member, index: int) -> None:
        self._write(ctx, "task_member", member=member, index=index, anchor=self.anchor(member))

    def append_task_footer(self, ctx: ObjectContext, task: Task, index: int) -> None:
        self._write(ctx, "task_footer", task=task, index=index)

    def append_members_header(self, ctx: ObjectContext) -> None:
        self._write(ctx, "members_header")

    def append_member_group_header(self, ctx: ObjectContext, group: MemberGroup, index: int) -> None:
        self._write(ctx, "member_group_header", group=group, index=index, title=GROUP_TITLES[group.type])

    def append_member(self, ctx: ObjectContext, member: Member, index: int) -> None:
        self._write(
            ctx,
            "member",
            member=member,
            index=index,
            anchor=self.anchor(member),
            sections=SECTION_TITLES,
        )

    def append_member_group_footer(self, ctx: ObjectContext, group: MemberGroup, index: int) -> None:
        last = self.is_last(index, ctx.data.member_groups)
        self._write(ctx, "member_group_footer", group=group, index=index, last=last)

    def append_members_footer(self, ctx: ObjectContext) -> None:
        self._write(ctx, "members_footer")

    def append_object_footer(self, ctx: ObjectContext) -> None:
        self._write(ctx, "object_footer")

    # -- index hooks --------------------------------------------------------

    def append_index_header(self, ctx: IndexContext, title: str) -> None:
        self._write(ctx, "index_header", title=title)

    def append_index_group_header(self, ctx: IndexContext, group: IndexGroup, index: int) -> None:
        self._write(ctx, "index_group_header", group=group, index=index, title=INDEX_TITLES[group.type])

    def append_index_item(self, ctx: IndexContext, item: IndexItem, index: int) -> None:
        self._write(ctx, "index_item", item=item, index=index, href=self.item_href(item))

    def append_index_group_footer(self, ctx: IndexContext, group: IndexGroup, index: int) -> None:
        self._write(ctx, "index_group_footer", group=group, index=index)

    def append_index_footer(self, ctx: IndexContext) -> None:
        self._write(ctx, "index_footer")

    # -- helpers ------------------------------------------------------------

    @staticmethod
    def anchor(member: Member) -> str:
        slug = _ANCHOR_PATTERN.sub("_", member.name).strip("_")
        return f"api-{slug or 'member'}"

    def item_href(self, item: IndexItem) -> str:
        """Link target for an index entry; override to match the caller's layout."""
        return f"{item.name}.{self.extension}"

    def _write(self, ctx: GenerationContext[Any], template_name: str, **values: Any) -> None:
        try:
            template = self._env.get_template(f"{template_name}.j2")
        except TemplateNotFound as exc:
            raise GenerationFailure(f"missing HTML template '{template_name}.j2'") from exc
        rendered = template.render(
            last_updated=self.last_updated_text(ctx),
            stylesheet=self.stylesheet,
            title_prefix=self.title_prefix,
            **values,
        ).rstrip("\n")
        if rendered.strip():
            ctx.out.writeline(rendered)

    @staticmethod
    def _create_env(templates_dir: Optional[Path]) -> Environment:
        directories: List[str] = []
        if templates_dir is not None:
            directories.append(str(templates_dir))
        directories.append(str(_DEFAULT_TEMPLATES))
        loader = FileSystemLoader(directories)
        return Environment(
            loader=loader,
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )


__all__ = ["HtmlGenerator"]
