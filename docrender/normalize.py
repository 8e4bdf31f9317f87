"""Validation and normalization of raw entity and index mappings."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Type, TypeVar

from .errors import InvalidInput
from .models import (
    INDEX_KEYS,
    OBJECT_KEYS,
    IndexData,
    IndexGroup,
    IndexGroupType,
    IndexItem,
    InfoItem,
    Member,
    MemberGroup,
    MemberSectionEntry,
    MemberSectionType,
    MemberType,
    ObjectData,
    ObjectHeader,
    PrototypeItem,
    PrototypeType,
    SectionItemType,
    Task,
    lookup,
)

_E = TypeVar("_E", bound=Enum)


def build_object_data(data: Any) -> ObjectData:
    """Validate object-shaped data and return its normalized view.

    Sections that are missing or empty normalize to empty tuples (or ``None``
    for the overview). Tasks and member groups keep their input position even
    when they list no members.
    """
    _require_mapping(data, "object")
    header = _object_header(lookup(data, OBJECT_KEYS["header"]))
    entity = header.name

    def fail(message: str) -> InvalidInput:
        return InvalidInput(message, entity=entity, kind="object")

    info_items = tuple(
        InfoItem(
            type=_enum(SectionItemType, _field(raw, "type", fail, "info item"), fail, "info item type"),
            value=_text(_field(raw, "value", fail, "info item"), fail, "info item value"),
        )
        for raw in _sequence(lookup(data, OBJECT_KEYS["info_items"]), "info_items", fail)
    )

    tasks: List[Task] = []
    for raw in _sequence(lookup(data, OBJECT_KEYS["tasks"]), "tasks", fail):
        if not isinstance(raw, Mapping):
            raise fail("task entries must be mappings")
        title = _first_text(raw, ("header", "name", "title"))
        if title is None:
            raise fail("task is missing its header")
        members = tuple(
            _member(ref, None, fail) for ref in _sequence(raw.get("members"), "task members", fail)
        )
        tasks.append(Task(header=title, members=members))

    groups: List[MemberGroup] = []
    for raw in _sequence(lookup(data, OBJECT_KEYS["member_groups"]), "member_groups", fail):
        if not isinstance(raw, Mapping):
            raise fail("member group entries must be mappings")
        member_type = _enum(MemberType, raw.get("type"), fail, "member group type")
        members = tuple(
            _member(item, member_type, fail)
            for item in _sequence(raw.get("members"), "group members", fail)
        )
        groups.append(MemberGroup(type=member_type, members=members))

    return ObjectData(
        header=header,
        info_items=info_items,
        overview=_overview(lookup(data, OBJECT_KEYS["overview"])),
        tasks=tuple(tasks),
        member_groups=tuple(groups),
    )


def build_index_data(data: Any) -> IndexData:
    """Validate index-shaped data and return its normalized view."""
    _require_mapping(data, "index")
    raw_header = lookup(data, INDEX_KEYS["header"])
    if isinstance(raw_header, Mapping):
        title = _first_text(raw_header, ("title", "name"))
    else:
        title = raw_header.strip() if isinstance(raw_header, str) and raw_header.strip() else None
    if title is None:
        raise InvalidInput("index data is missing its header", kind="index")

    def fail(message: str) -> InvalidInput:
        return InvalidInput(message, entity=title, kind="index")

    groups: List[IndexGroup] = []
    for raw in _sequence(lookup(data, INDEX_KEYS["groups"]), "groups", fail):
        if not isinstance(raw, Mapping):
            raise fail("index group entries must be mappings")
        group_type = _enum(IndexGroupType, raw.get("type"), fail, "index group type")
        items = tuple(_index_item(item, fail) for item in _sequence(raw.get("items"), "index items", fail))
        if items:
            groups.append(IndexGroup(type=group_type, items=items))
    return IndexData(title=title, groups=tuple(groups))


def entity_name(data: Any) -> Optional[str]:
    """Best-effort name of the entity described by ``data``."""
    if not isinstance(data, Mapping):
        return None
    header = lookup(data, OBJECT_KEYS["header"] + ("title",))
    if isinstance(header, str):
        return header.strip() or None
    if isinstance(header, Mapping):
        return _first_text(header, ("name", "title"))
    return None


def _require_mapping(data: Any, kind: str) -> None:
    if data is None:
        raise InvalidInput(f"{kind} data is missing", kind=kind)
    if not isinstance(data, Mapping):
        raise InvalidInput(f"{kind} data must be a mapping, got {type(data).__name__}", kind=kind)
    if not data:
        raise InvalidInput(f"{kind} data is empty", kind=kind)


def _object_header(raw: Any) -> ObjectHeader:
    if isinstance(raw, str) and raw.strip():
        return ObjectHeader(name=raw.strip())
    if isinstance(raw, Mapping):
        name = _first_text(raw, ("name", "title"))
        if name is not None:
            return ObjectHeader(
                name=name,
                kind=_first_text(raw, ("kind",)),
                file=_first_text(raw, ("file",)),
                brief=_first_text(raw, ("brief",)),
            )
    raise InvalidInput("object data is missing its header", kind="object")


def _member(raw: Any, member_type: Optional[MemberType], fail) -> Member:
    if isinstance(raw, str):
        if not raw.strip():
            raise fail("member name must not be blank")
        return Member(name=raw.strip(), type=member_type)
    if not isinstance(raw, Mapping):
        raise fail("members must be names or mappings")
    name = _first_text(raw, ("name", "selector"))
    if name is None:
        raise fail("member is missing its name")
    if member_type is None and raw.get("type") is not None:
        member_type = _enum(MemberType, raw.get("type"), fail, "member type")
    sections: Dict[MemberSectionType, Tuple[MemberSectionEntry, ...]] = {}
    for section_type in MemberSectionType:
        entries = tuple(
            _section_entry(entry, fail)
            for entry in _sequence(raw.get(section_type.value), section_type.value, fail)
        )
        if entries:
            sections[section_type] = entries
    return Member(
        name=name,
        type=member_type,
        prototype=tuple(_prototype_item(item, fail) for item in _sequence(raw.get("prototype"), "prototype", fail)),
        brief=_first_text(raw, ("brief",)),
        description=_first_text(raw, ("description", "details")),
        returns=_first_text(raw, ("returns", "return")),
        sections=sections,
    )


def _prototype_item(raw: Any, fail) -> PrototypeItem:
    if isinstance(raw, str):
        return PrototypeItem(type=PrototypeType.VALUE, value=raw)
    if not isinstance(raw, Mapping):
        raise fail("prototype items must be strings or mappings")
    return PrototypeItem(
        type=_enum(PrototypeType, raw.get("type", PrototypeType.VALUE.value), fail, "prototype item type"),
        value=_text(raw.get("value"), fail, "prototype item value"),
    )


def _section_entry(raw: Any, fail) -> MemberSectionEntry:
    if isinstance(raw, str):
        return MemberSectionEntry(name=raw)
    if not isinstance(raw, Mapping):
        raise fail("member section entries must be strings or mappings")
    name = _first_text(raw, ("name",))
    if name is None:
        raise fail("member section entry is missing its name")
    return MemberSectionEntry(name=name, description=_first_text(raw, ("description",)) or "")


def _index_item(raw: Any, fail) -> IndexItem:
    if isinstance(raw, str) and raw.strip():
        return IndexItem(name=raw.strip())
    if isinstance(raw, Mapping):
        name = _first_text(raw, ("name", "title"))
        if name is not None:
            return IndexItem(name=name, brief=_first_text(raw, ("brief",)), kind=_first_text(raw, ("kind",)))
    raise fail("index items must have a name")


def _overview(raw: Any) -> Any:
    if raw is None:
        return None
    if isinstance(raw, str):
        return raw if raw.strip() else None
    if isinstance(raw, (Mapping, list, tuple)) and not raw:
        return None
    return raw


def _sequence(value: Any, what: str, fail) -> Sequence[Any]:
    if value is None:
        return ()
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise fail(f"{what} must be a list")
    return value


def _field(raw: Any, key: str, fail, what: str) -> Any:
    if not isinstance(raw, Mapping):
        raise fail(f"{what} entries must be mappings")
    if key not in raw:
        raise fail(f"{what} is missing '{key}'")
    return raw[key]


def _enum(enum_type: Type[_E], value: Any, fail, what: str) -> _E:
    if isinstance(value, enum_type):
        return value
    if isinstance(value, str):
        try:
            return enum_type(value.strip().lower())
        except ValueError:
            pass
    allowed = ", ".join(member.value for member in enum_type)
    raise fail(f"unknown {what} {value!r} (expected one of: {allowed})")


def _text(value: Any, fail, what: str) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise fail(f"{what} must be a string")


def _first_text(raw: Mapping[str, Any], keys: Tuple[str, ...]) -> Optional[str]:
    for key in keys:
        value = raw.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


__all__ = ["build_index_data", "build_object_data", "entity_name"]
