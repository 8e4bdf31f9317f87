"""Data models for documented entities and the index."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple


class SectionItemType(str, Enum):
    """Relationship carried by an object info item."""

    INHERITS = "inherits"
    CONFORMS = "conforms"
    DECLARED = "declared"


class MemberType(str, Enum):
    """Kind of members collected in a member group."""

    CLASS = "class"
    INSTANCE = "instance"
    PROPERTY = "property"


class PrototypeType(str, Enum):
    """Kind of a single prototype fragment."""

    VALUE = "value"
    PARAMETER = "parameter"


class MemberSectionType(str, Enum):
    """Named sections of a member's documentation."""

    PARAMETERS = "parameters"
    EXCEPTIONS = "exceptions"


class IndexGroupType(str, Enum):
    """Groups listed by the main index."""

    CLASSES = "classes"
    CATEGORIES = "categories"
    PROTOCOLS = "protocols"


@dataclass(frozen=True)
class ObjectHeader:
    """Name and kind of the documented object."""

    name: str
    kind: Optional[str] = None
    file: Optional[str] = None
    brief: Optional[str] = None


@dataclass(frozen=True)
class InfoItem:
    """Single relationship entry shown in the object info block."""

    type: SectionItemType
    value: str


@dataclass(frozen=True)
class PrototypeItem:
    """Fragment of a member prototype, e.g. ``- (void)`` or ``value``."""

    type: PrototypeType
    value: str


@dataclass(frozen=True)
class MemberSectionEntry:
    """Named entry of a member section such as a parameter."""

    name: str
    description: str = ""


@dataclass(frozen=True)
class Member:
    """Documented member, or a reference to one from a task."""

    name: str
    type: Optional[MemberType] = None
    prototype: Tuple[PrototypeItem, ...] = ()
    brief: Optional[str] = None
    description: Optional[str] = None
    returns: Optional[str] = None
    sections: Mapping[MemberSectionType, Tuple[MemberSectionEntry, ...]] = field(default_factory=dict)

    def section(self, section_type: MemberSectionType) -> Tuple[MemberSectionEntry, ...]:
        return tuple(self.sections.get(section_type, ()))

    @property
    def signature(self) -> str:
        """Prototype joined into a single line, falling back to the name."""
        if not self.prototype:
            return self.name
        return " ".join(item.value for item in self.prototype if item.value).strip()


@dataclass(frozen=True)
class Task:
    """Named grouping of member references."""

    header: str
    members: Tuple[Member, ...]


@dataclass(frozen=True)
class MemberGroup:
    """Members of one member type, in declaration order."""

    type: MemberType
    members: Tuple[Member, ...]


@dataclass(frozen=True)
class ObjectData:
    """Normalized view of object-shaped entity data."""

    header: ObjectHeader
    info_items: Tuple[InfoItem, ...] = ()
    overview: Any = None
    tasks: Tuple[Task, ...] = ()
    member_groups: Tuple[MemberGroup, ...] = ()

    @property
    def name(self) -> str:
        return self.header.name


@dataclass(frozen=True)
class IndexItem:
    """Entry of an index group."""

    name: str
    brief: Optional[str] = None
    kind: Optional[str] = None


@dataclass(frozen=True)
class IndexGroup:
    type: IndexGroupType
    items: Tuple[IndexItem, ...]


@dataclass(frozen=True)
class IndexData:
    """Normalized view of index-shaped data."""

    title: str
    groups: Tuple[IndexGroup, ...] = ()

    @property
    def name(self) -> str:
        return self.title


EntityData = Mapping[str, Any]

# Keys accepted from upstream producers, first match wins.
OBJECT_KEYS: Dict[str, Tuple[str, ...]] = {
    "header": ("header",),
    "info_items": ("info_items", "infoItems"),
    "overview": ("overview",),
    "tasks": ("tasks",),
    "member_groups": ("member_groups", "memberGroups"),
}

INDEX_KEYS: Dict[str, Tuple[str, ...]] = {
    "header": ("header", "title"),
    "groups": ("groups",),
}


def lookup(data: Mapping[str, Any], aliases: Tuple[str, ...]) -> Any:
    """Return the value stored under the first present alias."""
    for key in aliases:
        if key in data:
            return data[key]
    return None


__all__: List[str] = [
    "EntityData",
    "INDEX_KEYS",
    "IndexData",
    "IndexGroup",
    "IndexGroupType",
    "IndexItem",
    "InfoItem",
    "Member",
    "MemberGroup",
    "MemberSectionEntry",
    "MemberSectionType",
    "MemberType",
    "OBJECT_KEYS",
    "ObjectData",
    "ObjectHeader",
    "PrototypeItem",
    "PrototypeType",
    "SectionItemType",
    "Task",
    "lookup",
]
