"""
Resource table: one :class:`ResourceSpec` per persisted kind.

Each spec declares, in one place, everything the generic mutation layer
needs to know about a kind:

    table            storage table name
    owner            how ownership is resolved (direct, via book, via chapter)
    parent_column    column naming the parent for create / list / reorder
    fields           wire name → FieldSpec(column, json) for updates
    create_fields    wire name → FieldSpec accepted on create (defaults to fields)
    defaults         storage column → value applied on create when absent
    sequence         ordering column auto-assigned on create
    order_by         ORDER BY clause for list

The wire names are the writable whitelist.  Anything else in a client
payload is dropped by :func:`lofi_books.core.projection.project`.

Usage:
    >>> from lofi_books.core.resources import get_resource
    >>> spec = get_resource("chapter")
    >>> spec.fields["wordCount"].column
    'word_count'

Tags:
    resources, whitelist, schema-table, lofi-books
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from lofi_books.core.naming import to_storage_key
from lofi_books.core.schema import TABLES


class Ownership(str, Enum):
    """How a record reaches its owning user."""

    DIRECT = "direct"  # record has its own user_id column
    BOOK = "book"  # record.book_id → books.user_id
    CHAPTER = "chapter"  # record.chapter_id → chapters.book_id → books.user_id


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """Storage column for a wire field, and whether it is stored as JSON text."""

    column: str
    json: bool = False


def _fields(*wire_names: str, json: tuple[str, ...] = ()) -> Mapping[str, FieldSpec]:
    specs = {name: FieldSpec(to_storage_key(name), name in json) for name in wire_names}
    return MappingProxyType(specs)


@dataclass(frozen=True)
class ResourceSpec:
    """Static description of one resource kind."""

    kind: str
    label: str
    table: str
    owner: Ownership
    parent_column: str | None
    fields: Mapping[str, FieldSpec]
    create_fields: Mapping[str, FieldSpec] | None = None
    defaults: Mapping[str, Any] = field(default_factory=dict)
    required: tuple[str, ...] = ()
    sequence: str | None = None
    order_by: str = "created_at"
    has_updated_at: bool = True

    @property
    def not_found_message(self) -> str:
        return f"{self.label} not found"

    @property
    def creatable(self) -> Mapping[str, FieldSpec]:
        return self.create_fields if self.create_fields is not None else self.fields

    @property
    def json_columns(self) -> frozenset[str]:
        specs = list(self.fields.values()) + list(self.creatable.values())
        return frozenset(s.column for s in specs if s.json)


# =============================================================================
# RESOURCE TABLE
# =============================================================================

BOOK = ResourceSpec(
    kind="book",
    label="Book",
    table=TABLES["book"],
    owner=Ownership.DIRECT,
    parent_column=None,
    fields=_fields("title", "description", "genre", "coverImageId"),
    defaults={"description": "", "genre": "", "cover_image_id": None},
    required=("title",),
    order_by="created_at DESC",
)

CHAPTER = ResourceSpec(
    kind="chapter",
    label="Chapter",
    table=TABLES["chapter"],
    owner=Ownership.BOOK,
    parent_column="book_id",
    fields=_fields("title", "content", "sortOrder", "wordCount", "status", "notes"),
    defaults={"title": "", "content": "", "word_count": 0, "status": "draft", "notes": ""},
    sequence="sort_order",
    order_by="sort_order",
)

CHARACTER = ResourceSpec(
    kind="character",
    label="Character",
    table=TABLES["character"],
    owner=Ownership.BOOK,
    parent_column="book_id",
    fields=_fields(
        "name",
        "mainImageId",
        "backstory",
        "development",
        "personalityTraits",
        "relationships",
        "specialAbilities",
        "role",
        "sortOrder",
        json=("personalityTraits", "relationships", "specialAbilities"),
    ),
    defaults={
        "name": "",
        "main_image_id": None,
        "backstory": "",
        "development": "",
        "personality_traits": "[]",
        "relationships": "[]",
        "special_abilities": "[]",
        "role": "supporting",
    },
    sequence="sort_order",
    order_by="sort_order",
)

IDEA = ResourceSpec(
    kind="idea",
    label="Idea",
    table=TABLES["idea"],
    owner=Ownership.BOOK,
    parent_column="book_id",
    fields=_fields(
        "type",
        "title",
        "description",
        "imageId",
        "color",
        "positionX",
        "positionY",
        "width",
        "height",
        "zIndex",
        "linkedChapterId",
    ),
    defaults={
        "type": "note",
        "title": "",
        "description": "",
        "image_id": None,
        "color": "sakura-white",
        "position_x": 100,
        "position_y": 100,
        "width": 220,
        "height": 180,
        "linked_chapter_id": None,
    },
    sequence="z_index",
    order_by="z_index",
)

CONNECTION = ResourceSpec(
    kind="connection",
    label="Connection",
    table=TABLES["connection"],
    owner=Ownership.BOOK,
    parent_column="book_id",
    fields=_fields("color"),
    create_fields=_fields("fromIdeaId", "toIdeaId", "color"),
    defaults={"color": "red"},
    required=("fromIdeaId", "toIdeaId"),
)

ILLUSTRATION = ResourceSpec(
    kind="illustration",
    label="Illustration",
    table=TABLES["illustration"],
    owner=Ownership.CHAPTER,
    parent_column="chapter_id",
    fields=_fields("caption", "sortOrder", "imageId"),
    defaults={"caption": "", "image_id": None},
    sequence="sort_order",
    order_by="sort_order",
)

TIMELINE_EVENT = ResourceSpec(
    kind="timeline_event",
    label="Timeline event",
    table=TABLES["timeline_event"],
    owner=Ownership.BOOK,
    parent_column="book_id",
    fields=_fields(
        "title",
        "description",
        "chapterId",
        "characterIds",
        "eventType",
        "sortOrder",
        "color",
        json=("characterIds",),
    ),
    defaults={
        "title": "",
        "description": "",
        "chapter_id": None,
        "character_ids": "[]",
        "event_type": "plot",
        "color": "",
    },
    sequence="sort_order",
    order_by="sort_order",
)

IMAGE = ResourceSpec(
    kind="image",
    label="Image",
    table=TABLES["image"],
    owner=Ownership.BOOK,
    parent_column="book_id",
    fields=_fields(),
    has_updated_at=False,
)

WISHLIST_ITEM = ResourceSpec(
    kind="wishlist_item",
    label="Wishlist item",
    table=TABLES["wishlist_item"],
    owner=Ownership.DIRECT,
    parent_column=None,
    fields=_fields("title", "description", "type"),
    create_fields=_fields("title", "description", "type", "createdByName"),
    defaults={"title": "", "description": "", "type": "idea", "status": "open"},
    order_by="created_at DESC",
)

RESOURCES: Mapping[str, ResourceSpec] = MappingProxyType(
    {
        spec.kind: spec
        for spec in (
            BOOK,
            CHAPTER,
            CHARACTER,
            IDEA,
            CONNECTION,
            ILLUSTRATION,
            TIMELINE_EVENT,
            IMAGE,
            WISHLIST_ITEM,
        )
    }
)


def get_resource(kind: str) -> ResourceSpec:
    """Look up a resource spec by kind.

    Raises:
        KeyError: Unknown kind (a programming error, not a client error).
    """
    try:
        return RESOURCES[kind]
    except KeyError:
        raise KeyError(f"Unknown resource kind: {kind!r}") from None


__all__ = [
    "BOOK",
    "CHAPTER",
    "CHARACTER",
    "CONNECTION",
    "IDEA",
    "ILLUSTRATION",
    "IMAGE",
    "RESOURCES",
    "TIMELINE_EVENT",
    "WISHLIST_ITEM",
    "FieldSpec",
    "Ownership",
    "ResourceSpec",
    "get_resource",
]
