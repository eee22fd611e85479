"""
Block - One content unit of a page and the flat store that holds them.

A page arrives as a flat mapping from block id to block record. Each record
names its parent and lists its children in document order; the tree is
implicit in those references.

Usage:
    store = load_store({
        "page": {"id": "page", "type": "page", "children": ["a"]},
        "a": {"id": "a", "type": "text", "parentId": "page"},
    })
"""

from __future__ import annotations
from typing import Any, Mapping

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


LIST_TYPES = ("numbered_list", "bulleted_list")
WRAPPER_PREFIX = "wrapper_"
HEADER_TYPE = "header"
TEXT_TYPE = "text"


class MissingBlockError(KeyError):
    """A referenced block id has no entry in the store."""

    def __init__(self, block_id: str, referenced_by: str | None = None):
        self.block_id = block_id
        self.referenced_by = referenced_by
        super().__init__(block_id)

    def __str__(self) -> str:
        if self.referenced_by is not None:
            return f"Missing block '{self.block_id}' (referenced by '{self.referenced_by}')"
        return f"Missing block '{self.block_id}'"


class Block(BaseModel):
    """
    A single content block.

    Attributes:
        id: Unique block id
        type: Type tag, e.g. "text", "header", "bulleted_list"
        parent_id: Id of the logical parent block
        children: Ordered child block ids
        properties: Opaque content payload
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    id: str
    type: str
    parent_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("parent_id", "parentId"),
    )
    children: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("children", "content"),
    )
    properties: dict[str, Any] | None = None

    @property
    def is_list_item(self) -> bool:
        return self.type in LIST_TYPES

    @property
    def is_wrapper(self) -> bool:
        return self.type.startswith(WRAPPER_PREFIX)

    @property
    def is_header(self) -> bool:
        return self.type == HEADER_TYPE

    @property
    def is_empty_text(self) -> bool:
        """True for a text block with no properties and no children."""
        return self.type == TEXT_TYPE and not self.properties and not self.children

    def __repr__(self) -> str:
        return f"Block(id={self.id!r}, type={self.type!r}, children={len(self.children)})"


BlockStore = dict[str, Block]


def load_store(records: Mapping[str, Block | Mapping[str, Any]]) -> BlockStore:
    """
    Validate a mapping of raw records into a BlockStore.

    Records may already be Block instances; those are kept as-is.
    Raises ValueError if a key does not match its record's id.
    """
    store: BlockStore = {}
    for key, record in records.items():
        block = record if isinstance(record, Block) else Block.model_validate(record)
        if block.id != key:
            raise ValueError(f"Store key '{key}' does not match block id '{block.id}'")
        store[key] = block
    return store


def get_block(store: Mapping[str, Block], block_id: str, referenced_by: str | None = None) -> Block:
    try:
        return store[block_id]
    except KeyError:
        raise MissingBlockError(block_id, referenced_by) from None
