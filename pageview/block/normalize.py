"""
Normalize - Give flat list items an explicit list container.

A page stores list items as plain siblings of its paragraphs and headers.
Normalization walks the root block's children once, left to right, and
folds every contiguous run of same-typed list items under a synthesized
wrapper block (`wrapper_numbered_list` / `wrapper_bulleted_list`).

The caller's store is never mutated. Every block in the returned store is
a deep copy, so nothing a renderer does to its blocks reaches the caller
or another render of the same data.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Callable, Container, Mapping
from uuid import uuid4

from .block import WRAPPER_PREFIX, Block, BlockStore, get_block


logger = logging.getLogger(__name__)

MAX_ID_ATTEMPTS = 8

IdFactory = Callable[[], str]


class DuplicateIdError(Exception):
    pass


def _generate_id() -> str:
    return str(uuid4())


def _unique_id(id_factory: IdFactory, taken: Container[str]) -> str:
    for _ in range(MAX_ID_ATTEMPTS):
        new_id = id_factory()
        if new_id not in taken:
            return new_id
        logger.debug("wrapper id collision on '%s', regenerating", new_id)
    raise DuplicateIdError(f"Could not generate a unique wrapper id after {MAX_ID_ATTEMPTS} attempts")


@dataclass
class _FoldState:
    """Accumulator threaded through the pass over the root's children."""
    children: list[str] = field(default_factory=list)
    wrappers: dict[str, tuple[str, list[str]]] = field(default_factory=dict)
    wrapper_id: str | None = None
    list_type: str | None = None

    def close_list(self) -> None:
        self.wrapper_id = None
        self.list_type = None


def _open_wrapper(state: _FoldState, item: Block, out: BlockStore, id_factory: IdFactory) -> None:
    wrapper_id = _unique_id(id_factory, out.keys() | state.wrappers.keys())
    state.wrappers[wrapper_id] = (WRAPPER_PREFIX + item.type, [])
    state.children.append(wrapper_id)
    state.wrapper_id = wrapper_id
    state.list_type = item.type


def _fold_child(
    state: _FoldState,
    child_id: str,
    is_last: bool,
    root_id: str,
    out: BlockStore,
    id_factory: IdFactory,
) -> _FoldState:
    item = get_block(out, child_id, referenced_by=root_id)

    if item.is_list_item:
        if state.wrapper_id is None or state.list_type != item.type:
            _open_wrapper(state, item, out, id_factory)
        # nested items keep their parent; only direct children of the root move
        if item.parent_id == root_id:
            out[child_id] = item.model_copy(update={"parent_id": state.wrapper_id})
            state.wrappers[state.wrapper_id][1].append(child_id)
        return state

    state.close_list()
    # the document API appends an empty text block to every page
    if is_last and item.is_empty_text:
        return state
    state.children.append(child_id)
    return state


def normalize(
    store: Mapping[str, Block],
    root_id: str,
    id_factory: IdFactory | None = None,
) -> BlockStore:
    """
    Wrap contiguous list-item runs under the root in wrapper blocks.

    Args:
        store: The caller's block store (left untouched)
        root_id: Block whose immediate children are restructured
        id_factory: Wrapper id generator, uuid4 strings by default

    Returns:
        A new BlockStore with wrappers inserted and the root's children rewritten.

    Raises:
        MissingBlockError: root_id or one of its children is not in the store
        DuplicateIdError: the id factory kept producing existing ids
    """
    root = get_block(store, root_id)
    out: BlockStore = {block_id: block.model_copy(deep=True) for block_id, block in store.items()}
    id_factory = id_factory or _generate_id

    state = _FoldState()
    original = root.children
    for index, child_id in enumerate(original):
        state = _fold_child(
            state,
            child_id,
            is_last=index == len(original) - 1,
            root_id=root_id,
            out=out,
            id_factory=id_factory,
        )

    for wrapper_id, (wrapper_type, members) in state.wrappers.items():
        out[wrapper_id] = Block(
            id=wrapper_id,
            type=wrapper_type,
            parent_id=root_id,
            children=members,
            properties={},
        )
    out[root_id] = out[root_id].model_copy(update={"children": state.children})
    logger.debug(
        "normalized '%s': %d children -> %d, %d wrappers",
        root_id, len(original), len(state.children), len(state.wrappers),
    )
    return out
