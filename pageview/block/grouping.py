"""
Grouping - Partition a block's children into render groups.

Every header starts a section that runs up to (not including) the next
header. Anything outside a section is rendered as a bare sibling.

    [H1, X, Y, H2, Z]  ->  [Section(H1, [H1, X, Y]), Section(H2, [H2, Z])]
    [X, Y, Z]          ->  [Bare([X]), Bare([Y]), Bare([Z])]
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence, Union

from .block import Block


@dataclass(frozen=True)
class BareGroup:
    ids: tuple[str, ...]


@dataclass(frozen=True)
class SectionGroup:
    header_id: str
    ids: tuple[str, ...]


Group = Union[BareGroup, SectionGroup]


def _is_header(store: Mapping[str, Block], block_id: str) -> bool:
    # missing ids group as bare so the walker can report them
    block = store.get(block_id)
    return block is not None and block.is_header


def group_children(children: Sequence[str], store: Mapping[str, Block]) -> list[Group]:
    groups: list[Group] = []
    i = 0
    while i < len(children):
        if not _is_header(store, children[i]):
            groups.append(BareGroup((children[i],)))
            i += 1
            continue
        j = i + 1
        while j < len(children) and not _is_header(store, children[j]):
            j += 1
        groups.append(SectionGroup(children[i], tuple(children[i:j])))
        i = j
    return groups


def flatten_groups(groups: Iterable[Group]) -> list[str]:
    """Concatenate group members back into a single ordered id list."""
    return [block_id for group in groups for block_id in group.ids]
