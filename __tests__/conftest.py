import itertools

import pytest
from pageview.block import Block


def make_block(block_id: str, type: str = "text", parent_id: str | None = "page", children=None, properties=None) -> Block:
    return Block(
        id=block_id,
        type=type,
        parent_id=parent_id,
        children=list(children or []),
        properties=properties if properties is not None else {"title": [[block_id]]},
    )


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's PAGEVIEW_* settings out of the tests."""
    for name in ("PAGEVIEW_ENV", "PAGEVIEW_STRICT", "PAGEVIEW_DARK_MODE", "PAGEVIEW_FULL_PAGE", "PAGEVIEW_ROOT_DOMAIN"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def blk():
    return make_block


@pytest.fixture
def page_store():
    """
    Build a store with a root "page" block.

    The root's children default to the given blocks whose parent is the root,
    in the order given.
    """
    def _build(*blocks: Block, root_id: str = "page", children: list[str] | None = None) -> dict[str, Block]:
        if children is None:
            children = [b.id for b in blocks if b.parent_id == root_id]
        store = {root_id: Block(id=root_id, type="page", children=children)}
        for b in blocks:
            store[b.id] = b
        return store
    return _build


@pytest.fixture
def id_factory():
    """Deterministic wrapper ids: w0, w1, ..."""
    counter = itertools.count()
    return lambda: f"w{next(counter)}"
