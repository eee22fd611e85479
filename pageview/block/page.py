from __future__ import annotations
from typing import Any, Callable, Mapping

from .block import Block
from .context import RenderOptions, build_context
from .normalize import IdFactory, normalize
from .renderer import BlockRenderer, RenderedNode, render_block


def render_page(
    store: Mapping[str, Block],
    root_id: str,
    options: RenderOptions | None = None,
    components: Mapping[str, type[BlockRenderer]] | None = None,
    map_page_url: Callable[[str], str] | None = None,
    map_image_url: Callable[[str, Block], str] | None = None,
    search: Callable[..., Any] | None = None,
    should_cancel: Callable[[], bool] | None = None,
    id_factory: IdFactory | None = None,
) -> RenderedNode | None:
    """
    Normalize a page and render it from its root block.

    Normalization failures always propagate. Failures inside the walk follow
    `options.strict`: raised in strict mode, logged and skipped otherwise.
    """
    normalized = normalize(store, root_id, id_factory=id_factory)
    ctx = build_context(
        normalized,
        root_id,
        options=options,
        components=components,
        map_page_url=map_page_url,
        map_image_url=map_image_url,
        search=search,
        should_cancel=should_cancel,
    )
    with ctx:
        return render_block(root_id, ctx)
