from .block import (
    Block,
    BlockStore,
    BlockRenderer,
    RenderContext,
    RenderOptions,
    RenderedNode,
    load_store,
    normalize,
    group_children,
    render_block,
    render_page,
)

__all__ = [
    "Block",
    "BlockStore",
    "BlockRenderer",
    "RenderContext",
    "RenderOptions",
    "RenderedNode",
    "load_store",
    "normalize",
    "group_children",
    "render_block",
    "render_page",
]
