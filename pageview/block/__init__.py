"""
Page blocks - normalize a flat block store and render it as a tree.

This module provides:
- Block: One content block (id, type, parent, ordered children)
- load_store: Validate raw records into a BlockStore
- normalize: Wrap contiguous list items under synthesized list blocks
- group_children: Split a child list into bare and header-section groups
- BlockRenderer / RendererMeta: Type-keyed render strategies
- RenderContext / RenderOptions: Per-render configuration
- render_block / render_page: Walk the page into RenderedNode trees
"""

from .block import Block, BlockStore, MissingBlockError, load_store
from .normalize import DuplicateIdError, normalize
from .grouping import BareGroup, SectionGroup, Group, group_children, flatten_groups
from .context import RenderContext, RenderOptions, ContextError
from .renderer import (
    BlockRenderer,
    RendererMeta,
    RenderedNode,
    RenderError,
    RenderCancelled,
    render_block,
)
from .page import render_page

__all__ = [
    "Block",
    "BlockStore",
    "MissingBlockError",
    "load_store",
    "DuplicateIdError",
    "normalize",
    "BareGroup",
    "SectionGroup",
    "Group",
    "group_children",
    "flatten_groups",
    "RenderContext",
    "RenderOptions",
    "ContextError",
    "BlockRenderer",
    "RendererMeta",
    "RenderedNode",
    "RenderError",
    "RenderCancelled",
    "render_block",
    "render_page",
]
