"""
Renderer - Walk a normalized page and build a RenderedNode tree.

BlockRenderer subclasses are registered by block type through the
RendererMeta metaclass. A class with `types = ("header", ...)` becomes the
strategy for those types; any type with no registered strategy falls back to
the base BlockRenderer, which passes the block through as a plain node.

The walk renders children first, grouping them with `group_children`, then
hands the finished child nodes to the block's renderer.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping

from .block import Block, MissingBlockError
from .context import RenderContext
from .grouping import SectionGroup, group_children


logger = logging.getLogger(__name__)

SECTION_TYPE = "section"


class RenderError(Exception):
    pass


class RenderCancelled(Exception):
    pass


@dataclass
class RenderedNode:
    """
    One node of the rendered tree.

    Attributes:
        block_id: Id of the rendered block (the header id for sections)
        type: Block type, or "section" for header groups
        level: Nesting depth below the render root
        children: Rendered child nodes in document order
        block: The block this node was rendered from (None for sections)
        output: Whatever the block's renderer produced for the presentation layer
    """
    block_id: str
    type: str
    level: int = 0
    children: list[RenderedNode] = field(default_factory=list)
    block: Block | None = None
    output: Any = None

    @property
    def is_section(self) -> bool:
        return self.type == SECTION_TYPE

    def iter_nodes(self) -> Iterator[RenderedNode]:
        """Depth-first iteration over this node and its descendants."""
        yield self
        for child in self.children:
            yield from child.iter_nodes()

    def find(self, block_id: str) -> RenderedNode | None:
        for node in self.iter_nodes():
            if node.block_id == block_id and not node.is_section:
                return node
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.block_id,
            "type": self.type,
            "level": self.level,
            "output": self.output,
            "children": [child.to_dict() for child in self.children],
        }

    def __repr__(self) -> str:
        return f"RenderedNode(id={self.block_id!r}, type={self.type!r}, children={len(self.children)})"


# Global registry of block type -> renderer class
_type_registry: dict[str, type[BlockRenderer]] = {}


class RendererMeta(type):
    """
    Metaclass that registers BlockRenderer subclasses by their block types.
    """

    def __new__(mcs, name: str, bases: tuple, attrs: dict):
        new_cls = super().__new__(mcs, name, bases, attrs)
        for block_type in attrs.get("types", ()):
            _type_registry[block_type] = new_cls
        return new_cls

    @classmethod
    def get_renderer(mcs, block_type: str) -> type[BlockRenderer]:
        return _type_registry.get(block_type, BlockRenderer)

    @classmethod
    def list_types(mcs) -> list[str]:
        return list(_type_registry.keys())

    @classmethod
    def resolve(
        mcs,
        block_type: str,
        components: Mapping[str, type[BlockRenderer]] | None = None,
    ) -> type[BlockRenderer]:
        """Per-render components win over the global registry."""
        if components and block_type in components:
            return components[block_type]
        return mcs.get_renderer(block_type)


class BlockRenderer(metaclass=RendererMeta):
    """
    Base render strategy: a node carrying the block and its rendered children.

    Subclasses override `render` to attach presentation output, and declare
    the block types they handle in `types`.
    """

    types: tuple[str, ...] = ()

    def __init__(self, block: Block, ctx: RenderContext, level: int = 0):
        self.block = block
        self.ctx = ctx
        self.level = level

    @property
    def options(self):
        return self.ctx.options

    def create_node(self, children: list[RenderedNode], output: Any = None) -> RenderedNode:
        return RenderedNode(
            block_id=self.block.id,
            type=self.block.type,
            level=self.level,
            children=children,
            block=self.block,
            output=output,
        )

    def render(self, children: list[RenderedNode]) -> RenderedNode:
        return self.create_node(children)


def wrap_section(header_id: str, children: list[RenderedNode], level: int) -> RenderedNode:
    return RenderedNode(block_id=header_id, type=SECTION_TYPE, level=level, children=children)


def _skip_or_raise(error: Exception, ctx: RenderContext) -> None:
    if ctx.strict:
        raise error
    logger.warning("%s; skipping", error)


def _render_children(block: Block, ctx: RenderContext, path: tuple[str, ...]) -> list[RenderedNode]:
    nodes: list[RenderedNode] = []
    for group in group_children(block.children, ctx.store):
        rendered = [
            node for node in (render_block(child_id, ctx, path) for child_id in group.ids)
            if node is not None
        ]
        if isinstance(group, SectionGroup):
            nodes.append(wrap_section(group.header_id, rendered, level=len(path)))
        else:
            nodes.extend(rendered)
    return nodes


def render_block(
    block_id: str,
    ctx: RenderContext,
    ancestry: tuple[str, ...] = (),
) -> RenderedNode | None:
    """
    Render a block and its subtree.

    Args:
        block_id: Block to render
        ctx: Context of the current render pass
        ancestry: Ids from the render root down to this block's parent

    Returns:
        The rendered node, or None if the block was skipped in lenient mode.

    Raises:
        MissingBlockError: block_id is not in the store (strict mode)
        RenderError: a renderer failed or the store is cyclic (strict mode)
        RenderCancelled: ctx.should_cancel() returned True
    """
    if ctx.should_cancel is not None and ctx.should_cancel():
        raise RenderCancelled(f"Render cancelled at block '{block_id}'")

    block = ctx.get(block_id)
    if block is None:
        _skip_or_raise(MissingBlockError(block_id, ancestry[-1] if ancestry else None), ctx)
        return None
    if block_id in ancestry:
        _skip_or_raise(RenderError(f"Block '{block_id}' is its own ancestor"), ctx)
        return None

    path = ancestry + (block_id,)
    children = _render_children(block, ctx, path) if block.children else []

    renderer_cls = RendererMeta.resolve(block.type, ctx.components)
    try:
        return renderer_cls(block, ctx, level=len(ancestry)).render(children)
    except RenderCancelled:
        raise
    except Exception as e:
        message = f"{renderer_cls.__name__} failed on block '{block_id}' ({block.type})"
        if ctx.strict:
            raise RenderError(f"{message}: {e}") from e
        logger.warning("%s; skipping", message, exc_info=True)
        return None
