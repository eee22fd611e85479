from __future__ import annotations
import os
from contextvars import ContextVar, Token
from typing import Any, Callable, Mapping

from pydantic import BaseModel, ConfigDict, Field

from .block import Block, BlockStore


# Context variable for the render pass currently in progress
_context_var: ContextVar["RenderContext | None"] = ContextVar("render_context", default=None)


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class RenderOptions(BaseModel):
    """
    Page-level rendering options.

    Only `strict` changes how the tree is walked. The rest are handed to the
    block renderers untouched.
    """
    model_config = ConfigDict(frozen=True)

    strict: bool = False

    full_page: bool = True
    dark_mode: bool = False
    preview_images: bool = False
    force_custom_images: bool = False
    show_collection_view_dropdown: bool = True
    link_table_title_properties: bool = True
    show_table_of_contents: bool = False
    min_table_of_contents_items: int = 3

    default_page_icon: str | None = None
    default_page_cover: str | None = None
    default_page_cover_position: float = 0.5

    root_page_id: str | None = None
    root_domain: str | None = None

    @classmethod
    def from_env(cls, **overrides: Any) -> "RenderOptions":
        """Build options from PAGEVIEW_* environment variables."""
        production = os.getenv("PAGEVIEW_ENV", "development") == "production"
        values: dict[str, Any] = {
            "strict": _env_flag("PAGEVIEW_STRICT", production),
            "dark_mode": _env_flag("PAGEVIEW_DARK_MODE", False),
            "full_page": _env_flag("PAGEVIEW_FULL_PAGE", True),
            "root_domain": os.getenv("PAGEVIEW_ROOT_DOMAIN"),
        }
        values.update(overrides)
        return cls(**values)


def default_map_page_url(page_id: str) -> str:
    return "/" + page_id.replace("-", "")


def default_map_image_url(url: str, block: Block) -> str:
    return url


class ContextError(Exception):
    pass


class RenderContext(BaseModel):
    """
    Read-only configuration shared by every step of one render pass.

    Usage:
        with RenderContext(store=normalized, root_id="page") as ctx:
            node = render_block("page", ctx)
    """
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    store: BlockStore
    root_id: str
    options: RenderOptions = Field(default_factory=RenderOptions)
    components: dict[str, type] = Field(default_factory=dict)

    map_page_url: Callable[[str], str] = default_map_page_url
    map_image_url: Callable[[str, Block], str] = default_map_image_url
    search: Callable[..., Any] | None = None
    should_cancel: Callable[[], bool] | None = None

    _token: Token | None = None

    @property
    def strict(self) -> bool:
        return self.options.strict

    @property
    def root(self) -> Block:
        return self.store[self.root_id]

    def get(self, block_id: str) -> Block | None:
        return self.store.get(block_id)

    @classmethod
    def current(cls) -> "RenderContext | None":
        """Get the active render context, or None outside a render pass."""
        return _context_var.get()

    @classmethod
    def require(cls) -> "RenderContext":
        ctx = _context_var.get()
        if ctx is None:
            raise ContextError("No render context is active")
        return ctx

    def __enter__(self) -> "RenderContext":
        if self._token is not None:
            raise ContextError("RenderContext is already active")
        self._token = _context_var.set(self)
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        if self._token is not None:
            _context_var.reset(self._token)
            self._token = None


def build_context(
    store: Mapping[str, Block],
    root_id: str,
    options: RenderOptions | None = None,
    components: Mapping[str, type] | None = None,
    **hooks: Any,
) -> RenderContext:
    """
    Create a RenderContext, dropping hooks that were passed as None.

    Without explicit options the PAGEVIEW_* environment decides, so a
    production process renders strictly.
    """
    hooks = {name: hook for name, hook in hooks.items() if hook is not None}
    return RenderContext(
        store=dict(store),
        root_id=root_id,
        options=options or RenderOptions.from_env(),
        components=dict(components or {}),
        **hooks,
    )
