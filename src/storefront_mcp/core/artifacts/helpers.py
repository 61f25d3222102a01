"""
Template helper registry for progressive rendering.

Helpers are collected in an immutable registry that is built once at startup
and handed to the renderer, which creates a single Jinja2 environment from
it. Per-request settings reach the helpers through the render context
(``OPTIONS_CONTEXT_KEY``), never through shared state.
"""

import json
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional

from jinja2 import Environment, pass_context
from jinja2.runtime import Context

from storefront_mcp.core.artifacts.models import RenderOptions

# Render context key carrying the RenderOptions of the current call
OPTIONS_CONTEXT_KEY = "_progressive_options"


def resolve_priority(level: Any, priority_levels: int) -> int:
    """Clamp a requested priority; out-of-range values become the middle tier."""
    try:
        value = int(level)
    except (TypeError, ValueError):
        value = 0
    if value < 1 or value > priority_levels:
        return math.ceil(priority_levels / 2)
    return value


def component_type(content: str) -> str:
    """Guess the placeholder shape for a chunk of markup."""
    if "<img" in content:
        return "image"
    if "<table" in content:
        return "table"
    if '<div class="card"' in content or "card-" in content:
        return "card"
    return "text"


_SKELETON_BODIES = {
    "text": '<div class="skeleton-text"></div>' * 3,
    "image": '<div class="skeleton-image"></div>',
    "card": (
        '<div class="skeleton-card">'
        '<div class="skeleton-card-header"></div>'
        '<div class="skeleton-card-body">'
        '<div class="skeleton-text"></div><div class="skeleton-text"></div>'
        "</div></div>"
    ),
    "table": (
        '<div class="skeleton-table">'
        '<div class="skeleton-table-header"></div>'
        '<div class="skeleton-table-row"></div>'
        '<div class="skeleton-table-row"></div>'
        '<div class="skeleton-table-row"></div>'
        "</div>"
    ),
}


def skeleton_markup(content: str) -> str:
    """Placeholder shown while a deferred component is still hidden."""
    body = _SKELETON_BODIES.get(
        component_type(content), '<div class="skeleton-generic"></div>'
    )
    return f'<div class="skeleton-placeholder">{body}</div>'


# Class of the wrapper emitted around every priority block
PRIORITY_REGION_CLASS = "progressive-render-component"


@pass_context
def render_priority(
    context: Context, level: Any, caller: Optional[Callable[[], str]] = None
) -> str:
    """Call-block helper deferring its body to a visual-priority tier."""
    options = context.get(OPTIONS_CONTEXT_KEY) or RenderOptions()
    tier = resolve_priority(level, options.priority_levels)
    content = caller() if caller is not None else ""
    placeholder = skeleton_markup(content) if options.skeleton_loading else ""
    return (
        f'<div class="{PRIORITY_REGION_CLASS}" data-priority="{tier}" '
        f'data-render-status="pending">{placeholder}'
        f'<div class="component-content" style="display: none;">{content}</div>'
        "</div>"
    )


def skeleton(kind: str, caller: Optional[Callable[[], str]] = None) -> str:
    """Call-block helper hiding its body behind a typed skeleton."""
    content = caller() if caller is not None else ""
    return (
        f'<div class="skeleton-wrapper" data-skeleton-type="{kind}">'
        f'<div class="skeleton-placeholder" data-component-type="{kind}"></div>'
        f'<div class="skeleton-content" style="display: none;">{content}</div>'
        "</div>"
    )


def artifact_boundary(
    artifact_id: Any, caller: Optional[Callable[[], str]] = None
) -> str:
    """Call-block helper marking a region as a candidate artifact boundary."""
    content = caller() if caller is not None else ""
    return (
        f'<div class="artifact-boundary" data-artifact-id="{artifact_id}">'
        f"{content}</div>"
    )


def artifact_navigation(total: int, current: int) -> str:
    """Plain list navigation between ``total`` parts, ``current`` being 0-based."""
    items = []
    for i in range(int(total)):
        active = " active" if i == int(current) else ""
        items.append(
            f'<li class="artifact-navigation-item{active}">'
            f'<a href="#" data-artifact-index="{i}" class="artifact-navigation-link">'
            f"Parte {i + 1}</a></li>"
        )
    return (
        '<div class="artifact-navigation"><ul class="artifact-navigation-list">'
        + "".join(items)
        + "</ul></div>"
    )


def pretty_json(value: Any, indent: int = 2) -> str:
    return json.dumps(value, indent=indent, ensure_ascii=False, default=str)


@dataclass(frozen=True)
class TemplateHelperRegistry:
    """
    Read-only set of template globals and filters.

    Attributes:
        globals: Callables exposed as template globals
        filters: Callables exposed as template filters
    """

    globals: Mapping[str, Callable[..., Any]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    filters: Mapping[str, Callable[..., Any]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        # Freeze copies so later changes to the caller's dicts cannot leak in
        object.__setattr__(self, "globals", MappingProxyType(dict(self.globals)))
        object.__setattr__(self, "filters", MappingProxyType(dict(self.filters)))

    def extend(
        self,
        *,
        globals: Optional[Dict[str, Callable[..., Any]]] = None,
        filters: Optional[Dict[str, Callable[..., Any]]] = None,
    ) -> "TemplateHelperRegistry":
        """Return a new registry with extra helpers; this one is left untouched."""
        return TemplateHelperRegistry(
            globals={**self.globals, **(globals or {})},
            filters={**self.filters, **(filters or {})},
        )

    def create_environment(self) -> Environment:
        """Build a Jinja2 environment exposing the registered helpers."""
        env = Environment(autoescape=False, keep_trailing_newline=True)
        env.globals.update(self.globals)
        env.filters.update(self.filters)
        return env


def build_default_registry() -> TemplateHelperRegistry:
    return TemplateHelperRegistry(
        globals={
            "render_priority": render_priority,
            "skeleton": skeleton,
            "artifact_boundary": artifact_boundary,
            "artifact_navigation": artifact_navigation,
        },
        filters={"pretty_json": pretty_json},
    )


_default_registry: Optional[TemplateHelperRegistry] = None


def get_default_registry() -> TemplateHelperRegistry:
    """Process-wide registry, created on first use."""
    global _default_registry
    if _default_registry is None:
        _default_registry = build_default_registry()
    return _default_registry
