"""Core rendering and infrastructure modules for storefront-mcp."""

from storefront_mcp.core.artifacts import (
    Artifact,
    ArtifactProgressiveRenderer,
    RenderOptions,
    TemplateComplexityProfile,
    analyze_template,
    decide_split,
)

__all__ = [
    "Artifact",
    "ArtifactProgressiveRenderer",
    "RenderOptions",
    "TemplateComplexityProfile",
    "analyze_template",
    "decide_split",
]
