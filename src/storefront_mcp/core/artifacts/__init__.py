"""Progressive rendering of large HTML templates into chat artifacts."""

from storefront_mcp.core.artifacts.analysis import analyze_template
from storefront_mcp.core.artifacts.assembler import ArtifactAssembler, create_artifact
from storefront_mcp.core.artifacts.extraction import extract_artifact_body
from storefront_mcp.core.artifacts.helpers import (
    TemplateHelperRegistry,
    build_default_registry,
    get_default_registry,
)
from storefront_mcp.core.artifacts.models import (
    ARTIFACT_TITLE,
    ARTIFACT_TYPES,
    Artifact,
    ArtifactError,
    ArtifactRenderError,
    AutomaticSplit,
    InvalidRenderOptionsError,
    LogicalSplit,
    NoSplit,
    RenderOptions,
    SplitPlan,
    SplitStrategy,
    TemplateComplexityProfile,
)
from storefront_mcp.core.artifacts.navigation import build_navigation, extract_styles
from storefront_mcp.core.artifacts.planning import decide_split, estimate_artifact_count
from storefront_mcp.core.artifacts.progressive import ProgressiveRenderer
from storefront_mcp.core.artifacts.renderer import (
    ArtifactProgressiveRenderer,
    ArtifactRenderResult,
)
from storefront_mcp.core.artifacts.visualizer import ArtifactVisualizer

__all__ = [
    "ARTIFACT_TITLE",
    "ARTIFACT_TYPES",
    "Artifact",
    "ArtifactAssembler",
    "ArtifactError",
    "ArtifactProgressiveRenderer",
    "ArtifactRenderError",
    "ArtifactRenderResult",
    "ArtifactVisualizer",
    "AutomaticSplit",
    "InvalidRenderOptionsError",
    "LogicalSplit",
    "NoSplit",
    "ProgressiveRenderer",
    "RenderOptions",
    "SplitPlan",
    "SplitStrategy",
    "TemplateComplexityProfile",
    "TemplateHelperRegistry",
    "analyze_template",
    "build_default_registry",
    "build_navigation",
    "create_artifact",
    "decide_split",
    "estimate_artifact_count",
    "extract_artifact_body",
    "extract_styles",
    "get_default_registry",
]
