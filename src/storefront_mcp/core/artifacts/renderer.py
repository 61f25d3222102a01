"""
Entry point for rendering templates into chat artifacts.

Ties analysis, split planning and assembly together, and guarantees callers
always get at least one artifact: any failure along the primary path is
logged and answered with a single plain preview artifact.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from storefront_mcp.core.artifacts.analysis import analyze_template
from storefront_mcp.core.artifacts.assembler import ArtifactAssembler
from storefront_mcp.core.artifacts.helpers import (
    TemplateHelperRegistry,
    get_default_registry,
)
from storefront_mcp.core.artifacts.models import (
    Artifact,
    ArtifactRenderError,
    NoSplit,
    RenderOptions,
    SplitPlan,
    TemplateComplexityProfile,
)
from storefront_mcp.core.artifacts.planning import decide_split
from storefront_mcp.core.artifacts.progressive import ProgressiveRenderer
from storefront_mcp.core.artifacts.visualizer import ArtifactVisualizer

logger = logging.getLogger(__name__)


@dataclass
class ArtifactRenderResult:
    """Outcome of one render call, with the analysis that drove it."""

    artifacts: List[Artifact]
    profile: Optional[TemplateComplexityProfile]
    plan: Optional[SplitPlan]
    fallback_used: bool = False
    duration_ms: float = 0.0

    def to_dict(self, include_content: bool = True) -> Dict[str, Any]:
        artifacts = []
        for artifact in self.artifacts:
            item = artifact.to_dict() if include_content else {
                "type": artifact.type,
                "title": artifact.title,
            }
            item["size"] = artifact.size
            artifacts.append(item)
        return {
            "artifacts": artifacts,
            "count": len(self.artifacts),
            "strategy": self.plan.strategy.value if self.plan else None,
            "profile": self.profile.to_dict() if self.profile else None,
            "fallback_used": self.fallback_used,
        }


class ArtifactProgressiveRenderer:
    """
    Renders templates into one or more self-contained HTML artifacts.

    Collaborators are injected so the shared helper registry is built once
    per process and reused by every call.
    """

    def __init__(
        self,
        options: Optional[RenderOptions] = None,
        registry: Optional[TemplateHelperRegistry] = None,
        progressive_renderer: Optional[ProgressiveRenderer] = None,
        visualizer: Optional[ArtifactVisualizer] = None,
    ):
        self.options = options or RenderOptions()
        registry = registry or get_default_registry()
        self.progressive_renderer = progressive_renderer or ProgressiveRenderer(
            registry, self.options
        )
        self.assembler = ArtifactAssembler(self.progressive_renderer)
        self.visualizer = visualizer or ArtifactVisualizer(registry)

    def resolve_options(
        self, overrides: Optional[Mapping[str, Any]] = None
    ) -> RenderOptions:
        """
        Apply per-call overrides to the renderer defaults.

        Raises:
            InvalidRenderOptionsError: If an override is out of range
        """
        if isinstance(overrides, RenderOptions):
            overrides.validate()
            return overrides
        return self.options.merged(overrides)

    def analyze(self, template_source: str) -> TemplateComplexityProfile:
        return analyze_template(template_source)

    def plan(
        self,
        template_source: str,
        options: Optional[Mapping[str, Any]] = None,
    ) -> SplitPlan:
        return decide_split(analyze_template(template_source), self.resolve_options(options))

    async def render(
        self,
        template_source: str,
        data: Optional[Mapping[str, Any]] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> ArtifactRenderResult:
        """
        Render a template and report how it was split.

        Args:
            template_source: Template markup
            data: Template variables
            options: RenderOptions or a mapping of overrides

        Returns:
            ArtifactRenderResult; ``fallback_used`` is set when the plain
            preview replaced the progressive output
        """
        start = time.perf_counter()
        profile: Optional[TemplateComplexityProfile] = None
        plan: Optional[SplitPlan] = None
        logger.info("Rendering template to artifacts", extra={"size": len(template_source or "")})

        try:
            resolved = self.resolve_options(options)
            profile = analyze_template(template_source)
            logger.debug("Template complexity", extra={"profile": profile.to_dict()})
            plan = decide_split(profile, resolved)
            artifacts = await self.assembler.assemble(plan, template_source, data, resolved)
            if not artifacts:
                raise ArtifactRenderError("Split plan produced no artifacts")
            fallback_used = False
            if isinstance(plan, NoSplit):
                logger.info("Template rendered as a single artifact")
            else:
                logger.info(
                    "Template split into %d artifacts", len(artifacts),
                    extra={"strategy": plan.strategy.value},
                )
        except Exception as exc:
            logger.error(
                "Progressive rendering failed, using plain preview: %s",
                exc,
                extra={"error_type": type(exc).__name__},
            )
            artifacts = [await self.visualizer.create_html_artifact(template_source, data)]
            fallback_used = True

        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        logger.info("Artifact rendering finished", extra={"duration_ms": duration_ms})
        return ArtifactRenderResult(
            artifacts=artifacts,
            profile=profile,
            plan=plan,
            fallback_used=fallback_used,
            duration_ms=duration_ms,
        )

    async def render_to_artifacts(
        self,
        template_source: str,
        data: Optional[Mapping[str, Any]] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> List[Artifact]:
        """Render a template into artifacts, falling back to one plain preview."""
        result = await self.render(template_source, data, options)
        return result.artifacts
