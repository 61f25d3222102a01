"""
Artifact assembler.

Executes a split plan: builds a self-contained HTML shell for every chunk,
renders each shell through the progressive renderer in document order and
wraps the results as artifacts.
"""

import logging
import math
from typing import Any, List, Mapping, Optional, Sequence

from storefront_mcp.core.artifacts.extraction import (
    extract_components,
    extract_head,
    extract_sections,
    strip_head,
    wrap_content,
)
from storefront_mcp.core.artifacts.models import (
    ARTIFACT_TITLE,
    Artifact,
    AutomaticSplit,
    LogicalSplit,
    NoSplit,
    RenderOptions,
    SplitPlan,
)
from storefront_mcp.core.artifacts.navigation import build_navigation, extract_styles
from storefront_mcp.core.artifacts.progressive import ProgressiveRenderer

logger = logging.getLogger(__name__)

BOOTSTRAP_CSS_URL = "https://cdn.jsdelivr.net/npm/bootstrap@5.3.0/dist/css/bootstrap.min.css"
BOOTSTRAP_JS_URL = "https://cdn.jsdelivr.net/npm/bootstrap@5.3.0/dist/js/bootstrap.bundle.min.js"

LOGICAL_SHELL = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Parte {number} - {label}</title>
  <link href="{css_url}" rel="stylesheet">
  <style>
{styles}
  </style>
</head>
<body>
{navigation}
<div class="container mt-4 mb-4">
  <div class="alert alert-info">
    Visualizando parte {number} de {total}: <strong>{label}</strong>
  </div>
</div>
{content}
<script src="{js_url}"></script>
</body>
</html>"""

AUTOMATIC_SHELL = """<!DOCTYPE html>
<html lang="en">
{head}
<style>
{styles}
</style>
<body>
{navigation}
<div class="container mt-4 mb-4">
  <div class="alert alert-info">
    {banner}
  </div>
</div>
{content}
</body>
</html>"""


def create_artifact(
    rendered_html: str, options: RenderOptions, index: int, total: int
) -> Artifact:
    """Wrap rendered markup; multi-part output gets a "(Parte N de M)" suffix."""
    if total > 1:
        title = f"{ARTIFACT_TITLE} (Parte {index + 1} de {total})"
    else:
        title = ARTIFACT_TITLE
    return Artifact(type=options.artifact_type, title=title, content=rendered_html)


def chunk_body(body: str, target_count: int) -> List[str]:
    """
    Split ``body`` into exactly ``target_count`` windows of
    ``ceil(len / target_count)`` characters; trailing windows may be empty.
    """
    count = max(target_count, 1)
    size = math.ceil(len(body) / count)
    return [body[i * size:(i + 1) * size] for i in range(count)]


def group_components(components: Sequence[str], target_count: int) -> List[List[str]]:
    """Distribute components ``ceil(total / target_count)`` per group, in order."""
    per_group = math.ceil(len(components) / max(target_count, 1))
    if per_group == 0:
        return []
    return [
        list(components[start:start + per_group])
        for start in range(0, len(components), per_group)
    ]


class ArtifactAssembler:
    """
    Turns a split plan into rendered artifacts.

    Chunks are rendered one after another; the first failure propagates and
    no partial list is returned.
    """

    def __init__(self, renderer: ProgressiveRenderer):
        self.renderer = renderer

    async def assemble(
        self,
        plan: SplitPlan,
        template_source: str,
        data: Optional[Mapping[str, Any]],
        options: RenderOptions,
    ) -> List[Artifact]:
        """
        Render ``template_source`` according to ``plan``.

        Raises:
            ArtifactRenderError: If any chunk fails to render
        """
        if isinstance(plan, NoSplit):
            rendered = await self.renderer.render(template_source, data, options)
            return [create_artifact(rendered, options, 0, 1)]
        if isinstance(plan, LogicalSplit):
            return await self._assemble_logical(plan, template_source, data, options)
        if isinstance(plan, AutomaticSplit):
            return await self._assemble_automatic(plan, template_source, data, options)
        raise TypeError(f"Unsupported split plan: {plan!r}")

    async def _assemble_logical(
        self,
        plan: LogicalSplit,
        template_source: str,
        data: Optional[Mapping[str, Any]],
        options: RenderOptions,
    ) -> List[Artifact]:
        sections = extract_sections(template_source, plan.points)
        skipped = [p for p in plan.points if p not in {s for s, _ in sections}]
        if skipped:
            logger.info("Skipping division points without markup: %s", skipped)
        if not sections:
            # Regions matched only inside comments or scripts
            return await self.assemble(NoSplit(), template_source, data, options)

        styles = extract_styles(template_source)
        total = len(sections)
        artifacts = []
        for index, (point, markup) in enumerate(sections):
            label = point.capitalize()
            shell = LOGICAL_SHELL.format(
                number=index + 1,
                total=total,
                label=label,
                css_url=BOOTSTRAP_CSS_URL,
                js_url=BOOTSTRAP_JS_URL,
                styles=styles,
                navigation=build_navigation(index, total),
                content=wrap_content(markup),
            )
            rendered = await self.renderer.render(shell, data, options)
            artifacts.append(create_artifact(rendered, options, index, total))
        return artifacts

    async def _assemble_automatic(
        self,
        plan: AutomaticSplit,
        template_source: str,
        data: Optional[Mapping[str, Any]],
        options: RenderOptions,
    ) -> List[Artifact]:
        head = extract_head(template_source)
        styles = extract_styles(template_source)
        components = extract_components(template_source)

        if len(components) < plan.target_count:
            logger.info(
                "Found %d components for %d parts, chunking by size",
                len(components),
                plan.target_count,
            )
            chunks = chunk_body(strip_head(template_source), plan.target_count)
            total = len(chunks)
            banners = [
                f"Visualizando parte {i + 1} de {total} (divisão automática por tamanho)"
                for i in range(total)
            ]
        else:
            groups = group_components(components, plan.target_count)
            total = len(groups)
            chunks, banners = [], []
            first = 1
            for i, group in enumerate(groups):
                last = first + len(group) - 1
                chunks.append("\n".join(group))
                banners.append(
                    f"Visualizando parte {i + 1} de {total}: Componentes {first}-{last}"
                )
                first = last + 1

        artifacts = []
        for index, (chunk, banner) in enumerate(zip(chunks, banners)):
            shell = AUTOMATIC_SHELL.format(
                head=head,
                styles=styles,
                navigation=build_navigation(index, total),
                banner=banner,
                content=wrap_content(chunk),
            )
            rendered = await self.renderer.render(shell, data, options)
            artifacts.append(create_artifact(rendered, options, index, total))
        return artifacts
