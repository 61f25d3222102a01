"""
Split decision engine.

Turns a complexity profile plus render options into a split plan: keep the
template whole, split it along its header/main/footer sections, or divide
it automatically by components or size.
"""

import logging
import math

from storefront_mcp.core.artifacts.models import (
    AutomaticSplit,
    LogicalSplit,
    NoSplit,
    RenderOptions,
    SplitPlan,
    TemplateComplexityProfile,
)

logger = logging.getLogger(__name__)


def should_split(profile: TemplateComplexityProfile, options: RenderOptions) -> bool:
    """Whether the template is too large or too component-heavy for one artifact."""
    return (
        profile.component_count > options.split_threshold
        or profile.size > options.split_size_limit
    )


def estimate_artifact_count(
    profile: TemplateComplexityProfile, options: RenderOptions
) -> int:
    """Number of artifacts needed to keep each one under the size limit (min 1)."""
    return max(1, math.ceil(profile.size / options.split_size_limit))


def decide_split(
    profile: TemplateComplexityProfile,
    options: RenderOptions,
) -> SplitPlan:
    """
    Choose how a template is divided into artifacts.

    Rules, evaluated in order:
    1. No split unless the component count exceeds ``split_threshold`` or
       the size exceeds ``artifact_max_size * 0.8``.
    2. Logical split when the template has between 1 and
       ``estimate_artifact_count`` division points.
    3. Automatic split into ``estimate_artifact_count`` artifacts otherwise.

    Args:
        profile: Complexity profile of the template
        options: Render options carrying the thresholds

    Returns:
        NoSplit, LogicalSplit or AutomaticSplit
    """
    if not should_split(profile, options):
        return NoSplit()

    estimated = estimate_artifact_count(profile, options)
    points = profile.division_points

    if options.use_logical_division and 0 < len(points) <= estimated:
        logger.debug(
            "Logical split selected: points=%s estimated=%d", list(points), estimated
        )
        return LogicalSplit(points=tuple(points))

    logger.debug(
        "Automatic split selected: target=%d division_points=%d",
        estimated,
        len(points),
    )
    return AutomaticSplit(target_count=estimated)
