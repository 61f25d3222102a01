"""Unified artifact tool with action routing."""

from __future__ import annotations

import inspect
import logging
import time
from dataclasses import asdict
from typing import Any, Dict, Mapping, Optional

from mcp.server.fastmcp import FastMCP

from storefront_mcp.config import ServerConfig
from storefront_mcp.core.artifacts import (
    ArtifactProgressiveRenderer,
    InvalidRenderOptionsError,
    RenderOptions,
    estimate_artifact_count,
)
from storefront_mcp.core.context import get_correlation_id, request_context
from storefront_mcp.core.naming import canonical_tool
from storefront_mcp.core.responses import (
    ErrorCode,
    ErrorType,
    error_response,
    internal_error,
    sanitize_error_message,
    success_response,
    validation_error,
)
from storefront_mcp.tools.unified.router import (
    ActionDefinition,
    ActionRouter,
    ActionRouterError,
)

logger = logging.getLogger(__name__)


_ACTION_SUMMARY = {
    "analyze": "Report the complexity profile of a template",
    "plan": "Show how a template would be split into artifacts",
    "render": "Render a template into one or more HTML artifacts",
}


def _validate_template(template: Any) -> Optional[dict]:
    if template is None:
        return asdict(
            error_response(
                "template is required",
                error_code=ErrorCode.MISSING_REQUIRED,
                error_type=ErrorType.VALIDATION,
                remediation="Provide the template markup in the template parameter.",
                details={"field": "template"},
            )
        )
    if not isinstance(template, str):
        return asdict(
            validation_error(
                "template must be a string",
                field="template",
                remediation="Pass the template markup as text.",
            )
        )
    return None


def _resolve_options(
    renderer: ArtifactProgressiveRenderer, options: Any
) -> tuple[Optional[RenderOptions], Optional[dict]]:
    if options is not None and not isinstance(options, Mapping):
        return None, asdict(
            validation_error(
                "options must be an object",
                field="options",
                remediation="Pass render options as a JSON object.",
            )
        )
    try:
        return renderer.resolve_options(options), None
    except InvalidRenderOptionsError as exc:
        field = f"options.{exc.field_name}" if exc.field_name else "options"
        return None, asdict(
            validation_error(str(exc), field=field, remediation="Adjust the option value.")
        )


def _handle_analyze(
    *,
    renderer: ArtifactProgressiveRenderer,
    template: Any = None,
    **_: Any,
) -> dict:
    if (error := _validate_template(template)) is not None:
        return error
    profile = renderer.analyze(template)
    return asdict(success_response(profile=profile.to_dict()))


def _handle_plan(
    *,
    renderer: ArtifactProgressiveRenderer,
    template: Any = None,
    options: Any = None,
    **_: Any,
) -> dict:
    if (error := _validate_template(template)) is not None:
        return error
    resolved, error = _resolve_options(renderer, options)
    if error is not None:
        return error

    profile = renderer.analyze(template)
    plan = renderer.plan(template, resolved)
    return asdict(
        success_response(
            profile=profile.to_dict(),
            plan=plan.to_dict(),
            estimated_artifact_count=estimate_artifact_count(profile, resolved),
            options=resolved.to_dict(),
        )
    )


async def _handle_render(
    *,
    renderer: ArtifactProgressiveRenderer,
    template: Any = None,
    data: Any = None,
    options: Any = None,
    include_content: bool = True,
    **_: Any,
) -> dict:
    if (error := _validate_template(template)) is not None:
        return error
    if data is not None and not isinstance(data, Mapping):
        return asdict(
            validation_error(
                "data must be an object",
                field="data",
                remediation="Pass template variables as a JSON object.",
            )
        )
    resolved, error = _resolve_options(renderer, options)
    if error is not None:
        return error

    start = time.perf_counter()
    result = await renderer.render(template, data or {}, resolved)
    duration_ms = round((time.perf_counter() - start) * 1000, 2)

    warnings = []
    if result.fallback_used:
        warnings.append(
            "Progressive rendering failed; returned a plain preview artifact instead"
        )
    return asdict(
        success_response(
            data=result.to_dict(include_content=include_content),
            warnings=warnings or None,
            telemetry={"duration_ms": duration_ms},
        )
    )


def _build_router() -> ActionRouter:
    definitions = [
        ActionDefinition(
            name="analyze",
            handler=_handle_analyze,
            summary=_ACTION_SUMMARY["analyze"],
        ),
        ActionDefinition(
            name="plan",
            handler=_handle_plan,
            summary=_ACTION_SUMMARY["plan"],
            aliases=("split-plan", "split_plan"),
        ),
        ActionDefinition(
            name="render",
            handler=_handle_render,
            summary=_ACTION_SUMMARY["render"],
            aliases=("render-to-artifacts", "render_to_artifacts"),
        ),
    ]
    return ActionRouter(tool_name="artifact", actions=definitions)


_ARTIFACT_ROUTER = _build_router()


async def _dispatch_artifact_action(
    action: str,
    *,
    renderer: ArtifactProgressiveRenderer,
    payload: Dict[str, Any],
) -> dict:
    try:
        result = _ARTIFACT_ROUTER.dispatch(action=action, renderer=renderer, **payload)
        if inspect.isawaitable(result):
            result = await result
        return result
    except ActionRouterError as exc:
        allowed = ", ".join(exc.allowed_actions)
        return asdict(
            error_response(
                f"Unsupported artifact action '{action}'. Allowed actions: {allowed}",
                error_code=ErrorCode.VALIDATION_ERROR,
                error_type=ErrorType.VALIDATION,
                remediation=f"Use one of: {allowed}",
                details={"action": action, "allowed_actions": exc.allowed_actions},
            )
        )
    except Exception as exc:
        logger.exception("Error during artifact action %s", action)
        return asdict(
            internal_error(
                sanitize_error_message(exc, context=f"artifact {action}"),
                request_id=get_correlation_id(),
            )
        )


def register_unified_artifact_tool(mcp: FastMCP, config: ServerConfig) -> None:
    """Register the consolidated artifact tool."""

    renderer = ArtifactProgressiveRenderer(options=config.artifacts.to_render_options())

    @canonical_tool(
        mcp,
        canonical_name="artifact",
    )
    async def artifact(
        action: str,
        template: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None,
        options: Optional[Dict[str, Any]] = None,
        include_content: bool = True,
    ) -> dict:
        """Analyze and render HTML templates as chat artifacts via `action`.

        Args:
            action: One of "analyze", "plan", or "render".
            template: Template markup (Jinja2 syntax).
            data: Variables available to the template when rendering.
            options: Render option overrides such as artifact_max_size,
                split_threshold, priority_levels, skeleton_loading,
                feedback_enabled or use_logical_division.
            include_content: When action is "render", include artifact markup.
        """

        payload = {
            "template": template,
            "data": data,
            "options": options,
            "include_content": include_content,
        }
        async with request_context():
            return await _dispatch_artifact_action(
                action=action, renderer=renderer, payload=payload
            )

    logger.debug("Registered unified artifact tool")


__all__ = [
    "register_unified_artifact_tool",
]
