"""Artifact rendering commands for the storefront CLI.

Reads templates from disk, renders them through the progressive artifact
renderer and writes each artifact to its own HTML file.
"""

import asyncio
import json
import time
from pathlib import Path
from typing import Any, Dict, Optional

import click

from storefront_mcp.cli.logging import cli_command
from storefront_mcp.cli.output import emit_error, emit_failure, emit_success
from storefront_mcp.config import ServerConfig
from storefront_mcp.core.artifacts import (
    ArtifactProgressiveRenderer,
    InvalidRenderOptionsError,
    estimate_artifact_count,
)
from storefront_mcp.core.responses import not_found_error

METADATA_FILENAME = "artifacts-metadata.json"


def _read_template(path: str) -> str:
    template_path = Path(path)
    if not template_path.is_file():
        emit_failure(
            not_found_error("Template", path, remediation="Check the template path.")
        )
    return template_path.read_text(encoding="utf-8")


def _read_data(path: Optional[str]) -> Dict[str, Any]:
    if not path:
        return {}
    data_path = Path(path)
    if not data_path.is_file():
        emit_failure(not_found_error("Data file", path, remediation="Check the --data path."))
    try:
        data = json.loads(data_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        emit_error(
            f"Invalid JSON in data file: {exc.msg}",
            code="INVALID_FORMAT",
            error_type="validation",
            remediation="The data file must contain a JSON object.",
            details={"path": path, "line": exc.lineno},
        )
    if not isinstance(data, dict):
        emit_error(
            "Data file must contain a JSON object",
            code="INVALID_FORMAT",
            error_type="validation",
            details={"path": path},
        )
    return data


def _renderer(ctx: click.Context) -> ArtifactProgressiveRenderer:
    config: ServerConfig = ctx.obj["config"]
    return ArtifactProgressiveRenderer(options=config.artifacts.to_render_options())


@click.group("render")
def render_group() -> None:
    """Template analysis and artifact rendering commands."""
    pass


@render_group.command("analyze")
@click.argument("template")
@click.pass_context
@cli_command("render-analyze")
def analyze_cmd(ctx: click.Context, template: str) -> None:
    """Report the complexity profile and split plan of TEMPLATE."""
    source = _read_template(template)
    renderer = _renderer(ctx)

    profile = renderer.analyze(source)
    plan = renderer.plan(source)
    emit_success(
        {
            "template": template,
            "profile": profile.to_dict(),
            "plan": plan.to_dict(),
            "estimated_artifact_count": estimate_artifact_count(
                profile, renderer.options
            ),
        }
    )


@render_group.command("artifacts")
@click.argument("template")
@click.option(
    "--data",
    "data_file",
    type=click.Path(),
    help="JSON file with template variables.",
)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False),
    default="artifacts",
    show_default=True,
    help="Directory receiving artifact-<n>.html files.",
)
@click.option("--max-size", type=int, default=None, help="Soft size ceiling per artifact.")
@click.option(
    "--split-threshold",
    type=int,
    default=None,
    help="Component count above which templates are split.",
)
@click.option(
    "--no-logical-division",
    is_flag=True,
    default=False,
    help="Always split by components or size.",
)
@click.option("--no-skeleton", is_flag=True, default=False, help="Disable skeleton placeholders.")
@click.option("--no-feedback", is_flag=True, default=False, help="Disable the progress widget.")
@click.pass_context
@cli_command("render-artifacts")
def artifacts_cmd(
    ctx: click.Context,
    template: str,
    data_file: Optional[str],
    output_dir: str,
    max_size: Optional[int],
    split_threshold: Optional[int],
    no_logical_division: bool,
    no_skeleton: bool,
    no_feedback: bool,
) -> None:
    """Render TEMPLATE into one or more HTML artifact files."""
    start_time = time.perf_counter()
    source = _read_template(template)
    data = _read_data(data_file)
    renderer = _renderer(ctx)

    overrides: Dict[str, Any] = {
        "artifact_max_size": max_size,
        "split_threshold": split_threshold,
    }
    if no_logical_division:
        overrides["use_logical_division"] = False
    if no_skeleton:
        overrides["skeleton_loading"] = False
    if no_feedback:
        overrides["feedback_enabled"] = False

    try:
        options = renderer.resolve_options(overrides)
    except InvalidRenderOptionsError as exc:
        emit_error(
            str(exc),
            code="VALIDATION_ERROR",
            error_type="validation",
            remediation="Adjust the option value.",
            details={"field": exc.field_name},
        )

    result = asyncio.run(renderer.render(source, data, options))

    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)
    files = []
    metadata = []
    for index, artifact in enumerate(result.artifacts, start=1):
        path = out / f"artifact-{index}.html"
        path.write_text(artifact.content, encoding="utf-8")
        files.append(str(path))
        metadata.append(
            {
                "file": path.name,
                "title": artifact.title,
                "type": artifact.type,
                "size": artifact.size,
            }
        )
    (out / METADATA_FILENAME).write_text(
        json.dumps(metadata, indent=2, ensure_ascii=False), encoding="utf-8"
    )

    warnings = []
    if result.fallback_used:
        warnings.append(
            "Progressive rendering failed; wrote a plain preview artifact instead"
        )
    summary = result.to_dict(include_content=False)
    summary.update({"output_dir": str(out), "files": files})
    emit_success(
        summary,
        warnings=warnings or None,
        telemetry={"duration_ms": round((time.perf_counter() - start_time) * 1000, 2)},
    )
