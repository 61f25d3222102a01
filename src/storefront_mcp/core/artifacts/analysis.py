"""
Template complexity analysis.

Scans raw template markup with structural patterns (not a full parser) and
reports the counts, detected regions and weighted score the split decision
is based on. False positives on malformed HTML are accepted; the analyzer
never raises.
"""

import re
from typing import List

from storefront_mcp.core.artifacts.models import (
    DIVISION_FOOTER,
    DIVISION_HEADER,
    DIVISION_MAIN,
    TemplateComplexityProfile,
)


# Weights applied to each construct when computing the complexity score
COMPLEXITY_WEIGHTS = {
    "component": 0.1,
    "image": 0.2,
    "table": 0.5,
    "form": 0.3,
    "script": 0.3,
}

_HEADER_PATTERN = re.compile(r"<header|<nav", re.IGNORECASE)
_MAIN_PATTERN = re.compile(r"<main|<section|<article", re.IGNORECASE)
_FOOTER_PATTERN = re.compile(r"<footer", re.IGNORECASE)


def analyze_template(template_source: str) -> TemplateComplexityProfile:
    """
    Build the complexity profile of a template.

    Args:
        template_source: Raw template markup

    Returns:
        TemplateComplexityProfile for the template
    """
    source = template_source or ""

    # Opening tags are counted case-sensitively, as written in templates
    component_count = source.count("<div")
    image_count = source.count("<img")
    table_count = source.count("<table")
    form_count = source.count("<form")
    script_count = source.count("<script")

    has_header = bool(_HEADER_PATTERN.search(source))
    has_main_content = bool(_MAIN_PATTERN.search(source))
    has_footer = bool(_FOOTER_PATTERN.search(source))

    score = (
        component_count * COMPLEXITY_WEIGHTS["component"]
        + image_count * COMPLEXITY_WEIGHTS["image"]
        + table_count * COMPLEXITY_WEIGHTS["table"]
        + form_count * COMPLEXITY_WEIGHTS["form"]
        + script_count * COMPLEXITY_WEIGHTS["script"]
    )

    division_points: List[str] = []
    if has_header:
        division_points.append(DIVISION_HEADER)
    if has_main_content:
        division_points.append(DIVISION_MAIN)
    if has_footer:
        division_points.append(DIVISION_FOOTER)

    return TemplateComplexityProfile(
        component_count=component_count,
        image_count=image_count,
        table_count=table_count,
        form_count=form_count,
        script_count=script_count,
        has_header=has_header,
        has_footer=has_footer,
        has_main_content=has_main_content,
        complexity_score=_round_half_up(score),
        division_points=tuple(division_points),
        size=len(source),
    )


def _round_half_up(value: float) -> int:
    # round() uses banker's rounding; scores round .5 upwards
    return int(value + 0.5)
