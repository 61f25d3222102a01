"""
Tolerant extraction of template regions.

Sections and components are located with BeautifulSoup's ``html.parser``
backend, which accepts malformed markup; anything that cannot be found is
reported as absent rather than raising. The ``<head>`` block is handled with
a pattern so the body keeps its exact character offsets for byte chunking.
"""

import logging
import re
from typing import List, Optional, Tuple

from bs4 import BeautifulSoup, Tag

from storefront_mcp.core.artifacts.models import (
    DIVISION_FOOTER,
    DIVISION_HEADER,
    DIVISION_MAIN,
)

logger = logging.getLogger(__name__)

# Markers around each chunk's own content inside an artifact shell
CONTENT_START_MARKER = "<!-- artifact-content:start -->"
CONTENT_END_MARKER = "<!-- artifact-content:end -->"

DEFAULT_HEAD = '<head><meta charset="UTF-8"></head>'

# Candidate tags per division point, first match wins
SECTION_TAGS = {
    DIVISION_HEADER: ("header", "nav"),
    DIVISION_MAIN: ("main", "section", "article"),
    DIVISION_FOOTER: ("footer",),
}

COMPONENT_CLASS_PATTERN = re.compile(r"container|section|row|col|card|component", re.IGNORECASE)

# ``<head`` must not match ``<header``
_HEAD_PATTERN = re.compile(r"<head(?:\s[^>]*)?>[\s\S]*?</head>", re.IGNORECASE)


def parse_markup(template_source: str) -> BeautifulSoup:
    return BeautifulSoup(template_source or "", "html.parser")


def extract_section(soup: BeautifulSoup, point: str) -> Optional[str]:
    """
    Markup of the first block matching a division point.

    Returns:
        Serialized element, or None when the template has no such block
    """
    for tag_name in SECTION_TAGS.get(point, ()):
        tag = soup.find(tag_name)
        if isinstance(tag, Tag):
            return str(tag)
    logger.debug("No markup found for division point %s", point)
    return None


def extract_sections(template_source: str, points) -> List[Tuple[str, str]]:
    """(point, markup) pairs for each division point present, in the given order."""
    soup = parse_markup(template_source)
    sections = []
    for point in points:
        markup = extract_section(soup, point)
        if markup is not None:
            sections.append((point, markup))
    return sections


def extract_components(template_source: str) -> List[str]:
    """
    Top-level block components, in document order.

    A ``div`` counts as a component when one of its classes matches
    container/section/row/col/card/component. Components nested inside an
    already collected component travel with their parent.
    """
    soup = parse_markup(template_source)
    collected: List[Tag] = []
    collected_ids = set()
    for tag in soup.find_all("div", class_=COMPONENT_CLASS_PATTERN):
        if any(id(parent) in collected_ids for parent in tag.parents):
            continue
        collected.append(tag)
        collected_ids.add(id(tag))
    return [str(tag) for tag in collected]


def extract_head(template_source: str) -> str:
    """First ``<head>`` block, or a minimal charset-only head."""
    match = _HEAD_PATTERN.search(template_source or "")
    return match.group(0) if match else DEFAULT_HEAD


def strip_head(template_source: str) -> str:
    """Template with its first ``<head>`` block removed; everything else untouched."""
    return _HEAD_PATTERN.sub("", template_source or "", count=1)


def wrap_content(content: str) -> str:
    return f"{CONTENT_START_MARKER}{content}{CONTENT_END_MARKER}"


def extract_artifact_body(artifact_content: str) -> str:
    """
    Recover the chunk content embedded in an artifact.

    Falls back to the whole document when the markers are missing, as for a
    single unsplit artifact.
    """
    start = artifact_content.find(CONTENT_START_MARKER)
    end = artifact_content.rfind(CONTENT_END_MARKER)
    if start == -1 or end == -1 or end < start:
        return artifact_content
    return artifact_content[start + len(CONTENT_START_MARKER):end]
