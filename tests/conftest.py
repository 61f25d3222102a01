"""
Root pytest configuration and shared fixtures.
"""

import json
import logging
from typing import Any, Dict, Union

import pytest
from mcp.types import TextContent

# Response contract version from responses.py
RESPONSE_CONTRACT_VERSION = "response-v2"


def extract_response_dict(result: Union[Dict[str, Any], TextContent]) -> Dict[str, Any]:
    """Extract dict from tool result, handling both dict and TextContent.

    Tools wrapped with canonical_tool return TextContent with minified JSON.

    Raises:
        TypeError: If result is neither dict nor TextContent
    """
    if isinstance(result, dict):
        return result
    if isinstance(result, TextContent):
        return json.loads(result.text)
    if isinstance(result, (list, tuple)) and len(result) == 1:
        return extract_response_dict(result[0])
    raise TypeError(
        f"Expected dict or TextContent, got {type(result).__name__}"
    )


@pytest.fixture(autouse=True)
def reset_package_logging():
    """Drop handlers installed by configure_logging during a test."""
    yield
    logger = logging.getLogger("storefront_mcp")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def simple_template() -> str:
    """Small page that never needs splitting."""
    return "<html><body><p>{{ greeting }}</p></body></html>"


@pytest.fixture
def sectioned_template() -> str:
    """Page with header, main and footer regions plus inline styles."""
    return (
        "<!DOCTYPE html><html><head><title>Shop</title>"
        "<style>.brand { color: red; }</style></head><body>"
        "<header><h1>{{ shop_name }}</h1></header>"
        "<main><p>Welcome to {{ shop_name }}</p></main>"
        "<footer><small>Footer text</small></footer>"
        "</body></html>"
    )


def component_template(count: int, padding: int = 0) -> str:
    """Flat list of ``count`` component divs, optionally padded with text."""
    cards = "".join(
        f'<div class="component"><span>Item {i}</span></div>' for i in range(count)
    )
    filler = "<p>" + ("x" * padding) + "</p>" if padding else ""
    return f"<html><body>{cards}{filler}</body></html>"
