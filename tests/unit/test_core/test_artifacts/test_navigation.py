"""Tests for navigation and style injection."""

import re

import pytest

from storefront_mcp.core.artifacts.navigation import (
    NAVIGATION_CSS,
    build_navigation,
    extract_styles,
)


class TestBuildNavigation:
    @pytest.mark.parametrize("total", [0, 1])
    def test_empty_for_single_part(self, total):
        assert build_navigation(0, total) == ""

    @pytest.mark.parametrize("total", [2, 3, 7])
    def test_one_control_per_part_with_single_active(self, total):
        for index in range(total):
            html = build_navigation(index, total)

            assert html.count('class="page-item') == total
            assert html.count('class="page-item active"') == 1
            active = re.search(
                r'<li class="page-item active"><a class="page-link" href="#">Parte (\d+)</a>',
                html,
            )
            assert active is not None
            assert int(active.group(1)) == index + 1

    def test_controls_in_ascending_order(self):
        html = build_navigation(1, 3)
        labels = re.findall(r"Parte (\d+)", html)
        assert labels == ["1", "2", "3"]

    def test_markup_is_wrapped_in_navigation_container(self):
        html = build_navigation(0, 2)
        assert html.startswith('<div class="artifact-navigation container mt-3">')
        assert '<nav aria-label="Navegação entre partes do template">' in html
        assert html.endswith("</ul></nav></div></div></div>")


class TestExtractStyles:
    def test_concatenates_style_blocks_in_order(self):
        template = (
            "<style>.a { color: red; }</style><p>x</p>"
            '<STYLE type="text/css">.b { color: blue; }</STYLE>'
        )

        css = extract_styles(template)

        assert css.index(".a { color: red; }") < css.index(".b { color: blue; }")
        assert css.endswith(NAVIGATION_CSS)

    def test_navigation_css_only_without_styles(self):
        assert extract_styles("<p>plain</p>") == NAVIGATION_CSS

    def test_navigation_rules_present(self):
        css = extract_styles("")
        for selector in (
            ".artifact-navigation",
            ".artifact-navigation-list",
            ".artifact-navigation-item",
            ".artifact-navigation-item.active a",
        ):
            assert selector in css
