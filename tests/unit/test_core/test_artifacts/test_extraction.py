"""Tests for tolerant section and component extraction."""

from storefront_mcp.core.artifacts.extraction import (
    CONTENT_END_MARKER,
    CONTENT_START_MARKER,
    DEFAULT_HEAD,
    extract_artifact_body,
    extract_components,
    extract_head,
    extract_section,
    extract_sections,
    parse_markup,
    strip_head,
    wrap_content,
)


class TestExtractSection:
    def test_header_prefers_header_over_nav(self):
        soup = parse_markup("<nav>menu</nav><header>top</header>")
        assert extract_section(soup, "header") == "<header>top</header>"

    def test_header_falls_back_to_nav(self):
        soup = parse_markup('<nav class="main-nav">menu</nav>')
        assert extract_section(soup, "header") == '<nav class="main-nav">menu</nav>'

    def test_main_candidates_in_order(self):
        soup = parse_markup("<article>a</article><section>s</section>")
        assert extract_section(soup, "main") == "<section>s</section>"

    def test_first_matching_block_wins(self):
        soup = parse_markup("<footer>one</footer><footer>two</footer>")
        assert extract_section(soup, "footer") == "<footer>one</footer>"

    def test_missing_section_returns_none(self):
        soup = parse_markup("<div>only content</div>")
        assert extract_section(soup, "footer") is None

    def test_section_inside_comment_is_ignored(self):
        soup = parse_markup("<!-- <footer>old</footer> --><p>x</p>")
        assert extract_section(soup, "footer") is None

    def test_unclosed_tags_do_not_raise(self):
        soup = parse_markup("<header><h1>Title")
        assert extract_section(soup, "header").startswith("<header><h1>Title")


class TestExtractSections:
    def test_skips_absent_points(self, sectioned_template):
        template = sectioned_template.replace("<main>", "<div>").replace("</main>", "</div>")

        sections = extract_sections(template, ("header", "main", "footer"))

        assert [point for point, _ in sections] == ["header", "footer"]

    def test_preserves_requested_order(self, sectioned_template):
        sections = extract_sections(sectioned_template, ("header", "main", "footer"))

        assert [point for point, _ in sections] == ["header", "main", "footer"]
        assert "{{ shop_name }}" in sections[0][1]


class TestExtractComponents:
    def test_matches_component_classes(self):
        template = (
            '<div class="container">a</div>'
            '<div class="col-md-4">b</div>'
            '<div class="plain">c</div>'
            '<div class="product card">d</div>'
        )

        components = extract_components(template)

        assert components == [
            '<div class="container">a</div>',
            '<div class="col-md-4">b</div>',
            '<div class="product card">d</div>',
        ]

    def test_nested_components_travel_with_parent(self):
        template = (
            '<div class="row"><div class="col">one</div><div class="col">two</div></div>'
            '<div class="row"><div class="col">three</div></div>'
        )

        components = extract_components(template)

        assert len(components) == 2
        assert "two" in components[0]
        assert "three" in components[1]

    def test_no_components(self):
        assert extract_components("<p>text only</p>") == []

    def test_class_match_ignores_case(self):
        template = '<div class="Card">a</div><div class="CONTAINER">b</div><div class="Plain">c</div>'

        components = extract_components(template)

        assert components == ['<div class="Card">a</div>', '<div class="CONTAINER">b</div>']


class TestHeadHandling:
    def test_extract_head(self):
        template = '<html><head><meta charset="UTF-8"><title>x</title></head><body></body></html>'
        assert extract_head(template) == '<head><meta charset="UTF-8"><title>x</title></head>'

    def test_default_head(self):
        assert extract_head("<body>x</body>") == DEFAULT_HEAD

    def test_header_is_not_mistaken_for_head(self):
        template = "<header>top</header><p>x</p>"
        assert extract_head(template) == DEFAULT_HEAD
        assert strip_head(template) == template

    def test_strip_head_keeps_everything_else(self):
        template = "<html><head><title>x</title></head><body>y</body></html>"
        assert strip_head(template) == "<html><body>y</body></html>"


class TestContentMarkers:
    def test_round_trip(self):
        wrapped = "<nav>n</nav>" + wrap_content("<p>chunk</p>") + "<script></script>"
        assert extract_artifact_body(wrapped) == "<p>chunk</p>"

    def test_missing_markers_return_document(self):
        assert extract_artifact_body("<p>whole</p>") == "<p>whole</p>"

    def test_markers_are_html_comments(self):
        assert CONTENT_START_MARKER.startswith("<!--")
        assert CONTENT_END_MARKER.endswith("-->")
