"""Tests for the template helper registry."""

import pytest

from storefront_mcp.core.artifacts.helpers import (
    OPTIONS_CONTEXT_KEY,
    TemplateHelperRegistry,
    build_default_registry,
    component_type,
    get_default_registry,
    resolve_priority,
    skeleton_markup,
)
from storefront_mcp.core.artifacts.models import RenderOptions


@pytest.fixture
def env():
    return build_default_registry().create_environment()


class TestResolvePriority:
    @pytest.mark.parametrize("level,expected", [(1, 1), (5, 5), (0, 3), (6, 3), ("2", 2), ("x", 3)])
    def test_clamps_out_of_range_to_middle(self, level, expected):
        assert resolve_priority(level, 5) == expected

    def test_middle_rounds_up(self):
        assert resolve_priority(99, 4) == 2
        assert resolve_priority(99, 1) == 1


class TestSkeletons:
    @pytest.mark.parametrize(
        "content,expected",
        [
            ('<img src="a.png">', "image"),
            ("<table><tr><td>1</td></tr></table>", "table"),
            ('<div class="card">x</div>', "card"),
            ('<div class="card-body">x</div>', "card"),
            ("<p>text</p>", "text"),
        ],
    )
    def test_component_type(self, content, expected):
        assert component_type(content) == expected

    def test_text_skeleton_has_three_lines(self):
        html = skeleton_markup("<p>hello</p>")
        assert html.startswith('<div class="skeleton-placeholder">')
        assert html.count('class="skeleton-text"') == 3

    def test_table_skeleton(self):
        html = skeleton_markup("<table></table>")
        assert html.count("skeleton-table-row") == 3


class TestRenderPriorityHelper:
    def test_wraps_content_with_skeleton(self, env):
        template = env.from_string("{% call render_priority(2) %}<p>{{ name }}</p>{% endcall %}")

        html = template.render(name="Shop", **{OPTIONS_CONTEXT_KEY: RenderOptions()})

        assert 'data-priority="2"' in html
        assert 'data-render-status="pending"' in html
        assert '<div class="component-content" style="display: none;"><p>Shop</p></div>' in html
        assert "skeleton-placeholder" in html

    def test_skeleton_can_be_disabled(self, env):
        template = env.from_string("{% call render_priority(1) %}x{% endcall %}")

        html = template.render(**{OPTIONS_CONTEXT_KEY: RenderOptions(skeleton_loading=False)})

        assert "skeleton-placeholder" not in html

    def test_uses_render_options_for_range(self, env):
        template = env.from_string("{% call render_priority(4) %}x{% endcall %}")

        html = template.render(**{OPTIONS_CONTEXT_KEY: RenderOptions(priority_levels=3)})

        assert 'data-priority="2"' in html

    def test_defaults_without_options_in_context(self, env):
        html = env.from_string("{% call render_priority(9) %}x{% endcall %}").render()
        assert 'data-priority="3"' in html


class TestOtherHelpers:
    def test_skeleton_block(self, env):
        html = env.from_string("{% call skeleton('card') %}body{% endcall %}").render()
        assert 'data-skeleton-type="card"' in html
        assert '<div class="skeleton-content" style="display: none;">body</div>' in html

    def test_artifact_boundary(self, env):
        html = env.from_string("{% call artifact_boundary('hero') %}x{% endcall %}").render()
        assert html == '<div class="artifact-boundary" data-artifact-id="hero">x</div>'

    def test_artifact_navigation(self, env):
        html = env.from_string("{{ artifact_navigation(3, 1) }}").render()
        assert html.count("artifact-navigation-item") == 3
        assert html.count("artifact-navigation-item active") == 1
        assert 'data-artifact-index="1"' in html

    def test_pretty_json_filter(self, env):
        html = env.from_string("{{ data|pretty_json }}").render(data={"a": "é"})
        assert html == '{\n  "a": "é"\n}'


class TestRegistry:
    def test_registry_is_read_only(self):
        registry = build_default_registry()
        with pytest.raises(TypeError):
            registry.globals["evil"] = lambda: None

    def test_extend_returns_new_registry(self):
        base = build_default_registry()

        extended = base.extend(filters={"shout": lambda s: s.upper()})

        assert "shout" in extended.filters
        assert "shout" not in base.filters
        assert set(base.globals) <= set(extended.globals)

    def test_copies_input_mappings(self):
        source = {"helper": lambda: "x"}
        registry = TemplateHelperRegistry(globals=source)
        source["other"] = lambda: "y"
        assert "other" not in registry.globals

    def test_environments_are_independent(self):
        registry = build_default_registry()
        first = registry.create_environment()
        second = registry.create_environment()
        first.globals["extra"] = 1
        assert "extra" not in second.globals

    def test_default_registry_is_shared(self):
        assert get_default_registry() is get_default_registry()
