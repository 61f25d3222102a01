"""
Progressive renderer.

Renders one HTML document so that its components appear in visual-priority
order: prominent regions are wrapped in priority blocks, the template is
rendered through the shared Jinja2 environment, and a small runtime script
reveals each priority tier in turn.
"""

import logging
import re
import time
from typing import Any, List, Mapping, Optional, Pattern, Tuple

from jinja2 import Environment

from storefront_mcp.core.artifacts.helpers import (
    OPTIONS_CONTEXT_KEY,
    PRIORITY_REGION_CLASS,
    TemplateHelperRegistry,
    get_default_registry,
)
from storefront_mcp.core.artifacts.models import ArtifactRenderError, RenderOptions

logger = logging.getLogger(__name__)

# Delay between revealing consecutive priority tiers
TIER_DELAY_MS = 300

_CALL_OPEN = "{% call render_priority("
_CALL_CLOSE = "{% endcall %}"

# (pattern, priority) pairs, applied in order
PRIORITY_RULES: List[Tuple[Pattern[str], int]] = [
    (
        re.compile(
            r"<header[^>]*>[\s\S]*?</header>|<nav[^>]*>[\s\S]*?</nav>", re.IGNORECASE
        ),
        1,
    ),
    (
        re.compile(
            r"<main[^>]*>[\s\S]*?</main>|<section[^>]*hero[^>]*>[\s\S]*?</section>",
            re.IGNORECASE,
        ),
        2,
    ),
    (
        re.compile(
            r"<img[^>]*>|<picture[^>]*>[\s\S]*?</picture>|<svg[^>]*>[\s\S]*?</svg>",
            re.IGNORECASE,
        ),
        3,
    ),
    (
        re.compile(
            r"<table[^>]*>[\s\S]*?</table>"
            r"|<iframe[^>]*>[\s\S]*?</iframe>"
            r"|<div[^>]*carousel[^>]*>[\s\S]*?</div>",
            re.IGNORECASE,
        ),
        5,
    ),
    (re.compile(r"<footer[^>]*>[\s\S]*?</footer>", re.IGNORECASE), 5),
]

SKELETON_CSS = """
<style>
.progressive-render-component { position: relative; }
.skeleton-placeholder { background: #f0f0f0; position: relative; overflow: hidden; }
.skeleton-placeholder::after {
  content: "";
  position: absolute;
  top: 0; right: 0; bottom: 0; left: 0;
  transform: translateX(-100%);
  background-image: linear-gradient(90deg, rgba(255, 255, 255, 0) 0,
    rgba(255, 255, 255, 0.2) 20%, rgba(255, 255, 255, 0.5) 60%, rgba(255, 255, 255, 0));
  animation: shimmer 2s infinite;
}
@keyframes shimmer { 100% { transform: translateX(100%); } }
.skeleton-text { height: 1em; margin: 0.5em 0; border-radius: 4px; }
.skeleton-image { aspect-ratio: 16/9; border-radius: 4px; }
.skeleton-card { border-radius: 8px; overflow: hidden; }
.skeleton-card-header { height: 3em; margin-bottom: 1em; }
.skeleton-table-header, .skeleton-table-row { height: 2em; margin-bottom: 0.5em; }
.progressive-render-progress {
  position: fixed; bottom: 20px; right: 20px;
  background: rgba(0, 0, 0, 0.7); color: white;
  padding: 10px; border-radius: 5px; z-index: 9999;
  width: 200px; transition: opacity 0.5s;
}
.progressive-render-progress .progress-bar {
  height: 5px; background: #0d6efd; width: 0; transition: width 0.3s;
}
.progressive-render-progress .progress-text { margin-top: 5px; font-size: 12px; }
</style>
"""

_FEEDBACK_SETUP = """
    var progressContainer = document.createElement('div');
    progressContainer.className = 'progressive-render-progress';
    progressContainer.innerHTML = '<div class="progress-bar"></div><div class="progress-text">Carregando...</div>';
    document.body.appendChild(progressContainer);
    var progressBar = progressContainer.querySelector('.progress-bar');
    var progressText = progressContainer.querySelector('.progress-text');
    function updateProgress(percent) {
      progressBar.style.width = percent + '%';
      progressText.textContent = 'Carregando: ' + Math.round(percent) + '%';
      if (percent >= 100) {
        setTimeout(function() {
          progressContainer.style.opacity = '0';
          setTimeout(function() { progressContainer.remove(); }, 500);
        }, 500);
      }
    }
"""

_FEEDBACK_UPDATE = """
          updateProgress((renderedCount / totalComponents) * 100);
"""

_RUNTIME_TEMPLATE = """
<script>
  (function() {{
    var priorities = {priority_levels};
    var components = document.querySelectorAll('.progressive-render-component');
    var renderedCount = 0;
    var totalComponents = components.length;
{feedback_setup}
    function renderByPriority(priority) {{
      Array.prototype.filter.call(components, function(c) {{
        return c.getAttribute('data-priority') == priority &&
               c.getAttribute('data-render-status') === 'pending';
      }}).forEach(function(component) {{
        component.setAttribute('data-render-status', 'rendering');
        var content = component.querySelector('.component-content');
        var placeholder = component.querySelector('.skeleton-placeholder');
        if (content) {{
          content.style.display = 'block';
          content.style.opacity = '0';
          content.style.transition = 'opacity 0.3s ease-in';
          void content.offsetWidth;
          content.style.opacity = '1';
        }}
        if (placeholder) {{
          placeholder.style.opacity = '0';
          setTimeout(function() {{ placeholder.style.display = 'none'; }}, 300);
        }}
        setTimeout(function() {{
          component.setAttribute('data-render-status', 'rendered');
          renderedCount++;
{feedback_update}
        }}, 50);
      }});
    }}

    renderByPriority(1);
{schedule}
  }})();
</script>
"""


def _wrap_match(match: "re.Match[str]", level: int) -> str:
    text = match.group(0)
    # Leave matches that would cut through an existing block untouched
    if text.count(_CALL_OPEN) != text.count(_CALL_CLOSE):
        return text
    return f"{_CALL_OPEN}{level}) %}}{text}{_CALL_CLOSE}"


def mark_priorities(html: str) -> str:
    """Wrap prominent regions of ``html`` in ``render_priority`` call blocks."""
    marked = html
    for pattern, level in PRIORITY_RULES:
        marked = pattern.sub(lambda m, level=level: _wrap_match(m, level), marked)
    return marked


def build_runtime_script(options: RenderOptions) -> str:
    """Scheduler revealing tier 1 at once and tier k after ``(k-1) * 300`` ms."""
    schedule = "\n".join(
        f"    setTimeout(function() {{ renderByPriority({level}); }}, "
        f"{(level - 1) * TIER_DELAY_MS});"
        for level in range(2, options.priority_levels + 1)
    )
    return _RUNTIME_TEMPLATE.format(
        priority_levels=options.priority_levels,
        feedback_setup=_FEEDBACK_SETUP if options.feedback_enabled else "",
        feedback_update=_FEEDBACK_UPDATE if options.feedback_enabled else "",
        schedule=schedule,
    )


def inject_runtime(html: str, options: RenderOptions) -> str:
    """
    Insert the runtime script and skeleton CSS before the last ``</body>``.

    Fragments without ``</body>`` get the runtime appended when they hold
    priority regions, and are returned unchanged otherwise.
    """
    runtime = build_runtime_script(options) + SKELETON_CSS
    position = html.lower().rfind("</body>")
    if position == -1:
        if PRIORITY_REGION_CLASS not in html:
            return html
        return html + runtime
    return html[:position] + runtime + html[position:]


class ProgressiveRenderer:
    """
    Renders HTML documents for priority-ordered display.

    The Jinja2 environment is created once from the injected helper registry
    and only read afterwards, so one renderer can serve many requests.
    """

    def __init__(
        self,
        registry: Optional[TemplateHelperRegistry] = None,
        options: Optional[RenderOptions] = None,
    ):
        self.registry = registry or get_default_registry()
        self.options = options or RenderOptions()
        self._env: Environment = self.registry.create_environment()

    @property
    def environment(self) -> Environment:
        return self._env

    async def render(
        self,
        html_shell: str,
        data: Optional[Mapping[str, Any]] = None,
        options: Optional[RenderOptions] = None,
    ) -> str:
        """
        Render ``html_shell`` with ``data``.

        Args:
            html_shell: Template markup (a full document or an artifact shell)
            data: Template variables
            options: Per-call options; the renderer's own options otherwise

        Returns:
            Rendered markup with the progressive runtime injected

        Raises:
            ArtifactRenderError: If the template fails to compile or render
        """
        opts = options or self.options
        start = time.perf_counter()

        marked = mark_priorities(html_shell)
        try:
            template = self._env.from_string(marked)
            html = template.render(dict(data or {}), **{OPTIONS_CONTEXT_KEY: opts})
        except Exception as exc:
            raise ArtifactRenderError(f"Template rendering failed: {exc}") from exc

        result = inject_runtime(html, opts)
        logger.debug(
            "Progressive render finished",
            extra={
                "duration_ms": round((time.perf_counter() - start) * 1000, 2),
                "output_size": len(result),
            },
        )
        return result
