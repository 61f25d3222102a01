"""
Plain HTML preview artifacts.

Used when progressive rendering fails: the template is rendered without
priority scheduling or splitting and embedded in a simple website preview
page.
"""

import logging
import re
from typing import Any, Dict, List, Mapping, Optional

from jinja2 import Environment

from storefront_mcp.core.artifacts.helpers import (
    TemplateHelperRegistry,
    get_default_registry,
)
from storefront_mcp.core.artifacts.models import ARTIFACT_TYPES, Artifact

logger = logging.getLogger(__name__)

DEFAULT_PREVIEW_TITLE = "Website Preview"

DEFAULT_STYLES = """
:root {
  --primary-color: #007bff;
  --secondary-color: #6c757d;
  --light-color: #f8f9fa;
  --dark-color: #343a40;
}
body {
  font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;
  line-height: 1.6;
  color: #333;
  background-color: #fff;
  padding: 0;
  margin: 0;
}
.preview-wrapper { position: relative; border: 1px solid #ddd; border-radius: 8px; overflow: hidden; }
.preview-header {
  background: linear-gradient(to right, var(--primary-color), #0056b3);
  color: white;
  padding: 10px 15px;
  font-size: 16px;
  display: flex;
  justify-content: space-between;
  align-items: center;
}
.responsive-controls { display: flex; gap: 5px; padding: 10px; background: var(--light-color); }
.device-button { border: 1px solid #ccc; background: #fff; padding: 4px 10px; border-radius: 4px; }
.device-button.active { background: var(--primary-color); color: #fff; }
.preview-container { margin: 0 auto; transition: width 0.3s; width: 100%; }
.component-list { padding: 10px 15px; background: var(--light-color); }
.component-item { display: flex; justify-content: space-between; font-size: 13px; }
"""

WEBSITE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{{ title|e }}</title>
  <link href="https://cdn.jsdelivr.net/npm/bootstrap@5.2.3/dist/css/bootstrap.min.css" rel="stylesheet">
  <style>{{ styles }}</style>
</head>
<body>
  <div class="preview-wrapper">
    <div class="preview-header">
      <div>{{ title|e }}</div>
      <div>storefront-mcp</div>
    </div>
    <div class="responsive-controls">
      <button class="device-button active" data-width="100%">Desktop</button>
      <button class="device-button" data-width="768px">Tablet</button>
      <button class="device-button" data-width="375px">Mobile</button>
    </div>
    <div class="preview-container">
{{ content }}
    </div>
    <div class="component-list">
      <h5>Componentes ({{ components|length }})</h5>
      {% for component in components %}
      <div class="component-item">
        <span class="type">{{ component.type|e }}</span>
        <span class="id">ID: {{ component.id|e }}</span>
      </div>
      {% endfor %}
    </div>
  </div>
  <script src="https://cdn.jsdelivr.net/npm/bootstrap@5.2.3/dist/js/bootstrap.bundle.min.js"></script>
  <script>
    document.querySelectorAll('.device-button').forEach(function(button) {
      button.addEventListener('click', function() {
        document.querySelector('.preview-container').style.width = this.getAttribute('data-width');
        document.querySelectorAll('.device-button').forEach(function(btn) { btn.classList.remove('active'); });
        this.classList.add('active');
      });
    });
  </script>
</body>
</html>"""

COMPONENT_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{{ title|e }}</title>
  <link href="https://cdn.jsdelivr.net/npm/bootstrap@5.2.3/dist/css/bootstrap.min.css" rel="stylesheet">
  <style>{{ styles }}</style>
</head>
<body>
  <div class="preview-wrapper">
    <div class="preview-header">
      <div>Componente: {{ title|e }}</div>
      <div>Tipo: {{ type|e }}</div>
    </div>
    <div class="preview-container p-3">
{{ content }}
    </div>
    <div class="p-3 bg-light">
      <h5>Propriedades</h5>
      <pre><code>{{ properties|pretty_json|e }}</code></pre>
    </div>
  </div>
</body>
</html>"""

_COMPONENT_ATTRS_PATTERN = re.compile(
    r'data-component-id="([^"]+)"\s+data-component-type="([^"]+)"'
)


def extract_component_list(html: str) -> List[Dict[str, str]]:
    """Components declared through ``data-component-id``/``data-component-type``."""
    return [
        {"id": component_id, "type": component_type}
        for component_id, component_type in _COMPONENT_ATTRS_PATTERN.findall(html or "")
    ]


class ArtifactVisualizer:
    """Builds single-document preview artifacts without progressive rendering."""

    def __init__(self, registry: Optional[TemplateHelperRegistry] = None):
        self._env: Environment = (registry or get_default_registry()).create_environment()
        self._website = self._env.from_string(WEBSITE_TEMPLATE)
        self._component = self._env.from_string(COMPONENT_TEMPLATE)

    def render_plain(self, template_source: str, data: Optional[Mapping[str, Any]]) -> str:
        """Render the template, or return it verbatim when it does not render."""
        try:
            return self._env.from_string(template_source).render(dict(data or {}))
        except Exception as exc:
            logger.warning(
                "Preview rendering failed, showing raw template",
                extra={"error_type": type(exc).__name__},
            )
            return template_source

    def generate_website_visualization(
        self,
        content: str,
        title: Optional[str] = None,
        components: Optional[List[Dict[str, str]]] = None,
    ) -> str:
        return self._website.render(
            title=title or DEFAULT_PREVIEW_TITLE,
            content=content,
            styles=DEFAULT_STYLES,
            components=components or [],
        )

    def generate_component_visualization(self, component: Mapping[str, Any]) -> str:
        return self._component.render(
            title=component.get("name") or "Component Preview",
            type=component.get("type") or "unknown",
            content=component.get("content") or "",
            properties=component.get("properties") or {},
            styles=DEFAULT_STYLES,
        )

    @staticmethod
    def prepare_artifact(html: str, title: str = DEFAULT_PREVIEW_TITLE) -> Artifact:
        return Artifact(type=ARTIFACT_TYPES["html"], title=title, content=html)

    async def create_html_artifact(
        self, template_source: str, data: Optional[Mapping[str, Any]] = None
    ) -> Artifact:
        """
        Render a template into one preview artifact.

        Template errors are absorbed: the raw template text is previewed
        instead, so this always returns an artifact.
        """
        data = data or {}
        content = self.render_plain(template_source or "", data)
        title = data.get("title") if isinstance(data.get("title"), str) else None
        html = self.generate_website_visualization(
            content, title=title, components=extract_component_list(content)
        )
        return self.prepare_artifact(html, title or DEFAULT_PREVIEW_TITLE)
