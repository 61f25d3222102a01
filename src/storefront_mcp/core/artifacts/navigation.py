"""
Navigation and styling injected into split artifacts.

Each part of a split template is viewed on its own, so every part carries a
pagination block pointing at its siblings and the inline styles of the
source template.
"""

import re
from typing import List

# Appended to the extracted template styles so navigation renders the same
# way in every part.
NAVIGATION_CSS = """
.artifact-navigation {
  background: #f8f9fa;
  padding: 10px;
  border-radius: 5px;
  margin-bottom: 20px;
}
.artifact-navigation-list {
  display: flex;
  list-style: none;
  padding: 0;
  margin: 0;
  flex-wrap: wrap;
}
.artifact-navigation-item {
  margin-right: 10px;
}
.artifact-navigation-item.active a {
  font-weight: bold;
  color: #0d6efd;
}
"""

_STYLE_BLOCK_PATTERN = re.compile(r"<style[^>]*>([\s\S]*?)</style>", re.IGNORECASE)


def build_navigation(index: int, total: int) -> str:
    """
    Build the pagination block for part ``index`` (0-based) of ``total``.

    Returns an empty string when there is nothing to navigate between.
    """
    if total <= 1:
        return ""

    parts: List[str] = [
        '<div class="artifact-navigation container mt-3">',
        '<div class="row align-items-center">',
        '<div class="col-auto"><strong>Navegação:</strong></div>',
        '<div class="col">',
        '<nav aria-label="Navegação entre partes do template">',
        '<ul class="pagination mb-0">',
    ]
    for i in range(total):
        active = " active" if i == index else ""
        parts.append(
            f'<li class="page-item{active}"><a class="page-link" href="#">Parte {i + 1}</a></li>'
        )
    parts.append("</ul></nav></div></div></div>")
    return "".join(parts)


def extract_styles(template_source: str) -> str:
    """Concatenate the bodies of all ``<style>`` blocks, then the navigation CSS."""
    bodies = _STYLE_BLOCK_PATTERN.findall(template_source or "")
    return "\n".join(bodies + [NAVIGATION_CSS])
