"""
Photo book HTML export.

Renders a page list and cover to a self-contained, print-ready HTML
document. The document is what gets handed to a PDF printer; layouts
differ only in their stylesheet.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Sequence

from jinja2 import Environment

from ..models.photo_book import (
    BookCover,
    BookLayoutTemplate,
    CoverColorTheme,
    PhotoBookPage,
)
from .photo_book import COVER_COLOR_THEMES, format_display_date


logger = logging.getLogger(__name__)

BASE_CSS = """
@page { size: 210mm 210mm; margin: 0; }
* { box-sizing: border-box; margin: 0; padding: 0; }
body { background: #fff; color: #333; }
.page {
    width: 210mm; height: 210mm; page-break-after: always;
    display: flex; flex-direction: column; align-items: center; justify-content: center;
    padding: 15mm; overflow: hidden;
}
.page img { max-width: 100%; max-height: 150mm; object-fit: cover; }
.caption { margin-top: 8mm; font-size: 14pt; text-align: center; }
.date { margin-top: 3mm; font-size: 10pt; color: #888; }
.page-title h1 { font-size: 32pt; text-align: center; }
.page-title .subtitle { margin-top: 6mm; font-size: 14pt; }
.badge { margin-bottom: 5mm; font-size: 11pt; text-transform: uppercase; letter-spacing: 2px; }
"""

LAYOUT_CSS: Dict[str, str] = {
    BookLayoutTemplate.CLASSIC.value: """
body { font-family: Georgia, 'Times New Roman', serif; }
.page img { border: 6px solid #fff; box-shadow: 0 0 0 1px #ccc; }
.badge { color: #8b6f47; }
""",
    BookLayoutTemplate.MODERN.value: """
body { font-family: 'Helvetica Neue', Arial, sans-serif; }
.page-photo, .page-milestone { padding: 0; justify-content: flex-end; }
.page-photo img, .page-milestone img { max-width: none; width: 100%; max-height: none; height: 170mm; }
.caption { font-weight: 300; }
.badge { color: #222; }
""",
    BookLayoutTemplate.PLAYFUL.value: """
body { font-family: 'Comic Sans MS', 'Trebuchet MS', sans-serif; }
.page img { border-radius: 24px; border: 5px dashed #FFB347; }
.page-title h1 { color: #FF6B6B; }
.badge { color: #FF6B6B; }
.badge::before { content: "⭐ "; }
""",
}

BOOK_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{{ cover.title }}</title>
<style>{{ css | safe }}
.cover { background: {{ theme.background }}; color: {{ theme.text }}; }
</style>
</head>
<body class="layout-{{ layout }}">
<section class="page cover">
  {% if cover.photo_uri %}<img src="{{ cover.photo_uri }}" alt="">{% endif %}
  <div class="page-title"><h1>{{ cover.title }}</h1>
  {% if cover.child_name %}<p class="subtitle">{{ cover.child_name }}</p>{% endif %}
  {% if cover.date_range %}<p class="subtitle">{{ cover.date_range }}</p>{% endif %}
  </div>
</section>
{% for page in pages %}
<section class="page page-{{ page.type }}">
  {% if page.type == "title" %}
  <div class="page-title"><h1>{{ page.title or "" }}</h1>
  {% if page.caption %}<p class="subtitle">{{ page.caption }}</p>{% endif %}</div>
  {% elif page.type == "blank" %}
  {% else %}
  {% if page.type == "milestone" %}<p class="badge">{{ page.title or "Milestone" }}</p>{% endif %}
  {% if page.image_uri %}<img src="{{ page.image_uri }}" alt="{{ page.caption or '' }}">{% endif %}
  {% if page.caption %}<p class="caption">{{ page.caption }}</p>{% endif %}
  {% if page.date %}<p class="date">{{ page.date | display_date }}</p>{% endif %}
  {% endif %}
</section>
{% endfor %}
</body>
</html>
"""

_env = Environment(autoescape=True)
_env.filters["display_date"] = format_display_date
_template = _env.from_string(BOOK_TEMPLATE)


def render_photo_book_html(
    pages: Sequence[PhotoBookPage],
    cover: BookCover,
    layout: BookLayoutTemplate = BookLayoutTemplate.CLASSIC,
    output_path: Optional[Path] = None,
) -> str:
    """
    Render a photo book to HTML.

    Args:
        pages: Pages in print order
        cover: Book cover; unknown color themes fall back to coral
        layout: Layout template controlling the stylesheet
        output_path: Optional file to write the document to

    Returns:
        HTML string
    """
    layout = BookLayoutTemplate(layout).value
    theme = next(
        (t for t in COVER_COLOR_THEMES if t.id == cover.color_theme),
        next(t for t in COVER_COLOR_THEMES if t.id == CoverColorTheme.CORAL),
    )

    html_output = _template.render(
        pages=pages,
        cover=cover,
        layout=layout,
        theme=theme,
        css=BASE_CSS + LAYOUT_CSS[layout],
    )

    if output_path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html_output, encoding="utf-8")
        logger.info(f"Photo book written to {output_path}")

    return html_output
