"""Markdown + LaTeX rendering of question prompts for the Qt web views.

Prompts, explanations and text content blocks go through markdown-it. Math is
left untouched in the markup and typeset by MathJax inside the web view, so
``$...$`` renders the same way for the host and for participants.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from html import escape
from string import Template

from markdown_it import MarkdownIt

from quizlive.core.models import ContentItem

_MATHJAX_SCRIPT = "https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-mml-chtml.js"

_EMPTY_FRAGMENT = "<p><em>No content provided.</em></p>"

_MEDIA_TAGS = {
    "image": '<img class="content-image" src="{url}" alt="Question image" />',
    "audio": '<audio controls src="{url}"></audio>',
    "video": '<video controls src="{url}"></video>',
}

_DOCUMENT = Template(
    """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>$title</title>
    <style>
      body { font-family: 'Segoe UI', system-ui, sans-serif; margin: 0; padding: 1rem; background: transparent; color: #f5f7ff; }
      .question-html { font-size: ${font_size}pt; line-height: 1.5; }
      .content-image { max-width: 100%; max-height: 320px; border-radius: 8px; }
      .option.correct { color: #4ade80; font-weight: 600; }
    </style>
    <script>
      window.MathJax = { tex: { inlineMath: [['$$','$$']], displayMath: [['$$$$','$$$$']] } };
    </script>
    <script defer src="$script"></script>
  </head>
  <body>
    <div class="question-html">$body</div>
  </body>
</html>"""
)


@dataclass(slots=True)
class MarkdownMathRenderer:
    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = MarkdownIt("commonmark", {"html": self.enable_html}).enable(["table", "strikethrough"])

    def render_fragment(self, markdown_text: str) -> str:
        text = markdown_text.strip()
        return self._markdown.render(text) if text else _EMPTY_FRAGMENT

    def render_inline(self, markdown_text: str) -> str:
        """Render a single line without the surrounding paragraph, for option labels."""
        return self._markdown.renderInline(markdown_text.strip())

    def render_content(self, items: list[ContentItem]) -> str:
        """Render ordered question content blocks; unknown block types are skipped."""
        parts: list[str] = []
        for item in items:
            if item.type == "text":
                if item.value:
                    parts.append(self._markdown.render(item.value))
                continue
            tag = _MEDIA_TAGS.get(item.type)
            if tag is not None and item.url:
                parts.append(tag.format(url=escape(item.url)))
        return "\n".join(parts)

    def document(self, body_html: str, title: str = "QuizLive", font_size: int = 14) -> str:
        """Embed ``body_html`` in a page that loads MathJax."""
        return _DOCUMENT.substitute(
            title=escape(title),
            font_size=font_size,
            script=_MATHJAX_SCRIPT,
            body=body_html,
        )

    def render_full_document(self, markdown_text: str, title: str = "QuizLive", font_size: int = 14) -> str:
        return self.document(self.render_fragment(markdown_text), title=title, font_size=font_size)


renderer = MarkdownMathRenderer()
