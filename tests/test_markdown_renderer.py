from __future__ import annotations

from quizlive.core.markdown_math_renderer import MarkdownMathRenderer
from quizlive.core.models import ContentItem


class TestMarkdownMathRenderer:
    def setup_method(self):
        self.renderer = MarkdownMathRenderer()

    def test_blank_text_gets_placeholder(self):
        assert "No content provided" in self.renderer.render_fragment("  ")

    def test_raw_html_is_escaped_by_default(self):
        html = self.renderer.render_fragment("<script>alert(1)</script> **bold**")

        assert "<script>" not in html
        assert "<strong>bold</strong>" in html

    def test_math_is_left_for_mathjax(self):
        assert "$x^2$" in self.renderer.render_fragment("Solve $x^2$")

    def test_content_blocks(self):
        html = self.renderer.render_content(
            [
                ContentItem(type="text", value="Look:"),
                ContentItem(type="image", url="https://img.test/a.png"),
                ContentItem(type="audio", url="https://snd.test/a.mp3"),
                ContentItem(type="hologram", url="https://x.test"),
            ]
        )

        assert '<img class="content-image" src="https://img.test/a.png"' in html
        assert "<audio controls" in html
        assert "x.test" not in html

    def test_document_loads_mathjax_and_font_size(self):
        document = self.renderer.render_full_document("Hi", font_size=18)

        assert "mathjax" in document
        assert "font-size: 18pt" in document
