"""Question rendering utilities for displaying quiz questions."""

from __future__ import annotations

from html import escape

from quizlive.core.markdown_math_renderer import renderer
from quizlive.core.models import ImageOption, Question, QuestionType
from quizlive.core.services.leaderboard import OptionStat


def render_question(
    question: Question | None,
    font_size: int = 14,
    *,
    reveal: bool = False,
    stats: list[OptionStat] | None = None,
) -> str:
    """Render a quiz question with its content and options as HTML.

    Args:
        question: The question to show; None renders a placeholder
        font_size: Font size in points for the question text
        reveal: Highlight the correct option
        stats: Per-option answer counts shown next to each option

    Returns:
        HTML string ready for display in QWebEngineView
    """
    if question is None:
        return renderer.render_full_document("", font_size=font_size)

    parts = [renderer.render_fragment(question.question or "(No question text)")]
    content_html = renderer.render_content(question.content)
    if content_html:
        parts.append(content_html)

    if question.type in (QuestionType.MULTIPLE_CHOICE, QuestionType.TRUE_FALSE):
        labels = question.display_options()
        correct_index = _correct_index(question)
        items = []
        for idx, label in enumerate(labels):
            letter = chr(ord("A") + idx)
            option = question.options[idx] if idx < len(question.options) else None
            body = _option_html(option, label)
            suffix = ""
            if stats is not None and idx < len(stats):
                suffix = f" <small>({stats[idx].count} &middot; {stats[idx].percentage}%)</small>"
            css = "option correct" if reveal and idx == correct_index else "option"
            items.append(f'<p class="{css}"><strong>{letter}.</strong> {body}{suffix}</p>')
        parts.append("\n".join(items))
    elif reveal:
        parts.append(f'<p class="option correct">Answer: {escape(question.describe_correct_answer())}</p>')

    if reveal and question.explanation:
        parts.append(renderer.render_fragment(question.explanation))
    return renderer.document("\n".join(parts), font_size=font_size)


def _option_html(option: object, label: str) -> str:
    if isinstance(option, ImageOption) and option.url:
        return f'<img class="content-image" src="{escape(option.url)}" alt="{escape(label)}" />'
    return renderer.render_inline(label or "(empty)")


def _correct_index(question: Question) -> int | None:
    answer = question.correct_answer
    if question.type == QuestionType.TRUE_FALSE:
        if isinstance(answer, bool):
            return 0 if answer else 1
        return None
    if isinstance(answer, int) and not isinstance(answer, bool):
        return answer
    return None
