from __future__ import annotations

from html import escape

import markdown

from insurance_guide.domain.entities.message import Message


TYPING_INDICATOR_HTML = '<div class="typing-indicator"><span></span><span></span><span></span></div>'

_MARKDOWN_EXTENSIONS = ["nl2br", "sane_lists", "tables", "fenced_code"]


def render_markdown(text: str) -> str:
    return markdown.markdown(text, extensions=_MARKDOWN_EXTENSIONS)


def render_sources(message: Message) -> str:
    if not message.sources:
        return ""
    items = "".join(
        f'<li><a href="{escape(s.uri, quote=True)}" target="_blank" rel="noopener noreferrer" '
        f'title="{escape(s.title, quote=True)}">{i}. {escape(s.title)}</a></li>'
        for i, s in enumerate(message.sources, start=1)
    )
    return f'<div class="sources"><h4>Fuentes:</h4><ul>{items}</ul></div>'


def render_message_html(message: Message) -> str:
    """Assistant text is Markdown; user text is shown literally."""
    if message.sender == "user":
        body = f'<p class="preformatted">{escape(message.text)}</p>'
    elif message.text:
        body = render_markdown(message.text)
    else:
        body = TYPING_INDICATOR_HTML
    return body + render_sources(message)
