"""Helpers for turning chapter content into paragraphs, Markdown and HTML.

Chapter content is either plain text (paragraphs separated by blank lines)
or simple HTML produced by an editor (``<p>``, ``<strong>``, ``<em>`` and
headings).
"""

import html
import re

SCENE_BREAK_MARKERS = ("***", "---", "* * *")
SCENE_BREAK = "* * *"

_TAG_PATTERN = re.compile(r"<[^>]*>")
_BLANK_LINE_PATTERN = re.compile(r"\r?\n\s*\r?\n")
_HTML_PARAGRAPH_PATTERN = re.compile(r"<(p|div|h[1-6])[^>]*>(.*?)</\1>", re.DOTALL | re.IGNORECASE)

_MARKDOWN_RULES = [
    (re.compile(r"<h1[^>]*>(.*?)</h1>", re.DOTALL | re.IGNORECASE), r"# \1\n\n"),
    (re.compile(r"<h2[^>]*>(.*?)</h2>", re.DOTALL | re.IGNORECASE), r"## \1\n\n"),
    (re.compile(r"<h3[^>]*>(.*?)</h3>", re.DOTALL | re.IGNORECASE), r"### \1\n\n"),
    (re.compile(r"<p[^>]*>(.*?)</p>", re.DOTALL | re.IGNORECASE), r"\1\n\n"),
    (re.compile(r"<(strong|b)>(.*?)</\1>", re.DOTALL | re.IGNORECASE), r"**\2**"),
    (re.compile(r"<(em|i)>(.*?)</\1>", re.DOTALL | re.IGNORECASE), r"*\2*"),
    (re.compile(r"<br\s*/?>", re.IGNORECASE), "  \n"),
]


def is_html(content: str) -> bool:
    return "<p>" in content or "<p " in content or "<div>" in content


def is_scene_break(paragraph: str) -> bool:
    return paragraph.strip() in SCENE_BREAK_MARKERS


def strip_html(content: str) -> str:
    """Remove tags and decode entities."""
    if not content:
        return ""
    return html.unescape(_TAG_PATTERN.sub("", content))


def content_to_text(content: str) -> str:
    """Plain text for chapter content; plain prose passes through untouched."""
    if not content:
        return ""
    if not is_html(content):
        return content
    return strip_html(content)


def split_paragraphs(content: str) -> list[str]:
    """Split chapter content into trimmed, non-empty paragraphs."""
    if not content:
        return []
    if is_html(content):
        blocks = [strip_html(match.group(2)) for match in _HTML_PARAGRAPH_PATTERN.finditer(content)]
        if not blocks:
            blocks = [strip_html(content)]
    else:
        blocks = _BLANK_LINE_PATTERN.split(content)
    return [block.strip() for block in blocks if block.strip()]


def html_to_markdown(content: str) -> str:
    """Convert editor HTML to Markdown; plain text is returned unchanged."""
    if not content:
        return ""
    if not is_html(content):
        return content
    markdown = content
    for pattern, replacement in _MARKDOWN_RULES:
        markdown = pattern.sub(replacement, markdown)
    markdown = _TAG_PATTERN.sub("", markdown)
    return html.unescape(markdown).strip()


def text_to_html(content: str) -> str:
    """Render chapter content as HTML paragraphs with scene-break dividers."""
    if not content:
        return "<p></p>"
    if is_html(content):
        return content
    parts = []
    for paragraph in split_paragraphs(content):
        if is_scene_break(paragraph):
            parts.append(f'<div class="scene-break">{SCENE_BREAK}</div>')
        else:
            parts.append(f"<p>{html.escape(paragraph)}</p>")
    return "\n".join(parts) if parts else "<p></p>"
