"""Markdown exporter with YAML front matter."""

import re
from datetime import date

from book_author.export.base import TextExporter
from book_author.export.content import html_to_markdown
from book_author.models import ExportFormat

_ANCHOR_STRIP = re.compile(r"[^\w\s-]")


def markdown_anchor(heading: str) -> str:
    """GitHub-style anchor for a heading: lower case, punctuation dropped, spaces to hyphens."""
    return _ANCHOR_STRIP.sub("", heading.strip().lower()).replace(" ", "-")


def _yaml_string(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


class MarkdownExporter(TextExporter):
    format = ExportFormat.MARKDOWN
    label = "Markdown"

    def render(self, project, chapters, options, cancel_event=None) -> str:
        lines: list[str] = []
        author = project.metadata.author
        headings = [options.chapter_heading(chapter.order, chapter.title) for chapter in chapters]

        if options.include_front_matter:
            lines.append("---")
            lines.append(f"title: {_yaml_string(project.name)}")
            if author:
                lines.append(f"author: {_yaml_string(author)}")
            if project.metadata.genre:
                lines.append(f"genre: {_yaml_string(project.metadata.genre)}")
            lines.append(f'date: "{date.today().isoformat()}"')
            lines.append("---")
            lines.append("")
            lines.append(f"# {project.name}")
            lines.append("")
            if author:
                lines.append(f"*by {author}*")
                lines.append("")

        if options.include_table_of_contents and options.include_chapter_titles:
            lines.append("## Table of Contents")
            lines.append("")
            for heading in headings:
                lines.append(f"- [{heading}](#{markdown_anchor(heading)})")
            lines.append("")
            lines.append("---")
            lines.append("")

        for position, (chapter, heading) in enumerate(zip(chapters, headings)):
            self.check_cancelled(cancel_event)
            if options.include_chapter_titles:
                lines.append(f"## {heading}")
                lines.append("")
            body = html_to_markdown(chapter.content)
            if body:
                lines.append(body)
                lines.append("")
            if options.chapter_page_breaks and position < len(chapters) - 1:
                lines.append("---")
                lines.append("")

        return "\n".join(lines).rstrip() + "\n"
