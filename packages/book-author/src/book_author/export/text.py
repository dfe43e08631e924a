"""Plain text exporter."""

from book_author.export.base import TextExporter
from book_author.export.content import content_to_text
from book_author.models import ExportFormat


class PlainTextExporter(TextExporter):
    format = ExportFormat.PLAIN_TEXT
    label = "Plain text"

    def render(self, project, chapters, options, cancel_event=None) -> str:
        lines: list[str] = []

        if options.include_front_matter:
            lines.append(project.name.upper())
            if project.metadata.author:
                lines.append(f"by {project.metadata.author}")
            lines.append("")
            lines.append("=" * 50)
            lines.append("")

        for position, chapter in enumerate(chapters):
            self.check_cancelled(cancel_event)
            if options.include_chapter_titles:
                heading = options.chapter_heading(chapter.order, chapter.title)
                lines.append(heading)
                lines.append("-" * len(heading))
                lines.append("")
            body = content_to_text(chapter.content).strip()
            if body:
                lines.append(body)
                lines.append("")
            if options.chapter_page_breaks and position < len(chapters) - 1:
                lines.append("")
                lines.append("***")
                lines.append("")

        return "\n".join(lines).rstrip() + "\n"
