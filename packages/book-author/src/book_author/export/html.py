"""Standalone HTML exporter."""

import html
from datetime import date

from book_author.export.base import TextExporter
from book_author.export.content import text_to_html
from book_author.export.options import ExportOptions
from book_author.models import Chapter, ExportFormat

_BASE_CSS = """
body { margin: 0; background: #fafafa; color: #222; }
.book { font-family: var(--font-family); font-size: var(--font-size); line-height: var(--line-height); max-width: 42em; margin: 0 auto; padding: 2em; background: #fff; }
.front-matter { text-align: center; margin: 4em 0; }
.book-title { font-size: 2.5em; margin-bottom: 0.5em; }
.book-author { font-size: 1.3em; font-style: italic; }
.book-description { margin-top: 2em; color: #555; }
.toc { margin: 3em 0; }
.toc ol { padding-left: 1.5em; }
.toc a { color: inherit; text-decoration: none; }
.chapter { margin-top: 3em; }
.chapter-title { text-align: center; margin-bottom: 1.5em; }
.chapter-content p { text-indent: 1.5em; margin: 0 0 0.8em 0; text-align: justify; }
.scene-break { text-align: center; margin: 1.5em 0; letter-spacing: 0.5em; }
.back-matter { text-align: center; margin-top: 4em; font-size: 0.85em; color: #777; }
@media print {
  body { background: #fff; }
  .page-break { page-break-before: always; }
}
"""


def chapter_anchor(chapter: Chapter) -> str:
    return f"chapter-{chapter.id.hex}"


def build_css(options: ExportOptions) -> str:
    """Stylesheet for the exported book, including any custom CSS."""
    css = (
        ":root {\n"
        f"  --font-family: {options.font_family}, Georgia, serif;\n"
        f"  --font-size: {options.font_size}pt;\n"
        f"  --line-height: {options.line_spacing};\n"
        "}\n" + _BASE_CSS
    )
    if options.custom_css:
        css += "\n/* Custom CSS */\n" + options.custom_css + "\n"
    return css


class HtmlExporter(TextExporter):
    format = ExportFormat.HTML
    label = "HTML"

    def render(self, project, chapters, options, cancel_event=None) -> str:
        esc = html.escape
        metadata = project.metadata
        out = [
            "<!DOCTYPE html>",
            '<html lang="en">',
            "<head>",
            '<meta charset="utf-8">',
            '<meta name="viewport" content="width=device-width, initial-scale=1">',
            f"<title>{esc(project.name)}</title>",
        ]
        if metadata.author:
            out.append(f'<meta name="author" content="{esc(metadata.author)}">')
        if metadata.genre:
            out.append(f'<meta name="genre" content="{esc(metadata.genre)}">')
        out += ["<style>", build_css(options), "</style>", "</head>", "<body>", '<div class="book">']

        if options.include_front_matter:
            out.append('<header class="front-matter">')
            out.append(f'<h1 class="book-title">{esc(project.name)}</h1>')
            if metadata.author:
                out.append(f'<p class="book-author">by {esc(metadata.author)}</p>')
            if project.description:
                out.append(f'<p class="book-description">{esc(project.description)}</p>')
            out.append("</header>")

        if options.include_table_of_contents and options.include_chapter_titles:
            out.append('<nav class="toc">')
            out.append("<h2>Table of Contents</h2>")
            out.append("<ol>")
            for chapter in chapters:
                heading = options.chapter_heading(chapter.order, chapter.title)
                out.append(f'<li><a href="#{chapter_anchor(chapter)}">{esc(heading)}</a></li>')
            out.append("</ol>")
            out.append("</nav>")

        out.append('<main class="content">')
        article_class = "chapter page-break" if options.chapter_page_breaks else "chapter"
        for chapter in chapters:
            self.check_cancelled(cancel_event)
            out.append(f'<article class="{article_class}" id="{chapter_anchor(chapter)}">')
            if options.include_chapter_titles:
                heading = options.chapter_heading(chapter.order, chapter.title)
                out.append(f'<h2 class="chapter-title">{esc(heading)}</h2>')
            out.append('<div class="chapter-content">')
            out.append(text_to_html(chapter.content))
            out.append("</div>")
            out.append("</article>")
        out.append("</main>")

        generated_on = date.today()
        out.append('<footer class="back-matter">')
        out.append(f"<p>Generated by Book Author on {generated_on:%B} {generated_on.day}, {generated_on.year}</p>")
        out.append("</footer>")
        out += ["</div>", "</body>", "</html>"]
        return "\n".join(out) + "\n"
