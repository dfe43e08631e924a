"""EPUB exporter built on ebooklib."""

import html

from ebooklib import epub

from book_author.export.base import BookExporter
from book_author.export.content import text_to_html
from book_author.models import ExportFormat

EPUB_CSS = """
body { font-family: Georgia, serif; line-height: 1.6; margin: 1em; }
h1 { text-align: center; font-size: 1.8em; margin-top: 2em; }
h2 { text-align: center; font-size: 1.4em; margin-top: 1.5em; }
p { text-indent: 1.5em; margin: 0.3em 0; }
.scene-break { text-align: center; margin: 1.5em 0; }
.author { text-align: center; font-style: italic; }
"""


class EpubExporter(BookExporter):
    format = ExportFormat.EPUB
    label = "EPUB"

    def _write(self, project, chapters, options, cancel_event) -> None:
        metadata = project.metadata
        language = (metadata.language or "en").split("-")[0]

        book = epub.EpubBook()
        book.set_identifier(f"book-author-{project.id}")
        book.set_title(metadata.title or project.name)
        book.set_language(language)
        if metadata.author:
            book.add_author(metadata.author)
        if metadata.description:
            book.add_metadata("DC", "description", metadata.description)

        style = epub.EpubItem(
            uid="style_main",
            file_name="style/main.css",
            media_type="text/css",
            content=EPUB_CSS.encode("utf-8"),
        )
        book.add_item(style)

        spine: list = ["nav"]
        if options.include_front_matter:
            title_page = epub.EpubHtml(title="Title Page", file_name="title.xhtml", lang=language)
            author_line = f'<p class="author">by {html.escape(metadata.author)}</p>' if metadata.author else ""
            title_page.content = f"<h1>{html.escape(project.name)}</h1>{author_line}"
            title_page.add_item(style)
            book.add_item(title_page)
            spine.append(title_page)

        epub_chapters = []
        for chapter in chapters:
            self.check_cancelled(cancel_event)
            heading = options.chapter_heading(chapter.order, chapter.title)
            item = epub.EpubHtml(
                title=heading,
                file_name=f"chapter_{chapter.order:03d}.xhtml",
                lang=language,
            )
            title_html = f"<h2>{html.escape(heading)}</h2>" if options.include_chapter_titles else ""
            item.content = title_html + text_to_html(chapter.content)
            item.add_item(style)
            book.add_item(item)
            epub_chapters.append(item)

        book.toc = epub_chapters
        book.add_item(epub.EpubNcx())
        book.add_item(epub.EpubNav())
        book.spine = spine + epub_chapters

        epub.write_epub(options.output_path, book, {})
