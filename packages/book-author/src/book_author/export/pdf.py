"""PDF exporter built on reportlab."""

from xml.sax.saxutils import escape

from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY
from reportlab.lib.pagesizes import A4, A5, LETTER
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import cm, inch
from reportlab.platypus import PageBreak, Paragraph, SimpleDocTemplate, Spacer

from book_author.export.base import BookExporter
from book_author.export.content import SCENE_BREAK, is_scene_break, split_paragraphs
from book_author.export.options import ExportOptions, PageSize
from book_author.models import ExportFormat

PAGE_SIZES = {
    PageSize.LETTER: LETTER,
    PageSize.A4: A4,
    PageSize.A5: A5,
}

# reportlab only ships the standard PDF fonts
_STANDARD_FONTS = {
    "helvetica": ("Helvetica", "Helvetica-Bold"),
    "arial": ("Helvetica", "Helvetica-Bold"),
    "courier": ("Courier", "Courier-Bold"),
    "courier new": ("Courier", "Courier-Bold"),
}
_SERIF_FONTS = ("Times-Roman", "Times-Bold")


def build_styles(options: ExportOptions) -> dict[str, ParagraphStyle]:
    regular, bold = _STANDARD_FONTS.get(options.font_family.lower(), _SERIF_FONTS)
    size = options.font_size
    return {
        "title": ParagraphStyle("BookTitle", fontName=bold, fontSize=size * 2, leading=size * 2.4, alignment=TA_CENTER),
        "author": ParagraphStyle("BookAuthor", fontName=regular, fontSize=size * 1.2, leading=size * 1.6, alignment=TA_CENTER),
        "heading": ParagraphStyle(
            "ChapterHeading",
            fontName=bold,
            fontSize=size * 1.5,
            leading=size * 1.9,
            alignment=TA_CENTER,
            spaceBefore=size,
            spaceAfter=size * 1.5,
        ),
        "toc": ParagraphStyle("TocEntry", fontName=regular, fontSize=size, leading=size * 1.4),
        "body": ParagraphStyle(
            "Body",
            fontName=regular,
            fontSize=size,
            leading=size * options.line_spacing,
            alignment=TA_JUSTIFY,
            firstLineIndent=size * 1.5,
            spaceAfter=size * 0.4,
        ),
        "scene_break": ParagraphStyle(
            "SceneBreak", fontName=regular, fontSize=size, leading=size * 1.4, alignment=TA_CENTER, spaceBefore=size, spaceAfter=size
        ),
    }


class PdfExporter(BookExporter):
    format = ExportFormat.PDF
    label = "PDF"

    def _write(self, project, chapters, options, cancel_event) -> None:
        styles = build_styles(options)
        margins = options.margins
        doc = SimpleDocTemplate(
            options.output_path,
            pagesize=PAGE_SIZES.get(options.page_size, LETTER),
            topMargin=margins.top * inch,
            bottomMargin=margins.bottom * inch,
            leftMargin=margins.left * inch,
            rightMargin=margins.right * inch,
            title=project.metadata.title or project.name,
            author=project.metadata.author,
        )

        story: list = []
        if options.include_front_matter:
            story.append(Spacer(1, 4 * cm))
            story.append(Paragraph(escape(project.name), styles["title"]))
            if project.metadata.author:
                story.append(Spacer(1, 1 * cm))
                story.append(Paragraph(f"by {escape(project.metadata.author)}", styles["author"]))
            story.append(PageBreak())

        if options.include_table_of_contents and options.include_chapter_titles:
            story.append(Paragraph("Table of Contents", styles["heading"]))
            for chapter in chapters:
                story.append(Paragraph(escape(options.chapter_heading(chapter.order, chapter.title)), styles["toc"]))
            story.append(PageBreak())

        for position, chapter in enumerate(chapters):
            self.check_cancelled(cancel_event)
            if options.chapter_page_breaks and position > 0:
                story.append(PageBreak())
            if options.include_chapter_titles:
                heading = options.chapter_heading(chapter.order, chapter.title)
                story.append(Paragraph(escape(heading), styles["heading"]))
            for paragraph in split_paragraphs(chapter.content):
                if is_scene_break(paragraph):
                    story.append(Paragraph(SCENE_BREAK, styles["scene_break"]))
                else:
                    story.append(Paragraph(escape(paragraph), styles["body"]))

        if not story:
            story.append(Spacer(1, 1))
        doc.build(story)
