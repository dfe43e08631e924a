"""Microsoft Word exporter built on python-docx."""

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Inches, Pt

from book_author.export.base import BookExporter
from book_author.export.content import SCENE_BREAK, is_scene_break, split_paragraphs
from book_author.export.options import ExportOptions, PageSize
from book_author.models import ExportFormat

# Width, height in inches
PAGE_DIMENSIONS = {
    PageSize.LETTER: (8.5, 11.0),
    PageSize.A4: (8.27, 11.69),
    PageSize.A5: (5.83, 8.27),
}


class DocxExporter(BookExporter):
    format = ExportFormat.DOCX
    label = "DOCX"

    def _write(self, project, chapters, options, cancel_event) -> None:
        doc = Document()
        self._apply_layout(doc, options)

        if options.include_front_matter:
            title_para = doc.add_paragraph()
            title_para.alignment = WD_ALIGN_PARAGRAPH.CENTER
            run = title_para.add_run(project.name)
            run.bold = True
            run.font.size = Pt(24)
            if project.metadata.author:
                author_para = doc.add_paragraph(f"by {project.metadata.author}")
                author_para.alignment = WD_ALIGN_PARAGRAPH.CENTER
            doc.add_page_break()

        if options.include_table_of_contents and options.include_chapter_titles:
            toc_heading = doc.add_heading("Table of Contents", level=1)
            toc_heading.alignment = WD_ALIGN_PARAGRAPH.CENTER
            for chapter in chapters:
                doc.add_paragraph(options.chapter_heading(chapter.order, chapter.title))
            doc.add_page_break()

        for position, chapter in enumerate(chapters):
            self.check_cancelled(cancel_event)
            if options.chapter_page_breaks and position > 0:
                doc.add_page_break()

            if options.include_chapter_titles:
                if options.include_chapter_numbers:
                    number_heading = doc.add_heading(f"Chapter {chapter.order}", level=2)
                    number_heading.alignment = WD_ALIGN_PARAGRAPH.CENTER
                if chapter.title:
                    title_heading = doc.add_heading(chapter.title, level=2)
                    title_heading.alignment = WD_ALIGN_PARAGRAPH.CENTER

            for paragraph in split_paragraphs(chapter.content):
                if is_scene_break(paragraph):
                    sep = doc.add_paragraph(SCENE_BREAK)
                    sep.alignment = WD_ALIGN_PARAGRAPH.CENTER
                else:
                    para = doc.add_paragraph(paragraph)
                    para.paragraph_format.first_line_indent = Inches(0.3)

        doc.core_properties.title = project.metadata.title or project.name
        doc.core_properties.author = project.metadata.author
        doc.save(options.output_path)

    @staticmethod
    def _apply_layout(doc, options: ExportOptions) -> None:
        style = doc.styles["Normal"]
        style.font.name = options.font_family
        style.font.size = Pt(options.font_size)
        style.paragraph_format.line_spacing = options.line_spacing
        style.paragraph_format.space_after = Pt(10)

        section = doc.sections[0]
        dimensions = PAGE_DIMENSIONS.get(options.page_size)
        if dimensions is not None:
            section.page_width = Inches(dimensions[0])
            section.page_height = Inches(dimensions[1])
        section.top_margin = Inches(options.margins.top)
        section.bottom_margin = Inches(options.margins.bottom)
        section.left_margin = Inches(options.margins.left)
        section.right_margin = Inches(options.margins.right)
