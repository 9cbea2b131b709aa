"""
File handling utilities
"""
import textwrap

import fitz  # PyMuPDF
from django.utils.text import slugify

# A4 in points
PAGE_WIDTH = 595
PAGE_HEIGHT = 842
MARGIN = 72
FONT_SIZE = 11
LINE_HEIGHT = FONT_SIZE * 1.4
WRAP_WIDTH = 85


def wrap_lines(text, width=WRAP_WIDTH):
    """Hard-wrap text for fixed-width PDF output, keeping blank lines"""
    wrapped = []
    for line in text.split('\n'):
        if not line.strip():
            wrapped.append('')
            continue
        wrapped.extend(textwrap.wrap(line, width=width) or [''])
    return wrapped


def render_text_to_pdf(text, title=None):
    """Render plain text into a PDF document and return its bytes"""
    lines = wrap_lines(text)
    lines_per_page = int((PAGE_HEIGHT - 2 * MARGIN) // LINE_HEIGHT)

    doc = fitz.open()
    try:
        if title:
            doc.set_metadata({'title': title, 'creator': 'ContratoPronto'})

        for start in range(0, max(len(lines), 1), lines_per_page):
            page = doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
            y = MARGIN
            for line in lines[start:start + lines_per_page]:
                if line:
                    page.insert_text((MARGIN, y), line, fontsize=FONT_SIZE, fontname='helv')
                y += LINE_HEIGHT

        return doc.tobytes()
    finally:
        doc.close()


def get_secure_filename(original_filename, extension=None):
    """Generate a safe download filename from free text"""
    safe_name = slugify(original_filename)[:50] or 'contrato'
    if extension:
        return f"{safe_name}.{extension}"
    return safe_name
