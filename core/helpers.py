"""
Helper functions and utilities
"""
import html
import re

import markdown as md

LABEL_LINE = re.compile(r'^([A-ZÀ-Ý][A-ZÀ-Ý ]+):\s?(.*)$')
MARKDOWN_SPECIAL = re.compile(r'([\\`*_{}\[\]()#+\-.!|])')


def markdown_to_html(text):
    """Convert markdown text to HTML with proper formatting"""
    if not text:
        return ""

    extensions = [
        'nl2br',  # Convert newlines to <br>
        'extra',
    ]
    html_output = md.markdown(text, extensions=extensions, output_format='html')

    # Ensure proper spacing around block elements
    html_output = re.sub(r'(</h[1-6]>)', r'\1\n', html_output)
    html_output = re.sub(r'(</p>)', r'\1\n', html_output)
    return html_output


def escape_text(text):
    """Escape markdown syntax, then HTML, so `text` renders literally"""
    return html.escape(MARKDOWN_SPECIAL.sub(r'\\\1', text))


def preview_to_markdown(preview):
    """Turn the plain preview text into markdown.

    The first line becomes the heading and `LABEL: value` lines get a bold
    label. User supplied text is escaped so it renders literally.
    """
    lines = preview.split('\n')
    if not lines:
        return ""

    out = [f"# {escape_text(lines[0])}"]
    for line in lines[1:]:
        match = LABEL_LINE.match(line)
        if match:
            out.append(f"**{match.group(1)}:** {escape_text(match.group(2))}")
        else:
            out.append(escape_text(line))
    return '\n'.join(out)


def preview_to_html(preview):
    return markdown_to_html(preview_to_markdown(preview))
