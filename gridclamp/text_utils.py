"""Text utilities relying on ReportLab width metrics."""
from typing import List

from reportlab.pdfbase.pdfmetrics import stringWidth

from .constants import ELLIPSIS


def _wrap_paragraph(paragraph: str, font_name: str, font_size: float, max_width: float) -> List[str]:
    words = paragraph.split()
    lines: List[str] = []
    current = ""
    for w in words:
        candidate = (current + " " + w).strip()
        if stringWidth(candidate, font_name, font_size) <= max_width:
            current = candidate
            continue
        if current:
            lines.append(current)
            current = ""
        if stringWidth(w, font_name, font_size) <= max_width:
            current = w
            continue
        # A single word wider than the line: split by characters
        segment = ""
        for ch in w:
            if segment and stringWidth(segment + ch, font_name, font_size) > max_width:
                lines.append(segment)
                segment = ch
            else:
                segment += ch
        current = segment
    if current:
        lines.append(current)
    return lines


def wrap_text_to_width(text: str, font_name: str, font_size: float, max_width: float) -> List[str]:
    """Wrap text into lines that do not exceed max_width using ReportLab width metrics.

    Explicit newlines start a new paragraph; an empty paragraph between two
    others still takes a line. Falls back to character-level splitting if a
    single word exceeds max_width. Returns a list of lines (strings).
    """
    if text is None or str(text).strip() == "":
        return []
    paragraphs = str(text).strip().splitlines()
    lines: List[str] = []
    for paragraph in paragraphs:
        wrapped = _wrap_paragraph(paragraph, font_name, font_size, max_width)
        lines.extend(wrapped if wrapped else [""])
    return lines


def clamp_lines(lines: List[str], line_count: int, font_name: str, font_size: float, max_width: float) -> List[str]:
    """Return the lines left visible when clamping to line_count.

    When content is cut, the last visible line ends with an ellipsis and is
    shortened until it fits max_width again.
    """
    if line_count >= len(lines):
        return list(lines)
    if line_count <= 0:
        return []
    visible = list(lines[:line_count])
    last = visible[-1].rstrip()
    while last and stringWidth(last + ELLIPSIS, font_name, font_size) > max_width:
        last = last[:-1].rstrip()
    visible[-1] = last + ELLIPSIS
    return visible
