"""Font registration so measurement uses the same metrics as the renderer."""
import logging
import os
from typing import Iterable, List, Optional

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

# Built-in Type 1 font, always available to ReportLab
FALLBACK_FONT_NAME = "Helvetica"

# Candidate families tried when no font is requested explicitly
CANDIDATES = [
    ("Arial", ["arial.ttf", "ARIAL.TTF", "Arial.ttf"]),
    ("SegoeUI", ["segoeui.ttf", "SEGOEUI.TTF"]),
    ("DejaVuSans", ["DejaVuSans.ttf"]),
    ("NotoSans", ["NotoSans-Regular.ttf"]),
    ("LiberationSans", ["LiberationSans-Regular.ttf"]),
]

logger = logging.getLogger(__name__)


def font_dirs() -> List[str]:
    """Directories searched for TrueType files, most specific first."""
    dirs = []
    extra = os.environ.get("GRIDCLAMP_FONT_DIR")
    if extra:
        dirs.append(extra)
    dirs.append(os.path.abspath("."))
    dirs.append(os.path.join(os.environ.get("WINDIR", r"C:\\Windows"), "Fonts"))
    dirs.extend(["/usr/share/fonts/truetype/dejavu", "/usr/share/fonts/truetype/liberation", "/Library/Fonts"])
    return dirs


def find_font_file(possible_names: Iterable[str], search_dirs: Optional[List[str]] = None) -> Optional[str]:
    for d in search_dirs if search_dirs is not None else font_dirs():
        for name in possible_names:
            p = os.path.join(d, name)
            if os.path.isfile(p):
                return p
    return None


def is_registered(font_name: str) -> bool:
    """True if ReportLab can measure with font_name (built-in or registered)."""
    try:
        pdfmetrics.getFont(font_name)
    except Exception:
        return False
    return True


def resolve_font(font_name: Optional[str] = None, search_dirs: Optional[List[str]] = None) -> str:
    """Return a font name ReportLab can measure with.

    A requested name that is already known (built-in or registered) is used
    as is; otherwise a ``<name>.ttf`` file is looked up and registered. With
    no request the candidate families are tried in order. Falls back to
    Helvetica when nothing can be registered.
    """
    if font_name and is_registered(font_name):
        return font_name

    if font_name:
        candidates = [(font_name, [f"{font_name}.ttf", f"{font_name}.TTF"])]
    else:
        candidates = CANDIDATES

    for family, file_names in candidates:
        path = find_font_file(file_names, search_dirs)
        if not path:
            continue
        try:
            pdfmetrics.registerFont(TTFont(family, path))
        except Exception:
            logger.debug("Could not register font %s from %s", family, path, exc_info=True)
            continue
        logger.debug("Registered font %s from %s", family, path)
        return family

    if font_name:
        logger.warning("Font %r not found; measuring with %s instead", font_name, FALLBACK_FONT_NAME)
    return FALLBACK_FONT_NAME
