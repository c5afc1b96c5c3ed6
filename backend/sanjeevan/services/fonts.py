# backend/sanjeevan/services/fonts.py

from functools import lru_cache
from pathlib import Path
from typing import FrozenSet, List, NamedTuple, Optional, Tuple

import structlog
from reportlab.lib.fonts import addMapping
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont

from sanjeevan.core.config import settings
from sanjeevan.core.errors import RenderError

logger = structlog.get_logger(__name__)

# Unicode TrueType fonts commonly installed on Linux and macOS hosts.
SYSTEM_FONTS = [
    ("FreeSans", "/usr/share/fonts/truetype/freefont/FreeSans.ttf",
     "/usr/share/fonts/truetype/freefont/FreeSansBold.ttf"),
    ("NotoSansDevanagari", "/usr/share/fonts/truetype/noto/NotoSansDevanagari-Regular.ttf",
     "/usr/share/fonts/truetype/noto/NotoSansDevanagari-Bold.ttf"),
    ("LohitDevanagari", "/usr/share/fonts/truetype/lohit-devanagari/Lohit-Devanagari.ttf", None),
    ("NotoSans", "/usr/share/fonts/truetype/noto/NotoSans-Regular.ttf",
     "/usr/share/fonts/truetype/noto/NotoSans-Bold.ttf"),
    ("DejaVuSans", "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
     "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf"),
    ("ArialUnicode", "/Library/Fonts/Arial Unicode.ttf", None),
]


class FontFamily(NamedTuple):
    regular: str
    bold: str
    # Code points the font can draw; None for the built-in WinAnsi fonts.
    glyphs: Optional[FrozenSet[int]] = None

    def covers_char(self, char: str) -> bool:
        if char.isspace():
            return True
        if self.glyphs is None:
            try:
                char.encode("cp1252")
            except UnicodeEncodeError:
                return False
            return True
        return ord(char) in self.glyphs

    def covers(self, text: str) -> bool:
        return all(self.covers_char(c) for c in text)


BUILTIN_FAMILY = FontFamily("Helvetica", "Helvetica-Bold")


def _register(name: str, regular_path: str, bold_path: Optional[str]) -> FontFamily:
    regular = TTFont(name, regular_path)
    pdfmetrics.registerFont(regular)
    bold_name = name
    if bold_path and Path(bold_path).is_file():
        bold_name = f"{name}-Bold"
        pdfmetrics.registerFont(TTFont(bold_name, bold_path))

    # Paragraph markup such as <i> resolves through the family mapping.
    addMapping(name, 0, 0, name)
    addMapping(name, 1, 0, bold_name)
    addMapping(name, 0, 1, name)
    addMapping(name, 1, 1, bold_name)
    return FontFamily(name, bold_name, frozenset(regular.face.charToGlyph))


def _candidates() -> List[Tuple[str, str, Optional[str]]]:
    candidates = []
    if settings.PDF_FONT_PATH:
        candidates.append(("Sanjeevan-Configured", settings.PDF_FONT_PATH, settings.PDF_BOLD_FONT_PATH))
    candidates.extend((f"Sanjeevan-{name}", regular, bold) for name, regular, bold in SYSTEM_FONTS)
    return candidates


@lru_cache(maxsize=None)
def available_families() -> Tuple[FontFamily, ...]:
    """Fonts usable for documents, in order of preference."""
    configured, system = [], []
    for name, regular, bold in _candidates():
        if not Path(regular).is_file():
            continue
        try:
            family = _register(name, regular, bold)
        except (TTFError, OSError) as e:
            logger.warning("pdf_font_unusable", path=regular, error=str(e))
            continue
        (configured if name == "Sanjeevan-Configured" else system).append(family)

    families = tuple(configured + [BUILTIN_FAMILY] + system)
    logger.debug("pdf_fonts_available", fonts=[f.regular for f in families])
    return families


def select_font(text: str) -> FontFamily:
    """
    Pick the first font that can draw every character of ``text``.

    Raises:
        RenderError: if no available font covers the text.
    """
    families = available_families()
    for family in families:
        if family.covers(text):
            return family

    missing = sorted({c for c in text if not any(f.covers_char(c) for f in families)})
    if not missing:
        # Every character is drawable, just not by a single font.
        missing = sorted({c for c in text if not families[0].covers_char(c)})
    raise RenderError(
        "No installed font can draw characters "
        f"{''.join(missing[:20])!r}; set PDF_FONT_PATH to a Unicode TrueType font"
    )
