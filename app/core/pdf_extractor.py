from io import BytesIO
from typing import Any, List, Optional, Tuple
import re

import pdfplumber


def _words_to_text(page: Any, *, x_tolerance: float = 3, y_tolerance: float = 2, line_y_tolerance: float = 3) -> str:
    """
    Extract text from a PDF page using word objects.

    Words are grouped into lines by their rounded 'top' coordinate and joined
    with single spaces, which avoids the glued and over-spaced words that
    layout-based extraction produces on many resume templates.
    """
    words = page.extract_words(
        x_tolerance=x_tolerance,
        y_tolerance=y_tolerance,
        keep_blank_chars=False,
        use_text_flow=True,
    )
    if not words:
        return ""

    words.sort(key=lambda w: (round(w["top"] / line_y_tolerance), w["x0"]))
    lines: List[str] = []
    current_key = None
    current_words: List[str] = []

    for w in words:
        key = round(w["top"] / line_y_tolerance)
        if current_key is None or key == current_key:
            current_words.append(w["text"])
            current_key = key
        else:
            lines.append(" ".join(current_words))
            current_words = [w["text"]]
            current_key = key

    if current_words:
        lines.append(" ".join(current_words))

    return "\n".join(lines)


def _score_text(s: str) -> float:
    """
    Lower is better. Penalizes glued words (18+ letter tokens) and
    fragmentation (more than 10 single-letter tokens).
    """
    tokens = re.findall(r"[A-Za-z]+", s)
    if not tokens:
        return 1e9

    long_glued = sum(1 for t in tokens if len(t) >= 18)
    one_letter_count = sum(1 for t in tokens if len(t) == 1)
    excessive_singles = max(0, one_letter_count - 10)

    return long_glued * 10 + excessive_singles * 3


def _extract_best(page: Any, x_tolerance_range: Optional[List[float]] = None) -> Tuple[str, float]:
    """Try several x_tolerance values; keep the text with the best score."""
    if x_tolerance_range is None:
        x_tolerance_range = [1.5, 2, 2.5, 3]

    candidates = []
    for xt in x_tolerance_range:
        txt = _words_to_text(page, x_tolerance=xt)
        candidates.append((_score_text(txt), xt, txt))

    candidates.sort(key=lambda c: c[0])
    _, best_xt, best_txt = candidates[0]
    return best_txt, best_xt


def extract_pdf_text(pdf_bytes: bytes) -> str:
    """
    Text layer of every page, pages separated by a newline.
    Scanned PDFs without a text layer give ''; OCR is not attempted.
    """
    pages: List[str] = []
    with pdfplumber.open(BytesIO(pdf_bytes)) as pdf:
        for page in pdf.pages:
            text, _ = _extract_best(page)
            if text.strip():
                pages.append(text)
    return "\n".join(pages)
