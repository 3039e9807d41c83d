"""
Upload bytes -> plain text, dispatched on file extension or MIME type.
"""

import logging

from app.core.docx_extractor import extract_docx_text
from app.core.errors import UnsupportedDocumentError
from app.core.pdf_extractor import extract_pdf_text

logger = logging.getLogger(__name__)

DOCX_TYPES = {"application/vnd.openxmlformats-officedocument.wordprocessingml.document"}
PDF_TYPES = {"application/pdf"}
TEXT_TYPES = {"text/plain", "text/markdown"}
TEXT_EXTENSIONS = (".txt", ".md")


def extract_text(raw: bytes, filename: str = "", content_type: str = "") -> str:
    """
    Raises UnsupportedDocumentError when neither the extension nor the
    content type names a supported format.
    """
    filename = (filename or "").lower()
    content_type = (content_type or "").lower()

    if filename.endswith(".docx") or content_type in DOCX_TYPES:
        logger.debug("Extracting DOCX text from '%s'", filename)
        return extract_docx_text(raw)

    if filename.endswith(".pdf") or content_type in PDF_TYPES:
        logger.debug("Extracting PDF text from '%s'", filename)
        return extract_pdf_text(raw)

    if filename.endswith(TEXT_EXTENSIONS) or content_type in TEXT_TYPES:
        return raw.decode("utf-8", errors="replace")

    raise UnsupportedDocumentError(content_type)
