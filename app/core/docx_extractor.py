from io import BytesIO
from typing import Iterator

from docx import Document


def _iter_block_text(doc) -> Iterator[str]:
    for p in doc.paragraphs:
        yield p.text or ""
    # two-column resume templates keep whole sections inside table cells
    for table in doc.tables:
        for row in table.rows:
            for cell in row.cells:
                for p in cell.paragraphs:
                    yield p.text or ""


def extract_docx_text(docx_bytes: bytes) -> str:
    """
    Body paragraphs followed by table-cell paragraphs, one per line.
    Blank paragraphs are kept; line normalization drops them later.
    """
    doc = Document(BytesIO(docx_bytes))
    return "\n".join(_iter_block_text(doc))
