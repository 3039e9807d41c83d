from functools import lru_cache
from typing import Tuple

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool

from app.core.enrichment import Enricher, build_enrichers
from app.core.errors import UnsupportedDocumentError
from app.core.resume_parser import parse_resume_text
from app.core.schemas import ParsedResume
from app.core.settings import get_settings
from app.core.text_parser import extract_text
from app.core.website_lookup import WebsiteLookupService

router = APIRouter(tags=["parse"])


@lru_cache()
def get_enrichers() -> Tuple[Enricher, Enricher]:
    """Process-wide enrichers, so websites found by lookup stay cached between uploads."""
    settings = get_settings()
    lookup = None
    if settings.website_lookup_enabled:
        lookup = WebsiteLookupService(timeout=settings.lookup_timeout_seconds, search_url=settings.search_url)
    return build_enrichers(
        lookup,
        timeout=settings.lookup_timeout_seconds,
        max_workers=settings.lookup_max_workers,
    )


async def read_upload_text(file: UploadFile) -> str:
    """Upload -> extracted text, with the HTTP errors shared by every upload route."""
    raw = await file.read()
    if not raw:
        raise HTTPException(status_code=400, detail="Empty file uploaded.")
    if len(raw) > get_settings().max_upload_bytes:
        raise HTTPException(status_code=413, detail="File too large.")

    try:
        text = await run_in_threadpool(extract_text, raw, file.filename or "", file.content_type or "")
    except UnsupportedDocumentError as e:
        raise HTTPException(status_code=415, detail=str(e))

    if not text.strip():
        raise HTTPException(
            status_code=422,
            detail="File appears to have no extractable text. OCR is not supported.",
        )
    return text


async def parse_upload(file: UploadFile, enrichers: Tuple[Enricher, Enricher]) -> ParsedResume:
    text = await read_upload_text(file)
    company_enricher, education_enricher = enrichers
    return await run_in_threadpool(parse_resume_text, text, company_enricher, education_enricher)


@router.post(
    "/parse",
    response_model=ParsedResume,
    response_model_by_alias=True,
    summary="Parse Resume",
    description="Extract personal info, work experience, education and skills from a resume file (DOCX, PDF, or TXT).",
    responses={
        400: {"description": "Empty file uploaded"},
        413: {"description": "File too large"},
        415: {"description": "Unsupported file format"},
        422: {"description": "File has no extractable text"},
    },
)
async def parse_resume(
    file: UploadFile = File(..., description="Resume file (DOCX, PDF, or TXT format)"),
    enrichers: Tuple[Enricher, Enricher] = Depends(get_enrichers),
):
    """
    Parse a resume file without touching the stored portfolio.

    **Supported formats:**
    - DOCX (.docx)
    - PDF (.pdf) - text-layer extraction only, OCR not supported
    - TXT (.txt, .md)

    Companies and institutions are decorated with a `website` when one can be resolved.
    """
    return await parse_upload(file, enrichers)
