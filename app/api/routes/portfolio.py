import logging
from typing import Tuple

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from app.api.routes.parse import get_enrichers, parse_upload
from app.core.enrichment import Enricher
from app.core.errors import PortfolioError
from app.core.portfolio_service import PortfolioService
from app.core.schemas import Portfolio
from app.core.settings import get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


def get_portfolio_service() -> PortfolioService:
    return PortfolioService(get_settings().data_path)


@router.get("", response_model=Portfolio, response_model_by_alias=True, summary="Get Portfolio")
def read_portfolio(service: PortfolioService = Depends(get_portfolio_service)):
    try:
        portfolio = service.get_portfolio()
    except PortfolioError as e:
        logger.error("Failed to load portfolio: %s", e)
        raise HTTPException(status_code=500, detail="Failed to read portfolio data.")
    if portfolio is None:
        raise HTTPException(status_code=404, detail="Portfolio not found.")
    return portfolio


@router.post(
    "/resume",
    response_model=Portfolio,
    response_model_by_alias=True,
    summary="Update Portfolio From Resume",
    responses={
        400: {"description": "Empty file uploaded"},
        413: {"description": "File too large"},
        415: {"description": "Unsupported file format"},
        422: {"description": "File has no extractable text"},
    },
)
async def upload_resume(
    file: UploadFile = File(..., description="Resume file (DOCX, PDF, or TXT format)"),
    enrichers: Tuple[Enricher, Enricher] = Depends(get_enrichers),
    service: PortfolioService = Depends(get_portfolio_service),
):
    """Parse the resume, merge it into the stored portfolio and save it."""
    parsed = await parse_upload(file, enrichers)
    try:
        return service.update_from_resume(parsed)
    except PortfolioError as e:
        logger.error("Failed to update portfolio: %s", e)
        raise HTTPException(status_code=500, detail="Failed to save portfolio data.")
