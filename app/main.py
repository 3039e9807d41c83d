import logging

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from app.api.routes.parse import router as parse_router
from app.api.routes.portfolio import router as portfolio_router
from app.core.settings import get_settings

settings = get_settings()
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

app = FastAPI(
    title="Portfolio Builder (Resume Extraction Service)",
    description="Heuristic resume parsing service that turns DOCX/PDF/TXT resumes into a persisted portfolio",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

app.include_router(parse_router)
app.include_router(portfolio_router)

@app.get("/", tags=["health"])
def root():
    return {"service": "portfolio-builder", "status": "running"}

@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}

def custom_openapi():
    """Generate OpenAPI schema with custom settings."""
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title="Portfolio Builder API",
        version="0.1.0",
        description="Resume parsing and portfolio persistence API",
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema

app.openapi = custom_openapi
