from pathlib import Path
from typing import Optional, Union


class PortfolioError(Exception):
    """Base class for portfolio service failures."""


class PortfolioStorageError(PortfolioError):
    """Portfolio file could not be read or written."""

    def __init__(self, message: str, data_path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.data_path = str(data_path) if data_path is not None else None

    def __str__(self) -> str:
        base = super().__str__()
        return f"{base} ({self.data_path})" if self.data_path else base


class PortfolioValidationError(PortfolioError, ValueError):
    """Stored or submitted portfolio does not have the required structure."""


class UnsupportedDocumentError(ValueError):
    """No text extractor exists for the uploaded document type."""

    def __init__(self, content_type: str):
        super().__init__(f"Unsupported content type: {content_type or 'unknown'}")
        self.content_type = content_type
