"""
Portfolio assembly and JSON persistence.

The stored document is a single camelCase JSON file holding one Portfolio.
Parsing a new resume merges into it: personal info keeps stored values
wherever the new resume left a field empty, the record lists are replaced.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import ValidationError

from app.core.errors import PortfolioStorageError, PortfolioValidationError
from app.core.schemas import ParsedResume, PersonalInfo, Portfolio

logger = logging.getLogger(__name__)

REQUIRED_LISTS = ("workExperience", "education", "skills", "projects")


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def validate_portfolio_document(doc: Any) -> Portfolio:
    """Check the raw JSON shape, then let pydantic validate the fields."""
    if not isinstance(doc, dict):
        raise PortfolioValidationError("Portfolio must be an object")
    if not isinstance(doc.get("personalInfo"), dict):
        raise PortfolioValidationError("Portfolio must have personalInfo object")
    for key in REQUIRED_LISTS:
        if not isinstance(doc.get(key), list):
            raise PortfolioValidationError(f"Portfolio must have {key} array")

    try:
        return Portfolio.model_validate(doc)
    except ValidationError as e:
        raise PortfolioValidationError(f"Invalid portfolio document: {e}") from e


def merge_personal_info(parsed: PersonalInfo, existing: Optional[PersonalInfo]) -> PersonalInfo:
    if existing is None:
        return parsed.model_copy()
    merged = {
        name: getattr(parsed, name) or getattr(existing, name)
        for name in PersonalInfo.model_fields
    }
    return PersonalInfo(**merged)


class PortfolioService:
    def __init__(self, data_path: Union[str, Path]):
        self.data_path = Path(data_path)

    def get_portfolio(self) -> Optional[Portfolio]:
        """Stored portfolio, or None when nothing has been saved yet."""
        try:
            raw = self.data_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise PortfolioStorageError(f"Failed to read portfolio data: {e}", self.data_path) from e

        try:
            doc = json.loads(raw)
        except json.JSONDecodeError as e:
            raise PortfolioStorageError(f"Portfolio data is not valid JSON: {e}", self.data_path) from e

        try:
            return validate_portfolio_document(doc)
        except PortfolioValidationError as e:
            raise PortfolioStorageError(str(e), self.data_path) from e

    def update_from_resume(self, parsed: ParsedResume) -> Portfolio:
        existing = self.get_portfolio()

        portfolio = Portfolio(
            personal_info=merge_personal_info(
                parsed.personal_info,
                existing.personal_info if existing else None,
            ),
            work_experience=[
                exp.model_copy(update={"id": exp.id or f"exp_{i}"})
                for i, exp in enumerate(parsed.work_experience, start=1)
            ],
            education=[
                edu.model_copy(update={"id": edu.id or f"edu_{i}"})
                for i, edu in enumerate(parsed.education, start=1)
            ],
            skills=[s.model_copy() for s in parsed.skills],
            projects=[
                proj.model_copy(update={"id": proj.id or f"proj_{i}"})
                for i, proj in enumerate(parsed.projects, start=1)
            ],
            last_updated=utc_timestamp(),
        )
        self.save_portfolio(portfolio)
        return portfolio

    def save_portfolio(self, portfolio: Portfolio) -> None:
        # round-trip through the JSON shape so the stored file always passes get_portfolio()
        doc = portfolio.model_dump(mode="json", by_alias=True)
        validate_portfolio_document(doc)

        try:
            self.data_path.parent.mkdir(parents=True, exist_ok=True)
            self.data_path.write_text(json.dumps(doc, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as e:
            raise PortfolioStorageError(f"Failed to save portfolio data: {e}", self.data_path) from e

        logger.info(
            "Saved portfolio to %s (%d experiences, %d education entries, %d skills)",
            self.data_path,
            len(portfolio.work_experience),
            len(portfolio.education),
            len(portfolio.skills),
        )
