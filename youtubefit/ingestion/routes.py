"""CSV import API routes."""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger
from pydantic import BaseModel
from sqlalchemy.orm import Session

from youtubefit.config.settings import settings
from youtubefit.db.session import get_db
from youtubefit.ingestion.csv_import import ImportResult, import_history_from_csv, import_workouts_from_csv

router = APIRouter(prefix="/import", tags=["import"])


class ImportRequest(BaseModel):
    """Server-side CSV path. Omitted means the configured default file."""

    file: str | None = None


class ImportResponse(BaseModel):
    message: str
    imported: int
    skipped: int
    errors: list[str] | None = None


def _resolve_path(request: ImportRequest | None, default: str) -> Path:
    path = Path(request.file if request and request.file else default)
    if not path.is_file():
        logger.warning(f"Import file not found: {path}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"CSV file not found: {path}")
    return path


def _to_response(message: str, result: ImportResult) -> ImportResponse:
    return ImportResponse(
        message=message,
        imported=result.imported,
        skipped=result.skipped,
        errors=result.errors or None,
    )


@router.post("/csv", response_model=ImportResponse)
def import_workouts(request: ImportRequest | None = None, db: Session = Depends(get_db)) -> ImportResponse:
    """Import the workout catalog from a CSV file."""
    path = _resolve_path(request, settings.workouts_csv_path)
    return _to_response("Import completed", import_workouts_from_csv(db, path))


@router.post("/history", response_model=ImportResponse)
def import_history(request: ImportRequest | None = None, db: Session = Depends(get_db)) -> ImportResponse:
    """Import completed sessions from a CSV file. Referenced workouts must exist."""
    path = _resolve_path(request, settings.history_csv_path)
    return _to_response("History import completed", import_history_from_csv(db, path))
