"""Helpers for endpoints that return a file download."""

from __future__ import annotations

from datetime import UTC, date, datetime

from fastapi import Response

CSV_MEDIA_TYPE = "text/csv; charset=utf-8"
JSON_MEDIA_TYPE = "application/json"


def dated_filename(prefix: str, extension: str, today: date | None = None) -> str:
    """Build names such as ``inventaire-2024-05-01.csv``."""

    today = today or datetime.now(UTC).date()
    return f"{prefix}-{today.isoformat()}.{extension}"


def attachment(content: str, filename: str, media_type: str) -> Response:
    return Response(
        content=content.encode("utf-8"),
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
