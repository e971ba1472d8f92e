"""Full-state backup documents and restore parsing."""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from grso_pos.errors import BackupFormatError
from grso_pos.models.catalog import CatalogState

BACKUP_SECTIONS = ("products", "transactions", "categories")


def build_backup(state: CatalogState) -> dict[str, Any]:
    """Return a document holding exactly the three state sections."""

    return state.model_dump(mode="json", by_alias=True, include=set(BACKUP_SECTIONS))


def dump_backup(state: CatalogState) -> str:
    return json.dumps(build_backup(state), indent=2, ensure_ascii=False)


def parse_backup(raw: str | bytes) -> CatalogState:
    """Parse a backup document into a state that replaces the current one.

    Each section must be present and not null; empty lists are valid and
    restoring them empties the catalog.

    Raises:
        BackupFormatError: If the document is not JSON, misses a section, or
            a section does not have the expected shape.
    """

    try:
        document = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise BackupFormatError(f"Backup file is not valid JSON: {exc}") from exc

    if not isinstance(document, dict):
        raise BackupFormatError("Invalid backup file: expected a JSON object")

    missing = [section for section in BACKUP_SECTIONS if document.get(section) is None]
    if missing:
        raise BackupFormatError(
            f"Invalid backup file, missing required sections: {', '.join(missing)}"
        )

    try:
        return CatalogState.model_validate(
            {section: document[section] for section in BACKUP_SECTIONS}
        )
    except ValidationError as exc:
        raise BackupFormatError(f"Invalid backup file: {exc}") from exc
