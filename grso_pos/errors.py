"""Domain exceptions raised by the catalog store and its boundaries."""

from __future__ import annotations


class PosError(Exception):
    """Base class for every error raised by the point-of-sale core."""


class CatalogValidationError(PosError, ValueError):
    """Input rejected before any state mutation was attempted."""


class EmptyCartError(CatalogValidationError):
    """A checkout was requested for a cart without lines."""

    def __init__(self) -> None:
        super().__init__("Cannot complete a transaction with an empty cart")


class ProductNotFoundError(PosError, LookupError):
    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id


class CsvImportError(CatalogValidationError):
    """The inventory CSV could not be turned into import rows.

    Either ``missing_headers`` lists the required columns that were not found,
    or ``line`` holds the 1-based line number of the first invalid row.
    """

    def __init__(
        self,
        message: str,
        *,
        line: int | None = None,
        missing_headers: list[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.line = line
        self.missing_headers = missing_headers or []


class BackupFormatError(CatalogValidationError):
    """The restore document is not valid JSON or lacks required sections."""


class PersistenceError(PosError):
    """The durable storage slot could not be read or written."""


class UnknownUserError(PosError, LookupError):
    def __init__(self, user_id: int) -> None:
        super().__init__(f"Unknown user {user_id}")
        self.user_id = user_id


class ForbiddenRoleError(PosError):
    """The selected user's role does not grant access to the operation."""
