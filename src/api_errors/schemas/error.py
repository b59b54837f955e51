"""Error response schemas.

All error responses use the same envelope: {"errors": [{"status": ..., "key": "...", "detail": "..."}]}.
The translator builds these from classified exceptions; both models are frozen,
so the derived status of an envelope never changes after construction.
"""

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict

DEFAULT_ERROR_STATUS = 400


class ErrorEntry(BaseModel):
    """One reported problem: HTTP status, catalog key and human-readable detail."""

    model_config = ConfigDict(frozen=True)

    status: int
    key: str
    detail: str


class ErrorResponse(BaseModel):
    """Top-level error envelope returned by all error responses."""

    model_config = ConfigDict(frozen=True)

    errors: tuple[ErrorEntry, ...] = ()

    @classmethod
    def build(cls, errors: Iterable[ErrorEntry] | None) -> "ErrorResponse":
        """Wrap entries as-is, keeping their order. ``None`` means no entries."""
        return cls(errors=tuple(errors) if errors is not None else ())

    @property
    def status(self) -> int:
        """Status of the first entry, or 400 when there are none."""
        if not self.errors:
            return DEFAULT_ERROR_STATUS
        return self.errors[0].status
