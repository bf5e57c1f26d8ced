"""Library exception types."""

from __future__ import annotations


class InitialDataError(ValueError):
    """Raised when the wizard `initialData` query payload cannot be decoded."""

    def __init__(self, message: str, *, raw: str | None = None) -> None:
        super().__init__(message)
        self.raw = raw
