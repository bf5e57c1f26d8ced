"""In-memory navigator.

Stands in for the browser router in the CLI and in tests: it records every
push and treats the latest entry as the current page.
"""

from __future__ import annotations

import logging

from core.interfaces.navigator import Navigator

logger = logging.getLogger(__name__)


class MemoryHistory(Navigator):
    """A history stack that never leaves the process."""

    def __init__(self, initial_path: str = "/") -> None:
        self._entries: list[str] = [initial_path]

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)

    @property
    def pushed(self) -> tuple[str, ...]:
        """Paths pushed after construction."""

        return tuple(self._entries[1:])

    def push(self, path: str) -> None:
        logger.debug("history push: %s", path)
        self._entries.append(path)

    def current_pathname(self) -> str:
        # Entries may carry a query or fragment; only the pathname counts.
        current = self._entries[-1]
        for sep in ("?", "#"):
            current = current.split(sep, 1)[0]
        return current
