"""Navigation contract.

Protocol keeps the services testable without a browser: any object with
`push` and `current_pathname` will do.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Navigator(Protocol):
    """Minimal read/write view over the client-side router."""

    def push(self, path: str) -> None:
        """Navigate to `path`, adding a history entry."""

        ...

    def current_pathname(self) -> str:
        """Pathname of the page currently displayed."""

        ...
