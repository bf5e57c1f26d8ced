"""Run script.

Allows `python -m main` from `src/` during development, next to the
`vm-links` console script.
"""

from __future__ import annotations

import sys

# Rich prints the ellipsis marker; cp1252 Windows consoles cannot encode it.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
