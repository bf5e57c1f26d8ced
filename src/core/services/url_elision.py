"""Display shortening of URLs.

Hostnames lose their leftmost labels and pathnames their leading segments;
the dropped part is replaced by an ellipsis. Budgets are inclusive: a
component that fits exactly is returned untouched.
"""

from __future__ import annotations

from core.config import AppSettings
from core.domain.models import UrlParts
from core.services.locations import parse_url

ELLIPSIS = "…"
OPAQUE_ORIGIN = "null"


def ellipsize_left(word: str) -> str:
    return f"{ELLIPSIS}{word}"


def resolve_origin(parts: UrlParts, max_hostname_parts: int) -> str:
    """Return the origin, keeping only the rightmost `max_hostname_parts` labels."""

    hostname_parts = parts.hostname.split(".")
    if len(hostname_parts) <= max_hostname_parts:
        return parts.origin

    resolved_hostname = ".".join(hostname_parts[len(hostname_parts) - max_hostname_parts :])
    resolved_port = f":{parts.port}" if parts.port else ""
    return f"{ellipsize_left(resolved_hostname)}{resolved_port}"


def resolve_pathname(parts: UrlParts, max_pathname_parts: int) -> str:
    """Return the pathname, keeping only the last `max_pathname_parts` segments.

    A shortened path reads `/…/<segments>`.
    """

    pathname_parts = [part for part in parts.pathname.split("/") if part]
    if len(pathname_parts) <= max_pathname_parts:
        return parts.pathname

    resolved_pathname = "/".join(pathname_parts[len(pathname_parts) - max_pathname_parts :])
    return f"/{ellipsize_left(f'/{resolved_pathname}')}"


def resolve_url(parts: UrlParts, max_hostname_parts: int, max_pathname_parts: int) -> str:
    if parts.origin == OPAQUE_ORIGIN:
        return parts.href
    return f"{resolve_origin(parts, max_hostname_parts)}{resolve_pathname(parts, max_pathname_parts)}"


def shorten_url(
    url: str,
    max_hostname_parts: int | None = None,
    max_pathname_parts: int | None = None,
    *,
    settings: AppSettings | None = None,
) -> str | None:
    """Parse `url` and shorten it; `None` when it is not a parseable absolute URL.

    Missing budgets fall back to `AppSettings`.
    """

    parts = parse_url(url)
    if parts is None:
        return None
    if max_hostname_parts is None or max_pathname_parts is None:
        settings = settings or AppSettings()
        if max_hostname_parts is None:
            max_hostname_parts = settings.max_hostname_parts
        if max_pathname_parts is None:
            max_pathname_parts = settings.max_pathname_parts
    return resolve_url(parts, max_hostname_parts, max_pathname_parts)
