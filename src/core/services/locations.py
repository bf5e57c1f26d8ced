"""Helpers around the ambient page location.

The current page URL and the console base path are passed in explicitly
instead of being read from globals.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from adapters.k8s_selectors import get_name, get_namespace
from core.domain.models import UrlParts
from core.domain.routes import VIRTUALMACHINES_BASE_URL
from core.domain.wizard import VMTab
from core.interfaces.navigator import Navigator

logger = logging.getLogger(__name__)

# Schemes with a tuple origin; everything else (file:, data:, about:) is opaque.
_SPECIAL_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp"})
_FORBIDDEN_DOMAIN_CHARS = frozenset("#%/:<>?@[\\]^|")
_MAX_PORT = 65535


def _hostname(url: httpx.URL) -> str:
    host = url.raw_host.decode("ascii")
    if ":" in host:
        return f"[{host}]"
    return host


def _is_valid_domain(hostname: str) -> bool:
    if hostname.startswith("["):
        return True
    return not any(ch in _FORBIDDEN_DOMAIN_CHARS or ord(ch) < 0x21 or ord(ch) == 0x7F for ch in hostname)


def parse_url(url: str) -> UrlParts | None:
    """Parse an absolute URL into `UrlParts`.

    Returns `None` for malformed input and for relative references, so callers
    can treat "not parseable" as a normal branch.
    """

    raw = url.strip()
    try:
        parsed = httpx.URL(raw)
        hostname = _hostname(parsed)
        pathname = parsed.raw_path.decode("ascii").split("?", 1)[0]
        href = str(parsed)
    except (httpx.InvalidURL, UnicodeError) as exc:
        logger.debug("unparseable URL %r: %s", url, exc)
        return None

    scheme = parsed.scheme
    if not scheme:
        return None
    if not _is_valid_domain(hostname):
        return None
    if parsed.port is not None and not 0 <= parsed.port <= _MAX_PORT:
        return None
    port = str(parsed.port) if parsed.port is not None else ""

    if scheme in _SPECIAL_SCHEMES:
        if not hostname:
            return None
        origin = f"{scheme}://{hostname}{f':{port}' if port else ''}"
        pathname = pathname or "/"
    else:
        # httpx drops an empty authority (file:///x -> file:/x); keep the input.
        origin = "null"
        href = raw

    return UrlParts(
        href=href,
        origin=origin,
        hostname=hostname,
        pathname=pathname,
        port=port,
    )


def is_connection_encrypted(href: str) -> bool:
    parts = parse_url(href)
    return parts is not None and parts.href.lower().startswith("https:")


def get_console_api_base(base_path: str) -> str:
    """Base path without its leading slash, ready to be joined by the console client."""

    return base_path[1:] if base_path.startswith("/") else base_path


def get_vm_tab_url(vm: Mapping[str, Any], tab: VMTab | str) -> str:
    tab_name = tab.value if isinstance(tab, VMTab) else tab
    return f"/ns/{get_namespace(vm)}/{VIRTUALMACHINES_BASE_URL}/{get_name(vm)}/{tab_name}"


def redirect_to_tab(tab_path: str, navigator: Navigator) -> bool:
    """Push `tab_path` unless the current page already shows it.

    Returns whether a navigation was issued.
    """

    current = navigator.current_pathname()
    if current and tab_path in current:
        return False
    navigator.push(tab_path)
    return True
