"""Leave a resource's page once the resource is gone.

Call `redirect_to_list` only after the delete has been acknowledged;
otherwise the pathname check runs against a page that is still valid.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Literal, Mapping

from adapters.k8s_selectors import get_name, get_namespace
from core.domain.routes import vm_list_url
from core.interfaces.navigator import Navigator

logger = logging.getLogger(__name__)

ListTab = Literal["templates", ""]


def viewing_resource_pattern(name: str) -> re.Pattern[str]:
    """Matches `/<name>` followed by a separator or the end of the path."""

    return re.compile(rf"/{re.escape(name)}(/|$)")


def redirect_to_list(
    resource: Mapping[str, Any],
    navigator: Navigator,
    tab: ListTab | None = None,
) -> bool:
    """Navigate to the namespace's list view if `resource` is on screen.

    Returns whether a navigation was issued; not viewing the resource is not
    an error.
    """

    name = get_name(resource)
    if not name:
        return False

    pathname = navigator.current_pathname()
    if not viewing_resource_pattern(name).search(pathname):
        return False

    target = vm_list_url(get_namespace(resource) or "", tab)
    logger.info("%s was deleted while displayed, redirecting to %s", name, target)
    navigator.push(target)
    return True
