"""Base-path builders for the console router.

Each builder owns its own prefix convention and receives an already encoded
query string (including the leading `?`, or empty).
"""

from __future__ import annotations

from core.domain.wizard import NEW_RESOURCE_TOKEN

VIRTUALMACHINES_BASE_URL = "virtualmachines"
VIRTUALMACHINES_TEMPLATES_BASE_URL = "virtualmachinetemplates"

DEFAULT_NAMESPACE = "default"


def _ns(namespace: str | None, default_namespace: str) -> str:
    return namespace or default_namespace


def wizard_base_url(
    namespace: str | None,
    params: str = "",
    *,
    default_namespace: str = DEFAULT_NAMESPACE,
) -> str:
    """Basic "create from template" wizard."""

    return f"/k8s/ns/{_ns(namespace, default_namespace)}/{VIRTUALMACHINES_BASE_URL}/{NEW_RESOURCE_TOKEN}-from-template{params}"


def customize_wizard_base_url(
    namespace: str | None,
    params: str = "",
    *,
    default_namespace: str = DEFAULT_NAMESPACE,
) -> str:
    """Full customize/import wizard."""

    return f"/k8s/ns/{_ns(namespace, default_namespace)}/{VIRTUALMACHINES_BASE_URL}/{NEW_RESOURCE_TOKEN}/wizard{params}"


def yaml_base_url(namespace: str | None, *, default_namespace: str = DEFAULT_NAMESPACE) -> str:
    """YAML editor for a new virtual machine; it takes no query."""

    return f"/k8s/ns/{_ns(namespace, default_namespace)}/{VIRTUALMACHINES_BASE_URL}/{NEW_RESOURCE_TOKEN}"


def instantiate_template_base_url(
    namespace: str | None,
    params: str = "",
    *,
    default_namespace: str = DEFAULT_NAMESPACE,
) -> str:
    """Dedicated "instantiate template" page (SAP HANA flow)."""

    return f"/k8s/ns/{_ns(namespace, default_namespace)}/{VIRTUALMACHINES_TEMPLATES_BASE_URL}/{NEW_RESOURCE_TOKEN}/instantiate{params}"


def vm_list_url(namespace: str, tab: str | None = None) -> str:
    """List of virtual machines in `namespace`; the trailing slash is kept when `tab` is empty."""

    return f"/k8s/ns/{namespace}/{VIRTUALMACHINES_BASE_URL}/{tab or ''}"
