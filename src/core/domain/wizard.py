"""Wizard selectors and query-string keys.

The enum values are the exact strings that travel in URLs, so they must not
change without a migration of existing links.
"""

from __future__ import annotations

from enum import Enum


class _LowercaseValueEnum(str, Enum):
    """Accepts member values in any letter case (`"IMPORT"` -> `import`)."""

    @classmethod
    def _missing_(cls, value: object) -> "_LowercaseValueEnum | None":
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None


class VMWizardName(_LowercaseValueEnum):
    """Top-level flow selector."""

    BASIC = "basic"
    WIZARD = "wizard"
    YAML = "yaml"


class VMWizardMode(_LowercaseValueEnum):
    """What the full wizard creates."""

    VM = "vm"
    TEMPLATE = "template"
    IMPORT = "import"

    @classmethod
    def default(cls) -> "VMWizardMode":
        return cls.VM


class VMWizardView(_LowercaseValueEnum):
    SIMPLE = "simple"
    ADVANCED = "advanced"


class VMWizardURLParams(str, Enum):
    """Query keys understood by the wizard pages."""

    NAMESPACE = "namespace"
    MODE = "mode"
    VIEW = "view"
    INITIAL_DATA = "initialData"


class VMTab(str, Enum):
    """Sub-pages of a single virtual machine."""

    DETAILS = "details"
    YAML = "yaml"
    CONSOLES = "consoles"
    EVENTS = "events"
    DISKS = "disks"
    NICS = "nics"
    SNAPSHOTS = "snapshots"
    ENVIRONMENT = "environment"


SAP_HANA_WORKLOAD_PROFILE = "saphana"

# Name token the console router reserves for "create new resource" pages.
NEW_RESOURCE_TOKEN = "~new"

TEMPLATE_NAMESPACE_PARAM = "template-ns"
TEMPLATE_NAME_PARAM = "template-name"
