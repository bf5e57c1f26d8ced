"""Domain models (Pydantic v2).

- These models describe *what* travels between the console pages (wizard
  state, URL parts), not how it is navigated.
- Attribute names are snake_case; the camelCase aliases are the JSON keys the
  wizard pages read, so `by_alias=True` is required when serializing.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict

from core.domain.wizard import VMWizardMode, VMWizardName, VMWizardView


class BootSourceParams(BaseModel):
    """Where the new VM boots from (URL import, container image or existing PVC)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    url: str | None = Field(
        default=None,
        description="HTTP(S) URL of a disk image to import.",
    )
    container: str | None = Field(
        default=None,
        description="Container disk image reference.",
    )
    pvc_name: str | None = Field(
        default=None,
        alias="pvcName",
        description="Existing PVC to clone.",
    )
    pvc_namespace: str | None = Field(
        default=None,
        alias="pvcNamespace",
        description="Namespace of the PVC to clone.",
    )
    size: str | None = Field(
        default=None,
        description="Requested disk size (e.g. '20Gi').",
    )


class WizardInitialData(BaseModel):
    """Overflow wizard state carried as one JSON query parameter.

    Never persisted: it is built right before a link is rendered and rebuilt
    when the link is followed.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    common_template_name: str | None = Field(
        default=None,
        alias="commonTemplateName",
        description="Platform-owned template, referenced by name only.",
    )
    user_template_name: str | None = Field(
        default=None,
        alias="userTemplateName",
        description="Tenant-owned template name.",
    )
    user_template_ns: str | None = Field(
        default=None,
        alias="userTemplateNs",
        description="Tenant-owned template namespace.",
    )
    name: str | None = Field(default=None, description="Name of the VM to create.")
    start_vm: bool | None = Field(
        default=None,
        alias="startVM",
        description="Start the VM right after creation.",
    )
    source: BootSourceParams | None = Field(default=None, description="Boot source.")
    storage_class: str | None = Field(default=None, alias="storageClass")
    access_mode: str | None = Field(default=None, alias="accessMode")
    volume_mode: str | None = Field(default=None, alias="volumeMode")

    @model_validator(mode="after")
    def _single_template_reference(self) -> "WizardInitialData":
        if self.common_template_name and (self.user_template_name or self.user_template_ns):
            raise ValueError("common and user template references are mutually exclusive")
        return self

    @property
    def is_empty(self) -> bool:
        return not self.to_wire()

    def to_wire(self) -> dict[str, Any]:
        """Return the JSON-ready payload with camelCase keys and unset fields dropped."""

        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class WizardLinkRequest(BaseModel):
    """Argument bundle for a single `build_wizard_link` call."""

    model_config = ConfigDict(extra="forbid")

    wizard_name: VMWizardName = Field(..., description="Which wizard flow to open.")
    namespace: str | None = Field(default=None, description="Namespace the wizard opens in.")
    mode: VMWizardMode | None = Field(default=None)
    view: VMWizardView | None = Field(default=None)
    template: dict[str, Any] | None = Field(
        default=None,
        description="Template resource (Kubernetes object as a mapping).",
    )
    name: str | None = Field(default=None)
    boot_source: BootSourceParams | None = Field(default=None)
    start_vm: bool | None = Field(default=None)
    storage_class: str | None = Field(default=None)
    access_mode: str | None = Field(default=None)
    volume_mode: str | None = Field(default=None)


class UrlParts(BaseModel):
    """The WHATWG-style pieces of a parsed URL used for display shortening."""

    model_config = ConfigDict(frozen=True)

    href: str = Field(..., description="Serialized full URL.")
    origin: str = Field(
        ...,
        description="scheme://host[:port], or the literal 'null' for opaque origins.",
    )
    hostname: str = Field(default="")
    pathname: str = Field(default="")
    port: str = Field(default="", description="Explicit non-default port, '' otherwise.")
