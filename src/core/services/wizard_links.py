"""Links into the VM creation wizards.

A request is resolved once into one of three flows, first match wins:

1. SAP HANA templates skip the generic wizard and open the dedicated
   "instantiate template" page.
2. The basic wizard gets an optional namespace and a template reference.
3. The full wizard (customize/import, or the YAML editor) gets a mode, a
   view and everything else folded into the `initialData` JSON parameter.

`parse_wizard_initial_data` is the inverse used by the wizard pages.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Sequence
from urllib.parse import parse_qs, urlencode

from pydantic import ValidationError

from adapters.k8s_selectors import KubevirtTemplateClassifier, get_name, get_namespace
from core.domain.models import BootSourceParams, WizardInitialData, WizardLinkRequest
from core.domain.routes import (
    DEFAULT_NAMESPACE,
    customize_wizard_base_url,
    instantiate_template_base_url,
    wizard_base_url,
    yaml_base_url,
)
from core.domain.wizard import (
    SAP_HANA_WORKLOAD_PROFILE,
    TEMPLATE_NAME_PARAM,
    TEMPLATE_NAMESPACE_PARAM,
    VMWizardMode,
    VMWizardName,
    VMWizardURLParams,
    VMWizardView,
)
from core.errors import InitialDataError
from core.interfaces.template_classifier import TemplateClassifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShortcutTemplateFlow:
    namespace: str | None
    template_name: str | None
    template_namespace: str | None


@dataclass(frozen=True)
class BasicWizardFlow:
    namespace: str | None
    initial_data: WizardInitialData


@dataclass(frozen=True)
class FullWizardFlow:
    namespace: str | None
    is_yaml: bool
    mode: VMWizardMode | None
    view: VMWizardView | None
    initial_data: WizardInitialData


WizardFlow = ShortcutTemplateFlow | BasicWizardFlow | FullWizardFlow


def encode_initial_data(data: WizardInitialData) -> str:
    """Compact JSON text of `data`, keys in declaration order."""

    return json.dumps(data.to_wire(), separators=(",", ":"), ensure_ascii=False)


def decode_initial_data(text: str) -> WizardInitialData:
    """Strict inverse of `encode_initial_data`.

    Raises:
        InitialDataError: the text is not JSON, not a JSON object, or does not
            validate as `WizardInitialData`.
    """

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InitialDataError(f"initial data is not valid JSON: {exc.msg}", raw=text) from exc
    except RecursionError as exc:
        raise InitialDataError("initial data is nested too deeply", raw=text) from exc
    if not isinstance(payload, dict):
        raise InitialDataError("initial data must be a JSON object", raw=text)
    try:
        return WizardInitialData.model_validate(payload)
    except ValidationError as exc:
        raise InitialDataError(f"invalid initial data: {exc.error_count()} error(s)", raw=text) from exc


def _template_reference(template: Mapping[str, Any], classifier: TemplateClassifier) -> dict[str, Any]:
    if classifier.is_common_template(template):
        return {"common_template_name": get_name(template)}
    return {
        "user_template_name": get_name(template),
        "user_template_ns": get_namespace(template),
    }


def resolve_wizard_flow(
    request: WizardLinkRequest,
    classifier: TemplateClassifier | None = None,
) -> WizardFlow:
    """Pick the flow a request maps to."""

    classifier = classifier or KubevirtTemplateClassifier()
    template = request.template

    if template and classifier.get_workload_profile(template) == SAP_HANA_WORKLOAD_PROFILE:
        return ShortcutTemplateFlow(
            namespace=request.namespace,
            template_name=get_name(template),
            template_namespace=get_namespace(template),
        )

    fields: dict[str, Any] = {}
    if template:
        fields.update(_template_reference(template, classifier))

    if request.wizard_name == VMWizardName.BASIC:
        return BasicWizardFlow(
            namespace=request.namespace,
            initial_data=WizardInitialData(**fields),
        )

    if request.name:
        fields["name"] = request.name
    if request.start_vm:
        fields["start_vm"] = request.start_vm
    if request.boot_source:
        fields["source"] = request.boot_source
    if request.storage_class:
        fields["storage_class"] = request.storage_class
    if request.access_mode:
        fields["access_mode"] = request.access_mode
    if request.volume_mode:
        fields["volume_mode"] = request.volume_mode

    return FullWizardFlow(
        namespace=request.namespace,
        is_yaml=request.wizard_name == VMWizardName.YAML,
        mode=request.mode,
        view=request.view,
        initial_data=WizardInitialData(**fields),
    )


def _query(params: Sequence[tuple[str, str]]) -> str:
    return f"?{urlencode(params)}" if params else ""


def render_wizard_flow(flow: WizardFlow, *, default_namespace: str = DEFAULT_NAMESPACE) -> str:
    """Turn a resolved flow into a path+query string."""

    if isinstance(flow, ShortcutTemplateFlow):
        query = _query(
            [
                (TEMPLATE_NAMESPACE_PARAM, flow.template_namespace or ""),
                (TEMPLATE_NAME_PARAM, flow.template_name or ""),
            ]
        )
        return instantiate_template_base_url(flow.namespace, query, default_namespace=default_namespace)

    params: list[tuple[str, str]] = []

    if isinstance(flow, BasicWizardFlow):
        if flow.namespace:
            params.append((VMWizardURLParams.NAMESPACE.value, flow.namespace))
        if not flow.initial_data.is_empty:
            params.append((VMWizardURLParams.INITIAL_DATA.value, encode_initial_data(flow.initial_data)))
        return wizard_base_url(flow.namespace, _query(params), default_namespace=default_namespace)

    if flow.is_yaml:
        return yaml_base_url(flow.namespace, default_namespace=default_namespace)

    if flow.mode and flow.mode != VMWizardMode.VM:
        params.append((VMWizardURLParams.MODE.value, flow.mode.value))

    # Import + advanced is the only mode/view pair the wizard honours for now.
    if flow.mode == VMWizardMode.IMPORT and flow.view == VMWizardView.ADVANCED:
        params.append((VMWizardURLParams.VIEW.value, flow.view.value))

    if not flow.initial_data.is_empty:
        params.append((VMWizardURLParams.INITIAL_DATA.value, encode_initial_data(flow.initial_data)))

    return customize_wizard_base_url(flow.namespace, _query(params), default_namespace=default_namespace)


def build_wizard_link(
    request: WizardLinkRequest,
    classifier: TemplateClassifier | None = None,
    *,
    default_namespace: str = DEFAULT_NAMESPACE,
) -> str:
    """Path+query that opens the right wizard for `request`. Never fails."""

    flow = resolve_wizard_flow(request, classifier)
    link = render_wizard_flow(flow, default_namespace=default_namespace)
    logger.debug("wizard link for %s: %s", type(flow).__name__, link)
    return link


def get_vm_wizard_create_link(
    *,
    wizard_name: VMWizardName | str,
    namespace: str | None = None,
    mode: VMWizardMode | str | None = None,
    view: VMWizardView | str | None = None,
    template: Mapping[str, Any] | None = None,
    name: str | None = None,
    boot_source: BootSourceParams | Mapping[str, Any] | None = None,
    start_vm: bool | None = None,
    storage_class: str | None = None,
    access_mode: str | None = None,
    volume_mode: str | None = None,
    classifier: TemplateClassifier | None = None,
) -> str:
    """Keyword-argument front end for `build_wizard_link`."""

    request = WizardLinkRequest(
        wizard_name=wizard_name,
        namespace=namespace,
        mode=mode,
        view=view,
        template=dict(template) if template is not None else None,
        name=name,
        boot_source=boot_source,
        start_vm=start_vm,
        storage_class=storage_class,
        access_mode=access_mode,
        volume_mode=volume_mode,
    )
    return build_wizard_link(request, classifier)


def _initial_data_param(search_params: Mapping[str, Any] | str) -> str | None:
    if isinstance(search_params, str):
        parsed = parse_qs(search_params.lstrip("?"), keep_blank_values=True)
        values = parsed.get(VMWizardURLParams.INITIAL_DATA.value)
        return values[0] if values else None

    value = search_params.get(VMWizardURLParams.INITIAL_DATA.value)
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def parse_wizard_initial_data(search_params: Mapping[str, Any] | str) -> WizardInitialData:
    """Read `initialData` from a query string or mapping.

    Missing, malformed or invalid payloads yield an empty `WizardInitialData`
    so a stale or hand-edited link falls back to wizard defaults.
    """

    raw = _initial_data_param(search_params)
    if not raw:
        return WizardInitialData()
    try:
        return decode_initial_data(raw)
    except InitialDataError as exc:
        logger.warning("Cannot parse wizard initial data: %s", exc)
        return WizardInitialData()
