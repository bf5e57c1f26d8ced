from __future__ import annotations

import logging
from typing import Any, Mapping
from urllib.parse import parse_qsl, quote, urlsplit

import pytest

from core.domain.models import BootSourceParams, WizardInitialData, WizardLinkRequest
from core.domain.wizard import VMWizardMode, VMWizardName, VMWizardView
from core.errors import InitialDataError
from core.services.wizard_links import (
    BasicWizardFlow,
    FullWizardFlow,
    ShortcutTemplateFlow,
    build_wizard_link,
    decode_initial_data,
    encode_initial_data,
    get_vm_wizard_create_link,
    parse_wizard_initial_data,
    resolve_wizard_flow,
)


def _query(link: str) -> list[tuple[str, str]]:
    return parse_qsl(urlsplit(link).query, keep_blank_values=True)


def test_sap_hana_template_uses_instantiate_shortcut(sap_hana_template: dict[str, Any]) -> None:
    link = get_vm_wizard_create_link(
        wizard_name=VMWizardName.WIZARD,
        namespace="ns1",
        mode=VMWizardMode.IMPORT,
        view=VMWizardView.ADVANCED,
        template=sap_hana_template,
        name="ignored",
        start_vm=True,
    )

    assert link == "/k8s/ns/ns1/virtualmachinetemplates/~new/instantiate?template-ns=tns&template-name=t1"


def test_sap_hana_shortcut_wins_over_basic_wizard(sap_hana_template: dict[str, Any]) -> None:
    request = WizardLinkRequest(wizard_name=VMWizardName.BASIC, namespace="ns1", template=sap_hana_template)

    assert isinstance(resolve_wizard_flow(request), ShortcutTemplateFlow)


def test_basic_wizard_with_common_template(common_template: dict[str, Any]) -> None:
    link = get_vm_wizard_create_link(wizard_name="basic", namespace="ns1", template=common_template)

    assert link == (
        "/k8s/ns/ns1/virtualmachines/~new-from-template"
        "?namespace=ns1&initialData=%7B%22commonTemplateName%22%3A%22fedora%22%7D"
    )
    assert parse_wizard_initial_data(urlsplit(link).query) == WizardInitialData(common_template_name="fedora")


def test_basic_wizard_with_user_template(user_template: dict[str, Any]) -> None:
    link = get_vm_wizard_create_link(wizard_name=VMWizardName.BASIC, namespace="ns1", template=user_template)

    data = parse_wizard_initial_data(urlsplit(link).query)

    assert data.user_template_name == "my-rhel"
    assert data.user_template_ns == "team-a"
    assert data.common_template_name is None


def test_basic_wizard_ignores_full_wizard_fields(common_template: dict[str, Any]) -> None:
    link = get_vm_wizard_create_link(
        wizard_name=VMWizardName.BASIC,
        namespace="ns1",
        template=common_template,
        name="vm1",
        mode=VMWizardMode.IMPORT,
        storage_class="fast",
    )

    keys = [key for key, _ in _query(link)]

    assert keys == ["namespace", "initialData"]
    assert parse_wizard_initial_data(urlsplit(link).query).name is None


def test_basic_wizard_without_inputs_has_no_query() -> None:
    assert get_vm_wizard_create_link(wizard_name=VMWizardName.BASIC) == "/k8s/ns/default/virtualmachines/~new-from-template"


def test_full_wizard_import_advanced_adds_view() -> None:
    link = get_vm_wizard_create_link(
        wizard_name=VMWizardName.WIZARD,
        namespace="ns1",
        mode=VMWizardMode.IMPORT,
        view=VMWizardView.ADVANCED,
    )

    assert link == "/k8s/ns/ns1/virtualmachines/~new/wizard?mode=import&view=advanced"


@pytest.mark.parametrize(
    ("mode", "view"),
    [
        (VMWizardMode.IMPORT, VMWizardView.SIMPLE),
        (VMWizardMode.TEMPLATE, VMWizardView.ADVANCED),
        (VMWizardMode.VM, VMWizardView.ADVANCED),
        (None, VMWizardView.ADVANCED),
    ],
)
def test_full_wizard_drops_other_views(mode: VMWizardMode | None, view: VMWizardView) -> None:
    link = get_vm_wizard_create_link(wizard_name=VMWizardName.WIZARD, namespace="ns1", mode=mode, view=view)

    assert "view" not in dict(_query(link))


def test_full_wizard_omits_default_mode() -> None:
    link = get_vm_wizard_create_link(wizard_name=VMWizardName.WIZARD, mode=VMWizardMode.VM)

    assert link == "/k8s/ns/default/virtualmachines/~new/wizard"


def test_full_wizard_round_trips_initial_data(user_template: dict[str, Any]) -> None:
    boot_source = BootSourceParams(url="https://images.example.com/fedora.qcow2", size="20Gi")

    link = get_vm_wizard_create_link(
        wizard_name=VMWizardName.WIZARD,
        namespace="ns1",
        mode=VMWizardMode.TEMPLATE,
        template=user_template,
        name="my vm",
        boot_source=boot_source,
        start_vm=True,
        storage_class="ocs-storagecluster-ceph-rbd",
        access_mode="ReadWriteMany",
        volume_mode="Block",
    )

    params = _query(link)

    assert [key for key, _ in params] == ["mode", "initialData"]
    assert parse_wizard_initial_data(urlsplit(link).query) == WizardInitialData(
        user_template_name="my-rhel",
        user_template_ns="team-a",
        name="my vm",
        start_vm=True,
        source=boot_source,
        storage_class="ocs-storagecluster-ceph-rbd",
        access_mode="ReadWriteMany",
        volume_mode="Block",
    )


def test_full_wizard_skips_false_start_vm() -> None:
    link = get_vm_wizard_create_link(wizard_name=VMWizardName.WIZARD, name="vm1", start_vm=False)

    assert dict(_query(link))["initialData"] == '{"name":"vm1"}'


def test_yaml_wizard_uses_yaml_path(common_template: dict[str, Any]) -> None:
    link = get_vm_wizard_create_link(
        wizard_name=VMWizardName.YAML,
        namespace="ns1",
        template=common_template,
        mode=VMWizardMode.IMPORT,
    )

    assert link == "/k8s/ns/ns1/virtualmachines/~new"


def test_build_wizard_link_honours_default_namespace() -> None:
    request = WizardLinkRequest(wizard_name=VMWizardName.WIZARD)

    assert build_wizard_link(request, default_namespace="openshift-cnv") == "/k8s/ns/openshift-cnv/virtualmachines/~new/wizard"


def test_custom_classifier_is_used(user_template: dict[str, Any]) -> None:
    class _EverythingCommon:
        def is_common_template(self, template: Mapping[str, Any]) -> bool:
            return True

        def get_workload_profile(self, template: Mapping[str, Any] | None) -> str | None:
            return None

    request = WizardLinkRequest(wizard_name=VMWizardName.BASIC, template=user_template)

    flow = resolve_wizard_flow(request, _EverythingCommon())

    assert isinstance(flow, BasicWizardFlow)
    assert flow.initial_data == WizardInitialData(common_template_name="my-rhel")


def test_resolve_full_flow_marks_yaml() -> None:
    flow = resolve_wizard_flow(WizardLinkRequest(wizard_name=VMWizardName.YAML))

    assert isinstance(flow, FullWizardFlow)
    assert flow.is_yaml
    assert flow.initial_data.is_empty


def test_encode_initial_data_is_compact_and_ordered() -> None:
    data = WizardInitialData(volume_mode="Block", common_template_name="fedora", start_vm=True)

    assert encode_initial_data(data) == '{"commonTemplateName":"fedora","startVM":true,"volumeMode":"Block"}'


def test_decode_initial_data_accepts_wire_names() -> None:
    data = decode_initial_data('{"userTemplateName":"t","userTemplateNs":"ns","source":{"pvcName":"disk"}}')

    assert data.user_template_name == "t"
    assert data.source == BootSourceParams(pvc_name="disk")


@pytest.mark.parametrize(
    "text",
    [
        "{not json",
        "[1, 2]",
        '"fedora"',
        '{"startVM": "maybe"}',
        '{"commonTemplateName": "a", "userTemplateName": "b"}',
        "[" * 100_000,
        '{"source":' * 5_000 + "1" + "}" * 5_000,
    ],
)
def test_decode_initial_data_rejects_bad_payloads(text: str) -> None:
    with pytest.raises(InitialDataError) as excinfo:
        decode_initial_data(text)

    assert excinfo.value.raw == text


def test_parse_initial_data_swallows_bad_json(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING)

    data = parse_wizard_initial_data("?initialData=%7Bbroken")

    assert data == WizardInitialData()
    assert data.is_empty
    assert any("Cannot parse wizard initial data" in record.message for record in caplog.records)


@pytest.mark.parametrize("search_params", ["", "?", "namespace=ns1", "initialData=", {}, {"initialData": []}])
def test_parse_initial_data_without_payload_is_empty(search_params: Any) -> None:
    assert parse_wizard_initial_data(search_params).is_empty


def test_parse_initial_data_from_mapping() -> None:
    assert parse_wizard_initial_data({"initialData": '{"name":"vm1"}'}).name == "vm1"
    assert parse_wizard_initial_data({"initialData": ['{"name":"vm2"}']}).name == "vm2"


def test_parse_initial_data_survives_deep_nesting() -> None:
    nested = '{"source":' * 5_000 + "1" + "}" * 5_000

    assert parse_wizard_initial_data({"initialData": "[" * 100_000}).is_empty
    assert parse_wizard_initial_data(f"initialData={quote(nested)}").is_empty


def test_enum_inputs_accept_any_case() -> None:
    link = get_vm_wizard_create_link(wizard_name="WIZARD", namespace="ns1", mode="IMPORT", view="ADVANCED")

    assert link == "/k8s/ns/ns1/virtualmachines/~new/wizard?mode=import&view=advanced"
    assert VMWizardMode("Template") is VMWizardMode.TEMPLATE
