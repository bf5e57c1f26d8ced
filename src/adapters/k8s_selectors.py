"""Kubernetes resource accessors and the default template classifier.

Resources are plain mappings as returned by the API server; nothing here
validates their shape beyond what the accessors need.
"""

from __future__ import annotations

from typing import Any, Mapping

from core.interfaces.template_classifier import TemplateClassifier

TEMPLATE_TYPE_LABEL = "template.kubevirt.io/type"
TEMPLATE_TYPE_BASE = "base"
TEMPLATE_WORKLOAD_LABEL_PREFIX = "workload.template.kubevirt.io/"


def _metadata(resource: Mapping[str, Any] | None) -> Mapping[str, Any]:
    if not resource:
        return {}
    metadata = resource.get("metadata")
    return metadata if isinstance(metadata, Mapping) else {}


def get_name(resource: Mapping[str, Any] | None) -> str | None:
    return _metadata(resource).get("name")


def get_namespace(resource: Mapping[str, Any] | None) -> str | None:
    return _metadata(resource).get("namespace")


def get_labels(resource: Mapping[str, Any] | None) -> Mapping[str, str]:
    labels = _metadata(resource).get("labels")
    return labels if isinstance(labels, Mapping) else {}


class KubevirtTemplateClassifier(TemplateClassifier):
    """Label-based classification used by the KubeVirt common templates."""

    def is_common_template(self, template: Mapping[str, Any]) -> bool:
        return get_labels(template).get(TEMPLATE_TYPE_LABEL) == TEMPLATE_TYPE_BASE

    def get_workload_profile(self, template: Mapping[str, Any] | None) -> str | None:
        # First workload label set to "true" wins, in label order.
        for key, value in get_labels(template).items():
            if key.startswith(TEMPLATE_WORKLOAD_LABEL_PREFIX) and value == "true":
                return key[len(TEMPLATE_WORKLOAD_LABEL_PREFIX) :]
        return None
