"""Template classification contract."""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable


@runtime_checkable
class TemplateClassifier(Protocol):
    """Answers the two questions the link builder asks about a template."""

    def is_common_template(self, template: Mapping[str, Any]) -> bool:
        """True for platform-owned templates (referenced by name only)."""

        ...

    def get_workload_profile(self, template: Mapping[str, Any] | None) -> str | None:
        """Workload profile label value (e.g. 'server', 'saphana'), if any."""

        ...
