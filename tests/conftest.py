import os
from pathlib import Path
import sys
from typing import Any

import pytest


SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def _clean_settings_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep developer environment variables and `.env` files out of the tests."""

    for key in list(os.environ):
        if key.upper().startswith("VM_LINKS_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    yield


@pytest.fixture
def common_template() -> dict[str, Any]:
    return {
        "metadata": {
            "name": "fedora",
            "namespace": "openshift",
            "labels": {
                "template.kubevirt.io/type": "base",
                "workload.template.kubevirt.io/server": "true",
            },
        }
    }


@pytest.fixture
def user_template() -> dict[str, Any]:
    return {"metadata": {"name": "my-rhel", "namespace": "team-a", "labels": {}}}


@pytest.fixture
def sap_hana_template() -> dict[str, Any]:
    return {
        "metadata": {
            "name": "t1",
            "namespace": "tns",
            "labels": {"workload.template.kubevirt.io/saphana": "true"},
        }
    }
