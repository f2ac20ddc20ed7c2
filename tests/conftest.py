from __future__ import annotations

import pytest

_CREDENTIAL_VARS = ("CF_ACCOUNT_ID", "CF_KV_NAMESPACE_ID", "CF_API_TOKEN", "CF_API_BASE_URL")


@pytest.fixture(autouse=True)
def _isolate_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    # Tests must never reach a real namespace through ambient credentials.
    for name in _CREDENTIAL_VARS:
        monkeypatch.delenv(name, raising=False)
