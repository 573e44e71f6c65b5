import pytest

from tkit.core.paths import CONFIG_DIR_ENV, DEBUG_ENV, TOKEN_ENV


@pytest.fixture(autouse=True)
def _isolate_tkit_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's TKIT_* variables from leaking into tests."""
    for name in (CONFIG_DIR_ENV, DEBUG_ENV, TOKEN_ENV):
        monkeypatch.delenv(name, raising=False)
