import sys
from pathlib import Path

import pytest

# Ensure the project src directory is on sys.path for test imports without installation.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    from service_broker_client.core.config import get_settings

    for name in (
        "SERVICE_BROKER_URL",
        "SERVICE_BROKER_AUTH_TOKEN",
        "SERVICE_BROKER_TIMEOUT",
        "SERVICE_BROKER_CONNECT_TIMEOUT",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
