import sys
from pathlib import Path

import pytest

# Ensure the "src" directory (and the repo root, for tests._helpers) is importable
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
for p in (SRC, ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

_ENV_VARS = (
    "PROJECT_ID",
    "GOOGLE_APPLICATION_CREDENTIALS",
    "IPINFO_TOKEN",
    "ADOT_GEO_ENDPOINT",
    "ADOT_README_PATH",
    "ADOT_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    # Keep the developer's real credentials and any local .env out of tests
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def full_env(tmp_path, monkeypatch):
    monkeypatch.setenv("PROJECT_ID", "demo-project")
    monkeypatch.setenv("GOOGLE_APPLICATION_CREDENTIALS", str(tmp_path / "sa.json"))
    monkeypatch.setenv("IPINFO_TOKEN", "tok123")
