import pytest
import requests
from typer.testing import CliRunner

import adot_cli.__main__ as cli
import adot_core.workflows as workflows
from adot_core.geo import GeolocationClient
from adot_core.readme import FOOTER_MARKER
from adot_core.store import FirestoreStore
from tests._helpers import AUSTIN, MemoryStore, StubResponse, StubSession

runner = CliRunner()


@pytest.fixture
def memory_store(monkeypatch):
    store = MemoryStore()
    monkeypatch.setattr(FirestoreStore, "from_config", lambda cfg: store)
    return store


def _geo_returning(monkeypatch, response):
    session = StubSession(response)

    class _Client(GeolocationClient):
        def __init__(self, endpoint):
            super().__init__(endpoint, session=session)

    monkeypatch.setattr(workflows, "GeolocationClient", _Client)
    return session


def test_version():
    r = runner.invoke(cli.app, ["--version"])
    assert r.exit_code == 0
    assert cli.__version__ in r.stdout


def test_microblog_inserts_post(full_env, memory_store):
    r = runner.invoke(cli.app, ["microblog", "hello world"])
    assert r.exit_code == 0, r.stdout
    assert "Inserted" in r.stdout
    [(collection, _)] = memory_store.docs.keys()
    assert collection == "microblog"


def test_microblog_missing_config(memory_store):
    r = runner.invoke(cli.app, ["microblog", "hello"])
    assert r.exit_code == 1
    assert "PROJECT_ID" in r.stdout
    assert memory_store.calls == []


def test_location_success(full_env, memory_store, monkeypatch):
    session = _geo_returning(monkeypatch, StubResponse(200, AUSTIN))
    r = runner.invoke(cli.app, ["location"])
    assert r.exit_code == 0, r.stdout
    assert "Austin" in r.stdout
    assert session.requests[0][1] == {"token": "tok123"}
    assert memory_store.docs[("location", "latest")]["city"] == "Austin"


def test_location_without_token(full_env, memory_store, monkeypatch):
    monkeypatch.delenv("IPINFO_TOKEN")
    session = _geo_returning(monkeypatch, StubResponse(200, AUSTIN))
    r = runner.invoke(cli.app, ["location"])
    assert r.exit_code == 1
    assert "IPINFO_TOKEN" in r.stdout
    assert session.requests == []
    assert memory_store.calls == []


def test_location_rate_limited(full_env, memory_store, monkeypatch):
    _geo_returning(monkeypatch, StubResponse(429, text="slow down"))
    r = runner.invoke(cli.app, ["location"])
    assert r.exit_code == 1
    assert "429" in r.stdout
    assert [c[0] for c in memory_store.calls] == ["delete"]


def test_location_network_error(full_env, memory_store, monkeypatch):
    _geo_returning(monkeypatch, requests.ConnectionError("unreachable"))
    r = runner.invoke(cli.app, ["location"])
    assert r.exit_code == 1
    assert "unreachable" in r.stdout


def test_readme_footer(tmp_path):
    target = tmp_path / "README.md"
    target.write_text("# Hi\n")
    r = runner.invoke(cli.app, ["readme", "--path", str(target)])
    assert r.exit_code == 0
    assert FOOTER_MARKER in target.read_text()
    r = runner.invoke(cli.app, ["readme", "--path", str(target)])
    assert r.exit_code == 0
    assert target.read_text().count(FOOTER_MARKER) == 1


def test_readme_default_path(tmp_path):
    r = runner.invoke(cli.app, ["readme"])
    assert r.exit_code == 0
    assert FOOTER_MARKER in (tmp_path / "README.md").read_text()


def test_location_unparseable_body(full_env, memory_store, monkeypatch):
    _geo_returning(monkeypatch, StubResponse(200, text="[" * 100000))
    r = runner.invoke(cli.app, ["location"])
    assert r.exit_code == 1
    assert not isinstance(r.exception, RecursionError)
    assert "invalid JSON body" in r.stdout
    assert not any(c[0] == "insert" for c in memory_store.calls)


def test_location_error_hides_token(full_env, memory_store, monkeypatch):
    _geo_returning(
        monkeypatch,
        requests.ConnectionError("Max retries exceeded: /json?token=tok123"),
    )
    r = runner.invoke(cli.app, ["location"])
    assert r.exit_code == 1
    assert "tok123" not in r.stdout
    assert "token=***" in r.stdout


def test_readme_not_utf8(tmp_path):
    target = tmp_path / "README.md"
    target.write_bytes(b"# caf\xe9\n")
    r = runner.invoke(cli.app, ["readme", "--path", str(target)])
    assert r.exit_code == 1
    assert "Error" in r.stdout
    assert target.read_bytes() == b"# caf\xe9\n"
