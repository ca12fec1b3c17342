"""Tests for the command-line entry point."""

import json
from datetime import timedelta
from pathlib import Path

import pytest

from conftest import FakeClient
from package_staleness import cli, reporting
from package_staleness.time_utils import format_date, utc_now


@pytest.fixture
def fake_registry(monkeypatch):
    clients = []

    def install(releases):
        def factory(config):
            client = FakeClient(releases)
            client.config = config
            clients.append(client)
            return client

        monkeypatch.setattr(reporting, "NpmRegistryClient", factory)
        return clients

    return install


def _write_manifest(tmp_path: Path, dependencies) -> Path:
    path = tmp_path / "package.json"
    path.write_text(json.dumps({"dependencies": dependencies}), encoding="utf-8")
    return path


def test_main_with_env_threshold(tmp_path: Path, monkeypatch, capsys, fake_registry):
    released = utc_now() - timedelta(days=213)
    fake_registry({"old": released})
    monkeypatch.setenv("MONTHS_THRESHOLD", "6")
    monkeypatch.chdir(tmp_path)
    _write_manifest(tmp_path, {"old": "^1.0.0"})

    assert cli.main([]) == 0

    out = capsys.readouterr().out
    assert (
        "- [old](https://www.npmjs.com/package/old) has not been updated in the last 6 months. "
        f"Last update: {format_date(released)}"
    ) in out


def test_main_lookup_failure_still_succeeds(tmp_path: Path, capsys, fake_registry):
    fake_registry({"broken": None})
    path = _write_manifest(tmp_path, {"broken": "^1.0.0"})

    assert cli.main(["--manifest", str(path)]) == 0

    assert capsys.readouterr().out.endswith("## Outdated Packages\n\n")


def test_main_missing_manifest_exits_1(tmp_path: Path, capsys, fake_registry):
    fake_registry({})

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--manifest", str(tmp_path / "package.json")])

    assert excinfo.value.code == 1
    assert capsys.readouterr().out == ""


def test_main_passes_options_to_config(tmp_path: Path, fake_registry):
    clients = fake_registry({})
    path = _write_manifest(tmp_path, {"dep": "*"})

    cli.main([
        "--manifest", str(path),
        "--threshold", "12",
        "--registry-url", "http://mirror.local",
        "--timeout", "2",
        "--strict-versions",
    ])

    config = clients[0].config
    assert config.threshold_months == 12
    assert config.registry_url == "http://mirror.local"
    assert config.timeout == 2.0
    assert config.strict_versions is True


def test_main_writes_output_files(tmp_path: Path, fake_registry):
    fake_registry({"old": utc_now() - timedelta(days=3000)})
    path = _write_manifest(tmp_path, {"old": "*"})
    md_file = tmp_path / "report.md"
    csv_file = tmp_path / "report.csv"

    cli.main(["--manifest", str(path), "--output", str(md_file), "--csv", str(csv_file)])

    assert md_file.read_text(encoding="utf-8").startswith("## Outdated Packages\n- [old]")
    assert csv_file.exists()


@pytest.mark.parametrize("value", ["0", "-1", "soon"])
def test_main_rejects_bad_threshold_flag(value, capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--threshold", value])

    assert excinfo.value.code == 2
