from __future__ import annotations

from pathlib import Path

import pytest

from ddnswitch.cli import cli as cli_mod
from ddnswitch.core import operations
from ddnswitch.core.errors import FetchError
from ddnswitch.core.models import Release


class FakeManager:
    def __init__(self, config_path=None) -> None:
        self.config_path = config_path
        self.include_prerelease = False
        self.install_dir = "/tmp/ddnswitch-test"
        self.switched: list[str] = []
        self.releases = (Release("v3.0.0"), Release("v2.0.0-beta.1", prerelease=True))

    def list_versions(self):
        return self.releases

    def current_version(self):
        return "DDN CLI Version: v3.0.0"

    def switch_to(self, tag: str) -> bool:
        self.switched.append(tag)
        return True

    def installed_versions(self):
        return ["v3.0.0"]

    @property
    def cache(self):
        return self

    def status(self, include_prerelease: bool):
        return {"valid": True}


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_mod, "setup_logging", lambda debug: None)


def test_parse_version_as_command() -> None:
    args = cli_mod.parse_args(["--pre", "v3.0.1"])
    assert args.command == "v3.0.1"
    assert args.pre is True
    assert args.version is None


def test_parse_install_requires_version() -> None:
    with pytest.raises(SystemExit):
        cli_mod.parse_args(["install"])


def test_parse_rejects_extra_argument() -> None:
    with pytest.raises(SystemExit):
        cli_mod.parse_args(["list", "v1.0.0"])


def test_version_command(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_mod.main(["version"]) == 0
    assert "ddnswitch version" in capsys.readouterr().out


def test_switch_dispatch(monkeypatch: pytest.MonkeyPatch) -> None:
    manager = FakeManager()
    monkeypatch.setattr(cli_mod, "VersionManager", lambda config_path: manager)

    assert cli_mod.main(["--pre", "v3.0.1"]) == 0
    assert manager.switched == ["v3.0.1"]
    assert manager.include_prerelease is True


def test_errors_exit_non_zero(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    def failing_list(manager) -> None:
        raise FetchError("Releases API returned status: 500", status_code=500)

    monkeypatch.setattr(cli_mod, "VersionManager", lambda config_path: FakeManager())
    monkeypatch.setattr(cli_mod, "list_versions", failing_list)

    assert cli_mod.main(["list"]) == 1
    assert "Releases API returned status: 500" in capsys.readouterr().out


def test_missing_config_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_mod.main(["--config", str(tmp_path / "nope.yaml"), "current"]) == 1
    assert "Config file not found" in capsys.readouterr().out


def test_list_marks_current(capsys: pytest.CaptureFixture[str]) -> None:
    operations.list_versions(FakeManager())

    out = capsys.readouterr().out
    assert " 1. v3.0.0" in out
    assert "(current)" in out
    assert "[pre-release]" in out


def test_select_by_number(monkeypatch: pytest.MonkeyPatch) -> None:
    manager = FakeManager()
    monkeypatch.setattr("builtins.input", lambda prompt: "2")

    operations.select_and_switch(manager)

    assert manager.switched == ["v2.0.0-beta.1"]


def test_select_rejects_unknown(monkeypatch: pytest.MonkeyPatch) -> None:
    manager = FakeManager()
    monkeypatch.setattr("builtins.input", lambda prompt: "9")

    with pytest.raises(operations.DDNSwitchError, match="invalid selection"):
        operations.select_and_switch(manager)
    assert manager.switched == []


def test_init_creates_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(cli_mod, "ensure_user_config_dir", lambda: str(tmp_path))

    assert cli_mod.main(["init"]) == 0
    assert (tmp_path / "ddnswitch.yaml").is_file()
    assert cli_mod.main(["init"]) == 0


def test_bad_option_value_exits_non_zero(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "ddnswitch.yaml"
    path.write_text("options:\n  cache_expiry: 1h\n")

    assert cli_mod.main(["--config", str(path), "current"]) == 1
    assert "cache_expiry" in capsys.readouterr().out
