from __future__ import annotations

from pathlib import Path

import pytest

from ddnswitch.utils import config as config_mod


def test_defaults_without_file() -> None:
    options = config_mod.load_config(None)["options"]

    assert options["include_prerelease"] is False
    assert options["cache_expiry"] == 3600
    assert options["request_timeout"] == 60
    assert options["install_dir"].endswith(".ddnswitch")


def test_partial_file_is_filled_with_defaults(tmp_path: Path) -> None:
    path = tmp_path / "ddnswitch.yaml"
    path.write_text("options:\n  include_prerelease: true\n  install_dir: ~/ddn-versions\n")

    options = config_mod.load_config(str(path))["options"]

    assert options["include_prerelease"] is True
    assert options["cache_expiry"] == 3600
    assert "~" not in options["install_dir"]


def test_invalid_yaml(tmp_path: Path) -> None:
    path = tmp_path / "ddnswitch.yaml"
    path.write_text("options: [unclosed\n")

    with pytest.raises(ValueError, match="Error parsing YAML"):
        config_mod.load_config(str(path))


def test_find_config_in_current_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "ddnswitch.yaml").write_text("options: {}\n")
    monkeypatch.chdir(tmp_path)

    assert config_mod.find_config_file() == str(tmp_path / "ddnswitch.yaml")


def test_explicit_missing_config_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        config_mod.find_config_file(str(tmp_path / "missing.yaml"))


def test_create_default_config_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "ddnswitch.yaml"

    created = config_mod.create_default_config(str(path))

    assert config_mod.load_config(str(path))["options"] == created["options"]


@pytest.mark.parametrize(
    "options, message",
    [
        ("cache_expiry: 1h", "cache_expiry"),
        ("cache_expiry: 0", "cache_expiry"),
        ("request_timeout: true", "request_timeout"),
        ("include_prerelease: maybe", "include_prerelease"),
        ("install_dir:", "install_dir"),
        ("releases_url: ''", "releases_url"),
    ],
)
def test_wrong_option_types_are_rejected(tmp_path: Path, options: str, message: str) -> None:
    path = tmp_path / "ddnswitch.yaml"
    path.write_text(f"options:\n  {options}\n")

    with pytest.raises(ValueError, match=message):
        config_mod.load_config(str(path))
