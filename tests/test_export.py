from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from liveini import Configuration
from liveini.export import SNAPSHOT_FORMAT, ConfigJsonParser, ConfigYamlParser
from liveini.model import ConfigStore


def _store() -> ConfigStore:
    store = ConfigStore()
    store.set("", "root", "yes")
    store.set("flags", "vsync", "on")
    store.set("flags", "blank", " ")
    store.set("flags", "empty", "")
    store.set("numbers", "port", "8080")
    return store


def test_json_snapshot_layout(tmp_path: Path) -> None:
    path = tmp_path / "snap.json"
    ConfigJsonParser(path).write(_store())

    data = json.loads(path.read_text(encoding="utf-8"))

    assert data["format"] == SNAPSHOT_FORMAT
    assert data["sections"]["flags"] == {"vsync": "on", "blank": " ", "empty": ""}


def test_json_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "snap.json"
    ConfigJsonParser(path).write(_store())
    assert ConfigJsonParser(path).read().to_dict() == _store().to_dict()


def test_yaml_round_trip_keeps_strings(tmp_path: Path) -> None:
    path = tmp_path / "snap.yaml"
    ConfigYamlParser(path).write(_store())

    loaded = ConfigYamlParser(path).read()

    assert loaded.to_dict() == _store().to_dict()
    assert loaded.get("numbers", "port") == "8080"


def test_yaml_read_coerces_scalars(tmp_path: Path) -> None:
    path = tmp_path / "hand.yaml"
    path.write_text("sections:\n  s:\n    n: 42\n    nothing: ~\n  empty: {}\n", encoding="utf-8")

    store = ConfigYamlParser(path).read()

    assert store.to_dict() == {"s": {"n": "42", "nothing": ""}}


def test_read_rejects_foreign_documents(tmp_path: Path) -> None:
    path = tmp_path / "other.yaml"
    path.write_text(yaml.safe_dump({"hello": "world"}), encoding="utf-8")
    with pytest.raises(ValueError):
        ConfigYamlParser(path).read()


# -- Configuration.export() ----------------------------------------------------------------


def test_export_picks_format_from_suffix(sample_file: Path, tmp_path: Path) -> None:
    conf = Configuration(sample_file, apply=False)
    conf.set_value("memory", "only", "1")

    assert conf.export(tmp_path / "out.json") is True
    assert conf.export(tmp_path / "out.yml") is True

    assert ConfigJsonParser(tmp_path / "out.json").read().to_dict() == conf.store.to_dict()
    assert ConfigYamlParser(tmp_path / "out.yml").read().to_dict() == conf.store.to_dict()


def test_export_explicit_format(sample_file: Path, tmp_path: Path) -> None:
    conf = Configuration(sample_file, apply=False)
    target = tmp_path / "snapshot.txt"

    assert conf.export(target, "yaml") is True
    assert yaml.safe_load(target.read_text(encoding="utf-8"))["format"] == SNAPSHOT_FORMAT


def test_export_unknown_format_raises(sample_file: Path, tmp_path: Path) -> None:
    conf = Configuration(sample_file, apply=False)
    with pytest.raises(ValueError):
        conf.export(tmp_path / "out.toml")


def test_export_io_failure_returns_false(sample_file: Path, tmp_path: Path) -> None:
    conf = Configuration(sample_file, apply=False)
    target = tmp_path / "dir.json"
    target.mkdir()
    assert conf.export(target) is False


@pytest.mark.parametrize("name", ["out.json", "out.yaml"])
def test_export_unencodable_value_keeps_file(sample_file: Path, tmp_path: Path, name: str) -> None:
    conf = Configuration(sample_file, apply=False, encoding="latin-1")
    conf.set_value("s", "name", "中")
    target = tmp_path / name
    target.write_text("previous", encoding="utf-8")

    assert conf.export(target) is False
    assert target.read_text(encoding="utf-8") == "previous"
