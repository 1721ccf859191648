# -*- encoding: utf-8 -*-
# @File   : export.py
# @Time   : 2024/11/03 15:27:40
# @Author : Kariko Lin

"""Snapshot a `ConfigStore` to JSON or YAML (and read such snapshots back).

These are for tooling and diffs, not a replacement for the INI file:
`Configuration` never loads from them on its own.
"""

import json
from os import PathLike
from typing import Any, TypedDict

import yaml

from .abstract import FileHandler
from .fsutil import create_file
from .model import ConfigStore

__all__ = ['ConfigJsonParser', 'ConfigYamlParser', 'SNAPSHOT_FORMAT']

SNAPSHOT_FORMAT = 'liveini/snapshot'
SNAPSHOT_VERSION = 1


class _Snapshot(TypedDict):
    format: str
    version: int
    sections: dict[str, dict[str, str]]


def _to_snapshot(store: ConfigStore) -> _Snapshot:
    return _Snapshot(
        format=SNAPSHOT_FORMAT,
        version=SNAPSHOT_VERSION,
        sections=store.to_dict())


def _from_snapshot(src: Any) -> ConfigStore:
    ret = ConfigStore()
    if not isinstance(src, dict) or not isinstance(src.get('sections'), dict):
        raise ValueError('not a config snapshot: missing "sections" table.')
    for section, pairs in src['sections'].items():
        # pyyaml turns `42` into int and `~` into None.
        for key, value in (pairs or {}).items():
            ret.set(str(section), str(key), '' if value is None else str(value))
    return ret


class ConfigJsonParser(FileHandler[ConfigStore]):
    def __init__(
        self, filename: str | PathLike[str], encoding: str = 'utf-8'
    ) -> None:
        super().__init__(filename)
        self._codec = encoding

    def read(self) -> ConfigStore:
        with open(self._fn, 'r', encoding=self._codec) as fp:
            return _from_snapshot(json.load(fp))

    def write(self, store: ConfigStore, indent: int = 2) -> None:
        """May raise `UnicodeEncodeError`, before the file is touched."""
        data = json.dumps(
            _to_snapshot(store), ensure_ascii=False, indent=indent
        ).encode(self._codec)
        create_file(self._fn)
        with open(self._fn, 'wb') as fp:
            fp.write(data)


class ConfigYamlParser(FileHandler[ConfigStore]):
    def __init__(
        self, filename: str | PathLike[str], encoding: str = 'utf-8'
    ) -> None:
        super().__init__(filename)
        self._codec = encoding

    def read(self) -> ConfigStore:
        with open(self._fn, 'r', encoding=self._codec) as fp:
            return _from_snapshot(yaml.safe_load(fp))

    def write(self, store: ConfigStore, indent: int = 2) -> None:
        data = yaml.safe_dump(
            dict(_to_snapshot(store)),
            allow_unicode=True, sort_keys=False, indent=indent
        ).encode(self._codec)
        create_file(self._fn)
        with open(self._fn, 'wb') as fp:
            fp.write(data)
