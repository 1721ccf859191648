# -*- encoding: utf-8 -*-
# @File   : configuration.py
# @Time   : 2024/11/03 01:48:02
# @Author : Kariko Lin

"""
Live configuration: the parsed file, kept in memory,
plus logic that runs when values are loaded or changed.

```python
conf = Configuration('~/.myapp.ini', {
    ('graphics', 'vsync'): lambda v: window.set_vsync(v == 'on'),
})
conf.set_value('graphics', 'vsync', 'off', apply=True)
conf.save()
```
"""

import logging
from collections.abc import Mapping
from os import PathLike
from pathlib import Path

from .dispatch import (
    ConfigLogic, HandlerRegistry, SectionKeyPair,
    dispatch_all, dispatch_one
)
from .export import ConfigJsonParser, ConfigYamlParser
from .fsutil import copy_file, expand_tilde
from .model import ConfigStore
from .parser import ConfigFileParser

__all__ = ['Configuration']

_EXPORTERS = {
    'json': ConfigJsonParser,
    'yaml': ConfigYamlParser,
    'yml': ConfigYamlParser,
}


class Configuration:
    """Stores values and runs logic based on section-key pairs.

    Nothing here raises on bad input files or failing handlers:
    problems are logged, and the I/O methods report `False`.
    """

    def __init__(
        self,
        config_path: str | PathLike[str],
        config_logic: Mapping[SectionKeyPair, ConfigLogic] | None = None,
        apply: bool = True, *,
        encoding: str = 'utf-8',
        logger: logging.Logger | None = None
    ) -> None:
        self._path = expand_tilde(config_path)
        self._codec = encoding
        self._log = logger or logging.getLogger(__name__)
        self._handlers = HandlerRegistry(config_logic)
        self._store = ConfigStore(logger=self._log)
        self._parse()
        if apply:
            self.dispatch_all()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def store(self) -> ConfigStore:
        return self._store

    @property
    def handlers(self) -> HandlerRegistry:
        return self._handlers

    def _parser(self, path: str | PathLike[str] | None = None) -> ConfigFileParser:
        return ConfigFileParser(
            self._path if path is None else path,
            self._codec, logger=self._log)

    def _parse(self) -> None:
        self._parser().read(self._store)

    def reload(self) -> None:
        """Throw away in-memory changes, re-read the file and apply all."""
        self._store.clear()
        self._parse()
        self.dispatch_all()

    # -- handlers -------------------------------------------------------

    def register_handler(
        self, section: str, key: str, logic: ConfigLogic
    ) -> None:
        self._handlers.register(section, key, logic)

    def handler(self, section: str, key: str):
        """Decorator form of `register_handler()`."""
        return self._handlers.connect(section, key)

    def dispatch_all(self) -> int:
        return dispatch_all(self._store, self._handlers, self._log)

    def dispatch_one(self, section: str, key: str) -> bool:
        return dispatch_one(self._store, self._handlers, section, key, self._log)

    # -- live modification ----------------------------------------------

    def set_value(
        self, section: str, key: str, value: str, apply: bool = False
    ) -> bool:
        """Set (or overwrite) a value.

        With `apply=True` the pair's handler runs right away;
        a failing handler does not undo the change.
        """
        self._store.set(section, key, value)
        if apply:
            self.dispatch_one(section, key)
        return True

    def get_value(self, section: str, key: str) -> str | None:
        return self._store.get(section, key)

    def get_numeric[N: (int, float)](
        self, section: str, key: str, kind: type[N] = int
    ) -> N | None:
        return self._store.get_numeric(section, key, kind)

    def is_on(self, section: str, key: str) -> bool:
        return self._store.is_on(section, key)

    def remove_value(self, section: str, key: str) -> bool:
        return self._store.remove(section, key)

    # -- queries ----------------------------------------------------------

    def has_section(self, section: str) -> bool:
        return self._store.has_section(section)

    def has_value(self, section: str, key: str) -> bool:
        return self._store.has_value(section, key)

    def list_sections(self) -> list[str]:
        return self._store.list_sections()

    def list_keys(self, section: str) -> list[str]:
        return self._store.list_keys(section)

    # -- files ------------------------------------------------------------

    def save(self, path: str | PathLike[str] | None = None) -> bool:
        """Write the in-memory state to `path` (default: where it came from)."""
        return self._parser(path).write(self._store)

    def backup(self, backup_path: str | PathLike[str]) -> bool:
        """Copy the file *on disk* to `backup_path`, overwriting it.

        In-memory changes are not part of the backup; `save()` first
        if you want them.
        """
        try:
            dst = copy_file(self._path, backup_path)
        except OSError as e:
            self._log.error('Failed to backup configuration: %s', e)
            return False
        self._log.info('Configuration backed up to: %s', dst)
        return True

    def export(
        self, path: str | PathLike[str], fmt: str | None = None
    ) -> bool:
        """Snapshot the in-memory state as JSON or YAML.

        `fmt` defaults to the file suffix. An unknown format is a
        `ValueError`; I/O failures and values the codec cannot
        encode give `False`.
        """
        fmt = (fmt or Path(path).suffix.lstrip('.')).lower()
        if fmt not in _EXPORTERS:
            raise ValueError(f'unknown export format: {fmt!r}')
        exporter = _EXPORTERS[fmt](path, self._codec)
        try:
            exporter.write(self._store)
        except (OSError, UnicodeEncodeError) as e:
            self._log.error('Failed to export configuration to %s: %s',
                            exporter, e)
            return False
        self._log.info('Configuration exported to: %s', exporter)
        return True

    def __str__(self) -> str:
        return f'Configuration: {self._path} ({self._codec})'

    def __repr__(self) -> str:
        return '%s(%r) { .sections = %d, .handlers = %d }' % (
            type(self).__name__, str(self._path),
            len(self._store), len(self._handlers))
