# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/11/02 21:40:13
# @Author : Kariko Lin

"""
The live section -> key -> value store.

Unlike a plain dict of dicts, a section never stays around empty:
it appears with its first key and goes away with its last one.
"""

import logging
from collections.abc import Iterator, Mapping, MutableMapping
from math import isinf
from re import IGNORECASE
from re import compile as regex

_INT_FORMAT = regex(r'-?[0-9]+')
_FLOAT_FORMAT = regex(
    r'-?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?|inf(?:inity)?|nan)',
    IGNORECASE)


class SectionView(Mapping[str, str]):
    """Read-only window onto one section of a `ConfigStore`.

    It shares the store's dict, so later changes show up here
    until the section itself is dropped.
    """

    def __init__(self, name: str, pairs: dict[str, str]) -> None:
        self._name = name
        self._data = pairs

    @property
    def name(self) -> str:
        return self._name

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __str__(self) -> str:
        return f'[{self._name}]'

    def __repr__(self) -> str:
        return '[%s] { .cnt = %d }' % (self._name, len(self._data))


class ConfigStore(MutableMapping[str, SectionView]):
    """Mapping of section name to its key-value pairs.

    Iteration order is insertion order, both for sections and keys
    (overwriting a value keeps its place).
    """

    def __init__(self, *, logger: logging.Logger | None = None) -> None:
        self.__raw: dict[str, dict[str, str]] = {}
        self._log = logger or logging.getLogger(__name__)

    # -- mapping surface, over sections -------------------------------

    def __getitem__(self, section: str) -> SectionView:
        return SectionView(section, self.__raw[section])

    def __setitem__(self, section: str, pairs: Mapping[str, str]) -> None:
        if not pairs:
            # an empty section is never kept.
            self.__raw.pop(section, None)
            return
        self.__raw[section] = dict(pairs)

    def __delitem__(self, section: str) -> None:
        del self.__raw[section]

    def __contains__(self, section: object) -> bool:
        return section in self.__raw

    def __iter__(self) -> Iterator[str]:
        return iter(self.__raw)

    def __len__(self) -> int:
        return len(self.__raw)

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.__raw!r})'

    def clear(self) -> None:
        self.__raw.clear()

    # -- key level operations -----------------------------------------

    def get(self, section: str, key: str) -> str | None:
        """Value of `key` in `section`, or `None` if either is missing."""
        pairs = self.__raw.get(section)
        if pairs is None:
            return None
        return pairs.get(key)

    def set(self, section: str, key: str, value: str) -> bool:
        self.__raw.setdefault(section, {})[key] = value
        self._log.debug('Set config value [%s].%s = %s', section, key, value)
        return True

    def remove(self, section: str, key: str) -> bool:
        """Drop `key` from `section`; the section goes too if it gets empty.

        Returns `False` (and does nothing) if there was nothing to drop.
        """
        pairs = self.__raw.get(section)
        if pairs is None or key not in pairs:
            return False
        del pairs[key]
        if not pairs:
            del self.__raw[section]
        self._log.debug('Removed config value [%s].%s', section, key)
        return True

    def has_section(self, section: str) -> bool:
        return section in self.__raw

    def has_value(self, section: str, key: str) -> bool:
        return key in self.__raw.get(section, ())

    def list_sections(self) -> list[str]:
        return list(self.__raw)

    def list_keys(self, section: str) -> list[str]:
        return list(self.__raw.get(section, ()))

    def is_on(self, section: str, key: str) -> bool:
        """`True` only for the exact string `"on"`.

        `"On"`, `"ON"`, `"true"`, `"1"` and missing keys are all `False`.
        This is not a general boolean parser.
        """
        return self.get(section, key) == 'on'

    def get_numeric[N: (int, float)](
        self, section: str, key: str, kind: type[N] = int
    ) -> N | None:
        """Parse the whole stored string as `kind` (`int` or `float`).

        No surrounding blanks, no `+` sign, no `_` separators, no trailing
        garbage: `"42"` is 42, `"42x"`, `" 42"` and (for `int`) `"4.2"`
        are all `None`.
        """
        if issubclass(kind, bool):
            raise TypeError('bool is not a numeric kind, try is_on().')
        if issubclass(kind, int):
            pattern = _INT_FORMAT
        elif issubclass(kind, float):
            pattern = _FLOAT_FORMAT
        else:
            raise TypeError(f'unsupported numeric kind: {kind!r}')

        value = self.get(section, key)
        if value is None or not pattern.fullmatch(value):
            return None
        ret = kind(value)
        # `1e999` is out of range, only a literal `inf` may give infinity.
        if isinstance(ret, float) and isinf(ret) \
                and 'inf' not in value.lower():
            return None
        return ret

    # -- helpers --------------------------------------------------------

    def items_flat(self) -> Iterator[tuple[str, str, str]]:
        """Yield `(section, key, value)` in store order."""
        for section, pairs in self.__raw.items():
            for key, value in pairs.items():
                yield section, key, value

    def to_dict(self) -> dict[str, dict[str, str]]:
        return {k: v.copy() for k, v in self.__raw.items()}
