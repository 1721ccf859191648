# -*- encoding: utf-8 -*-
# @File   : dispatch.py
# @Time   : 2024/11/03 00:12:36
# @Author : Kariko Lin

"""Per-key "config logic": callbacks run against stored values.

A handler is looked up by `(section, key)` at dispatch time, so it can be
registered before, after, or without any value ever being stored.
A handler that raises is logged and skipped. It never takes the
rest of the batch (or the caller) down with it.
"""

import logging
from collections.abc import Callable, Iterator, Mapping, MutableMapping

from .model import ConfigStore

__all__ = [
    'SectionKeyPair', 'ConfigLogic', 'HandlerRegistry',
    'dispatch_all', 'dispatch_one'
]

type SectionKeyPair = tuple[str, str]
type ConfigLogic = Callable[[str], object]


class HandlerRegistry(MutableMapping[SectionKeyPair, ConfigLogic]):
    """`(section, key)` -> callback taking the value string."""

    def __init__(
        self, handlers: Mapping[SectionKeyPair, ConfigLogic] | None = None
    ) -> None:
        self.__raw: dict[SectionKeyPair, ConfigLogic] = {}
        if handlers:
            self.update(handlers)

    def __getitem__(self, pair: SectionKeyPair) -> ConfigLogic:
        return self.__raw[pair]

    def __setitem__(self, pair: SectionKeyPair, logic: ConfigLogic) -> None:
        section, key = pair
        if not callable(logic):
            raise TypeError(f'config logic for [{section}].{key} '
                            f'is not callable: {logic!r}')
        self.__raw[section, key] = logic

    def __delitem__(self, pair: SectionKeyPair) -> None:
        del self.__raw[pair]

    def __iter__(self) -> Iterator[SectionKeyPair]:
        return iter(self.__raw)

    def __len__(self) -> int:
        return len(self.__raw)

    def __repr__(self) -> str:
        return '%s { .cnt = %d }' % (type(self).__name__, len(self.__raw))

    def register(self, section: str, key: str, logic: ConfigLogic) -> None:
        """Bind `logic` to the pair, replacing any earlier one."""
        self[section, key] = logic

    def connect(
        self, section: str, key: str
    ) -> Callable[[ConfigLogic], ConfigLogic]:
        """Decorator flavour of `register()`:

            @registry.connect('graphics', 'vsync')
            def _(value): ...
        """
        def decorator(logic: ConfigLogic) -> ConfigLogic:
            self.register(section, key, logic)
            return logic
        return decorator

    def lookup(self, section: str, key: str) -> ConfigLogic | None:
        return self.__raw.get((section, key))


def _run(
    logic: ConfigLogic, section: str, key: str, value: str,
    logger: logging.Logger
) -> bool:
    try:
        logic(value)
    except Exception:
        logger.exception(
            'Failed to apply config logic for [%s].%s', section, key)
        return False
    logger.debug('Applied config logic for [%s].%s', section, key)
    return True


def dispatch_all(
    store: ConfigStore,
    registry: HandlerRegistry,
    logger: logging.Logger | None = None
) -> int:
    """Run the handler of every stored pair with its current value.

    Returns how many handlers completed. Pairs without a handler only get
    a warning.
    """
    logger = logger or logging.getLogger(__name__)
    done = 0
    # snapshot of the pairs, as handlers are free to touch the store.
    for section, key, _ in list(store.items_flat()):
        if (value := store.get(section, key)) is None:
            continue  # removed by an earlier handler
        if (logic := registry.lookup(section, key)) is None:
            logger.warning(
                'there was no function associated with the '
                'section, key pair: %s, %s', section, key)
            continue
        logger.debug('running config logic on %s, %s with value %s',
                     section, key, value)
        done += _run(logic, section, key, value, logger)
    return done


def dispatch_one(
    store: ConfigStore,
    registry: HandlerRegistry,
    section: str, key: str,
    logger: logging.Logger | None = None
) -> bool:
    """Run the handler of one pair. `True` only if it ran and returned."""
    logger = logger or logging.getLogger(__name__)
    if (value := store.get(section, key)) is None:
        return False
    if (logic := registry.lookup(section, key)) is None:
        return False
    return _run(logic, section, key, value, logger)
