# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/11/02 22:05:48
# @Author : Kariko Lin

"""Read and write the INI-like text format.

```ini
key = value        ; before any header: lives in the "" section.

[section]
key = value        # comments start at the first `#` or `;`
blank =            ; empty string
spaced =     ; all spaces, kept as a single " "
[]                 ; the "" section again, written back like this
```

A malformed line (neither a header nor `key = value`) is logged and
skipped. Reading never gives up halfway.
"""

import logging
import warnings
from io import StringIO, TextIOBase
from os import PathLike

from chardet import detect as guess_codec

from .abstract import FileHandler
from .fsutil import create_file
from .model import ConfigStore
from .text import (
    BLANKS, COMMENT_MARKS, is_all_spaces,
    is_section_header, strip_comment, trim
)

__all__ = ['ConfigFileParser', 'parse_line_value', 'render']


def parse_line_value(raw_value: str) -> str:
    """Turn what follows `=` into the stored value.

    All spaces (but not the empty string) collapse to one space,
    so "explicitly blank" survives the usual trimming.
    """
    if is_all_spaces(raw_value):
        return ' '
    return trim(raw_value)


def _lossy(text: str, *forbidden: str) -> bool:
    """Would `text` change (or break the line) when read back?"""
    if text == '':
        return False
    if '\n' in text or '\r' in text:
        return True
    if any(i in text for i in COMMENT_MARKS + forbidden):
        return True
    return text[0] in BLANKS or text[-1] in BLANKS


def render(store: ConfigStore) -> str:
    """Serialize `store`: one `[section]` block per section,
    `key = value` lines, and a blank line after each block.

    An empty value is written as `key =`, since `key = ` would read
    back as the single-space value.
    """
    buf = StringIO()
    for section in store:
        if _lossy(section):
            warnings.warn(
                f'section [{section!r}] would not read back the same '
                'after saving.')
        buf.write(f'[{section}]\n')
        for key, value in store[section].items():
            if _lossy(key, '='):
                warnings.warn(
                    f'key {key!r} in [{section}] '
                    'would not read back the same after saving.')
            if value != ' ' and _lossy(value):
                warnings.warn(
                    f'[{section}].{key} = {value!r} '
                    'would not read back the same after saving.')
            buf.write(f'{key} = {value}\n' if value else f'{key} =\n')
        buf.write('\n')
    return buf.getvalue()


class ConfigFileParser(FileHandler[ConfigStore]):
    def __init__(
        self,
        filename: str | PathLike[str],
        encoding: str = 'utf-8', *,
        logger: logging.Logger | None = None
    ) -> None:
        super().__init__(filename)
        self._codec = encoding
        self._log = logger or logging.getLogger(__name__)

    @staticmethod
    def readstream(
        buf: TextIOBase,
        store: ConfigStore | None = None, *,
        logger: logging.Logger | None = None
    ) -> ConfigStore:
        """Parse an already decoded text stream into `store`
        (a new one if not given).

        Unless you have a stream at hand, just call `self.read()`.
        """
        log = logger or logging.getLogger(__name__)
        if store is None:
            store = ConfigStore(logger=log)
        this_sect = ''
        lineno = 0
        while i := buf.readline():
            lineno += 1
            body = strip_comment(i.rstrip('\r\n'))
            line = trim(body)
            if not line:
                continue

            if is_section_header(line):
                this_sect = trim(line[1:-1])
                continue

            if '=' not in line:
                log.warning('Invalid line in config file (line %d): %s',
                            lineno, line)
                continue

            # split on the un-trimmed tail, or `k =   ` could not be told
            # apart from `k =`.
            key, raw_value = body.split('=', 1)
            store.set(this_sect, trim(key), parse_line_value(raw_value))
        return store

    def _decode_file(self) -> StringIO:
        with open(self._fn, 'rb') as fp:
            raw = fp.read()

        codec = guess_codec(raw)
        if codec is None or codec['encoding'] is None \
                or codec['confidence'] < 0.8:
            codec = {'encoding': 'utf-8'}
        self._log.debug('Guessed codec %s for %s', codec['encoding'], self)

        # fallbacks
        try:
            buf = raw.decode(codec['encoding'])
        except (UnicodeDecodeError, LookupError):
            buf = raw.decode('utf-8', errors='replace')
        return StringIO(buf)

    def read(self, store: ConfigStore | None = None) -> ConfigStore:
        """Read the file this parser points at.

        A missing or unreadable file is logged and gives an empty
        (or untouched, if `store` is passed) store.
        """
        if store is None:
            store = ConfigStore(logger=self._log)
        try:
            # when the configured codec is wrong, just
            # `UnicodeDecodeError` and fallback to `chardet`.
            try:
                # lines end at `\n` only, a lone `\r` is content.
                with open(self._fn, 'r', encoding=self._codec,
                          newline='\n') as fp:
                    buf = StringIO(fp.read())
            except UnicodeDecodeError:
                buf = self._decode_file()
        except OSError as e:
            self._log.error('Unable to open config file: %s (%s)', self, e)
            return store
        return self.readstream(buf, store, logger=self._log)

    def write(self, store: ConfigStore) -> bool:
        """Save `store` to the file.

        I/O failures and values the codec cannot encode give `False`;
        in the latter case the file on disk is left untouched.
        """
        for section in store:
            self._log.debug('Writing section: [%s]', section)
        try:
            # encode before opening, as `'w'` truncates the file.
            data = render(store).encode(self._codec)
            create_file(self._fn)
            with open(self._fn, 'wb') as fp:
                fp.write(data)
        except (OSError, UnicodeEncodeError) as e:
            self._log.error(
                'Error occurred while writing to config file: %s (%s)',
                self, e)
            return False
        self._log.info('Successfully saved configuration to: %s', self)
        return True

    def __repr__(self) -> str:
        return f'{type(self).__name__}({str(self)!r}, {self._codec!r})'
