# -*- encoding: utf-8 -*-
# @File   : fsutil.py
# @Time   : 2024/11/02 21:02:51
# @Author : Kariko Lin

"""Tiny filesystem helpers the configuration relies on.

None of these swallow errors: an `OSError` goes back to the caller,
which decides whether it is fatal (it usually is not).
"""

from os import PathLike
from os.path import expanduser
from pathlib import Path
from shutil import copyfile


def expand_tilde(path: str | PathLike[str]) -> Path:
    """`~/foo.ini` -> `/home/<user>/foo.ini`. Other paths are untouched."""
    return Path(expanduser(path))


def create_file(path: str | PathLike[str]) -> Path:
    """Make sure a regular file exists at `path`, creating parents as well.

    An existing file is left as it is (no truncation).
    """
    target = expand_tilde(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.touch(exist_ok=True)
    return target


def copy_file(src: str | PathLike[str], dst: str | PathLike[str]) -> Path:
    # overwrites dst if present.
    return Path(copyfile(expand_tilde(src), expand_tilde(dst)))
