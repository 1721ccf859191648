# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2024/11/02 21:10:27
# @Author : Kariko Lin

from abc import ABCMeta, abstractmethod
from os import PathLike

from .fsutil import expand_tilde


class FileHandler[T](metaclass=ABCMeta):
    """Something that reads a `T` from one file and writes it back."""

    def __init__(self, filename: str | PathLike[str]) -> None:
        self._fn = expand_tilde(filename)

    @property
    def filename(self) -> str:
        return str(self._fn)

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    @abstractmethod
    def write(self, instance: T) -> None | bool:
        raise NotImplementedError

    def __str__(self) -> str:
        return str(self._fn)
