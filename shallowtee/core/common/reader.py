"""
Structural types for the streams a ::class:`ShallowTee` is composed of
"""
import typing

from typing_extensions import Protocol, runtime_checkable
from os import SEEK_SET


@runtime_checkable
class Reader(Protocol):
    def read(self, size: int = -1, /) -> bytes:
        """EOF if empty b''."""


@runtime_checkable
class IntoReader(Protocol):
    def readinto(self, buffer, /) -> typing.Optional[int]:
        """ Read bytes into a pre-allocated, writable buffer.  EOF if ``0``. """


@runtime_checkable
class Seeker(Protocol):
    def seek(self, offset: int, whence: int = SEEK_SET) -> int:
        """ Change the position to the given offset. """


@runtime_checkable
class Writer(Protocol):
    def write(self, data, /) -> typing.Optional[int]:
        """ Write the given bytes, returning how many were accepted. """


@runtime_checkable
class SeekableSource(IntoReader, Seeker, Protocol):
    """
    A readable stream that may be repositioned to an absolute offset.
    """


@runtime_checkable
class Sink(Writer, Protocol):
    """
    A write-only stream.  Whether and when it is flushed is up to its owner.
    """
