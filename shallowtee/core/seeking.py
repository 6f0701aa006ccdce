"""
Seek requests understood by a ::class:`ShallowTee`, expressed as a tagged variant
"""
from __future__ import annotations

import abc
import enum
import operator
import os
import typing

from pydantic import BaseModel, StrictInt

from .exception import OffsetRangeError, UnsupportedSeekError

MAX_OFFSET: typing.Final[int] = 2 ** 63 - 1
"""The largest offset a stream position may take; offsets are treated as signed 63-bit safe quantities"""

MIN_DELTA: typing.Final[int] = -(2 ** 63)
"""The most negative change a relative seek may request"""


class Whence(enum.IntEnum):
    """
    The reference point of a seek, valued the same as the ``os.SEEK_*`` constants
    """
    START = os.SEEK_SET
    CURRENT = os.SEEK_CUR
    END = os.SEEK_END


def check_offset(offset: int) -> int:
    """
    Ensure that an absolute offset is representable as a stream position

    Args:
        offset: The absolute offset to check

    Returns:
        The offset, unchanged

    Raises:
        OffsetRangeError: if the offset is negative or larger than ``MAX_OFFSET``
    """
    if offset < 0:
        raise OffsetRangeError(offset, f"resultant offset is negative: {offset}")
    if offset > MAX_OFFSET:
        raise OffsetRangeError(offset, f"resultant offset is greater than 2^63 - 1: {offset}")
    return offset


class SeekFrom(BaseModel, abc.ABC):
    """
    A request to move a stream to a new position
    """
    offset: StrictInt
    """The offset of the request, relative to the point described by ``whence``"""

    whence: typing.ClassVar[Whence]

    def __init__(self, offset: int, **data):
        super().__init__(offset=offset, **data)

    @classmethod
    def from_whence(cls, offset: int, whence: int = os.SEEK_SET) -> SeekFrom:
        """
        Build a request from the arguments of a conventional ``seek(offset, whence)`` call

        Args:
            offset: The offset to seek to
            whence: One of ``os.SEEK_SET``, ``os.SEEK_CUR``, or ``os.SEEK_END``

        Returns:
            The request variant matching ``whence``
        """
        offset = operator.index(offset)

        try:
            whence = Whence(whence)
        except ValueError:
            raise ValueError(
                f"invalid whence ({whence!r}, should be {os.SEEK_SET}, {os.SEEK_CUR} or {os.SEEK_END})"
            ) from None

        return _REQUEST_TYPES[whence](offset)

    @abc.abstractmethod
    def resolve(self, cursor: int) -> int:
        """
        Compute the absolute destination of this request

        Args:
            cursor: The current absolute position of the stream

        Returns:
            The absolute offset the stream should move to
        """
        ...

    def __eq__(self, other):
        return type(self) is type(other) and self.offset == other.offset

    def __hash__(self):
        return hash((self.whence, self.offset))

    def __str__(self):
        return f"{self.__class__.__name__}({self.offset})"

    def __repr__(self):
        return self.__str__()

    class Config:
        allow_mutation = False


class Start(SeekFrom):
    """
    Seek to an absolute offset from the start of the stream
    """
    whence: typing.ClassVar[Whence] = Whence.START

    def resolve(self, cursor: int) -> int:
        return check_offset(self.offset)


class Current(SeekFrom):
    """
    Seek by a signed delta from the current position
    """
    whence: typing.ClassVar[Whence] = Whence.CURRENT

    def resolve(self, cursor: int) -> int:
        if cursor > MAX_OFFSET:
            raise OffsetRangeError(cursor, f"current offset is greater than 2^63 - 1: {cursor}")

        if not MIN_DELTA <= self.offset <= MAX_OFFSET:
            raise OffsetRangeError(self.offset, f"offset change does not fit within 64 signed bits: {self.offset}")

        return check_offset(cursor + self.offset)


class End(SeekFrom):
    """
    Seek relative to the end of the stream

    Shallow tees cannot honor this; the variant exists so that the request may be expressed and then rejected.
    """
    whence: typing.ClassVar[Whence] = Whence.END

    def resolve(self, cursor: int) -> int:
        raise UnsupportedSeekError("seeking relative to the end of the stream is not supported")


_REQUEST_TYPES: typing.Dict[Whence, typing.Type[SeekFrom]] = {
    variant.whence: variant for variant in (Start, Current, End)
}
