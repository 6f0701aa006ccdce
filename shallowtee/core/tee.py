"""
A tee-reader that supports seeking on the shallow level: every byte skipped by a forward seek is still mirrored
"""
import io
import logging
import operator
import os
import typing

from .common import LoggerProtocol, SeekableSource, Sink
from .exception import SinkWriteError, UnexpectedEndOfStreamError
from .seeking import SeekFrom
from .settings import tee_settings

_LOGGER = logging.getLogger(__name__)


class ShallowTee(io.RawIOBase):
    """
    Reads from a seekable source while copying each newly reached byte of it into a sink

    The sink always holds exactly the first ``high_water`` bytes of the source, in order, where ``high_water`` is the
    furthest offset ever reached through this object.  Seeking backward costs nothing since those bytes were already
    mirrored.  Seeking forward past ``high_water`` reads and mirrors everything in between, since the sink cannot be
    told to skip bytes.

    Neither the source nor the sink are flushed or closed by this object.  The source is assumed to be positioned at
    its start when given.
    """

    def __init__(
        self,
        source: SeekableSource,
        sink: Sink,
        *,
        chunk_size: int = None,
        logger: LoggerProtocol = None
    ):
        """
        Constructor

        Args:
            source: The stream to read from; this object takes ownership of it
            sink: The stream that newly read bytes are written to; this object takes ownership of it
            chunk_size: The most bytes to read at once when a forward seek copies the source into the sink
            logger: Where to log details about bulk copies
        """
        super().__init__()
        if chunk_size is None:
            chunk_size = tee_settings().copy_chunk_size
        else:
            chunk_size = operator.index(chunk_size)

        if chunk_size <= 0:
            raise ValueError(f"A {self.__class__.__name__} cannot copy in chunks of {chunk_size} bytes")

        self.__source = source
        self.__sink = sink
        self.__chunk_size = chunk_size
        self.__logger: LoggerProtocol = logger or _LOGGER
        self.__cursor: int = 0
        """The actual position of the source"""
        self.__high_water: int = 0
        """The furthest position ever reached in the source; the number of bytes mirrored into the sink"""
        self.__source_misplaced: bool = False
        """Whether the source failed to move back to the cursor and must be repositioned before it is used"""

    @property
    def source(self) -> SeekableSource:
        return self.__source

    @property
    def sink(self) -> Sink:
        return self.__sink

    @property
    def cursor(self) -> int:
        """
        The current position within the source
        """
        return self.__cursor

    @property
    def high_water(self) -> int:
        """
        The furthest position ever reached within the source, which is also how many bytes the sink has received
        """
        return self.__high_water

    def readable(self) -> bool:
        self.__check_closed()
        return True

    def seekable(self) -> bool:
        self.__check_closed()
        return True

    def writable(self) -> bool:
        self.__check_closed()
        return False

    def tell(self) -> int:
        self.__check_closed()
        return self.__cursor

    def readinto(self, buffer) -> typing.Optional[int]:
        """
        Read bytes from the source into the given buffer, mirroring whatever lies beyond the high-water mark

        Args:
            buffer: A writable bytes-like object to fill

        Returns:
            The number of bytes read, ``0`` at the end of the source, or ``None`` if a non-blocking source had nothing
            to offer
        """
        self.__check_closed()
        self.__check_state()

        with memoryview(buffer) as outer, outer.cast("B") as view:
            if len(view) == 0:
                return 0

            self.__restore_source_position()
            size = self.__source.readinto(view)
            if not size:
                return size

            self.__cursor += size
            if self.__cursor > self.__high_water:
                delta = self.__cursor - self.__high_water
                assert delta <= size, f"{self} read {size} bytes but needs to mirror {delta}"
                with view[size - delta:size] as tail:
                    self.__mirror_or_rewind(tail)

        return size

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        """
        Move to a new position in the source

        Seeking to ``os.SEEK_END`` is not supported.

        Args:
            offset: Where to go, relative to ``whence``
            whence: One of ``os.SEEK_SET`` or ``os.SEEK_CUR``

        Returns:
            The new absolute position
        """
        return self.seek_to(SeekFrom.from_whence(offset, whence))

    def seek_to(self, position: SeekFrom) -> int:
        """
        Move to the position described by a seek request

        A destination at or behind the high-water mark simply repositions the source.  A destination beyond it reads
        every byte between the mark and the destination into the sink.

        Args:
            position: Where to go

        Returns:
            The new absolute position

        Raises:
            UnsupportedSeekError: if the request is relative to the end of the stream
            OffsetRangeError: if the destination is negative or too large to represent
            UnexpectedEndOfStreamError: if the source ended before the destination could be reached
        """
        self.__check_closed()
        self.__check_state()

        destination = position.resolve(self.__cursor)
        self.__restore_source_position()

        if destination <= self.__high_water:
            self.__source.seek(destination, os.SEEK_SET)
            self.__cursor = destination
            return self.__cursor

        self.__source.seek(self.__high_water, os.SEEK_SET)
        self.__cursor = self.__high_water
        self.__copy(destination - self.__high_water)

        if self.__cursor != destination:
            self.__logger.debug(
                f"{self} could not reach offset {destination}; the source ended at {self.__cursor}"
            )
            raise UnexpectedEndOfStreamError(destination, self.__cursor)

        return self.__cursor

    def __copy(self, size: int):
        """
        Read up to ``size`` bytes from the current position of the source, writing them all into the sink

        The cursor and the high-water mark move along with every chunk that makes it into the sink.

        Args:
            size: How many bytes to transfer
        """
        self.__logger.debug(f"{self} is copying {size} bytes from its source into its sink")
        buffer = bytearray(min(size, self.__chunk_size))
        view = memoryview(buffer)

        while size > 0:
            chunk = view[:min(size, len(view))]
            read = self.__source.readinto(chunk)

            if read is None:
                raise BlockingIOError(
                    f"The source of {self} had no data available while copying {size} more bytes into the sink"
                )

            if read == 0:
                break

            self.__cursor += read
            self.__mirror_or_rewind(chunk[:read])

            size -= read

    def __mirror_or_rewind(self, data: memoryview):
        """
        Mirror the given data, moving the source back to the high-water mark if the sink fails partway

        Args:
            data: Bytes that lie directly after the high-water mark
        """
        try:
            self.__mirror(data)
        except Exception as error:
            self.__rewind_to_high_water(error)
            raise

    def __mirror(self, data: memoryview):
        """
        Write all of the given data into the sink, counting each accepted byte toward the high-water mark

        Args:
            data: Bytes that lie directly after the high-water mark
        """
        offset = 0
        while offset < len(data):
            with data[offset:] as remaining:
                written = self.__sink.write(remaining)

            if not written:
                raise SinkWriteError(
                    f"The sink of {self} accepted no bytes with {len(data) - offset} left to mirror at "
                    f"{self.__high_water}"
                )

            self.__high_water += written
            offset += written

    def __rewind_to_high_water(self, error: Exception):
        """
        Move the source back to the end of what the sink actually received after mirroring failed

        If the source cannot be moved, the cursor still drops to the high-water mark and the source is repositioned
        before it is next used.  The failure to move it is noted on the mirroring error rather than replacing it.

        Args:
            error: The error that stopped mirroring
        """
        if self.__cursor <= self.__high_water:
            return

        self.__logger.debug(
            f"Mirroring failed; moving the source of {self} back from {self.__cursor} to {self.__high_water}"
        )
        self.__cursor = self.__high_water
        self.__source_misplaced = True

        try:
            self.__restore_source_position()
        except Exception as rewind_error:
            self.__logger.debug(
                f"The source of {self} could not be moved back; it will be repositioned before its next use",
                exc_info=rewind_error
            )
            error.add_note(f"The source could not be moved back to offset {self.__cursor}: {rewind_error!r}")

    def __restore_source_position(self):
        """
        Move the source to the cursor if an earlier attempt to do so failed
        """
        if self.__source_misplaced:
            self.__source.seek(self.__cursor, os.SEEK_SET)
            self.__source_misplaced = False

    def __check_state(self):
        assert self.__cursor <= self.__high_water, \
            f"{self.__class__.__name__} is in an invalid state: {self.__cursor} > {self.__high_water}"

    def __check_closed(self):
        if self.closed:
            raise ValueError("I/O operation on closed stream.")

    def __str__(self):
        return f"{self.__class__.__name__}(cursor={self.__cursor}, high_water={self.__high_water})"

    def __repr__(self):
        return self.__str__()
