import io
from abc import ABC


class ShallowTeeException(Exception, ABC):
    """
    Abstract base for custom exception types within shallowtee.
    """

    def __init__(self, *args, **kwargs):
        super(ShallowTeeException, self).__init__(*args, **kwargs)


class UnsupportedSeekError(ShallowTeeException, io.UnsupportedOperation):
    """
    Raised when a seek is requested relative to the end of the stream.

    The length of the source cannot be known without consuming it, and consuming it would push every remaining byte
    into the sink.  Rather than approximate, the request is rejected.  Because it is also an
    ::class:`io.UnsupportedOperation`, callers that already handle unsupported stream operations keep working.
    """

    def __init__(self, *args, **kwargs):
        super(UnsupportedSeekError, self).__init__(*args, **kwargs)


class OffsetRangeError(ShallowTeeException, ValueError):
    """
    Raised when a seek request cannot be represented as a valid absolute offset.

    Offsets are confined to the signed 63-bit range.  This covers a negative resulting offset as well as a cursor,
    delta, or resulting offset that falls outside of that range.  Offsets are never clamped or wrapped.
    """

    def __init__(self, offset: int, *args, **kwargs):
        """
        Initialize this instance.

        Parameters
        ----------
        offset : int
            The offending offset value.
        args
        kwargs
        """
        self.offset = offset
        super(OffsetRangeError, self).__init__(*args, **kwargs)


class UnexpectedEndOfStreamError(ShallowTeeException, EOFError):
    """
    Raised when the source runs out of bytes before a forward seek reached its destination.
    """

    def __init__(self, destination: int, reached: int, *args, **kwargs):
        self.destination = destination
        self.reached = reached
        if not args:
            args = ('seek behind end of stream: requested offset {} but stream ended at {}'.format(destination,
                                                                                                  reached),)
        super(UnexpectedEndOfStreamError, self).__init__(*args, **kwargs)


class SinkWriteError(ShallowTeeException, OSError):
    """
    Raised when the sink accepts no bytes from a write call without raising an error of its own.
    """

    def __init__(self, *args, **kwargs):
        super(SinkWriteError, self).__init__(*args, **kwargs)


class ShallowTeeConfigurationError(ShallowTeeException, ValueError):
    """
    Raised when the environment provides an invalid shallowtee configuration.
    """

    def __init__(self, *args, **kwargs):
        super(ShallowTeeConfigurationError, self).__init__(*args, **kwargs)
