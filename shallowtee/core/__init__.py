"""
Stream adapters that mirror what is read from a seekable source into a write-only sink
"""
from ._version import __version__

from .exception import ShallowTeeException
from .exception import UnsupportedSeekError
from .exception import OffsetRangeError
from .exception import UnexpectedEndOfStreamError
from .exception import SinkWriteError
from .exception import ShallowTeeConfigurationError
from .seeking import MAX_OFFSET
from .seeking import Whence
from .seeking import SeekFrom
from .seeking import Start
from .seeking import Current
from .seeking import End
from .settings import TeeSettings
from .settings import tee_settings
from .tee import ShallowTee
