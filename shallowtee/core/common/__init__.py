"""
Provides the structural types shared by the shallowtee stream adapters
"""
from __future__ import annotations

from .protocols import LoggerProtocol
from .reader import Reader
from .reader import IntoReader
from .reader import Seeker
from .reader import Writer
from .reader import SeekableSource
from .reader import Sink
