"""
Common type hinting protocols to use throughout the code base
"""
from __future__ import annotations

import typing


@typing.runtime_checkable
class LoggerProtocol(typing.Protocol):
    """
    A protocol for a logger-like object

    Only the severity used by the stream adapters is required; any ``logging.Logger`` satisfies it.
    """
    def debug(self, msg, *args, **kwargs):
        """
        Log 'msg % args' with severity 'DEBUG'.

        To pass exception information, use the keyword argument exc_info with
        a true value, e.g.

        logger.debug("Houston, we have a %s", "thorny problem", exc_info=1)
        """
