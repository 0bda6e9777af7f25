import logging
import sys
from typing import Optional

LOG_LEVEL = logging.WARNING
LOG_FORMAT = '[{name} - {levelname}] {message}'

LOGGER = logging.getLogger('freesim')
_HANDLER: Optional[logging.StreamHandler] = None


def get_logger(**kwargs) -> logging.Logger:
    """Point the package logger at `stream_io` (stderr by default).

    Only one handler is ever installed; asking for a different stream
    replaces it."""
    global _HANDLER
    level = kwargs.get('level', LOG_LEVEL)
    stream_io = kwargs.get('stream_io', sys.stderr)
    formatter = kwargs.get('formatter', logging.Formatter(LOG_FORMAT, style='{'))

    LOGGER.setLevel(level)

    if _HANDLER is not None:
        if _HANDLER.stream is stream_io:
            _HANDLER.setLevel(level)
            return LOGGER
        LOGGER.removeHandler(_HANDLER)

    _HANDLER = logging.StreamHandler(stream=stream_io)
    _HANDLER.setLevel(level)
    _HANDLER.setFormatter(formatter)
    LOGGER.addHandler(_HANDLER)
    return LOGGER
