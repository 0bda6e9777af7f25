__version__ = "0.1.0"

import logging

from .telemetrics import LOGGER
from .errors import FreesimError, ConfigurationError, InternalInconsistency
from .config import HeapConfig, Order, Policy
from .heap import (
    AllocationOutcome,
    AllocationRecord,
    FreeBlock,
    FreeOutcome,
    Heap,
    HeapStats,
)


def set_logger(logger: logging.Logger) -> None:
    from . import config, heap, script, cli

    global LOGGER
    LOGGER = logger
    config.LOGGER = logger.getChild('Config')
    heap.LOGGER = logger.getChild('Heap')
    script.LOGGER = logger.getChild('Script')
    cli.LOGGER = logger


__all__ = [
    'AllocationOutcome',
    'AllocationRecord',
    'ConfigurationError',
    'FreeBlock',
    'FreeOutcome',
    'FreesimError',
    'Heap',
    'HeapConfig',
    'HeapStats',
    'InternalInconsistency',
    'LOGGER',
    'Order',
    'Policy',
    'set_logger',
]
