class FreesimError(Exception):
    pass


class ConfigurationError(FreesimError, ValueError):
    """An option, policy name, order name or script token could not be
    understood. Raised before any heap operation runs."""


class InternalInconsistency(FreesimError, RuntimeError):
    """The heap no longer satisfies its invariants.

    Continuing after this is never safe: the free list and the allocation
    table may describe overlapping or missing intervals."""
