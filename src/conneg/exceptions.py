"""
Exceptions raised while configuring formats.

Negotiation itself never raises: a request that cannot be satisfied is
reported as data (see :class:`conneg.negotiation.NegotiationResult`).
"""

__all__ = ["ConnegError", "UnknownFormat", "RegistryFrozen"]


class ConnegError(Exception):
    """Base class for all configuration errors."""


class UnknownFormat(ConnegError, LookupError):
    """
    A format symbol was used that has no registered mime type.
    """

    def __init__(self, symbol):
        self.symbol = symbol
        super().__init__("Unknown format: %r" % (symbol,))


class RegistryFrozen(ConnegError, RuntimeError):
    """
    A :class:`~conneg.registry.FormatRegistry` was changed after
    :meth:`~conneg.registry.FormatRegistry.freeze` was called.
    """
