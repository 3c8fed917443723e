"""
The table of format symbols (``html``, ``json``, ...) and the mime types
they stand for.

A registry is built during application start-up::

    registry = default_registry()
    registry.register("custom", "application/custom")
    registry.set_default("html")
    registry.freeze()

and only read afterwards.  Freezing it makes the second phase explicit:
any later change raises :class:`~conneg.exceptions.RegistryFrozen`.
"""

import logging

from conneg.exceptions import RegistryFrozen, UnknownFormat
from conneg.mimetype import MimeType

__all__ = ["FormatRegistry", "default_registry", "DEFAULT_FORMAT", "BUILTIN_FORMATS"]

log = logging.getLogger(__name__)

DEFAULT_FORMAT = "all"

BUILTIN_FORMATS = (
    (DEFAULT_FORMAT, "application/octet-stream"),
    ("html", "text/html"),
    ("xhtml", "application/xhtml+xml"),
    ("xml", "application/xml"),
    ("json", "application/json"),
    ("js", "application/javascript"),
    ("css", "text/css"),
    ("txt", "text/plain"),
    ("csv", "text/csv"),
    ("atom", "application/atom+xml"),
    ("rss", "application/rss+xml"),
    ("yaml", "application/x-yaml"),
    ("pdf", "application/pdf"),
    ("png", "image/png"),
    ("jpg", "image/jpeg"),
    ("gif", "image/gif"),
    ("svg", "image/svg+xml"),
    ("zip", "application/zip"),
)


class FormatRegistry(object):
    """
    Maps format symbols to :class:`~conneg.mimetype.MimeType` values.

    A fresh registry knows only the catch-all ``all`` format
    (``application/octet-stream``), which is also its default.  Use
    :func:`default_registry` for one seeded with the common web formats.
    """

    def __init__(self, formats=None, default_format=DEFAULT_FORMAT):
        self._mappings = {}
        self._frozen = False
        self._default_format = None
        self.register(DEFAULT_FORMAT, "application/octet-stream")
        if formats:
            if hasattr(formats, "items"):
                formats = formats.items()
            for symbol, mime_type in formats:
                self.register(symbol, mime_type)
        self.set_default(default_format)

    def __repr__(self):
        return "<%s default=%r formats=%d%s>" % (
            self.__class__.__name__,
            self._default_format,
            len(self._mappings),
            " frozen" if self._frozen else "",
        )

    def __contains__(self, symbol):
        return symbol in self._mappings

    def __iter__(self):
        return iter(self._mappings)

    def __len__(self):
        return len(self._mappings)

    def _check_mutable(self):
        if self._frozen:
            raise RegistryFrozen(
                "The format registry is frozen; configure it before serving requests"
            )

    def register(self, symbol, mime_type):
        """
        Bind ``symbol`` to ``mime_type``.

        Registering a symbol again replaces its mime type.  Returns the
        registry so calls can be chained.
        """
        self._check_mutable()
        if not symbol:
            raise ValueError("Format symbol must be a non-empty string")
        if not mime_type or not str(mime_type).strip():
            raise ValueError("Mime type for %r must be a non-empty string" % symbol)
        previous = self._mappings.get(symbol)
        self._mappings[symbol] = MimeType(mime_type)
        if previous is not None and previous != self._mappings[symbol]:
            log.debug("format %r rebound from %s to %s", symbol, previous, mime_type)
        else:
            log.debug("format %r registered as %s", symbol, mime_type)
        return self

    def set_default(self, symbol):
        self._check_mutable()
        if symbol not in self._mappings:
            raise UnknownFormat(symbol)
        self._default_format = symbol
        log.debug("default format set to %r", symbol)
        return self

    def resolve(self, symbol):
        try:
            return self._mappings[symbol]
        except KeyError:
            raise UnknownFormat(symbol) from None

    def reverse_resolve(self, mime_type):
        """
        Return the first symbol registered for exactly ``mime_type``, or
        ``None``.  Wildcard ranges never resolve to a symbol.
        """
        if not isinstance(mime_type, MimeType):
            mime_type = MimeType(mime_type)
        if mime_type.is_wildcard:
            return None
        for symbol, registered in self._mappings.items():
            if registered == mime_type:
                return symbol
        return None

    @property
    def default_format(self):
        return self._default_format

    @property
    def default_mime_type(self):
        return self._mappings[self._default_format]

    @property
    def frozen(self):
        return self._frozen

    def symbols(self):
        return list(self._mappings)

    def mime_types(self):
        """Distinct registered mime types, in registration order."""
        seen = []
        for mime_type in self._mappings.values():
            if mime_type not in seen:
                seen.append(mime_type)
        return seen

    def copy(self):
        """Return a mutable copy, e.g. to derive per-action settings."""
        new = self.__class__.__new__(self.__class__)
        new._mappings = dict(self._mappings)
        new._default_format = self._default_format
        new._frozen = False
        return new

    def freeze(self):
        """End the configuration phase.  Returns the registry."""
        self._frozen = True
        return self


def default_registry():
    """Return a new, mutable registry seeded with :data:`BUILTIN_FORMATS`."""
    return FormatRegistry(BUILTIN_FORMATS)
