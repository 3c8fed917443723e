"""
Pick the response format for a request.

:func:`negotiate` combines the parsed ``Accept`` header, a
:class:`~conneg.registry.FormatRegistry`, an optional
:class:`RestrictionPolicy` and an optional explicitly requested format into a
:class:`NegotiationResult`.  A request that cannot be satisfied is not an
error: the result carries ``accepted=False`` and the caller answers with
``406 Not Acceptable``.
"""

from collections import namedtuple
import logging

from conneg.acceptparse import Accept, parse_accept, preferred_order
from conneg.mimetype import MimeType

__all__ = ["RestrictionPolicy", "NegotiationResult", "negotiate", "acceptable"]

log = logging.getLogger(__name__)


class RestrictionPolicy(object):
    """
    The ordered set of format symbols an action is willing to produce.

    Build it in one go::

        policy = RestrictionPolicy.build("html", "json", "custom")

    or incrementally with :meth:`add`.  Duplicates are ignored and the
    first declaration keeps its position.
    """

    def __init__(self, symbols=()):
        self._symbols = []
        for symbol in symbols:
            self.add(symbol)

    @classmethod
    def build(cls, *symbols):
        return cls(symbols)

    def add(self, symbol):
        if not symbol:
            raise ValueError("Format symbol must be a non-empty string")
        if symbol not in self._symbols:
            self._symbols.append(symbol)
        return self

    def resolve(self, registry):
        """
        Return ``(symbol, MimeType)`` pairs in declaration order.

        :raises UnknownFormat: if a symbol is not in ``registry``
        """
        return [(symbol, registry.resolve(symbol)) for symbol in self._symbols]

    validate = resolve

    def __iter__(self):
        return iter(self._symbols)

    def __len__(self):
        return len(self._symbols)

    def __contains__(self, symbol):
        return symbol in self._symbols

    def __eq__(self, other):
        if not isinstance(other, RestrictionPolicy):
            return NotImplemented
        return self._symbols == other._symbols

    def __repr__(self):
        return "<%s %r>" % (self.__class__.__name__, self._symbols)


class NegotiationResult(namedtuple("NegotiationResult", ["mime_type", "format", "accepted"])):
    """
    The outcome of :func:`negotiate`.

    ``mime_type`` is the :class:`~conneg.mimetype.MimeType` to send as
    ``Content-Type``, ``format`` its symbol (``None`` if the registry has
    no symbol for it) and ``accepted`` whether the request can be served.
    When ``accepted`` is false, ``mime_type`` and ``format`` are only
    informational.
    """

    __slots__ = ()

    @property
    def status(self):
        return 200 if self.accepted else 406


def _entries(accept_entries):
    if accept_entries is None or isinstance(accept_entries, str):
        return parse_accept(accept_entries)
    if isinstance(accept_entries, Accept):
        return accept_entries.parsed
    return list(accept_entries)


def _candidates(registry, restriction_policy):
    if restriction_policy is not None:
        return restriction_policy.resolve(registry)

    default = registry.default_format
    candidates = [(default, registry.default_mime_type)]
    for mime_type in registry.mime_types():
        if mime_type != registry.default_mime_type:
            candidates.append((registry.reverse_resolve(mime_type), mime_type))
    return candidates


def _best_match(entries, candidates):
    for entry in preferred_order(entries):
        for symbol, mime_type in candidates:
            if entry.matches(mime_type):
                return symbol, mime_type
    return None


def negotiate(accept_entries, registry, restriction_policy=None, requested_format=None):
    """
    Choose the response format.

    :param accept_entries: parsed entries (see
        :func:`~conneg.acceptparse.parse_accept`), an
        :class:`~conneg.acceptparse.Accept` object, or the raw header value
        (``str`` or ``None``)
    :param registry: the :class:`~conneg.registry.FormatRegistry` to use
    :param restriction_policy: optional :class:`RestrictionPolicy`; when
        given only its formats are candidates, and a request matching none
        of them is not accepted
    :param requested_format: optional symbol the action asked for
        explicitly; it is always the chosen format
    :raises UnknownFormat: if ``requested_format`` or a policy symbol is not
        registered
    :return: :class:`NegotiationResult`

    Entries are tried in descending qvalue order (ties keep header order);
    the first candidate an entry matches wins.  Without a policy the
    registry default is the first candidate, so ``*/*`` selects it.
    """
    entries = _entries(accept_entries)

    if requested_format is not None:
        mime_type = registry.resolve(requested_format)
        accepted = True
        if restriction_policy is not None:
            accepted = _best_match(entries, restriction_policy.resolve(registry)) is not None
        log.debug("explicit format %r (%s), accepted=%s", requested_format, mime_type, accepted)
        return NegotiationResult(mime_type, requested_format, accepted)

    candidates = _candidates(registry, restriction_policy)
    match = _best_match(entries, candidates)

    if match is not None:
        symbol, mime_type = match
        log.debug("negotiated %r (%s)", symbol, mime_type)
        return NegotiationResult(mime_type, symbol, True)

    if restriction_policy is None:
        log.debug("no match, falling back to default format %r", registry.default_format)
        return NegotiationResult(registry.default_mime_type, registry.default_format, True)

    symbol, mime_type = candidates[0] if candidates else (None, registry.default_mime_type)
    log.debug("no acceptable format among %r", list(restriction_policy))
    return NegotiationResult(mime_type, symbol, False)


def acceptable(accept_entries, mime_type):
    """
    Return whether the client would accept the literal ``mime_type``.

    This does not select anything; it checks the entries with a non-0
    qvalue against ``mime_type`` using the same matching rules as
    :func:`negotiate`.  Without an ``Accept`` header every mime type is
    acceptable.
    """
    if not isinstance(mime_type, MimeType):
        mime_type = MimeType(mime_type)
    return any(
        entry.matches(mime_type)
        for entry in _entries(accept_entries)
        if entry.quality
    )
