"""
Mime type values and the wildcard matching rules shared by the Accept
parser and the negotiator.
"""

__all__ = ["MimeType", "ANY"]


class MimeType(object):
    """
    An immutable ``type/subtype`` value, or one of the wildcard ranges
    ``type/*`` and ``*/*``.

    The type and subtype are compared case-insensitively; ``str()`` gives
    back the value exactly as it was written.  A value without a ``/``
    is kept as-is: it equals itself and matches nothing else.
    """

    __slots__ = ("_value", "_type", "_subtype")

    def __init__(self, value):
        if isinstance(value, MimeType):
            value = value._value
        value = value.strip()
        object.__setattr__(self, "_value", value)
        if value.count("/") == 1:
            major, minor = value.lower().split("/")
        else:
            major, minor = value.lower(), None
        object.__setattr__(self, "_type", major)
        object.__setattr__(self, "_subtype", minor)

    def __setattr__(self, name, value):
        raise AttributeError("%s is immutable" % self.__class__.__name__)

    @property
    def type(self):
        return self._type

    @property
    def subtype(self):
        return self._subtype

    @property
    def is_wildcard(self):
        """``True`` for ``*/*`` and ``type/*``."""
        return self._subtype == "*"

    @property
    def is_valid(self):
        """Whether the value has the ``type/subtype`` shape at all."""
        return bool(self._type) and bool(self._subtype)

    def matches(self, offer):
        """
        Check if the literal mime type ``offer`` is covered by this range.

        - ``*/*`` matches any offer
        - ``type/*`` matches an offer sharing ``type``
        - ``type/subtype`` matches an equal offer
        """
        if not isinstance(offer, MimeType):
            offer = MimeType(offer)

        if self._subtype is None or offer._subtype is None:
            return self == offer

        if self._type == "*" and self._subtype == "*":
            return True

        if self._subtype == "*":
            return self._type == offer._type

        return self._type == offer._type and self._subtype == offer._subtype

    def __eq__(self, other):
        if isinstance(other, str):
            other = MimeType(other)
        if not isinstance(other, MimeType):
            return NotImplemented
        return (self._type, self._subtype) == (other._type, other._subtype)

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash((self._type, self._subtype))

    def __str__(self):
        return self._value

    def __repr__(self):
        return "<%s %r>" % (self.__class__.__name__, self._value)


ANY = MimeType("*/*")
