"""
Parses the ``Accept`` header.

The header takes the form of::

    text/html, application/xhtml+xml, application/xml;q=0.9, */*;q=0.8

Where the ``q`` parameter is optional.  Other parameters exist, but this
ignores them.

Parsing is tolerant: a segment with an unusable media range is dropped, and
a missing or malformed ``q`` counts as ``1``.  An absent or blank header is
read as ``*/*``.
"""

from collections import namedtuple
import re

from conneg.mimetype import ANY, MimeType
from conneg.util import header_docstring, header_to_key

__all__ = [
    "AcceptEntry",
    "parse_accept",
    "preferred_order",
    "Accept",
    "AcceptValidHeader",
    "AcceptNoHeader",
    "create_accept_header",
    "accept_property",
]

# RFC 7230 Section 3.2.3 "Whitespace"
# OWS            = *( SP / HTAB )
#                ; optional whitespace
OWS_re = "[ \t]*"

# RFC 7230 Section 3.2.6 "Field Value Components":
# tchar          = "!" / "#" / "$" / "%" / "&" / "'" / "*"
#                / "+" / "-" / "." / "^" / "_" / "`" / "|" / "~"
#                / DIGIT / ALPHA
tchar_re = r"[!#$%&'*+\-.^_`|~0-9A-Za-z]"

# token          = 1*tchar
token_re = tchar_re + "+"

# RFC 7231 Section 5.3.2 "Accept":
# media-range    = ( "*/*"
#                  / ( type "/" "*" )
#                  / ( type "/" subtype )
#                  )
# '*' is included through token_re, so this covers */* and type/*
media_range_compiled_re = re.compile("^(" + token_re + ")/(" + token_re + ")$")

# RFC 7231 Section 5.3.1 allows at most three decimals; we are more lenient
# and take any decimal, then check the range.
qvalue_compiled_re = re.compile(r"^(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)$")

param_split_re = re.compile(OWS_re + ";" + OWS_re)


class AcceptEntry(namedtuple("AcceptEntry", ["pattern", "quality"])):
    """A media range from the header and its quality value."""

    __slots__ = ()

    def matches(self, offer):
        return self.pattern.matches(offer)

    def __str__(self):
        if self.quality == 1.0:
            return str(self.pattern)
        if self.quality == 0.0:
            return "{};q=0".format(self.pattern)
        return "{};q={}".format(self.pattern, self.quality)


def _parse_media_range(value):
    match = media_range_compiled_re.match(value)
    if match is None:
        return None
    major, minor = match.groups()
    if major == "*" and minor != "*":
        return None
    if major != "*" and "*" in major:
        return None
    if minor != "*" and "*" in minor:
        return None
    return MimeType(value)


def _parse_qvalue(value):
    value = value.strip()
    if not qvalue_compiled_re.match(value):
        return 1.0
    qvalue = float(value)
    if not 0.0 <= qvalue <= 1.0:
        return 1.0
    return qvalue


def parse_accept(header_value):
    """
    Parse an ``Accept`` header value into a list of :class:`AcceptEntry`.

    :param header_value: (``str`` or ``None``) header value
    :return: the entries in header order.  ``None`` or a blank value gives
             ``[AcceptEntry(*/*, 1.0)]``; a value with no usable media range
             gives ``[]``.
    """
    if header_value is None or not header_value.strip():
        return [AcceptEntry(ANY, 1.0)]

    entries = []
    for segment in header_value.split(","):
        segment = segment.strip()
        if not segment:
            continue
        media_range, *params = param_split_re.split(segment)
        pattern = _parse_media_range(media_range.strip())
        if pattern is None:
            continue
        quality = 1.0
        for param in params:
            name, sep, value = param.partition("=")
            if sep and name.strip().lower() == "q":
                quality = _parse_qvalue(value)
                # only the first q counts; later ones are accept-ext
                break
        entries.append(AcceptEntry(pattern, quality))
    return entries


def preferred_order(entries):
    """Entries with non-0 qvalues, highest first; ties keep header order."""
    return sorted(
        (entry for entry in entries if entry.quality),
        key=lambda entry: entry.quality,
        reverse=True,
    )


class Accept(object):
    """
    Represent an ``Accept`` header.

    Base class for :class:`AcceptValidHeader` and :class:`AcceptNoHeader`.
    This object should not be modified.
    """

    parse = staticmethod(parse_accept)

    @property
    def header_value(self):
        """(``str`` or ``None``) The header value."""
        return self._header_value

    @property
    def parsed(self):
        """(``list``) :class:`AcceptEntry` items, in header order."""
        return self._parsed

    def __iter__(self):
        """
        Return the media ranges with non-0 qvalues, in order of preference.

        If two ranges have the same qvalue, they are returned in the order of
        their positions in the header, from left to right.
        """
        for entry in preferred_order(self._parsed):
            yield str(entry.pattern)

    def __contains__(self, offer):
        return self.acceptable(offer)

    def __repr__(self):
        return "<{} ({!r})>".format(self.__class__.__name__, str(self))

    def by_preference(self):
        """Entries with non-0 qvalues, highest qvalue first."""
        return preferred_order(self._parsed)

    def acceptable(self, offer):
        """
        Return ``bool`` indicating whether the literal mime type ``offer``
        is covered by a range in the header with a non-0 qvalue.
        """
        return any(entry.matches(offer) for entry in self._parsed if entry.quality)

    def quality(self, offer):
        """
        Return the qvalue of the most preferred range matching ``offer``, or
        ``None`` if nothing matches.
        """
        for entry in preferred_order(self._parsed):
            if entry.matches(offer):
                return entry.quality
        return None


class AcceptValidHeader(Accept):
    """
    Represent an ``Accept`` header present in the request.

    Malformed segments are skipped, so any string is accepted here.
    """

    def __init__(self, header_value):
        """
        Create an :class:`AcceptValidHeader` instance.

        :param header_value: (``str``) header value.
        """
        self._header_value = header_value
        self._parsed = self.parse(header_value)

    def __bool__(self):
        """Always ``True``: the request carried the header."""
        return True

    def __str__(self):
        """Return a tidied up version of the header value."""
        return ", ".join(str(entry) for entry in self._parsed)


class AcceptNoHeader(Accept):
    """
    Represent the absence of an ``Accept`` header, or a blank one.

    This behaves as ``*/*``: every offer is acceptable.
    """

    def __init__(self):
        self._header_value = None
        self._parsed = self.parse(None)

    def __bool__(self):
        """Always ``False``: the request did not carry the header."""
        return False

    def __str__(self):
        return "<no header in request>"


def create_accept_header(header_value):
    """
    Create an object representing the ``Accept`` header in a request.

    :param header_value: (``str``) header value
    :return: :class:`AcceptNoHeader` if `header_value` is ``None`` or blank,
             otherwise :class:`AcceptValidHeader`.
    """
    if isinstance(header_value, Accept):
        return header_value
    if header_value is None or not header_value.strip():
        return AcceptNoHeader()
    return AcceptValidHeader(header_value=header_value)


def accept_property():
    key = header_to_key("Accept")
    doc = header_docstring("Accept", "14.1")
    doc += (
        "  Returns an instance of the appropriate class for the header value: "
        ":class:`AcceptValidHeader` or :class:`AcceptNoHeader`."
    )

    def fget(request):
        """Get an object representing the header in the request."""
        return create_accept_header(header_value=request.environ.get(key))

    def fset(request, value):
        """Set the corresponding key in the request environ."""
        if value is None or isinstance(value, AcceptNoHeader):
            fdel(request=request)
            return
        if isinstance(value, (list, tuple)):
            value = ", ".join(str(item) for item in value)
        elif isinstance(value, AcceptValidHeader):
            value = value.header_value
        request.environ[key] = str(value)

    def fdel(request):
        """Delete the corresponding key from the request environ."""
        try:
            del request.environ[key]
        except KeyError:
            pass

    return property(fget, fset, fdel, doc)
