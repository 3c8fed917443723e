"""
WSGI actions whose response format is negotiated.

Subclass :class:`Action`, override :meth:`Action.call`, and serve
:meth:`Action.wsgi_app`::

    class Show(Action):
        configuration = default_registry().register("custom", "application/custom")
        accepted_formats = RestrictionPolicy.build("html", "json", "custom")

        def call(self, params):
            self.body = self.format

A new action instance is created for every request.  The class-level
``configuration`` is frozen when the subclass is created, and the
``accepted_formats`` policy is checked against it then, so a misspelt
format fails at import time instead of during a request.
"""

import logging
from urllib.parse import parse_qsl

from conneg.negotiation import acceptable, negotiate
from conneg.registry import default_registry
from conneg.request import Request
from conneg.response import Response
from conneg.util import status_line

__all__ = ["Action"]

log = logging.getLogger(__name__)


class Action(object):
    """
    Base class for a negotiated WSGI endpoint.

    Class attributes:

    ``configuration``
        The :class:`~conneg.registry.FormatRegistry` used by the action.
    ``accepted_formats``
        A :class:`~conneg.negotiation.RestrictionPolicy`, or ``None`` to
        allow every registered format.
    """

    RequestClass = Request
    ResponseClass = Response

    configuration = default_registry().freeze()
    accepted_formats = None

    def __init_subclass__(cls, **kw):
        super().__init_subclass__(**kw)
        if cls.accepted_formats is not None:
            cls.accepted_formats.validate(cls.configuration)
        cls.configuration.freeze()

    def __init__(self, request):
        self.request = request
        self.params = dict(parse_qsl(request.environ.get("QUERY_STRING", "")))
        self.headers = {}
        self.body = None
        self.status = 200
        self._accept = request.accept
        self._requested_format = None
        self._negotiated = negotiate(
            self._accept, self.configuration, self.accepted_formats
        )

    def __repr__(self):
        return "<%s %s>" % (self.__class__.__name__, self.format)

    def call(self, params):
        """Handle the request; override in subclasses."""

    @property
    def negotiated(self):
        """The :class:`~conneg.negotiation.NegotiationResult` for this request."""
        if self._requested_format is None:
            return self._negotiated
        return negotiate(
            self._accept,
            self.configuration,
            self.accepted_formats,
            requested_format=self._requested_format,
        )

    def _format__get(self):
        """
        The symbol of the response format.

        Assigning a symbol makes it the response format whatever the client
        asked for.
        """
        return self.negotiated.format

    def _format__set(self, symbol):
        self.configuration.resolve(symbol)
        self._requested_format = symbol

    format = property(_format__get, _format__set, doc=_format__get.__doc__)

    @property
    def content_type(self):
        """The mime type sent as ``Content-Type``, as a ``str``."""
        return str(self.negotiated.mime_type)

    def accept(self, mime_type):
        """Would the client accept the literal ``mime_type``?"""
        return acceptable(self._accept, mime_type)

    def not_acceptable(self):
        log.warning(
            "406 Not Acceptable: %s %s (Accept: %r, formats: %r)",
            self.request.method,
            self.request.path_info,
            self._accept.header_value,
            list(self.accepted_formats or ()),
        )
        return self.ResponseClass(
            body=status_line(406),
            status=406,
            content_type=str(self._negotiated.mime_type),
        )

    def response(self):
        """Run the action and build its :class:`~conneg.response.Response`."""
        if not self._negotiated.accepted:
            return self.not_acceptable()

        try:
            self.call(self.params)
        except Exception:
            log.exception(
                "%s failed on %s %s",
                self.__class__.__name__,
                self.request.method,
                self.request.path_info,
            )
            raise

        result = self.negotiated
        response = self.ResponseClass(
            body=self.body,
            status=self.status,
            content_type=str(result.mime_type),
        )
        response.headers.update(self.headers)
        log.debug(
            "%s %s -> %s %s",
            self.request.method,
            self.request.path_info,
            response.status,
            response.content_type,
        )
        return response

    @classmethod
    def wsgi_app(cls, environ, start_response):
        """WSGI application interface"""
        action = cls(cls.RequestClass(environ))
        return action.response()(environ, start_response)
