from conneg.headers import ResponseHeaders
from conneg.util import bytes_, status_line

__all__ = ["Response"]


class Response(object):
    """
    Represents a WSGI response
    """

    default_content_type = "application/octet-stream"

    def __init__(self, body=None, status=None, headerlist=None, content_type=None):
        if status is None:
            self._status = "200 OK"
        else:
            self.status = status
        if headerlist is None:
            self._headerlist = []
            if content_type is None:
                content_type = self.default_content_type
        else:
            self._headerlist = headerlist
        self._headers = ResponseHeaders(self._headerlist)
        if content_type is not None:
            self.content_type = content_type
        self.body = body

    def __repr__(self):
        return "<%s at 0x%x %s>" % (self.__class__.__name__, abs(id(self)), self.status)

    def _status__get(self):
        """
        The status string
        """
        return self._status

    def _status__set(self, value):
        self._status = status_line(value)

    status = property(_status__get, _status__set, doc=_status__get.__doc__)

    def _status_int__get(self):
        """
        The status as an integer
        """
        return int(self._status.split()[0])

    def _status_int__set(self, code):
        self.status = int(code)

    status_int = property(_status_int__get, _status_int__set, doc=_status_int__get.__doc__)
    status_code = status_int

    @property
    def headerlist(self):
        """
        The list of response headers
        """
        return self._headerlist

    @property
    def headers(self):
        """
        The headers as a case-insensitive mapping over :attr:`headerlist`
        """
        return self._headers

    def _content_type__get(self):
        """
        The ``Content-Type`` header, without any parameters
        """
        header = self._headers.get("Content-Type")
        if not header:
            return None
        return header.split(";", 1)[0].strip()

    def _content_type__set(self, value):
        if value is None:
            self._headers.pop("Content-Type", None)
        else:
            self._headers["Content-Type"] = str(value)

    content_type = property(
        _content_type__get, _content_type__set, doc=_content_type__get.__doc__
    )

    def _body__get(self):
        """
        The body of the response, as ``bytes``
        """
        return self._body

    def _body__set(self, value):
        if value is None:
            value = b""
        if not isinstance(value, (str, bytes)):
            value = str(value)
        self._body = bytes_(value)
        self._headers["Content-Length"] = str(len(self._body))

    body = property(_body__get, _body__set, doc=_body__get.__doc__)

    @property
    def text(self):
        return self._body.decode("utf-8")

    def __call__(self, environ, start_response):
        """
        WSGI application interface
        """
        start_response(self.status, list(self._headerlist))
        if environ.get("REQUEST_METHOD") == "HEAD":
            return [b""]
        return [self._body]
