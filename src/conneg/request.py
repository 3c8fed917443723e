import io
import sys
from urllib.parse import unquote

from conneg.acceptparse import accept_property
from conneg.response import Response
from conneg.util import header_to_key

__all__ = ["Request"]


class Request(object):
    """
    A thin wrapper around a WSGI environ.
    """

    ResponseClass = Response

    accept = accept_property()

    def __init__(self, environ):
        if type(environ) is not dict:
            raise TypeError("WSGI environ must be a dict; you passed %r" % (environ,))
        self.environ = environ

    def __repr__(self):
        return "<%s at 0x%x %s %s>" % (
            self.__class__.__name__,
            abs(id(self)),
            self.method,
            self.path_info,
        )

    @property
    def method(self):
        return self.environ.get("REQUEST_METHOD", "GET")

    @property
    def path_info(self):
        return self.environ.get("PATH_INFO", "")

    def call_application(self, application):
        """
        Call the given WSGI application, returning ``(status_string,
        headerlist, app_iter)``
        """
        captured = []
        output = []

        def start_response(status, headers, exc_info=None):
            if exc_info is not None:
                raise exc_info[1].with_traceback(exc_info[2])
            captured[:] = [status, headers]
            return output.append

        app_iter = application(self.environ, start_response)
        try:
            output.extend(app_iter)
        finally:
            if hasattr(app_iter, "close"):
                app_iter.close()
        return (captured[0], captured[1], output)

    def get_response(self, application):
        """
        Like ``.call_application(application)``, except returns a
        response object with ``.status``, ``.headers``, and ``.body``
        attributes.
        """
        status, headers, app_iter = self.call_application(application)
        return self.ResponseClass(
            body=b"".join(app_iter), status=status, headerlist=list(headers)
        )

    @classmethod
    def blank(cls, path, environ=None, headers=None, **kw):
        """
        Create a blank request environ (and Request wrapper) with the
        given path (path should be urlencoded), and any keys from
        environ.

        Header names in ``headers`` are translated to their environ keys,
        so ``headers={"Accept": "text/html"}`` sets ``HTTP_ACCEPT``.
        """
        if path and "?" in path:
            path_info, query_string = path.split("?", 1)
        else:
            path_info, query_string = path, ""
        env = {
            "REQUEST_METHOD": "GET",
            "SCRIPT_NAME": "",
            "PATH_INFO": unquote(path_info) or "",
            "QUERY_STRING": query_string,
            "SERVER_NAME": "localhost",
            "SERVER_PORT": "80",
            "HTTP_HOST": "localhost:80",
            "SERVER_PROTOCOL": "HTTP/1.0",
            "wsgi.version": (1, 0),
            "wsgi.url_scheme": "http",
            "wsgi.input": io.BytesIO(),
            "wsgi.errors": sys.stderr,
            "wsgi.multithread": False,
            "wsgi.multiprocess": False,
            "wsgi.run_once": False,
        }
        if headers:
            for name, value in headers.items():
                if value is not None:
                    env[header_to_key(name)] = value
        if environ:
            env.update(environ)
        obj = cls(env)
        for name, value in kw.items():
            if not hasattr(cls, name):
                raise TypeError("Unexpected keyword: %s=%r" % (name, value))
            setattr(obj, name, value)
        return obj
