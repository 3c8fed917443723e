import logging

import pytest

from conneg.action import Action
from conneg.exceptions import RegistryFrozen, UnknownFormat
from conneg.negotiation import RestrictionPolicy
from conneg.registry import default_registry
from conneg.request import Request


class Default(Action):
    def call(self, params):
        self.body = self.format


class Configuration(Action):
    configuration = default_registry().set_default("html")

    def call(self, params):
        self.body = self.format


class Custom(Action):
    def call(self, params):
        self.format = "xml"
        self.body = self.format


class AcceptCheck(Action):
    def call(self, params):
        self.headers.update({
            "X-AcceptDefault": str(self.accept("application/octet-stream")).lower(),
            "X-AcceptHtml": str(self.accept("text/html")).lower(),
            "X-AcceptXml": str(self.accept("application/xml")).lower(),
            "X-AcceptJson": str(self.accept("text/json")).lower(),
        })
        self.body = self.format


class Restricted(Action):
    configuration = default_registry().register("custom", "application/custom")
    accepted_formats = RestrictionPolicy.build("html", "json", "custom")

    def call(self, params):
        pass


class Broken(Action):
    def call(self, params):
        raise ZeroDivisionError("boom")


routes = {
    "/": Default.wsgi_app,
    "/configuration": Configuration.wsgi_app,
    "/custom": Custom.wsgi_app,
    "/accept": AcceptCheck.wsgi_app,
    "/restricted": Restricted.wsgi_app,
    "/broken": Broken.wsgi_app,
}


def app(environ, start_response):
    return routes[environ["PATH_INFO"]](environ, start_response)


def get(path, accept=None):
    return Request.blank(path, headers={"Accept": accept}).get_response(app)


BROWSER = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
WEIGHTED = "text/html,application/xhtml+xml,application/xml;q=0.9"


class TestContentType(object):
    def test_falls_back_to_the_default_content_type(self):
        response = get("/")
        assert response.headers["Content-Type"] == "application/octet-stream"
        assert response.body == b"all"

    def test_falls_back_to_the_configured_default_format(self):
        response = get("/configuration")
        assert response.headers["Content-Type"] == "text/html"
        assert response.body == b"html"

    def test_explicit_format(self):
        response = get("/custom")
        assert response.headers["Content-Type"] == "application/xml"
        assert response.body == b"xml"

    @pytest.mark.parametrize("accept", ["*/*", "text/html", "application/json"])
    def test_explicit_format_ignores_accept(self, accept):
        response = get("/custom", accept)
        assert response.headers["Content-Type"] == "application/xml"
        assert response.body == b"xml"

    @pytest.mark.parametrize("accept, content_type, body", [
        ("*/*", "application/octet-stream", b"all"),
        (BROWSER, "text/html", b"html"),
        (
            "application/json;q=0.6,application/xml;q=0.9,*/*;q=0.8",
            "application/xml",
            b"xml",
        ),
    ])
    def test_follows_accept(self, accept, content_type, body):
        response = get("/", accept)
        assert response.status_int == 200
        assert response.headers["Content-Type"] == content_type
        assert response.body == body

    def test_content_length(self):
        response = get("/")
        assert response.headers["Content-Length"] == "3"


class TestAccept(object):
    def _accept_headers(self, response):
        return [
            response.headers["X-AcceptDefault"],
            response.headers["X-AcceptHtml"],
            response.headers["X-AcceptXml"],
            response.headers["X-AcceptJson"],
        ]

    @pytest.mark.parametrize("accept", [None, "*/*"])
    def test_accepts_all(self, accept):
        response = get("/accept", accept)
        assert self._accept_headers(response) == ["true", "true", "true", "true"]
        assert response.body == b"all"

    def test_single_type(self):
        response = get("/accept", "text/html")
        assert self._accept_headers(response) == ["false", "true", "false", "false"]
        assert response.body == b"html"

    def test_weighted(self):
        response = get("/accept", WEIGHTED)
        assert self._accept_headers(response) == ["false", "true", "true", "false"]
        assert response.body == b"html"


class TestRestrictedAccept(object):
    @pytest.mark.parametrize("accept", [
        None,
        "*/*",
        "text/html",
        "application/custom",
        WEIGHTED,
    ])
    def test_accepted(self, accept):
        response = get("/restricted", accept)
        assert response.status_int == 200

    def test_custom_content_type(self):
        response = get("/restricted", "application/custom")
        assert response.headers["Content-Type"] == "application/custom"
        assert response.body == b""

    def test_not_accepted(self, caplog):
        with caplog.at_level(logging.WARNING, logger="conneg.action"):
            response = get("/restricted", "application/xml")
        assert response.status_int == 406
        assert response.status == "406 Not Acceptable"
        assert "406 Not Acceptable" in caplog.text


class TestActionClass(object):
    def test_configuration_is_frozen(self):
        assert Restricted.configuration.frozen
        with pytest.raises(RegistryFrozen):
            Restricted.configuration.register("other", "application/other")

    def test_base_configuration_is_shared_and_frozen(self):
        assert Default.configuration is Action.configuration
        assert Action.configuration.frozen

    def test_unknown_policy_symbol_fails_at_definition(self):
        with pytest.raises(UnknownFormat):
            class Misconfigured(Action):
                accepted_formats = RestrictionPolicy.build("html", "nope")

    def test_format_setter_rejects_unknown_symbols(self):
        action = Default(Request.blank("/"))
        with pytest.raises(UnknownFormat):
            action.format = "nope"
        assert action.format == "all"

    def test_negotiated_and_content_type(self):
        action = Default(Request.blank("/", headers={"Accept": "application/json"}))
        assert action.format == "json"
        assert action.content_type == "application/json"
        assert action.negotiated.accepted
        action.format = "html"
        assert action.content_type == "text/html"

    def test_params(self):
        action = Default(Request.blank("/?a=1&b=two"))
        assert action.params == {"a": "1", "b": "two"}

    def test_call_errors_propagate(self, caplog):
        with caplog.at_level(logging.ERROR, logger="conneg.action"):
            with pytest.raises(ZeroDivisionError):
                get("/broken")
        assert "Broken failed on GET /broken" in caplog.text

    def test_head_request(self):
        request = Request.blank("/", environ={"REQUEST_METHOD": "HEAD"})
        response = request.get_response(app)
        assert response.body == b""
        assert response.headers["Content-Type"] == "application/octet-stream"
