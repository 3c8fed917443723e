import pytest

from conneg.util import (
    bytes_,
    header_docstring,
    header_to_key,
    key_to_header,
    status_line,
)


@pytest.mark.parametrize("name, key", [
    ("Accept", "HTTP_ACCEPT"),
    ("X-Accept-Html", "HTTP_X_ACCEPT_HTML"),
    ("Content-Type", "CONTENT_TYPE"),
    ("content-length", "CONTENT_LENGTH"),
])
def test_header_to_key(name, key):
    assert header_to_key(name) == key


@pytest.mark.parametrize("key, name", [
    ("HTTP_ACCEPT", "Accept"),
    ("CONTENT_TYPE", "Content-Type"),
    ("wsgi.input", None),
])
def test_key_to_header(key, name):
    assert key_to_header(key) == name


def test_header_docstring():
    assert header_docstring("HTTP_ACCEPT", "14.1") == (
        "Gets and sets the ``Accept`` header (`HTTP spec section 14.1 "
        "<http://www.w3.org/Protocols/rfc2616/rfc2616-sec14.html#sec14.1>`_)."
    )


def test_bytes_():
    assert bytes_("café") == b"caf\xc3\xa9"
    assert bytes_(b"x") == b"x"


@pytest.mark.parametrize("value, expected", [
    (200, "200 OK"),
    ("406", "406 Not Acceptable"),
    (418, "418 Unknown Client Error"),
    ("500 Oops", "500 Oops"),
])
def test_status_line(value, expected):
    assert status_line(value) == expected


def test_status_line_bad_type():
    with pytest.raises(TypeError):
        status_line(None)
