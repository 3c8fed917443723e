key2header = {
    "CONTENT_TYPE": "Content-Type",
    "CONTENT_LENGTH": "Content-Length",
}

header2key = {v.upper(): k for (k, v) in key2header.items()}


def header_to_key(name):
    """Translate a header name into its WSGI environ key."""
    name = name.upper()

    if name in header2key:
        return header2key[name]

    return "HTTP_" + name.replace("-", "_")


def key_to_header(key):
    if key in key2header:
        return key2header[key]
    elif key.startswith("HTTP_"):
        return key[5:].replace("_", "-").title()
    else:
        return None


def header_docstring(header, rfc_section):
    if header.isupper():
        header = key_to_header(header)
    major_section = rfc_section.split(".")[0]
    link = "http://www.w3.org/Protocols/rfc2616/rfc2616-sec{}.html#sec{}".format(
        major_section,
        rfc_section,
    )

    return "Gets and sets the ``{}`` header (`HTTP spec section {} <{}>`_).".format(
        header,
        rfc_section,
        link,
    )


def bytes_(s, encoding="utf-8", errors="strict"):
    if isinstance(s, str):
        return s.encode(encoding, errors)

    return s


def status_line(value):
    """Normalise an ``int`` or ``str`` status into a WSGI status line.

    ``406`` and ``"406"`` both become ``"406 Not Acceptable"``; a string
    that already carries a reason phrase is returned unchanged.
    """
    if isinstance(value, int):
        value = str(value)

    if not isinstance(value, str):
        raise TypeError(
            "You must set status to a string or integer (not %s)" % type(value)
        )

    if " " not in value:
        code = int(value)
        reason = status_reasons.get(code) or status_generic_reasons[code // 100]
        value += " " + reason

    return value


status_reasons = {
    # Successful
    200: "OK",
    201: "Created",
    202: "Accepted",
    204: "No Content",
    # Redirection
    301: "Moved Permanently",
    302: "Found",
    303: "See Other",
    304: "Not Modified",
    # Client Error
    400: "Bad Request",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    406: "Not Acceptable",
    415: "Unsupported Media Type",
    # Server Error
    500: "Internal Server Error",
    501: "Not Implemented",
    503: "Service Unavailable",
}

# generic class responses as per RFC2616
status_generic_reasons = {
    1: "Continue",
    2: "Success",
    3: "Multiple Choices",
    4: "Unknown Client Error",
    5: "Unknown Server Error",
}
