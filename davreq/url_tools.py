# (c) 2009-2024 Martin Wendt and contributors; see WsgiDAV https://github.com/mar10/wsgidav
# Licensed under the MIT license:
# http://www.opensource.org/licenses/mit-license.php
"""
Path encoding and URL joining for WebDAV requests.

Example::

    url = join_url("https://dav.example.com/", "/", encode_path("/my docs/a&b.txt"))
    # -> 'https://dav.example.com/my%20docs/a%26b.txt'
"""

import re
from urllib.parse import quote

from davreq import util

__docformat__ = "reStructuredText"

#: Characters (beside alphanumerics) that are not escaped by ``encodeURIComponent``
URI_COMPONENT_SAFE = "-_.!~*'()"

_re_plain_protocol = re.compile(r"^[^/:]+:/*$")
_re_protocol = re.compile(r"^([^/:]+):/*")
_re_file_protocol = re.compile(r"^file:///")
_re_leading_slashes = re.compile(r"^/+")
_re_trailing_slashes = re.compile(r"/+$")
_re_slash_before_params = re.compile(r"/(\?|&|#[^!])")


def encode_uri_component(s):
    """Percent-encode `s` like JavaScript's ``encodeURIComponent``."""
    return quote(util.to_str(s), safe=URI_COMPONENT_SAFE)


def encode_path(path):
    """Encode a path for use with WebDAV servers.

    Every character that needs escaping is percent-encoded, except for '/'
    and '\\\\' (a pair of backslashes), which are kept literally.
    A single backslash is encoded as '%5C'.
    """
    path = util.to_str(path)
    return "\\\\".join(
        "/".join(encode_uri_component(segment) for segment in part.split("/"))
        for part in path.split("\\\\")
    )


def join_url_parts(*parts):
    """Join URL segments, using exactly one '/' between them.

    Examples::

        join_url_parts("http://example.com", "a/", "/b")  # 'http://example.com/a/b'
        join_url_parts("http:", "example.com", "a")  # 'http://example.com/a'
        join_url_parts("a", "b/", "?x=1", "?y=2")  # 'a/b?x=1&y=2'
    """
    parts = list(parts)
    if not parts:
        return ""
    for part in parts:
        if not util.is_str(part):
            raise TypeError(f"Url must be a string. Received {part!r}")

    # A plain protocol ('http:') is combined with the next part
    if len(parts) > 1 and _re_plain_protocol.match(parts[0]):
        first = parts.pop(0)
        parts[0] = first + parts[0]

    # Two slashes after the protocol, three for 'file:///'
    if _re_file_protocol.match(parts[0]):
        parts[0] = _re_protocol.sub(r"\1:///", parts[0], count=1)
    else:
        parts[0] = _re_protocol.sub(r"\1://", parts[0], count=1)

    last_idx = len(parts) - 1
    res = []
    trailing_slash = False
    for i, component in enumerate(parts):
        if component == "":
            continue
        if i > 0:
            component = _re_leading_slashes.sub("", component)
            if component == "":
                # Slashes only: no extra separator
                trailing_slash = i == last_idx
                continue
        if i < last_idx:
            component = _re_trailing_slashes.sub("", component)
        else:
            component = _re_trailing_slashes.sub("/", component)
        res.append(component)

    url = "/".join(res)
    if trailing_slash and not url.endswith("/"):
        url += "/"
    # Remove the slash in front of query string or fragment
    url = _re_slash_before_params.sub(r"\1", url)
    # Only the first '?' separates the query, following ones become '&'
    head, sep, query = url.partition("?")
    if sep:
        url = head + "?" + query.replace("?", "&")
    return url


def join_url(*parts):
    """Join URL segments.

    A bare '/' segment is dropped if the previously kept segment already ends
    with '/'. The remaining segments are joined by :func:`join_url_parts`.

    Example: ``join_url("a/", "/", "b") == "a/b"``
    """
    filtered = []
    for idx, part in enumerate(parts):
        prev = filtered[-1] if filtered else None
        if idx == 0 or part != "/" or not (util.is_str(prev) and prev.endswith("/")):
            filtered.append(part)
    return join_url_parts(*filtered)
