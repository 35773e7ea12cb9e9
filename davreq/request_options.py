# (c) 2009-2024 Martin Wendt and contributors; see WsgiDAV https://github.com/mar10/wsgidav
# Licensed under the MIT license:
# http://www.opensource.org/licenses/mit-license.php
"""
Request descriptors and the merging of caller supplied options.

A :class:`RequestOptions` instance describes one request (URL, method,
headers, body, ...) and is handed to a transport by
:func:`davreq.request.request`.
:class:`UserOptions` is the read-only set of options a caller passes to a
client method. :func:`prepare_request_options` copies the recognized and
well-typed user options onto the descriptor::

    opts = RequestOptions("https://dav.example.com/a.txt", "PUT")
    prepare_request_options(opts, {"data": b"hello", "headers": {"X-Foo": "1"}})
"""

from collections.abc import Mapping

from davreq import util
from davreq.dav_error import HTTP_UNAUTHORIZED

__docformat__ = "reStructuredText"

_logger = util.get_module_logger(__name__)

#: HTTP and WebDAV request methods accepted by :class:`RequestOptions`
KNOWN_METHODS = frozenset(
    (
        "CONNECT",
        "COPY",
        "DELETE",
        "GET",
        "HEAD",
        "LOCK",
        "MKCOL",
        "MOVE",
        "OPTIONS",
        "PATCH",
        "POST",
        "PROPFIND",
        "PROPPATCH",
        "PUT",
        "SEARCH",
        "TRACE",
        "UNLOCK",
    )
)

#: Keys a RequestOptions descriptor may carry
REQUEST_OPTION_KEYS = frozenset(
    (
        "url",
        "method",
        "headers",
        "http_agent",
        "https_agent",
        "data",
        "max_content_length",
        "max_body_length",
        "on_upload_progress",
        "validate_status",
        "_digest",
        "with_credentials",
    )
)


def default_validate_status(status):
    """Accept 2xx status codes."""
    return 200 <= status < 300


def digest_validate_status(status):
    """Accept 2xx status codes and the 401 challenge of digest authentication."""
    return 200 <= status < 300 or status == HTTP_UNAUTHORIZED


def get_validate_status(request_options):
    """Return the status predicate of a request descriptor, falling back to 2xx."""
    return request_options.get("validate_status") or default_validate_status


# ========================================================================
# RequestOptions
# ========================================================================


class RequestOptions(dict):
    """Descriptor of a single request.

    This is a plain dict with the required keys `url` and `method`.
    The method name is stored upper case.

    Raises:
        ValueError: if `url` is empty or `method` is not a known method
    """

    def __init__(self, url, method, **kwargs):
        if not url or not util.is_str(url):
            raise ValueError(f"Expected a non-empty URL string: {url!r}")
        method = util.to_str(method).upper()
        if method not in KNOWN_METHODS:
            raise ValueError(f"Unsupported request method: {method!r}")
        util.check_tags(
            kwargs,
            REQUEST_OPTION_KEYS.difference(("url", "method")),
            msg="Invalid request options",
        )
        super().__init__(url=url, method=method, **kwargs)

    def __repr__(self):
        return "RequestOptions({} {})".format(self["method"], self["url"])

    @property
    def url(self):
        return self["url"]

    @property
    def method(self):
        return self["method"]

    def get_validate_status(self):
        """Return the status predicate, falling back to 2xx."""
        return get_validate_status(self)


# ========================================================================
# UserOptions
# ========================================================================


class UserOptions(Mapping):
    """Read-only view of caller supplied options.

    Accepts a mapping and/or keyword arguments. Unknown keys are kept but
    ignored by :func:`prepare_request_options`.
    """

    def __init__(self, options=None, **kwargs):
        data = dict(options or {})
        data.update(kwargs)
        self._data = data

    def __getitem__(self, key):
        return self._data[key]

    def __iter__(self):
        return iter(self._data)

    def __len__(self):
        return len(self._data)

    def __repr__(self):
        return f"UserOptions({self._data!r})"


# ========================================================================
# prepare_request_options
# ========================================================================


def prepare_request_options(request_options, method_options):
    """Process request options before being passed to the transport.

    Recognized and well-typed fields of `method_options` are copied to
    `request_options` (in-place). Fields that are missing, falsy, or of the
    wrong type are skipped, so existing values are never cleared.
    Headers are merged (case-insensitive names, the new value wins).
    A truthy `_digest` value also installs :func:`digest_validate_status`, so
    that a 401 challenge reaches the caller as a regular response.

    Args:
        request_options (RequestOptions): the descriptor to update
        method_options (Mapping): the caller supplied options (not modified)
    Returns:
        the updated `request_options`
    """
    if not method_options:
        return request_options
    get = method_options.get

    if get("http_agent"):
        request_options["http_agent"] = get("http_agent")
    if get("https_agent"):
        request_options["https_agent"] = get("https_agent")
    if get("data"):
        request_options["data"] = get("data")

    headers = get("headers")
    if headers and isinstance(headers, Mapping):
        request_options["headers"] = util.merge_headers(
            request_options.get("headers"), headers
        )
    elif headers:
        _logger.debug(f"Skipping 'headers' option of type {type(headers)}")

    with_credentials = get("with_credentials")
    if type(with_credentials) is bool:
        request_options["with_credentials"] = with_credentials
    elif with_credentials is not None:
        _logger.debug(
            f"Skipping 'with_credentials' option of type {type(with_credentials)}"
        )

    if get("max_content_length"):
        request_options["max_content_length"] = get("max_content_length")
    if get("max_body_length"):
        request_options["max_body_length"] = get("max_body_length")

    on_upload_progress = get("on_upload_progress")
    if on_upload_progress and callable(on_upload_progress):
        request_options["on_upload_progress"] = on_upload_progress
    elif on_upload_progress:
        _logger.debug("Skipping 'on_upload_progress' option: not callable")

    if get("_digest"):
        request_options["_digest"] = get("_digest")
        request_options["validate_status"] = digest_validate_status

    return request_options
