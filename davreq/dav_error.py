# (c) 2009-2024 Martin Wendt and contributors; see WsgiDAV https://github.com/mar10/wsgidav
# Licensed under the MIT license:
# http://www.opensource.org/licenses/mit-license.php
"""
Implements the DAVRequestError classes that are used to signal failed requests.

These errors are never raised while a request is prepared. They are set on
the future returned by the transport.
"""

__docformat__ = "reStructuredText"

# ========================================================================
# List of HTTP Response Codes.
# ========================================================================
HTTP_OK = 200
HTTP_CREATED = 201
HTTP_NO_CONTENT = 204
HTTP_MULTI_STATUS = 207

HTTP_NOT_MODIFIED = 304

HTTP_BAD_REQUEST = 400
HTTP_UNAUTHORIZED = 401
HTTP_FORBIDDEN = 403
HTTP_NOT_FOUND = 404
HTTP_METHOD_NOT_ALLOWED = 405
HTTP_CONFLICT = 409
HTTP_PRECONDITION_FAILED = 412
HTTP_REQUEST_ENTITY_TOO_LARGE = 413
HTTP_LOCKED = 423
HTTP_FAILED_DEPENDENCY = 424

HTTP_INTERNAL_ERROR = 500
HTTP_NOT_IMPLEMENTED = 501
HTTP_BAD_GATEWAY = 502
HTTP_SERVICE_UNAVAILABLE = 503
HTTP_INSUFFICIENT_STORAGE = 507


# ========================================================================
# if ERROR_DESCRIPTIONS exists for a status code, the description is used
# by get_user_info(). Otherwise only the numeric code itself is shown.
# ========================================================================
ERROR_DESCRIPTIONS = {
    HTTP_OK: "200 OK",
    HTTP_CREATED: "201 Created",
    HTTP_NO_CONTENT: "204 No Content",
    HTTP_MULTI_STATUS: "207 Multi-Status",
    HTTP_NOT_MODIFIED: "304 Not Modified",
    HTTP_BAD_REQUEST: "400 Bad Request",
    HTTP_UNAUTHORIZED: "401 Unauthorized",
    HTTP_FORBIDDEN: "403 Forbidden",
    HTTP_NOT_FOUND: "404 Not Found",
    HTTP_METHOD_NOT_ALLOWED: "405 Method Not Allowed",
    HTTP_CONFLICT: "409 Conflict",
    HTTP_PRECONDITION_FAILED: "412 Precondition Failed",
    HTTP_REQUEST_ENTITY_TOO_LARGE: "413 Payload Too Large",
    HTTP_LOCKED: "423 Locked",
    HTTP_FAILED_DEPENDENCY: "424 Failed Dependency",
    HTTP_INTERNAL_ERROR: "500 Internal Server Error",
    HTTP_NOT_IMPLEMENTED: "501 Not Implemented",
    HTTP_BAD_GATEWAY: "502 Bad Gateway",
    HTTP_SERVICE_UNAVAILABLE: "503 Service Unavailable",
    HTTP_INSUFFICIENT_STORAGE: "507 Insufficient Storage",
}


# ========================================================================
# DAVRequestError
# ========================================================================


class DAVRequestError(Exception):
    """General error class that is used to signal failed WebDAV requests.

    Args:
        status_code (int): HTTP status of the response, None if no response
            was received
        context_info (str): additional, human readable description
        src_exception (Exception): the exception that caused this error
    """

    def __init__(self, status_code=None, context_info=None, src_exception=None):
        self.value = None if status_code is None else int(status_code)
        self.context_info = context_info
        self.src_exception = src_exception
        super().__init__(self.get_user_info())

    def __repr__(self):
        return f"{self.__class__.__name__}({self.get_user_info()})"

    def __str__(self):
        return self.get_user_info()

    def get_user_info(self):
        """Return readable string."""
        if self.value is None:
            s = "Request failed"
        else:
            s = get_http_status_string(self.value)

        if self.context_info:
            s += f": {self.context_info}"

        if self.src_exception:
            s += f"\n    Source exception: '{self.src_exception}'"
        return s


class HTTPStatusError(DAVRequestError):
    """The response status was rejected by the `validate_status` predicate."""

    def __init__(self, status_code, response=None, context_info=None):
        self.response = response
        super().__init__(status_code, context_info=context_info)


class TransportError(DAVRequestError):
    """The request could not be sent or no response was received."""


class BodyTooLargeError(DAVRequestError):
    """The request body exceeds `max_body_length`."""

    def __init__(self, size, limit):
        self.size = size
        self.limit = limit
        super().__init__(
            context_info=f"Request body has {size} bytes (max_body_length={limit})"
        )


class ContentTooLargeError(DAVRequestError):
    """The response body exceeds `max_content_length`."""

    def __init__(self, status_code, limit, response=None):
        self.limit = limit
        self.response = response
        super().__init__(
            status_code,
            context_info=f"Response body exceeds max_content_length={limit}",
        )


def get_http_status_code(v):
    """Return HTTP response code as integer, e.g. 204."""
    if hasattr(v, "value"):
        return int(v.value)  # v is a DAVRequestError
    return int(v)


def get_http_status_string(v):
    """Return HTTP response string, e.g. 204 -> ('204 No Content').

    `v`: status code or DAVRequestError
    """
    code = get_http_status_code(v)
    try:
        return ERROR_DESCRIPTIONS[code]
    except KeyError:
        return f"{code} Status"

