# (c) 2009-2024 Martin Wendt and contributors; see WsgiDAV https://github.com/mar10/wsgidav
# Licensed under the MIT license:
# http://www.opensource.org/licenses/mit-license.php
"""
Default transport that sends :class:`~davreq.request_options.RequestOptions`
using the `requests <https://requests.readthedocs.io/>`_ library.

A transport is any callable that accepts a request descriptor and returns a
:class:`concurrent.futures.Future` of a response. :class:`RequestsTransport`
runs the requests in a thread pool::

    with RequestsTransport(max_workers=2) as transport:
        future = transport(RequestOptions("https://dav.example.com/", "PROPFIND"))
        res = future.result()
"""

import json
from concurrent.futures import ThreadPoolExecutor

import requests

from davreq import util
from davreq.dav_error import (
    BodyTooLargeError,
    ContentTooLargeError,
    HTTPStatusError,
    TransportError,
)
from davreq.request_options import get_validate_status
from davreq.stream_tools import ProgressReader, get_body_size

__docformat__ = "reStructuredText"

_logger = util.get_module_logger(__name__)

DEFAULT_MAX_WORKERS = 4
DEFAULT_CHUNK_SIZE = 8192

#: Headers that are dropped if `with_credentials` is False
CREDENTIAL_HEADERS = ("Authorization", "Cookie")


def encode_body(data, headers):
    """Return (body, headers) ready to be passed to `requests`.

    str is encoded as UTF-8, dict and list are serialized as JSON (adding a
    `Content-Type` header unless one is set). Everything else is passed on.
    """
    if data is None or util.is_bytes(data):
        return data, headers
    if util.is_str(data):
        return util.to_bytes(data), headers
    if isinstance(data, (dict, list)):
        if util.get_header(headers, "Content-Type") is None:
            headers = util.merge_headers(headers, {"Content-Type": "application/json"})
        return util.to_bytes(json.dumps(data)), headers
    return data, headers


class RequestsTransport:
    """Send request descriptors with `requests`, returning futures.

    Args:
        max_workers (int): size of the thread pool
        timeout (float): passed to requests as (connect, read) timeout
        verify (bool|str): TLS certificate verification, see requests
        session (requests.Session): use this session for all requests
            instead of creating one per request (not closed by the transport)
    """

    def __init__(
        self, max_workers=DEFAULT_MAX_WORKERS, timeout=None, verify=True, session=None
    ):
        self.max_workers = max_workers
        self.timeout = timeout
        self.verify = verify
        self.session = session
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="davreq"
        )

    def __repr__(self):
        return f"RequestsTransport(max_workers={self.max_workers})"

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def __call__(self, request_options):
        """Schedule the request and return a Future of a `requests.Response`."""
        return self._executor.submit(self.send, request_options)

    def close(self):
        self._executor.shutdown(wait=True)

    def _make_session(self, request_options):
        session = requests.Session()
        if request_options.get("http_agent"):
            session.mount("http://", request_options["http_agent"])
        if request_options.get("https_agent"):
            session.mount("https://", request_options["https_agent"])
        if request_options.get("with_credentials") is False:
            session.trust_env = False
        return session

    def _close_session(self, session, request_options):
        # Mounted agents are owned by the caller: detach them before closing
        for prefix, key in (("http://", "http_agent"), ("https://", "https_agent")):
            if request_options.get(key):
                session.adapters.pop(prefix, None)
        session.close()

    def send(self, request_options):
        """Send the request synchronously and return the `requests.Response`.

        Raises:
            BodyTooLargeError: body is larger than `max_body_length`
            ContentTooLargeError: response is larger than `max_content_length`
            HTTPStatusError: `validate_status` rejected the status code
            TransportError: requests failed to send the request
        """
        method = request_options["method"]
        url = request_options["url"]
        headers = dict(request_options.get("headers") or {})
        if request_options.get("with_credentials") is False:
            headers = util.remove_headers(headers, CREDENTIAL_HEADERS)

        body, headers = encode_body(request_options.get("data"), headers)

        max_body_length = request_options.get("max_body_length")
        if max_body_length and body is not None:
            size = get_body_size(body)
            if size is not None and size > max_body_length:
                raise BodyTooLargeError(size, max_body_length)

        on_upload_progress = request_options.get("on_upload_progress")
        if on_upload_progress and body is not None:
            reader = ProgressReader(body, on_upload_progress)
            # An unknown size makes requests use chunked transfer encoding
            body = reader if reader.total is not None else iter(reader)

        max_content_length = request_options.get("max_content_length")

        if self.session is not None:
            session = self.session
        else:
            session = self._make_session(request_options)

        _logger.debug(f"{method} {url}")
        try:
            res = session.request(
                method,
                url,
                data=body,
                headers=headers,
                timeout=self.timeout,
                verify=self.verify,
                stream=bool(max_content_length),
            )
            if max_content_length:
                self._read_limited(res, max_content_length)
        except requests.RequestException as e:
            _logger.warning(f"{method} {url} failed: {e}")
            raise TransportError(context_info=f"{method} {url}", src_exception=e)
        finally:
            if self.session is None:
                self._close_session(session, request_options)

        validate_status = get_validate_status(request_options)
        if not validate_status(res.status_code):
            _logger.warning(f"{method} {url} returned {res.status_code}")
            raise HTTPStatusError(
                res.status_code, response=res, context_info=f"{method} {url}"
            )
        return res

    def _read_limited(self, res, limit):
        """Read the streamed response body, enforcing `limit` bytes."""
        content_length = res.headers.get("Content-Length")
        if content_length and content_length.isdigit() and int(content_length) > limit:
            res.close()
            raise ContentTooLargeError(res.status_code, limit, response=res)

        chunks = []
        size = 0
        for chunk in res.iter_content(chunk_size=DEFAULT_CHUNK_SIZE):
            size += len(chunk)
            if size > limit:
                res.close()
                _logger.warning(
                    "Response from {} exceeds {}".format(
                        res.url, util.byte_number_string(limit)
                    )
                )
                raise ContentTooLargeError(res.status_code, limit, response=res)
            chunks.append(chunk)
        # Make the body available as res.content / res.text
        res._content = b"".join(chunks)
        res._content_consumed = True
        res.close()
