# (c) 2009-2024 Martin Wendt and contributors; see WsgiDAV https://github.com/mar10/wsgidav
# Licensed under the MIT license:
# http://www.opensource.org/licenses/mit-license.php
"""
    Test helpers.

Example:
    adapter = FakeAdapter(status=207, body=b"<multistatus/>")
    transport(RequestOptions(url, "PROPFIND", http_agent=adapter))
"""

import io
import os
import shutil
from concurrent.futures import Future
from tempfile import mkdtemp

import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

# ========================================================================
# FakeAdapter
# ========================================================================


class FakeAdapter(BaseAdapter):
    """A requests transport adapter that answers without network access.

    The request body is consumed in chunks of `read_size` bytes, so upload
    progress callbacks fire like they would with a real connection.
    Sent requests are recorded in `self.sent` as (PreparedRequest, body).
    """

    def __init__(self, status=200, body=b"", headers=None, exc=None, read_size=4):
        super().__init__()
        self.status = status
        self.body = body
        self.headers = headers or {}
        self.exc = exc
        self.read_size = read_size
        self.sent = []
        self.closed = False

    def send(
        self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None
    ):
        body = request.body
        if hasattr(body, "read"):
            chunks = []
            while True:
                chunk = body.read(self.read_size)
                if not chunk:
                    break
                chunks.append(chunk)
            body = b"".join(chunks)
        elif body is not None and not isinstance(body, (bytes, str)):
            body = b"".join(body)
        self.sent.append((request, body))

        if self.exc is not None:
            raise self.exc

        res = requests.Response()
        res.status_code = self.status
        res.reason = "Fake"
        res.headers = CaseInsensitiveDict(self.headers)
        res.raw = io.BytesIO(self.body)
        res.url = request.url
        res.request = request
        res.encoding = "utf-8"
        return res

    def close(self):
        self.closed = True

    @property
    def last_request(self):
        return self.sent[-1][0]

    @property
    def last_body(self):
        return self.sent[-1][1]


# ========================================================================
# RecordingTransport
# ========================================================================


class RecordingTransport:
    """Transport that records descriptors and returns resolved futures."""

    def __init__(self, result="response"):
        self.result = result
        self.calls = []

    def __call__(self, request_options):
        self.calls.append(request_options)
        future = Future()
        future.set_result(self.result)
        return future


# ========================================================================
# Temp folders
# ========================================================================


class TempFolder:
    """Context manager that creates and removes a temporary folder."""

    def __enter__(self):
        self.path = mkdtemp(prefix="davreq-test-")
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        shutil.rmtree(self.path, ignore_errors=True)

    def write_file(self, name, text):
        path = os.path.join(self.path, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        return path
