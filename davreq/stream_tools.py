# (c) 2009-2024 Martin Wendt and contributors; see WsgiDAV https://github.com/mar10/wsgidav
# Licensed under the MIT license:
# http://www.opensource.org/licenses/mit-license.php
"""
Implement the ProgressReader helper class.

This helper wraps a request body, so that an ``on_upload_progress`` callback
is notified while the transport reads it::

    body = ProgressReader(b"..." * 1000, on_progress=print)
    requests.put(url, data=body)

"""
import io
import os

from davreq import util

__docformat__ = "reStructuredText"

DEFAULT_BLOCK_SIZE = 8192


def get_body_size(data):
    """Return the size of a request body in bytes, or None if unknown.

    Supports bytes, str (UTF-8), seekable file-likes and objects that
    implement ``__len__``.
    """
    if data is None:
        return 0
    if util.is_bytes(data) or isinstance(data, (bytearray, memoryview)):
        return len(data)
    if util.is_str(data):
        return len(util.to_bytes(data))
    if hasattr(data, "fileno"):
        try:
            return os.fstat(data.fileno()).st_size - data.tell()
        except (OSError, io.UnsupportedOperation, AttributeError):
            pass
    if hasattr(data, "seek") and hasattr(data, "tell"):
        try:
            pos = data.tell()
            end = data.seek(0, os.SEEK_END)
            data.seek(pos)
            return end - pos
        except (OSError, io.UnsupportedOperation):
            return None
    if hasattr(data, "__len__"):
        return len(data)
    return None


# ============================================================================
# ProgressReader
# ============================================================================


class ProgressReader:
    """A file-like wrapper around a request body that reports read progress.

    `on_progress` is called after each chunk with a dict::

        {"loaded": <bytes read so far>, "total": <size or None>,
         "progress": <0.0 .. 1.0 or None>}

    The wrapper exposes ``__len__`` if the size is known, so the transport
    can send a `Content-Length` header instead of using chunked encoding.
    """

    def __init__(self, data, on_progress=None, *, block_size=DEFAULT_BLOCK_SIZE):
        if util.is_str(data):
            data = util.to_bytes(data)
        if isinstance(data, (bytes, bytearray, memoryview)):
            data = io.BytesIO(bytes(data))
        self.stream = data
        self.on_progress = on_progress
        self.block_size = block_size
        self.total = get_body_size(data)
        self.loaded = 0

    def __len__(self):
        if self.total is None:
            raise TypeError("Size of wrapped stream is unknown")
        return self.total - self.loaded

    def read(self, size=-1):
        """Read a chunk of bytes from the wrapped stream and report progress."""
        chunk = self.stream.read(size)
        if chunk:
            self.loaded += len(chunk)
            self._notify()
        return chunk

    def __iter__(self):
        while True:
            chunk = self.read(self.block_size)
            if not chunk:
                break
            yield chunk

    def _notify(self):
        if not self.on_progress:
            return
        progress = None
        if self.total:
            progress = min(1.0, float(self.loaded) / self.total)
        self.on_progress(
            {"loaded": self.loaded, "total": self.total, "progress": progress}
        )
