# (c) 2009-2024 Martin Wendt and contributors; see WsgiDAV https://github.com/mar10/wsgidav
# Licensed under the MIT license:
# http://www.opensource.org/licenses/mit-license.php
"""
Dispatch prepared request descriptors to a transport.

The transport is injected, so callers can replace how requests are sent::

    dispatcher = RequestDispatcher(transport=my_transport)
    future = dispatcher.request(request_options)

The module level :func:`request` uses a default dispatcher, whose transport
can be replaced with :func:`set_default_transport`.
"""
import threading

from davreq import util
from davreq.transport import RequestsTransport

__docformat__ = "reStructuredText"

_logger = util.get_module_logger(__name__)


class RequestDispatcher:
    """Forward request descriptors to a transport callable.

    Args:
        transport (callable): ``transport(request_options) -> Future``.
            Defaults to a shared :class:`~davreq.transport.RequestsTransport`.
    """

    def __init__(self, transport=None):
        self.transport = transport

    def __repr__(self):
        return f"RequestDispatcher({self.transport!r})"

    @property
    def transport(self):
        return self._transport

    @transport.setter
    def transport(self, transport):
        if transport is None:
            transport = get_builtin_transport()
        elif not callable(transport):
            raise TypeError(f"Transport must be callable: {transport!r}")
        self._transport = transport

    def request(self, request_options):
        """Make a request.

        The descriptor is passed to the transport unchanged and the
        transport's result (a future) is returned as is.
        """
        _logger.debug(
            "Dispatch {} {}".format(
                request_options.get("method"), request_options.get("url")
            )
        )
        return self._transport(request_options)


_builtin_transport = None
_builtin_transport_lock = threading.Lock()


def get_builtin_transport():
    """Return the shared RequestsTransport (created on first use)."""
    global _builtin_transport
    with _builtin_transport_lock:
        if _builtin_transport is None:
            _builtin_transport = RequestsTransport()
        return _builtin_transport


_default_dispatcher = None
_default_dispatcher_lock = threading.Lock()


def get_default_dispatcher():
    """Return the dispatcher used by :func:`request` (created on first use)."""
    global _default_dispatcher
    with _default_dispatcher_lock:
        if _default_dispatcher is None:
            _default_dispatcher = RequestDispatcher()
        return _default_dispatcher


def set_default_transport(transport):
    """Replace the transport used by :func:`request`.

    Pass None to restore the built-in RequestsTransport.
    """
    dispatcher = get_default_dispatcher()
    with _default_dispatcher_lock:
        dispatcher.transport = transport


def request(request_options):
    """Make a request using the default dispatcher.

    Args:
        request_options (RequestOptions): options for the request
    Returns:
        a future that resolves with a response object
    """
    return get_default_dispatcher().request(request_options)
