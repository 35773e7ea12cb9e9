# (c) 2009-2024 Martin Wendt and contributors; see WsgiDAV https://github.com/mar10/wsgidav
# Licensed under the MIT license:
# http://www.opensource.org/licenses/mit-license.php
"""
A small facade that builds and dispatches requests relative to a base URL.

Example::

    client = DAVRequestClient("https://dav.example.com/files/", headers={"Depth": "1"})
    future = client.request("PROPFIND", "/my docs/", {"_digest": digest_context})
    res = future.result()
"""
from davreq import util
from davreq.request import RequestDispatcher
from davreq.request_options import RequestOptions, prepare_request_options
from davreq.transport import RequestsTransport
from davreq.url_tools import encode_path, join_url

__docformat__ = "reStructuredText"


class DAVRequestClient:
    """Build request descriptors for paths below `base_url` and send them.

    Args:
        base_url (str): URL of the WebDAV root collection
        headers (dict): headers that are sent with every request
        options (dict): default user options for every request
        transport (callable): passed to :class:`~davreq.request.RequestDispatcher`
    """

    def __init__(self, base_url, *, headers=None, options=None, transport=None):
        if not base_url or not util.is_str(base_url):
            raise ValueError(f"Expected a base URL string: {base_url!r}")
        self.base_url = base_url
        self.headers = dict(headers or {})
        self.options = dict(options or {})
        self.dispatcher = RequestDispatcher(transport)

    def __repr__(self):
        return f"DAVRequestClient({self.base_url!r})"

    @classmethod
    def from_config(cls, config, *, transport=None):
        """Create a client from a configuration dict (see :mod:`davreq.config`).

        If no `transport` is passed, a RequestsTransport is created from the
        ``transport`` section.
        """
        base_url = util.get_dict_value(config, "base_url", None)
        if transport is None:
            transport = RequestsTransport(
                max_workers=util.get_dict_value(config, "transport.max_workers", 4),
                timeout=util.get_dict_value(config, "transport.timeout", None),
                verify=util.get_dict_value(config, "transport.verify", True),
            )
        return cls(
            base_url,
            headers=util.get_dict_value(config, "headers", as_dict=True),
            options=util.get_dict_value(config, "options", as_dict=True),
            transport=transport,
        )

    def get_url(self, path):
        """Return the absolute URL for a (not yet encoded) resource path."""
        return join_url(self.base_url, encode_path(path))

    def build_request(self, method, path, user_options=None):
        """Return a RequestOptions for `path`, merged with client and user options."""
        opts = RequestOptions(self.get_url(path), method)
        if self.headers:
            opts["headers"] = dict(self.headers)
        prepare_request_options(opts, self.options)
        prepare_request_options(opts, user_options)
        return opts

    def request(self, method, path, user_options=None):
        """Build a request and dispatch it, returning the transport's future."""
        opts = self.build_request(method, path, user_options)
        return self.dispatcher.request(opts)
