# (c) 2009-2024 Martin Wendt and contributors; see WsgiDAV https://github.com/mar10/wsgidav
# Licensed under the MIT license:
# http://www.opensource.org/licenses/mit-license.php
"""
Default configuration.
"""
from davreq.util import public_davreq_info

__docformat__ = "reStructuredText"

# Use these settings, if config file does not define them (or is totally missing)
DEFAULT_VERBOSE = 3
DEFAULT_LOGGER_DATE_FORMAT = "%H:%M:%S"
DEFAULT_LOGGER_FORMAT = "%(asctime)s.%(msecs)03d - %(levelname)-8s: %(message)s"

DEFAULT_CONFIG = {
    #: Base URL of the WebDAV server, e.g. "https://dav.example.com/remote.php/dav"
    "base_url": None,
    #: Headers that are sent with every request
    "headers": {
        "User-Agent": public_davreq_info,
    },
    #: Default options for every request (same keys as the per-request options,
    #: e.g. "max_content_length", "with_credentials")
    "options": {},
    #: Options for the built-in RequestsTransport
    "transport": {
        "max_workers": 4,
        "timeout": None,  # seconds, None: wait forever
        "verify": True,  # TLS certificate verification (or path to a CA bundle)
    },
    #: Verbose Output
    #: 0 - no output
    #: 1 - errors only
    #: 2 - show warnings
    #: 3 - show info messages
    #: 4 - show debug messages, e.g. every dispatched request
    #: 5 - same as 4
    "verbose": DEFAULT_VERBOSE,
    #: Log options
    "logging": {
        "enable": None,  # True: activate 'davreq' logger (in library mode)
        "logger_date_format": DEFAULT_LOGGER_DATE_FORMAT,
        "logger_format": DEFAULT_LOGGER_FORMAT,
        "enable_loggers": [],
    },
}
