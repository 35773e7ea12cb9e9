# (c) 2009-2024 Martin Wendt and contributors; see WsgiDAV https://github.com/mar10/wsgidav
# Licensed under the MIT license:
# http://www.opensource.org/licenses/mit-license.php
"""
Miscellaneous support functions for davreq.
"""

import collections.abc
import logging
import sys

from davreq import __version__

__docformat__ = "reStructuredText"

#: The base logger (silent by default)
BASE_LOGGER_NAME = "davreq"

#: Project name and version presented to the servers
public_davreq_info = f"davreq/{__version__}"


class NO_DEFAULT:
    """"""


# ========================================================================
# String tools
# ========================================================================


def is_bytes(s):
    """Return True for bytestrings."""
    return isinstance(s, bytes)


def is_str(s):
    """Return True for native strings."""
    return isinstance(s, str)


def to_bytes(s, encoding="utf8"):
    """Convert a text string to bytestring."""
    if type(s) is not bytes:
        s = bytes(s, encoding)
    return s


def to_str(s, encoding="utf8"):
    """Convert data to native str type."""
    if type(s) is bytes:
        s = str(s, encoding)
    elif type(s) is not str:
        s = str(s)
    return s


def to_set(val, *, or_none=False, raise_error=False) -> set:
    res = set()
    if type(val) is set:
        res = val
    elif type(val) is str:
        res = set(map(str.strip, val.split(",")))
    elif isinstance(val, (dict, list, tuple)):
        res = set(map(str, val))
    elif val is None and or_none:
        res = None
    elif raise_error:
        raise TypeError(f"{val}, {type(val)}")
    return res


def get_dict_value(d, key_path, default=NO_DEFAULT, *, as_dict=False):
    """Return the value of a nested dict using dot-notation path.

    Args:
        d (dict):
        key_path (str):
        default  (any):
        as_dict (bool):
            Assume default is `{}` and also return `{}` if the key exists with
            a value of `None`. This covers the case where suboptions are
            supposed to be dicts, but are defined in a YAML file as entry
            without a value.

    Raises:
        KeyError:
        ValueError:
        IndexError:

    Examples::

        get_dict_value(config, "transport.max_workers", 4)
    """
    if as_dict:
        try:
            res = get_dict_value(d, key_path, default={})
            return res if res is not None else {}
        except (AttributeError, KeyError, ValueError, IndexError):
            return {}

    if default is not NO_DEFAULT:
        try:
            return get_dict_value(d, key_path)
        except (AttributeError, KeyError, ValueError, IndexError):
            return default

    seg_list = key_path.split(".")
    seg = seg_list.pop(0)
    value = d[seg]

    while seg_list:
        seg = seg_list.pop(0)
        if isinstance(value, dict):
            value = value[seg]
        elif isinstance(value, (list, tuple)):
            if not seg.startswith("[") or not seg.endswith("]"):
                raise ValueError("Use `[INT]` syntax to address list items")
            seg = seg[1:-1]
            value = value[int(seg)]
        else:
            value = getattr(value, seg)

    return value


def check_tags(tags, known, *, msg=None, raise_error=True, required=False):
    """Check if `tags` only contains known tags.

    If check fails and raise_error is true, a ValueError is raised.
    If check passes, None is returned.
    """
    assert known, "must not be empty"
    known = to_set(known)
    optional = known

    if required is True:
        required = known
        optional = set()
    elif required:
        required = to_set(required)
        known = known.union(required)
        optional = known.difference(required)

    tags = to_set(tags)

    res = []
    unknown = tags.difference(known)
    if unknown:
        res.append("Unknown: {!r}".format("', '".join(sorted(unknown))))

    if required:
        missing = required.difference(tags)
        if missing:
            res.append("Missing: {!r}".format("', '".join(sorted(missing))))

    if res:
        if msg:
            res.insert(0, msg)

        if required and optional:
            res.append(
                "Required: ({!r}). Optional: ({!r})".format(
                    "', '".join(sorted(required)), "', '".join(sorted(optional))
                )
            )
        elif required:
            res.append("Required: ({!r})".format("', '".join(sorted(required))))
        elif optional:
            res.append("Optional: ({!r})".format("', '".join(sorted(optional))))

        res = "\n".join(res)
        if raise_error:
            raise ValueError(res)
        return res

    return None


def byte_number_string(
    number, *, thousands_sep=True, partition=False, base1024=True, append_bytes=True
):
    """Convert bytes into human-readable representation."""
    magsuffix = ""
    bytesuffix = ""

    if partition:
        magnitude = 0
        if base1024:
            while number >= 1024:
                magnitude += 1
                number = number >> 10
        else:
            while number >= 1000:
                magnitude += 1
                number /= 1000.0
        magsuffix = ["", "K", "M", "G", "T", "P"][magnitude]

    if append_bytes:
        if number == 1:
            bytesuffix = " Byte"
        else:
            bytesuffix = " Bytes"

    if thousands_sep and (number >= 1000 or magsuffix):
        snum = f"{number:,d}"
    else:
        snum = str(number)

    return f"{snum}{magsuffix}{bytesuffix}"


# ========================================================================
# Logging
# ========================================================================


def init_logging(config):
    """Initialize base logger named 'davreq'.

    The base logger is filtered by the `verbose` configuration option.
    Log entries will have a time stamp.

    **Note:** init_logging() is automatically called by
    :func:`davreq.config.get_config` if the configuration contains
    ``"logging": { "enable": true }``.

    Module loggers
    ~~~~~~~~~~~~~~
    Module loggers (e.g 'davreq.transport') are named loggers, that
    can be independently switched to DEBUG mode.

    Except for verbosity, they will inherit settings from the base logger.

    They will suppress DEBUG level messages, unless they are enabled by passing
    their name to util.init_logging().

    If enabled, module loggers will print DEBUG messages, even if verbose == 3.

    Example initialize and use a module logger, that will generate output,
    if enabled (and verbose >= 2)::

        _logger = util.get_module_logger(__name__)
        [..]
        _logger.debug("foo: {!r}".format(s))

    This logger would be enabled by passing its name to init_logging()::

        config["logging"]["enable_loggers"] = ["transport", "request"]
        util.init_logging(config)


    Log Level Matrix
    ~~~~~~~~~~~~~~~~

    +---------+-------------+------------------------+------------------------+
    | Verbose | base logger | module logger(default) | module logger(enabled) |
    +=========+=============+========================+========================+
    |    0    | CRITICAL    | CRITICAL               | CRITICAL               |
    +---------+-------------+------------------------+------------------------+
    |    1    | ERROR       | ERROR                  | ERROR                  |
    +---------+-------------+------------------------+------------------------+
    |    2    | WARN        | WARN                   | WARN                   |
    +---------+-------------+------------------------+------------------------+
    |    3    | INFO        | INFO                   | **DEBUG**              |
    +---------+-------------+------------------------+------------------------+
    |    4    | DEBUG       | DEBUG                  | DEBUG                  |
    +---------+-------------+------------------------+------------------------+
    |    5    | DEBUG       | DEBUG                  | DEBUG                  |
    +---------+-------------+------------------------+------------------------+

    """
    from davreq.default_conf import DEFAULT_LOGGER_DATE_FORMAT, DEFAULT_LOGGER_FORMAT

    verbose = config.get("verbose", 3)
    log_opts = config.get("logging") or {}

    enable_loggers = log_opts.get("enable_loggers", [])
    if enable_loggers is None:
        enable_loggers = []

    logger_date_format = log_opts.get("logger_date_format", DEFAULT_LOGGER_DATE_FORMAT)
    logger_format = log_opts.get("logger_format", DEFAULT_LOGGER_FORMAT)

    formatter = logging.Formatter(logger_format, logger_date_format)

    # Define handlers
    consoleHandler = logging.StreamHandler(sys.stdout)
    consoleHandler.setFormatter(formatter)

    # Add the handlers to the base logger
    logger = logging.getLogger(BASE_LOGGER_NAME)

    if verbose >= 4:  # --verbose
        logger.setLevel(logging.DEBUG)
    elif verbose == 3:  # default
        logger.setLevel(logging.INFO)
    elif verbose == 2:  # --quiet
        logger.setLevel(logging.WARN)
    elif verbose == 1:  # -qq
        logger.setLevel(logging.ERROR)
    else:  # -qqq
        logger.setLevel(logging.CRITICAL)

    # Don't call the root's handlers after our custom handlers
    logger.propagate = False

    # Remove previous handlers
    for hdlr in logger.handlers[:]:  # Must iterate an array copy
        try:
            hdlr.flush()
            hdlr.close()
        except Exception:
            pass
        logger.removeHandler(hdlr)

    logger.addHandler(consoleHandler)

    if verbose >= 3:
        for e in enable_loggers:
            if not e.startswith(BASE_LOGGER_NAME + "."):
                e = BASE_LOGGER_NAME + "." + e
            lg = logging.getLogger(e.strip())
            lg.setLevel(logging.DEBUG)
    return


def get_module_logger(moduleName):
    """Create a module logger, that can be en/disabled by configuration.

    @see: unit.init_logging
    """
    if not moduleName.startswith(BASE_LOGGER_NAME + "."):
        moduleName = BASE_LOGGER_NAME + "." + moduleName
    logger = logging.getLogger(moduleName)
    return logger


# ========================================================================
# Mappings
# ========================================================================


def deep_update(d, u):
    """Merge mapping `u` into `d` recursively (in-place) and return `d`.

    Nested mappings are merged key by key, everything else in `u` replaces
    the value in `d`.
    """
    for k, v in u.items():
        if isinstance(v, collections.abc.Mapping):
            prev_val = d.get(k)
            if prev_val is None or not isinstance(prev_val, collections.abc.Mapping):
                # Prev. value is a scalar: replace it with a copy of the new dict
                d[k] = dict(v)
            else:
                # Merge new values into prev. dict
                d[k] = deep_update(dict(prev_val), v)
        else:
            d[k] = v
    return d


def merge_headers(target, new_items):
    """Return a new header dict with `new_items` merged over `target`.

    Header names are matched case-insensitively. If a name exists in both,
    the spelling and value from `new_items` win. Neither argument is modified.
    """
    res = dict(target or {})
    if not new_items:
        return res
    lower_map = {k.lower(): k for k in res}
    for name, value in new_items.items():
        prev_name = lower_map.get(name.lower())
        if prev_name is not None and prev_name != name:
            del res[prev_name]
        res[name] = value
        lower_map[name.lower()] = name
    return res


def get_header(headers, name, default=None):
    """Return the value of header `name` (case-insensitive) or `default`."""
    if not headers:
        return default
    name = name.lower()
    for k, v in headers.items():
        if k.lower() == name:
            return v
    return default


def remove_headers(headers, names):
    """Return a copy of `headers` without the (case-insensitive) `names`."""
    names = {n.lower() for n in names}
    return {k: v for k, v in (headers or {}).items() if k.lower() not in names}
