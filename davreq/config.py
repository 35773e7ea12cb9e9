# (c) 2009-2024 Martin Wendt and contributors; see WsgiDAV https://github.com/mar10/wsgidav
# Licensed under the MIT license:
# http://www.opensource.org/licenses/mit-license.php
"""
Read and merge davreq configuration.

The configuration is set up like this:

    1. Start with a copy of :data:`davreq.default_conf.DEFAULT_CONFIG`.
    2. If a configuration file is passed (``.yaml``, ``.yml``, or ``.json``),
       read it and use it to overwrite the defaults.
    3. Apply `overrides` (a dict, e.g. built from command line options of the
       calling application).

JSON files are parsed as JSON5, so they may contain comments.
"""
import copy
import os
from pprint import pformat

import json5
import yaml

from davreq import util
from davreq.default_conf import DEFAULT_CONFIG

__docformat__ = "reStructuredText"

_logger = util.get_module_logger(__name__)


def read_config_file(config_file):
    """Read configuration file options into a dictionary."""

    config_file = os.path.abspath(os.path.expanduser(config_file))

    if not os.path.exists(config_file):
        raise RuntimeError(f"Couldn't open configuration file {config_file!r}.")

    if config_file.endswith(".json"):
        with open(config_file, encoding="utf-8-sig") as fp:
            conf = json5.load(fp)

    elif config_file.endswith((".yaml", ".yml")):
        with open(config_file, encoding="utf-8-sig") as fp:
            conf = yaml.safe_load(fp)

    else:
        raise RuntimeError(
            f"Unsupported config file format (expected yaml or json): {config_file}"
        )

    if conf is None:
        conf = {}
    elif not isinstance(conf, dict):
        raise RuntimeError(f"Expected a mapping in configuration file {config_file}")

    conf["_config_file"] = config_file
    return conf


def get_config(config_file=None, overrides=None):
    """Return a configuration dict from defaults, config file, and overrides.

    Raises:
        RuntimeError: the config file cannot be read
        ValueError: the configuration contains unknown top-level keys
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    config["_config_file"] = None

    if config_file:
        util.deep_update(config, read_config_file(config_file))
    if overrides:
        util.deep_update(config, overrides)

    util.check_tags(
        config,
        set(DEFAULT_CONFIG.keys()).union(("_config_file",)),
        msg="Invalid configuration",
    )

    if util.get_dict_value(config, "logging.enable", False):
        util.init_logging(config)

    _logger.debug(f"Configuration:\n{pformat(config)}")
    return config
