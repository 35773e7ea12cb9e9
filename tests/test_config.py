# (c) 2009-2024 Martin Wendt and contributors; see WsgiDAV https://github.com/mar10/wsgidav
# Licensed under the MIT license:
# http://www.opensource.org/licenses/mit-license.php
"""Unit tests for davreq.config"""

import unittest

from davreq.config import get_config, read_config_file
from davreq.default_conf import DEFAULT_CONFIG
from davreq.util import public_davreq_info
from tests.util import TempFolder

YAML_CONFIG = """\
base_url: https://dav.example.com/remote.php/dav
headers:
  X-Client: tests
options:
  max_content_length: 1000000
transport:
  max_workers: 2
"""

JSON_CONFIG = """\
{
    // JSON5 allows comments
    "base_url": "https://dav.example.com/",
    "transport": {"timeout": 30},
}
"""


class ConfigTest(unittest.TestCase):
    """Test reading and merging configuration."""

    def testDefaults(self):
        config = get_config()
        assert config["base_url"] is None
        assert config["headers"] == {"User-Agent": public_davreq_info}
        assert config["transport"]["max_workers"] == 4
        assert config["_config_file"] is None
        # The defaults must not be modified
        config["headers"]["X"] = "1"
        assert "X" not in DEFAULT_CONFIG["headers"]

    def testYaml(self):
        with TempFolder() as tmp:
            path = tmp.write_file("davreq.yaml", YAML_CONFIG)
            config = get_config(path)
        assert config["_config_file"] == path
        assert config["base_url"] == "https://dav.example.com/remote.php/dav"
        # Nested dicts are merged with the defaults
        assert config["headers"] == {
            "User-Agent": public_davreq_info,
            "X-Client": "tests",
        }
        assert config["options"] == {"max_content_length": 1000000}
        assert config["transport"] == {
            "max_workers": 2,
            "timeout": None,
            "verify": True,
        }

    def testJson5(self):
        with TempFolder() as tmp:
            path = tmp.write_file("davreq.json", JSON_CONFIG)
            conf = read_config_file(path)
        assert conf["base_url"] == "https://dav.example.com/"
        assert conf["transport"] == {"timeout": 30}

    def testOverrides(self):
        with TempFolder() as tmp:
            path = tmp.write_file("davreq.yml", YAML_CONFIG)
            config = get_config(path, {"transport": {"max_workers": 8}, "verbose": 4})
        assert config["transport"]["max_workers"] == 8
        assert config["verbose"] == 4
        assert config["headers"]["X-Client"] == "tests"

    def testEmptyFile(self):
        with TempFolder() as tmp:
            path = tmp.write_file("empty.yaml", "")
            assert read_config_file(path) == {"_config_file": path}

    def testErrors(self):
        self.assertRaises(RuntimeError, read_config_file, "/no/such/davreq.yaml")
        with TempFolder() as tmp:
            path = tmp.write_file("davreq.ini", "[davreq]")
            self.assertRaises(RuntimeError, read_config_file, path)
            path = tmp.write_file("list.yaml", "- a\n- b\n")
            self.assertRaises(RuntimeError, read_config_file, path)
            path = tmp.write_file("typo.yaml", "base_ulr: http://x\n")
            self.assertRaises(ValueError, get_config, path)


if __name__ == "__main__":
    unittest.main()
