# (c) 2009-2024 Martin Wendt and contributors; see WsgiDAV https://github.com/mar10/wsgidav
# Licensed under the MIT license:
# http://www.opensource.org/licenses/mit-license.php
"""Unit tests for davreq.request_options"""

import copy
import unittest

from davreq.request_options import (
    RequestOptions,
    UserOptions,
    default_validate_status,
    digest_validate_status,
    get_validate_status,
    prepare_request_options,
)

URL = "https://dav.example.com/files/a.txt"


class RequestOptionsTest(unittest.TestCase):
    """Test RequestOptions and UserOptions."""

    def testRequestOptions(self):
        opts = RequestOptions(URL, "propfind")
        assert opts == {"url": URL, "method": "PROPFIND"}
        assert opts.url == URL
        assert opts.method == "PROPFIND"
        assert opts.get_validate_status() is default_validate_status
        assert "PROPFIND" in repr(opts)

        opts = RequestOptions(URL, "PUT", data=b"x", headers={"A": "1"})
        assert opts["data"] == b"x"
        assert opts["headers"] == {"A": "1"}

    def testRequestOptionsInvalid(self):
        self.assertRaises(ValueError, RequestOptions, "", "GET")
        self.assertRaises(ValueError, RequestOptions, None, "GET")
        self.assertRaises(ValueError, RequestOptions, URL, "FETCH")
        self.assertRaises(ValueError, RequestOptions, URL, "GET", foo=1)

    def testUserOptions(self):
        uo = UserOptions({"data": b"x"}, with_credentials=True)
        assert dict(uo) == {"data": b"x", "with_credentials": True}
        assert len(uo) == 2
        assert uo.get("headers") is None
        with self.assertRaises(TypeError):
            uo["data"] = b"y"
        assert UserOptions() == {}


class ValidateStatusTest(unittest.TestCase):
    def testDefault(self):
        assert default_validate_status(200)
        assert default_validate_status(207)
        assert default_validate_status(299)
        assert not default_validate_status(199)
        assert not default_validate_status(300)
        assert not default_validate_status(401)

    def testDigest(self):
        for status in (200, 204, 207, 299, 401):
            assert digest_validate_status(status), status
        for status in (199, 301, 400, 403, 404, 500):
            assert not digest_validate_status(status), status

    def testGetValidateStatus(self):
        assert get_validate_status({}) is default_validate_status
        assert get_validate_status({"validate_status": None}) is default_validate_status
        plain = {"validate_status": digest_validate_status}
        assert get_validate_status(plain) is digest_validate_status
        opts = RequestOptions(URL, "GET", validate_status=digest_validate_status)
        assert opts.get_validate_status() is get_validate_status(opts)


class PrepareRequestOptionsTest(unittest.TestCase):
    """Test prepare_request_options()."""

    def setUp(self):
        self.opts = RequestOptions(URL, "PUT")

    def testReturnsSameObject(self):
        assert prepare_request_options(self.opts, {}) is self.opts

    def testEmptyOptions(self):
        self.opts["headers"] = {"X": "1"}
        self.opts["data"] = b"body"
        before = copy.deepcopy(self.opts)
        prepare_request_options(self.opts, {})
        assert self.opts == before
        prepare_request_options(self.opts, None)
        assert self.opts == before
        prepare_request_options(self.opts, UserOptions())
        assert self.opts == before

    def testHeadersMerge(self):
        self.opts["headers"] = {"X": "1"}
        prepare_request_options(self.opts, {"headers": {"Y": "2"}})
        assert self.opts["headers"] == {"X": "1", "Y": "2"}

        # New values win, names are compared case-insensitively
        prepare_request_options(self.opts, {"headers": {"x": "3"}})
        assert self.opts["headers"] == {"x": "3", "Y": "2"}

    def testHeadersWithoutExisting(self):
        user_headers = {"Depth": "1"}
        prepare_request_options(self.opts, {"headers": user_headers})
        assert self.opts["headers"] == {"Depth": "1"}
        # The caller's dict is not shared with the descriptor
        self.opts["headers"]["Depth"] = "0"
        assert user_headers == {"Depth": "1"}

    def testHeadersWrongType(self):
        self.opts["headers"] = {"X": "1"}
        prepare_request_options(self.opts, {"headers": "Depth: 1"})
        prepare_request_options(self.opts, {"headers": ["Depth", "1"]})
        assert self.opts["headers"] == {"X": "1"}

    def testSimpleFields(self):
        http_agent = object()
        https_agent = object()
        prepare_request_options(
            self.opts,
            {
                "http_agent": http_agent,
                "https_agent": https_agent,
                "data": "text",
                "max_content_length": 1000,
                "max_body_length": 2000,
            },
        )
        assert self.opts["http_agent"] is http_agent
        assert self.opts["https_agent"] is https_agent
        assert self.opts["data"] == "text"
        assert self.opts["max_content_length"] == 1000
        assert self.opts["max_body_length"] == 2000

    def testFalsyValuesDoNotClear(self):
        self.opts.update(data=b"keep", max_content_length=10, max_body_length=20)
        prepare_request_options(
            self.opts,
            {
                "data": b"",
                "http_agent": None,
                "max_content_length": 0,
                "max_body_length": None,
                "_digest": None,
            },
        )
        assert self.opts == {
            "url": URL,
            "method": "PUT",
            "data": b"keep",
            "max_content_length": 10,
            "max_body_length": 20,
        }

    def testWithCredentials(self):
        prepare_request_options(self.opts, {"with_credentials": "yes"})
        assert "with_credentials" not in self.opts
        prepare_request_options(self.opts, {"with_credentials": 1})
        assert "with_credentials" not in self.opts

        prepare_request_options(self.opts, {"with_credentials": False})
        assert self.opts["with_credentials"] is False
        prepare_request_options(self.opts, {"with_credentials": True})
        assert self.opts["with_credentials"] is True

    def testUploadProgress(self):
        def on_progress(event):
            pass

        prepare_request_options(self.opts, {"on_upload_progress": "not callable"})
        assert "on_upload_progress" not in self.opts
        prepare_request_options(self.opts, {"on_upload_progress": on_progress})
        assert self.opts["on_upload_progress"] is on_progress

    def testDigest(self):
        digest = {"username": "joe", "nc": 1}
        prepare_request_options(self.opts, {"_digest": digest})
        assert self.opts["_digest"] is digest
        validate = self.opts["validate_status"]
        assert validate(200)
        assert validate(299)
        assert validate(401)
        assert not validate(404)
        assert not validate(500)
        assert self.opts.get_validate_status() is validate

    def testUnknownKeysIgnored(self):
        prepare_request_options(self.opts, {"timeout": 5, "validate_status": None})
        assert self.opts == {"url": URL, "method": "PUT"}

    def testUserOptionsNotModified(self):
        user_opts = UserOptions(headers={"A": "1"}, _digest={"realm": "r"})
        before = dict(user_opts)
        self.opts["headers"] = {"B": "2"}
        prepare_request_options(self.opts, user_opts)
        assert dict(user_opts) == before
        assert user_opts["headers"] == {"A": "1"}


if __name__ == "__main__":
    unittest.main()
