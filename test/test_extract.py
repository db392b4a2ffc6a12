"""
Tests for page fetching, literal extraction and the transport retry policy.
"""

import re

import pytest
import requests

from fakes import catalog_page, make_api, make_response, series_page
from src.sinaica.errors import ExtractionError, TransportError

URL = "https://sinaica.test/index.php"
PATTERN = re.compile(r"^.*var cump = (.+);\s*$", re.MULTILINE)


class TestExtract:
    """Fetch + regex + JSON."""

    def test_get_returns_parsed_literal(self):
        api, session = make_api(lambda m, u, d: catalog_page({"1": {"nom": "x"}, "meta": [1, 2]}))

        value = api.extract(URL, PATTERN)

        assert value == {"1": {"nom": "x"}, "meta": [1, 2]}
        assert [c[0] for c in session.calls] == ["GET"]

    def test_string_pattern_is_multiline(self):
        api, _ = make_api(lambda m, u, d: series_page([{"valor": 3.5}]))

        assert api.extract(URL, r"^.*var dat = (.+);\s*$") == [{"valor": 3.5}]

    def test_post_sends_form_body_and_headers(self):
        api, session = make_api(lambda m, u, d: series_page([]))
        headers = {"Content-Type": "application/x-www-form-urlencoded"}

        api.extract(URL, r"var dat = (.+);", method="post", headers=headers, body={"param": "O3"})

        method, url, sent_headers, data = session.calls[0]
        assert method == "POST"
        assert url == URL
        assert sent_headers == headers
        assert data == {"param": "O3"}

    def test_pattern_not_found(self):
        api, session = make_api(lambda m, u, d: "<html><body>Mantenimiento</body></html>")

        with pytest.raises(ExtractionError, match="pattern not found"):
            api.extract(URL, PATTERN)
        # parse failures are not retried
        assert len(session.calls) == 1

    def test_malformed_payload(self):
        page = "<html><script>\nvar cump = {'1': nope};\n</script></html>"
        api, session = make_api(lambda m, u, d: page)

        with pytest.raises(ExtractionError, match="malformed payload"):
            api.extract(URL, PATTERN)
        assert len(session.calls) == 1

    def test_unsupported_method(self):
        api, _ = make_api(lambda m, u, d: catalog_page({}))

        with pytest.raises(ValueError, match="Unsupported HTTP method"):
            api.extract(URL, PATTERN, method="PUT")


class TestRetry:
    """Transport failures are retried, parse failures are not."""

    @staticmethod
    def flaky(failures):
        """Raise/return each item of `failures`, then serve the page."""
        queue = list(failures)

        def handler(method, url, data):
            if queue:
                return queue.pop(0)
            return catalog_page({"1": {}})
        return handler

    def test_connection_error_is_retried(self):
        api, session = make_api(self.flaky([requests.ConnectionError("reset")]))

        assert api.extract(URL, PATTERN) == {"1": {}}
        assert len(session.calls) == 2

    def test_http_error_status_is_retried(self):
        api, session = make_api(self.flaky([make_response("oops", status=503)]))

        assert api.extract(URL, PATTERN) == {"1": {}}
        assert len(session.calls) == 2

    def test_gives_up_after_max_retries(self):
        api, session = make_api(lambda m, u, d: requests.Timeout("slow"), max_retries=2)

        with pytest.raises(TransportError) as info:
            api.extract(URL, PATTERN)

        assert info.value.attempts == 3
        assert info.value.url == URL
        assert len(session.calls) == 3

    def test_zero_max_retries_keeps_trying(self):
        failures = [requests.ConnectionError("down")] * 25
        api, session = make_api(self.flaky(failures), max_retries=0)

        assert api.extract(URL, PATTERN) == {"1": {}}
        assert len(session.calls) == 26

    def test_backoff_is_linear(self, monkeypatch):
        sleeps = []
        monkeypatch.setattr("src.sinaica.api_abstract.time.sleep", sleeps.append)
        api, _ = make_api(
            self.flaky([requests.ConnectionError("a"), requests.ConnectionError("b")]),
            backoff_sec=0.5,
        )

        api.extract(URL, PATTERN)

        assert sleeps == [0.5, 1.0]
