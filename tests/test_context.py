"""Tests for building the request context handed to workflows."""

import unittest
from unittest.mock import MagicMock

from docuploader.api.v1.deps import _preferred_locale, get_request_context
from docuploader.core.config import Settings
from docuploader.services.context import DEFAULT_BASE_URL, RequestContext


class TestRequestContext(unittest.TestCase):
    def test_from_settings_uses_host_url(self) -> None:
        context = RequestContext.from_settings(Settings(HOST_URL="https://docs.example.com/"))
        self.assertEqual(context.base_url, "https://docs.example.com")
        self.assertEqual(context.locale, "en")

    def test_from_settings_without_host_url(self) -> None:
        context = RequestContext.from_settings(Settings(HOST_URL=""))
        self.assertEqual(context.base_url, DEFAULT_BASE_URL)

    def test_preferred_locale(self) -> None:
        self.assertEqual(_preferred_locale("de-DE,de;q=0.9,en;q=0.8"), "de-DE")
        self.assertEqual(_preferred_locale(None), "en")
        self.assertEqual(_preferred_locale(""), "en")

    def test_request_context_prefers_configured_host(self) -> None:
        request = MagicMock()
        request.headers = {"accept-language": "fr"}
        request.base_url = "http://testserver/"
        context = get_request_context(request)
        self.assertEqual(context.locale, "fr")
        self.assertEqual(context.base_url, "http://frontend.test")


if __name__ == "__main__":
    unittest.main()
