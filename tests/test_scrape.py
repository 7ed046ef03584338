"""
Unit tests for the fetcher.

No real network access: http_get is replaced by a recording fake that
returns prepared requests.Response objects or raises requests exceptions.
"""

from __future__ import annotations

import unittest
from datetime import date

import requests

from tvschedule.errors import NetworkError, NotFoundError, ServerError
from tvschedule.scrape import Fetcher


def _response(url: str, status: int = 200, content: bytes = b"<html></html>", content_type: str = "text/html") -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp._content = content
    resp.url = url
    resp.headers["Content-Type"] = content_type
    return resp


class FakeGet:
    def __init__(self, status: int = 200, content_type: str = "text/html; charset=utf-8", exc: Exception | None = None) -> None:
        self.status = status
        self.content_type = content_type
        self.exc = exc
        self.calls: list[tuple[str, dict]] = []

    def __call__(self, url: str, **kwargs) -> requests.Response:
        self.calls.append((url, kwargs))
        if self.exc is not None:
            raise self.exc
        return _response(url, self.status, content_type=self.content_type)


class TestFetcher(unittest.TestCase):
    def test_fetch_schedule_passes_date(self) -> None:
        fake = FakeGet()
        fetcher = Fetcher(http_get=fake, timeout=5)

        raw = fetcher.fetch_schedule(date(2026, 10, 19))

        url, kwargs = fake.calls[0]
        self.assertEqual(url, "https://www.tvspielfilm.de/tv-programm/sendungen/abends.html")
        self.assertEqual(kwargs["params"], {"date": "2026-10-19"})
        self.assertEqual(kwargs["timeout"], 5)
        self.assertIn("User-Agent", kwargs["headers"])
        self.assertEqual(raw.encoding, "utf-8")
        self.assertEqual(raw.status_code, 200)

    def test_missing_charset_leaves_encoding_open(self) -> None:
        raw = Fetcher(http_get=FakeGet(content_type="text/html")).fetch_schedule()
        self.assertIsNone(raw.encoding)

    def test_fetch_detail_resolves_relative_ref(self) -> None:
        fake = FakeGet()
        Fetcher(http_get=fake).fetch_detail("/tv-programm/sendung/stirb-langsam,5.html")
        self.assertEqual(fake.calls[0][0], "https://www.tvspielfilm.de/tv-programm/sendung/stirb-langsam,5.html")

    def test_fetch_detail_keeps_absolute_ref(self) -> None:
        fake = FakeGet()
        Fetcher(http_get=fake).fetch_detail("https://example.org/a,1.html")
        self.assertEqual(fake.calls[0][0], "https://example.org/a,1.html")

    def test_empty_ref_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            Fetcher(http_get=FakeGet()).fetch_detail("  ")

    def test_404_raises_not_found(self) -> None:
        with self.assertRaises(NotFoundError) as ctx:
            Fetcher(http_get=FakeGet(status=404)).fetch_detail("https://example.org/gone.html")
        self.assertEqual(ctx.exception.status_code, 404)
        self.assertEqual(ctx.exception.url, "https://example.org/gone.html")

    def test_503_raises_server_error(self) -> None:
        with self.assertRaises(ServerError):
            Fetcher(http_get=FakeGet(status=503)).fetch_schedule()

    def test_connection_error_raises_network_error(self) -> None:
        fake = FakeGet(exc=requests.ConnectionError("no route to host"))
        with self.assertRaises(NetworkError) as ctx:
            Fetcher(http_get=fake).fetch_schedule()
        self.assertIsInstance(ctx.exception.__cause__, requests.ConnectionError)

    def test_timeout_raises_network_error(self) -> None:
        fake = FakeGet(exc=requests.Timeout())
        with self.assertRaises(NetworkError):
            Fetcher(http_get=fake).fetch_detail("https://example.org/slow.html")


if __name__ == "__main__":
    unittest.main()
