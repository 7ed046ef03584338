"""
Fetching (HTTP -> raw page bytes).

Issues exactly two kinds of requests:
- the day's schedule page
- one listing's detail page

One attempt per call. Retrying is up to the caller.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Dict, Optional
from urllib.parse import urljoin

import requests

from tvschedule.errors import NetworkError, NotFoundError, ServerError
from tvschedule.model import RawDocument

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# URLs & defaults
# ---------------------------------------------------------------------------

BASE_URL = "https://www.tvspielfilm.de"
SCHEDULE_PATH = "/tv-programm/sendungen/abends.html"

DEFAULT_TIMEOUT = 30

DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (X11; Linux x86_64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept-Language": "de-DE,de;q=0.9",
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _declared_encoding(resp: requests.Response) -> Optional[str]:
    """
    Return the charset from the Content-Type header, if the server sent one.

    requests falls back to ISO-8859-1 for text/* without charset, which
    would hide the <meta charset> of the page itself.
    """
    content_type = resp.headers.get("Content-Type", "")
    if "charset=" not in content_type.lower():
        return None
    return requests.utils.get_encoding_from_headers(resp.headers)


# ---------------------------------------------------------------------------
# Fetcher
# ---------------------------------------------------------------------------


class Fetcher:
    """
    Retrieves raw markup for the schedule page and for detail pages.

    http_get has the signature of requests.get; tests pass a fake.
    """

    def __init__(
        self,
        base_url: str = BASE_URL,
        schedule_path: str = SCHEDULE_PATH,
        timeout: float = DEFAULT_TIMEOUT,
        headers: Optional[Dict[str, str]] = None,
        http_get: Callable[..., requests.Response] = requests.get,
    ) -> None:
        self.base_url = base_url.rstrip("/") + "/"
        self.schedule_url = urljoin(self.base_url, schedule_path.lstrip("/"))
        self.timeout = timeout
        self.headers = dict(headers) if headers is not None else dict(DEFAULT_HEADERS)
        self._http_get = http_get

    def fetch_schedule(self, day: Optional[date] = None) -> RawDocument:
        """
        Fetch the schedule page for one day (today in local time by default).
        """
        day = day or date.today()
        return self._get(self.schedule_url, params={"date": day.isoformat()})

    def fetch_detail(self, ref: str) -> RawDocument:
        """
        Fetch the detail page a ListingEntry.detail_ref points to.
        """
        ref = (ref or "").strip()
        if not ref:
            raise ValueError("detail reference must not be empty")
        return self._get(self.resolve(ref))

    def resolve(self, ref: str) -> str:
        # absolute refs pass through unchanged
        return urljoin(self.base_url, ref)

    def _get(self, url: str, params: Optional[Dict[str, str]] = None) -> RawDocument:
        logger.debug("GET %s params=%s", url, params)
        try:
            resp = self._http_get(url, params=params, headers=self.headers, timeout=self.timeout)
        except requests.Timeout as e:
            raise NetworkError(f"Timed out fetching {url}", url) from e
        except requests.RequestException as e:
            raise NetworkError(f"Could not fetch {url}: {e}", url) from e

        status = resp.status_code
        if 400 <= status < 500:
            raise NotFoundError(f"{url} returned HTTP {status}", url, status)
        if status >= 500:
            raise ServerError(f"{url} returned HTTP {status}", url, status)

        logger.debug("GET %s -> %s (%d bytes)", url, status, len(resp.content))
        return RawDocument(
            url=resp.url or url,
            content=resp.content,
            encoding=_declared_encoding(resp),
            status_code=status,
        )
