"""
Exception hierarchy.

Fetch-stage errors describe the HTTP exchange, parse-stage errors mean the
page no longer looks like what the extractors expect (the website changed).

    TvScheduleError
    ├── FetchError
    │   ├── NetworkError
    │   ├── NotFoundError
    │   └── ServerError
    └── ParseError
        ├── UnparsableDocumentError
        ├── ScheduleStructureError
        └── DetailStructureError
"""

from __future__ import annotations

from typing import Optional


class TvScheduleError(Exception):
    """Base class for all errors raised by tvschedule."""


class FetchError(TvScheduleError):
    def __init__(self, message: str, url: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class NetworkError(FetchError):
    """Connection failure or timeout. Are you connected to the internet?"""


class NotFoundError(FetchError):
    """HTTP 4xx response."""


class ServerError(FetchError):
    """HTTP 5xx response."""


class ParseError(TvScheduleError):
    """Base class for markup incompatibilities."""


class UnparsableDocumentError(ParseError):
    """The body is not markup at all (empty, binary, no tags)."""


class ScheduleStructureError(ParseError):
    """The schedule page lacks its top-level anchor. Maybe the website changed?"""


class DetailStructureError(ParseError):
    """The page is not a detail page (stale or broken reference)."""
