"""
Schedule sources.

A source bundles the fetcher and extractors for one website. Supporting a
second website means writing another class that satisfies ScheduleSource;
nothing else in the package depends on TV Spielfilm's markup.
"""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from bs4 import BeautifulSoup

from tvschedule import parse
from tvschedule.model import ListingDetail, ListingEntry, RawDocument, Schedule
from tvschedule.scrape import Fetcher


class ScheduleSource(Protocol):
    name: str

    def fetch_schedule(self, day: Optional[date] = None) -> RawDocument: ...

    def fetch_detail(self, ref: str) -> RawDocument: ...

    def extract_schedule(self, soup: BeautifulSoup, day: Optional[date] = None) -> Schedule: ...

    def extract_detail(
        self,
        soup: BeautifulSoup,
        entry: Optional[ListingEntry] = None,
        ref: Optional[str] = None,
    ) -> ListingDetail: ...


class TvSpielfilmSource:
    """TV Spielfilm evening program (tvspielfilm.de)."""

    name = "tvspielfilm"

    def __init__(self, fetcher: Optional[Fetcher] = None) -> None:
        self.fetcher = fetcher or Fetcher()

    def fetch_schedule(self, day: Optional[date] = None) -> RawDocument:
        return self.fetcher.fetch_schedule(day)

    def fetch_detail(self, ref: str) -> RawDocument:
        return self.fetcher.fetch_detail(ref)

    def extract_schedule(self, soup: BeautifulSoup, day: Optional[date] = None) -> Schedule:
        return parse.extract_schedule(soup, day=day, base_url=self.fetcher.base_url)

    def extract_detail(
        self,
        soup: BeautifulSoup,
        entry: Optional[ListingEntry] = None,
        ref: Optional[str] = None,
    ) -> ListingDetail:
        return parse.extract_detail(soup, entry=entry, ref=ref)
