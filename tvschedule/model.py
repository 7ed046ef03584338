"""
Central data model definitions used across the project.

This module defines the records handed from the scraping/parsing layers to
whatever presents them (the terminal CLI, a GUI, tests):

- ListingEntry: one row of the day's schedule
- ListingDetail: extended information for one listing, fetched on demand
- Schedule: the ordered entries plus the rows that could not be parsed

All records are frozen so they can be shared between threads without copies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from typing import Iterator, Optional, Tuple


@dataclass(frozen=True)
class RawDocument:
    """
    Raw response body of one fetched page.
    """

    url: str
    content: bytes
    encoding: Optional[str] = None
    status_code: int = 200


@dataclass(frozen=True)
class ListingEntry:
    """
    Represents one scheduled broadcast (channel + time + title).

    detail_ref is an absolute URL, so the detail page can be fetched
    without the schedule page.
    """

    channel_name: str
    title: str
    start_time: time
    detail_ref: str
    end_time: Optional[time] = None
    genre: Optional[str] = None
    division: Optional[str] = None
    year: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.channel_name.strip():
            raise ValueError("channel_name must not be empty")
        if not self.title.strip():
            raise ValueError("title must not be empty")
        if not self.detail_ref.strip():
            raise ValueError("detail_ref must not be empty")


@dataclass(frozen=True)
class ListingDetail:
    """
    Extended metadata for a single listing.
    """

    title: str
    channel_name: str
    year: Optional[int] = None
    description: str = ""
    genre: Optional[str] = None
    country: Optional[str] = None
    original_title: Optional[str] = None
    detail_ref: Optional[str] = None


@dataclass(frozen=True)
class SkippedItem:
    """
    One broadcast row that was dropped during extraction.

    position is the 1-based index of the row in document order.
    """

    position: int
    reason: str


@dataclass(frozen=True)
class Schedule:
    """
    Result of extracting a schedule page.

    Entries are sorted by start time (stable); skipped lists the rows
    that could not be parsed.
    """

    day: date
    entries: Tuple[ListingEntry, ...] = ()
    skipped: Tuple[SkippedItem, ...] = field(default=())

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    def __iter__(self) -> Iterator[ListingEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class IconRef:
    """
    A square region of the channel logo sprite image.
    """

    sprite_url: str
    index: int
    x: int
    y: int
    width: int
    height: int
