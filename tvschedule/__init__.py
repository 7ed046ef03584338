"""
tvschedule: today's TV evening program as plain Python records.
"""

from tvschedule.errors import (
    DetailStructureError,
    FetchError,
    NetworkError,
    NotFoundError,
    ParseError,
    ScheduleStructureError,
    ServerError,
    TvScheduleError,
    UnparsableDocumentError,
)
from tvschedule.guide import DetailRequest, TvGuide
from tvschedule.icons import resolve_icon
from tvschedule.model import IconRef, ListingDetail, ListingEntry, Schedule, SkippedItem

__all__ = [
    "DetailRequest",
    "DetailStructureError",
    "FetchError",
    "IconRef",
    "ListingDetail",
    "ListingEntry",
    "NetworkError",
    "NotFoundError",
    "ParseError",
    "Schedule",
    "ScheduleStructureError",
    "ServerError",
    "SkippedItem",
    "TvGuide",
    "TvScheduleError",
    "UnparsableDocumentError",
    "resolve_icon",
]
