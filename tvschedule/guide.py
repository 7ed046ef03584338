"""
Public API for the presentation layer.

    guide = TvGuide()
    schedule = guide.get_schedule()
    request = guide.request_detail(schedule.entries[0])
    ...
    request.cancel()            # user navigated away
    detail = request.result()   # or CancelledError

Each call runs its own fetch -> normalize -> extract pipeline. Pipelines
share no mutable state, so schedule and detail requests may overlap freely.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from datetime import date
from typing import Optional, Tuple, Union

from tvschedule.icons import resolve_icon
from tvschedule.model import IconRef, ListingDetail, ListingEntry, Schedule
from tvschedule.normalize import normalize
from tvschedule.source import ScheduleSource, TvSpielfilmSource

logger = logging.getLogger(__name__)

DetailTarget = Union[str, ListingEntry]


def _split_target(target: DetailTarget) -> Tuple[str, Optional[ListingEntry]]:
    if isinstance(target, ListingEntry):
        return target.detail_ref, target
    return target, None


class DetailRequest:
    """
    Handle for one detail pipeline running in the background.

    Once cancelled, result() raises CancelledError even if the worker
    already finished; a half-built detail is never handed out.
    """

    def __init__(self, ref: str, future: "Future[ListingDetail]", cancel_event: threading.Event) -> None:
        self.ref = ref
        self._future = future
        self._cancel_event = cancel_event

    def cancel(self) -> None:
        self._cancel_event.set()
        self._future.cancel()

    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def done(self) -> bool:
        return self._future.done()

    def result(self, timeout: Optional[float] = None) -> ListingDetail:
        if self._cancel_event.is_set():
            raise CancelledError()
        detail = self._future.result(timeout)
        if self._cancel_event.is_set():
            raise CancelledError()
        return detail


class TvGuide:
    """
    Entry point for fetching the schedule and, lazily, single details.
    """

    def __init__(self, source: Optional[ScheduleSource] = None, max_workers: int = 4) -> None:
        self.source = source or TvSpielfilmSource()
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="tvschedule-detail")

    def __enter__(self) -> "TvGuide":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self, wait: bool = False) -> None:
        """
        Stop the detail workers. Pending requests are cancelled; with
        wait=True, requests already running are joined.
        """
        self._executor.shutdown(wait=wait, cancel_futures=True)

    # -----------------------------------------------------------------------
    # Schedule
    # -----------------------------------------------------------------------

    def get_schedule(self, day: Optional[date] = None) -> Schedule:
        """
        Fetch and extract the schedule (today by default).

        Fetch and structure errors propagate; broken rows end up in
        Schedule.skipped.
        """
        day = day or date.today()
        raw = self.source.fetch_schedule(day)
        schedule = self.source.extract_schedule(normalize(raw), day=day)

        if schedule.skipped:
            logger.info(
                "Schedule for %s: %d entries, %d skipped", day.isoformat(), len(schedule), schedule.skipped_count
            )
        else:
            logger.info("Schedule for %s: %d entries", day.isoformat(), len(schedule))
        return schedule

    # -----------------------------------------------------------------------
    # Details
    # -----------------------------------------------------------------------

    def get_detail(self, target: DetailTarget) -> ListingDetail:
        """
        Fetch and extract the detail page of one listing (blocking).
        """
        ref, entry = _split_target(target)
        return self._load_detail(ref, entry, None)

    def request_detail(self, target: DetailTarget) -> DetailRequest:
        """
        Start fetching one listing's detail in the background.
        """
        ref, entry = _split_target(target)
        cancel_event = threading.Event()
        future = self._executor.submit(self._load_detail, ref, entry, cancel_event)
        return DetailRequest(ref, future, cancel_event)

    def _load_detail(
        self,
        ref: str,
        entry: Optional[ListingEntry],
        cancel_event: Optional[threading.Event],
    ) -> ListingDetail:
        raw = self.source.fetch_detail(ref)
        if cancel_event is not None and cancel_event.is_set():
            logger.debug("Detail request for %s cancelled, discarding page", ref)
            raise CancelledError()

        detail = self.source.extract_detail(normalize(raw), entry=entry, ref=ref)
        logger.debug("Detail for %s: %r", ref, detail.title)
        return detail

    # -----------------------------------------------------------------------
    # Icons
    # -----------------------------------------------------------------------

    @staticmethod
    def resolve_icon(channel_name: str) -> Optional[IconRef]:
        return resolve_icon(channel_name)
