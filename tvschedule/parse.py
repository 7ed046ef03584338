"""
Parsing (BeautifulSoup tree -> structured records).

Knows the markup of TV Spielfilm's evening program:

- Schedule page: table.info-table holds one tr.hover row per broadcast,
  rows of the same channel follow each other (a channel group)
- Detail page: article.broadcast-detail with a description section and a
  definition list of facts (Jahr, Land, Genre, Originaltitel)

Important rules:
- A broken row is skipped and reported, it never aborts the schedule
- Only a missing top-level anchor is fatal (the website changed)
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime, time
from typing import Dict, List, Optional, Tuple
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

from tvschedule.errors import DetailStructureError, ScheduleStructureError
from tvschedule.model import ListingDetail, ListingEntry, Schedule, SkippedItem
from tvschedule.scrape import BASE_URL

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Structural anchors
# ---------------------------------------------------------------------------

SCHEDULE_ANCHOR = "table.info-table"
SCHEDULE_ROW = "tr.hover"

ROW_CHANNEL = "td.programm-col1 a"
ROW_TIME = "td.col-2 strong"
ROW_TITLE_LINK = "td.col-3 span a"
ROW_GENRE = "td.col-4 span"
ROW_DIVISION = "td.col-5 span"

DETAIL_ARTICLE = "article.broadcast-detail"
DETAIL_DESCRIPTION = "section.broadcast-detail__description"
DETAIL_FACTS = "dl.broadcast-detail__info"
DETAIL_CHANNEL = ".broadcast-detail__channel"

TIME_FORMATS = ("%H:%M", "%H.%M")

_YEAR_RE = re.compile(r"\b(1[89]\d{2}|20\d{2})\b")
_WS_RE = re.compile(r"\s+")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _clean(text: Optional[str]) -> str:
    """
    Collapse all whitespace runs (including non-breaking spaces) to one space.
    """
    if not text:
        return ""
    return _WS_RE.sub(" ", text.replace("\xa0", " ")).strip()


def _select_text(node: Tag, selector: str) -> str:
    el = node.select_one(selector)
    return _clean(el.get_text(" ")) if el else ""


def parse_clock(text: str) -> Optional[time]:
    """
    Parse one time of day ("20:15", "20.15", "20:15 Uhr").
    """
    raw = _clean(text).replace("Uhr", "").strip()
    if not raw:
        return None

    for fmt in TIME_FORMATS:
        try:
            return datetime.strptime(raw, fmt).time()
        except ValueError:
            continue
    return None


def parse_time_range(text: str) -> Optional[Tuple[time, Optional[time]]]:
    """
    Parse "20:15 - 21:45" into (start, end).

    The end part is optional; an unparsable end is dropped, an unparsable
    start makes the whole range invalid.
    """
    parts = [p.strip() for p in _clean(text).replace("–", "-").split("-", 1)]

    start = parse_clock(parts[0]) if parts else None
    if start is None:
        return None

    end = parse_clock(parts[1]) if len(parts) > 1 else None
    return start, end


def parse_year(text: Optional[str]) -> Optional[int]:
    """
    Extract the first 4-digit year from free text like "USA 2019".
    """
    if not text:
        return None
    years = _YEAR_RE.findall(text)
    if not years:
        return None
    return int(years[0])


def parse_tooltip_year(text: Optional[str]) -> Optional[int]:
    """
    Year suffix of a title link tooltip: "Tatort: Im Schatten, D 2019" -> 2019.

    Only the last token after the last comma counts, so numbers inside
    the title itself ("Blade Runner 2049") are never taken for a year.
    """
    if not text or "," not in text:
        return None
    tokens = text.rsplit(",", 1)[1].split()
    if not tokens or not _YEAR_RE.fullmatch(tokens[-1]):
        return None
    return int(tokens[-1])


def _channel_name(row: Tag) -> str:
    link = row.select_one(ROW_CHANNEL)
    if link is None:
        return ""
    name = _clean(link.get("title") or link.get_text(" "))
    if name.endswith(" Programm"):
        name = name[: -len(" Programm")].strip()
    return name


def _extract_facts(dl: Optional[Tag]) -> Dict[str, str]:
    """
    Extract key-value pairs from the facts definition list.
    """
    data: Dict[str, str] = {}
    if dl is None:
        return data

    for dt in dl.find_all("dt"):
        dd = dt.find_next_sibling("dd")
        if dd is None:
            continue
        key = _clean(dt.get_text(" ")).rstrip(":").strip()
        value = _clean(dd.get_text(" "))
        if key and value:
            data[key] = value

    return data


# ---------------------------------------------------------------------------
# Schedule page
# ---------------------------------------------------------------------------


def parse_broadcast_row(row: Tag, base_url: str = BASE_URL) -> ListingEntry:
    """
    Parse one tr.hover row into a ListingEntry.

    Raises ValueError naming the first missing or broken field.
    """
    channel = _channel_name(row)
    if not channel:
        raise ValueError("missing channel name")

    times = parse_time_range(_select_text(row, ROW_TIME))
    if times is None:
        raise ValueError("missing or unparsable start time")
    start, end = times

    link = row.select_one(ROW_TITLE_LINK)
    if link is None:
        raise ValueError("missing title link")

    strong = link.find("strong")
    title = _clean((strong or link).get_text(" "))
    if not title:
        raise ValueError("missing title")

    href = (link.get("href") or "").strip()
    if not href:
        raise ValueError("missing detail link")

    division_text = _select_text(row, ROW_DIVISION)

    return ListingEntry(
        channel_name=channel,
        title=title,
        start_time=start,
        end_time=end,
        detail_ref=urljoin(base_url.rstrip("/") + "/", href),
        genre=_select_text(row, ROW_GENRE) or None,
        division=division_text.split(" ")[0] if division_text else None,
        year=parse_tooltip_year(link.get("title")),
    )


def extract_schedule(
    soup: BeautifulSoup,
    day: Optional[date] = None,
    base_url: str = BASE_URL,
) -> Schedule:
    """
    Walk the schedule table and return all parsable broadcasts.

    Rows are read in document order, channel group by channel group, then
    sorted by start time. Python's sort is stable, so broadcasts sharing a
    start time keep their page order.

    The sort key is the plain time of day: a broadcast starting after
    midnight (00:05) sorts before the 20:15 rows.
    """
    table = soup.select_one(SCHEDULE_ANCHOR)
    if table is None:
        raise ScheduleStructureError(
            f"No {SCHEDULE_ANCHOR!r} found. Maybe the website has changed?"
        )

    entries: List[ListingEntry] = []
    skipped: List[SkippedItem] = []

    for position, row in enumerate(table.select(SCHEDULE_ROW), start=1):
        try:
            entries.append(parse_broadcast_row(row, base_url))
        except ValueError as e:
            logger.warning("Skipping broadcast row %d: %s", position, e)
            skipped.append(SkippedItem(position=position, reason=str(e)))

    entries.sort(key=lambda entry: entry.start_time)

    return Schedule(
        day=day or date.today(),
        entries=tuple(entries),
        skipped=tuple(skipped),
    )


# ---------------------------------------------------------------------------
# Detail page
# ---------------------------------------------------------------------------


def extract_detail(
    soup: BeautifulSoup,
    entry: Optional[ListingEntry] = None,
    ref: Optional[str] = None,
) -> ListingDetail:
    """
    Extract a ListingDetail from a broadcast detail page.

    Every field is optional on the page. Title, channel and year fall back
    to the ListingEntry the detail was requested for.
    """
    article = soup.select_one(DETAIL_ARTICLE)
    description_section = soup.select_one(DETAIL_DESCRIPTION)
    facts_list = soup.select_one(DETAIL_FACTS)

    if article is None and description_section is None and facts_list is None:
        raise DetailStructureError("No broadcast detail found. Stale or broken reference?")

    facts = _extract_facts(facts_list)

    title = ""
    if article is not None:
        heading = article.find("h1")
        if heading is not None:
            title = _clean(heading.get_text(" "))
    if not title and entry is not None:
        title = entry.title

    if entry is not None:
        channel = entry.channel_name
    else:
        channel = _select_text(soup, DETAIL_CHANNEL)

    description = ""
    if description_section is not None:
        paragraphs = [_clean(p.get_text(" ")) for p in description_section.find_all("p")]
        description = "\n\n".join(p for p in paragraphs if p)

    year = parse_year(facts.get("Jahr"))
    if year is None and entry is not None:
        year = entry.year

    genre = facts.get("Genre")
    if genre is None and entry is not None:
        genre = entry.genre

    return ListingDetail(
        title=title,
        channel_name=channel,
        year=year,
        description=description,
        genre=genre,
        country=facts.get("Land"),
        original_title=facts.get("Originaltitel"),
        detail_ref=ref or (entry.detail_ref if entry is not None else None),
    )
