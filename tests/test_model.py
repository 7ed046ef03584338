import dataclasses
import unittest
from datetime import date, time

from tvschedule.model import ListingEntry, Schedule, SkippedItem


def _entry(**overrides) -> ListingEntry:
    fields = {
        "channel_name": "ZDF",
        "title": "heute journal",
        "start_time": time(21, 45),
        "detail_ref": "https://www.tvspielfilm.de/tv-programm/sendung/heute-journal,4.html",
    }
    fields.update(overrides)
    return ListingEntry(**fields)


class TestListingEntry(unittest.TestCase):
    def test_is_immutable(self) -> None:
        entry = _entry()
        with self.assertRaises(dataclasses.FrozenInstanceError):
            entry.title = "other"  # type: ignore[misc]

    def test_rejects_empty_fields(self) -> None:
        for field in ("channel_name", "title", "detail_ref"):
            with self.assertRaises(ValueError, msg=field):
                _entry(**{field: "  "})


class TestSchedule(unittest.TestCase):
    def test_iteration_and_counts(self) -> None:
        schedule = Schedule(day=date(2026, 10, 19), entries=(_entry(),), skipped=(SkippedItem(2, "missing title"),))
        self.assertEqual(len(schedule), 1)
        self.assertEqual([e.title for e in schedule], ["heute journal"])
        self.assertEqual(schedule.skipped_count, 1)


if __name__ == "__main__":
    unittest.main()
