import unittest
from datetime import time
from pathlib import Path

from bs4 import BeautifulSoup

from tvschedule.errors import DetailStructureError
from tvschedule.model import ListingEntry
from tvschedule.parse import extract_detail

DATA_DIR = Path(__file__).resolve().parent / "data"


def _soup(name: str) -> BeautifulSoup:
    return BeautifulSoup((DATA_DIR / name).read_text(encoding="utf-8"), "html.parser")


class TestExtractDetail(unittest.TestCase):
    def test_full_detail_page(self) -> None:
        detail = extract_detail(_soup("detail.html"))

        self.assertEqual(detail.title, "Stirb langsam")
        self.assertEqual(detail.channel_name, "RTL")
        self.assertEqual(detail.year, 1988)
        self.assertEqual(detail.country, "USA")
        self.assertEqual(detail.genre, "Actionfilm")
        self.assertEqual(detail.original_title, "Die Hard")
        self.assertTrue(detail.description.startswith("Der New Yorker Polizist"))
        # paragraphs are separated by a blank line
        self.assertEqual(len(detail.description.split("\n\n")), 2)
        self.assertIn("Gäste", detail.description)

    def test_year_without_description(self) -> None:
        detail = extract_detail(_soup("detail_no_description.html"))

        self.assertEqual(detail.year, 2026)
        self.assertEqual(detail.description, "")
        self.assertEqual(detail.title, "Tagesthemen")

    def test_entry_fills_missing_fields(self) -> None:
        entry = ListingEntry(
            channel_name="Das Erste",
            title="Tagesthemen",
            start_time=time(21, 45),
            detail_ref="https://www.tvspielfilm.de/tv-programm/sendung/tagesthemen,2.html",
            genre="Nachrichten",
        )
        soup = BeautifulSoup(
            "<section class='broadcast-detail__description'><p>Nachrichten aus aller Welt.</p></section>",
            "html.parser",
        )

        detail = extract_detail(soup, entry=entry)

        self.assertEqual(detail.title, "Tagesthemen")
        self.assertEqual(detail.channel_name, "Das Erste")
        self.assertEqual(detail.genre, "Nachrichten")
        self.assertIsNone(detail.year)
        self.assertEqual(detail.description, "Nachrichten aus aller Welt.")
        self.assertEqual(detail.detail_ref, entry.detail_ref)

    def test_not_a_detail_page(self) -> None:
        soup = BeautifulSoup("<html><body><p>Seite nicht gefunden</p></body></html>", "html.parser")
        with self.assertRaises(DetailStructureError):
            extract_detail(soup)


if __name__ == "__main__":
    unittest.main()
