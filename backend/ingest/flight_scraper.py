"""
Flight board scraper - fetches the departures and arrivals boards and turns
their rows into a Snapshot.
"""

import time
from typing import Optional, cast

import requests
from bs4 import BeautifulSoup
from bs4.element import Tag

from config.settings import DEFAULT_FLIGHT_SOURCE_URL
from models.flight import FlightRecord, FlightType, Snapshot

# Board page query value -> flight direction
BOARD_TYPES = {
    "dprtr": FlightType.DEPARTURE,
    "arivl": FlightType.ARRIVAL,
}

# Column layout of a flight row
EXPECTED_CELL_COUNT = 9
AIRLINE_CELL = 0
FLIGHT_NUMBER_CELL = 2
STATUS_CELL = 7
ACTUAL_TIME_CELL = 8


class FlightScrapeError(RuntimeError):
    """Raised when a flight board page cannot be fetched."""


class FlightScraper:
    """Scrapes the airport flight boards into a snapshot"""

    def __init__(self, base_url: str = DEFAULT_FLIGHT_SOURCE_URL, max_retries: int = 3):
        self.base_url = base_url
        self.max_retries = max_retries
        self.session = requests.Session()
        self.session.headers.update(
            {
                "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
            }
        )

    def fetch_board_page(self, board_type: str) -> Optional[str]:
        """Fetch HTML of one flight board (departures or arrivals)"""
        for attempt in range(self.max_retries):
            try:
                response = self.session.get(
                    self.base_url, params={"type": board_type}, timeout=30
                )
                response.raise_for_status()
                return response.text
            except requests.RequestException as e:
                if attempt < self.max_retries - 1:
                    print(f"  ⚠ Board fetch failed (attempt {attempt + 1}): {e}")
                    time.sleep(2**attempt)
                else:
                    print(f"  ✗ Could not fetch {board_type} board: {e}")
        return None

    def parse_board(self, html: str, flight_type: FlightType) -> Snapshot:
        """Extract flight records from one board page"""
        soup = BeautifulSoup(html, "html.parser")
        snapshot: Snapshot = {}

        for row in soup.select("table.flight_table tbody tr"):
            cells = row.find_all("td")
            if len(cells) != EXPECTED_CELL_COUNT:
                continue

            flight_number = cells[FLIGHT_NUMBER_CELL].get_text(strip=True)
            date = self._extract_board_date(row)
            if not flight_number or not date:
                continue

            logo = cells[AIRLINE_CELL].find("img")
            airline_code = cast(str, logo.get("alt", "")) if logo else ""

            record = FlightRecord(
                id=FlightRecord.make_id(flight_number, date),
                flight_number=flight_number,
                airline_code=airline_code,
                status=cells[STATUS_CELL].get_text(strip=True),
                actual_time=cells[ACTUAL_TIME_CELL].get_text(strip=True),
                type=flight_type,
            )
            snapshot[record.id] = record

        return snapshot

    def _extract_board_date(self, row: Tag) -> str:
        """Date label of the table a row belongs to"""
        table = row.find_parent("table")
        if not table:
            return ""
        date_row = table.find("tr", class_="date_row")
        return date_row.get_text(strip=True) if date_row else ""

    def scrape_flights(self) -> Snapshot:
        """
        Scrape both boards into one snapshot.

        Raises:
            FlightScrapeError: If either board cannot be fetched
        """
        snapshot: Snapshot = {}
        for board_type, flight_type in BOARD_TYPES.items():
            print(f"→ Fetching {flight_type.value} board")
            html = self.fetch_board_page(board_type)
            if html is None:
                raise FlightScrapeError(f"Could not fetch {board_type} board")

            flights = self.parse_board(html, flight_type)
            print(f"  ✓ Found {len(flights)} flights")
            snapshot.update(flights)

        return snapshot
