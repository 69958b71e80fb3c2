"""Pydantic data models for scraped clinic listings.

This module defines the immutable record extracted from one listing entry,
the outcome of a single page fetch, and per-run statistics.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .utils import extract_city, extract_postcode, first_href_with_prefix

CSV_HEADER = ["Name", "Address", "Postcode", "City", "Phone", "Website"]


class Clinic(BaseModel):
    """Model representing a single directory entry."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Business name")
    address: str = Field(..., description="Full address text")
    postcode: Optional[str] = Field(default=None, description="First all-numeric address token")
    city: Optional[str] = Field(default=None, description="Last address token")
    phone: Optional[str] = Field(default=None, description="First tel: link")
    website: Optional[str] = Field(default=None, description="First http(s) link")

    @field_validator('name', 'address')
    @classmethod
    def strip_text(cls, v: str) -> str:
        """Trim surrounding whitespace."""
        return v.strip()

    @classmethod
    def from_listing(cls, name: str, address: str, hrefs: Iterable[str]) -> "Clinic":
        """Build a record from the raw texts and links of one listing entry.

        Phone and website are looked up independently: each takes the first
        link matching its own prefix.
        """
        address = address.strip()
        hrefs = list(hrefs)
        return cls(
            name=name,
            address=address,
            postcode=extract_postcode(address),
            city=extract_city(address),
            phone=first_href_with_prefix(hrefs, "tel:"),
            website=first_href_with_prefix(hrefs, "http"),
        )

    def to_row(self) -> list[str]:
        """Return CSV cells in header order, empty string for missing fields."""
        return [
            self.name,
            self.address,
            self.postcode or "",
            self.city or "",
            self.phone or "",
            self.website or "",
        ]

    @classmethod
    def from_row(cls, row: Sequence[str]) -> "Clinic":
        """Rebuild a record from CSV cells produced by to_row()."""
        if len(row) != len(CSV_HEADER):
            raise ValueError(f"Expected {len(CSV_HEADER)} columns, got {len(row)}")
        name, address, postcode, city, phone, website = row
        return cls(
            name=name,
            address=address,
            postcode=postcode or None,
            city=city or None,
            phone=phone or None,
            website=website or None,
        )


@dataclass(frozen=True)
class PageResult:
    """Outcome of fetching one result page.

    ``markup`` is None when the page yielded nothing (non-success status).
    """

    page_number: int
    markup: Optional[str] = None
    status: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return self.markup is None

    @classmethod
    def empty(cls, page_number: int, status: Optional[int] = None) -> "PageResult":
        return cls(page_number=page_number, markup=None, status=status)

    @classmethod
    def from_markup(cls, page_number: int, markup: str, status: int = 200) -> "PageResult":
        return cls(page_number=page_number, markup=markup, status=status)


@dataclass
class ScrapeStats:
    """
    Statistics for a scraping run.

    Only the coordinating task updates these counters.
    """
    pages_requested: int = 0
    pages_scraped: int = 0
    pages_skipped: int = 0
    pages_empty: int = 0
    pages_failed: int = 0
    entries_skipped: int = 0
    records: int = 0
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    def start(self) -> None:
        """Mark the start of the run."""
        self.start_time = datetime.now()

    def stop(self) -> None:
        """Mark the end of the run."""
        self.end_time = datetime.now()

    @property
    def duration_seconds(self) -> float:
        """Get run duration in seconds."""
        if not self.start_time:
            return 0.0
        end = self.end_time or datetime.now()
        return (end - self.start_time).total_seconds()

    def __str__(self) -> str:
        return (
            f"ScrapeStats(records={self.records}, "
            f"pages={self.pages_scraped}/{self.pages_requested}, "
            f"skipped={self.pages_skipped}, "
            f"empty={self.pages_empty}, "
            f"failed={self.pages_failed}, "
            f"malformed_entries={self.entries_skipped}, "
            f"duration={self.duration_seconds:.1f}s)"
        )
