"""Web scraping components for local.ch clinic listings.

This module provides:
- ClinicScraper: Async aiohttp scraper with sequential and bounded-parallel modes
- PageFetcher: Single-page HTTP retrieval
- ClinicParser: HTML parser turning listing cards into records
- Storage utilities: CSV export/import
- Data models: Immutable Pydantic record for one clinic

Usage:
    from src.scraper import ClinicScraper, export_clinics_to_csv

    scraper = ClinicScraper("https://www.local.ch/en/q", "/Switzerland/clinique", max_pages=5)
    clinics = await scraper.scrape_pages_parallel()
    export_clinics_to_csv(clinics, Path("clinics.csv"))
"""

from .clinic_scraper import ClinicScraper, ScrapeMode
from .fetcher import PageFetcher
from .models import Clinic, PageResult, ScrapeStats
from .parsers import ClinicParser
from .storage import export_clinics_to_csv, load_clinics_from_csv

__all__ = [
    "Clinic",
    "PageResult",
    "ScrapeStats",
    "ClinicParser",
    "PageFetcher",
    "ClinicScraper",
    "ScrapeMode",
    "export_clinics_to_csv",
    "load_clinics_from_csv",
]
