"""Scraper for paginated local.ch search results.

This module drives pages 1..N through fetch and extraction under one of
two execution policies:

- sequential: one page at a time in page order; the first network error
  aborts the run
- parallel: every page launched at once, at most ``max_parallel`` requests
  in flight; a failed page contributes nothing and the others carry on

Both policies return records in page order.
"""

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import aiohttp
from tqdm.asyncio import tqdm

from src.utils import ScraperConfig, get_logger, log_execution_time, log_performance

from .fetcher import PageFetcher
from .models import Clinic, PageResult, ScrapeStats
from .parsers import ClinicParser

logger = get_logger(__name__)


class ScrapeMode(str, Enum):
    """Execution policy for a scraping run."""

    PARALLEL = "parallel"
    SEQUENTIAL = "sequential"


@dataclass
class PageOutcome:
    """Records extracted from one page plus what the parser saw."""

    page: PageResult
    clinics: list[Clinic] = field(default_factory=list)
    containers_found: int = 0
    entries_skipped: int = 0


class ClinicScraper:
    """Asynchronous scraper for clinic listings."""

    def __init__(
        self,
        base_url: str,
        query: str,
        max_pages: int,
        max_parallel: int = 10,
        mode: ScrapeMode = ScrapeMode.PARALLEL,
        parser: Optional[ClinicParser] = None,
        show_progress: bool = False,
    ):
        """Initialize the scraper.

        Args:
            base_url: Search endpoint, e.g. https://www.local.ch/en/q
            query: Query path, e.g. /Switzerland/clinique
            max_pages: Number of pages to scrape, starting at 1
            max_parallel: Maximum concurrent requests in parallel mode
            mode: Default execution policy for run()
            parser: Custom parser (default: ClinicParser)
            show_progress: Display a tqdm progress bar over pages
        """
        if max_pages < 1:
            raise ValueError("max_pages must be at least 1")
        if max_parallel < 1:
            raise ValueError("max_parallel must be at least 1")

        self.base_url = base_url
        self.query = query
        self.max_pages = max_pages
        self.max_parallel = max_parallel
        self.mode = ScrapeMode(mode)
        self.parser = parser or ClinicParser()
        self.show_progress = show_progress
        self.stats = ScrapeStats()

        logger.debug(
            f"ClinicScraper initialized: {max_pages} pages, "
            f"max {max_parallel} parallel, mode={self.mode.value}"
        )

    @classmethod
    def from_config(cls, config: ScraperConfig) -> "ClinicScraper":
        """Create a scraper from the scraper section of the app config."""
        return cls(
            base_url=config.base_url,
            query=config.query,
            max_pages=config.max_pages,
            max_parallel=config.max_parallel,
            mode=ScrapeMode(config.mode),
            show_progress=config.show_progress,
        )

    @property
    def page_numbers(self) -> list[int]:
        return list(range(1, self.max_pages + 1))

    async def run(self, mode: Optional[ScrapeMode] = None) -> list[Clinic]:
        """Scrape all pages with the given (or configured) execution policy."""
        mode = ScrapeMode(mode) if mode is not None else self.mode
        if mode is ScrapeMode.SEQUENTIAL:
            return await self.scrape_pages()
        return await self.scrape_pages_parallel()

    async def scrape_page(self, page_number: int) -> list[Clinic]:
        """Fetch and parse a single page with its own session.

        Raises:
            NetworkError: If the request fails at the transport level
        """
        async with aiohttp.ClientSession() as session:
            fetcher = PageFetcher(session, self.base_url, self.query)
            outcome = await self._scrape_page(fetcher, page_number)
        return outcome.clinics

    async def scrape_pages(self) -> list[Clinic]:
        """Scrape pages one at a time in increasing page order.

        Returns:
            Clinics from all pages, in page order

        Raises:
            NetworkError: On the first transport failure; no records are returned
        """
        self._start_run()
        clinics: list[Clinic] = []

        try:
            with log_execution_time(logger, f"sequential scrape of {self.max_pages} pages"):
                async with aiohttp.ClientSession() as session:
                    fetcher = PageFetcher(session, self.base_url, self.query)

                    for page_number in tqdm(
                        self.page_numbers, desc="Scraping pages", disable=not self.show_progress
                    ):
                        outcome = await self._scrape_page(fetcher, page_number)
                        self._record(outcome)
                        clinics.extend(outcome.clinics)
        except Exception as e:
            logger.error(f"Sequential scrape aborted: {e}")
            raise
        finally:
            self._finish_run()

        return clinics

    async def scrape_pages_parallel(self) -> list[Clinic]:
        """Scrape all pages concurrently, at most ``max_parallel`` requests at once.

        The semaphore is held only around the request itself; parsing
        happens after it is released. Pages that fail are logged and
        contribute no records.

        Returns:
            Clinics from all successful pages, in page order
        """
        self._start_run()
        clinics: list[Clinic] = []
        semaphore = asyncio.Semaphore(self.max_parallel)

        try:
            with log_execution_time(logger, f"parallel scrape of {self.max_pages} pages"):
                async with aiohttp.ClientSession() as session:
                    fetcher = PageFetcher(session, self.base_url, self.query)

                    async def scrape_with_semaphore(page_number: int) -> PageOutcome:
                        async with semaphore:
                            result = await fetcher.fetch(page_number)
                        return self._extract(result)

                    progress = tqdm(
                        total=self.max_pages, desc="Scraping pages", disable=not self.show_progress
                    )
                    tasks = []
                    for page_number in self.page_numbers:
                        task = asyncio.create_task(scrape_with_semaphore(page_number))
                        task.add_done_callback(lambda _: progress.update(1))
                        tasks.append(task)

                    try:
                        # Results come back indexed by launch order
                        outcomes = await asyncio.gather(*tasks, return_exceptions=True)
                    finally:
                        progress.close()

            for page_number, outcome in zip(self.page_numbers, outcomes):
                if isinstance(outcome, Exception):
                    self.stats.pages_failed += 1
                    logger.warning(f"Page {page_number} failed and was skipped: {outcome}")
                    continue
                if isinstance(outcome, BaseException):
                    raise outcome
                self._record(outcome)
                clinics.extend(outcome.clinics)
        finally:
            self._finish_run()

        return clinics

    async def _scrape_page(self, fetcher: PageFetcher, page_number: int) -> PageOutcome:
        result = await fetcher.fetch(page_number)
        return self._extract(result)

    def _extract(self, result: PageResult) -> PageOutcome:
        """Parse a fetched page; empty results pass through untouched."""
        if result.is_empty:
            return PageOutcome(page=result)

        clinics = self.parser.parse_listing_page(result.markup, result.page_number)
        return PageOutcome(
            page=result,
            clinics=clinics,
            containers_found=self.parser.last_found,
            entries_skipped=self.parser.last_skipped,
        )

    def _record(self, outcome: PageOutcome) -> None:
        if outcome.page.is_empty:
            self.stats.pages_skipped += 1
            return
        self.stats.pages_scraped += 1
        if outcome.containers_found == 0:
            self.stats.pages_empty += 1
        self.stats.entries_skipped += outcome.entries_skipped
        self.stats.records += len(outcome.clinics)

    def _start_run(self) -> None:
        self.stats = ScrapeStats(pages_requested=self.max_pages)
        self.stats.start()

    def _finish_run(self) -> None:
        self.stats.stop()
        log_performance(logger, f"scrape of {self.stats.pages_requested} pages", self.stats.duration_seconds)
        logger.info(
            f"Scraping complete: {self.stats.records} clinics from "
            f"{self.stats.pages_scraped}/{self.stats.pages_requested} pages"
        )
        logger.debug(str(self.stats))
