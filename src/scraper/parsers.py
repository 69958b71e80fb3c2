"""HTML parsing for local.ch search result pages.

Each result page lists businesses as card containers. CSS selectors are
isolated in ``ClinicParser.SELECTORS`` for easy maintenance when the site
changes its markup.
"""

from typing import Optional

from bs4 import BeautifulSoup, Tag

from src.utils import get_logger
from src.utils.exceptions import PageParsingError

from .models import Clinic

logger = get_logger(__name__)


class ClinicParser:
    """Parser for extracting clinic records from search result pages.

    A listing entry missing its title or address is skipped with a warning;
    the remaining entries of the page are still returned.
    """

    SELECTORS = {
        'container': '.js-entry-card-container',
        'title': 'h2.card-info-title',
        'address': '.card-info-address',
        'links': 'a[href]',
    }

    def __init__(self) -> None:
        # Counters describing the most recent parse_listing_page() call
        self.last_found = 0
        self.last_skipped = 0

    def parse_listing_page(self, html: str, page_number: Optional[int] = None) -> list[Clinic]:
        """Extract clinics from a search result page.

        Args:
            html: HTML content of the result page
            page_number: Page number, used in log messages only

        Returns:
            List of Clinic records in document order (possibly empty)
        """
        soup = BeautifulSoup(html, 'lxml')
        containers = soup.select(self.SELECTORS['container'])
        self.last_found = len(containers)
        self.last_skipped = 0

        if not containers:
            logger.info(f"No results found for page {self._label(page_number)}.")
            return []

        clinics = []
        for index, container in enumerate(containers):
            try:
                clinics.append(self.parse_listing_entry(container, page_number))
            except PageParsingError as e:
                self.last_skipped += 1
                logger.warning(
                    f"Skipping entry {index} on page {self._label(page_number)}: {e.message} "
                    f"(selector: {e.context.get('selector')})"
                )

        logger.debug(
            f"Extracted {len(clinics)} clinics from page {self._label(page_number)} "
            f"({self.last_skipped} malformed entries skipped)"
        )
        return clinics

    def parse_listing_entry(self, container: Tag, page_number: Optional[int] = None) -> Clinic:
        """Extract one clinic from its listing container.

        Raises:
            PageParsingError: If the title or address element is missing
        """
        name = self._required_text(container, 'title', page_number)
        address = self._required_text(container, 'address', page_number)
        hrefs = [link['href'] for link in container.select(self.SELECTORS['links'])]

        return Clinic.from_listing(name=name, address=address, hrefs=hrefs)

    def _required_text(self, container: Tag, field: str, page_number: Optional[int]) -> str:
        selector = self.SELECTORS[field]
        element = container.select_one(selector)
        if element is None:
            raise PageParsingError(
                f"Listing entry has no {field}",
                selector=selector,
                page=page_number,
            )
        return element.get_text().strip()

    @staticmethod
    def _label(page_number: Optional[int]) -> str:
        return str(page_number) if page_number is not None else "?"
