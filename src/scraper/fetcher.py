"""Page fetching over a shared aiohttp session.

One GET per page, no retries. Non-success statuses are reported as empty
pages; transport failures raise NetworkError and the caller decides
whether they abort the run.
"""

import asyncio

import aiohttp

from src.utils import get_logger
from src.utils.exceptions import NetworkError

from .models import PageResult
from .utils import build_page_url

logger = get_logger(__name__)


class PageFetcher:
    """Fetches search result pages for a fixed base URL and query."""

    def __init__(self, session: aiohttp.ClientSession, base_url: str, query: str):
        """Initialize page fetcher.

        Args:
            session: Shared client session (not closed by the fetcher)
            base_url: Search endpoint
            query: Query path appended to the base URL
        """
        self.session = session
        self.base_url = base_url
        self.query = query

    def page_url(self, page_number: int) -> str:
        return build_page_url(self.base_url, self.query, page_number)

    async def fetch(self, page_number: int) -> PageResult:
        """Fetch one result page.

        Args:
            page_number: 1-based page number

        Returns:
            PageResult with the full body, or an empty result for a
            non-success status. Bytes that do not decode under the
            response charset are replaced, not raised.

        Raises:
            NetworkError: If the request fails at the transport level
        """
        url = self.page_url(page_number)
        logger.info(f"Scraping page {page_number}.")

        try:
            async with self.session.get(url) as response:
                if not 200 <= response.status < 300:
                    logger.warning(
                        f"Failed to fetch page {page_number}. Response status: {response.status}"
                    )
                    return PageResult.empty(page_number, response.status)

                body = await response.text(errors="replace")
                return PageResult.from_markup(page_number, body, response.status)

        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            raise NetworkError(
                f"Request for page {page_number} failed: {e!r}",
                url=url,
                page=page_number,
            ) from e
