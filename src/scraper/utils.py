"""Helper utilities for scraping operations."""

from typing import Iterable, Optional

# Swiss postcodes are four digits
POSTCODE_LENGTH = 4


def build_page_url(base_url: str, query: str, page_number: int) -> str:
    """Build the URL of one search result page.

    Args:
        base_url: Search endpoint, e.g. https://www.local.ch/en/q
        query: Query path, e.g. /Switzerland/clinique
        page_number: 1-based page number

    Returns:
        Full page URL, e.g. https://www.local.ch/en/q/Switzerland/clinique?page=2
    """
    return f"{base_url}{query}?page={page_number}"


def extract_postcode(address: str) -> Optional[str]:
    """Return the postcode token of an address.

    Candidates are whitespace-delimited tokens made only of digits. The
    first candidate of postcode length wins, so a house number in front
    of the postcode is passed over; otherwise the first candidate is used.
    This deliberately departs from a plain first-numeric-token rule, which
    would return "12" for the first example below.

    Examples:
        "Bahnhofstrasse 12 8001 Zürich" -> "8001"
        "Rue du Rhône 5, 1204 Genève" -> "1204"
        "Hauptstrasse 7 Dorf" -> "7"
        "Bahnhofstrasse Zürich" -> None

    Returns:
        The token, or None if the address has no all-numeric token.
    """
    candidates = [token for token in address.split() if token.isnumeric()]
    if not candidates:
        return None
    for token in candidates:
        if len(token) == POSTCODE_LENGTH:
            return token
    return candidates[0]


def extract_city(address: str) -> Optional[str]:
    """Return the last whitespace-delimited token of the address.

    Returns:
        The token, or None for an empty (or all-whitespace) address.
    """
    tokens = address.split()
    return tokens[-1] if tokens else None


def first_href_with_prefix(hrefs: Iterable[str], prefix: str) -> Optional[str]:
    """Return the first link starting with ``prefix``, or None."""
    return next((href for href in hrefs if href.startswith(prefix)), None)
