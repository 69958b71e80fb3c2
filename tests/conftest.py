"""Pytest fixtures and configuration for clinic scraper tests."""

import asyncio
import tempfile
from pathlib import Path
from typing import Generator, Iterable

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from src.scraper.models import Clinic
from src.utils.config import AppConfig, OutputConfig, ScraperConfig, reset_config

QUERY = "/Switzerland/clinique"


def build_card(
    name: str = "Klinik Hirslanden",
    address: str = "Witellikerstrasse 40, 8032 Zürich",
    hrefs: Iterable[str] = (),
    with_title: bool = True,
    with_address: bool = True,
) -> str:
    """Render one listing card the way local.ch marks it up."""
    parts = ['<div class="js-entry-card-container entry-card">']
    if with_title:
        parts.append(f'<h2 class="card-info-title">\n  {name}\n</h2>')
    if with_address:
        parts.append(f'<div class="card-info-address"><span> {address} </span></div>')
    for href in hrefs:
        parts.append(f'<a href="{href}">link</a>')
    parts.append('</div>')
    return "\n".join(parts)


def build_page(cards: Iterable[str]) -> str:
    """Wrap listing cards in a result page."""
    return (
        "<html><head><title>Results</title></head><body>"
        '<div class="search-results">' + "\n".join(cards) + "</div>"
        "</body></html>"
    )


class FakeDirectory:
    """In-process stand-in for the directory website.

    Serves ``/q/Switzerland/clinique?page=N`` and records how many
    requests were being handled at the same time.
    """

    def __init__(self) -> None:
        self.pages: dict[int, str] = {}
        self.raw_pages: dict[int, bytes] = {}
        self.statuses: dict[int, int] = {}
        self.delays: dict[int, float] = {}
        self.requested: list[int] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.base_url = ""

    def add_clinics_page(self, page_number: int, count: int = 2) -> None:
        """Serve ``count`` clinics named after their page on a page."""
        cards = [
            build_card(
                name=f"Clinic {page_number}-{i}",
                address=f"Seestrasse {i + 1}, {8000 + page_number} Zürich",
                hrefs=[f"tel:+4144{page_number:03d}{i:04d}", f"https://clinic-{page_number}-{i}.ch"],
            )
            for i in range(count)
        ]
        self.pages[page_number] = build_page(cards)

    def add_mislabelled_page(self, page_number: int) -> None:
        """Serve two clinics encoded as latin-1 but labelled as utf-8."""
        cards = [
            build_card(name="Praxis Müller", address="Zürichstrasse 3, 8600 Dübendorf"),
            build_card(name="Clinique Léman", address="Quai 1, 1201 Genève"),
        ]
        self.raw_pages[page_number] = build_page(cards).encode("latin-1")

    async def handle(self, request: web.Request) -> web.Response:
        page_number = int(request.query["page"])
        self.requested.append(page_number)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(page_number, 0))
        finally:
            self.in_flight -= 1

        status = self.statuses.get(page_number, 200)
        if status != 200:
            return web.Response(status=status, text="Service unavailable")
        if page_number in self.raw_pages:
            return web.Response(
                body=self.raw_pages[page_number],
                content_type="text/html",
                charset="utf-8",
            )
        return web.Response(
            text=self.pages.get(page_number, build_page([])),
            content_type="text/html",
        )


@pytest.fixture
def card_html():
    """Provide the listing card builder."""
    return build_card


@pytest.fixture
def page_html():
    """Provide the result page builder."""
    return build_page


@pytest.fixture
async def directory_server() -> FakeDirectory:
    """Start a local directory site; pages default to having no results."""
    directory = FakeDirectory()
    app = web.Application()
    app.router.add_get(f"/q{QUERY}", directory.handle)

    server = TestServer(app)
    await server.start_server()
    directory.base_url = str(server.make_url("/q"))

    yield directory

    await server.close()


@pytest.fixture
async def unreachable_base_url() -> str:
    """Base URL of a server that has already shut down."""
    server = TestServer(web.Application())
    await server.start_server()
    url = str(server.make_url("/q"))
    await server.close()
    return url


@pytest.fixture
def test_config() -> AppConfig:
    """Provide test-specific configuration."""
    return AppConfig(
        scraper=ScraperConfig(
            base_url="http://127.0.0.1:8080/q",
            query=QUERY,
            max_pages=3,
            max_parallel=2,
            mode="parallel",
            show_progress=False,
        ),
        output=OutputConfig(csv_path="./test_data/clinics.csv"),
        log_level="DEBUG",
    )


@pytest.fixture
def temp_data_dir() -> Generator[Path, None, None]:
    """Create temporary directory for test artifacts."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_clinics() -> list[Clinic]:
    """Create clinics covering present and missing optional fields."""
    return [
        Clinic.from_listing(
            name="Klinik Hirslanden",
            address="Witellikerstrasse 40, 8032 Zürich",
            hrefs=["tel:+41443873111", "https://www.hirslanden.ch"],
        ),
        Clinic.from_listing(
            name="Clinique de Genolier",
            address="Route du Muids 3, 1272 Genolier",
            hrefs=["mailto:info@genolier.net"],
        ),
        Clinic(name="Praxis, \"Am See\"", address=""),
    ]


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the cached configuration between tests."""
    reset_config()
    yield
    reset_config()
