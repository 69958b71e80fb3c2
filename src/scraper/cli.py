"""Process entry point for the clinic scraper.

All settings come from the YAML configuration (see config/config.yaml);
point CLINIC_SCRAPER_CONFIG at another file to override it.

Usage:
    python -m src.scraper.cli
"""

import asyncio
import sys

from src.utils import configure_logging, get_config, get_logger, log_exception
from src.utils.exceptions import ExportError, NetworkError

from .clinic_scraper import ClinicScraper
from .storage import export_clinics_to_csv

logger = get_logger(__name__)


async def main() -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        config = get_config()
        configure_logging(config.log_level)

        logger.info("=" * 60)
        logger.info("Clinic Scraper")
        logger.info("=" * 60)
        logger.info(f"Search: {config.scraper.base_url}{config.scraper.query}")
        logger.info(f"Pages: {config.scraper.max_pages}")
        logger.info(f"Mode: {config.scraper.mode} (max {config.scraper.max_parallel} parallel)")
        logger.info(f"Output: {config.output.csv_path}")
        logger.info("=" * 60)

        scraper = ClinicScraper.from_config(config.scraper)
        clinics = await scraper.run()

    except NetworkError as e:
        logger.error(f"Scraping aborted: {e}")
        print(f"\n✗ Scraping aborted: {e}")
        return 1

    except KeyboardInterrupt:
        logger.warning("Scraping interrupted by user")
        print("\n✗ Scraping cancelled by user")
        return 1

    except Exception as e:
        log_exception(logger, "scraping", e)
        print(f"\n✗ Scraping failed: {e}")
        return 1

    print("\n" + "=" * 60)
    print("SCRAPING SUMMARY")
    print("=" * 60)
    print(f"Clinics: {len(clinics)}")
    print(f"Pages scraped: {scraper.stats.pages_scraped}/{scraper.stats.pages_requested}")
    print(f"Pages skipped: {scraper.stats.pages_skipped}")
    print(f"Pages empty: {scraper.stats.pages_empty}")
    print(f"Pages failed: {scraper.stats.pages_failed}")
    print(f"Duration: {scraper.stats.duration_seconds:.1f}s")
    print("=" * 60)

    try:
        output_path = export_clinics_to_csv(clinics, config.output.csv_path)
    except ExportError as e:
        logger.error(f"Failed to write to csv. Error: {e}")
        print(f"\n✗ Failed to write {len(clinics)} clinics: {e}")
        return 1

    print(f"\n✓ Wrote {len(clinics)} clinics to {output_path}")
    return 0


def run() -> None:
    """Console script wrapper around main()."""
    sys.exit(asyncio.run(main()))


if __name__ == '__main__':
    run()
