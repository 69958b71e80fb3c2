"""Clinic scraper - directory listings to CSV.

Retrieves paginated search results from local.ch and extracts
clinic records (name, address, postcode, city, phone, website).
"""

__version__ = "0.1.0"
__author__ = "Clinic Scraper Team"
