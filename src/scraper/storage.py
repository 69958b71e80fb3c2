"""CSV persistence for scraped clinics.

The destination is always passed in explicitly; the default file name
lives in the configuration (``output.csv_path``).
"""

import csv
from pathlib import Path
from typing import Iterable

from src.utils import get_logger
from src.utils.exceptions import ExportError

from .models import CSV_HEADER, Clinic

logger = get_logger(__name__)


def export_clinics_to_csv(clinics: Iterable[Clinic], output_file: Path | str) -> Path:
    """Export clinics to a CSV file.

    Writes the header row followed by one row per clinic, with empty
    cells for missing optional fields.

    Args:
        clinics: Clinics in output order
        output_file: Path to output CSV file

    Returns:
        Path of the written file

    Raises:
        ExportError: If the file cannot be written. The clinics passed in
            are left untouched.
    """
    output_file = Path(output_file)
    count = 0

    try:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        with open(output_file, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow(CSV_HEADER)
            for clinic in clinics:
                writer.writerow(clinic.to_row())
                count += 1
    except (OSError, csv.Error) as e:
        raise ExportError(
            f"Failed to write {output_file}: {e}",
            path=str(output_file),
        ) from e

    logger.info(f"Exported {count} clinics to {output_file}")
    return output_file


def load_clinics_from_csv(input_file: Path | str) -> list[Clinic]:
    """Load clinics from a CSV file written by export_clinics_to_csv().

    Args:
        input_file: Path to CSV file

    Returns:
        Clinics in file order, with empty cells read back as None

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the header or a row doesn't match the expected layout
    """
    input_file = Path(input_file)

    if not input_file.exists():
        raise FileNotFoundError(f"CSV file not found: {input_file}")

    with open(input_file, 'r', newline='', encoding='utf-8') as f:
        reader = csv.reader(f)
        header = next(reader, None)
        if header != CSV_HEADER:
            raise ValueError(f"Unexpected CSV header in {input_file}: {header}")
        clinics = [Clinic.from_row(row) for row in reader]

    logger.debug(f"Loaded {len(clinics)} clinics from {input_file}")
    return clinics
