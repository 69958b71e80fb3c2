"""Unit tests for CSV export and import."""

import csv

import pytest

from src.scraper.models import CSV_HEADER, Clinic
from src.scraper.storage import export_clinics_to_csv, load_clinics_from_csv
from src.utils.exceptions import ExportError, StorageError


class TestExportClinics:
    """Test writing clinics to CSV."""

    def test_header_and_rows(self, sample_clinics, temp_data_dir):
        output_file = temp_data_dir / "clinics.csv"

        export_clinics_to_csv(sample_clinics, output_file)

        with open(output_file, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))

        assert rows[0] == ["Name", "Address", "Postcode", "City", "Phone", "Website"]
        assert rows[1] == [
            "Klinik Hirslanden",
            "Witellikerstrasse 40, 8032 Zürich",
            "8032",
            "Zürich",
            "tel:+41443873111",
            "https://www.hirslanden.ch",
        ]
        assert rows[2][4:] == ["", ""]
        assert len(rows) == len(sample_clinics) + 1

    def test_empty_sequence_writes_header(self, temp_data_dir):
        output_file = temp_data_dir / "clinics.csv"

        export_clinics_to_csv([], output_file)

        assert output_file.read_text(encoding="utf-8").splitlines() == [",".join(CSV_HEADER)]

    def test_creates_parent_directories(self, sample_clinics, temp_data_dir):
        output_file = temp_data_dir / "exports" / "2024" / "clinics.csv"

        assert export_clinics_to_csv(sample_clinics, output_file) == output_file
        assert output_file.exists()

    def test_unwritable_destination(self, sample_clinics, temp_data_dir):
        """Test write failures are reported and records stay intact."""
        before = list(sample_clinics)

        with pytest.raises(ExportError) as exc_info:
            export_clinics_to_csv(sample_clinics, temp_data_dir)

        assert isinstance(exc_info.value, StorageError)
        assert exc_info.value.context["path"] == str(temp_data_dir)
        assert sample_clinics == before


class TestLoadClinics:
    """Test reading clinics back from CSV."""

    def test_round_trip(self, sample_clinics, temp_data_dir):
        """Test exported rows read back equal to the originals."""
        output_file = export_clinics_to_csv(sample_clinics, temp_data_dir / "clinics.csv")

        loaded = load_clinics_from_csv(output_file)

        assert loaded == sample_clinics
        assert loaded[2].postcode is None
        assert loaded[2].name == 'Praxis, "Am See"'

    def test_missing_file(self, temp_data_dir):
        with pytest.raises(FileNotFoundError):
            load_clinics_from_csv(temp_data_dir / "missing.csv")

    def test_wrong_header(self, temp_data_dir):
        input_file = temp_data_dir / "other.csv"
        input_file.write_text("id,title\n1,Shirt\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Unexpected CSV header"):
            load_clinics_from_csv(input_file)
