"""
Tests for sales sheet loading.

Run with: python3 -m pytest tests/test_data_loader.py -v
"""

from datetime import date

import pandas as pd
import pytest

from inventory_forecast import forecast
from inventory_forecast.common import SalesDataLoader
from inventory_forecast.exceptions import MalformedInputError


@pytest.fixture
def template_path(tmp_path):
    return SalesDataLoader.write_template(tmp_path / "sales-template.csv")


class TestTemplate:
    """The downloadable sales template."""

    def test_template_layout(self, template_path):
        lines = template_path.read_text().splitlines()
        assert lines[0] == "date,productId,quantity,revenue"
        assert lines[1] == "2024-01-13,PROD001,85,4250.00"
        assert len(lines) == 13

    def test_template_loads(self, template_path):
        observations = SalesDataLoader().load(template_path)

        assert len(observations) == 12
        assert observations[0] == {
            "date": date(2024, 1, 13),
            "product_id": "PROD001",
            "quantity": 85.0,
            "revenue": 4250.0,
        }

    def test_product_filter(self, template_path):
        observations = SalesDataLoader().load(template_path, product_id="PROD002")
        assert len(observations) == 6
        assert {obs["product_id"] for obs in observations} == {"PROD002"}

    def test_template_forecasts(self, template_path):
        result = forecast(SalesDataLoader().load(template_path), 4)
        assert len(result) == 4
        assert result.points[0].date == date(2024, 6, 22)


class TestColumnHandling:
    """Column aliases and row validation."""

    def test_aliases_and_default_revenue(self, tmp_path):
        path = tmp_path / "sales.csv"
        path.write_text(
            "Date,Product,qty\n"
            "2024-01-01,SKU1,3\n"
            "1st February 2024,SKU1,4\n"
            "45366,SKU1,5\n"
        )
        observations = SalesDataLoader().load(path)

        assert [obs["date"] for obs in observations] == [date(2024, 1, 1), date(2024, 2, 1), date(2024, 3, 15)]
        assert [obs["revenue"] for obs in observations] == [150.0, 200.0, 250.0]

    def test_rows_missing_fields_are_dropped(self, tmp_path):
        path = tmp_path / "sales.csv"
        path.write_text(
            "date,productId,quantity\n"
            "2024-01-01,P1,3\n"
            ",P1,3\n"
            "2024-01-03,,3\n"
            "2024-01-04,P1,\n"
            "someday,P1,3\n"
        )
        loader = SalesDataLoader()
        observations = loader.load(path)

        assert len(observations) == 1
        assert loader.last_dropped == 4

    def test_no_usable_rows(self, tmp_path):
        path = tmp_path / "sales.csv"
        path.write_text("date,productId,quantity\nnever,P1,abc\n")
        with pytest.raises(MalformedInputError):
            SalesDataLoader().load(path)

    def test_unknown_product_filter(self, template_path):
        with pytest.raises(MalformedInputError):
            SalesDataLoader().load(template_path, product_id="PROD999")


class TestFileFormats:
    """CSV, Excel and rejected inputs."""

    def test_excel_file(self, tmp_path):
        path = tmp_path / "sales.xlsx"
        pd.DataFrame({
            "date": pd.to_datetime(["2024-01-01", "2024-01-08", "2024-01-15"]),
            "productId": ["P1", "P1", "P1"],
            "quantity": [10, 12, 14],
        }).to_excel(path, index=False)

        observations = SalesDataLoader().load(path)
        assert [obs["date"] for obs in observations] == [date(2024, 1, 1), date(2024, 1, 8), date(2024, 1, 15)]
        assert [obs["quantity"] for obs in observations] == [10.0, 12.0, 14.0]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            SalesDataLoader().load(tmp_path / "missing.csv")

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "sales.json"
        path.write_text("{}")
        with pytest.raises(MalformedInputError):
            SalesDataLoader().load(path)

    def test_load_bytes(self, template_path):
        observations = SalesDataLoader().load_bytes(template_path.read_bytes(), "upload.csv")
        assert len(observations) == 12

    def test_corrupt_excel_bytes(self):
        with pytest.raises(MalformedInputError):
            SalesDataLoader().load_bytes(b"definitely not a workbook", "upload.xlsx")

    def test_data_summary(self, template_path):
        loader = SalesDataLoader()
        summary = loader.get_data_summary(loader.load(template_path))

        assert summary["records"] == 12
        assert summary["products"] == 2
        assert summary["start_date"] == "2024-01-13"
        assert summary["end_date"] == "2024-06-15"
