"""
Sales Data Loading Module
=========================

Reads uploaded sales sheets (CSV or Excel) exported from the dashboard's
sales template and turns them into observation rows for the forecast
engine.

Usage:
    from inventory_forecast.common import SalesDataLoader

    loader = SalesDataLoader()
    observations = loader.load("uploads/sales.xlsx")
    result = forecast(observations, horizon=8)
"""

from io import BytesIO, StringIO
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd
from loguru import logger

from ..exceptions import MalformedInputError
from .preprocessing import parse_quantity, parse_sales_date


DATE_COLUMNS = ['date', 'Date', 'DATE', 'timestamp']
PRODUCT_COLUMNS = ['productId', 'productID', 'Product', 'sku']
QUANTITY_COLUMNS = ['quantity', 'Quantity', 'qty', 'units']
REVENUE_COLUMNS = ['revenue', 'Revenue', 'sales', 'amount']

# Revenue per unit assumed when a sheet has no revenue column
DEFAULT_UNIT_PRICE = 50

TEMPLATE_ROWS = [
    ('2024-01-13', 'PROD001', 85, 4250.00),
    ('2024-01-13', 'PROD002', 55, 3850.00),
    ('2024-02-10', 'PROD001', 92, 4600.00),
    ('2024-02-10', 'PROD002', 58, 4060.00),
    ('2024-03-16', 'PROD001', 88, 4400.00),
    ('2024-03-16', 'PROD002', 62, 4340.00),
    ('2024-04-13', 'PROD001', 95, 4750.00),
    ('2024-04-13', 'PROD002', 65, 4550.00),
    ('2024-05-11', 'PROD001', 102, 5100.00),
    ('2024-05-11', 'PROD002', 68, 4760.00),
    ('2024-06-15', 'PROD001', 98, 4900.00),
    ('2024-06-15', 'PROD002', 72, 5040.00),
]


def _first_present(row: Dict[str, Any], candidates: List[str]) -> Any:
    for column in candidates:
        value = row.get(column)
        if value is not None and not (isinstance(value, float) and pd.isna(value)) and value != '':
            return value
    return None


class SalesDataLoader:
    """
    Loader for sales template sheets.

    Column names are matched against the aliases the dashboard accepts
    (e.g. ``date``/``Date``/``timestamp``, ``quantity``/``qty``/``units``).
    Rows need a date, a product and a quantity; everything else is
    dropped and counted.

    Example:
        >>> loader = SalesDataLoader()
        >>> rows = loader.load("sales.csv", product_id="PROD001")
        >>> print(f"Loaded {len(rows)} records")
    """

    supported_formats = ['.csv', '.xlsx', '.xls']

    def __init__(self, unit_price: float = DEFAULT_UNIT_PRICE):
        """
        Initialize SalesDataLoader.

        Args:
            unit_price: Revenue per unit used when a row has no revenue
        """
        self.unit_price = unit_price
        self.last_dropped = 0
        logger.debug("SalesDataLoader initialized")

    def read_frame(self, filepath: Union[str, Path]) -> pd.DataFrame:
        """
        Read a CSV or Excel file into a DataFrame without type coercion.

        Raises:
            FileNotFoundError: If the file doesn't exist
            MalformedInputError: If the format is unsupported
        """
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")

        suffix = filepath.suffix.lower()
        if suffix not in self.supported_formats:
            raise MalformedInputError(
                f"Unsupported format: {filepath.suffix}. Please upload a CSV or Excel file (.csv, .xlsx, .xls)"
            )

        logger.info(f"Loading sales data from {filepath}")

        if suffix == '.csv':
            return pd.read_csv(filepath, dtype=object, keep_default_na=False)
        return pd.read_excel(filepath, sheet_name=0)

    def read_bytes(self, content: bytes, filename: str) -> pd.DataFrame:
        """Read an uploaded file's raw bytes, choosing the parser by filename."""
        suffix = Path(filename).suffix.lower()
        if suffix not in self.supported_formats:
            raise MalformedInputError(
                f"Unsupported format: {suffix or filename}. Please upload a CSV or Excel file (.csv, .xlsx, .xls)"
            )

        try:
            if suffix == '.csv':
                text = content.decode('utf-8-sig')
                return pd.read_csv(StringIO(text), dtype=object, keep_default_na=False)
            return pd.read_excel(BytesIO(content), sheet_name=0)
        except Exception as e:
            raise MalformedInputError("Failed to parse file. Please check the file format.") from e

    def to_observations(
        self,
        df: pd.DataFrame,
        product_id: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """
        Convert sheet rows into observation dictionaries.

        Args:
            df: Raw sheet contents
            product_id: Keep only rows for this product

        Returns:
            List of ``{date, product_id, quantity, revenue}`` dictionaries

        Raises:
            MalformedInputError: If no row is usable
        """
        observations = []
        dropped = 0

        for row in df.to_dict('records'):
            raw_date = _first_present(row, DATE_COLUMNS)
            product = _first_present(row, PRODUCT_COLUMNS)
            quantity = parse_quantity(_first_present(row, QUANTITY_COLUMNS))

            if raw_date is None or product is None or quantity is None:
                dropped += 1
                continue

            raw_revenue = _first_present(row, REVENUE_COLUMNS)
            revenue = parse_quantity(raw_revenue) if raw_revenue is not None else quantity * self.unit_price
            parsed_date = parse_sales_date(raw_date)

            if revenue is None or parsed_date is None:
                dropped += 1
                continue

            if product_id is not None and str(product) != product_id:
                continue

            observations.append({
                'date': parsed_date,
                'product_id': str(product),
                'quantity': quantity,
                'revenue': revenue,
            })

        self.last_dropped = dropped
        if dropped:
            logger.warning(f"Skipped {dropped} rows without a usable date, product or quantity")

        if not observations:
            raise MalformedInputError("No valid data found in the file. Please check the date formats.")

        logger.info(f"Loaded {len(observations)} sales records")
        return observations

    def load(self, filepath: Union[str, Path], product_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Load a sales sheet from disk as observation rows.

        Args:
            filepath: Path to a .csv, .xlsx or .xls file
            product_id: Keep only rows for this product

        Returns:
            List of observation dictionaries
        """
        return self.to_observations(self.read_frame(filepath), product_id=product_id)

    def load_bytes(self, content: bytes, filename: str, product_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """Load an uploaded sheet from memory as observation rows."""
        return self.to_observations(self.read_bytes(content, filename), product_id=product_id)

    def get_data_summary(self, observations: List[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Summarize loaded observations.

        Returns:
            Dictionary with record, product and date-range statistics
        """
        if not observations:
            return {'records': 0, 'products': 0, 'start_date': None, 'end_date': None}

        dates = [obs['date'] for obs in observations]
        return {
            'records': len(observations),
            'products': len({obs['product_id'] for obs in observations}),
            'total_quantity': sum(obs['quantity'] for obs in observations),
            'start_date': min(dates).isoformat(),
            'end_date': max(dates).isoformat(),
        }

    @staticmethod
    def write_template(filepath: Union[str, Path]) -> Path:
        """
        Write the downloadable sales template (date, productId, quantity, revenue).

        Returns:
            Path of the written CSV file
        """
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        template = pd.DataFrame(TEMPLATE_ROWS, columns=['date', 'productId', 'quantity', 'revenue'])
        template['revenue'] = template['revenue'].map(lambda v: f"{v:.2f}")
        template.to_csv(filepath, index=False)

        logger.info(f"Saved sales template: {filepath}")
        return filepath
