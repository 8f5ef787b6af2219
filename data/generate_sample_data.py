#!/usr/bin/env python3
"""
Sample Data Generator
=====================

Generates synthetic sales sheets in the dashboard's upload format
(date, productId, quantity, revenue) for trying out the forecaster.

Usage:
    python data/generate_sample_data.py

This will create:
    - sales-template.csv: The downloadable template (two products, monthly rows)
    - sample_sales.csv: Weekly sales with trend, a 4-week cycle and noise
    - sample_sales_messy.csv: The same data with duplicates, spreadsheet
      serial dates and unusable rows mixed in
"""

import os
import sys
from pathlib import Path

import numpy as np
import pandas as pd

sys.path.insert(0, str(Path(__file__).parent.parent))

from inventory_forecast.common import SalesDataLoader
from inventory_forecast.common.preprocessing import SPREADSHEET_EPOCH

# Set random seed for reproducibility
np.random.seed(42)

UNIT_PRICES = {'PROD001': 50.0, 'PROD002': 70.0, 'PROD003': 35.0}


def generate_sales_data(
    start_date: str = '2024-01-06',
    n_weeks: int = 52,
    products=('PROD001', 'PROD002', 'PROD003')
) -> pd.DataFrame:
    """
    Generate synthetic weekly sales data.

    Creates weekly sales with:
    - Trend (growth)
    - 4-week cycle (month-end restocking)
    - Noise

    Args:
        start_date: Date of the first week
        n_weeks: Number of weekly rows per product
        products: Product IDs to generate

    Returns:
        DataFrame with date, productId, quantity and revenue columns
    """
    dates = pd.date_range(start=start_date, periods=n_weeks, freq='7D')
    records = []

    for product_id in products:
        base = np.random.uniform(40, 120)

        trend = np.linspace(0, base * 0.3, n_weeks)
        cycle = base * 0.15 * np.array([1.0, -0.5, 0.2, -0.7])[np.arange(n_weeks) % 4]
        noise = np.random.normal(0, base * 0.05, n_weeks)

        quantities = np.maximum(np.round(base + trend + cycle + noise), 0).astype(int)
        price = UNIT_PRICES.get(product_id, 50.0)

        for day, quantity in zip(dates, quantities):
            records.append({
                'date': day.strftime('%Y-%m-%d'),
                'productId': product_id,
                'quantity': int(quantity),
                'revenue': round(float(quantity) * price, 2),
            })

    return pd.DataFrame(records)


def make_messy(df: pd.DataFrame, fraction: float = 0.1) -> pd.DataFrame:
    """
    Mix upload problems into a clean sales sheet.

    Re-encodes some dates as spreadsheet serials, duplicates some rows,
    and appends rows with an unusable date or quantity.
    """
    messy = df.copy().astype({'date': object, 'quantity': object})
    n_rows = len(messy)

    serial_rows = np.random.choice(n_rows, size=max(1, int(n_rows * fraction)), replace=False)
    for i in serial_rows:
        day = pd.Timestamp(messy.at[i, 'date']).date()
        messy.at[i, 'date'] = (day - SPREADSHEET_EPOCH).days + 1

    duplicates = messy.sample(frac=fraction, random_state=42)

    broken = pd.DataFrame([
        {'date': 'not a date', 'productId': 'PROD001', 'quantity': 10, 'revenue': 500.0},
        {'date': '1999-12-31', 'productId': 'PROD001', 'quantity': 10, 'revenue': 500.0},
        {'date': '2024-03-02', 'productId': 'PROD002', 'quantity': 'n/a', 'revenue': 0.0},
        {'date': '2024-03-09', 'productId': 'PROD003', 'quantity': -4, 'revenue': 0.0},
    ])

    messy = pd.concat([messy, duplicates, broken], ignore_index=True)
    return messy.sample(frac=1.0, random_state=7).reset_index(drop=True)


def main():
    """Generate all sample datasets."""
    script_dir = os.path.dirname(os.path.abspath(__file__))

    print("Generating sample datasets...")

    template_path = SalesDataLoader.write_template(os.path.join(script_dir, 'sales-template.csv'))
    print(f"  - Saved template to {template_path}")

    sales_df = generate_sales_data()
    sales_path = os.path.join(script_dir, 'sample_sales.csv')
    sales_df.to_csv(sales_path, index=False)
    print(f"  - Saved {len(sales_df)} records to {sales_path}")

    messy_df = make_messy(sales_df)
    messy_path = os.path.join(script_dir, 'sample_sales_messy.csv')
    messy_df.to_csv(messy_path, index=False)
    print(f"  - Saved {len(messy_df)} records to {messy_path}")

    print("\nSample data generation complete!")
    print(f"  Products: {sales_df['productId'].nunique()}, weeks: {sales_df['date'].nunique()}")


if __name__ == '__main__':
    main()
