"""
Local Storage - Load Layer

Flattens a batch of readings into a polars DataFrame and writes it to disk.
One row per datapoint; arrays and objects are stored as JSON text.
"""

import json
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

import polars as pl

from ..readings.datapoint import (
    FloatValue,
    IntegerValue,
    StringValue,
    to_python,
)
from ..readings.reading import ReadingSet
from ..readings.schemas import READINGS_FRAME_SCHEMA
import logging

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("parquet", "json")


def readings_to_dataframe(reading_set: ReadingSet) -> pl.DataFrame:
    """
    Flatten a batch into one row per datapoint

    Args:
        reading_set: Batch to flatten

    Returns:
        pl.DataFrame: Rows matching READINGS_FRAME_SCHEMA, in batch order
    """
    rows: List[Dict[str, Any]] = []
    for reading in reading_set:
        for datapoint in reading.datapoints:
            row = {
                "asset_code": reading.asset_code,
                "user_ts": reading.user_ts,
                "datapoint": datapoint.name,
                "value_type": datapoint.value.type_name,
                "int_value": None,
                "float_value": None,
                "str_value": None,
            }
            match datapoint.value:
                case IntegerValue(value=v):
                    row["int_value"] = v
                case FloatValue(value=v):
                    row["float_value"] = v
                case StringValue(value=v):
                    row["str_value"] = v
                case other:
                    row["str_value"] = json.dumps(to_python(other))
            rows.append(row)

    return pl.DataFrame(rows, schema=READINGS_FRAME_SCHEMA)


def save_parquet(df: pl.DataFrame, filepath: str) -> str:
    """
    Save DataFrame to Parquet file

    Args:
        df: DataFrame to save
        filepath: Path to save file

    Returns:
        str: Path to saved file
    """
    logger.info(f"Saving DataFrame to Parquet: {filepath}")

    # Ensure directory exists
    os.makedirs(os.path.dirname(filepath) or ".", exist_ok=True)

    df.write_parquet(filepath)

    logger.info(f"Saved {df.height} records to {filepath}")
    return filepath


def save_json(df: pl.DataFrame, filepath: str) -> str:
    """
    Save DataFrame to JSON file

    Args:
        df: DataFrame to save
        filepath: Path to save file

    Returns:
        str: Path to saved file
    """
    logger.info(f"Saving DataFrame to JSON: {filepath}")

    # Ensure directory exists
    os.makedirs(os.path.dirname(filepath) or ".", exist_ok=True)

    data = df.to_dicts()

    with open(filepath, "w") as f:
        json.dump(data, f, indent=2, default=str)

    logger.info(f"Saved {len(data)} records to {filepath}")
    return filepath


class LocalFileSink:
    """Writes each delivered batch to its own file under an output directory"""

    def __init__(self, output_dir: str = "output", file_format: str = "parquet"):
        if file_format not in SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported format '{file_format}', expected one of {SUPPORTED_FORMATS}"
            )
        self.output_dir = Path(output_dir)
        self.file_format = file_format
        self.written: List[str] = []

    def deliver(self, reading_set: ReadingSet) -> None:
        df = readings_to_dataframe(reading_set)
        stamp = datetime.now().strftime("%Y-%m-%d_%H%M%S_%f")
        filepath = str(self.output_dir / f"scaled_readings_{stamp}.{self.file_format}")

        if self.file_format == "parquet":
            save_parquet(df, filepath)
        else:
            save_json(df, filepath)
        self.written.append(filepath)
