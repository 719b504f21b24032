"""
Test Load Layer - Flattening batches and writing them to disk
"""

import json
import os
import sys

import polars as pl
import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from scale_filter.load.local_storage import (
    LocalFileSink,
    readings_to_dataframe,
)
from scale_filter.readings.loader import reading_set_from_data
from scale_filter.readings.schemas import READINGS_FRAME_SCHEMA
from scale_filter.transformation.scale import apply_scale


def sample_batch():
    return reading_set_from_data(
        [
            {
                "asset_code": "temp",
                "user_ts": "2018-06-11T14:00:08Z",
                "readings": {"value": 20, "celsius": 21.5, "unit": "C"},
            },
            {
                "asset_code": "vibration",
                "user_ts": "2018-06-11T14:00:09Z",
                "readings": {"axes": [1, 2, 3], "meta": {"id": 7}},
            },
        ]
    )


def test_readings_to_dataframe():
    print("🧪 Testing readings_to_dataframe()...")

    df = readings_to_dataframe(sample_batch())

    assert df.schema == READINGS_FRAME_SCHEMA
    assert df.height == 5
    assert df["datapoint"].to_list() == ["value", "celsius", "unit", "axes", "meta"]
    assert df["value_type"].to_list() == ["INTEGER", "FLOAT", "STRING", "ARRAY", "OBJECT"]
    assert df["int_value"].to_list() == [20, None, None, None, None]
    assert df["float_value"].to_list() == [None, 21.5, None, None, None]
    assert df["str_value"].to_list()[2:] == ["C", "[1, 2, 3]", '{"id": 7}']

    print("✅ readings_to_dataframe() passed")


def test_empty_batch_gives_empty_frame():
    df = readings_to_dataframe(reading_set_from_data([]))
    assert df.height == 0
    assert df.schema == READINGS_FRAME_SCHEMA


def test_parquet_sink(tmp_path):
    sink = LocalFileSink(output_dir=str(tmp_path / "out"), file_format="parquet")

    sink.deliver(sample_batch())

    assert len(sink.written) == 1
    df = pl.read_parquet(sink.written[0])
    assert df.height == 5
    assert df.filter(pl.col("datapoint") == "value")["int_value"].item() == 20


def test_json_sink(tmp_path):
    sink = LocalFileSink(output_dir=str(tmp_path), file_format="json")

    sink.deliver(sample_batch())

    with open(sink.written[0]) as f:
        rows = json.load(f)
    assert [row["asset_code"] for row in rows] == ["temp"] * 3 + ["vibration"] * 2


def test_unsupported_format():
    with pytest.raises(ValueError):
        LocalFileSink(file_format="csv")



def test_parquet_sink_after_scaling_large_integer(tmp_path):
    """A scaled batch with an int64-sized value still writes out"""
    batch = reading_set_from_data(
        [{"asset_code": "c", "readings": {"n": 2**62, "m": 3}}]
    )
    apply_scale(batch, 100.0, True)
    sink = LocalFileSink(output_dir=str(tmp_path), file_format="parquet")

    sink.deliver(batch)

    df = pl.read_parquet(sink.written[0])
    assert df["int_value"].to_list() == [2**62, 300]
