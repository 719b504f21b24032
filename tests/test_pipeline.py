"""
Test Pipeline Orchestration - readings file -> scale filter -> sink
"""

import json
import os
import sys
import logging
from unittest.mock import NonCallableMock

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import polars as pl
from scale_filter.load.sinks import CollectingSink
from scale_filter.main import build_parser, main, run_pipeline
from scale_filter.orchestration.pipeline import FilterPipeline, run_filter_pipeline
from scale_filter.plugin.config import ConfigCategory
from scale_filter.readings.datapoint import IntegerValue, StringValue

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)

SAMPLE_READINGS = [
    {"asset_code": "temp", "user_ts": "2018-06-11T14:00:08Z", "readings": {"value": 20}},
    {"asset_code": "flag", "user_ts": "2018-06-11T14:00:08Z", "readings": {"active": "on"}},
]


@pytest.fixture
def readings_file(tmp_path):
    path = tmp_path / "readings.json"
    path.write_text(json.dumps(SAMPLE_READINGS))
    return path


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    for key in ("SCALE_FILTER_FACTOR", "SCALE_FILTER_ENABLE", "SCALE_FILTER_OUTPUT_DIR"):
        monkeypatch.delenv(key, raising=False)


def test_pipeline_scales_into_sink(readings_file):
    print("🧪 Testing FilterPipeline.run_file()...")

    sink = CollectingSink()
    config = ConfigCategory.default().merged_with({"enable": True})
    with FilterPipeline(config=config, sink=sink) as pipeline:
        summary = pipeline.run_file(readings_file)

    batch = sink.last
    assert batch.readings[0].datapoints[0].value == IntegerValue(2000)
    assert batch.readings[1].datapoints[0].value == StringValue("on")
    assert summary["readings"] == 2
    assert summary["factor"] == 100.0
    assert summary["enabled"] is True
    assert pipeline.filter.shutdown_called

    print("✅ FilterPipeline.run_file() passed")


def test_pipeline_disabled_by_default(readings_file):
    sink = CollectingSink()
    with FilterPipeline(sink=sink) as pipeline:
        pipeline.run_file(readings_file)

    assert sink.last.readings[0].datapoints[0].value == IntegerValue(20)


def test_pipeline_failure_is_raised(tmp_path):
    sink = NonCallableMock(spec=CollectingSink)
    with FilterPipeline(sink=sink) as pipeline:
        with pytest.raises(FileNotFoundError):
            pipeline.run_file(tmp_path / "missing.json")

    sink.deliver.assert_not_called()


def test_dry_run_writes_nothing(readings_file, tmp_path):
    out_dir = tmp_path / "out"
    summary = run_filter_pipeline(
        readings_file, factor="2", enabled=True, output_dir=str(out_dir), dry_run=True
    )

    assert summary["factor"] == 2.0
    assert "output" not in summary
    assert not out_dir.exists()


def test_run_filter_pipeline_writes_parquet(readings_file, tmp_path):
    summary = run_filter_pipeline(
        readings_file, factor="abc", enabled=True, output_dir=str(tmp_path / "out")
    )

    df = pl.read_parquet(summary["output"])
    assert summary["factor"] == 0.0
    assert df["int_value"].to_list() == [0, None]


def test_run_pipeline_reads_environment(readings_file, tmp_path, monkeypatch):
    monkeypatch.setenv("SCALE_FILTER_ENABLE", "true")
    monkeypatch.setenv("SCALE_FILTER_FACTOR", "0.5")
    monkeypatch.setenv("SCALE_FILTER_OUTPUT_DIR", str(tmp_path / "env_out"))

    summary = run_pipeline(str(readings_file), file_format="json")

    assert summary["enabled"] is True
    assert summary["factor"] == 0.5
    with open(summary["output"]) as f:
        rows = json.load(f)
    assert rows[0]["int_value"] == 10


def test_parser_enable_flags():
    parser = build_parser()

    assert parser.parse_args(["run", "--input", "x"]).enabled is None
    assert parser.parse_args(["run", "--input", "x", "--enable"]).enabled is True
    assert parser.parse_args(["run", "--input", "x", "--disable"]).enabled is False


def test_main_runs(readings_file, tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))

    main(["run", "--input", str(readings_file), "--enable", "--factor", "3", "--dry-run"])

    assert "Pipeline completed" in capsys.readouterr().out


def test_pipeline_survives_large_integer(tmp_path):
    path = tmp_path / "big.json"
    path.write_text(json.dumps([{"asset_code": "c", "readings": {"n": 2**62}}]))

    summary = run_filter_pipeline(
        path, factor="100", enabled=True, output_dir=str(tmp_path / "out")
    )

    df = pl.read_parquet(summary["output"])
    assert df["int_value"].to_list() == [2**62]
