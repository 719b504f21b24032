"""
Reading Loader - Readings Layer

Pure I/O: read a JSON batch from disk and build a ReadingSet.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Union

from pydantic import ValidationError

from .datapoint import Datapoint, to_datapoint_value
from .reading import Reading, ReadingSet
from .schemas import ReadingPayload, ReadingSetPayload
import logging

logger = logging.getLogger(__name__)


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO 8601 timestamp, assuming UTC when no offset is given"""
    if value is None:
        return None
    ts = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def reading_from_payload(payload: ReadingPayload) -> Reading:
    """Build a Reading from a validated payload, keeping datapoint order"""
    datapoints = [
        Datapoint(name=name, value=to_datapoint_value(raw))
        for name, raw in payload.readings.items()
    ]
    return Reading(
        asset_code=payload.asset_code,
        datapoints=datapoints,
        user_ts=parse_timestamp(payload.user_ts),
    )


def reading_set_from_data(data: Any) -> ReadingSet:
    """
    Build a ReadingSet from decoded JSON

    Args:
        data: Either a list of readings or {"readings": [...]}

    Returns:
        ReadingSet: Batch in input order
    """
    if isinstance(data, list):
        data = {"readings": data}

    try:
        payload = ReadingSetPayload.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid reading batch: {e}") from e

    return ReadingSet(readings=[reading_from_payload(r) for r in payload.readings])


def load_reading_set(filepath: Union[str, Path]) -> ReadingSet:
    """
    Load a batch of readings from a JSON file

    Args:
        filepath: Path to JSON file

    Returns:
        ReadingSet: Loaded batch
    """
    filepath = Path(filepath)
    logger.info(f"Loading readings from JSON: {filepath}")

    if not filepath.exists():
        raise FileNotFoundError(f"Readings file not found: {filepath}")

    with open(filepath, "r") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Readings file is not valid JSON: {filepath}: {e}") from e

    reading_set = reading_set_from_data(data)
    logger.info(f"Loaded {len(reading_set)} readings from {filepath}")
    return reading_set
