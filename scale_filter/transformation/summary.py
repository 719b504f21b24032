from typing import Any, Dict

from ..readings.reading import ReadingSet


def summarize_batch(batch: ReadingSet) -> Dict[str, Any]:
    """
    Get summary statistics for a batch of readings

    Args:
        batch: Readings to summarize

    Returns:
        Dict: Reading count, datapoint count, datapoints per value type
    """
    by_type: Dict[str, int] = {}
    datapoint_count = 0
    for reading in batch:
        for datapoint in reading.datapoints:
            datapoint_count += 1
            by_type[datapoint.value.type_name] = (
                by_type.get(datapoint.value.type_name, 0) + 1
            )

    return {
        "readings": len(batch),
        "datapoints": datapoint_count,
        "by_type": by_type,
        "assets": sorted({reading.asset_code for reading in batch}),
    }
