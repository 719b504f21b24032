"""
Scale Transform

Multiplies every numeric datapoint value in a batch by a scale factor.
Integers are promoted to float, multiplied and truncated toward zero.
Strings, arrays and objects pass through untouched; nested numbers inside
arrays and objects are not scaled.
"""

import math
from typing import Optional

from ..readings.datapoint import INT64_MAX, INT64_MIN, FloatValue, IntegerValue
from ..readings.reading import ReadingSet
import logging

logger = logging.getLogger(__name__)

DEFAULT_SCALE_FACTOR = 100.0


def scale_integer(value: int, factor: float) -> Optional[int]:
    """
    Scale an integer the way a C cast would: float multiply, then truncate

    Returns:
        Optional[int]: Scaled value, or None if the product is not finite
            or does not fit in a signed 64-bit integer
    """
    try:
        product = float(value) * factor
    except OverflowError:
        return None
    if not math.isfinite(product):
        return None
    scaled = int(product)
    if not INT64_MIN <= scaled <= INT64_MAX:
        return None
    return scaled


def apply_scale(
    batch: ReadingSet, factor: float, enabled: bool = True
) -> ReadingSet:
    """
    Scale numeric datapoint values of every reading in place

    Args:
        batch: Readings to transform, mutated in place
        factor: Multiplier for numeric values
        enabled: When False the batch is returned without being traversed

    Returns:
        ReadingSet: The same batch object
    """
    if not enabled:
        return batch

    for reading in batch.get_all_readings():
        for datapoint in reading.get_reading_data():
            value = datapoint.value
            match value:
                case IntegerValue():
                    scaled = scale_integer(value.value, factor)
                    if scaled is None:
                        logger.warning(
                            f"Integer {reading.asset_code}.{datapoint.name}={value.value} "
                            f"cannot be scaled by {factor}, left unchanged"
                        )
                    else:
                        value.value = scaled
                case FloatValue():
                    value.value = value.value * factor
                case _:
                    pass

    return batch
