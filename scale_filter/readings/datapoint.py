"""
Datapoint Values

A datapoint value is one variant of a closed tagged union. Each variant is a
small mutable dataclass so filters can rewrite the payload in place.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Union


@dataclass
class IntegerValue:
    value: int
    type_name = "INTEGER"


@dataclass
class FloatValue:
    value: float
    type_name = "FLOAT"


@dataclass
class StringValue:
    value: str
    type_name = "STRING"


@dataclass
class ArrayValue:
    values: List["DatapointValue"] = field(default_factory=list)
    type_name = "ARRAY"


@dataclass
class ObjectValue:
    values: Dict[str, "DatapointValue"] = field(default_factory=dict)
    type_name = "OBJECT"


INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


DatapointValue = Union[IntegerValue, FloatValue, StringValue, ArrayValue, ObjectValue]


@dataclass
class Datapoint:
    """A named value inside a reading"""

    name: str
    value: DatapointValue


def to_datapoint_value(raw: Any) -> DatapointValue:
    """
    Convert a decoded JSON value into a datapoint value

    Booleans become "true"/"false" strings and null becomes an empty string,
    so neither is ever treated as numeric. Integers must fit in 64 bits.

    Args:
        raw: Value as produced by json.load

    Returns:
        DatapointValue: Matching variant
    """
    match raw:
        case bool():
            return StringValue("true" if raw else "false")
        case int():
            if not INT64_MIN <= raw <= INT64_MAX:
                raise ValueError(f"Integer datapoint out of 64-bit range: {raw}")
            return IntegerValue(raw)
        case float():
            return FloatValue(raw)
        case str():
            return StringValue(raw)
        case None:
            return StringValue("")
        case list():
            return ArrayValue([to_datapoint_value(item) for item in raw])
        case dict():
            return ObjectValue({str(k): to_datapoint_value(v) for k, v in raw.items()})
        case _:
            raise ValueError(f"Unsupported datapoint value: {raw!r}")


def to_python(value: DatapointValue) -> Any:
    """Convert a datapoint value back into plain Python data"""
    match value:
        case IntegerValue(value=v) | FloatValue(value=v) | StringValue(value=v):
            return v
        case ArrayValue(values=items):
            return [to_python(item) for item in items]
        case ObjectValue(values=items):
            return {k: to_python(v) for k, v in items.items()}
        case _:
            raise TypeError(f"Not a datapoint value: {value!r}")
