"""
Configuration Category

Holds the filter's configuration items as text, the way the host stores
them, and converts the two items the filter needs (enable, factor) into a
typed snapshot for one ingest call.
"""

import json
import math
import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from ..transformation.scale import DEFAULT_SCALE_FACTOR
import logging

logger = logging.getLogger(__name__)

FILTER_NAME = "scale"
SCALE_FACTOR = "100.0"

DEFAULT_CONFIG: Dict[str, Dict[str, str]] = {
    "plugin": {
        "description": "Scale filter plugin",
        "type": "string",
        "default": FILTER_NAME,
    },
    "enable": {
        "description": "A switch that can be used to enable or disable execution of "
        "the scale filter.",
        "type": "boolean",
        "default": "false",
    },
    "factor": {
        "description": "Scale factor for a reading value.",
        "type": "float",
        "default": SCALE_FACTOR,
    },
}

# Leading decimal number, as accepted by strtod
_FLOAT_PREFIX = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_float_prefix(text: str) -> Tuple[float, bool]:
    """
    Parse the longest leading decimal number in text

    Args:
        text: Configuration value

    Returns:
        Tuple[float, bool]: Parsed value (0.0 if none) and whether the whole
            text was consumed
    """
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        return 0.0, False
    value = float(match.group(0))
    return value, match.end() == len(text.rstrip())


def parse_factor(text: Optional[str]) -> float:
    """
    Convert the factor item to a float

    A missing item gives the default factor. Text without a leading number
    gives 0.0, which is accepted but reported.
    """
    if text is None:
        return DEFAULT_SCALE_FACTOR

    value, complete = parse_float_prefix(text)
    if not complete:
        logger.warning(
            f"⚠️ Malformed scale factor {text!r}, using {value} as the factor"
        )
    if not math.isfinite(value):
        logger.warning(f"⚠️ Non-finite scale factor {text!r}, using 0.0")
        value = 0.0
    return value


def parse_enabled(text: Optional[str]) -> bool:
    """Only the text "true" (any case) enables the filter"""
    return text is not None and text.strip().lower() == "true"


@dataclass(frozen=True)
class FilterSettings:
    """Immutable configuration snapshot read once per ingest call"""

    enabled: bool
    factor: float


class ConfigCategory:
    """Named set of configuration items, each with a default and a value"""

    def __init__(self, name: str, items: Optional[Mapping[str, Mapping[str, Any]]] = None):
        self.name = name
        self._items: Dict[str, Dict[str, str]] = {}
        for key, item in (items or {}).items():
            self._items[key] = {k: str(v) for k, v in item.items()}

    @classmethod
    def default(cls, name: str = FILTER_NAME) -> "ConfigCategory":
        return cls(name, DEFAULT_CONFIG)

    @classmethod
    def from_json(cls, name: str, text: str) -> "ConfigCategory":
        """Build a category from its JSON representation"""
        try:
            items = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid configuration for {name}: {e}") from e
        if not isinstance(items, dict):
            raise ValueError(f"Configuration for {name} must be a JSON object")
        return cls(name, items)

    def item_exists(self, key: str) -> bool:
        return key in self._items

    def get_value(self, key: str) -> str:
        """Return the item's value, falling back to its default"""
        if key not in self._items:
            raise KeyError(f"Configuration item '{key}' does not exist in {self.name}")
        item = self._items[key]
        return item.get("value", item.get("default", ""))

    def set_value(self, key: str, value: Any) -> None:
        if isinstance(value, bool):
            value = "true" if value else "false"
        self._items.setdefault(key, {})["value"] = str(value)

    def merged_with(self, overrides: Mapping[str, Any]) -> "ConfigCategory":
        """Return a copy with the given item values applied"""
        merged = ConfigCategory(self.name, self._items)
        for key, value in overrides.items():
            if value is not None:
                merged.set_value(key, value)
        return merged

    def settings(self) -> FilterSettings:
        """Take a typed snapshot of the enable and factor items"""
        enabled = parse_enabled(
            self.get_value("enable") if self.item_exists("enable") else None
        )
        factor = parse_factor(
            self.get_value("factor") if self.item_exists("factor") else None
        )
        return FilterSettings(enabled=enabled, factor=factor)

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        return {key: dict(item) for key, item in self._items.items()}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    def __repr__(self) -> str:
        return f"ConfigCategory(name={self.name!r}, items={self._items!r})"
