from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterator, List, Optional

from .datapoint import Datapoint


@dataclass
class Reading:
    """A named, timestamped group of datapoints for one asset"""

    asset_code: str
    datapoints: List[Datapoint] = field(default_factory=list)
    user_ts: Optional[datetime] = None

    def __post_init__(self):
        if self.user_ts is None:
            self.user_ts = datetime.now(timezone.utc)

    def get_reading_data(self) -> List[Datapoint]:
        """Return the datapoint list itself, not a copy"""
        return self.datapoints

    def datapoint_names(self) -> List[str]:
        return [dp.name for dp in self.datapoints]


@dataclass
class ReadingSet:
    """Ordered batch of readings passed between pipeline stages"""

    readings: List[Reading] = field(default_factory=list)

    def get_all_readings(self) -> List[Reading]:
        """Return the reading list itself, not a copy"""
        return self.readings

    def __len__(self) -> int:
        return len(self.readings)

    def __iter__(self) -> Iterator[Reading]:
        return iter(self.readings)
