"""
Reading Sinks

A sink is whatever the host wires up downstream of a filter. The filter only
ever calls deliver(); it never implements a sink.
"""

from typing import Any, Callable, List, Protocol, runtime_checkable

from ..readings.reading import ReadingSet
import logging

logger = logging.getLogger(__name__)


@runtime_checkable
class ReadingSink(Protocol):
    def deliver(self, reading_set: ReadingSet) -> None: ...


class CollectingSink:
    """Keeps every delivered batch in memory, in delivery order"""

    def __init__(self):
        self.batches: List[ReadingSet] = []

    def deliver(self, reading_set: ReadingSet) -> None:
        self.batches.append(reading_set)

    @property
    def last(self) -> ReadingSet | None:
        return self.batches[-1] if self.batches else None


class CallbackSink:
    """Adapts an output stream function called as output(context, readings)"""

    def __init__(self, output: Callable[[Any, ReadingSet], None], context: Any = None):
        if not callable(output):
            raise TypeError(f"Output stream must be callable, got {type(output)}")
        self.output = output
        self.context = context

    def deliver(self, reading_set: ReadingSet) -> None:
        self.output(self.context, reading_set)
