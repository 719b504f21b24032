"""
Scale Filter Plugin

Lifecycle entry points called by the host pipeline:

    handle = plugin_init(config, out_handle, output)
    plugin_ingest(handle, reading_set)      # zero or more times
    plugin_reconfigure(handle, new_config)  # optional
    plugin_shutdown(handle)

The filter never builds a new batch: the incoming ReadingSet is scaled in
place and the same object is handed to the output stream.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Union

from ..load.sinks import CallbackSink, ReadingSink
from ..readings.reading import ReadingSet
from ..transformation.scale import apply_scale
from .config import DEFAULT_CONFIG, FILTER_NAME, ConfigCategory, FilterSettings
import logging

logger = logging.getLogger(__name__)

PLUGIN_VERSION = "1.0.0"
INTERFACE_VERSION = "1.0.0"
PLUGIN_TYPE_FILTER = "filter"

OutputStream = Callable[[Any, ReadingSet], None]


class FilterShutdownError(RuntimeError):
    """Raised when a filter handle is used after plugin_shutdown"""


@dataclass(frozen=True)
class PluginInformation:
    """Static description of the plugin reported to the host"""

    name: str
    version: str
    flags: int
    type: str
    interface: str
    config: Dict[str, Dict[str, str]] = field(default_factory=dict)


class ScaleFilter:
    """Filter handle binding a configuration snapshot and a downstream sink"""

    def __init__(self, name: str, config: ConfigCategory, sink: ReadingSink):
        self.name = name
        self.sink = sink
        self.shutdown_called = False
        self._config = config
        self._settings = config.settings()
        logger.info(
            f"Filter '{name}' initialised: enabled={self._settings.enabled}, "
            f"factor={self._settings.factor}"
        )

    def get_config(self) -> ConfigCategory:
        return self._config

    @property
    def settings(self) -> FilterSettings:
        return self._settings

    def is_enabled(self) -> bool:
        return self._settings.enabled

    def reconfigure(self, config: ConfigCategory) -> None:
        """Swap in a new configuration; later ingest calls see all of it"""
        self._check_active()
        settings = config.settings()
        self._config, self._settings = config, settings
        logger.info(
            f"Filter '{self.name}' reconfigured: enabled={settings.enabled}, "
            f"factor={settings.factor}"
        )

    def ingest(self, reading_set: ReadingSet) -> ReadingSet:
        """Scale the batch in place and deliver it downstream once"""
        self._check_active()
        settings = self._settings

        apply_scale(reading_set, settings.factor, settings.enabled)
        logger.debug(
            f"Filter '{self.name}' processed {len(reading_set)} readings "
            f"(enabled={settings.enabled}, factor={settings.factor})"
        )

        self.sink.deliver(reading_set)
        return reading_set

    def shutdown(self) -> None:
        if self.shutdown_called:
            return
        self.shutdown_called = True
        logger.info(f"Filter '{self.name}' shut down")

    def _check_active(self) -> None:
        if self.shutdown_called:
            raise FilterShutdownError(f"Filter '{self.name}' has been shut down")


_INFO = PluginInformation(
    name=FILTER_NAME,
    version=PLUGIN_VERSION,
    flags=0,
    type=PLUGIN_TYPE_FILTER,
    interface=INTERFACE_VERSION,
    config=DEFAULT_CONFIG,
)


def plugin_info() -> PluginInformation:
    """Return the information about this plugin"""
    return _INFO


def plugin_init(
    config: Optional[ConfigCategory],
    out_handle: Any = None,
    output: Optional[Union[OutputStream, ReadingSink]] = None,
) -> ScaleFilter:
    """
    Initialise the plugin and bind its output stream

    Args:
        config: Configuration category for the filter (defaults if None)
        out_handle: Context passed back to a callable output stream
        output: A callable taking (out_handle, readings), or a ReadingSink

    Returns:
        ScaleFilter: Handle used in all subsequent calls
    """
    if output is None:
        raise ValueError("An output stream is required to initialise the filter")

    # A callable is always an output stream, even if it also has deliver()
    if callable(output):
        sink = CallbackSink(output, out_handle)
    elif isinstance(output, ReadingSink):
        sink = output
    else:
        raise TypeError(
            f"Output must be callable or have a deliver() method, got {type(output)}"
        )

    return ScaleFilter(FILTER_NAME, config or ConfigCategory.default(), sink)


def plugin_ingest(handle: ScaleFilter, reading_set: ReadingSet) -> None:
    """Ingest a set of readings into the plugin for processing"""
    handle.ingest(reading_set)


def plugin_reconfigure(
    handle: ScaleFilter, new_config: Union[str, ConfigCategory]
) -> None:
    """Apply a new configuration, given as a category or its JSON text"""
    if isinstance(new_config, str):
        new_config = ConfigCategory.from_json(handle.name, new_config)
    handle.reconfigure(new_config)


def plugin_shutdown(handle: ScaleFilter) -> None:
    """Call the shutdown method in the plugin"""
    handle.shutdown()
