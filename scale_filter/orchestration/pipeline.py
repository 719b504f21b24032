"""
Pipeline Orchestrator

Loads a batch of readings, passes it through the scale filter and lets the
filter deliver the result to a sink.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..load.local_storage import LocalFileSink
from ..load.sinks import CollectingSink, ReadingSink
from ..plugin.config import ConfigCategory
from ..plugin.filter import plugin_init, plugin_ingest, plugin_shutdown
from ..readings.loader import load_reading_set
from ..readings.reading import ReadingSet
from ..transformation.summary import summarize_batch
import logging

logger = logging.getLogger(__name__)


class FilterPipeline:
    """Runs reading batches through one scale filter instance"""

    def __init__(
        self,
        config: Optional[ConfigCategory] = None,
        sink: Optional[ReadingSink] = None,
        output_dir: str = "output",
        file_format: str = "parquet",
        dry_run: bool = False,
    ):
        """
        Initialize the pipeline orchestrator

        Args:
            config: Filter configuration (plugin defaults if not provided)
            sink: Downstream sink (local files unless dry run)
            output_dir: Directory for the local file sink
            file_format: "parquet" or "json" for the local file sink
            dry_run: If true, collect batches in memory instead of writing
        """
        self.dry_run = dry_run

        if sink is not None:
            self.sink = sink
        elif dry_run:
            self.sink = CollectingSink()
            logger.info("🔍 DRY RUN MODE: output will not be written")
        else:
            self.sink = LocalFileSink(output_dir=output_dir, file_format=file_format)

        self.filter = plugin_init(config, output=self.sink)

    def run_batch(self, reading_set: ReadingSet) -> Dict[str, Any]:
        """
        Filter one batch and deliver it downstream

        Returns:
            dict: Batch summary plus the settings used
        """
        settings = self.filter.settings
        plugin_ingest(self.filter, reading_set)

        summary = summarize_batch(reading_set)
        summary["enabled"] = settings.enabled
        summary["factor"] = settings.factor
        logger.info(
            f"✅ Filtered {summary['readings']} readings / "
            f"{summary['datapoints']} datapoints "
            f"(enabled={settings.enabled}, factor={settings.factor})"
        )
        return summary

    def run_file(self, input_path: Union[str, Path]) -> Dict[str, Any]:
        """Load a JSON batch from disk and filter it"""
        logger.info(f"🚀 Running scale filter on {input_path}")

        try:
            reading_set = load_reading_set(input_path)
            summary = self.run_batch(reading_set)
        except Exception as e:
            logger.error(f"❌ Pipeline failed: {e}")
            raise

        if isinstance(self.sink, LocalFileSink) and self.sink.written:
            summary["output"] = self.sink.written[-1]
        return summary

    def close(self) -> None:
        plugin_shutdown(self.filter)

    def __enter__(self) -> "FilterPipeline":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def run_filter_pipeline(
    input_path: Union[str, Path],
    factor: Optional[str] = None,
    enabled: Optional[bool] = None,
    output_dir: str = "output",
    file_format: str = "parquet",
    dry_run: bool = False,
) -> Dict[str, Any]:
    """
    Run the scale filter over one input file

    Args:
        input_path: JSON readings file
        factor: Factor text, as stored in the configuration category
        enabled: Enable switch (category default if None)
        output_dir: Where to write filtered readings
        file_format: "parquet" or "json"
        dry_run: If True, don't write output

    Returns:
        dict: Results and statistics
    """
    config = ConfigCategory.default().merged_with(
        {"factor": factor, "enable": enabled}
    )

    with FilterPipeline(
        config=config,
        output_dir=output_dir,
        file_format=file_format,
        dry_run=dry_run,
    ) as pipeline:
        return pipeline.run_file(input_path)
