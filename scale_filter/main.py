"""
Main Entry Point

Runs the scale filter over a JSON batch of readings from the command line.
"""

import argparse
import logging

from .coreutils.env import env_flag, env_get
from .coreutils.logging import log_function_call, setup_logging
from .orchestration.pipeline import run_filter_pipeline


def run_pipeline(
    input_path: str,
    factor: str | None = None,
    enabled: bool | None = None,
    output_dir: str | None = None,
    file_format: str = "parquet",
    dry_run: bool = False,
) -> dict:
    """
    Run the filter, filling unset options from the environment

    Returns:
        dict: Results and statistics
    """
    if factor is None:
        factor = env_get("SCALE_FILTER_FACTOR")
    if enabled is None:
        enabled = env_flag("SCALE_FILTER_ENABLE")
    if output_dir is None:
        output_dir = env_get("SCALE_FILTER_OUTPUT_DIR", "output")

    log_function_call(
        "run_filter_pipeline",
        input_path=input_path,
        factor=factor,
        enabled=enabled,
        output_dir=output_dir,
        file_format=file_format,
        dry_run=dry_run,
    )

    return run_filter_pipeline(
        input_path,
        factor=factor,
        enabled=enabled,
        output_dir=output_dir,
        file_format=file_format,
        dry_run=dry_run,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Scale filter for sensor readings")
    parser.add_argument("command", choices=["run"], help="Command to run")
    parser.add_argument("--input", required=True, help="JSON file of readings")
    parser.add_argument("--factor", help="Scale factor (default 100.0)")
    parser.add_argument(
        "--enable",
        dest="enabled",
        action="store_true",
        default=None,
        help="Enable scaling",
    )
    parser.add_argument(
        "--disable",
        dest="enabled",
        action="store_false",
        help="Pass readings through unchanged",
    )
    parser.add_argument("--output-dir", help="Directory for filtered readings")
    parser.add_argument(
        "--format", choices=["parquet", "json"], default="parquet", dest="file_format"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Run the filter without writing output",
    )
    parser.set_defaults(enabled=None)
    return parser


def main(argv=None):
    """Main entry point"""
    args = build_parser().parse_args(argv)

    level = getattr(logging, (env_get("LOG_LEVEL", "INFO") or "INFO").upper(), logging.INFO)
    setup_logging(level=level, log_dir=env_get("LOG_DIR", "logs"))

    if args.command == "run":
        results = run_pipeline(
            args.input,
            factor=args.factor,
            enabled=args.enabled,
            output_dir=args.output_dir,
            file_format=args.file_format,
            dry_run=args.dry_run,
        )
        print(f"✅ Pipeline completed: {results}")


if __name__ == "__main__":
    main()
