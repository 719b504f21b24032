import logging
import os
from datetime import datetime


def setup_logging(level=logging.INFO, log_dir: str | None = "logs"):
    """Setup basic logging configuration"""
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handlers.insert(
            0,
            logging.FileHandler(
                os.path.join(
                    log_dir, f"scale_filter_{datetime.now().strftime('%Y-%m-%d')}.log"
                )
            ),
        )

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        handlers=handlers,
    )
    return logging.getLogger(__name__)


def log_function_call(func_name: str, **kwargs):
    """Log function calls with parameters"""
    logger = logging.getLogger(__name__)
    logger.info(f"Calling {func_name} with params: {kwargs}")
