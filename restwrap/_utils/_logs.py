import logging
import sys
from typing import Optional

from .constants import LOGGER_NAME

logger: logging.Logger = logging.getLogger(LOGGER_NAME)


def setup_logging(should_debug: Optional[bool] = None) -> None:
    logging.basicConfig(
        format="[%(asctime)s - %(name)s:%(lineno)d - %(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger.setLevel(logging.DEBUG if should_debug else logging.INFO)
    if not any(
        isinstance(handler, logging.StreamHandler) and handler.stream is sys.stderr
        for handler in logger.handlers
    ):
        logger.addHandler(logging.StreamHandler(sys.stderr))
