# src/link_checker/utils/configure_logging.py
import logging
import sys
from typing import Dict, Union

from tqdm import tqdm

# Client libraries that log every connection at DEBUG/INFO.
NOISY_LOGGERS: Dict[str, int] = {
    "aiohttp": logging.WARNING,
    "asyncio": logging.WARNING,
}

SHORT_FORMAT = "%(levelname)s - %(message)s"
DEBUG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s:%(lineno)d] - %(message)s"


class TqdmStreamHandler(logging.StreamHandler):
    """
    Stream handler that writes through `tqdm.write()`, so a running
    `--progress` bar is redrawn below each log line instead of being torn.
    """
    def emit(self, record):
        try:
            tqdm.write(self.format(record), file=self.stream)
        except Exception:
            self.handleError(record)


def parse_level(level: Union[str, int]) -> int:
    """'info' -> logging.INFO. Unknown names raise ValueError."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    return value


def configure_logger(level: Union[str, int] = "WARNING", quiet_loggers: Dict[str, int] = NOISY_LOGGERS) -> logging.Handler:
    """
    Installs a single tqdm-aware stderr handler on the root logger.

    Source locations are only included at DEBUG. Loggers in `quiet_loggers`
    never drop below their listed level.
    """
    level = parse_level(level)

    handler = TqdmStreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(DEBUG_FORMAT if level <= logging.DEBUG else SHORT_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for name, quiet_level in quiet_loggers.items():
        logging.getLogger(name).setLevel(max(quiet_level, level))
    return handler
