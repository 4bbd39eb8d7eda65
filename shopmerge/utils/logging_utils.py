"""
Logging helpers: colored console output and request-scoped loggers.
"""

import logging
import uuid
from typing import Any, MutableMapping, Optional, Tuple, Union

import colorlog

LOG_FORMAT = '%(log_color)s%(asctime)s - %(name)s - %(levelname)s - %(message)s'

LOG_COLORS = {
    'DEBUG': 'cyan',
    'INFO': 'green',
    'WARNING': 'yellow',
    'ERROR': 'red',
    'CRITICAL': 'red,bg_white',
}


def setup_logging(level: Union[str, int] = logging.INFO) -> logging.Logger:
    """
    Configure the root logger with a single colored stream handler.

    Args:
        level: Logging level name or number

    Returns:
        The root logger
    """
    root = logging.getLogger()
    root.setLevel(level)

    for handler in root.handlers:
        if isinstance(handler.formatter, colorlog.ColoredFormatter):
            return root

    handler = colorlog.StreamHandler()
    handler.setFormatter(colorlog.ColoredFormatter(LOG_FORMAT, log_colors=LOG_COLORS))
    root.addHandler(handler)
    return root


class RequestLogger(logging.LoggerAdapter):
    """Logger adapter that tags every message with a request id."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        return f"[{self.extra['request_id']}] {msg}", kwargs


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def get_request_logger(request_id: Optional[str] = None,
                       name: str = 'shopmerge.request') -> RequestLogger:
    """Create a logger bound to a single request."""
    return RequestLogger(logging.getLogger(name), {'request_id': request_id or new_request_id()})
