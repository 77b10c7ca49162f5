from .cancellation import CancellationToken
from .json_utils import extract_first_json_object, parse_json_loose
from .logger import setup_logger
from .retry import backoff_delay, default_should_retry, fetch_with_retry

__all__ = [
    "CancellationToken",
    "extract_first_json_object",
    "parse_json_loose",
    "setup_logger",
    "backoff_delay",
    "default_should_retry",
    "fetch_with_retry",
]
