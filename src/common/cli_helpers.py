"""Common CLI helper utilities."""

from __future__ import annotations

import logging

# Libraries that log every request or extraction attempt at INFO/DEBUG.
NOISY_LOGGERS = ("urllib3", "botocore", "boto3", "trafilatura", "readability")


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for CLI tools; third-party chatter is kept at WARNING."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
