"""Console + rotating-file logging for the Address Verifier service."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"

# These log full request URLs, and provider URLs carry the API key.
_URL_LOGGING_LIBRARIES = ("httpx", "httpcore")


def setup_logger(
    name: str,
    log_dir: Path,
    log_filename: str,
    level: int = logging.INFO,
    max_bytes: int = 5_000_000,
    backup_count: int = 3,
) -> logging.Logger:
    """Attach console and rotating-file output to the service logger.

    ``main`` calls this once for ``address_verifier``; the places client,
    verifier, rate limiter and API router log through its children and
    reach both handlers.  Provider quota and denial errors therefore land
    in ``address_verifier.log`` under *log_dir*.  The HTTP client
    libraries are held at WARNING; their request logs include the full
    provider URL with its ``key`` parameter.  Repeat calls reuse the
    existing handlers.
    """
    log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        formatter = logging.Formatter(LOG_FORMAT)
        handlers = (
            logging.StreamHandler(),
            RotatingFileHandler(
                log_dir / log_filename,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            ),
        )
        for handler in handlers:
            handler.setFormatter(formatter)
            logger.addHandler(handler)

    for library in _URL_LOGGING_LIBRARIES:
        logging.getLogger(library).setLevel(logging.WARNING)

    return logger
