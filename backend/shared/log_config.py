"""
Process-wide logging setup.

Modules log through ``logging.getLogger(__name__)``; this only configures
the root handler once at application start-up.
"""

import logging

_NOISY_LOGGERS = ("httpx", "httpcore", "hpack")


def configure_logging(level: str = "INFO", debug: bool = False) -> None:
    """Configure root logging. Safe to call more than once."""
    logging.basicConfig(
        level=logging.DEBUG if debug else getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
