"""Logging initialisation for command-line entry points.

Library modules only create loggers via ``logging.getLogger(__name__)``;
handlers are configured here, once, by whichever script runs the engine.
"""

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: int | str = logging.INFO) -> None:
    """Configure root logging for a command-line run."""
    if isinstance(level, str):
        level = getattr(logging, level.upper())
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # Pyomo is chatty at INFO about solver plugins
    logging.getLogger("pyomo").setLevel(max(level, logging.WARNING))
