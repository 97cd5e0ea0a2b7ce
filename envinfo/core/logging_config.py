"""
Logging setup for envinfo command line entry points.

Library modules only create loggers; handlers are installed here, once, by
the CLI.
"""
import logging

DEFAULT_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def configure_logging(config: dict) -> None:
    """Configure root logging from the ``logging`` section of the config."""
    logging_config = config.get("logging") or {}
    level_name = str(logging_config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=level,
        format=logging_config.get("format") or DEFAULT_FORMAT,
        handlers=[logging.StreamHandler()],
        force=True,
    )
