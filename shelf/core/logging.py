from __future__ import annotations

import json
import logging
from typing import IO, Any

from shelf.core.config import RuntimeConfig
from shelf.core.paths import APP_NAME, LOG_FILENAME

_HANDLER_NAME = "shelf-output"

_FORMATS = {
    "json": "%(message)s",
    "text": "%(asctime)s %(levelname)s %(name)s %(message)s",
}


def get_logger(name: str = APP_NAME) -> logging.Logger:
    return logging.getLogger(name)


def configure_logging(config: RuntimeConfig, *, stream: IO[str] | None = None) -> logging.Handler:
    """Attach the output handler for the ``shelf`` logger tree.

    Records go to ``stream`` when one is given, otherwise to
    ``<log_dir>/shelf.log``. Without a log directory they are dropped, since
    the terminal belongs to the UI. Calling this again replaces the handler.
    """
    if stream is not None:
        handler: logging.Handler = logging.StreamHandler(stream)
    elif config.log_dir is not None:
        config.log_dir.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(config.log_dir / LOG_FILENAME, encoding="utf-8")
    else:
        handler = logging.NullHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(_FORMATS.get(config.log_format, _FORMATS["json"])))

    logger = get_logger()
    for existing in list(logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logger.removeHandler(existing)
            existing.close()
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, config.log_level.strip().upper(), logging.INFO))
    return handler


def log_event(logger: logging.Logger, event: str, **fields: Any) -> None:
    payload = {"event": event, **fields}
    logger.info(json.dumps(payload, sort_keys=True, default=str))
