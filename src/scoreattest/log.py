"""scoreattest.log — Logging setup with the current address on every record."""

from __future__ import annotations

import logging
from contextvars import ContextVar

# Address being processed by the pipeline, "" between addresses
address_var: ContextVar[str] = ContextVar("address", default="")

TEXT_FORMAT = "%(asctime)s %(levelname)s %(message)s"


class AddressFilter(logging.Filter):
    def filter(self, record):
        record.address = address_var.get("")
        return True


def setup_logging(level: str = "INFO", json_format: bool = False) -> logging.Logger:
    """Configure the ``scoreattest`` logger, plain text or JSON lines."""
    logger = logging.getLogger("scoreattest")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = next((h for h in logger.handlers if getattr(h, "_scoreattest", False)), None)
    if handler is None:
        handler = logging.StreamHandler()
        handler._scoreattest = True
        handler.addFilter(AddressFilter())
        logger.addHandler(handler)

    # Later calls may switch between text and JSON
    if json_format:
        from pythonjsonlogger.json import JsonFormatter

        formatter = JsonFormatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s %(address)s",
            rename_fields={"asctime": "timestamp", "levelname": "level"},
        )
    else:
        formatter = logging.Formatter(TEXT_FORMAT)
    handler.setFormatter(formatter)

    return logger
