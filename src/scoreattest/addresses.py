"""Address list loading. Invalid lines never reach the pipeline."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from eth_utils import is_checksum_address, is_checksum_formatted_address, is_hex_address

logger = logging.getLogger(__name__)


def is_address(value: str) -> bool:
    """Hex address check; mixed-case input must carry a valid checksum."""
    if not isinstance(value, str) or not is_hex_address(value):
        return False
    return not is_checksum_formatted_address(value) or is_checksum_address(value)


def canonical(address: str) -> str:
    """Lowercase 0x-prefixed form."""
    return "0x" + address[2:].lower() if address[:2].lower() == "0x" else "0x" + address.lower()


def parse_addresses(lines: Iterable[str]) -> list[str]:
    """Valid addresses in input order, lowercased, duplicates kept."""
    addresses = []
    for lineno, line in enumerate(lines, 1):
        value = line.strip()
        if not value:
            continue
        if not is_address(value):
            logger.debug("Skipping line %d: not an address: %r", lineno, value)
            continue
        addresses.append(canonical(value))
    return addresses


def read_addresses(path: str | Path) -> list[str]:
    with open(path, encoding="utf-8") as f:
        return parse_addresses(f)
