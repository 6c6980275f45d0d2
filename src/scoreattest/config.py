"""Startup configuration, read once from the environment.

Required:
    RPC_URL                    — JSON-RPC endpoint of the ledger
    PRIVATE_KEY                — key of the attesting account
    SCORER_API_KEY             — credential for the scoring service
    SCORER_ENDPOINT            — scoring service base URL
    COMMUNITY_ID               — scorer/community id to query and attest under
    ATTESTER_CONTRACT_ADDRESS  — attester contract
    SCHEMA_UID                 — bytes32 schema id of the score schema

Optional:
    BATCH_SIZE     — addresses per progress batch (default 5)
    REQUEST_DELAY  — seconds to pause between addresses (default 1.0)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Mapping, Optional

from .errors import ConfigError

REQUIRED_VARS = {
    "rpc_url": "RPC_URL",
    "private_key": "PRIVATE_KEY",
    "scorer_api_key": "SCORER_API_KEY",
    "scorer_endpoint": "SCORER_ENDPOINT",
    "scorer_id": "COMMUNITY_ID",
    "attester_address": "ATTESTER_CONTRACT_ADDRESS",
    "schema_id": "SCHEMA_UID",
}

DEFAULT_BATCH_SIZE = 5
DEFAULT_REQUEST_DELAY = 1.0


@dataclass(frozen=True)
class AttestConfig:
    rpc_url: str
    private_key: str = field(repr=False)
    scorer_api_key: str = field(repr=False)
    scorer_endpoint: str
    scorer_id: int
    attester_address: str
    schema_id: str
    batch_size: int = DEFAULT_BATCH_SIZE
    request_delay: float = DEFAULT_REQUEST_DELAY

    def __post_init__(self):
        if self.batch_size < 1:
            raise ConfigError(f"batch size must be at least 1, got {self.batch_size}")
        if self.request_delay < 0:
            raise ConfigError(f"request delay must not be negative, got {self.request_delay}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AttestConfig":
        env = os.environ if environ is None else environ

        missing = [var for var in REQUIRED_VARS.values() if not env.get(var, "").strip()]
        if missing:
            raise ConfigError(
                "Missing required environment variables: " + ", ".join(missing),
                missing=missing,
            )
        values = {name: env[var].strip() for name, var in REQUIRED_VARS.items()}

        try:
            values["scorer_id"] = int(values["scorer_id"])
        except ValueError:
            raise ConfigError(f"COMMUNITY_ID must be an integer, got {values['scorer_id']!r}")
        try:
            batch_size = int(env.get("BATCH_SIZE") or DEFAULT_BATCH_SIZE)
            request_delay = float(env.get("REQUEST_DELAY") or DEFAULT_REQUEST_DELAY)
        except ValueError as e:
            raise ConfigError(f"Invalid BATCH_SIZE/REQUEST_DELAY: {e}")

        return cls(batch_size=batch_size, request_delay=request_delay, **values)

    def with_overrides(self, **changes) -> "AttestConfig":
        """Copy with the given fields replaced; ``None`` values are ignored."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
