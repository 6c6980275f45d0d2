#!/usr/bin/env python3
"""
scoreattest.pipeline — Per-address fetch → encode → submit loop.

Each address ends in exactly one result:

    Success(score, tx_hash)   attestation included on-chain
    ZeroScore(reason)         service reported an error, nothing submitted
    Failure(error, score)     fetch, encode or submit failed

A failing address never stops the run. Addresses are handled one at a
time, in input order, with a fixed pause between consecutive addresses to
stay under the scoring service's rate limit. Batches only group progress
logging; they add no concurrency.

Usage:
    config = AttestConfig.from_env()
    with PipelineOrchestrator.from_config(config) as pipeline:
        outcomes = pipeline.run(addresses)
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence, Union

from .encoder import encode
from .errors import AttestError
from .fixed_point import SCORE_DECIMALS
from .log import address_var
from .models import AttestationOutcome
from .score_client import ScoreClient
from .submitter import AttestationSubmitter

logger = logging.getLogger(__name__)


# ─── Results ───────────────────────────────────────────────────────

@dataclass(frozen=True)
class Success:
    score: str
    tx_hash: str


@dataclass(frozen=True)
class ZeroScore:
    reason: str


@dataclass(frozen=True)
class Failure:
    error: str
    score: str = "0"
    exc: Optional[BaseException] = field(default=None, compare=False, repr=False)


AddressResult = Union[Success, ZeroScore, Failure]


def to_outcome(address: str, result: AddressResult) -> AttestationOutcome:
    """Report row for one address."""
    if isinstance(result, Success):
        return AttestationOutcome(address=address, score=result.score, tx_hash=result.tx_hash)
    if isinstance(result, ZeroScore):
        return AttestationOutcome(address=address, score="0", error=result.reason, zero_score=True)
    return AttestationOutcome(address=address, score=result.score, error=result.error)


# ─── Orchestrator ──────────────────────────────────────────────────

class PipelineOrchestrator:
    """Drives every address through the pipeline and collects outcomes."""

    def __init__(
        self,
        score_client: ScoreClient,
        submitter: AttestationSubmitter,
        *,
        scorer_id: int,
        schema_id: str,
        scale_digits: int = SCORE_DECIMALS,
        batch_size: int = 5,
        request_delay: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {batch_size}")
        self.score_client = score_client
        self.submitter = submitter
        self.scorer_id = scorer_id
        self.schema_id = schema_id
        self.scale_digits = scale_digits
        self.batch_size = batch_size
        self.request_delay = request_delay
        self.sleep = sleep

    @classmethod
    def from_config(cls, config, **kwargs) -> "PipelineOrchestrator":
        client = ScoreClient(config.scorer_endpoint, config.scorer_api_key)
        submitter = AttestationSubmitter.from_config(config)
        return cls(
            client,
            submitter,
            scorer_id=config.scorer_id,
            schema_id=config.schema_id,
            batch_size=config.batch_size,
            request_delay=config.request_delay,
            **kwargs,
        )

    def close(self) -> None:
        self.score_client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def process_address(self, address: str, scorer_id: Optional[int] = None) -> AddressResult:
        """Run one address to its terminal state. Never raises."""
        scorer_id = self.scorer_id if scorer_id is None else scorer_id
        token = address_var.set(address)
        score = "0"
        try:
            logger.info("Processing %s...", address)
            record = self.score_client.fetch_score(address, scorer_id)
            if record.is_zero_score:
                logger.warning("⚠ API error for %s: %s", address, record.error)
                return ZeroScore(record.error)

            score = record.score
            payload = encode(record, scorer_id, self.scale_digits)
            tx_hash = self.submitter.submit(
                address, payload, record.expiration_timestamp, self.schema_id,
            )
            logger.info("✓ Attestation created for %s: %s (tx: %s)", address, score, tx_hash)
            return Success(score, tx_hash)
        except AttestError as e:
            logger.error("✗ Failed to attest %s: %s", address, e.reason)
            return Failure(e.reason or type(e).__name__, score=score, exc=e)
        except Exception as e:
            logger.exception("Unexpected error processing %s", address)
            return Failure(str(e) or type(e).__name__, score=score, exc=e)
        finally:
            address_var.reset(token)

    def run(self, addresses: Sequence[str], scorer_id: Optional[int] = None) -> list[AttestationOutcome]:
        """Process ``addresses`` in order; one outcome per address."""
        outcomes: list[AttestationOutcome] = []
        total_batches = math.ceil(len(addresses) / self.batch_size)

        for batch_no, start in enumerate(range(0, len(addresses), self.batch_size), 1):
            for address in addresses[start:start + self.batch_size]:
                if outcomes and self.request_delay > 0:
                    self.sleep(self.request_delay)
                result = self.process_address(address, scorer_id)
                outcomes.append(to_outcome(address, result))
            logger.info("Processed batch %d/%d", batch_no, total_batches)

        return outcomes
