"""scoreattest.models — Data shapes crossing the pipeline boundaries.

ScoreRecord is the structural contract for the scoring service's v2
response. Anything the service sends beyond these fields is dropped at the
boundary so the encoder only ever sees a known shape.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class StampContribution(BaseModel):
    """One provider's contribution to the aggregate score."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    score: str
    deduplicated: bool = Field(False, alias="dedup")
    expiration_date: Optional[datetime] = None


class ScoreRecord(BaseModel):
    """Score for one address as returned by the scoring service."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    address: str = ""
    score: str
    threshold: str
    passing_score: bool
    last_score_timestamp: Optional[datetime] = None
    expiration_timestamp: Optional[datetime] = None
    error: Optional[str] = None
    # dict keeps the service's key order, which is the encoding order
    stamps: dict[str, StampContribution] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _expiration_required(self) -> "ScoreRecord":
        if not self.error and self.expiration_timestamp is None:
            raise ValueError("expiration_timestamp is required for a scored address")
        return self

    @property
    def is_zero_score(self) -> bool:
        return bool(self.error)

    @classmethod
    def zero(cls, address: str, error: str) -> "ScoreRecord":
        """Record for a service-reported logical error."""
        return cls(address=address, score="0", threshold="0",
                   passing_score=False, error=error)


@dataclass(frozen=True)
class AttestationOutcome:
    """Per-address line of the final report.

    Exactly one of ``tx_hash`` and ``error`` is set.
    """
    address: str
    score: str
    tx_hash: Optional[str] = None
    error: Optional[str] = None
    # service reported a logical error; no submission was attempted
    zero_score: bool = False

    def __post_init__(self):
        if bool(self.tx_hash) == bool(self.error):
            raise ValueError(
                f"outcome for {self.address} must carry exactly one of tx_hash/error"
            )

    @property
    def succeeded(self) -> bool:
        return self.tx_hash is not None

    def to_row(self) -> dict:
        return {
            "address": self.address,
            "score": self.score,
            "txHash": self.tx_hash or "",
            "error": self.error or "",
        }
