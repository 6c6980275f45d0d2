"""scoreattest — Attest scoring-service reputation scores on-chain."""

from scoreattest.fixed_point import SCORE_DECIMALS, to_scaled, from_scaled, is_positive
from scoreattest.errors import (
    AttestError, MalformedDecimal, ScoreFetchFailed,
    EncodingFailed, SubmissionFailed, ConfigError,
)
from scoreattest.models import ScoreRecord, StampContribution, AttestationOutcome
from scoreattest.score_client import ScoreClient
from scoreattest.encoder import encode, attestable_stamps, SCORE_SCHEMA_TYPES
from scoreattest.submitter import AttestationSubmitter, AttestationRequest, ATTESTER_ABI
from scoreattest.pipeline import (
    PipelineOrchestrator, Success, ZeroScore, Failure, AddressResult, to_outcome,
)
from scoreattest.config import AttestConfig
from scoreattest.report import RunSummary, summarize, write_report

__all__ = [
    "SCORE_DECIMALS",
    "to_scaled",
    "from_scaled",
    "is_positive",
    "AttestError",
    "MalformedDecimal",
    "ScoreFetchFailed",
    "EncodingFailed",
    "SubmissionFailed",
    "ConfigError",
    "ScoreRecord",
    "StampContribution",
    "AttestationOutcome",
    "ScoreClient",
    "encode",
    "attestable_stamps",
    "SCORE_SCHEMA_TYPES",
    "AttestationSubmitter",
    "AttestationRequest",
    "ATTESTER_ABI",
    "PipelineOrchestrator",
    "Success",
    "ZeroScore",
    "Failure",
    "AddressResult",
    "to_outcome",
    "AttestConfig",
    "RunSummary",
    "summarize",
    "write_report",
]
