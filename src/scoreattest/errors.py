"""scoreattest.errors — Exception taxonomy for the attestation pipeline.

Every per-address error derives from AttestError and carries a short
``reason`` string, which is what ends up in the report's error column.
ConfigError is the only one that aborts a run, and it is raised before any
address is processed.
"""

from __future__ import annotations

from typing import Iterable, Optional


class AttestError(Exception):
    """Base class for errors that are fatal to a single address."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class MalformedDecimal(AttestError):
    """Raised when a string does not follow the plain decimal grammar."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"malformed decimal: {value!r}")


class ScoreFetchFailed(AttestError):
    """Transport, auth or contract failure talking to the scoring service."""

    def __init__(self, address: str, cause: object):
        self.address = address
        self.cause = cause
        super().__init__(str(cause))


class EncodingFailed(AttestError):
    """Raised when a score record cannot be turned into a payload."""

    def __init__(self, cause: object):
        self.cause = cause
        super().__init__(f"encoding failed: {cause}")


class SubmissionFailed(AttestError):
    """Signing, broadcast or confirmation failure for one attestation."""

    def __init__(self, address: str, cause: object, tx_hash: Optional[str] = None):
        self.address = address
        self.cause = cause
        self.tx_hash = tx_hash
        super().__init__(str(cause))


class ConfigError(Exception):
    """Missing or invalid startup configuration."""

    def __init__(self, message: str, missing: Iterable[str] = ()):
        self.missing = list(missing)
        super().__init__(message)
