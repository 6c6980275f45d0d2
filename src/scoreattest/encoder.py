"""scoreattest.encoder — ABI payload for the score attestation schema.

The payload layout is fixed by the on-chain schema and read back by
downstream resolvers, so it must match byte for byte:

    bool     passing_score
    uint8    score_decimals
    uint128  scorer_id
    uint32   score            (scaled)
    uint32   threshold        (scaled)
    (string provider, uint256 score)[] stamps

Only stamps that carry weight are attested: a stamp whose score is zero or
which was deduplicated against another address is left out. Stamps keep the
order in which the scoring service listed them.
"""

from __future__ import annotations

from eth_abi import encode as abi_encode
from eth_abi.exceptions import EncodingError

from .errors import EncodingFailed, MalformedDecimal
from .fixed_point import SCORE_DECIMALS, is_positive, to_scaled
from .models import ScoreRecord

SCORE_SCHEMA_TYPES = ("bool", "uint8", "uint128", "uint32", "uint32", "(string,uint256)[]")


def attestable_stamps(record: ScoreRecord, scale_digits: int = SCORE_DECIMALS) -> list[tuple[str, int]]:
    """(provider, scaled score) pairs for stamps that go into the payload.

    A deduplicated stamp is skipped before its score is parsed. Any other
    stamp with a malformed score raises MalformedDecimal.
    """
    stamps = []
    for provider, stamp in record.stamps.items():
        if stamp.deduplicated or not is_positive(stamp.score):
            continue
        stamps.append((provider, to_scaled(stamp.score, scale_digits)))
    return stamps


def encode(record: ScoreRecord, scorer_id: int | str, scale_digits: int = SCORE_DECIMALS) -> bytes:
    """Encode ``record`` into the score schema payload.

    Raises:
        EncodingFailed: a score in the record is not a valid decimal, or a
            scaled value does not fit its ABI slot.
    """
    try:
        scorer = int(scorer_id)
    except (TypeError, ValueError) as e:
        raise EncodingFailed(f"invalid scorer id {scorer_id!r}") from e

    try:
        values = [
            record.passing_score,
            scale_digits,
            scorer,
            to_scaled(record.score, scale_digits),
            to_scaled(record.threshold, scale_digits),
            attestable_stamps(record, scale_digits),
        ]
    except MalformedDecimal as e:
        raise EncodingFailed(e.reason) from e

    try:
        return abi_encode(list(SCORE_SCHEMA_TYPES), values)
    except EncodingError as e:
        raise EncodingFailed(e) from e
