"""Tests for scoreattest.models."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from scoreattest.models import AttestationOutcome, ScoreRecord

from conftest import ADDR_A, score_payload


class TestScoreRecord:
    def test_parses_service_payload(self):
        record = ScoreRecord.model_validate(score_payload())
        assert record.score == "5.6789"
        assert record.threshold == "20.0000"
        assert record.passing_score is True
        assert record.expiration_timestamp == datetime(2025, 1, 1, 0, 0, 0, 500000, tzinfo=timezone.utc)
        assert record.stamps["github"].score == "5.6789"
        assert record.stamps["github"].deduplicated is False
        assert not record.is_zero_score

    def test_stamp_order_follows_payload(self):
        stamps = {
            "twitter": {"score": "1.0", "dedup": False},
            "ens": {"score": "2.0", "dedup": True},
            "github": {"score": "3.0", "dedup": False},
        }
        record = ScoreRecord.model_validate(score_payload(stamps=stamps))
        assert list(record.stamps) == ["twitter", "ens", "github"]

    def test_unknown_fields_dropped(self):
        record = ScoreRecord.model_validate(score_payload(points_data={"x": 1}, rank=3))
        assert not hasattr(record, "points_data")
        assert "rank" not in record.model_dump()

    def test_stamp_expiration_optional(self):
        stamps = {"github": {"score": "1", "dedup": False, "expiration_date": "2025-02-01T00:00:00Z"}}
        record = ScoreRecord.model_validate(score_payload(stamps=stamps))
        assert record.stamps["github"].expiration_date.year == 2025

    def test_missing_expiration_rejected(self):
        payload = score_payload()
        payload["expiration_timestamp"] = None
        with pytest.raises(ValidationError):
            ScoreRecord.model_validate(payload)

    def test_numeric_score_rejected(self):
        with pytest.raises(ValidationError):
            ScoreRecord.model_validate(score_payload(score=5.6789))

    def test_zero_record(self):
        record = ScoreRecord.zero(ADDR_A, "rate limited")
        assert record.is_zero_score
        assert record.score == "0"
        assert record.error == "rate limited"
        assert record.stamps == {}


class TestAttestationOutcome:
    def test_success_row(self):
        outcome = AttestationOutcome(address=ADDR_A, score="5.6789", tx_hash="0xTX1")
        assert outcome.succeeded
        assert outcome.to_row() == {
            "address": ADDR_A, "score": "5.6789", "txHash": "0xTX1", "error": "",
        }

    def test_failure_row(self):
        outcome = AttestationOutcome(address=ADDR_A, score="0", error="boom")
        assert not outcome.succeeded
        assert outcome.to_row()["txHash"] == ""
        assert outcome.to_row()["error"] == "boom"

    def test_neither_set_is_rejected(self):
        with pytest.raises(ValueError):
            AttestationOutcome(address=ADDR_A, score="1")

    def test_both_set_is_rejected(self):
        with pytest.raises(ValueError):
            AttestationOutcome(address=ADDR_A, score="1", tx_hash="0x1", error="boom")
