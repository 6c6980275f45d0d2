"""Shared fixtures: score payloads and in-memory stand-ins for the network."""

import logging

import pytest

from scoreattest.errors import ScoreFetchFailed, SubmissionFailed
from scoreattest.models import ScoreRecord

SCORER_URL = "https://scorer.test"
SCORER_ID = 335
SCHEMA_UID = "0x" + "ab" * 32

ADDR_A = "0x" + "a" * 39 + "1"
ADDR_B = "0x" + "b" * 39 + "2"
ADDR_C = "0x" + "c" * 39 + "3"

TEST_ENV = {
    "RPC_URL": "http://127.0.0.1:8545",
    "PRIVATE_KEY": "0x" + "11" * 32,
    "SCORER_API_KEY": "secret-key",
    "SCORER_ENDPOINT": SCORER_URL,
    "COMMUNITY_ID": str(SCORER_ID),
    "ATTESTER_CONTRACT_ADDRESS": "0x" + "de" * 20,
    "SCHEMA_UID": SCHEMA_UID,
}


def score_payload(address=ADDR_A, score="5.6789", threshold="20.0000",
                  passing=True, stamps=None, **extra):
    """A v2 score response body as the scoring service sends it."""
    payload = {
        "address": address,
        "score": score,
        "threshold": threshold,
        "passing_score": passing,
        "last_score_timestamp": "2024-10-01T12:00:00.000Z",
        "expiration_timestamp": "2025-01-01T00:00:00.500Z",
        "error": None,
        "stamps": stamps if stamps is not None else {
            "github": {"score": "5.6789", "dedup": False},
        },
    }
    payload.update(extra)
    return payload


class FakeScoreClient:
    """Returns canned records (or raises canned errors) per address."""

    def __init__(self, responses):
        self.responses = responses
        self.calls = []
        self.closed = False

    def fetch_score(self, address, scorer_id):
        self.calls.append((address, scorer_id))
        response = self.responses[address]
        if isinstance(response, Exception):
            raise response
        if response.get("error"):
            return ScoreRecord.zero(address, response["error"])
        return ScoreRecord.model_validate(response)

    def close(self):
        self.closed = True


class FakeSubmitter:
    """Records submissions; returns a tx hash or raises per address."""

    def __init__(self, results=None):
        self.results = results or {}
        self.calls = []

    def submit(self, address, payload, expiration, schema_id):
        self.calls.append((address, payload, expiration, schema_id))
        result = self.results.get(address, "0x" + "f" * 64)
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop handlers the CLI attaches so each test starts clean."""
    yield
    logger = logging.getLogger("scoreattest")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def env(monkeypatch):
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)
    monkeypatch.delenv("BATCH_SIZE", raising=False)
    monkeypatch.delenv("REQUEST_DELAY", raising=False)
    return dict(TEST_ENV)


@pytest.fixture
def sleeps():
    """Sleep stand-in that records requested delays."""
    calls = []

    def _sleep(seconds):
        calls.append(seconds)

    _sleep.calls = calls
    return _sleep


def fetch_failed(address, cause="connection refused"):
    return ScoreFetchFailed(address, cause)


def submit_failed(address, cause="nonce too low"):
    return SubmissionFailed(address, cause)
