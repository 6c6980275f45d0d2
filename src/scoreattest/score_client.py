"""Client for the scoring service's internal v2 score endpoint."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from .errors import ScoreFetchFailed
from .models import ScoreRecord

logger = logging.getLogger(__name__)

SCORE_PATH = "/internal/score/v2/{scorer_id}/{address}"


class ScoreClient:
    """Fetches one ScoreRecord per call; never batches addresses."""

    def __init__(self, base_url: str, api_key: str, *, timeout: float = 30.0,
                 transport: httpx.BaseTransport | None = None):
        self.base_url = base_url.rstrip("/")
        self._http = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            headers={"Authorization": api_key},
            transport=transport,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def fetch_score(self, address: str, scorer_id: int | str) -> ScoreRecord:
        """GET the score for ``address`` under ``scorer_id``.

        A 2xx body carrying a top-level ``error`` string is returned as a
        zero-score record. Everything else that goes wrong raises
        ScoreFetchFailed.
        """
        path = SCORE_PATH.format(scorer_id=scorer_id, address=address)
        try:
            resp = self._http.get(path)
            resp.raise_for_status()
            payload = resp.json()
        except httpx.HTTPStatusError as e:
            logger.warning("Score request for %s returned %d", address, e.response.status_code)
            raise ScoreFetchFailed(address, _status_detail(e.response)) from e
        except httpx.HTTPError as e:
            logger.warning("Score request for %s failed: %s", address, e)
            raise ScoreFetchFailed(address, e) from e
        except ValueError as e:
            raise ScoreFetchFailed(address, f"invalid JSON from scoring service: {e}") from e

        if not isinstance(payload, dict):
            raise ScoreFetchFailed(address, "unexpected response shape from scoring service")

        if payload.get("error"):
            return ScoreRecord.zero(address, str(payload["error"]))

        try:
            return ScoreRecord.model_validate(payload)
        except ValidationError as e:
            raise ScoreFetchFailed(address, f"invalid score response: {e.error_count()} field error(s)") from e


def _status_detail(resp: httpx.Response) -> str:
    """Human-readable reason for a non-2xx reply."""
    detail = resp.text
    if resp.headers.get("content-type", "").startswith("application/json"):
        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            detail = body.get("detail") or body.get("error") or detail
    return f"[{resp.status_code}] {detail}".rstrip()
