from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, List

from .errors import InvalidInput
from .store import ScoreRecord, ScoreStore

logger = logging.getLogger(__name__)

TOP_N = 5
INVALID_SCORE = "Invalid input: 'score' must be a number."


@dataclass(frozen=True)
class ScoreSubmission:
    value: int


def parse_submission(body: Any) -> ScoreSubmission:
    """Turn a decoded JSON body into a floored integer score.

    Accepts ``{"score": <int or float>}``. Booleans, strings, missing fields
    and non-finite floats raise ``InvalidInput``.
    """
    if not isinstance(body, dict) or "score" not in body:
        raise InvalidInput(INVALID_SCORE)
    raw = body["score"]
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise InvalidInput(INVALID_SCORE)
    if isinstance(raw, float):
        if not math.isfinite(raw):
            raise InvalidInput(INVALID_SCORE)
        value = math.floor(raw)
    else:
        value = raw
    return ScoreSubmission(value=value)


class RankingService:
    def __init__(self, store: ScoreStore, limit: int = TOP_N):
        if limit < 1:
            raise ValueError("limit must be positive")
        self.store = store
        self.limit = limit

    def submit_score(self, body: Any) -> ScoreRecord:
        submission = parse_submission(body)
        record = self.store.insert(submission.value)
        logger.debug("stored score id=%s value=%s", record.id, record.value)
        return record

    def get_top_scores(self) -> List[ScoreRecord]:
        return self.store.top(self.limit)
