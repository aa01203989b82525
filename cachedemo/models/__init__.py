"""cachedemo domain models.

    - config.py    — CacheConfig, the explicit client configuration
    - outcomes.py  — Outcome variants returned by every cache operation
    - scenario.py  — Reports produced by the demo scenarios
"""

from __future__ import annotations

from cachedemo.models.config import CacheConfig
from cachedemo.models.outcomes import (
    CacheDelete,
    CacheDeleteResponse,
    CacheGet,
    CacheGetResponse,
    CacheListConcatenateBack,
    CacheListConcatenateBackResponse,
    CacheListConcatenateFront,
    CacheListConcatenateFrontResponse,
    CacheListFetch,
    CacheListFetchResponse,
    CacheListPopBack,
    CacheListPopBackResponse,
    CacheListPopFront,
    CacheListPopFrontResponse,
    CacheListPushBack,
    CacheListPushBackResponse,
    CacheListPushFront,
    CacheListPushFrontResponse,
    CacheListRemoveValue,
    CacheListRemoveValueResponse,
    CacheSet,
    CacheSetResponse,
    ErrorDetail,
    Outcome,
    OutcomeTag,
)
from cachedemo.models.scenario import ScenarioReport, StepRecord

__all__ = [
    "CacheConfig",
    "CacheDelete",
    "CacheDeleteResponse",
    "CacheGet",
    "CacheGetResponse",
    "CacheListConcatenateBack",
    "CacheListConcatenateBackResponse",
    "CacheListConcatenateFront",
    "CacheListConcatenateFrontResponse",
    "CacheListFetch",
    "CacheListFetchResponse",
    "CacheListPopBack",
    "CacheListPopBackResponse",
    "CacheListPopFront",
    "CacheListPopFrontResponse",
    "CacheListPushBack",
    "CacheListPushBackResponse",
    "CacheListPushFront",
    "CacheListPushFrontResponse",
    "CacheListRemoveValue",
    "CacheListRemoveValueResponse",
    "CacheSet",
    "CacheSetResponse",
    "ErrorDetail",
    "Outcome",
    "OutcomeTag",
    "ScenarioReport",
    "StepRecord",
]
