"""Outcome variants returned by every cache operation.

Each cache primitive has a *family* class (``CacheGet``, ``CacheListPopBack``,
...) whose nested classes are the only variants that operation can return:

    CacheGet.Hit | CacheGet.Miss | CacheGet.Error
    CacheListPushBack.Success | CacheListPushBack.Error

Variants are frozen dataclasses.  Payload attributes exist only on the
variant that carries them, so ``CacheGet.Miss().value_bytes`` is an
``AttributeError`` at runtime and a type error for a static checker.  Each
family also exports a union alias (``CacheGetResponse``) so callers can
discriminate with ``match`` and close the statement with ``assert_never``::

    match outcome:
        case CacheGet.Hit():
            use(outcome.value_string)
        case CacheGet.Miss():
            ...
        case CacheGet.Error():
            log(outcome.message)
        case _:
            assert_never(outcome)

Only the cache client (``cachedemo.services.cache_client``) constructs
outcomes.  A Miss is a normal result, never an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

from cachedemo.utils.errors import ErrorCode


class OutcomeTag(str, Enum):  # noqa: UP042 — StrEnum requires Python 3.11+
    """Discriminant shared by all outcome variants."""

    HIT = "HIT"
    MISS = "MISS"
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


@dataclass(frozen=True)
class ErrorDetail:
    """Why an operation failed.

    Attributes
    ----------
    message:
        Human-readable description.  Never empty.
    error_code:
        Failure category.
    cause:
        The exception that produced this error, if any.
    """

    message: str
    error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR
    cause: BaseException | None = None

    def __post_init__(self) -> None:
        if not self.message or not self.message.strip():
            raise ValueError("ErrorDetail.message must not be empty")


# ---------------------------------------------------------------------------
# Variant shapes shared between families
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ValueHit:
    """A read that found a single value."""

    tag: ClassVar[OutcomeTag] = OutcomeTag.HIT

    value_bytes: bytes

    @property
    def value_string(self) -> str:
        """The value decoded as UTF-8."""
        return self.value_bytes.decode("utf-8")


@dataclass(frozen=True)
class ListHit:
    """A read that found a list."""

    tag: ClassVar[OutcomeTag] = OutcomeTag.HIT

    value_list_bytes: tuple[bytes, ...]

    @property
    def value_list_string(self) -> list[str]:
        """The list elements decoded as UTF-8, in list order."""
        return [value.decode("utf-8") for value in self.value_list_bytes]


@dataclass(frozen=True)
class MissOutcome:
    """A read that found nothing under the key."""

    tag: ClassVar[OutcomeTag] = OutcomeTag.MISS


@dataclass(frozen=True)
class SuccessOutcome:
    """A mutation that completed and returns no payload."""

    tag: ClassVar[OutcomeTag] = OutcomeTag.SUCCESS


@dataclass(frozen=True)
class LengthSuccess:
    """A list mutation that completed and reports the resulting length."""

    tag: ClassVar[OutcomeTag] = OutcomeTag.SUCCESS

    list_length: int

    def __post_init__(self) -> None:
        if self.list_length < 0:
            raise ValueError(f"list_length must be >= 0, got {self.list_length}")


@dataclass(frozen=True)
class ErrorOutcome:
    """An operation that failed in transport, validation, or on the service."""

    tag: ClassVar[OutcomeTag] = OutcomeTag.ERROR

    detail: ErrorDetail

    @property
    def message(self) -> str:
        return self.detail.message

    @property
    def error_code(self) -> ErrorCode:
        return self.detail.error_code

    @property
    def inner_exception(self) -> BaseException | None:
        return self.detail.cause


# ---------------------------------------------------------------------------
# Operation families
# ---------------------------------------------------------------------------


class CacheGet:
    """Outcomes of reading a scalar value."""

    class Hit(ValueHit):
        pass

    class Miss(MissOutcome):
        pass

    class Error(ErrorOutcome):
        pass


class CacheSet:
    """Outcomes of storing a scalar value."""

    class Success(SuccessOutcome):
        pass

    class Error(ErrorOutcome):
        pass


class CacheDelete:
    """Outcomes of deleting a key (scalar or list)."""

    class Success(SuccessOutcome):
        pass

    class Error(ErrorOutcome):
        pass


class CacheListFetch:
    """Outcomes of reading a whole list."""

    class Hit(ListHit):
        pass

    class Miss(MissOutcome):
        pass

    class Error(ErrorOutcome):
        pass


class CacheListPushFront:
    """Outcomes of prepending one value to a list."""

    class Success(LengthSuccess):
        pass

    class Error(ErrorOutcome):
        pass


class CacheListPushBack:
    """Outcomes of appending one value to a list."""

    class Success(LengthSuccess):
        pass

    class Error(ErrorOutcome):
        pass


class CacheListPopFront:
    """Outcomes of removing and returning the first list element."""

    class Hit(ValueHit):
        pass

    class Miss(MissOutcome):
        pass

    class Error(ErrorOutcome):
        pass


class CacheListPopBack:
    """Outcomes of removing and returning the last list element."""

    class Hit(ValueHit):
        pass

    class Miss(MissOutcome):
        pass

    class Error(ErrorOutcome):
        pass


class CacheListConcatenateFront:
    """Outcomes of prepending a batch of values to a list."""

    class Success(SuccessOutcome):
        pass

    class Error(ErrorOutcome):
        pass


class CacheListConcatenateBack:
    """Outcomes of appending a batch of values to a list."""

    class Success(SuccessOutcome):
        pass

    class Error(ErrorOutcome):
        pass


class CacheListRemoveValue:
    """Outcomes of removing every occurrence of a value from a list."""

    class Success(SuccessOutcome):
        pass

    class Error(ErrorOutcome):
        pass


CacheGetResponse = Union[CacheGet.Hit, CacheGet.Miss, CacheGet.Error]
CacheSetResponse = Union[CacheSet.Success, CacheSet.Error]
CacheDeleteResponse = Union[CacheDelete.Success, CacheDelete.Error]
CacheListFetchResponse = Union[CacheListFetch.Hit, CacheListFetch.Miss, CacheListFetch.Error]
CacheListPushFrontResponse = Union[CacheListPushFront.Success, CacheListPushFront.Error]
CacheListPushBackResponse = Union[CacheListPushBack.Success, CacheListPushBack.Error]
CacheListPopFrontResponse = Union[
    CacheListPopFront.Hit, CacheListPopFront.Miss, CacheListPopFront.Error
]
CacheListPopBackResponse = Union[
    CacheListPopBack.Hit, CacheListPopBack.Miss, CacheListPopBack.Error
]
CacheListConcatenateFrontResponse = Union[
    CacheListConcatenateFront.Success, CacheListConcatenateFront.Error
]
CacheListConcatenateBackResponse = Union[
    CacheListConcatenateBack.Success, CacheListConcatenateBack.Error
]
CacheListRemoveValueResponse = Union[CacheListRemoveValue.Success, CacheListRemoveValue.Error]

Outcome = Union[ValueHit, ListHit, MissOutcome, SuccessOutcome, LengthSuccess, ErrorOutcome]
