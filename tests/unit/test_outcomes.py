"""Unit tests for the outcome variant types."""

from __future__ import annotations

import dataclasses

import pytest

from cachedemo.models.outcomes import (
    CacheDelete,
    CacheGet,
    CacheListConcatenateBack,
    CacheListFetch,
    CacheListPopBack,
    CacheListPopFront,
    CacheListPushBack,
    CacheListPushFront,
    CacheListRemoveValue,
    CacheSet,
    ErrorDetail,
    ErrorOutcome,
    OutcomeTag,
)
from cachedemo.utils.errors import ErrorCode


class TestErrorDetail:
    def test_defaults(self) -> None:
        detail = ErrorDetail(message="boom")
        assert detail.error_code == ErrorCode.UNKNOWN_ERROR
        assert detail.cause is None

    @pytest.mark.parametrize("message", ["", "   "])
    def test_empty_message_rejected(self, message: str) -> None:
        with pytest.raises(ValueError):
            ErrorDetail(message=message)


class TestVariantTags:
    def test_read_family_tags(self) -> None:
        assert CacheGet.Hit(b"v").tag == OutcomeTag.HIT
        assert CacheGet.Miss().tag == OutcomeTag.MISS
        assert CacheGet.Error(ErrorDetail("x")).tag == OutcomeTag.ERROR

    def test_mutation_family_tags(self) -> None:
        assert CacheSet.Success().tag == OutcomeTag.SUCCESS
        assert CacheListPushBack.Success(3).tag == OutcomeTag.SUCCESS
        assert CacheListRemoveValue.Error(ErrorDetail("x")).tag == OutcomeTag.ERROR


class TestPayloadAccess:
    def test_hit_exposes_bytes_and_string(self) -> None:
        hit = CacheGet.Hit(b"Hello_world")
        assert hit.value_bytes == b"Hello_world"
        assert hit.value_string == "Hello_world"

    def test_list_hit_preserves_order(self) -> None:
        hit = CacheListFetch.Hit((b"g", b"a", b"z"))
        assert hit.value_list_string == ["g", "a", "z"]
        assert hit.value_list_bytes == (b"g", b"a", b"z")

    def test_miss_has_no_value(self) -> None:
        with pytest.raises(AttributeError):
            CacheGet.Miss().value_bytes  # type: ignore[attr-defined]  # noqa: B018

    def test_success_has_no_list_length_when_payload_free(self) -> None:
        with pytest.raises(AttributeError):
            CacheListConcatenateBack.Success().list_length  # type: ignore[attr-defined]  # noqa: B018

    def test_error_has_no_value(self) -> None:
        with pytest.raises(AttributeError):
            CacheListPopBack.Error(ErrorDetail("x")).value_bytes  # type: ignore[attr-defined]  # noqa: B018

    def test_error_accessors(self) -> None:
        cause = TimeoutError("deadline")
        error = CacheDelete.Error(
            ErrorDetail("timed out", ErrorCode.TIMEOUT_ERROR, cause)
        )
        assert error.message == "timed out"
        assert error.error_code == ErrorCode.TIMEOUT_ERROR
        assert error.inner_exception is cause

    def test_negative_list_length_rejected(self) -> None:
        with pytest.raises(ValueError):
            CacheListPushFront.Success(-1)


class TestImmutabilityAndEquality:
    def test_variants_are_frozen(self) -> None:
        hit = CacheGet.Hit(b"v")
        with pytest.raises(dataclasses.FrozenInstanceError):
            hit.value_bytes = b"other"  # type: ignore[misc]

    def test_equal_within_same_variant(self) -> None:
        assert CacheGet.Hit(b"v") == CacheGet.Hit(b"v")
        assert CacheGet.Miss() == CacheGet.Miss()

    def test_not_equal_across_families(self) -> None:
        assert CacheListPopFront.Hit(b"v") != CacheListPopBack.Hit(b"v")
        assert CacheGet.Miss() != CacheListFetch.Miss()

    def test_error_variants_share_base(self) -> None:
        assert isinstance(CacheSet.Error(ErrorDetail("x")), ErrorOutcome)
        assert not isinstance(CacheSet.Success(), ErrorOutcome)

    def test_repr_names_the_family(self) -> None:
        assert repr(CacheGet.Hit(b"v")).startswith("CacheGet.Hit(")
