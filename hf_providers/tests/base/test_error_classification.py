"""Unit tests for exception -> ErrorCode classification and error factories."""
from __future__ import annotations

import json

import httpx
import pytest
from pydantic import BaseModel, ValidationError

from hf_providers.base.errors import (
    ErrorCode,
    ProviderError,
    classify_exception,
    is_retryable_status,
    operation_not_allowed,
    partial_catalog_failure,
    unsupported_operation,
)
from hf_providers.base.models import RequestKind


class _Strict(BaseModel):
    n: int


def _validation_error() -> ValidationError:
    try:
        _Strict.model_validate({"n": "not a number"})
    except ValidationError as e:
        return e
    raise AssertionError("validation unexpectedly passed")


class _StatusError(Exception):
    def __init__(self, status_code: int) -> None:
        super().__init__(f"status {status_code}")
        self.status_code = status_code


_REQUEST = httpx.Request("GET", "https://example.com")


@pytest.mark.parametrize(
    "exc, expected",
    [
        (httpx.ConnectError("refused", request=_REQUEST), ErrorCode.TRANSPORT),
        (httpx.ReadTimeout("slow", request=_REQUEST), ErrorCode.TRANSPORT),
        (TimeoutError(), ErrorCode.TRANSPORT),
        (ConnectionResetError(), ErrorCode.TRANSPORT),
        (json.JSONDecodeError("bad", "x", 0), ErrorCode.DECODE),
        (_validation_error(), ErrorCode.DECODE),
        (_StatusError(502), ErrorCode.UPSTREAM_API),
        (RuntimeError("boom"), ErrorCode.UNKNOWN),
        (ProviderError(code=ErrorCode.CANCELLED, message="c", provider="huggingface"), ErrorCode.CANCELLED),
    ],
)
def test_classify_exception(exc, expected):
    assert classify_exception(exc) is expected  # nosec B101


@pytest.mark.parametrize(
    "status, expected",
    [(429, True), (503, True), (501, True), (400, False), (404, False), (None, False)],
)
def test_is_retryable_status(status, expected):
    assert is_retryable_status(status) is expected  # nosec B101


def test_factories_carry_context():
    err = unsupported_operation(RequestKind.SPEECH, "huggingface", "tts")
    assert err.code is ErrorCode.UNSUPPORTED and err.model == "tts"  # nosec B101
    assert err.message == "speech is not supported by the huggingface provider"  # nosec B101

    denied = operation_not_allowed(RequestKind.EMBEDDING, "huggingface")
    assert denied.code is ErrorCode.OPERATION_NOT_ALLOWED  # nosec B101
    assert denied.to_dict()["request_kind"] == "embedding"  # nosec B101

    cause = ProviderError(code=ErrorCode.UPSTREAM_API, message="nope", provider="huggingface", status_code=403)
    warning = partial_catalog_failure(cause, "team-key")
    assert warning.code is ErrorCode.PARTIAL_CATALOG and warning.raw is cause  # nosec B101
    assert warning.status_code == 403  # nosec B101
    assert warning.message == "model listing failed for credential team-key: nope"  # nosec B101
