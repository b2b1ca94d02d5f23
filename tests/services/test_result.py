"""Tests for ServiceResult and ServiceError."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from boardctl.services.result import HTTP_STATUS, ErrorCode, ServiceError, ServiceResult


class TestServiceResult:
    def test_success_defaults(self) -> None:
        result = ServiceResult(ok=True, op="reorder_card")
        assert result.data == {}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_failure_builder(self) -> None:
        result = ServiceResult.failure(
            "reorder_card", ErrorCode.STALE_VERSION, "changed", current_version=3
        )
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "STALE_VERSION"
        assert result.error.detail == {"current_version": 3}

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="x")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]

    def test_json_roundtrip_keeps_error(self) -> None:
        result = ServiceResult.failure("delete_card", ErrorCode.NOT_FOUND, "gone")
        restored = ServiceResult.model_validate_json(result.model_dump_json())
        assert restored == result


class TestErrorStatus:
    @pytest.mark.parametrize(
        ("code", "status"),
        [
            (ErrorCode.VALIDATION_FAILED, 400),
            (ErrorCode.SCOPE_VIOLATION, 403),
            (ErrorCode.NOT_FOUND, 404),
            (ErrorCode.STALE_VERSION, 409),
        ],
    )
    def test_status_per_code(self, code: ErrorCode, status: int) -> None:
        assert ServiceError(code=code, message="m").status == status

    def test_unknown_code_is_500(self) -> None:
        assert ServiceError(code="SOMETHING_ELSE", message="m").status == 500

    def test_every_code_has_a_status(self) -> None:
        assert set(HTTP_STATUS) == set(ErrorCode)
