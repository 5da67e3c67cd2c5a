"""Unit tests for failure classification and translation."""

from __future__ import annotations

import logging

import pytest
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel
from pydantic import Field
from pydantic import ValidationError

from api_common.core.error_codes import CommonErrorCode
from api_common.core.exceptions import AccessDeniedError
from api_common.core.exceptions import BusinessError
from api_common.core.exceptions import IllegalStateError
from api_common.core.translator import AccessDeniedFailure
from api_common.core.translator import DomainFailure
from api_common.core.translator import FailureKind
from api_common.core.translator import IllegalArgumentFailure
from api_common.core.translator import IllegalStateFailure
from api_common.core.translator import UnclassifiedFailure
from api_common.core.translator import ValidationFailure
from api_common.core.translator import classify
from api_common.core.translator import format_location
from api_common.core.translator import translate
from api_common.core.translator import translate_exception
from api_common.schemas.error import ValidationFieldError
from api_common.schemas.response import ApiResponse


class _Signup(BaseModel):
    email: str = Field(min_length=1)
    age: int


class _UnknownFailure(Exception):
    pass


def _model_validation_error() -> ValidationError:
    with pytest.raises(ValidationError) as excinfo:
        _Signup.model_validate({"email": "", "age": "not-a-number"})
    return excinfo.value


@pytest.mark.parametrize("error_code", list(CommonErrorCode))
def test_domain_failures_use_their_own_code(error_code: CommonErrorCode) -> None:
    status_code, body = translate_exception(BusinessError(error_code))

    assert status_code == error_code.http_status
    assert body.status_code == error_code.http_status
    assert body.code == error_code.code
    assert body.message == error_code.message
    assert body.errors is None


def test_resource_not_found_scenario() -> None:
    status_code, body = translate_exception(BusinessError(CommonErrorCode.RESOURCE_NOT_FOUND))

    assert status_code == 404
    assert ApiResponse.error(body).to_content()["error"] == {
        "statusCode": 404,
        "code": "RESOURCE_NOT_FOUND",
        "message": "리소스를 찾을 수 없습니다.",
    }


def test_request_validation_scenario() -> None:
    exc = RequestValidationError(
        [{"type": "value_error", "loc": ("body", "email"), "msg": "must not be blank", "input": ""}]
    )

    status_code, body = translate_exception(exc)

    assert status_code == 400
    content = ApiResponse.error(body).to_content()["error"]
    assert content["statusCode"] == 400
    assert content["code"] == "INVALID_PARAMETER"
    assert content["errors"] == [{"field": "email", "message": "must not be blank"}]


def test_validation_errors_keep_length_and_order() -> None:
    issues = [
        {"type": "missing", "loc": ("query", "limit"), "msg": "Field required"},
        {"type": "value_error", "loc": ("body", "address", "zip"), "msg": "invalid zip"},
        {"type": "value_error", "loc": ("body", "name"), "msg": "must not be blank"},
    ]

    _, body = translate_exception(RequestValidationError(issues))

    assert [(error.field, error.message) for error in body.errors or []] == [
        ("limit", "Field required"),
        ("address.zip", "invalid zip"),
        ("name", "must not be blank"),
    ]


def test_empty_validation_failure_omits_errors() -> None:
    status_code, body = translate(ValidationFailure(field_errors=()))

    assert status_code == 400
    assert body.code == "INVALID_PARAMETER"
    assert "errors" not in ApiResponse.error(body).to_content()["error"]


def test_pydantic_validation_error_is_validation_not_illegal_argument() -> None:
    failure = classify(_model_validation_error())

    assert isinstance(failure, ValidationFailure)
    assert [error.field for error in failure.field_errors] == ["email", "age"]


def test_access_denied_ignores_message_text() -> None:
    for exc in (PermissionError("nope"), AccessDeniedError("token expired"), AccessDeniedError()):
        status_code, body = translate_exception(exc)

        assert status_code == 403
        assert body.code == "ACCESS_DENIED"
        assert body.message == CommonErrorCode.FORBIDDEN.message


def test_value_error_is_illegal_argument() -> None:
    failure = classify(ValueError("bad cursor"))

    assert failure == IllegalArgumentFailure(summary="bad cursor")
    status_code, body = translate(failure)
    assert (status_code, body.code) == (400, "INVALID_PARAMETER")


def test_illegal_state_is_state_conflict() -> None:
    failure = classify(IllegalStateError("order already shipped"))

    assert isinstance(failure, IllegalStateFailure)
    status_code, body = translate(failure)
    assert (status_code, body.code) == (409, "STATE_CONFLICT")


@pytest.mark.parametrize(
    "exc",
    [_UnknownFailure("boom"), RuntimeError("generic runtime"), KeyError("missing"), TypeError("bad call")],
)
def test_unknown_failures_are_internal_errors(exc: Exception) -> None:
    failure = classify(exc)

    assert isinstance(failure, UnclassifiedFailure)
    status_code, body = translate(failure)
    assert (status_code, body.code) == (500, "INTERNAL_SERVER_ERROR")
    assert body.message == CommonErrorCode.INTERNAL_SERVER_ERROR.message


def test_unclassified_body_does_not_leak_exception_details() -> None:
    _, body = translate_exception(_UnknownFailure("db password=hunter2"))

    assert "hunter2" not in body.model_dump_json()


def test_classify_prefers_most_specific_type() -> None:
    class _Subdomain(BusinessError):
        pass

    assert isinstance(classify(_Subdomain(CommonErrorCode.STATE_CONFLICT)), DomainFailure)
    assert isinstance(classify(AccessDeniedError("x")), AccessDeniedFailure)
    assert classify(IllegalStateError("x")).kind is FailureKind.ILLEGAL_STATE


def test_translate_is_repeatable() -> None:
    failure = ValidationFailure(field_errors=(ValidationFieldError(field="email", message="must not be blank"),))

    first = translate(failure)
    second = translate(failure)

    assert first[0] == second[0]
    assert first[1].model_dump_json(by_alias=True) == second[1].model_dump_json(by_alias=True)


def test_format_location_drops_request_part_prefixes() -> None:
    assert format_location(("body", "items", 0, "sku")) == "items.0.sku"
    assert format_location(("body",)) == "body"
    assert format_location(()) == "request"
    assert format_location("limit") == "limit"


def test_classified_failures_log_without_traceback(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="api_common.core.translator")

    translate_exception(BusinessError(CommonErrorCode.RESOURCE_NOT_FOUND))
    translate_exception(PermissionError("no"))

    assert [record.levelno for record in caplog.records] == [logging.ERROR, logging.ERROR]
    assert [record.failure_kind for record in caplog.records] == ["domain", "access_denied"]
    assert caplog.records[0].error_code == "RESOURCE_NOT_FOUND"
    assert all(record.exc_info is None for record in caplog.records)


def test_illegal_state_logs_as_warning(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="api_common.core.translator")

    translate_exception(IllegalStateError("already cancelled"))

    (record,) = caplog.records
    assert record.levelno == logging.WARNING
    assert record.failure_kind == "illegal_state"
    assert "already cancelled" in record.getMessage()


def test_unclassified_failures_log_with_traceback(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="api_common.core.translator")

    try:
        raise _UnknownFailure("db password=hunter2")
    except _UnknownFailure as exc:
        translate_exception(exc)

    (record,) = caplog.records
    assert record.levelno == logging.ERROR
    assert record.failure_kind == "unclassified"
    assert record.exc_info is not None
    assert "hunter2" in caplog.text
