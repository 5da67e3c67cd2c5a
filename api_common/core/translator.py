"""Classification of raised exceptions and their translation to error responses.

Every exception leaving a request handler is first classified into exactly one
failure kind, then translated into an HTTP status and ``ErrorResponse``. The
response content depends only on the failure; logging is the only side effect.
"""

from __future__ import annotations

from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
import logging
from typing import Any
from typing import ClassVar
from typing import cast

from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from api_common.core.error_codes import CommonErrorCode
from api_common.core.error_codes import ErrorCode
from api_common.core.exceptions import BusinessError
from api_common.core.exceptions import IllegalStateError
from api_common.schemas.error import ErrorResponse
from api_common.schemas.error import ValidationFieldError

logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = frozenset({"body", "query", "path", "header", "cookie"})


class FailureKind(str, Enum):
    """Closed set of failure categories a request can end with."""

    DOMAIN = "domain"
    VALIDATION = "validation"
    ACCESS_DENIED = "access_denied"
    ILLEGAL_ARGUMENT = "illegal_argument"
    ILLEGAL_STATE = "illegal_state"
    UNCLASSIFIED = "unclassified"


@dataclass(frozen=True)
class DomainFailure:
    error_code: ErrorCode
    kind: ClassVar[FailureKind] = FailureKind.DOMAIN

    @property
    def summary(self) -> str:
        return self.error_code.code


@dataclass(frozen=True)
class ValidationFailure:
    field_errors: tuple[ValidationFieldError, ...]
    kind: ClassVar[FailureKind] = FailureKind.VALIDATION

    @property
    def summary(self) -> str:
        return "; ".join(f"{error.field}: {error.message}" for error in self.field_errors)


@dataclass(frozen=True)
class AccessDeniedFailure:
    summary: str
    kind: ClassVar[FailureKind] = FailureKind.ACCESS_DENIED


@dataclass(frozen=True)
class IllegalArgumentFailure:
    summary: str
    kind: ClassVar[FailureKind] = FailureKind.ILLEGAL_ARGUMENT


@dataclass(frozen=True)
class IllegalStateFailure:
    summary: str
    kind: ClassVar[FailureKind] = FailureKind.ILLEGAL_STATE


@dataclass(frozen=True)
class UnclassifiedFailure:
    exc: BaseException
    kind: ClassVar[FailureKind] = FailureKind.UNCLASSIFIED

    @property
    def summary(self) -> str:
        return f"{type(self.exc).__name__}: {self.exc}"


Failure = (
    DomainFailure
    | ValidationFailure
    | AccessDeniedFailure
    | IllegalArgumentFailure
    | IllegalStateFailure
    | UnclassifiedFailure
)

# Kinds whose error code does not depend on the failure instance.
_FIXED_ERROR_CODES: dict[FailureKind, CommonErrorCode] = {
    FailureKind.VALIDATION: CommonErrorCode.INVALID_PARAMETER,
    FailureKind.ACCESS_DENIED: CommonErrorCode.FORBIDDEN,
    FailureKind.ILLEGAL_ARGUMENT: CommonErrorCode.INVALID_PARAMETER,
    FailureKind.ILLEGAL_STATE: CommonErrorCode.STATE_CONFLICT,
    FailureKind.UNCLASSIFIED: CommonErrorCode.INTERNAL_SERVER_ERROR,
}

_LOG_LEVELS: dict[FailureKind, int] = {
    FailureKind.DOMAIN: logging.ERROR,
    FailureKind.VALIDATION: logging.ERROR,
    FailureKind.ACCESS_DENIED: logging.ERROR,
    FailureKind.ILLEGAL_ARGUMENT: logging.ERROR,
    FailureKind.ILLEGAL_STATE: logging.WARNING,
    FailureKind.UNCLASSIFIED: logging.ERROR,
}


def format_location(location: tuple[Any, ...] | list[Any] | Any) -> str:
    """Render a validation error location as a dotted field name."""
    if not isinstance(location, (tuple, list)):
        return str(location)

    filtered = [str(part) for part in location if part not in _LOCATION_PREFIXES]
    if filtered:
        return ".".join(filtered)

    if not location:
        return "request"

    return str(location[0])


def field_errors_from_issues(issues: Iterable[Mapping[str, Any]]) -> tuple[ValidationFieldError, ...]:
    """Map validator issue dicts to field errors, keeping validator order."""
    return tuple(
        ValidationFieldError(
            field=format_location(issue.get("loc", ())),
            message=str(issue.get("msg", "Invalid value")),
        )
        for issue in issues
    )


def _exception_summary(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


def _domain_failure(exc: BaseException) -> Failure:
    return DomainFailure(error_code=cast(BusinessError, exc).error_code)


def _request_validation_failure(exc: BaseException) -> Failure:
    issues = cast(RequestValidationError, exc).errors()
    return ValidationFailure(field_errors=field_errors_from_issues(issues))


def _model_validation_failure(exc: BaseException) -> Failure:
    issues = cast(ValidationError, exc).errors()
    return ValidationFailure(field_errors=field_errors_from_issues(issues))


def _access_denied_failure(exc: BaseException) -> Failure:
    return AccessDeniedFailure(summary=_exception_summary(exc))


def _illegal_argument_failure(exc: BaseException) -> Failure:
    return IllegalArgumentFailure(summary=_exception_summary(exc))


def _illegal_state_failure(exc: BaseException) -> Failure:
    return IllegalStateFailure(summary=_exception_summary(exc))


# Looked up along the raised type's MRO, so the most specific entry wins.
_CLASSIFIERS: dict[type[BaseException], Callable[[BaseException], Failure]] = {
    BusinessError: _domain_failure,
    RequestValidationError: _request_validation_failure,
    ValidationError: _model_validation_failure,
    PermissionError: _access_denied_failure,
    ValueError: _illegal_argument_failure,
    IllegalStateError: _illegal_state_failure,
}

CLASSIFIED_EXCEPTION_TYPES: tuple[type[BaseException], ...] = tuple(_CLASSIFIERS)


def classify(exc: BaseException) -> Failure:
    """Return the failure kind for ``exc``; unknown types are unclassified."""
    for klass in type(exc).__mro__:
        classifier = _CLASSIFIERS.get(klass)
        if classifier is not None:
            return classifier(exc)
    return UnclassifiedFailure(exc=exc)


def _resolve_error_code(failure: Failure) -> ErrorCode:
    if isinstance(failure, DomainFailure):
        return failure.error_code
    return _FIXED_ERROR_CODES[failure.kind]


def _log_failure(failure: Failure, error_code: ErrorCode) -> None:
    exc_info = failure.exc if isinstance(failure, UnclassifiedFailure) else None
    logger.log(
        _LOG_LEVELS[failure.kind],
        "Request failed kind=%s code=%s: %s",
        failure.kind.value,
        error_code.code,
        failure.summary,
        exc_info=exc_info,
        extra={"failure_kind": failure.kind.value, "error_code": error_code.code},
    )


def translate(failure: Failure) -> tuple[int, ErrorResponse]:
    """Translate a classified failure into an HTTP status and error payload."""
    error_code = _resolve_error_code(failure)
    field_errors = failure.field_errors if isinstance(failure, ValidationFailure) else None
    body = ErrorResponse.of(error_code, field_errors)
    _log_failure(failure, error_code)
    return error_code.http_status, body


def translate_exception(exc: BaseException) -> tuple[int, ErrorResponse]:
    """Classify and translate ``exc`` in one step."""
    return translate(classify(exc))
