"""
Problem-details errors for the brand console (RFC 7807).

Every error leaves the API as application/problem+json with a machine code
and the request id as trace_id, so a client report can be matched to the
log line that produced it.

Authorization failures are terse: the reason a request was denied is
written to the log, the client only learns that it was.

See: https://datatracker.ietf.org/doc/html/rfc7807
"""

from typing import Optional, Dict, Any, List
from enum import Enum
from pydantic import BaseModel
from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import uuid
from datetime import datetime, timezone

from brandhub.middleware.correlation import get_request_id

logger = logging.getLogger(__name__)

PROBLEM_BASE_URL = "https://brandhub.local/problems"
PROBLEM_MEDIA_TYPE = "application/problem+json"


class ErrorCode(str, Enum):
    """Machine-readable codes; the prefix names the family."""

    UNAUTHORIZED = "AUTH_001"
    FORBIDDEN = "AUTH_002"

    VALIDATION_ERROR = "VAL_001"

    NOT_FOUND = "RES_001"
    CONFLICT = "RES_003"

    BUSINESS_RULE_VIOLATION = "BIZ_001"
    SLUG_COLLISION = "BIZ_002"

    INTERNAL_ERROR = "SRV_001"
    INVARIANT_VIOLATION = "SRV_003"


TITLES = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    409: "Conflict",
    422: "Validation Error",
    500: "Internal Server Error",
}

# Codes for plain HTTPExceptions raised by Starlette (routing, methods)
STATUS_CODES = {
    400: ErrorCode.VALIDATION_ERROR,
    401: ErrorCode.UNAUTHORIZED,
    403: ErrorCode.FORBIDDEN,
    404: ErrorCode.NOT_FOUND,
    405: ErrorCode.VALIDATION_ERROR,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION_ERROR,
}


def _trace_id() -> str:
    request_id = get_request_id()
    if request_id != "unknown":
        return request_id
    return uuid.uuid4().hex[:12]


class ProblemDetail(BaseModel):
    """Body of every error response."""

    type: str
    title: str
    status: int
    detail: str
    instance: Optional[str] = None
    code: str
    timestamp: str
    trace_id: str
    errors: Optional[List[Dict[str, Any]]] = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "type": f"{PROBLEM_BASE_URL}/biz-002",
                "title": "Conflict",
                "status": 409,
                "detail": "The slug 'acme-studio' is already in use. Please adjust the company name.",
                "instance": "/api/v2/companies",
                "code": "BIZ_002",
                "timestamp": "2026-01-29T10:30:00.000000Z",
                "trace_id": "3f9c1a7be204",
            }
        }
    }

    @classmethod
    def build(
        cls,
        status_code: int,
        code: ErrorCode,
        detail: str,
        instance: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
        trace_id: Optional[str] = None,
    ) -> "ProblemDetail":
        return cls(
            type=f"{PROBLEM_BASE_URL}/{code.value.lower().replace('_', '-')}",
            title=TITLES.get(status_code, "Error"),
            status=status_code,
            detail=detail,
            instance=instance,
            code=code.value,
            timestamp=datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
            trace_id=trace_id or _trace_id(),
            errors=errors,
        )

    def to_response(self, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
        return JSONResponse(
            status_code=self.status,
            content=self.model_dump(exclude_none=True),
            media_type=PROBLEM_MEDIA_TYPE,
            headers=headers,
        )


class BrandHubException(HTTPException):
    """Base class for every error the console raises on purpose."""

    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        detail: str,
        errors: Optional[List[Dict[str, Any]]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.code = code
        self.errors = errors
        super().__init__(status_code=status_code, detail=detail, headers=headers)

    def to_problem_detail(self, instance: Optional[str] = None) -> ProblemDetail:
        return ProblemDetail.build(
            self.status_code, self.code, self.detail, instance=instance, errors=self.errors
        )


class NotFoundError(BrandHubException):
    """Missing, or hidden from the caller (404). Both look the same."""

    def __init__(self, resource: str, resource_id: Any):
        super().__init__(
            status_code=404,
            code=ErrorCode.NOT_FOUND,
            detail=f"{resource} with ID {resource_id} was not found",
        )


class ValidationError(BrandHubException):
    def __init__(self, detail: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(
            status_code=422,
            code=ErrorCode.VALIDATION_ERROR,
            detail=detail,
            errors=errors,
        )


class UnauthorizedError(BrandHubException):
    def __init__(self, detail: str = "You must sign in"):
        super().__init__(
            status_code=401,
            code=ErrorCode.UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenError(BrandHubException):
    """Permission denied (403). The detail stays terse; reasons go to the logs."""

    def __init__(self, detail: str = "Permission denied"):
        super().__init__(status_code=403, code=ErrorCode.FORBIDDEN, detail=detail)


class ConflictError(BrandHubException):
    def __init__(self, detail: str, code: ErrorCode = ErrorCode.CONFLICT):
        super().__init__(status_code=409, code=code, detail=detail)


class SlugCollisionError(ConflictError):
    """The slug derived from a company name is already taken (409)."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(
            detail=f"The slug '{slug}' is already in use. Please adjust the company name.",
            code=ErrorCode.SLUG_COLLISION,
        )


class BusinessRuleError(BrandHubException):
    """An allowed role hit a structural guard, e.g. deleting the parent company (400)."""

    def __init__(self, detail: str):
        super().__init__(status_code=400, code=ErrorCode.BUSINESS_RULE_VIOLATION, detail=detail)


class InvariantViolationError(BrandHubException):
    """
    The store breaks a structural invariant (500). Not user-recoverable.

    The diagnostic is for the logs; clients get a generic detail.
    """

    def __init__(self, diagnostic: str):
        self.diagnostic = diagnostic
        super().__init__(
            status_code=500,
            code=ErrorCode.INVARIANT_VIOLATION,
            detail="An internal consistency error occurred",
        )


def _field_errors(exc: RequestValidationError) -> List[Dict[str, Any]]:
    errors = []
    for error in exc.errors():
        # Drop the "body"/"query" prefix; clients care about the field
        loc = [str(part) for part in error["loc"]]
        if len(loc) > 1 and loc[0] in ("body", "query", "path"):
            loc = loc[1:]
        errors.append({"field": ".".join(loc), "message": error["msg"], "type": error["type"]})
    return errors


def create_exception_handlers(debug: bool = False):
    """Handlers keyed by what main.py registers them for."""

    async def handle_brandhub_exception(request: Request, exc: BrandHubException) -> JSONResponse:
        problem = exc.to_problem_detail(instance=request.url.path)
        log = logger.error if exc.status_code >= 500 else logger.info
        log(
            f"{type(exc).__name__}: {exc.code.value} - {getattr(exc, 'diagnostic', exc.detail)}",
            extra={"trace_id": problem.trace_id, "status_code": exc.status_code, "path": request.url.path},
        )
        return problem.to_response(headers=exc.headers)

    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        problem = ProblemDetail.build(
            exc.status_code,
            STATUS_CODES.get(exc.status_code, ErrorCode.INTERNAL_ERROR),
            str(exc.detail),
            instance=request.url.path,
        )
        return problem.to_response(headers=getattr(exc, "headers", None))

    async def handle_validation_exception(request: Request, exc: RequestValidationError) -> JSONResponse:
        problem = ProblemDetail.build(
            422,
            ErrorCode.VALIDATION_ERROR,
            "Request validation failed",
            instance=request.url.path,
            errors=_field_errors(exc),
        )
        return problem.to_response()

    async def handle_generic_exception(request: Request, exc: Exception) -> JSONResponse:
        problem = ProblemDetail.build(
            500,
            ErrorCode.INTERNAL_ERROR,
            str(exc) if debug else "An unexpected error occurred",
            instance=request.url.path,
        )
        logger.exception(
            f"Unhandled exception: {type(exc).__name__}",
            extra={"trace_id": problem.trace_id, "path": request.url.path},
        )
        return problem.to_response()

    return {
        "brandhub": handle_brandhub_exception,
        "http": handle_http_exception,
        "validation": handle_validation_exception,
        "generic": handle_generic_exception,
    }
