from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from shared.error_codes import ERROR_CODES, ErrorKind
from shared.infrastructure.observability.logger import get_logger

logger = get_logger(__name__)


# ───────────────────────── Base & Domain Exceptions ─────────────────────────
class DomainError(Exception):
    """Base class for domain-level errors. Services should raise these, never HTTPException."""
    kind: ErrorKind = ErrorKind.INTERNAL
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str
    details: Optional[Dict[str, Any]]

    def __init__(
        self,
        message: str = "",
        *,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message or self.__class__.__name__)
        if status_code is not None:
            self.status_code = status_code
        self.message = message or self.__class__.__name__
        self.details = details

    @property
    def code(self) -> str:
        return self.kind.value

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class ValidationError(DomainError):
    kind = ErrorKind.VALIDATION
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class NotFoundError(DomainError):
    kind = ErrorKind.NOT_FOUND
    status_code = status.HTTP_404_NOT_FOUND


class InvalidTransitionError(DomainError):
    kind = ErrorKind.INVALID_TRANSITION
    status_code = status.HTTP_409_CONFLICT


class ForbiddenError(DomainError):
    kind = ErrorKind.FORBIDDEN
    status_code = status.HTTP_403_FORBIDDEN


class MissingPricingRuleError(DomainError):
    kind = ErrorKind.MISSING_PRICING_RULE
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class ConflictError(DomainError):
    kind = ErrorKind.CONFLICT
    status_code = status.HTTP_409_CONFLICT


class GenerationExhaustedError(DomainError):
    kind = ErrorKind.GENERATION_EXHAUSTED
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class InternalServerError(DomainError):
    kind = ErrorKind.INTERNAL
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


# ───────────────────────────── Helpers ──────────────────────────────────────

def _problem(
    code: str,
    message: str,
    details: Optional[Dict[str, Any]],
    correlation_id: Optional[str],
) -> Dict[str, Any]:
    body: Dict[str, Any] = {"code": code, "message": message}
    if details:
        body["details"] = details
    if correlation_id:
        body["correlation_id"] = correlation_id
    return body


def _extract_correlation_id(req: Request) -> Optional[str]:
    return getattr(getattr(req, "state", None), "request_id", None)

def _http_for(code: str) -> int:
    return int(ERROR_CODES.get(code, {}).get("http", status.HTTP_500_INTERNAL_SERVER_ERROR))

def _msg_for(code: str) -> str:
    return str(ERROR_CODES.get(code, {}).get("message", code))

# ─────────────────────────── Registration ───────────────────────────

def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(DomainError)
    async def handle_app_error(req: Request, exc: DomainError):
        return JSONResponse(
            status_code=exc.status_code,
            content=_problem(exc.code, exc.message, exc.details, _extract_correlation_id(req)),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(req: Request, exc: RequestValidationError):
        code = ErrorKind.VALIDATION.value
        return JSONResponse(
            status_code=_http_for(code),
            content=_problem(code, _msg_for(code), {"errors": _jsonable_errors(exc.errors())}, _extract_correlation_id(req)),
        )

    @app.exception_handler(PydanticValidationError)
    async def handle_pydantic_validation(req: Request, exc: PydanticValidationError):
        code = ErrorKind.VALIDATION.value
        return JSONResponse(
            status_code=_http_for(code),
            content=_problem(code, _msg_for(code), {"errors": _jsonable_errors(exc.errors())}, _extract_correlation_id(req)),
        )

    @app.exception_handler(HTTPException)
    async def handle_http_exception(req: Request, exc: HTTPException):
        # map HTTP status → first matching ERROR_CODES entry
        reverse_map: Dict[int, str] = {}
        for key, value in ERROR_CODES.items():
            reverse_map.setdefault(value["http"], key)
        code = reverse_map.get(exc.status_code, ErrorKind.INTERNAL.value)
        detail = getattr(exc, "detail", None)
        details = detail if isinstance(detail, dict) else None
        return JSONResponse(
            status_code=exc.status_code,
            content=_problem(code, str(detail) if isinstance(detail, str) else _msg_for(code), details, _extract_correlation_id(req)),
        )

    @app.exception_handler(Exception)
    async def handle_unhandled(req: Request, exc: Exception):
        logger.exception("unhandled_exception", path=req.url.path, error_type=exc.__class__.__name__)
        code = ErrorKind.INTERNAL.value
        return JSONResponse(
            status_code=_http_for(code),
            content=_problem(code, _msg_for(code), {"type": exc.__class__.__name__}, _extract_correlation_id(req)),
        )


def _jsonable_errors(errors: Any) -> Any:
    # pydantic v2 may put exception instances into ctx
    cleaned = []
    for err in errors:
        item = dict(err)
        ctx = item.get("ctx")
        if isinstance(ctx, dict):
            item["ctx"] = {k: str(v) for k, v in ctx.items()}
        item.pop("url", None)
        cleaned.append(item)
    return cleaned
