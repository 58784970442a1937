"""Translate request validation failures into a stable error payload."""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from subtrack.core.logger import get_logger

logger = get_logger(__name__)


class ValidationErrorCode(str, Enum):
    MISSING = "missing"
    INVALID_CHOICE = "invalid_choice"
    INVALID_AMOUNT = "invalid_amount"
    INVALID_DATE = "invalid_date"
    INVALID_TYPE = "invalid_type"
    TOO_SHORT = "too_short"


def _code_for(error_type: str) -> ValidationErrorCode:
    if error_type == "missing":
        return ValidationErrorCode.MISSING
    if error_type in {"enum", "literal_error"}:
        return ValidationErrorCode.INVALID_CHOICE
    if error_type.startswith("decimal") or error_type in {"greater_than_equal", "finite_number"}:
        return ValidationErrorCode.INVALID_AMOUNT
    if error_type.startswith("date"):
        return ValidationErrorCode.INVALID_DATE
    if error_type == "string_too_short":
        return ValidationErrorCode.TOO_SHORT
    return ValidationErrorCode.INVALID_TYPE


def describe_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    described = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        described.append(
            {
                "field": ".".join(loc) or "body",
                "code": _code_for(str(error.get("type", ""))).value,
                "message": str(error.get("msg", "")),
            }
        )
    return described


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = describe_errors(list(exc.errors()))
    logger.info(
        "Validation failed: %s",
        ", ".join(f"{e['field']}={e['code']}" for e in errors),
        extra={"path": request.url.path},
    )
    return JSONResponse(
        status_code=422,
        content={"detail": "Validation failed", "errors": errors},
    )
