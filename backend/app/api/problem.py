"""
API problem responses (application/problem+json).

Every error leaving the API is rendered as a problem document with at
least "status", "type" and "title" keys.
"""

import logging
from http import HTTPStatus
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

PROBLEM_CONTENT_TYPE = "application/problem+json"

TYPE_VALIDATION_ERROR = "validation_error"
TYPE_INVALID_REQUEST_BODY_FORMAT = "invalid_body_format"
TYPE_BLANK = "about:blank"

TITLES = {
    TYPE_VALIDATION_ERROR: "There was a validation error",
    TYPE_INVALID_REQUEST_BODY_FORMAT: "Invalid JSON format sent",
}


class ApiProblem:
    """
    Data for a problem response.

    Attributes:
        status_code: HTTP status
        type: Problem type; "about:blank" uses the HTTP reason phrase as title
        title: Human readable summary
        extra_data: Additional keys merged into the document
    """

    def __init__(self, status_code: int, type: Optional[str] = None):
        self.status_code = status_code
        self.type = type or TYPE_BLANK

        if self.type == TYPE_BLANK:
            try:
                self.title = HTTPStatus(status_code).phrase
            except ValueError:
                self.title = "Unknown status code :("
        else:
            if self.type not in TITLES:
                raise ValueError(f"No title for type {self.type}")
            self.title = TITLES[self.type]

        self.extra_data: Dict[str, Any] = {}

    def set(self, name: str, value: Any) -> None:
        self.extra_data[name] = value

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.extra_data,
            "status": self.status_code,
            "type": self.type,
            "title": self.title,
        }


class ApiProblemException(Exception):
    """Raise to abort a request with an ApiProblem response."""

    def __init__(self, problem: ApiProblem, headers: Optional[Dict[str, str]] = None):
        super().__init__(problem.title)
        self.problem = problem
        self.headers = headers


def validation_problem(errors: Dict[str, List[str]]) -> ApiProblemException:
    problem = ApiProblem(400, TYPE_VALIDATION_ERROR)
    problem.set("errors", errors)
    return ApiProblemException(problem)


def problem_response(problem: ApiProblem, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    return JSONResponse(
        status_code=problem.status_code,
        content=problem.to_dict(),
        media_type=PROBLEM_CONTENT_TYPE,
        headers=headers,
    )


async def api_problem_handler(request: Request, exc: ApiProblemException) -> JSONResponse:
    return problem_response(exc.problem, exc.headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    problem = ApiProblem(exc.status_code)
    if exc.detail and exc.detail != problem.title:
        problem.set("detail", exc.detail)

    return problem_response(problem, getattr(exc, "headers", None))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        if error.get("type") == "json_invalid":
            logger.warning(f"Invalid JSON body sent to {request.url.path}")
            return problem_response(ApiProblem(400, TYPE_INVALID_REQUEST_BODY_FORMAT))

        # ("body", "nickname") -> "nickname"
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(location) or "body"

        message = error.get("msg", "Invalid value")
        if error.get("type") == "value_error" and "error" in error.get("ctx", {}):
            message = str(error["ctx"]["error"])

        errors.setdefault(field, []).append(message)

    return problem_response(validation_problem(errors).problem)


def register_problem_handlers(app: FastAPI) -> None:
    """Render every API error as application/problem+json."""
    app.add_exception_handler(ApiProblemException, api_problem_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
