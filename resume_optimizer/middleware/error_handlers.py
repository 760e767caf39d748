"""
Request middleware for the Resume Optimizer API: request ids, timing and
uniform JSON error bodies.
"""
import time
import uuid
from datetime import datetime
from typing import Any, Dict

from fastapi import Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.middleware.base import BaseHTTPMiddleware

from resume_optimizer.utils.exceptions import ResumeOptimizerError, map_to_http_exception
from resume_optimizer.utils.logging_config import get_logger

logger = get_logger(__name__)

QUIET_PATHS = {"/", "/health"}

INTERNAL_ERROR = {
    "error": "Internal server error",
    "message": "Ocorreu um erro inesperado. Tente novamente mais tarde.",
}
INVALID_RECORD = {
    "error": "Invalid record",
    "message": "Dados armazenados ou retornados pelo modelo estão em formato inválido.",
}


def error_body(request_id: str, status_code: int, detail: Any) -> Dict[str, Any]:
    """JSON body shared by every error response; dict details are merged in."""
    if not isinstance(detail, dict):
        detail = {"message": str(detail)}
    return {
        "success": False,
        "timestamp": datetime.utcnow().isoformat(),
        "request_id": request_id,
        "status_code": status_code,
        **detail,
    }


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Tags every request with ``X-Request-ID`` and ``X-Processing-Time``, logs
    one line per non-health request (WARNING above slow_request_threshold
    seconds) and turns escaping exceptions into JSON errors.

    Pydantic errors here never come from request bodies (FastAPI answers
    those with 422 before the route runs); they mean a stored document or an
    LLM answer failed to build a record, so they are server errors.
    """

    def __init__(self, app, slow_request_threshold: float = 10.0):
        super().__init__(app)
        self.slow_request_threshold = slow_request_threshold

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        start = time.perf_counter()
        log_extra = {"request_id": request_id, "user_id": request.headers.get("X-User-Id", "anonymous")}

        try:
            response = await call_next(request)
        except ResumeOptimizerError as exc:
            logger.error(
                f"{exc.__class__.__name__} in {request.method} {request.url.path}: {exc.message}",
                extra={**log_extra, "error_code": exc.error_code, "details": exc.details},
            )
            http_exc = map_to_http_exception(exc)
            response = JSONResponse(
                status_code=http_exc.status_code,
                content=error_body(request_id, http_exc.status_code, http_exc.detail),
            )
        except ValidationError as exc:
            logger.error(f"Invalid record built in {request.method} {request.url.path}: {exc}", extra=log_extra)
            response = JSONResponse(status_code=500, content=error_body(request_id, 500, INVALID_RECORD))
        except Exception as exc:
            logger.error(
                f"Unhandled {exc.__class__.__name__} in {request.method} {request.url.path}: {exc}",
                extra=log_extra,
                exc_info=True,
            )
            response = JSONResponse(status_code=500, content=error_body(request_id, 500, INTERNAL_ERROR))

        elapsed = time.perf_counter() - start
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Processing-Time"] = f"{elapsed:.3f}"

        if request.url.path not in QUIET_PATHS:
            message = f"{request.method} {request.url.path} - {response.status_code} in {elapsed:.3f}s"
            if elapsed > self.slow_request_threshold:
                logger.warning(f"Slow request: {message}", extra=log_extra)
            else:
                logger.info(message, extra=log_extra)
        return response
