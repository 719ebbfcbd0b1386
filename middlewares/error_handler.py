import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from schemas.common import ErrorDetail, ErrorResponse
from services.errors import EmptyResultError, SourceUnavailableError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Seems like we messed up somewhere..."

def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message), latency_ms=0)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))

def add_error_handlers(app: FastAPI):
    # ✅ 집계 대상 0건 → 404 (NaN/Infinity 대신 명시적 실패)
    @app.exception_handler(EmptyResultError)
    async def empty_result_handler(request: Request, exc: EmptyResultError):
        logger.warning(f"빈 집계 결과: {request.url.path} - {exc}")
        return _error_response(404, exc.code, str(exc))

    # ✅ 레코드 소스 장애 → 일반 내부 에러로 응답
    @app.exception_handler(SourceUnavailableError)
    async def source_unavailable_handler(request: Request, exc: SourceUnavailableError):
        logger.error(f"레코드 소스 장애: {request.url.path} - {exc}")
        return _error_response(500, "INTERNAL_ERROR", GENERIC_ERROR_MESSAGE)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"처리되지 않은 예외: {request.url.path}")
        return _error_response(500, "INTERNAL_ERROR", GENERIC_ERROR_MESSAGE)
