import logging
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger(__name__)

class TimingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        latency_ms = int((time.perf_counter() - start) * 1000)
        response.headers["X-Latency-Ms"] = str(latency_ms)

        # 5xx 는 WARNING, 그 외(집계 0건 404 포함)는 INFO
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        query = f"?{request.url.query}" if request.url.query else ""
        logger.log(level, f"{request.method} {request.url.path}{query} → {response.status_code} ({latency_ms}ms)")
        return response
