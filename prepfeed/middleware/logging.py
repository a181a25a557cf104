from fastapi import Request
import logging
import time
from ..core.monitoring import log_request as record_request_metrics

logger = logging.getLogger("prepfeed.api")

async def log_request(request: Request, call_next):
    start = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception as e:
        logger.error(f"Request failed: {request.method} {request.url.path}: {str(e)}")
        raise

    duration = time.perf_counter() - start
    route = request.scope.get("route")
    endpoint = getattr(route, "path", request.url.path)
    record_request_metrics(request.method, endpoint, response.status_code, duration)
    logger.info(f"{request.method} {request.url.path} {response.status_code} {duration * 1000:.1f}ms")
    return response
