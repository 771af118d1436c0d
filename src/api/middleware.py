"""
Request logging middleware

Tags every request with a trace id (X-Trace-Id) and logs its outcome.
"""

import logging
import time
import uuid

from fastapi import Request

logger = logging.getLogger(__name__)

TRACE_ID_HEADER = "X-Trace-Id"


async def trace_requests(request: Request, call_next):
    trace_id = request.headers.get(TRACE_ID_HEADER) or str(uuid.uuid4())
    request.state.trace_id = trace_id
    started = time.perf_counter()

    try:
        response = await call_next(request)
    except Exception:
        logger.exception(
            f"[TraceID: {trace_id}] {request.method} {request.url.path} failed"
        )
        raise

    elapsed_ms = (time.perf_counter() - started) * 1000
    response.headers[TRACE_ID_HEADER] = trace_id
    message = (
        f"[TraceID: {trace_id}] {request.method} {request.url.path} "
        f"-> {response.status_code} ({elapsed_ms:.1f}ms)"
    )
    if response.status_code >= 500:
        logger.error(message)
    elif response.status_code >= 400:
        logger.warning(message)
    else:
        logger.info(message)
    return response
