from __future__ import annotations

import logging
import traceback
from typing import Callable, Union

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from modplan.api.error_mapping import status_for
from modplan.core.errors import ConfigError, ResolveError, UnrecognizedOption
from modplan.core.modules.validator import recognized_options

log = logging.getLogger("modplan.errors")


def _request_id(request: Request):
    return getattr(request.state, "request_id", None) or request.headers.get("x-request-id")


async def domain_error_handler(request: Request, exc: Union[ConfigError, ResolveError]) -> JSONResponse:
    """
    Registered for ConfigError and ResolveError: the error code and its
    context (offending module, cycle path, ...) become the 4xx body.
    """
    rid = _request_id(request)
    log.info("Rejected %s rid=%s path=%s: %s", exc.code, rid, request.url.path, exc)
    payload = {"detail": exc.to_dict()}
    if isinstance(exc, UnrecognizedOption):
        payload["detail"]["recognized"] = recognized_options().get(exc.option, [])
    if rid:
        payload["request_id"] = rid
    return JSONResponse(status_code=status_for(exc), content=payload)


class SafeErrorMiddleware(BaseHTTPMiddleware):
    """
    - Never return stack traces to clients
    - Preserve request_id if present
    - Log traceback server-side
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            rid = _request_id(request)
            log.error(
                "Unhandled error: %s rid=%s path=%s\n%s",
                str(e),
                rid,
                request.url.path,
                traceback.format_exc(),
            )
            payload = {"detail": "Internal Server Error"}
            if rid:
                payload["request_id"] = rid
            return JSONResponse(status_code=500, content=payload)
