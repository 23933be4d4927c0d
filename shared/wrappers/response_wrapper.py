from starlette.middleware.base import BaseHTTPMiddleware
from fastapi.responses import JSONResponse, Response
from fastapi import Request
from shared.core.schemas import JsonOutResult
from typing import Callable, Any
import json
import logging

logger = logging.getLogger(__name__)


def replace_nulls_with_empty(value: Any):
    """
    Recursively replaces None based on expected structure:
    - List fields -> []
    - Primitives -> ""
    """
    if isinstance(value, dict):
        cleaned = {}
        for k, v in value.items():
            if v is None and k.lower() in {"items", "requesters"}:
                cleaned[k] = []
            else:
                cleaned[k] = replace_nulls_with_empty(v)
        return cleaned

    elif isinstance(value, list):
        return [replace_nulls_with_empty(v) for v in value]

    elif value is None:
        return ""

    return value


def _passthrough_headers(response):
    return {k: v for k, v in response.headers.items() if k.lower() != "content-length"}


class JsonResponseMiddleware(BaseHTTPMiddleware):
    """Wraps JSON bodies into the JsonOutResult envelope.

    Anything that is not JSON (TwiML replies to the messaging provider,
    plain-text errors) is returned exactly as the route produced it.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        # Skip docs/openapi endpoints
        if request.url.path.startswith(("/openapi", "/docs", "/redoc")):
            return await call_next(request)

        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Uncaught exception on %s", request.url.path)
            wrapped_error = JsonOutResult(
                data="",
                status="Failed",
                status_code="500",
                message="Internal Server Error",
            ).model_dump(exclude_none=False)
            return JSONResponse(content=wrapped_error, status_code=500)

        if "application/json" not in response.headers.get("content-type", ""):
            return response

        body_bytes = b""
        async for chunk in response.body_iterator:
            body_bytes += chunk

        try:
            data = json.loads(body_bytes.decode("utf-8"))
        except ValueError:
            return Response(
                content=body_bytes,
                status_code=response.status_code,
                headers=_passthrough_headers(response),
            )

        # Error responses (4xx/5xx)
        if not (200 <= response.status_code < 400):
            if isinstance(data, dict) and {"status", "status_code", "message"}.issubset(data.keys()):
                wrapped_error = data
            else:
                message = "An unexpected error occurred"
                if isinstance(data, dict):
                    message = data.get("detail") or data.get("message") or message
                elif isinstance(data, str):
                    message = data

                wrapped_error = JsonOutResult(
                    data="",
                    status="Failed",
                    status_code=str(response.status_code),
                    message=str(message),
                ).model_dump(exclude_none=False)

            return JSONResponse(
                content=replace_nulls_with_empty(wrapped_error),
                status_code=response.status_code,
                headers=_passthrough_headers(response),
            )

        # Skip wrapping if already wrapped
        if isinstance(data, dict) and {"status", "status_code", "message"}.issubset(data.keys()):
            wrapped = data
        else:
            wrapped = JsonOutResult(
                data=data if data not in [None, {}] else "",
                status="Success",
                status_code=str(response.status_code),
                message="Data retrieved successfully"
            ).model_dump(exclude_none=False)

        return JSONResponse(
            content=replace_nulls_with_empty(wrapped),
            status_code=response.status_code,
            headers=_passthrough_headers(response),
        )

