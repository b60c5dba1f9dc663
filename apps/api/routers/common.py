"""Shared pieces of the media routes: dependencies, body reading, error envelope."""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from schemas.media import ErrorEnvelope
from storage.local import LocalStorage
from transcoder.engine import MediaEngine
from transcoder.errors import BodyTooLarge, GatewayError, InvalidRequestBody
from transcoder.formats import matches_content_type

logger = logging.getLogger(__name__)


def get_engine(request: Request) -> MediaEngine:
    return request.app.state.engine


def get_storage(request: Request) -> LocalStorage:
    return request.app.state.storage


async def read_body(request: Request, limit: int, accepted: tuple[str, ...] | None = None) -> bytes:
    """Read the raw request body, enforcing the route's type and size ceiling.

    A declared Content-Length over the limit is refused before any byte is
    read; otherwise the stream is cut off as soon as it crosses the limit.
    """
    content_type = request.headers.get("content-type")
    if accepted is not None and not matches_content_type(content_type, accepted):
        raise InvalidRequestBody(
            f"Expected Content-Type {' or '.join(accepted)}, got {content_type or 'none'}."
        )

    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > limit:
        raise BodyTooLarge(limit)

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > limit:
            raise BodyTooLarge(limit)

    if not body:
        raise InvalidRequestBody("Request body is empty.")
    return bytes(body)


def error_response(category: str, exc: Exception) -> JSONResponse:
    """Log a failed request and turn it into the error envelope."""
    status = exc.status_code if isinstance(exc, GatewayError) else 500
    if isinstance(exc, BodyTooLarge):
        category = "Request body too large"
        logger.warning("%s: %s", category, exc)
    else:
        logger.error("%s", category, exc_info=exc)
    envelope = ErrorEnvelope(error=category, details=str(exc) or "Unknown error")
    return JSONResponse(status_code=status, content=envelope.model_dump())
