"""Token Gate: HTTP middleware admitting only requests that carry the shared bearer secret.

Invariants:
    - Runs before routing: unknown paths and every method are gated too
    - Paths in settings.auth_exempt_paths bypass the gate
    - Rejection is a 401 {pesan, detail} response; the route is never called
    - The received token is never logged

Design Decisions:
    - Middleware returns the response itself: exception handlers do not see
      errors raised from middleware
    - Secret read from Settings at registration, not per request
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.config import Settings
from app.core.errors import AuthRejectedError
from app.core.token_check import check_token

logger = logging.getLogger(__name__)


def register_token_gate(app: FastAPI, settings: Settings) -> None:
    """Install the bearer-token middleware on the app."""
    secret = settings.api_token
    echo = settings.auth_echo_received
    exempt = {_normalize(p) for p in settings.auth_exempt_paths}

    @app.middleware("http")
    async def token_gate(request: Request, call_next):
        if _normalize(request.url.path) in exempt:
            return await call_next(request)
        try:
            check_token(secret, request.headers.get("Authorization"), echo)
        except AuthRejectedError as exc:
            logger.warning(
                "Rejected request: invalid or missing bearer token",
                extra={
                    "error_code": exc.code,
                    "method": request.method,
                    "path": request.url.path,
                },
            )
            return JSONResponse(
                status_code=exc.http_status, content=exc.to_response(),
            )
        return await call_next(request)


def _normalize(path: str) -> str:
    return path.rstrip("/") or "/"
