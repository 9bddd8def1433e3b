"""
Noter Backend — Cross-Origin Headers
====================================

What:  Permissive cross-origin headers on every response, errors included.
How:   Starlette's CORSMiddleware answers OPTIONS preflights;
       CORSHeadersMiddleware stamps Access-Control-Allow-Origin and
       Access-Control-Allow-Credentials on every other response, including
       requests sent without an Origin header. The catch-all 500 handler
       runs outside the middleware stack and calls cors_headers() itself.
Who:   Registered by create_app(); cors_headers() also used by main.py.
"""

from typing import Dict, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from noter.config import settings

ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
ALLOWED_HEADERS = [
    "Content-Type",
    "X-Amz-Date",
    "Authorization",
    "X-Api-Key",
    "X-Amz-Security-Token",
    "X-Request-ID",
]


def cors_headers(origin: Optional[str] = None) -> Dict[str, str]:
    """
    Headers granting `origin` access to the response.

    With a wildcard configuration the caller's origin is echoed back (or
    "*" when there is none). An origin outside an explicit list gets no
    headers.
    """
    allowed = settings.cors_origins_list
    if "*" in allowed:
        allow_origin = origin or "*"
    elif origin in allowed:
        allow_origin = origin
    else:
        return {}
    headers = {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Credentials": "true",
    }
    if allow_origin != "*":
        headers["Vary"] = "Origin"
    return headers


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        for name, value in cors_headers(request.headers.get("origin")).items():
            if name not in response.headers:
                response.headers[name] = value
        return response


def install_cors(app: FastAPI) -> None:
    """Registers preflight handling and the per-response header stamp."""
    app.add_middleware(CORSHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=ALLOWED_METHODS,
        allow_headers=ALLOWED_HEADERS,
        expose_headers=["X-Request-ID"],
    )
