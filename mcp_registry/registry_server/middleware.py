"""CORS, compression and security header middleware for the registry app."""
from typing import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from ..config import Settings

CORS_MAX_AGE = 86400


def content_security_policy(settings: Settings) -> str:
    connect_src = ["'self'", "https:", "ws:"]
    if not settings.is_production:
        connect_src += ["http://localhost:3000", "http://localhost:*", "https://localhost:*"]
    connect_src += settings.csp_connect_src

    directives = {
        "default-src": ["'self'"],
        "style-src": ["'self'", "'unsafe-inline'"],
        "script-src": ["'self'"],
        "img-src": ["'self'", "data:", "https:"],
        "connect-src": connect_src,
    }
    return "; ".join(f"{name} {' '.join(sources)}" for name, sources in directives.items())


def security_headers(settings: Settings) -> dict[str, str]:
    return {
        "Content-Security-Policy": content_security_policy(settings),
        "Cross-Origin-Opener-Policy": "same-origin",
        "Cross-Origin-Resource-Policy": "same-origin",
        "Referrer-Policy": "no-referrer",
        "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
        "X-Content-Type-Options": "nosniff",
        "X-DNS-Prefetch-Control": "off",
        "X-Frame-Options": "SAMEORIGIN",
    }


def install_middleware(app: FastAPI, settings: Settings) -> None:
    headers = security_headers(settings)

    @app.middleware("http")
    async def add_security_headers(request: Request,
                                   call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        response = await call_next(request)
        for name, value in headers.items():
            response.headers.setdefault(name, value)
        return response

    app.add_middleware(GZipMiddleware, minimum_size=1024)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins or ["*"],
        allow_methods=["GET", "HEAD", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
        max_age=CORS_MAX_AGE,
    )
