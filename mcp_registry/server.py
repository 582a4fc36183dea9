"""Runs the registry with uvicorn, over HTTPS when local credentials are available."""
import asyncio
import logging
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse

from .certs import CERT_FILE, KEY_FILE
from .config import Settings, settings as default_settings
from .registry_server import InMemoryMcpRegistry, load_catalog, load_registry

logger = logging.getLogger(__name__)


def create_app(settings: Settings = default_settings) -> FastAPI:
    """Builds the registry app over the built-in catalog."""
    return load_registry(InMemoryMcpRegistry(load_catalog()), settings=settings)


def resolve_ssl_files(certs_dir: Path) -> Optional[tuple[Path, Path]]:
    """Returns the (key, cert) paths in certs_dir, or None when either is missing."""
    key_path = certs_dir / KEY_FILE
    cert_path = certs_dir / CERT_FILE
    if not key_path.is_file() or not cert_path.is_file():
        return None
    return key_path, cert_path


def build_redirect_app(https_port: int) -> FastAPI:
    """App answering every plain HTTP request with a permanent redirect to HTTPS."""
    app = FastAPI(docs_url=None, redoc_url=None, openapi_url=None)

    @app.api_route("/{path:path}", methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"])
    def redirect_to_https(request: Request, path: str) -> RedirectResponse:
        target = request.url.replace(scheme="https", port=https_port)
        return RedirectResponse(url=str(target), status_code=301)

    return app


async def serve(app: FastAPI, ssl_files: Optional[tuple[Path, Path]],
                settings: Settings = default_settings) -> None:
    log_level = settings.log_level.lower()
    if ssl_files is None:
        server = uvicorn.Server(uvicorn.Config(app, host=settings.host, port=settings.port, log_level=log_level))
        logger.info(f"MCP registry (HTTP) listening on port {settings.port}, docs at /docs, health at /health")
        await server.serve()
        return

    key_path, cert_path = ssl_files
    https_server = uvicorn.Server(uvicorn.Config(app, host=settings.host, port=settings.https_port,
                                                 ssl_keyfile=str(key_path), ssl_certfile=str(cert_path),
                                                 log_level=log_level))
    redirect_server = uvicorn.Server(uvicorn.Config(build_redirect_app(settings.https_port), host=settings.host,
                                                    port=settings.port, log_level=log_level))
    logger.info(f"MCP registry (HTTPS) listening on port {settings.https_port} with a self-signed certificate")
    logger.info(f"HTTP redirect listening on port {settings.port} -> HTTPS {settings.https_port}")
    await asyncio.gather(https_server.serve(), redirect_server.serve())


def main() -> None:
    logging.basicConfig(level=default_settings.log_level)
    ssl_files = None
    if default_settings.use_https:
        ssl_files = resolve_ssl_files(default_settings.certs_dir)
        if ssl_files is None:
            logger.warning(f"SSL certificates not found in {default_settings.certs_dir}, "
                           f"run mcp-registry-certs to create them. Falling back to HTTP.")
    asyncio.run(serve(create_app(), ssl_files))


if __name__ == "__main__":
    main()
