"""
FastAPI application exposing the merged shop listing.

Endpoints:
- GET /        fetch, merge and return all shops
- GET /ping    liveness probe
- GET /health  health probe
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from ..config import get_port, load_config
from ..core.aggregator import aggregate_shops
from ..core.exceptions import SerializationError, UpstreamError
from ..merger.assembler import serialize_response
from ..utils.logging_utils import get_request_logger, setup_logging

logger = logging.getLogger(__name__)


def client_ip(request: Request) -> str:
    """
    Resolve the client address, honouring proxy headers.

    X-Forwarded-For wins (first entry), then X-Real-IP, then the peer address.
    """
    forwarded_for = request.headers.get('X-Forwarded-For')
    if forwarded_for:
        return forwarded_for.split(',')[0].strip()

    real_ip = request.headers.get('X-Real-IP')
    if real_ip:
        return real_ip

    if request.client is not None:
        return f"{request.client.host}:{request.client.port}"
    return '-'


def create_app(config: Optional[Dict[str, Any]] = None) -> FastAPI:
    """
    Build the application.

    Args:
        config: Service configuration; loaded from defaults/YAML if omitted

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(title="shopmerge", version="0.1.0")
    app.state.config = config if config is not None else load_config()

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request.state.logger = get_request_logger()
        try:
            response = await call_next(request)
        except Exception:
            _log_access(request, 500)
            raise
        _log_access(request, response.status_code)
        return response

    @app.exception_handler(UpstreamError)
    async def upstream_error_handler(request: Request, exc: UpstreamError):
        _request_logger(request).error(f"Upstream failure: {exc}")
        return JSONResponse(
            status_code=502,
            content={'error': 'upstream_error', 'source': exc.source, 'detail': exc.message}
        )

    @app.exception_handler(SerializationError)
    async def serialization_error_handler(request: Request, exc: SerializationError):
        _request_logger(request).error(f"Serialization failure: {exc}")
        return JSONResponse(
            status_code=500,
            content={'error': 'serialization_error', 'detail': str(exc)}
        )

    @app.get("/")
    def root(request: Request) -> Response:
        request_logger = _request_logger(request)
        request_logger.info("Request received")

        shops = aggregate_shops(request.app.state.config, request_logger)

        request_logger.info("Marshalling data")
        return Response(content=serialize_response(shops), media_type="application/json")

    @app.get("/ping", response_class=PlainTextResponse)
    def ping() -> str:
        return "pong"

    @app.get("/health", response_class=PlainTextResponse)
    def health() -> str:
        return "I'm healthy"

    return app


def _request_logger(request: Request):
    return getattr(request.state, 'logger', None) or get_request_logger()


def _log_access(request: Request, status_code: int) -> None:
    _request_logger(request).info(
        f'Request incoming; IP: {client_ip(request)} Event: "{request.url.path}" '
        f'Status: "{status_code}" UserAgent:"{request.headers.get("User-Agent", "")}"'
    )


def main() -> None:
    """Run the service with uvicorn on the configured port."""
    import uvicorn

    config = load_config()
    setup_logging(config['logging']['level'])

    port = get_port()
    logger.info(f"App live and listening on port: {port}")

    uvicorn.run(
        create_app(config),
        host=config['server']['host'],
        port=port,
        log_config=None,
        access_log=False,
    )


if __name__ == "__main__":
    main()
