"""HTTP surface: every proxy family under /.netlify/functions/<name>."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from bightwatch.config.loader import default_config
from bightwatch.config.schema import AppConfig
from bightwatch.handlers.base import FUNCTIONS_PREFIX, JSON_HEADERS
from bightwatch.handlers.registry import build_handlers, dispatch
from bightwatch.ingest.upstream import UpstreamFetcher
from bightwatch.models.proxy import ProxyRequest, ProxyResponse

logger = logging.getLogger(__name__)

# Non-GET methods are routed too so the handlers can answer 405 themselves.
ROUTED_METHODS = ["GET", "OPTIONS", "POST", "PUT", "PATCH", "DELETE"]


def to_proxy_request(request: Request) -> ProxyRequest:
    return ProxyRequest(
        method=request.method,
        path=request.url.path,
        headers=dict(request.headers),
        query=dict(request.query_params),
        remote_addr=request.client.host if request.client else None,
    )


def to_response(resp: ProxyResponse) -> Response:
    return Response(
        content=resp.body_text,
        status_code=resp.status_code,
        headers=resp.headers,
    )


def create_app(config: AppConfig | None = None, fetcher: UpstreamFetcher | None = None) -> FastAPI:
    config = config or default_config()
    handlers = build_handlers(config, fetcher)

    app = FastAPI(title="Bight Watch", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type"],
        max_age=86400,
    )
    app.state.handlers = handlers
    app.state.config = config

    async def _route(name: str, request: Request) -> Response:
        try:
            resp = await dispatch(handlers, name, to_proxy_request(request))
        except KeyError:
            logger.info("Unknown function %s", name)
            return JSONResponse(
                {"error": "Not found", "message": f"Unknown function: {name}"},
                status_code=404,
                headers={k: v for k, v in JSON_HEADERS.items() if k != "Content-Type"},
            )
        return to_response(resp)

    @app.api_route(f"{FUNCTIONS_PREFIX}/{{name}}", methods=ROUTED_METHODS)
    async def function(name: str, request: Request) -> Response:
        return await _route(name, request)

    @app.api_route(f"{FUNCTIONS_PREFIX}/{{name}}/{{identifier}}", methods=ROUTED_METHODS)
    async def function_with_id(name: str, identifier: str, request: Request) -> Response:
        return await _route(name, request)

    @app.get("/api/families")
    def families() -> dict:
        return {
            "families": [
                {
                    "name": f.name,
                    "maxRequests": f.max_requests,
                    "cacheMaxAgeSeconds": f.cache_max_age_seconds,
                    "onUpstreamFailure": f.on_upstream_failure.value,
                }
                for f in config.families
            ]
        }

    return app
