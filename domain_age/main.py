"""
Server - FastAPI app, /check-domain endpoint, CORS, cache sweeper.
"""
import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware

from domain_age.cache import ResultCache
from domain_age.checkers.whois_checker import WHOISChecker
from domain_age.config import APP_NAME, Settings

logger = logging.getLogger(__name__)

SERVICE_NAME = APP_NAME or "Domain Age Checker"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Put CORS_HEADERS on every response; answer any OPTIONS with a bare 200."""

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.method == "OPTIONS":
            response = Response(status_code=200)
        else:
            response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response


def build_checker(settings: Settings) -> WHOISChecker:
    cache = ResultCache(ttl=settings.cache_ttl_seconds, maxsize=settings.cache_maxsize)
    return WHOISChecker(
        cache,
        cache_failures=settings.cache_failed_lookups,
        normalize=settings.normalize_domains,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Run the cache sweeper for as long as the app is up."""
    settings: Settings = app.state.settings
    checker: WHOISChecker = app.state.checker
    sweeper = asyncio.create_task(checker.cache.sweep_forever(settings.cache_sweep_seconds))
    print(
        f"\n[{SERVICE_NAME}] Server is running | cache ttl={settings.cache_ttl_seconds}s "
        f"sweep={settings.cache_sweep_seconds}s cache_failures={settings.cache_failed_lookups}\n"
    )
    try:
        yield
    finally:
        sweeper.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sweeper


def create_app(settings: Optional[Settings] = None,
               checker: Optional[WHOISChecker] = None) -> FastAPI:
    """Build the app. Cache and lookup lock live on app.state.checker."""
    settings = settings or Settings.from_env()
    app = FastAPI(title=SERVICE_NAME, lifespan=lifespan)
    app.state.settings = settings
    app.state.checker = checker or build_checker(settings)

    if settings.cors_enabled:
        app.add_middleware(CORSHeadersMiddleware)

    @app.get("/health")
    def health(request: Request):
        return {"ok": True, "service": SERVICE_NAME, "cached": len(request.app.state.checker.cache)}

    # Sync endpoint: FastAPI runs it in the threadpool, so the blocking WHOIS
    # call and the lookup lock never stall the event loop.
    @app.get("/check-domain")
    def check_domain(request: Request, domain: str = ""):
        """Report the domain's creation date and whether it is under six months old."""
        checker: WHOISChecker = request.app.state.checker
        if not domain or not checker.lookup_key(domain):
            return PlainTextResponse("Missing 'domain' parameter", status_code=400)
        result = checker.check_domain(domain)
        return JSONResponse(result.to_json())

    return app


app = create_app()


def run() -> None:
    """Console entry point."""
    import uvicorn

    settings: Settings = app.state.settings
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
