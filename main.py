import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

import httpx
from fastapi import FastAPI, Request, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from dal.training_dal import TrainingStore
from routes.analyze_route import router as analyze_router
from routes.training_route import router as training_router
from services.gemini.relay_client import GeminiRelay
from utils.settings import Settings, get_settings

LOGGER = logging.getLogger("inspection_relay")

ENDPOINTS = [
    "POST /analyze",
    "POST /training",
    "GET /training-history",
    "DELETE /training/:id",
    "GET /health",
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan manager to initialize:
      - the JSON training store (created empty if missing)
      - the shared httpx client and the Gemini relay built on it
    and attach them to `app.state`.
    """
    settings: Settings = app.state.settings
    if not settings.gemini_api_key:
        raise RuntimeError("GEMINI_API_KEY environment variable is not set")

    store = TrainingStore(settings.training_data_path)
    await store.initialize()
    app.state.training_store = store

    http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.relay_timeout_seconds),
        transport=app.state.http_transport,
    )
    app.state.http_client = http_client
    app.state.relay = GeminiRelay(http_client, settings)
    LOGGER.info("Relaying to %s, training data at %s", settings.generate_content_url, store.path)

    try:
        yield
    finally:
        await http_client.aclose()


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application instance.

    Args:
        settings: Explicit configuration; defaults to the environment-derived settings.
        transport: Optional httpx transport for the upstream client (used by tests).
    """
    settings = settings or get_settings()
    app = FastAPI(title="Inspection Relay", lifespan=lifespan)
    app.state.settings = settings
    app.state.http_transport = transport

    @app.middleware("http")
    async def limit_body_size(request: Request, call_next):
        """Reject requests whose declared body exceeds the configured limit."""
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > settings.max_body_bytes:
            return JSONResponse(status_code=413, content={"error": "Request body too large"})
        return await call_next(request)

    # CORS must wrap the size limit so 413 responses carry its headers.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        """Render HTTP errors as `{"error": message}` bodies."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    # Serve static assets from the public directory, if it exists.
    public_dir = settings.public_dir
    if public_dir.exists():
        app.mount("/public", StaticFiles(directory=public_dir), name="public")

    @app.get("/", include_in_schema=False)
    async def serve_index():
        """
        Serve the frontend index page from the public directory.
        """
        index_path = public_dir / "index.html"
        if not index_path.exists():
            raise HTTPException(status_code=404, detail="Frontend not found")
        return FileResponse(index_path)

    @app.get("/health")
    async def health():
        """Static health descriptor, independent of store or upstream state."""
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "endpoints": ENDPOINTS,
        }

    # Register application routers
    app.include_router(analyze_router)
    app.include_router(training_router)

    return app


logging.basicConfig(
    level=get_settings().log_level,
    format="[%(asctime)s] %(levelname)s %(name)s - %(message)s",
)

app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=get_settings().host, port=get_settings().port)
