# gemini_relay/main.py
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
from typing import Callable, Optional
import logging
import time

from gemini_relay import __version__
from gemini_relay.api.router import api_router
from gemini_relay.core.config import settings
from gemini_relay.core.error_handlers import register_error_handlers
from gemini_relay.core.logging import setup_logging
from gemini_relay.db.session import create_engine_and_sessionmaker, create_tables
from gemini_relay.observability.middleware import RequestIdMiddleware
from gemini_relay.schemas import HealthCheck
from gemini_relay.services.llm.base import BaseCompletionGateway
from gemini_relay.services.llm.gemini import GeminiGateway

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 Server starting...")
    engine, session_factory = create_engine_and_sessionmaker(settings.DATABASE_URL)
    if settings.AUTO_CREATE_TABLES:
        await create_tables(engine)
    app.state.engine = engine
    app.state.session_factory = session_factory
    gateway: BaseCompletionGateway = app.state.gateway_factory()
    app.state.gateway = gateway
    logger.info(f"✅ Store connected, gateway model: {gateway.model_name}")
    try:
        yield
    finally:
        await gateway.aclose()
        await engine.dispose()
        logger.info("👋 Server stopping...")


def create_app(gateway_factory: Optional[Callable[[], BaseCompletionGateway]] = None) -> FastAPI:
    """
    Build the application. The store and gateway are opened in the lifespan,
    gateway_factory lets callers swap the Gemini gateway for another one.
    """
    app = FastAPI(title="Gemini Relay API", version=__version__, lifespan=lifespan)
    app.state.gateway_factory = gateway_factory or GeminiGateway

    # Request logging
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(f"➡️  {request.method} {request.url.path}")
        try:
            response = await call_next(request)
            logger.info(f"⬅️  {request.method} {request.url.path} → {response.status_code}")
            return response
        except Exception as e:
            logger.error(f"❌ {request.method} {request.url.path} → ERROR: {e}")
            raise

    # Request size limit
    @app.middleware("http")
    async def limit_body_size(request: Request, call_next):
        length = request.headers.get("content-length")
        if length and length.isdigit() and int(length) > settings.max_body_bytes:
            return JSONResponse(
                status_code=413,
                content={"code": 413, "msg": "Request body too large", "data": None},
            )
        return await call_next(request)

    app.add_middleware(RequestIdMiddleware)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins(),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    @app.get("/health", response_model=HealthCheck)
    async def health_check():
        return HealthCheck(status="healthy", timestamp=time.time())

    # API routes
    app.include_router(api_router, prefix="/api")

    # Uploaded files
    app.mount("/uploads", StaticFiles(directory=settings.get_upload_dir()), name="uploads")

    logger.info("✅ Application configured")
    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run("gemini_relay.main:app", host=settings.HOST, port=settings.PORT)
