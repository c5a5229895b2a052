import logging
from contextlib import asynccontextmanager
from pathlib import Path

import httpx
from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from openai import AsyncOpenAI

from dal.session_kv_dal import SessionKVDAL
from routes.realtime_ws import router as realtime_router
from services.maps.geocoder import GeoResolver
from services.maps.route_service import RouteService
from services.realtime.intent_classifier import IntentClassifier
from services.realtime.location_extractor import LocationExtractor
from services.realtime.model_client import ModelClient
from services.realtime.reply_generator import ReplyGenerator
from services.realtime.session_store import SessionStore
from services.realtime.ws_session import SessionDispatcher
from utils.database_init import AsyncDatabaseInitializer
from utils.settings import load_settings

BASE_DIR = Path(__file__).resolve().parent
PUBLIC_DIR = BASE_DIR / "public"

from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file if present

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan manager to initialize:
      - the SQLite key/value store (at DATABASE_DIR/app.db)
      - the OpenAI async client and the shared httpx client
      - the model-backed components and the session dispatcher
    and attach them to `app.state`.
    """
    settings = load_settings()
    configure_logging(settings.log_level)
    app.state.settings = settings

    db_initializer = AsyncDatabaseInitializer(settings.database_dir)
    await db_initializer.ensure_database()
    app.state.db_initializer = db_initializer

    if not settings.openai_api_key:
        raise RuntimeError("OPENAI_API_KEY environment variable is not set")

    try:
        openai_client = AsyncOpenAI(api_key=settings.openai_api_key)
    except Exception as exc:
        raise RuntimeError("Failed to initialize OpenAI Async client") from exc
    app.state.openai_client = openai_client

    http_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.http_timeout_seconds, connect=5.0))
    app.state.http_client = http_client

    model = ModelClient(openai_client, settings.openai_model)
    geo = GeoResolver(
        http_client,
        base_url=settings.nominatim_url,
        user_agent=settings.geocoder_user_agent,
    )
    app.state.session_store = SessionStore(SessionKVDAL(db_initializer))
    app.state.dispatcher = SessionDispatcher(
        app.state.session_store,
        geo,
        RouteService(http_client, base_url=settings.osrm_url),
        IntentClassifier(model),
        LocationExtractor(model),
        ReplyGenerator(model),
    )
    logger.info("Relay ready (model=%s, session=%s)", settings.openai_model, settings.demo_session_id)

    try:
        yield
    finally:
        await http_client.aclose()
        try:
            await openai_client.close()
        except Exception:
            # Ignore shutdown errors to avoid masking more important issues.
            logger.debug("OpenAI client close failed", exc_info=True)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application instance.
    """
    app = FastAPI(lifespan=lifespan)

    # Serve static assets from the public directory, if it exists.
    if PUBLIC_DIR.exists():
        app.mount("/public", StaticFiles(directory=PUBLIC_DIR), name="public")

    @app.get("/", include_in_schema=False)
    async def serve_index():
        """
        Serve the frontend index page from the public directory.
        """
        index_path = PUBLIC_DIR / "index.html"
        if not index_path.exists():
            raise HTTPException(status_code=404, detail="Frontend not found")
        return FileResponse(index_path)

    @app.get("/health")
    async def health(request: Request):
        """
        Simple health check that verifies store, model and HTTP client presence.
        """
        state = request.app.state
        return {
            "ok": True,
            "db_initialized": hasattr(state, "db_initializer"),
            "openai_available": getattr(state, "openai_client", None) is not None,
            "http_client_available": getattr(state, "http_client", None) is not None,
        }

    app.include_router(realtime_router)

    return app


app = create_app()
