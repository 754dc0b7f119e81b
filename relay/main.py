import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from relay.deps import get_broker, get_settings
from relay.mqtt import BrokerConnection
from relay.repositories import build_store
from relay.routers.dji import router as dji_router
from relay.routers.telemetry import router as telemetry_router
from relay.settings import Settings
from relay.setup_logging import setup_logging
from relay.vendor import DjiApiClient

log = logging.getLogger(__name__)

HEALTH_TEXT = "Avisafe DJI backend ✔ relay → Supabase ready"


# --------------------------------------------------------------------
# Lifespan: build resources once, tear them down on shutdown
# --------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Runs once at startup and once at shutdown.
    Creates the store, the DJI API client and the broker handle from
    the settings object and parks them on app.state for the routes.
    """
    settings: Settings = app.state.settings

    if not settings.store_configured:
        log.error("Missing SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY; telemetry inserts will fail")

    app.state.store = build_store(settings)
    app.state.dji = DjiApiClient.from_settings(settings)
    app.state.broker = BrokerConnection.from_settings(settings)
    app.state.broker.connect()

    log.info("Server running on port %s", settings.port)
    log.info("Store backend: %s (%s)", settings.store_backend,
             "OK" if settings.store_configured else "missing config")

    yield

    app.state.broker.disconnect()
    app.state.dji.close()
    app.state.store.close()


# --------------------------------------------------------------------
# Error envelope: every error leaves as {"ok": false, "error": ...}
# --------------------------------------------------------------------
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder({"ok": False, "error": exc.detail}),
        headers=getattr(exc, "headers", None),
    )

async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content=jsonable_encoder({"ok": False, "error": exc.errors()}),
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI app. Settings come from the environment unless given."""
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level)

    app = FastAPI(title="DJI Telemetry Relay", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    # ----------------------------------------------------------------
    # Routes
    # ----------------------------------------------------------------
    @app.get("/", response_class=PlainTextResponse)
    def root():
        return HEALTH_TEXT

    @app.get("/healthz")
    def health(
        app_settings: Settings = Depends(get_settings),
        broker: BrokerConnection = Depends(get_broker),
    ):
        """
        Health probe for monitoring.
        Returns:
          - ok: static True if the app is alive
          - store: which backend telemetry goes to
          - store_configured: False when Supabase URL/key are missing
          - broker_connected: True once the DJI broker accepted us
        """
        return {
            "ok": True,
            "service": "dji-telemetry-relay",
            "store": app_settings.store_backend,
            "store_configured": app_settings.store_configured,
            "broker_connected": broker.connected,
        }

    app.include_router(telemetry_router)
    app.include_router(dji_router)
    return app


app = create_app()
